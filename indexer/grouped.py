import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from indexer.config import GROUP_NAME_PREFIX
from indexer.sources import JSON_EXTENSION, MISSING, SourceFile, present_fields, scan_sources, write_index
from indexer.utils import natural_sort


@dataclass(frozen=True)
class ChildRecord:
    id: str
    title: Any
    file: str

    def to_dict(self) -> Dict[str, Any]:
        return present_fields([("id", self.id), ("title", self.title), ("file", self.file)])


@dataclass
class GroupRecord:
    id: str
    name: str
    bio: str
    prasangs: List[ChildRecord] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "bio": self.bio,
            "prasangs": [child.to_dict() for child in self.prasangs],
        }


def parse_grouped_filename(filename: str) -> Tuple[str, str] | None:
    """Split "v84_1_p1.json" into ("v84_1", "p1").

    Returns None when the stem has fewer than three underscore segments.
    Segments past the third are ignored.
    """
    stem = filename[: -len(JSON_EXTENSION)] if filename.endswith(JSON_EXTENSION) else filename
    parts = stem.split("_")
    if len(parts) < 3:
        return None
    return f"{parts[0]}_{parts[1]}", parts[2]


def group_sources(
    sources: List[SourceFile], label: str, name_prefix: str = GROUP_NAME_PREFIX
) -> List[GroupRecord]:
    """Group parsed sources by filename prefix and sort groups and children.

    The first file seen for a group supplies its name and bio.
    """
    groups: Dict[str, GroupRecord] = {}
    for source in sources:
        if not source.ok:
            continue
        parsed = parse_grouped_filename(source.filename)
        if parsed is None:
            print(f"[WARN] Skipping incorrectly named file: {source.filename}")
            continue
        group_id, child_id = parsed
        data = source.data

        group = groups.get(group_id)
        if group is None:
            group = GroupRecord(
                id=group_id,
                name=data.get("vaishnavName") or f"{name_prefix} {group_id.split('_', 1)[1]}",
                bio=data.get("bio") or "",
            )
            groups[group_id] = group

        group.prasangs.append(
            ChildRecord(id=child_id, title=data.get("title", MISSING), file=f"{label}/{source.filename}")
        )

    ordered = natural_sort(groups.values(), key=lambda group: group.id)
    for group in ordered:
        group.prasangs = natural_sort(group.prasangs, key=lambda child: child.id)
    return ordered


def build_grouped_index(
    source_dir: str | os.PathLike,
    output_file: str | os.PathLike,
    label: str,
    progress: bool = False,
    name_prefix: str = GROUP_NAME_PREFIX,
) -> List[GroupRecord] | None:
    """Index a directory of <group>_<index>_<child>.json files into nested groups.

    Returns the written groups, or None when source_dir does not exist.
    """
    if not os.path.exists(source_dir):
        print(f"[WARN] '{label}' folder not found at {source_dir}. Skipping.")
        return None

    print(f"Processing {label}...")
    sources = scan_sources(source_dir, desc=label, progress=progress)
    groups = group_sources(sources, label, name_prefix=name_prefix)

    write_index(output_file, [group.to_dict() for group in groups])
    print(f"[OK] Generated {os.path.basename(output_file)} with {len(groups)} groups.")
    return groups
