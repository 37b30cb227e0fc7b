import os
from dataclasses import dataclass
from typing import Any, Dict, List

from indexer.sources import MISSING, SourceFile, present_fields, scan_sources, write_index
from indexer.utils import natural_sort


@dataclass(frozen=True)
class ItemRecord:
    id: Any
    title: Any
    artist: Any
    category: Any
    subtitle: str
    file: str

    @classmethod
    def from_source(cls, source: SourceFile) -> "ItemRecord":
        data = source.data or {}
        return cls(
            id=data.get("id", MISSING),
            title=data.get("title", MISSING),
            artist=data.get("artist", MISSING),
            category=data.get("category", MISSING),
            subtitle=data.get("subtitle") or "",
            file=source.filename,
        )

    def to_dict(self) -> Dict[str, Any]:
        return present_fields(
            [
                ("id", self.id),
                ("title", self.title),
                ("artist", self.artist),
                ("category", self.category),
                ("subtitle", self.subtitle),
                ("file", self.file),
            ]
        )


def build_flat_index(
    source_dir: str | os.PathLike, output_file: str | os.PathLike, progress: bool = False
) -> List[ItemRecord] | None:
    """Index a directory of independent items into one sorted JSON array.

    Returns the written records, or None when source_dir does not exist (in
    which case nothing is written).
    """
    if not os.path.exists(source_dir):
        print(f"[WARN] '{os.path.basename(os.path.normpath(source_dir))}' folder not found at {source_dir}. Skipping flat index.")
        return None

    print(f"Processing {source_dir}...")
    sources = scan_sources(source_dir, desc="Items", progress=progress)
    records = [ItemRecord.from_source(source) for source in sources if source.ok]
    records = natural_sort(records, key=lambda record: _sort_id(record.id))

    write_index(output_file, [record.to_dict() for record in records])
    print(f"[OK] Generated {os.path.basename(output_file)} with {len(records)} items.")
    return records


def _sort_id(value: Any) -> str | None:
    if value is MISSING:
        return None
    if value is None or isinstance(value, str):
        return value
    return str(value)
