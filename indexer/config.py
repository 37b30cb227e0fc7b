import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

FLAT_SOURCE_DIR = "aartis"
FLAT_INDEX_FILE = "index.json"
# (source dir relative to the content root, output file, label)
GROUPED_COLLECTIONS = (
    (os.path.join("varta", "84"), "index_84.json", "84"),
    (os.path.join("varta", "252"), "index_252.json", "252"),
)
GROUP_NAME_PREFIX = "Vaishnav"


@dataclass(frozen=True)
class FlatCollection:
    source_dir: Path
    output_file: Path


@dataclass(frozen=True)
class GroupedCollection:
    source_dir: Path
    output_file: Path
    label: str


@dataclass(frozen=True)
class IndexConfig:
    flat: FlatCollection
    grouped: tuple[GroupedCollection, ...]
    progress: bool = False


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in {"1", "true", "yes", "on"}


def load_config(root: str | os.PathLike | None = None) -> IndexConfig:
    """Resolve collection paths against the content root.

    The root is taken from the argument, then INDEX_ROOT, then the current
    working directory.
    """
    if root is None:
        root = os.getenv("INDEX_ROOT", "").strip() or "."
    root = Path(root)
    return IndexConfig(
        flat=FlatCollection(
            source_dir=root / FLAT_SOURCE_DIR,
            output_file=root / FLAT_INDEX_FILE,
        ),
        grouped=tuple(
            GroupedCollection(
                source_dir=root / source_dir,
                output_file=root / output_file,
                label=label,
            )
            for source_dir, output_file, label in GROUPED_COLLECTIONS
        ),
        progress=_env_flag("INDEX_PROGRESS"),
    )
