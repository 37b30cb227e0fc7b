import os
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

import orjson
from tqdm import tqdm

JSON_EXTENSION = ".json"
EMPTY = "empty"


class _Missing:
    """Marks a field absent from the source file; such fields are left out of the index."""

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


def present_fields(pairs: List[Tuple[str, Any]]) -> Dict[str, Any]:
    return {key: value for key, value in pairs if value is not MISSING}


@dataclass(frozen=True)
class SourceFile:
    """Outcome of reading one content file: parsed data or a skip reason."""

    filename: str
    data: Dict[str, Any] | None = None
    skip_reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.data is not None


def list_json_files(directory: str | os.PathLike) -> List[str]:
    # Sorted so that grouping is independent of the filesystem listing order.
    return sorted(name for name in os.listdir(directory) if name.endswith(JSON_EXTENSION))


def read_source(directory: str | os.PathLike, filename: str) -> SourceFile:
    path = os.path.join(directory, filename)
    try:
        with open(path, "r", encoding="utf-8") as handle:
            content = handle.read()
    except (OSError, UnicodeDecodeError) as exc:
        return SourceFile(filename, skip_reason=f"{type(exc).__name__}: {exc}")
    if not content.strip():
        return SourceFile(filename, skip_reason=EMPTY)
    try:
        data = orjson.loads(content)
    except orjson.JSONDecodeError as exc:
        return SourceFile(filename, skip_reason=str(exc))
    if not isinstance(data, dict):
        return SourceFile(filename, skip_reason=f"expected a JSON object, got {type(data).__name__}")
    return SourceFile(filename, data=data)


def scan_sources(
    directory: str | os.PathLike, desc: str = "Indexing", progress: bool = False
) -> List[SourceFile]:
    """Read every JSON file in directory, reporting the ones that were skipped.

    Empty files are skipped silently. Nothing here raises for a single bad
    file; listing errors on the directory itself propagate.
    """
    results: List[SourceFile] = []
    for filename in tqdm(list_json_files(directory), desc=desc, disable=not progress):
        result = read_source(directory, filename)
        if not result.ok and result.skip_reason != EMPTY:
            print(f"[ERROR] Error parsing {filename}: {result.skip_reason}")
        results.append(result)
    return results


def write_index(path: str | os.PathLike, records: List[Dict[str, Any]]) -> None:
    """Overwrite path with records as indented JSON."""
    os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
    with open(path, "wb") as handle:
        handle.write(orjson.dumps(records, option=orjson.OPT_INDENT_2 | orjson.OPT_APPEND_NEWLINE))
