import json
import os
from collections import Counter, defaultdict
from typing import Dict, List

from jsonschema import Draft202012Validator

from indexer.config import load_config
from indexer.grouped import parse_grouped_filename
from indexer.sources import EMPTY, list_json_files, read_source

SCHEMA_DIR = os.path.join(os.path.dirname(__file__), "schemas")


def load_validator(name: str) -> Draft202012Validator:
    with open(os.path.join(SCHEMA_DIR, name), "r", encoding="utf-8") as schema_file:
        return Draft202012Validator(json.load(schema_file))


FLAT_VALIDATOR = load_validator("flat-item.schema.json")
GROUPED_VALIDATOR = load_validator("grouped-item.schema.json")


def _schema_issues(validator: Draft202012Validator, data: dict) -> List[str]:
    return [f"SCHEMA: {err.message}" for err in validator.iter_errors(data)]


def check_flat(directory: str | os.PathLike) -> Dict[str, List[str]]:
    """Map each problem file in a flat collection to its issues."""
    per_file: Dict[str, List[str]] = defaultdict(list)
    id_counter: Counter = Counter()
    id_files: Dict[str, List[str]] = defaultdict(list)

    for filename in list_json_files(directory):
        source = read_source(directory, filename)
        if not source.ok:
            if source.skip_reason != EMPTY:
                per_file[filename].append(f"PARSE: {source.skip_reason}")
            continue
        per_file[filename].extend(_schema_issues(FLAT_VALIDATOR, source.data))
        item_id = source.data.get("id")
        if item_id is not None:
            id_counter[str(item_id)] += 1
            id_files[str(item_id)].append(filename)

    for item_id, count in id_counter.items():
        if count > 1:
            for filename in id_files[item_id]:
                per_file[filename].append(f"DUPLICATE: id '{item_id}' used by {count} files")
    return {filename: issues for filename, issues in per_file.items() if issues}


def check_grouped(directory: str | os.PathLike) -> Dict[str, List[str]]:
    """Map each problem file in a grouped collection to its issues."""
    per_file: Dict[str, List[str]] = defaultdict(list)
    key_files: Dict[tuple, List[str]] = defaultdict(list)

    for filename in list_json_files(directory):
        parsed = parse_grouped_filename(filename)
        if parsed is None:
            per_file[filename].append("NAME: expected <prefix>_<index>_<child>.json")
        else:
            key_files[parsed].append(filename)
        source = read_source(directory, filename)
        if not source.ok:
            if source.skip_reason != EMPTY:
                per_file[filename].append(f"PARSE: {source.skip_reason}")
            continue
        per_file[filename].extend(_schema_issues(GROUPED_VALIDATOR, source.data))

    for (group_id, child_id), filenames in key_files.items():
        if len(filenames) > 1:
            for filename in filenames:
                per_file[filename].append(f"DUPLICATE: {group_id}/{child_id} used by {len(filenames)} files")
    return {filename: issues for filename, issues in per_file.items() if issues}


def is_hard(issue: str) -> bool:
    return issue.startswith(("SCHEMA:", "PARSE:", "DUPLICATE:"))


def main() -> None:
    config = load_config()
    collections = [("flat", config.flat.source_dir, check_flat)]
    collections += [(c.label, c.source_dir, check_grouped) for c in config.grouped]

    hard_errs = 0
    files_with_issues = 0
    for label, directory, check in collections:
        if not os.path.exists(directory):
            print(f"[WARN] '{label}' folder not found at {directory}. Skipping.")
            continue
        report = check(directory)
        for filename, issues in report.items():
            print(f"\n{os.path.join(directory, filename)}")
            for message in issues:
                print("  -", message)
            files_with_issues += 1
            if any(is_hard(message) for message in issues):
                hard_errs += 1

    print(f"\nFiles with issues: {files_with_issues} | hard errors: {hard_errs}")
    if hard_errs:
        raise SystemExit(1)
    print("[OK] All collections pass presence checks.")


if __name__ == "__main__":
    main()
