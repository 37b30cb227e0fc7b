import traceback

from indexer.config import IndexConfig, load_config
from indexer.flat import build_flat_index
from indexer.grouped import build_grouped_index


def run(config: IndexConfig) -> None:
    build_flat_index(config.flat.source_dir, config.flat.output_file, progress=config.progress)
    for collection in config.grouped:
        build_grouped_index(
            collection.source_dir,
            collection.output_file,
            collection.label,
            progress=config.progress,
        )
    print("\nAll indexes updated successfully!")


def main() -> None:
    try:
        run(load_config())
    except Exception as exc:  # noqa: BLE001
        print(f"[FATAL] {type(exc).__name__}: {exc}")
        traceback.print_exc()
        raise SystemExit(1)


if __name__ == "__main__":
    main()
