"""Print the flattened entries of a taxonomy file (one `id<TAB>path` per line)."""

from __future__ import annotations

import argparse
from pathlib import Path

from domain.taxonomy import find_duplicate_ids, flatten, search
from infrastructure.config import load_geography_file, load_industry_file


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("path", help="Taxonomy YAML file")
    ap.add_argument("--kind", choices=["geography", "industry"], required=True, help="Which taxonomy the file holds")
    ap.add_argument("--term", default="", help="Only print entries matching this search term")
    args = ap.parse_args()

    path = Path(args.path)
    roots = load_geography_file(path) if args.kind == "geography" else load_industry_file(path)
    entries = flatten(roots)

    for entry in search(entries, args.term):
        print(f"{entry.id}\t{entry.path}")

    dupes = find_duplicate_ids(entries)
    if dupes:
        raise SystemExit(f"Duplicate ids in {path}: {', '.join(dupes)}")


if __name__ == "__main__":
    main()
