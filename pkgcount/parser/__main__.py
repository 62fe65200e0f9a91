"""
CLI: list the imports of every Go file in a tree.
  python -m pkgcount.parser --root /path/to/project [--exclude REGEX] [--json]
"""

import argparse
import json
import re
import sys

from .imports import ImportScanner
from .walker import WalkFilter, walk_source_files


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="List imports of each Go file under a directory")
    ap.add_argument("--root", "-r", default=".", help="Project root directory or Go file")
    ap.add_argument("--exclude", help="Skip files whose path matches this regular expression")
    ap.add_argument("--json", action="store_true", help="Output as JSON")
    args = ap.parse_args(argv)

    try:
        exclude = re.compile(args.exclude) if args.exclude else None
    except re.error as e:
        print(f"Error: bad regular expression ['{args.exclude}'] error: {e}", file=sys.stderr)
        return 1

    scanner = ImportScanner()
    listing: dict[str, list[str]] = {}
    try:
        for path in walk_source_files(args.root, WalkFilter(exclude=exclude)):
            listing[path] = scanner.extract(path)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(listing, indent=2))
        return 0
    total = 0
    for path, imports in listing.items():
        print(f"{path} ({len(imports)})")
        for imp in imports:
            print(f"  - {imp}")
        total += len(imports)
    print(f"\n{len(listing)} files, {total} imports")
    return 0


if __name__ == "__main__":
    sys.exit(main())
