"""
CLI: print the Go module name of a directory.
  python -m pkgcount.gomod --dir /path/to/project
"""

import argparse
import sys

from pkgcount.exceptions import ModuleResolutionError

from .resolver import resolve_module_name


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Print the Go module name for a directory")
    ap.add_argument("--dir", "-d", default=".", help="Project directory or Go file")
    args = ap.parse_args(argv)
    try:
        print(resolve_module_name(args.dir))
    except ModuleResolutionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
