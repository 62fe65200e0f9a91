#!/usr/bin/env python3
"""
One-command entry point for pkgcount without installing the package.
Usage:
  python scripts/run_pkgcount.py                      # count the current directory
  python scripts/run_pkgcount.py /path/to/project     # count that project
  python scripts/run_pkgcount.py /path/to/project 2   # only packages imported 2+ times
Requires: a go.mod in the project (or PKGCOUNT_MODULE set).
"""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))


def main():
    codebase_root = Path(sys.argv[1]).resolve() if len(sys.argv) > 1 else Path.cwd()
    gte = sys.argv[2] if len(sys.argv) > 2 else "0"

    from pkgcount.orchestration.__main__ import main as pkgcount_main

    print(f"Counting packages: dir={codebase_root}, gte={gte}\n")
    return pkgcount_main(["--dir", str(codebase_root), "--gte", gte])


if __name__ == "__main__":
    sys.exit(main())
