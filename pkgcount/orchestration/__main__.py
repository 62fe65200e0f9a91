"""
CLI: count internal and external package imports of a Go project.
  python -m pkgcount.orchestration --dir /path/to/project [--gte N] [--lte N] [--exclude REGEX] [-u] [-o FILE]
"""

import argparse
import logging
import signal
import sys
import threading
from pathlib import Path
from typing import Callable

from pkgcount.aggregation import CancelScope
from pkgcount.exceptions import PkgcountError, RunCancelled
from pkgcount.gomod import resolve_module_name
from pkgcount.report import render_markdown, render_table, write_report

from .config import configure_logging, get_max_workers
from .models import CountArgs
from .pipeline import run

logger = logging.getLogger(__name__)

SHUTDOWN_SIGNALS = ("SIGINT", "SIGTERM", "SIGHUP", "SIGQUIT")


def install_signal_handlers(scope: CancelScope) -> Callable[[], None]:
    """
    Cancel scope on shutdown signals. Returns a function that restores the
    previous handlers. No-op outside the main thread.
    """
    if threading.current_thread() is not threading.main_thread():
        return lambda: None

    def handler(signum, frame):
        scope.cancel()

    previous = {}
    for name in SHUTDOWN_SIGNALS:
        signum = getattr(signal, name, None)
        if signum is None:
            continue
        previous[signum] = signal.signal(signum, handler)

    def restore() -> None:
        for signum, old in previous.items():
            signal.signal(signum, old)

    return restore


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="pkgcount",
        description="Count internal and external package imports in a Go codebase",
    )
    ap.add_argument("--dir", "-d", default=".", type=Path, help="Directory or Go file to scan (default: current directory)")
    ap.add_argument("--exclude", help="Skip files whose path matches this regular expression")
    ap.add_argument("--gte", type=int, default=0, help="Only show packages imported at least N times")
    ap.add_argument("--lte", type=int, default=None, help="Only show packages imported at most N times")
    ap.add_argument("--unrendered", "-u", action="store_true", help="Output markdown instead of rendered tables")
    ap.add_argument("--out", "-o", type=Path, help="Write output to file instead of stdout")
    ap.add_argument("--module", "-m", help="Go module name (default: resolved from go.mod)")
    ap.add_argument("--workers", "-w", type=int, help="Number of worker threads (default: CPU count)")
    ap.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return ap


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    count_args = CountArgs(
        root=args.dir,
        exclude=args.exclude,
        gte=args.gte,
        lte=args.lte,
        unrendered=args.unrendered,
        out=args.out,
        module_name=args.module,
        max_workers=get_max_workers(args.workers),
    )

    scope = CancelScope()
    restore = install_signal_handlers(scope)
    try:
        count_args.validate()
        module_name = resolve_module_name(count_args.root, count_args.module_name)
        logger.debug("Module name: %s", module_name)
        result = run(
            count_args.root,
            module_name,
            exclude=count_args.exclude_regexp,
            gte=count_args.gte,
            lte=count_args.lte,
            scope=scope,
            max_workers=count_args.max_workers,
        )
        report = render_markdown(result) if count_args.unrendered else render_table(result)
        write_report(report, count_args.out)
    except RunCancelled as e:
        logger.warning("Run cancelled before completion")
        print(f"Error: {e}", file=sys.stderr)
        return 130
    except (PkgcountError, OSError) as e:
        print(f"Error: failed to run pkgcount: {e}", file=sys.stderr)
        return 1
    finally:
        restore()
    return 0


if __name__ == "__main__":
    sys.exit(main())
