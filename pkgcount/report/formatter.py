"""
Renders a count Result as a markdown report or as boxed terminal tables.
"""

from pathlib import Path

from rich.console import Console
from rich.text import Text

from pkgcount.orchestration.models import PackageCount, Result

PLACEHOLDER = PackageCount(package="-", count=0)
MIN_PACKAGE_WIDTH = 8
COUNT_WIDTH = 5

MARKDOWN_HEADER = [
    "| Package        |        Count |",
    "| :---           |         ---: |",
]


def _sections(result: Result) -> list[tuple[str, tuple[PackageCount, ...]]]:
    return [("Internal", result.internal), ("External", result.external)]


def render_markdown(result: Result) -> str:
    """Two pipe tables, one per section; an empty section gets a `| - | 0 |` row."""
    lines: list[str] = []
    for i, (kind, counts) in enumerate(_sections(result)):
        if i:
            lines.append("")
        lines.append(f"**{kind} Package Counts**")
        lines.append("")
        lines.extend(MARKDOWN_HEADER)
        for pc in counts or (PLACEHOLDER,):
            lines.append(f"| {pc.package} | {pc.count} |")
    return "\n".join(lines) + "\n"


def _border(left: str, fill: str, mid: str, right: str, width: int) -> str:
    return left + fill * (width + 2) + mid + fill * COUNT_WIDTH + right


def _render_section(kind: str, counts: tuple[PackageCount, ...], out: Text) -> None:
    rows = counts or (PLACEHOLDER,)
    width = max(MIN_PACKAGE_WIDTH, max(len(pc.package) for pc in rows))

    out.append(f"{kind} Package Counts", style="bold")
    out.append("\n")
    lines = [
        _border("┌", "─", "┬", "┐", width),
        "│Package" + " " * (width - 5) + "│Count│",
        _border("╞", "═", "╪", "╡", width),
    ]
    for i, pc in enumerate(rows):
        if i:
            lines.append(_border("├", "─", "┼", "┤", width))
        lines.append(f"│ {pc.package:<{width}} │ {pc.count:>4}│")
    lines.append(_border("└", "─", "┴", "┘", width))
    out.append("\n".join(lines) + "\n")


def render_table(result: Result) -> Text:
    """
    Boxed tables drawn with box-drawing characters, one per section.
    Package column width is the longer of 8 and the widest package name.
    Headings are bold; styling is dropped when printed to a non-terminal.
    """
    out = Text()
    for i, (kind, counts) in enumerate(_sections(result)):
        if i:
            out.append("\n")
        _render_section(kind, counts, out)
    return out


def write_report(report: str | Text, out: str | Path | None = None) -> None:
    """
    Write a rendered report to stdout, or to the file at out (plain text).
    Long lines are never wrapped or cropped.
    """
    if out is None:
        console = Console(highlight=False, emoji=False, soft_wrap=True)
        console.print(report, end="", markup=False, crop=False)
        return
    with open(out, "w", encoding="utf-8") as f:
        console = Console(
            file=f,
            highlight=False,
            emoji=False,
            soft_wrap=True,
            no_color=True,
            force_terminal=False,
        )
        console.print(report, end="", markup=False, crop=False)
