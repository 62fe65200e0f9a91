"""
Pytest fixtures shared by the pkgcount test suite.
Builds throwaway Go projects under tmp_path.
"""

import sys
from pathlib import Path

import pytest

# Add project root to path so tests can import pkgcount without installing it
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

MODULE = "github.com/acme/widget"


def write_go(path: Path, *imports: str, block: bool = True) -> Path:
    """Write a minimal Go file importing the given paths."""
    path.parent.mkdir(parents=True, exist_ok=True)
    lines = ["package main", ""]
    if block:
        lines.append("import (")
        lines.extend(f'\t"{imp}"' for imp in imports)
        lines.append(")")
    elif imports:
        lines.append(f'import "{imports[0]}"')
    lines.extend(["", "func main() {}", ""])
    path.write_text("\n".join(lines), encoding="utf-8")
    return path


@pytest.fixture
def go_project(tmp_path: Path) -> Path:
    """
    A small Go module:
      fmt x3, os x2, strings x1 (external)
      github.com/acme/widget/sub x2, github.com/acme/widget/util x1 (internal)
    plus a vendor/ copy and a .git dir that must be ignored.
    """
    (tmp_path / "go.mod").write_text(f"module {MODULE}\n\ngo 1.21\n", encoding="utf-8")
    write_go(tmp_path / "main.go", "fmt", "os", f"{MODULE}/sub")
    write_go(tmp_path / "cmd" / "tool" / "tool.go", "fmt", "os", f"{MODULE}/sub", f"{MODULE}/util")
    write_go(tmp_path / "sub" / "sub.go", "fmt", block=False)
    write_go(tmp_path / "util" / "util.go", "strings")
    (tmp_path / "util" / "README.md").write_text('import "not/go"\n', encoding="utf-8")
    write_go(tmp_path / "vendor" / "github.com" / "x" / "y.go", "fmt", "os")
    write_go(tmp_path / ".git" / "hooks.go", "fmt")
    return tmp_path


@pytest.fixture
def module_name() -> str:
    return MODULE
