"""
Resolve the Go module path of the project being counted.
Imports containing this name are classified as internal.
"""

import logging
import re
import shutil
import subprocess
from pathlib import Path

from pkgcount.exceptions import ModuleResolutionError

from .config import find_go_mod, get_module_override, module_dir

logger = logging.getLogger(__name__)

# what `go list -m` prints outside of a module
_NO_MODULE = {"", "command-line-arguments"}

_MODULE_DIRECTIVE = re.compile(r'^\s*module\s+"?(?P<name>[^"\s]+)"?\s*(?://.*)?$')


def read_go_mod(go_mod: str | Path) -> str | None:
    """Return the module path declared by a go.mod file, or None if it has no module line."""
    with open(go_mod, encoding="utf-8", errors="replace") as f:
        for line in f:
            m = _MODULE_DIRECTIVE.match(line)
            if m:
                return m.group("name")
    return None


def go_list_module(target: str | Path, timeout: float = 30.0) -> str | None:
    """
    Ask the Go toolchain for the main module (`go list -m`) run in target's directory.
    Returns None if go is not installed, fails, or reports no module.
    """
    go = shutil.which("go")
    if go is None:
        logger.debug("go executable not found on PATH")
        return None
    try:
        proc = subprocess.run(
            [go, "list", "-m"],
            cwd=module_dir(target),
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.warning("Failed to execute 'go list -m': %s", e)
        return None
    if proc.returncode != 0:
        logger.warning("'go list -m' exited with %d: %s", proc.returncode, proc.stderr.strip())
        return None
    # workspaces may list several modules; the first is the one in cwd
    lines = proc.stdout.strip().splitlines()
    name = lines[0].strip() if lines else ""
    if name in _NO_MODULE:
        return None
    return name


def resolve_module_name(target: str | Path, explicit: str | None = None) -> str:
    """
    Return the module name for target.
    Order: explicit argument, PKGCOUNT_MODULE env, `go list -m`, nearest go.mod.
    Raises ModuleResolutionError if none of them yields a name.
    """
    if explicit and explicit.strip():
        return explicit.strip()
    override = get_module_override()
    if override:
        logger.debug("Using module name from environment: %s", override)
        return override
    name = go_list_module(target)
    if name:
        return name
    go_mod = find_go_mod(target)
    if go_mod is not None:
        name = read_go_mod(go_mod)
        if name:
            logger.info("Module name %s read from %s", name, go_mod)
            return name
    raise ModuleResolutionError(f"no go.mod file found in directory: {module_dir(target)}")
