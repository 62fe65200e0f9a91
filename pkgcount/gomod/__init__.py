"""
Go module name resolution.
Finds the module path (e.g. github.com/acme/widget) that marks imports as internal.
"""

from .config import find_go_mod, get_module_override
from .resolver import go_list_module, read_go_mod, resolve_module_name

__all__ = ["find_go_mod", "get_module_override", "go_list_module", "read_go_mod", "resolve_module_name"]
