from __future__ import annotations

import importlib
import sys
from typing import Iterable


BUILTIN_NODE_MODULES: tuple[str, ...] = (
    "fieldlink.nodes.builtin",
)


_LOADED = False


def load_builtin_nodes(*, reload: bool = False, modules: Iterable[str] = BUILTIN_NODE_MODULES) -> None:
    """Import built-in node modules so their decorators register templates.

    In production, call with reload=False (default) so imports are cheap.
    In tests, call with reload=True to clear the registry and re-run decorators.
    """

    global _LOADED

    if _LOADED and not reload:
        return

    if reload:
        from fieldlink.nodes.registry import NodeTemplateRegistry

        NodeTemplateRegistry.clear()

    for module_name in modules:
        if reload:
            sys.modules.pop(module_name, None)
        importlib.import_module(module_name)

    _LOADED = True
