from __future__ import annotations

import importlib
from typing import Any


def import_symbol(path: str) -> Any:
    """Resolve ``"package.module.Name"`` to the object it names."""
    module_path, _, symbol_name = path.rpartition(".")
    if not module_path:
        raise ValueError(f"Invalid import path: {path}")
    module = importlib.import_module(module_path)
    try:
        return getattr(module, symbol_name)
    except AttributeError as exc:
        raise ValueError(f"Module '{module_path}' has no attribute '{symbol_name}'") from exc


def load_component(path: str, **params: Any) -> Any:
    """Import a class (or factory) by dotted path and call it with *params*."""
    factory = import_symbol(path)
    if not callable(factory):
        raise ValueError(f"'{path}' is not callable.")
    return factory(**params)
