"""Handler table construction from configured 'module:attr' references"""

import importlib
from typing import Mapping

from mdgen.core.render.handlers import DEFAULT_HANDLERS, Handler


def load_handler(ref: str) -> Handler:
    """Import a handler given as 'package.module:function' or 'package.module.function'."""
    module_path, sep, attr = ref.partition(':')
    if not sep:
        module_path, _, attr = ref.rpartition('.')
    if not module_path or not attr:
        raise ValueError(f"Invalid handler reference '{ref}': expected 'module:function'")
    try:
        module = importlib.import_module(module_path)
    except ImportError as e:
        raise ValueError(f"Failed to import handler module '{module_path}': {e}") from e
    try:
        handler = getattr(module, attr)
    except AttributeError as e:
        raise ValueError(f"Handler '{attr}' not found in module '{module_path}'") from e
    if not callable(handler):
        raise ValueError(f"Handler reference '{ref}' is not callable")
    return handler


def build_handlers(overrides: Mapping[str, str] = None) -> dict[str, Handler]:
    """Default handler table with configured overrides applied per node kind."""
    table: dict[str, Handler] = {k.value: h for k, h in DEFAULT_HANDLERS.items()}
    for kind, ref in (overrides or {}).items():
        table[kind] = load_handler(ref)
    return table
