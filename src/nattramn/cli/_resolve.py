"""Resolve ``"module:attribute"`` import strings to Nattramn apps."""

import importlib

from nattramn.app import Nattramn


def resolve_app(import_string: str) -> Nattramn:
    """Resolve an import string to a Nattramn instance.

    The attribute defaults to ``app`` (``"myapp"`` -> ``myapp.app``).  A
    callable that is not already an app is treated as a factory and called.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not a Nattramn app.
    """
    module_path, _, attr_name = import_string.partition(":")
    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name or "app")

    if callable(obj) and not isinstance(obj, Nattramn):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(obj, Nattramn):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a nattramn.Nattramn instance"
        raise TypeError(msg)

    return obj
