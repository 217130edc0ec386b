"""Resolution of 'module:attribute' import paths."""

from importlib import import_module
from typing import Any


def resolve_import_path(path: str) -> Any:
    """Import the object named by ``package.module:attribute``.

    Raises:
        ValueError: If the path is malformed or the attribute is missing
        ImportError: If the module cannot be imported

    """
    module_name, sep, attribute = path.partition(":")
    if not sep or not module_name or not attribute:
        raise ValueError(f"Import path must look like 'module:attribute': '{path}'")

    target: Any = import_module(module_name)
    for part in attribute.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as exc:
            raise ValueError(f"'{module_name}' has no attribute '{attribute}'") from exc
    return target
