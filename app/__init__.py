"""Movie catalog API and filtering client.

Attributes are resolved lazily so importing the client side does not build
the FastAPI application.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any

_EXPORTS = {
    "app": "app.main",
    "create_app": "app.main",
    "CatalogClient": "app.services.catalog_client",
    "FilterCoordinator": "app.services.filter_coordinator",
    "FilterState": "app.services.filter_coordinator",
}

__all__ = list(_EXPORTS)


def __getattr__(name: str) -> Any:
    module_name = _EXPORTS.get(name)
    if module_name is None:
        raise AttributeError(f"module 'app' has no attribute {name}")
    return getattr(import_module(module_name), name)
