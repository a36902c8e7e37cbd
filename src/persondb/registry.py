"""Resource and data source type registration."""

from __future__ import annotations

PROVIDER_NAME = "persondb"

_resource_registry: dict[str, type] = {}
_data_source_registry: dict[str, type] = {}


def resource(name: str):
    """Register a class as a managed resource type."""

    def decorator(cls):
        cls.type_name = f"{PROVIDER_NAME}_{name}"
        _resource_registry[name] = cls
        return cls

    return decorator


def data_source(name: str):
    """Register a class as a read-only data source type."""

    def decorator(cls):
        cls.type_name = f"{PROVIDER_NAME}_{name}"
        _data_source_registry[name] = cls
        return cls

    return decorator


def _short_name(type_name: str) -> str:
    prefix = f"{PROVIDER_NAME}_"
    return type_name[len(prefix) :] if type_name.startswith(prefix) else ""


def resource_class(type_name: str) -> type:
    """Return the resource class registered for a full type name."""
    cls = _resource_registry.get(_short_name(type_name))
    if cls is None:
        raise ValueError(f"Unknown resource type: '{type_name}'")
    return cls


def data_source_class(type_name: str) -> type:
    """Return the data source class registered for a full type name."""
    cls = _data_source_registry.get(_short_name(type_name))
    if cls is None:
        raise ValueError(f"Unknown data source type: '{type_name}'")
    return cls
