"""Provider: configuration and type dispatch for resources and data sources."""

from __future__ import annotations

import logging
from typing import Any

from . import datasources, resources  # noqa: F401
from .client import Client, PersonStore
from .config import ProviderConfig, resolve_database_filename
from .errors import ConfigurationError, StoreError
from .registry import (
    PROVIDER_NAME,
    _data_source_registry,
    _resource_registry,
    data_source_class,
    resource_class,
)

logger = logging.getLogger(__name__)


class Provider:
    """Builds resource and data source instances bound to one record store."""

    type_name = PROVIDER_NAME

    def __init__(self, version: str = "dev", *, store: PersonStore | None = None) -> None:
        self.version = version
        self._store = store

    @property
    def store(self) -> PersonStore:
        if self._store is None:
            raise ConfigurationError(f"Provider '{self.type_name}' has not been configured")
        return self._store

    @property
    def configured(self) -> bool:
        return self._store is not None

    def configure(self, config: ProviderConfig | None = None) -> None:
        """Resolve the database filename and create the record store client."""
        database = resolve_database_filename(config)
        try:
            self._store = Client(database)
        except StoreError as exc:
            raise ConfigurationError(
                f"Unable to create the Persons DB client for '{database}': {exc}"
            ) from exc
        logger.info("Configured provider '%s' with database %s", self.type_name, database)

    def resources(self) -> list[str]:
        """Return the full type names of all registered resources."""
        return [cls.type_name for cls in _resource_registry.values()]

    def data_sources(self) -> list[str]:
        """Return the full type names of all registered data sources."""
        return [cls.type_name for cls in _data_source_registry.values()]

    def resource(self, type_name: str) -> Any:
        """Create the resource registered as ``type_name`` bound to the store."""
        return resource_class(type_name)(self.store)

    def data_source(self, type_name: str) -> Any:
        """Create the data source registered as ``type_name`` bound to the store."""
        return data_source_class(type_name)(self.store)

    def __repr__(self) -> str:
        return f"Provider(type_name={self.type_name!r}, version={self.version!r})"
