"""Provider configuration and database filename resolution."""

from __future__ import annotations

import logging
import os

from pydantic import BaseModel

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

DATABASE_ENV_VAR = "CUSTOM_DATABASE_FILENAME"


class ProviderConfig(BaseModel):
    """Settings accepted by the ``provider "persondb"`` block."""

    model_config = {"extra": "forbid"}

    database_filename: str | None = None


def resolve_database_filename(config: ProviderConfig | None = None) -> str:
    """Return the database filename, preferring the explicit setting.

    Falls back to the CUSTOM_DATABASE_FILENAME environment variable when the
    setting is absent. An explicit empty string is not replaced by the
    environment value.
    """
    database = os.environ.get(DATABASE_ENV_VAR, "")
    if config is not None and config.database_filename is not None:
        database = config.database_filename
    else:
        logger.debug("database_filename not set; using %s", DATABASE_ENV_VAR)

    if not database:
        raise ConfigurationError(
            "Missing Persons Database filename: set database_filename in the "
            f"provider configuration or use the {DATABASE_ENV_VAR} environment "
            "variable. If either is already set, ensure the value is not empty."
        )
    return database
