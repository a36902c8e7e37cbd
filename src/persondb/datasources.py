"""Read-only data sources."""

from __future__ import annotations

import logging

from . import identity
from .client import PersonStore
from .errors import ReadFailedError, StoreError
from .models import PersonDataModel, PersonLookup
from .registry import data_source

logger = logging.getLogger(__name__)


class _PersonLookupSource:
    model = PersonLookup

    def __init__(self, client: PersonStore) -> None:
        self.client = client

    def _lookup(self, config: PersonLookup) -> tuple[str, str]:
        try:
            return self.client.read_person(config.person_id)
        except StoreError as exc:
            raise ReadFailedError(
                f"Could not read person '{config.person_id}', unexpected error: {exc}"
            ) from exc


@data_source("person")
class PersonDataSource(_PersonLookupSource):
    """Look up a single person; an empty first name is reported as unset."""

    type_name: str

    def read(self, config: PersonLookup) -> PersonDataModel:
        last_name, first_name = self._lookup(config)
        logger.debug("Read person '%s'", config.person_id)
        return PersonDataModel(
            id=identity.encode(config.person_id),
            person_id=config.person_id,
            last_name=last_name,
            first_name=first_name or None,
        )


@data_source("names")
class NamesDataSource(_PersonLookupSource):
    """Look up the names of a person exactly as stored."""

    type_name: str

    def read(self, config: PersonLookup) -> PersonDataModel:
        last_name, first_name = self._lookup(config)
        return PersonDataModel(
            id=identity.encode(config.person_id),
            person_id=config.person_id,
            last_name=last_name,
            first_name=first_name,
        )
