"""Exception taxonomy for the persondb provider."""

from __future__ import annotations


class PersonDBError(Exception):
    """Base class for all persondb errors."""


class ConfigurationError(PersonDBError):
    """The provider could not be configured."""


# -- Store errors --


class StoreError(PersonDBError):
    """The record store failed to complete a request."""


class RecordNotFoundError(StoreError):
    """The record store holds no record for the requested key."""

    def __init__(self, person_id: str) -> None:
        super().__init__(f"person '{person_id}' does not exist")
        self.person_id = person_id


# -- Lifecycle errors --


class StoreUnavailableError(PersonDBError):
    """A read-type query against the store failed."""


class AlreadyExistsError(PersonDBError):
    """A person with the requested key is already present in the store."""

    def __init__(self, person_id: str) -> None:
        super().__init__(
            f"Person '{person_id}' already exists; import it instead of creating it"
        )
        self.person_id = person_id


class CreateFailedError(PersonDBError):
    """The store rejected a create request."""


class UpdateFailedError(PersonDBError):
    """The store rejected an update request."""


class DeleteFailedError(PersonDBError):
    """The store rejected a delete request."""


class ReadFailedError(PersonDBError):
    """A data source lookup failed."""


class ImportFailedError(PersonDBError):
    """An existing record could not be adopted into state."""


class MalformedIdentityError(PersonDBError, ValueError):
    """An identity string does not have the form ``/person/<person_id>``."""

    def __init__(self, identity: str) -> None:
        super().__init__(
            f"Unexpected import identifier '{identity}'; expected '/person/<person_id>'"
        )
        self.identity = identity
