"""Record store: the PersonStore contract and a JSON-file backed client."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, Field, ValidationError

from .errors import RecordNotFoundError, StoreError

logger = logging.getLogger(__name__)


@runtime_checkable
class PersonStore(Protocol):
    """Capability consumed by resources and data sources.

    Every method raises StoreError on failure. Reading, updating or deleting
    a key that is not present raises RecordNotFoundError.
    """

    def person_exists(self, person_id: str) -> bool: ...

    def create_person(self, person_id: str, last_name: str, first_name: str) -> None: ...

    def read_person(self, person_id: str) -> tuple[str, str]: ...

    def update_person(self, person_id: str, last_name: str, first_name: str) -> None: ...

    def delete_person(self, person_id: str) -> None: ...


class Person(BaseModel):
    """A single stored record."""

    last_name: str
    first_name: str = ""


class PersonDatabase(BaseModel):
    """On-disk layout of the database file."""

    persons: dict[str, Person] = Field(default_factory=dict)


class Client:
    """PersonStore persisting all records to a single JSON file.

    A missing file is an empty database; it is written on the first mutation.
    """

    def __init__(self, filename: str | Path) -> None:
        self.path = Path(filename)
        if not self.path.parent.is_dir():
            raise StoreError(f"database directory does not exist: {self.path.parent}")
        if self.path.exists() and not self.path.is_file():
            raise StoreError(f"database path is not a file: {self.path}")

    def _load(self) -> PersonDatabase:
        if not self.path.exists():
            return PersonDatabase()
        try:
            return PersonDatabase.model_validate_json(self.path.read_text())
        except OSError as exc:
            raise StoreError(f"unable to read {self.path}: {exc}") from exc
        except ValidationError as exc:
            raise StoreError(f"invalid database file {self.path}: {exc}") from exc

    def _save(self, db: PersonDatabase) -> None:
        try:
            self.path.write_text(db.model_dump_json(indent=2))
        except OSError as exc:
            raise StoreError(f"unable to write {self.path}: {exc}") from exc

    def person_exists(self, person_id: str) -> bool:
        return person_id in self._load().persons

    def create_person(self, person_id: str, last_name: str, first_name: str) -> None:
        db = self._load()
        if person_id in db.persons:
            raise StoreError(f"person '{person_id}' already exists")
        db.persons[person_id] = Person(last_name=last_name, first_name=first_name)
        self._save(db)
        logger.debug("Stored person '%s' in %s", person_id, self.path)

    def read_person(self, person_id: str) -> tuple[str, str]:
        person = self._load().persons.get(person_id)
        if person is None:
            raise RecordNotFoundError(person_id)
        return person.last_name, person.first_name

    def update_person(self, person_id: str, last_name: str, first_name: str) -> None:
        db = self._load()
        if person_id not in db.persons:
            raise RecordNotFoundError(person_id)
        db.persons[person_id] = Person(last_name=last_name, first_name=first_name)
        self._save(db)
        logger.debug("Rewrote person '%s' in %s", person_id, self.path)

    def delete_person(self, person_id: str) -> None:
        db = self._load()
        if db.persons.pop(person_id, None) is None:
            raise RecordNotFoundError(person_id)
        self._save(db)
        logger.debug("Dropped person '%s' from %s", person_id, self.path)

    def __repr__(self) -> str:
        return f"Client(path={str(self.path)!r})"
