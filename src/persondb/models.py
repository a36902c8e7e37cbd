"""State models for persondb resources and data sources."""

from __future__ import annotations

from pydantic import BaseModel


class PersonModel(BaseModel):
    """Managed state of a ``persondb_person`` resource.

    ``id`` is only set once the person has been created or imported.
    ``first_name`` of None and "" both mean "unset".
    """

    id: str | None = None
    person_id: str
    last_name: str
    first_name: str | None = None

    def store_first_name(self) -> str:
        return self.first_name or ""


class PersonLookup(BaseModel):
    """Configuration of a person data source."""

    person_id: str


class PersonDataModel(BaseModel):
    """State produced by a person data source."""

    id: str
    person_id: str
    last_name: str
    first_name: str | None = None
