"""Shared fixtures for persondb tests."""

from __future__ import annotations

import pytest

from persondb.errors import RecordNotFoundError, StoreError


class FakeStore:
    """In-memory PersonStore that records calls and can be told to fail."""

    def __init__(self, persons: dict[str, tuple[str, str]] | None = None) -> None:
        self.persons: dict[str, tuple[str, str]] = dict(persons or {})
        self.calls: list[tuple[str, str]] = []
        self.failures: dict[str, StoreError] = {}

    def fail(self, method: str, exc: StoreError | None = None) -> None:
        self.failures[method] = exc or StoreError(f"{method} is unavailable")

    def _call(self, method: str, person_id: str) -> None:
        self.calls.append((method, person_id))
        if method in self.failures:
            raise self.failures[method]

    def called(self, method: str) -> bool:
        return any(name == method for name, _ in self.calls)

    def person_exists(self, person_id: str) -> bool:
        self._call("person_exists", person_id)
        return person_id in self.persons

    def create_person(self, person_id: str, last_name: str, first_name: str) -> None:
        self._call("create_person", person_id)
        if person_id in self.persons:
            raise StoreError(f"person '{person_id}' already exists")
        self.persons[person_id] = (last_name, first_name)

    def read_person(self, person_id: str) -> tuple[str, str]:
        self._call("read_person", person_id)
        if person_id not in self.persons:
            raise RecordNotFoundError(person_id)
        return self.persons[person_id]

    def update_person(self, person_id: str, last_name: str, first_name: str) -> None:
        self._call("update_person", person_id)
        if person_id not in self.persons:
            raise RecordNotFoundError(person_id)
        self.persons[person_id] = (last_name, first_name)

    def delete_person(self, person_id: str) -> None:
        self._call("delete_person", person_id)
        if person_id not in self.persons:
            raise RecordNotFoundError(person_id)
        del self.persons[person_id]


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()
