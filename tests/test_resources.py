"""Tests for persondb.resources."""

from __future__ import annotations

import logging

import pytest
from conftest import FakeStore

from persondb.errors import (
    AlreadyExistsError,
    CreateFailedError,
    DeleteFailedError,
    MalformedIdentityError,
    RecordNotFoundError,
    StoreError,
    StoreUnavailableError,
    UpdateFailedError,
)
from persondb.models import PersonModel
from persondb.resources import PersonResource


def _plan(person_id: str = "p1", last_name: str = "Doe", first_name: str | None = "") -> PersonModel:
    return PersonModel(person_id=person_id, last_name=last_name, first_name=first_name)


class TestMetadata:
    def test_type_name(self):
        assert PersonResource.type_name == "persondb_person"

    def test_keyed_by_person_id(self):
        assert PersonResource.key_attribute == "person_id"


class TestCreate:
    def test_returns_state_with_identity(self, store):
        result = PersonResource(store).create(_plan())
        assert result == PersonModel(id="/person/p1", person_id="p1", last_name="Doe", first_name="")

    def test_writes_record(self, store):
        PersonResource(store).create(_plan(first_name="Jane"))
        assert store.persons["p1"] == ("Doe", "Jane")

    def test_unset_first_name_written_empty(self, store):
        PersonResource(store).create(_plan(first_name=None))
        assert store.persons["p1"] == ("Doe", "")

    def test_checks_existence_before_create(self, store):
        PersonResource(store).create(_plan())
        assert [name for name, _ in store.calls] == ["person_exists", "create_person"]

    def test_existing_record_conflicts(self):
        store = FakeStore({"p1": ("Smith", "")})
        with pytest.raises(AlreadyExistsError, match="p1") as info:
            PersonResource(store).create(_plan())
        assert info.value.person_id == "p1"
        assert store.persons["p1"] == ("Smith", "")
        assert not store.called("create_person")

    def test_second_create_conflicts(self, store):
        resource = PersonResource(store)
        resource.create(_plan())
        with pytest.raises(AlreadyExistsError):
            resource.create(_plan(last_name="Other"))
        assert store.persons["p1"] == ("Doe", "")

    def test_existence_check_failure_short_circuits(self, store):
        store.fail("person_exists")
        with pytest.raises(StoreUnavailableError):
            PersonResource(store).create(_plan())
        assert not store.called("create_person")

    def test_store_create_failure(self, store):
        store.fail("create_person", StoreError("disk full"))
        with pytest.raises(CreateFailedError, match="disk full") as info:
            PersonResource(store).create(_plan())
        assert isinstance(info.value.__cause__, StoreError)
        assert "p1" not in store.persons

    def test_does_not_mutate_plan(self, store):
        plan = _plan()
        PersonResource(store).create(plan)
        assert plan.id is None


class TestRead:
    def test_refreshes_from_store(self):
        store = FakeStore({"p1": ("Roe", "Jim")})
        prior = PersonModel(id="/person/p1", person_id="p1", last_name="Doe", first_name="Jane")
        result = PersonResource(store).read(prior)
        assert result.last_name == "Roe"
        assert result.first_name == "Jim"

    def test_preserves_first_name_when_store_empty(self):
        store = FakeStore({"p1": ("Doe", "")})
        prior = PersonModel(person_id="p1", last_name="Doe", first_name="Jane")
        result = PersonResource(store).read(prior)
        assert result.first_name == "Jane"

    def test_recomputes_identity(self):
        store = FakeStore({"p1": ("Doe", "")})
        prior = PersonModel(id="stale", person_id="p1", last_name="Doe")
        result = PersonResource(store).read(prior)
        assert result.id == "/person/p1"

    def test_keyed_by_person_id_not_identity(self):
        store = FakeStore({"p1": ("Doe", "")})
        prior = PersonModel(id="/person/other", person_id="p1", last_name="Doe")
        PersonResource(store).read(prior)
        assert store.calls == [("read_person", "p1")]

    def test_missing_record_is_removed(self, store):
        prior = PersonModel(id="/person/p1", person_id="p1", last_name="Doe")
        assert PersonResource(store).read(prior) is None

    def test_missing_record_logs_warning(self, store, caplog):
        prior = PersonModel(person_id="p1", last_name="Doe")
        with caplog.at_level(logging.WARNING, logger="persondb.resources"):
            PersonResource(store).read(prior)
        assert "no longer exists" in caplog.text

    def test_store_failure_is_not_removal(self):
        store = FakeStore({"p1": ("Doe", "")})
        store.fail("read_person", StoreError("connection reset"))
        prior = PersonModel(person_id="p1", last_name="Doe")
        with pytest.raises(StoreUnavailableError, match="connection reset"):
            PersonResource(store).read(prior)

    def test_not_found_subclass_is_removal(self):
        store = FakeStore({"p1": ("Doe", "")})
        store.fail("read_person", RecordNotFoundError("p1"))
        prior = PersonModel(person_id="p1", last_name="Doe")
        assert PersonResource(store).read(prior) is None


class TestUpdate:
    def test_overwrites_record(self):
        store = FakeStore({"p1": ("Doe", "Jane")})
        PersonResource(store).update(_plan(last_name="Roe", first_name="Jim"))
        assert store.persons["p1"] == ("Roe", "Jim")

    def test_returns_plan(self):
        store = FakeStore({"p1": ("Doe", "Jane")})
        plan = _plan(last_name="Roe", first_name="Jim")
        result = PersonResource(store).update(plan)
        assert result.last_name == "Roe"
        assert result.first_name == "Jim"
        assert result.id == "/person/p1"

    def test_no_existence_check(self):
        store = FakeStore({"p1": ("Doe", "")})
        PersonResource(store).update(_plan())
        assert store.calls == [("update_person", "p1")]

    def test_missing_record_fails(self, store):
        with pytest.raises(UpdateFailedError, match="p1") as info:
            PersonResource(store).update(_plan())
        assert isinstance(info.value.__cause__, RecordNotFoundError)
        assert store.calls == [("update_person", "p1")]

    def test_store_failure(self):
        store = FakeStore({"p1": ("Doe", "")})
        store.fail("update_person")
        with pytest.raises(UpdateFailedError):
            PersonResource(store).update(_plan(last_name="Roe"))
        assert store.persons["p1"] == ("Doe", "")


class TestDelete:
    def test_removes_record(self):
        store = FakeStore({"p1": ("Doe", "")})
        assert PersonResource(store).delete(_plan()) is None
        assert "p1" not in store.persons

    def test_store_failure_keeps_state(self):
        store = FakeStore({"p1": ("Doe", "Jane")})
        store.fail("delete_person")
        state = PersonModel(id="/person/p1", person_id="p1", last_name="Doe", first_name="Jane")
        with pytest.raises(DeleteFailedError, match="p1"):
            PersonResource(store).delete(state)
        assert state == PersonModel(id="/person/p1", person_id="p1", last_name="Doe", first_name="Jane")
        assert "p1" in store.persons


class TestImport:
    def test_populates_from_store(self):
        store = FakeStore({"alice": ("Liddell", "Alice")})
        result = PersonResource(store).import_state("/person/alice")
        assert result == PersonModel(
            id="/person/alice", person_id="alice", last_name="Liddell", first_name="Alice"
        )

    def test_sets_empty_first_name(self):
        store = FakeStore({"alice": ("Liddell", "")})
        result = PersonResource(store).import_state("/person/alice")
        assert result.first_name == ""

    def test_malformed_identity(self, store):
        with pytest.raises(MalformedIdentityError):
            PersonResource(store).import_state("alice")
        assert store.calls == []

    def test_missing_record(self, store):
        assert PersonResource(store).import_state("/person/alice") is None

    def test_import_key(self):
        assert PersonResource.import_key("/person/alice") == "alice"


class TestLifecycle:
    def test_create_read_update_delete(self, store):
        resource = PersonResource(store)
        state = resource.create(_plan(first_name="Jane"))
        state = resource.read(state)
        assert state.first_name == "Jane"

        state = resource.update(state.model_copy(update={"last_name": "Roe"}))
        assert resource.read(state).last_name == "Roe"

        resource.delete(state)
        assert resource.read(state) is None
