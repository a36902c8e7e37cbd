"""Managed resources: the person lifecycle controller."""

from __future__ import annotations

import logging

from . import identity
from .client import PersonStore
from .errors import (
    AlreadyExistsError,
    CreateFailedError,
    DeleteFailedError,
    RecordNotFoundError,
    StoreError,
    StoreUnavailableError,
    UpdateFailedError,
)
from .models import PersonModel
from .registry import resource

logger = logging.getLogger(__name__)


@resource("person")
class PersonResource:
    """Create, read, update, delete and import ``persondb_person`` records.

    Each operation returns the state the caller should persist; ``read`` and
    ``import_state`` return None when the record no longer exists.
    """

    type_name: str
    model = PersonModel
    key_attribute = "person_id"

    def __init__(self, client: PersonStore) -> None:
        self.client = client

    def create(self, plan: PersonModel) -> PersonModel:
        person_id = plan.person_id
        try:
            exists = self.client.person_exists(person_id)
        except StoreError as exc:
            raise StoreUnavailableError(
                f"Could not check whether person '{person_id}' exists: {exc}"
            ) from exc
        if exists:
            raise AlreadyExistsError(person_id)

        try:
            self.client.create_person(person_id, plan.last_name, plan.store_first_name())
        except StoreError as exc:
            raise CreateFailedError(f"Could not create person '{person_id}': {exc}") from exc

        logger.info("Created person '%s'", person_id)
        return plan.model_copy(update={"id": identity.encode(person_id)})

    def read(self, state: PersonModel) -> PersonModel | None:
        return self._refresh(state, preserve_first_name=True)

    def update(self, plan: PersonModel) -> PersonModel:
        person_id = plan.person_id
        try:
            self.client.update_person(person_id, plan.last_name, plan.store_first_name())
        except StoreError as exc:
            raise UpdateFailedError(f"Could not update person '{person_id}': {exc}") from exc

        logger.info("Updated person '%s'", person_id)
        return plan.model_copy(update={"id": identity.encode(person_id)})

    def delete(self, state: PersonModel) -> None:
        person_id = state.person_id
        try:
            self.client.delete_person(person_id)
        except StoreError as exc:
            raise DeleteFailedError(f"Could not delete person '{person_id}': {exc}") from exc
        logger.info("Deleted person '%s'", person_id)

    @staticmethod
    def import_key(import_id: str) -> str:
        return identity.decode(import_id)

    def import_state(self, import_id: str) -> PersonModel | None:
        person_id = self.import_key(import_id)
        logger.debug("Importing person '%s' from '%s'", person_id, import_id)
        seed = PersonModel(id=import_id, person_id=person_id, last_name="")
        return self._refresh(seed, preserve_first_name=False)

    def _refresh(self, state: PersonModel, *, preserve_first_name: bool) -> PersonModel | None:
        person_id = state.person_id
        try:
            last_name, first_name = self.client.read_person(person_id)
        except RecordNotFoundError:
            logger.warning("Person '%s' no longer exists; removing from state", person_id)
            return None
        except StoreError as exc:
            raise StoreUnavailableError(f"Could not read person '{person_id}': {exc}") from exc

        update: dict[str, str | None] = {
            "id": identity.encode(person_id),
            "last_name": last_name,
        }
        # an empty value from the store keeps the known first name
        if first_name or not preserve_first_name:
            update["first_name"] = first_name
        return state.model_copy(update=update)
