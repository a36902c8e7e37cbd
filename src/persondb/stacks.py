"""Stack model: the top-level unit that is applied against one state file."""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field

from .blueprints import Blueprint
from .client import PersonStore
from .config import ProviderConfig
from .context import Context
from .provider import Provider
from .spec import ResourceSpec
from .specop import Absent
from .state import State

logger = logging.getLogger(__name__)

DEFAULT_STATE_FILE = "persondb.state.json"


class Stack(BaseModel):
    """Base model for a deployable set of blueprints."""

    model_config = {"arbitrary_types_allowed": True}

    name: str
    description: str = ""
    state_file: str = DEFAULT_STATE_FILE
    provider: ProviderConfig = Field(default_factory=ProviderConfig)
    blueprints: list[Blueprint] = Field(default_factory=list)

    @property
    def addresses(self) -> set[str]:
        """Addresses of every resource this stack declares."""
        return set().union(*(bp.addresses for bp in self.blueprints))

    def apply(
        self,
        *,
        dry_run: bool = False,
        prune: bool = True,
        store: PersonStore | None = None,
    ) -> State:
        """Reconcile all blueprints and persist the resulting state.

        With ``prune``, resources found in state but no longer declared are
        deleted. A ``store`` bypasses provider configuration.
        """
        provider = Provider(store=store)
        if store is None:
            provider.configure(self.provider)

        state = State.load(self.state_file)
        ctx = Context(provider, state, dry_run=dry_run)
        logger.info("Applying stack '%s'", self.name)

        try:
            for blueprint in self.blueprints:
                blueprint.apply(ctx)

            if prune:
                self._prune(ctx)
        finally:
            # completed ops are persisted even when a later one fails
            if not dry_run:
                state.save(self.state_file)
        return state

    def _prune(self, ctx: Context) -> None:
        declared = self.addresses
        for address, entry in list(ctx.state.resources.items()):
            if address in declared:
                continue
            logger.debug("Pruning undeclared resource %s", address)
            Absent(ResourceSpec(entry.type, entry.attributes))(ctx)
