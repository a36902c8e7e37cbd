"""Persisted state: the last known attributes of every managed resource."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

STATE_VERSION = 1


class ResourceState(BaseModel):
    """Stored attributes of a single resource."""

    type: str
    attributes: dict[str, Any] = Field(default_factory=dict)


class State(BaseModel):
    """All resources known from previous runs, keyed by address."""

    version: int = STATE_VERSION
    resources: dict[str, ResourceState] = Field(default_factory=dict)

    @classmethod
    def load(cls, path: str | Path) -> State:
        """Read a state file; a missing file yields an empty state."""
        path = Path(path)
        if not path.exists():
            logger.debug("No state file at %s; starting empty", path)
            return cls()
        state = cls.model_validate_json(path.read_text())
        if state.version != STATE_VERSION:
            raise ValueError(f"{path}: unsupported state version {state.version}")
        logger.debug("Loaded %d resource(s) from %s", len(state.resources), path)
        return state

    def save(self, path: str | Path) -> None:
        path = Path(path)
        path.write_text(self.model_dump_json(indent=2))
        logger.debug("Saved %d resource(s) to %s", len(self.resources), path)

    def get(self, address: str) -> ResourceState | None:
        return self.resources.get(address)

    def set(self, address: str, type_name: str, attributes: dict[str, Any]) -> None:
        self.resources[address] = ResourceState(type=type_name, attributes=attributes)

    def remove(self, address: str) -> None:
        self.resources.pop(address, None)

    def __contains__(self, address: object) -> bool:
        return address in self.resources

    def __len__(self) -> int:
        return len(self.resources)
