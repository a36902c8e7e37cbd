"""Specifications: desired resources reconciled against persisted state."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from .context import Context
from .errors import ImportFailedError
from .registry import resource_class

logger = logging.getLogger(__name__)


class Specification(ABC):
    """Base class for everything a strategy can reconcile."""

    type_name: str

    @property
    @abstractmethod
    def address(self) -> str:
        """State address of the resource."""

    @abstractmethod
    def equals(self, ctx: Context) -> bool:
        """Current state matches desired state."""

    def exists(self, ctx: Context) -> bool:
        """Resource exists (defaults to equals)."""
        return self.equals(ctx)

    @abstractmethod
    def apply(self, ctx: Context) -> None:
        """Create or update resource."""

    @abstractmethod
    def remove(self, ctx: Context) -> None:
        """Delete resource."""


def _normalize(value: Any) -> Any:
    return "" if value is None else value


class ResourceSpec(Specification):
    """A managed resource declared with its desired attributes."""

    def __init__(self, type_name: str, attrs: dict[str, Any]) -> None:
        self.type_name = type_name
        self.resource_cls = resource_class(type_name)
        self.desired = self.resource_cls.model(**attrs)

    @property
    def address(self) -> str:
        key = getattr(self.desired, self.resource_cls.key_attribute)
        return f"{self.type_name}.{key}"

    def _controller(self, ctx: Context) -> Any:
        return ctx.provider.resource(self.type_name)

    def refresh(self, ctx: Context) -> Any:
        """Return the current model, reading it through the resource once per run.

        A resource that has vanished from the store is dropped from state.
        """
        if self.address in ctx.refreshed:
            return ctx.refreshed[self.address]

        prior = ctx.state.get(self.address)
        current = None
        if prior is not None:
            model = self.resource_cls.model(**prior.attributes)
            current = self._controller(ctx).read(model)
            if current is None:
                ctx.state.remove(self.address)
            else:
                ctx.state.set(self.address, self.type_name, current.model_dump())

        ctx.refreshed[self.address] = current
        return current

    def exists(self, ctx: Context) -> bool:
        return self.refresh(ctx) is not None

    def equals(self, ctx: Context) -> bool:
        current = self.refresh(ctx)
        if current is None:
            return False
        wanted = self.desired.model_dump(exclude={"id"})
        return all(_normalize(getattr(current, k)) == _normalize(v) for k, v in wanted.items())

    def apply(self, ctx: Context) -> None:
        controller = self._controller(ctx)
        if self.refresh(ctx) is None:
            result = controller.create(self.desired)
        else:
            result = controller.update(self.desired)
        ctx.state.set(self.address, self.type_name, result.model_dump())
        ctx.refreshed[self.address] = result

    def remove(self, ctx: Context) -> None:
        current = self.refresh(ctx)
        self._controller(ctx).delete(current if current is not None else self.desired)
        ctx.state.remove(self.address)
        ctx.refreshed[self.address] = None

    def __repr__(self) -> str:
        return f"ResourceSpec({self.address!r})"


class ImportSpec(Specification):
    """An existing record to adopt into state by its identity."""

    def __init__(self, type_name: str, attrs: dict[str, Any]) -> None:
        self.type_name = type_name
        self.resource_cls = resource_class(type_name)
        try:
            self.import_id = attrs["id"]
        except KeyError:
            raise ValueError(f"Import of '{type_name}' requires an 'id' attribute") from None
        self.key = self.resource_cls.import_key(self.import_id)

    @property
    def address(self) -> str:
        return f"{self.type_name}.{self.key}"

    def equals(self, ctx: Context) -> bool:
        return self.address in ctx.state

    def apply(self, ctx: Context) -> None:
        imported = ctx.provider.resource(self.type_name).import_state(self.import_id)
        if imported is None:
            raise ImportFailedError(
                f"Cannot import '{self.import_id}': no such record in the store"
            )
        ctx.state.set(self.address, self.type_name, imported.model_dump())
        ctx.refreshed[self.address] = imported

    def remove(self, ctx: Context) -> None:
        logger.debug("Forgetting %s", self.address)
        ctx.state.remove(self.address)
        ctx.refreshed.pop(self.address, None)

    def __repr__(self) -> str:
        return f"ImportSpec({self.import_id!r})"
