"""Blueprint model: a named, reusable group of strategies."""

from __future__ import annotations

import logging
from collections.abc import Iterator

from pydantic import BaseModel, Field

from .context import Context
from .specop import SpecOp

logger = logging.getLogger(__name__)


class Blueprint(BaseModel):
    """A named collection of strategies applied in declaration order."""

    model_config = {"arbitrary_types_allowed": True}

    name: str
    ops: list[SpecOp] = Field(default_factory=list)

    def __iter__(self) -> Iterator[SpecOp]:  # type: ignore[override]
        return iter(self.ops)

    @property
    def addresses(self) -> set[str]:
        return {op.address for op in self.ops}

    def apply(self, ctx: Context) -> None:
        """Run every strategy of this blueprint."""
        logger.debug("Applying blueprint '%s' (%d op(s))", self.name, len(self.ops))
        for op in self.ops:
            op(ctx)
