"""Director model.

A director is a named backend pool the cache routes to. The agent only
interprets the ``name``; every other property (backends, weights, health
parameters, ...) belongs to the configuration engine and is carried through
unchanged and in its original order.
"""

from __future__ import annotations

__all__ = [
    "Director",
    "sort_directors",
]

from collections.abc import Iterable
from operator import attrgetter
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from varnish_agent.exceptions import InvalidInputError


class Director(BaseModel):
    """Named backend-pool descriptor with an opaque property bag.

    ``name`` defaults to an empty string so that a payload without a name is
    rejected by the registry as invalid input rather than as a schema error.

    Attributes:
        name: Unique identity of the director within the registry.
    """

    model_config = ConfigDict(extra="allow")

    name: str = Field(default="", description="Unique director name")

    @classmethod
    def from_payload(cls, payload: Any) -> "Director":
        """Build a director from a decoded JSON payload.

        Args:
            payload: Decoded JSON value (must be an object).

        Returns:
            Director with all extra properties preserved.

        Raises:
            InvalidInputError: If payload is not an object or name is not a string.
        """
        if not isinstance(payload, dict):
            raise InvalidInputError("Director payload must be a JSON object")
        try:
            return cls.model_validate(payload)
        except ValidationError as e:
            raise InvalidInputError(
                "Invalid director payload",
                details={"errors": [err["msg"] for err in e.errors()]},
            ) from e

    def with_name(self, name: str) -> "Director":
        """Return a copy whose identity is forced to ``name``."""
        return self.model_copy(update={"name": name}, deep=True)

    def to_payload(self) -> dict[str, Any]:
        """Serialize back to the engine's representation.

        ``name`` comes first, then the remaining properties in the order they
        were received. A payload that did not list ``name`` first is not
        reproduced key for key.
        """
        return self.model_dump()


def sort_directors(directors: Iterable[Director]) -> list[Director]:
    """Return directors in presentation order (stable, by name)."""
    return sorted(directors, key=attrgetter("name"))
