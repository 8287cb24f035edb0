"""Director registry gateway.

CRUD over the engine's director collection. The gateway holds no copy of
the collection: every operation re-reads the authoritative list from the
engine, mutates a local copy and writes the whole copy back (the engine
only supports whole-collection replacement).

Invariants kept by every operation:
- names are unique within the persisted collection
- a failed persist is reported, never swallowed

Concurrency:
    Create/Update/Delete issued through the same gateway are serialized by
    an asyncio.Lock around the fetch->mutate->persist sequence, so two
    concurrent mutations in one agent process cannot overwrite each other.
    Writers in other processes are serialized (or not) by the engine.
"""

from __future__ import annotations

__all__ = ["RegistryGateway"]

import asyncio
from typing import TYPE_CHECKING

from varnish_agent.exceptions import (
    DirectorExistsError,
    DirectorNotFoundError,
    InvalidInputError,
    UpstreamError,
)
from varnish_agent.registry.models import Director, sort_directors
from varnish_agent.telemetry.system_logger import get_system_logger

if TYPE_CHECKING:
    from varnish_agent.engine.protocol import ConfigEngine

logger = get_system_logger()


class RegistryGateway:
    """List/get/create/update/delete over the engine's director collection."""

    def __init__(self, engine: "ConfigEngine") -> None:
        self._engine = engine
        self._mutation_lock = asyncio.Lock()

    # =========================================================================
    # Read operations
    # =========================================================================

    async def list_directors(self) -> list[Director]:
        """Return the full collection sorted by name.

        Raises:
            UpstreamError: If the engine cannot produce the collection.
        """
        return sort_directors(await self._fetch())

    async def get_director(self, name: str) -> Director:
        """Return the director named ``name``.

        Raises:
            DirectorNotFoundError: If no such director exists.
            UpstreamError: If the engine cannot produce the collection.
        """
        directors = await self._fetch()
        index = _locate(directors, name)
        if index == -1:
            raise DirectorNotFoundError(name)
        return directors[index]

    # =========================================================================
    # Mutating operations
    # =========================================================================

    async def create_director(self, director: Director) -> Director:
        """Add a new director.

        Args:
            director: Director to add; its name must be non-empty and unused.

        Returns:
            The created director.

        Raises:
            InvalidInputError: If the name is empty.
            DirectorExistsError: If the name is already taken.
            UpstreamError: On engine fetch/persist failure.
        """
        if not director.name:
            raise InvalidInputError("The director's name can't be empty", details={"field": "name"})

        async with self._mutation_lock:
            directors = await self._fetch()
            if _locate(directors, director.name) != -1:
                raise DirectorExistsError(director.name)
            directors.append(director)
            await self._persist(directors, director.name)

        logger.info(
            {
                "event": "director_created",
                "message": f"Director created: {director.name}",
                "name": director.name,
            }
        )
        return director

    async def update_director(self, name: str, director: Director) -> Director:
        """Replace the content of an existing director.

        The stored director keeps ``name`` whatever name the payload carries.

        Args:
            name: Name of the director to replace.
            director: New content.

        Returns:
            The stored director.

        Raises:
            DirectorNotFoundError: If no such director exists.
            UpstreamError: On engine fetch/persist failure.
        """
        updated = director.with_name(name)

        async with self._mutation_lock:
            directors = await self._fetch()
            index = _locate(directors, name)
            if index == -1:
                raise DirectorNotFoundError(name)
            directors[index] = updated
            await self._persist(directors, name)

        logger.info(
            {
                "event": "director_updated",
                "message": f"Director updated: {name}",
                "name": name,
            }
        )
        return updated

    async def delete_director(self, name: str) -> bool:
        """Remove a director. Deleting an absent name is not an error.

        Returns:
            True if a director was removed, False if it was already absent.

        Raises:
            UpstreamError: On engine fetch/persist failure.
        """
        async with self._mutation_lock:
            directors = await self._fetch()
            index = _locate(directors, name)
            if index == -1:
                return False
            del directors[index]
            await self._persist(directors, name)

        logger.info(
            {
                "event": "director_deleted",
                "message": f"Director deleted: {name}",
                "name": name,
            }
        )
        return True

    # =========================================================================
    # Engine access
    # =========================================================================

    async def _fetch(self) -> list[Director]:
        try:
            return list(await self._engine.list_directors())
        except UpstreamError as e:
            _log_upstream_failure("director_fetch_failed", e)
            raise
        except Exception as e:
            error = UpstreamError(f"Failed to list directors: {e}", operation="list")
            _log_upstream_failure("director_fetch_failed", error)
            raise error from e

    async def _persist(self, directors: list[Director], name: str) -> None:
        try:
            await self._engine.save(directors)
        except UpstreamError as e:
            _log_upstream_failure("director_persist_failed", e, name=name)
            raise
        except Exception as e:
            error = UpstreamError(f"Failed to save directors: {e}", operation="save")
            _log_upstream_failure("director_persist_failed", error, name=name)
            raise error from e


def _locate(directors: list[Director], name: str) -> int:
    """Index of the director named ``name``, or -1 if absent."""
    for index, director in enumerate(directors):
        if director.name == name:
            return index
    return -1


def _log_upstream_failure(event: str, error: UpstreamError, name: str | None = None) -> None:
    logger.warning(
        {
            "event": event,
            "message": error.message,
            "operation": error.operation,
            "upstream_status": error.upstream_status,
            "name": name,
        }
    )
