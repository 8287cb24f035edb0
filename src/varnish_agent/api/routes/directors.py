"""Director registry API endpoints.

Provides:
- GET    ""        - List all directors (sorted by name)
- GET    "/{name}" - Get one director
- POST   ""        - Create a director (201, echoes it)
- PATCH  "/{name}" - Replace a director's content (204, name fixed to path)
- DELETE "/{name}" - Delete a director (204, also when absent)

Routes mounted at: /directors
"""

from __future__ import annotations

__all__ = ["router"]

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Response
from fastapi.responses import JSONResponse

from varnish_agent.api.deps import RegistryDep
from varnish_agent.api.guard import require_credentials
from varnish_agent.api.schemas import DirectorListResponse, ErrorResponse
from varnish_agent.registry.models import Director

router = APIRouter(
    dependencies=[Depends(require_credentials)],
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)

DirectorPayload = Annotated[Any, Body(description="Director object (name plus engine-owned properties)")]


@router.get("", response_model=DirectorListResponse)
async def list_directors(registry: RegistryDep) -> DirectorListResponse:
    """List all directors sorted by name."""
    directors = await registry.list_directors()
    return DirectorListResponse(directors=[d.to_payload() for d in directors])


@router.get("/{name}", response_model=None)
async def get_director(name: str, registry: RegistryDep) -> dict[str, Any]:
    """Get a single director.

    Raises:
        DirectorNotFoundError: 404 if no director has this name.
    """
    director = await registry.get_director(name)
    return director.to_payload()


@router.post("", status_code=201, response_model=None)
async def create_director(payload: DirectorPayload, registry: RegistryDep) -> JSONResponse:
    """Create a director.

    Raises:
        InvalidInputError: 400 if the payload is malformed or the name is empty.
        DirectorExistsError: 409 if the name is already taken.
    """
    director = await registry.create_director(Director.from_payload(payload))
    return JSONResponse(status_code=201, content=director.to_payload())


@router.patch("/{name}", status_code=204, response_class=Response)
async def update_director(name: str, payload: DirectorPayload, registry: RegistryDep) -> Response:
    """Replace a director's content. The name in the body is ignored.

    Raises:
        InvalidInputError: 400 if the payload is malformed.
        DirectorNotFoundError: 404 if no director has this name.
    """
    await registry.update_director(name, Director.from_payload(payload))
    return Response(status_code=204)


@router.delete("/{name}", status_code=204, response_class=Response)
async def delete_director(name: str, registry: RegistryDep) -> Response:
    """Delete a director. Deleting an absent director succeeds."""
    await registry.delete_director(name)
    return Response(status_code=204)
