"""Per-user resource API: cached reads and cache invalidation.

One parameterised route per operation covers every resource kind
(user-prompts, spotify-stats, selected-tracks, user-profile).
"""

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from app.api.dependencies import get_resource_service
from app.application.use_cases.resources import ResourceService
from app.domain.enums import ResourceKind

router = APIRouter()


def _resource_kind(resource: str) -> ResourceKind:
    try:
        return ResourceKind(resource)
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Unknown resource: {resource}") from None


@router.delete("/invalidate-{resource}-cache/{user_id}")
async def invalidate_resource_cache(
    resource: str,
    user_id: str,
    service: ResourceService = Depends(get_resource_service),
) -> dict[str, str]:
    """Delete the cached resource for user_id; the next read goes to the database."""
    kind = _resource_kind(resource)
    await service.invalidate_resource(kind=kind, user_id=user_id)
    return {"message": f"{kind.value} cache invalidated", "user_id": user_id}


@router.get("/{resource}/{user_id}")
async def get_resource(
    resource: str,
    user_id: str,
    service: ResourceService = Depends(get_resource_service),
) -> Response:
    """Return the resource for user_id from cache, loading it from the database on a miss."""
    kind = _resource_kind(resource)
    value = await service.fetch_resource(kind=kind, user_id=user_id)
    return Response(content=service.to_json(kind, value), media_type="application/json")
