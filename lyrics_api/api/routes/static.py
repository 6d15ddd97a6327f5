"""Fallback to the static asset store for paths no API route claims.

This router must be included last: its single route matches every path.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.routing import APIRoute
from starlette.responses import Response
from starlette.routing import Match

from ...core.config import get_settings
from ...services.assets import StaticAssetStore
from ..dependencies import get_asset_store

_READ_METHODS = frozenset({"GET", "HEAD"})


class StaticFallbackRoute(APIRoute):
    """Catch-all that only ever matches reads.

    Non-read requests see no match at all, so unknown paths answer 404 while a
    known API path hit with the wrong method still answers 405.
    """

    def matches(self, scope: dict[str, Any]) -> tuple[Match, dict[str, Any]]:
        if scope["type"] == "http" and scope["method"] not in _READ_METHODS:
            return Match.NONE, {}
        return super().matches(scope)


router = APIRouter(route_class=StaticFallbackRoute)


def _has_read_route(request: Request) -> bool:
    scope = {**request.scope, "method": "GET"}
    for route in request.app.router.routes:
        if isinstance(route, StaticFallbackRoute):
            continue
        match, _ = route.matches(scope)
        if match is Match.FULL:
            return True
    return False


@router.api_route("/{full_path:path}", methods=["GET", "HEAD"], include_in_schema=False)
async def serve_static(
    full_path: str,
    request: Request,
    store: StaticAssetStore = Depends(get_asset_store),
) -> Response:
    prefix = get_settings().api_prefix.rstrip("/")
    path = request.url.path
    if prefix and (path == prefix or path.startswith(f"{prefix}/")):
        if request.method == "HEAD" and _has_read_route(request):
            raise HTTPException(
                status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
                detail="Method not allowed",
                headers={"Allow": "GET"},
            )
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
    return store.response_for(path)
