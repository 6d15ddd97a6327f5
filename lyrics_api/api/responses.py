from __future__ import annotations

from typing import Any, Mapping

from fastapi.responses import JSONResponse

NO_STORE = "no-store"


class CatalogJSONResponse(JSONResponse):
    """JSON response with an explicit charset and an open CORS origin."""

    media_type = "application/json; charset=utf-8"

    def __init__(
        self,
        content: Any,
        status_code: int = 200,
        headers: Mapping[str, str] | None = None,
        **kwargs: Any,
    ) -> None:
        merged = {"Access-Control-Allow-Origin": "*"}
        if headers:
            merged.update(headers)
        super().__init__(content, status_code=status_code, headers=merged, **kwargs)


def error_response(
    status_code: int,
    message: str,
    headers: Mapping[str, str] | None = None,
) -> CatalogJSONResponse:
    merged = dict(headers or {})
    merged["Cache-Control"] = NO_STORE
    return CatalogJSONResponse({"error": message}, status_code=status_code, headers=merged)
