"""Static asset resolution for every path the API routes do not claim."""

from __future__ import annotations

from pathlib import Path

from starlette.responses import FileResponse, PlainTextResponse, Response

# Detail pages share one HTML shell per entity type; the client reads the
# slug from the browser URL.
SHELL_REWRITES: tuple[tuple[str, str], ...] = (
    ("/song/", "/songview.html"),
    ("/artist/", "/artistview.html"),
    ("/composer/", "/composerview.html"),
    ("/copyright-owner/", "/copyrightownerview.html"),
)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}


class StaticAssetStore:
    """Serves files from a directory, with shell rewrites and a 404 page."""

    def __init__(
        self,
        root: str | Path,
        *,
        not_found_page: str = "/404.html",
        cache_max_age: int = 3600,
    ) -> None:
        self._root = Path(root).resolve()
        self._not_found_page = not_found_page
        self._cache_max_age = cache_max_age

    @staticmethod
    def rewrite(path: str) -> str:
        for prefix, shell in SHELL_REWRITES:
            if path.startswith(prefix):
                return shell
        return path

    def resolve(self, path: str) -> Path | None:
        """Map a URL path to an existing file under the root, or ``None``."""

        candidate = (self._root / path.lstrip("/")).resolve()
        if candidate != self._root and not candidate.is_relative_to(self._root):
            return None
        if candidate.is_dir():
            candidate = candidate / "index.html"
        return candidate if candidate.is_file() else None

    def response_for(self, path: str) -> Response:
        target = self.resolve(self.rewrite(path))
        if target is not None:
            headers = dict(SECURITY_HEADERS)
            headers["Cache-Control"] = f"public, max-age={self._cache_max_age}"
            return FileResponse(target, headers=headers)

        not_found = self.resolve(self._not_found_page)
        if not_found is not None:
            return FileResponse(not_found, status_code=404, headers=dict(SECURITY_HEADERS))
        return PlainTextResponse("Page not found", status_code=404)
