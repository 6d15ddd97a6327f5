"""
Slug Service

Provides functionality to generate URL-friendly slugs from titles and names.
Slugs identify songs, artists, composers and copyright owners in public URLs
and are unique per entity type.
"""

import re
import unicodedata

import structlog

logger = structlog.get_logger(__name__)

_NON_WORD = re.compile(r"[^\w\s-]", re.ASCII)
_SEPARATORS = re.compile(r"[\s_]+")
_HYPHEN_RUNS = re.compile(r"-+")


class SlugService:
    """
    Service for generating URL-friendly slugs from display names.

    The transformation is pure: the same input always yields the same slug,
    and feeding a slug back in returns it unchanged.
    """

    MAX_SLUG_LENGTH = 200

    def generate_slug(self, text: str) -> str:
        """
        Generate URL-friendly slug from a title or name.

        Processing steps:
        1. Fold accented characters to their ASCII base (NFD normalization)
        2. Convert to lowercase and trim
        3. Remove characters other than word characters, whitespace and hyphens
        4. Replace runs of whitespace and underscores with a single hyphen
        5. Collapse multiple consecutive hyphens
        6. Strip leading/trailing hyphens
        7. Truncate to the maximum length

        Args:
            text: Title or name to convert

        Returns:
            Slug containing only lowercase letters, digits and hyphens. May be
            empty when the input has no ASCII-representable word characters.
        """
        if not text:
            return ""

        # Normalize unicode characters (e.g., é -> e)
        slug = unicodedata.normalize("NFD", text)
        slug = slug.encode("ascii", "ignore").decode("ascii")

        slug = slug.lower().strip()
        slug = _NON_WORD.sub("", slug)
        slug = _SEPARATORS.sub("-", slug)
        slug = _HYPHEN_RUNS.sub("-", slug)
        slug = slug.strip("-")

        if len(slug) > self.MAX_SLUG_LENGTH:
            slug = slug[: self.MAX_SLUG_LENGTH].rstrip("-")

        logger.debug("slug.generated", text=text[:50], slug=slug)
        return slug

    def resolve_slug(self, explicit: str | None, fallback_text: str) -> str:
        """
        Pick the slug for a create/update request.

        An explicit slug is normalized the same way as a derived one so stored
        slugs are always URL-safe; without one the slug is derived from the
        title or name.
        """
        source = explicit if explicit else fallback_text
        return self.generate_slug(source)


# Singleton instance for convenience
slug_service = SlugService()


def generate_slug(text: str) -> str:
    return slug_service.generate_slug(text)
