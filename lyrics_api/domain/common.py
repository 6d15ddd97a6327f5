from __future__ import annotations

from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict


def blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


# Optional free text where an empty or whitespace-only string means "not set".
OptionalText = Annotated[Optional[str], BeforeValidator(blank_to_none)]


class RequestShape(BaseModel):
    """Base for JSON request bodies: trimmed strings, unknown fields rejected."""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


class MutationResponse(BaseModel):
    success: bool = True
    id: Optional[int] = None
    slug: Optional[str] = None


# Largest id SQLite (and any BIGINT column) can bind.
MAX_ROW_ID = 2**63 - 1
