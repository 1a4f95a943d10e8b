"""Pydantic errors as railway ValidationErrors

Each pydantic error entry becomes a message on the field named by its
location path (``user.addresses[0].street``); entries on the same path
share one FieldError.
"""
from __future__ import annotations

from typing import Any, Sequence

import pydantic

from railway.errors.types import FieldError, ValidationError

ROOT_PATH = "$"


def format_path(loc: Sequence[str | int]) -> str:
    """Format Pydantic location tuple as JSON path."""
    if not loc:
        return ROOT_PATH
    parts: list[str] = []
    for segment in loc:
        if isinstance(segment, int):
            parts.append(f"[{segment}]")
        elif parts:
            parts.append(f".{segment}")
        else:
            parts.append(str(segment))
    return "".join(parts)


def field_error_from_pydantic(error: dict[str, Any]) -> FieldError:
    """Create from one entry of ``pydantic.ValidationError.errors()``."""
    message = error.get("msg") or "Validation failed"
    return FieldError(format_path(error.get("loc", ())), (message,))


def validation_error_from_pydantic(
    exc: pydantic.ValidationError,
    *,
    instance: str | None = None,
) -> ValidationError:
    """Convert a pydantic ValidationError into one railway ValidationError."""
    return ValidationError(
        detail=f"{exc.title} validation failed",
        instance=instance,
        field_errors=tuple(field_error_from_pydantic(e) for e in exc.errors()),
    )
