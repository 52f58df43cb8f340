"""
Shared type definitions for schemas.

Centralizes common type annotations used across the operation schemas.

Layering:
- This module provides FOUNDATION types (BaseStrictModel, PermissiveModel, primitives)
- schemas/base.py re-exports BaseStrictModel as StrictModel for operation results
"""

from __future__ import annotations

import pydantic

# ==============================================================================
# Base Strict Model (Foundation)
# ==============================================================================


class BaseStrictModel(pydantic.BaseModel):
    """
    Foundation strict model - operation schemas inherit from this.

    Uses extra='forbid' to reject unknown fields - any field not modeled
    causes immediate validation failure (fail-fast).
    """

    model_config = pydantic.ConfigDict(
        extra='forbid',  # Reject unknown fields (fail-fast)
        strict=True,  # Strict type coercion
        frozen=True,  # Immutable after creation
    )


# ==============================================================================
# Permissive Model (Foundation)
# ==============================================================================


class PermissiveModel(pydantic.BaseModel):
    """
    Foundation permissive model for files written by Claude Code.

    Symmetry with BaseStrictModel:
    - BaseStrictModel: extra='forbid' (rejects unknown fields)
    - PermissiveModel: extra='allow' (accepts unknown fields)

    Used for on-disk JSON we only read a few fields from (sessions-index.json),
    where Claude Code is free to add fields between versions.
    """

    model_config = pydantic.ConfigDict(
        extra='allow',  # Accept unknown fields (graceful fallback)
        strict=True,  # Strict type coercion for known fields
        frozen=True,  # Immutable after creation
    )

    def get_extra_fields(self) -> dict[str, object]:
        """Get extra fields captured by this permissive model."""
        return dict(self.__pydantic_extra__) if self.__pydantic_extra__ else {}


# ==============================================================================
# Primitive Types
# ==============================================================================

type PathStr = str
"""A filesystem path (file or directory) as a string."""

type LineRange = tuple[int, int]
"""Half-open (start, end) byte offsets of one non-empty line, newline excluded."""
