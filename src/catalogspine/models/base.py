"""Base model shared by catalogspine's pydantic models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class CatalogSpineModel(BaseModel):
    """Base model with standard configuration."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        validate_assignment=True,
        extra="forbid",
    )
