"""
Configuration settings for grid interpolation.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from bathygrid.core.grid import InterpType


class GridSettings(BaseModel):
    """Settings applied to both axes of a grid."""

    interp_type: InterpType = Field(
        default=InterpType.PCHIP, description="Interpolation algorithm for both axes"
    )
    edge_limit: bool = Field(default=True, description="Clamp out-of-range queries to the axes")
    copy_data: bool = Field(default=True, description="Take an owned copy of the grid values")

    model_config = {"extra": "forbid", "frozen": True}

    @field_validator("interp_type", mode="before")
    @classmethod
    def _parse_interp_type(cls, value: Any) -> InterpType:
        return InterpType.parse(value)
