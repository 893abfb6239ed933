"""Pydantic schemas for tile geometry.

``CornerElevations`` is shared by the tile catalog and the elevation
classifier, so it lives beside the grid rather than in the top-level
schemas module.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CornerElevations(BaseModel):
    """Height of each tile corner in inches. All zero means a flat tile."""

    model_config = ConfigDict(frozen=True)

    nw: float = Field(0, ge=0, description="North-west corner height")
    ne: float = Field(0, ge=0, description="North-east corner height")
    sw: float = Field(0, ge=0, description="South-west corner height")
    se: float = Field(0, ge=0, description="South-east corner height")

    @property
    def peak(self) -> float:
        """Highest corner of the tile."""
        return max(self.nw, self.ne, self.sw, self.se)
