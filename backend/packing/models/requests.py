"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class AnalyzeRequest(BaseModel):
    positions: list[tuple[float, float]] = Field(..., min_length=1, description="Disk centres")
    contacts: list[tuple[int, int]] = Field(default_factory=list, description="Contact pairs (i, j)")
    radius: float = Field(default=1.0, gt=0, description="Common disk radius")
    lattice_contacts: list[tuple[int, int]] = Field(
        default_factory=list,
        description="Contacts through a lattice translation (validated only)",
    )
    lattice_shifts: list[tuple[float, float]] = Field(
        default_factory=list,
        description="Translation vector of each lattice contact",
    )
