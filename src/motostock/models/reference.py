"""Reference table models (cities and categories)."""

from __future__ import annotations

from motostock.models._base import CategoryId, MotostockBaseModel


class CityRef(MotostockBaseModel):
    """A known city with its region and coordinates."""

    name: str
    region: str
    lat: float
    lng: float


class CategoryRef(MotostockBaseModel):
    """A category with its display label and color."""

    id: CategoryId
    label: str
    color: str
