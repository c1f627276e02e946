"""Base model and enums shared by the motostock models.

Every record-like model inherits from :class:`MotostockBaseModel`,
which freezes instances and ignores unknown keys so that cached
payloads written by older versions still validate.
"""

from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict


class CategoryId(enum.StrEnum):
    """Accessory category identifiers."""

    SAFETY = "safety"
    ENGINE = "engine"
    MAINTENANCE = "maintenance"
    COMFORT = "comfort"
    TECH = "tech"

    @classmethod
    def _missing_(cls, value: object) -> CategoryId:
        # Unknown categories collapse to maintenance.
        return cls.MAINTENANCE


class Demand(enum.StrEnum):
    HIGH = "High"
    NORMAL = "Normal"

    @classmethod
    def _missing_(cls, value: object) -> Demand:
        return cls.NORMAL


class MotostockBaseModel(BaseModel):
    """Base for motostock data models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )
