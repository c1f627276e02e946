"""Insight webhook response models.

The analysis webhook has answered in several envelopes over time:

* ``BARE``: ``{"alerts": [...], "predictions": [...], "summary": {...}}``
* ``RECOMMENDATIONS``: the bare object under a ``recommendations`` key
* ``ARRAY``: ``[{"recommendations": {...}}, ...]``
* ``OUTPUT``: the bare object under an ``output`` key

:func:`decode_insights` tries them in that order and tags the result
with the envelope that matched.
"""

from __future__ import annotations

import enum
from collections.abc import Callable
from typing import Any

from pydantic import Field, model_validator

from motostock.exceptions import MotostockParseError
from motostock.models._base import MotostockBaseModel

_REPORT_KEYS = frozenset({"alerts", "predictions", "summary"})


class InsightShape(enum.StrEnum):
    BARE = "bare"
    OUTPUT = "output"
    RECOMMENDATIONS = "recommendations"
    ARRAY = "array"


class InsightMessage(MotostockBaseModel):
    """One alert or prediction line."""

    message: str = ""
    raw: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _wrap_and_stash(cls, values: Any) -> Any:
        if isinstance(values, str):
            return {"message": values, "raw": {"message": values}}
        if not isinstance(values, dict):
            return values
        cleaned = dict(values)
        if cleaned.get("message") is None:
            cleaned["message"] = ""
        else:
            cleaned["message"] = str(cleaned["message"])
        if "raw" not in values:
            cleaned["raw"] = dict(values)
        return cleaned


class InsightReport(MotostockBaseModel):
    """Alerts, predictions and a free-form summary from the analysis webhook."""

    alerts: list[InsightMessage] = Field(default_factory=list)
    predictions: list[InsightMessage] = Field(default_factory=list)
    summary: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        return {key: value for key, value in values.items() if value is not None}


class DecodedInsights(MotostockBaseModel):
    shape: InsightShape
    report: InsightReport


def _is_report(value: Any) -> bool:
    return isinstance(value, dict) and bool(_REPORT_KEYS & value.keys())


def _match_bare(payload: Any) -> dict[str, Any] | None:
    return payload if _is_report(payload) else None


def _match_output(payload: Any) -> dict[str, Any] | None:
    if isinstance(payload, dict) and _is_report(payload.get("output")):
        return payload["output"]
    return None


def _match_recommendations(payload: Any) -> dict[str, Any] | None:
    if isinstance(payload, dict) and _is_report(payload.get("recommendations")):
        return payload["recommendations"]
    return None


def _match_array(payload: Any) -> dict[str, Any] | None:
    if isinstance(payload, list) and payload:
        return _match_recommendations(payload[0])
    return None


_DECODERS: tuple[tuple[InsightShape, Callable[[Any], dict[str, Any] | None]], ...] = (
    (InsightShape.BARE, _match_bare),
    (InsightShape.RECOMMENDATIONS, _match_recommendations),
    (InsightShape.ARRAY, _match_array),
    (InsightShape.OUTPUT, _match_output),
)


def decode_insights(payload: Any) -> DecodedInsights:
    """Decode a webhook reply into an :class:`InsightReport`.

    Raises
    ------
    MotostockParseError
        If no known envelope matches or the report body is invalid.
    """
    for shape, match in _DECODERS:
        body = match(payload)
        if body is None:
            continue
        try:
            report = InsightReport.model_validate(body)
        except ValueError as exc:
            raise MotostockParseError(f"Invalid {shape.value} insight report: {exc}") from exc
        return DecodedInsights(shape=shape, report=report)
    raise MotostockParseError(f"Unrecognised insight response shape: {type(payload).__name__}")
