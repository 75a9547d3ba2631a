"""Pydantic models for API payloads."""

import base64
import binascii

from pydantic import BaseModel, Field, field_validator


class EntryCreate(BaseModel):
    """Payload for logging a new entry."""

    type: str
    date: str
    subtype: str | None = None
    notes: str = ""
    duration_minutes: int | None = Field(default=None, ge=0)
    photo_base64: str | None = None
    captured_at: str | None = None

    @field_validator("photo_base64")
    @classmethod
    def _check_base64(cls, value: str | None) -> str | None:
        if value is None:
            return None
        try:
            base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ValueError("photo_base64 is not valid base64") from exc
        return value

    def photo_bytes(self) -> bytes | None:
        if self.photo_base64 is None:
            return None
        return base64.b64decode(self.photo_base64)


class WeightValue(BaseModel):
    """Weight measurement payload."""

    value: float = Field(gt=0)
    unit: str = "lbs"


class SummaryUpdate(BaseModel):
    """Partial daily summary update; omitted fields are left unchanged."""

    water_oz: int | None = Field(default=None, ge=0)
    weight: WeightValue | None = None
    sleep: object | None = None
    notes: str | None = None

    def changes(self) -> dict[str, object]:
        return self.model_dump(exclude_unset=True)


class WaterAdd(BaseModel):
    """Quick water increment."""

    oz: int = Field(gt=0)
