# safarsorted/schemas/inquiry.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator

INQUIRY_STATUSES = ("new", "contacted", "booked")


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _loose_int(value: Any) -> int | None:
    """Whole number from an int, integral float or digit string; None otherwise."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().lstrip("+-").isdigit():
        return int(value.strip())
    return None


class InquiryRecord(BaseModel):
    """
    One travel lead as stored on disk and returned to the admin.
    Reading is forgiving: older files may hold `travelers: null` or
    non-string values, and unknown keys are kept so a rewrite loses nothing.
    """
    id: int = Field(ge=1)
    name: str = ""
    phone: str = ""
    email: str = ""
    travelers: int | None = None
    destination: str = ""
    travel_date: str | None = None
    traveler_type: str | None = None
    message: str = ""
    status: str = "new"
    notes: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(extra="allow")

    @field_validator("name", "phone", "email", "destination", "message", mode="before")
    @classmethod
    def _text(cls, v: Any) -> str:
        if v is None:
            return ""
        return v if isinstance(v, str) else str(v)

    @field_validator("travel_date", "traveler_type", "notes", mode="before")
    @classmethod
    def _optional_text(cls, v: Any) -> str | None:
        if v is None or isinstance(v, str):
            return v
        return str(v)

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, v: Any) -> str:
        if not v:
            return "new"
        return v if isinstance(v, str) else str(v)

    @field_validator("travelers", mode="before")
    @classmethod
    def _travelers(cls, v: Any) -> int | None:
        return _loose_int(v)

    @field_validator("created_at", "updated_at")
    @classmethod
    def _utc(cls, v: datetime) -> datetime:
        return _as_utc(v)


class InquiryDocument(BaseModel):
    """The whole persisted aggregate: every inquiry plus the id counter."""
    inquiries: list[InquiryRecord] = Field(default_factory=list)
    last_id: int = Field(default=0, ge=0, alias="lastId")
    # stored entries that could not be read as InquiryRecord; written back as-is
    _unparsed: list[Any] = PrivateAttr(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)


class InquiryCreate(BaseModel):
    """
    Public form payload. Everything is optional at the schema level because
    required-field checks live in the service (they answer 400, not 422).
    """
    name: str | None = None
    phone: str | None = None
    travelers: int | float | str | None = None
    destination: str | None = None
    travel_date: str | None = Field(default=None, alias="travelDate")
    traveler_type: str | None = Field(default=None, alias="travelerType")
    email: str | None = None
    message: str | None = None

    model_config = ConfigDict(populate_by_name=True)


class InquiryUpdate(BaseModel):
    status: str | None = None
    notes: str | None = None


class InquiryCreated(BaseModel):
    success: bool = True
    message: str = "Inquiry submitted successfully"
    id: int


class InquiryList(BaseModel):
    inquiries: list[InquiryRecord]


class InquiryUpdated(BaseModel):
    success: bool = True
    message: str = "Inquiry updated"
    inquiry: InquiryRecord


class InquiryDeleted(BaseModel):
    success: bool = True
    message: str = "Inquiry deleted"


class InquiryStats(BaseModel):
    total: int = 0
    new: int = 0
    contacted: int = 0
    booked: int = 0
    this_week: int = Field(default=0, alias="thisWeek")

    model_config = ConfigDict(populate_by_name=True)
