"""
Pydantic schemas for the Eventra API.
"""

from __future__ import annotations

import re
from datetime import date, datetime, time
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

# One fixed layout for every stored value, so dateTime strings sort
# chronologically when compared as text.
DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")
TIME_PATTERN = re.compile(r"\d{2}:\d{2}(:\d{2})?")
DATE_TIME_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}(:\d{2})?")


def _check_date(value: str) -> str:
    if not DATE_PATTERN.fullmatch(value):
        raise ValueError("Date must be formatted as YYYY-MM-DD")
    date.fromisoformat(value)
    return value


def _check_time(value: str) -> str:
    if value:
        if not TIME_PATTERN.fullmatch(value):
            raise ValueError("Time must be formatted as HH:MM or HH:MM:SS")
        time.fromisoformat(value)
    return value


def _check_date_time(value: str) -> str:
    if not DATE_TIME_PATTERN.fullmatch(value):
        raise ValueError("dateTime must be formatted as YYYY-MM-DDTHH:MM[:SS]")
    datetime.fromisoformat(value)
    return value


def combine_date_time(day: str, clock: str) -> str:
    """Build the sortable ``dateTime`` string the UI would send."""
    return _check_date_time(f"{day}T{clock or '00:00'}")


class EventCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = ""
    date: str
    time: str = ""
    dateTime: Optional[str] = None

    @field_validator("date")
    @classmethod
    def validate_date(cls, value: str) -> str:
        return _check_date(value)

    @field_validator("time")
    @classmethod
    def validate_time(cls, value: str) -> str:
        return _check_time(value)

    @field_validator("dateTime")
    @classmethod
    def validate_date_time(cls, value: Optional[str]) -> Optional[str]:
        return _check_date_time(value) if value is not None else None

    @model_validator(mode="after")
    def fill_date_time(self) -> "EventCreate":
        if not self.dateTime:
            self.dateTime = combine_date_time(self.date, self.time)
        return self


class EventUpdate(BaseModel):
    """Partial event body. Every field is optional; none may be null."""

    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    dateTime: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("Field may be omitted but not null")
        return value

    @field_validator("date")
    @classmethod
    def validate_date(cls, value: str) -> str:
        return _check_date(value)

    @field_validator("time")
    @classmethod
    def validate_time(cls, value: str) -> str:
        return _check_time(value)

    @field_validator("dateTime")
    @classmethod
    def validate_date_time(cls, value: str) -> str:
        return _check_date_time(value)


class EventResponse(BaseModel):
    id: str
    title: str
    description: str
    date: str
    time: str
    dateTime: str


class ValidationErrorItem(BaseModel):
    loc: list[str | int]
    msg: str
    type: str


class ValidationErrorResponse(BaseModel):
    detail: str
    errors: list[ValidationErrorItem]


class HealthResponse(BaseModel):
    status: Literal["ok"]
    version: str
    timestamp: str
