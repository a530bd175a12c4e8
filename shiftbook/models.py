"""Data models for shift records and aggregation results.

Records arrive from storage in the camelCase wire shape and are
normalized once, on construction: dates become naive local datetimes and
optional money fields default to zero. Everything downstream works on
fully populated records.
"""

import uuid
from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


def _new_id() -> str:
    return uuid.uuid4().hex


def parse_timestamp(value: Any) -> datetime:
    """Parse a stored timestamp into a naive local datetime.

    Offsets (including a trailing ``Z``) are converted to local time.
    A date-only value means local midnight.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    else:
        raise ValueError(f"Unsupported date value: {value!r}")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


class Period(str, Enum):
    """Aggregation granularity."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"


class Fine(BaseModel):
    """Named penalty attached to a shift."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_new_id)
    name: str = ""
    amount: float = 0.0


class Shift(BaseModel):
    """One recorded work session.

    Distance and range values are in km, money fields are in the
    driver's currency. No range checks are applied: an inverted
    odometer simply yields a negative distance.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(default_factory=_new_id)
    date: datetime

    odometer_start: float = Field(0.0, alias="odometerStart")
    odometer_end: float = Field(0.0, alias="odometerEnd")
    range_start: float = Field(0.0, alias="rangeStart")
    range_end: float = Field(0.0, alias="rangeEnd")

    card_earnings: float = Field(0.0, alias="cardEarnings")
    cash_earnings: float = Field(0.0, alias="cashEarnings")
    tips: float = 0.0
    bonuses: float = 0.0

    fuel_cost: float = Field(0.0, alias="fuelCost")
    yandex_commission: float = Field(0.0, alias="yandexCommission")
    park_commission: float = Field(0.0, alias="parkCommission")
    rent_cost: float = Field(0.0, alias="rentCost")
    deduct_rent: bool = Field(False, alias="deductRent")
    self_employed_tax: float = Field(0.0, alias="selfEmployedTax")

    fines: list[Fine] = []

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, value: Any) -> datetime:
        return parse_timestamp(value)

    @field_validator("tips", "bonuses", "self_employed_tax", mode="before")
    @classmethod
    def _default_optional_money(cls, value: Any) -> Any:
        # Older records predate these fields or carry null.
        return 0.0 if value is None else value

    @field_validator("fines", mode="before")
    @classmethod
    def _default_fines(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_serializer("date", when_used="json")
    def _serialize_date(self, value: datetime) -> str:
        return value.isoformat()

    def to_record(self) -> dict[str, Any]:
        """Wire representation used for persistence."""
        return self.model_dump(by_alias=True, mode="json")


def normalize_shifts(raw: Any) -> list[Shift]:
    """Turn a decoded collection into fully populated shifts.

    Raises ``pydantic.ValidationError`` or ``TypeError`` when the
    collection is not a list of shift records.
    """
    if not isinstance(raw, list):
        raise TypeError(f"Expected a list of shift records, got {type(raw).__name__}")
    return [Shift.model_validate(item) for item in raw]


class PeriodSummary(BaseModel):
    """Totals over the shifts of one period."""

    gross: float = 0.0
    net: float = 0.0
    km: float = 0.0
    range_change: float = 0.0
    fuel_cost: float = 0.0
    commissions: float = 0.0
    fines: float = 0.0
    tax: float = 0.0


class ChartBucket(BaseModel):
    """One calendar-aligned slot of a chart series."""

    bucket_start: datetime
    net: float = 0.0
    label: str = ""


class PeriodReport(BaseModel):
    """Detail view of a single period."""

    period: Period
    start: datetime
    end: datetime
    title: str
    header: str
    summary: PeriodSummary
    shifts: list[Shift] = []


class PeriodHeadline(BaseModel):
    """Headline figure shown above the chart."""

    period: Period
    net: float = 0.0
    shift_count: int = 0
    caption: str = ""
