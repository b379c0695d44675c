"""
Shared value objects.

Immutable, validated domain primitives.
Following DDD value object pattern.
"""

from __future__ import annotations

import datetime as _dt

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from dayinlife.domain.shared.errors import ValidationError


class UserId(BaseModel):
    """
    User ID value object.

    Wraps string ID with validation and type safety.

    Example:
        >>> user_id = UserId(value="user_123")
        >>> assert str(user_id) == "user_123"
        >>> user_id2 = UserId.from_string("user_456")
    """

    model_config = ConfigDict(frozen=True)

    value: str = Field(..., min_length=1, description="User identifier")

    @field_validator("value")
    @classmethod
    def not_empty(cls, v: str) -> str:
        """Ensure not empty or whitespace."""
        if not v.strip():
            raise ValueError("UserId cannot be empty or whitespace")
        return v.strip()

    def __str__(self) -> str:
        """String representation."""
        return self.value

    def __repr__(self) -> str:
        """Debug representation."""
        return f"UserId('{self.value}')"

    def __hash__(self) -> int:
        """Allow use as dict key."""
        return hash(self.value)

    @classmethod
    def from_string(cls, s: object) -> UserId:
        """Create from string.

        Raises:
            ValidationError: If the identifier is missing or blank
        """
        if s is None or not str(s).strip():
            raise ValidationError("userId is required")
        return cls(value=str(s))


class DayDate(BaseModel):
    """
    Calendar date value object (YYYY-MM-DD).

    Example:
        >>> day = DayDate.parse("2025-01-15")
        >>> start, end = day.utc_bounds()
        >>> assert start.isoformat() == "2025-01-15T00:00:00+00:00"
    """

    model_config = ConfigDict(frozen=True)

    value: str = Field(..., pattern=r"^\d{4}-\d{2}-\d{2}$", description="ISO calendar date")

    @field_validator("value")
    @classmethod
    def real_date(cls, v: str) -> str:
        """Reject well-formed but impossible dates (e.g. 2025-02-30)."""
        _dt.date.fromisoformat(v)
        return v

    def __str__(self) -> str:
        """String representation."""
        return self.value

    def __repr__(self) -> str:
        """Debug representation."""
        return f"DayDate('{self.value}')"

    def __hash__(self) -> int:
        """Allow use as dict key."""
        return hash(self.value)

    def as_date(self) -> _dt.date:
        """Return as datetime.date."""
        return _dt.date.fromisoformat(self.value)

    def utc_bounds(self) -> tuple[_dt.datetime, _dt.datetime]:
        """First and last instant of the day in UTC (millisecond precision)."""
        day = self.as_date()
        start = _dt.datetime.combine(day, _dt.time.min, tzinfo=_dt.timezone.utc)
        end = _dt.datetime.combine(day, _dt.time(23, 59, 59, 999000), tzinfo=_dt.timezone.utc)
        return start, end

    @classmethod
    def parse(cls, s: object) -> DayDate:
        """Create from string.

        Raises:
            ValidationError: If missing or not a valid YYYY-MM-DD date
        """
        if s is None or s == "":
            raise ValidationError("date is required")
        if isinstance(s, _dt.datetime):
            s = s.date()
        if isinstance(s, _dt.date):
            s = s.isoformat()
        try:
            return cls(value=str(s))
        except PydanticValidationError as e:
            raise ValidationError("Invalid date format: must be YYYY-MM-DD") from e


class Coordinates(BaseModel):
    """
    Geographic point in decimal degrees.

    Example:
        >>> point = Coordinates(latitude=45.46, longitude=9.19)
        >>> assert point.as_tuple() == (45.46, 9.19)
    """

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)

    def as_tuple(self) -> tuple[float, float]:
        """(latitude, longitude) pair."""
        return self.latitude, self.longitude

    @classmethod
    def from_pair(cls, latitude: float, longitude: float) -> Coordinates:
        """Create from a latitude/longitude pair.

        Raises:
            ValidationError: If either value is out of range
        """
        try:
            return cls(latitude=latitude, longitude=longitude)
        except PydanticValidationError as e:
            raise ValidationError(
                f"Invalid coordinates: ({latitude}, {longitude})"
            ) from e
