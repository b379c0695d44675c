"""
Domain exceptions.

Typed exceptions for explicit error handling.
Only ValidationError is allowed to escape a day aggregation; every
other error is absorbed at the source or event boundary.
"""

from __future__ import annotations


# ═══════════════════════════════════════════════════════════
# BASE EXCEPTION
# ═══════════════════════════════════════════════════════════


class DomainError(Exception):
    """
    Base exception for all domain errors.

    All domain-specific exceptions inherit from this.
    Allows catching all domain errors with single except clause.
    """

    pass


# ═══════════════════════════════════════════════════════════
# VALIDATION EXCEPTIONS
# ═══════════════════════════════════════════════════════════


class ValidationError(DomainError):
    """
    Input validation failed.

    Raised when:
    - Missing user identifier
    - Date not in YYYY-MM-DD format
    - Coordinates out of range
    - Weather requested for a future date

    Example:
        >>> raise ValidationError("Invalid date format: must be YYYY-MM-DD")
    """

    pass


# ═══════════════════════════════════════════════════════════
# EXTERNAL SERVICE EXCEPTIONS
# ═══════════════════════════════════════════════════════════


class ExternalServiceError(DomainError):
    """
    External service call failed.

    Base class for all external service errors.

    Raised when:
    - API call fails
    - Network error
    - Service unavailable

    Example:
        >>> raise ExternalServiceError("Open-Meteo API error: 502")
    """

    pass


class TimeoutError(ExternalServiceError):  # noqa: A001
    """
    API call timed out.

    Example:
        >>> raise TimeoutError("Open-Meteo API timeout after 10s")
    """

    pass


class WeatherUnavailableError(ExternalServiceError):
    """
    Weather archive returned no data for the requested day.

    Example:
        >>> raise WeatherUnavailableError(
        ...     "No weather data available for the specified date"
        ... )
    """

    pass


# ═══════════════════════════════════════════════════════════
# INFRASTRUCTURE EXCEPTIONS
# ═══════════════════════════════════════════════════════════


class InfrastructureError(DomainError):
    """
    Infrastructure layer error.

    Base class for database, cache, etc. errors.
    """

    pass


class DatabaseError(InfrastructureError):
    """
    Database operation failed.

    Example:
        >>> raise DatabaseError("MongoDB connection lost")
    """

    pass


class CacheError(InfrastructureError):
    """
    Cache operation failed.

    Example:
        >>> raise CacheError("Weather cache write failed")
    """

    pass
