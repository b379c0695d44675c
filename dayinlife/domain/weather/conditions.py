"""
WMO weather interpretation codes.

Descriptions follow the Open-Meteo documentation
(https://open-meteo.com/en/docs).
"""

from typing import Optional

WMO_CODE_DESCRIPTIONS: dict[int, str] = {
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Fog",
    48: "Depositing rime fog",
    51: "Drizzle: Light intensity",
    53: "Drizzle: Moderate intensity",
    55: "Drizzle: Dense intensity",
    56: "Freezing Drizzle: Light intensity",
    57: "Freezing Drizzle: Dense intensity",
    61: "Rain: Slight intensity",
    63: "Rain: Moderate intensity",
    65: "Rain: Heavy intensity",
    66: "Freezing Rain: Light intensity",
    67: "Freezing Rain: Heavy intensity",
    71: "Snow fall: Slight intensity",
    73: "Snow fall: Moderate intensity",
    75: "Snow fall: Heavy intensity",
    77: "Snow grains",
    80: "Rain showers: Slight intensity",
    81: "Rain showers: Moderate intensity",
    82: "Rain showers: Violent intensity",
    85: "Snow showers: Slight intensity",
    86: "Snow showers: Heavy intensity",
    95: "Thunderstorm",
    96: "Thunderstorm with slight hail",
    99: "Thunderstorm with heavy hail",
}

UNKNOWN_CONDITION = "Unknown"
DEFAULT_ICON = "🌤"

# Checked in order: "partly cloudy" must not fall through to "cloud",
# and "snow grains" must not fall through to "rain".
_ICON_KEYWORDS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("clear",), "☀️"),
    (("partly",), "🌤"),
    (("cloud", "overcast"), "☁️"),
    (("snow",), "🌨"),
    (("rain", "drizzle"), "🌧"),
    (("thunder",), "⛈"),
)


def describe(code: Optional[int]) -> str:
    """Full WMO description, "Unknown" for missing or unmapped codes.

    Example:
        >>> describe(61)
        'Rain: Slight intensity'
    """
    if code is None:
        return UNKNOWN_CONDITION
    return WMO_CODE_DESCRIPTIONS.get(code, UNKNOWN_CONDITION)


def condition_label(code: Optional[int]) -> str:
    """Short label: the description without its intensity qualifier.

    Example:
        >>> condition_label(63)
        'Rain'
        >>> condition_label(2)
        'Partly cloudy'
    """
    return describe(code).split(":", 1)[0].strip()


def condition_to_icon(condition: str) -> str:
    """Emoji icon for a condition description or label."""
    lowered = condition.lower()
    for keywords, icon in _ICON_KEYWORDS:
        if any(k in lowered for k in keywords):
            return icon
    return DEFAULT_ICON
