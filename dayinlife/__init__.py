"""
Day-in-a-Life aggregation engine.

Merges check-ins, fitness activities, daily health metrics and weather
into one chronological narrative for a single user and calendar date.

Structure:
- domain/: Timeline core, weather resolution, metric records
- application/: Day aggregation use case (concurrent source fan-out)
- infrastructure/: External concerns (Mapbox, Open-Meteo, MongoDB, cache)
- tests/: Test suite
"""

__version__ = "1.0.0"
