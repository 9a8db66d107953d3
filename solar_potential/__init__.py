"""
Solar potential API package.

Retrieves monthly solar irradiance from the NASA POWER API, normalizes it into
a monthly/annual structure, caches it per rounded coordinate, and derives
rooftop energy, savings and CO2 estimates.

CHANGELOG:
- 2026-10-12: Initial creation (STORY-001)

TODO:
- None
"""

__version__ = "0.1.0"
