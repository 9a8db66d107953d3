"""
Services package: irradiance retrieval, normalization and calculations.

CHANGELOG:
- 2026-10-12: Initial creation (STORY-002)

TODO:
- None
"""
