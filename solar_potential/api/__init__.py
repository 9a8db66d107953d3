"""
HTTP API package: FastAPI routers and the application factory.

CHANGELOG:
- 2026-10-12: Initial creation (STORY-001)

TODO:
- None
"""
