"""RoutePilot HTTP API (FastAPI)."""
