"""
RoutePilot configuration.

All settings are read once from the environment at import time.
"""
from __future__ import annotations

import os
from pathlib import Path

# =============================================================================
# Configuration
# =============================================================================

DEFAULT_CATALOG_PATH = Path(__file__).parent / "catalog" / "data" / "field_catalog.yaml"

ROUTEPILOT_CATALOG_PATH = Path(os.getenv("ROUTEPILOT_CATALOG_PATH", str(DEFAULT_CATALOG_PATH)))
ROUTEPILOT_MAX_TREE_DEPTH = int(os.getenv("ROUTEPILOT_MAX_TREE_DEPTH", "32"))
ROUTEPILOT_LOG_LEVEL = os.getenv("ROUTEPILOT_LOG_LEVEL", "INFO")
ROUTEPILOT_DOCS_ENABLED = os.getenv("ROUTEPILOT_DOCS_ENABLED", "true").lower() == "true"
