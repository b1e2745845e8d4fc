from __future__ import annotations

"""Shared pytest fixtures and test environment defaults."""

import os
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

os.environ.setdefault("TRACE_MIN_SIMILARITY", "0.75")
os.environ.setdefault("TRACE_WINDOW_FACTOR", "1.5")
os.environ.setdefault("TRACE_METRICS_ENABLED", "true")
os.environ["TRACE_PRETTY_PRINT"] = "true"
os.environ["TRACE_MAX_TERMS"] = "5"
