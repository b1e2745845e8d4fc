from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    min_similarity: float = float(os.getenv("TRACE_MIN_SIMILARITY", "0.75"))
    window_factor: float = float(os.getenv("TRACE_WINDOW_FACTOR", "1.5"))
    pretty_print_raw: str = os.getenv("TRACE_PRETTY_PRINT", "true")
    max_terms: int = int(os.getenv("TRACE_MAX_TERMS", "50"))
    max_text_chars: int = int(os.getenv("TRACE_MAX_TEXT_CHARS", "200000"))
    log_level: str = os.getenv("TRACE_LOG_LEVEL", "INFO")
    metrics_enabled: bool = os.getenv("TRACE_METRICS_ENABLED", "true").lower() in {"1", "true", "yes"}

    @property
    def pretty_print(self) -> bool:
        raw = os.getenv("TRACE_PRETTY_PRINT", self.pretty_print_raw)
        return raw.strip().lower() in {"1", "true", "yes"}


settings = Settings()
