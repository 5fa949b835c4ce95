"""Application settings."""

from __future__ import annotations

from dataclasses import dataclass, field

from vocalchess.voice.interfaces import RecognizerConfig


@dataclass
class AppSettings:
    """All user-configurable settings."""

    # Speech output
    speech_enabled: bool = True
    speech_volume: int = 80  # 0–100
    speech_rate: float = 0.0  # -1.0 (slow) … 1.0 (fast)

    # Speech input
    recognizer: RecognizerConfig = field(default_factory=RecognizerConfig)

    # Diagnostics
    log_level: str = "INFO"
