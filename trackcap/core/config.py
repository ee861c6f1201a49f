from __future__ import annotations
import os
from dataclasses import dataclass, field
from dotenv import load_dotenv

from .models import GeneralParameters

# Load .env early (no error if missing)
load_dotenv()


def _env_int(name: str, default: int) -> int:
    return int(os.getenv(name, str(default)))


def _env_float(name: str, default: float) -> float:
    return float(os.getenv(name, str(default)))


@dataclass(frozen=True)
class CapacityConfig:
    # Defaults used when a request carries no general parameters
    window: int = field(default_factory=lambda: _env_int("TRACKCAP_WINDOW", 120))
    alpha_s: float = field(default_factory=lambda: _env_float("TRACKCAP_ALPHA_S", 0.9))
    alpha_t: float = field(default_factory=lambda: _env_float("TRACKCAP_ALPHA_T", 0.95))
    alpha_u: float = field(default_factory=lambda: _env_float("TRACKCAP_ALPHA_U", 0.98))
    expected_interval: int = field(default_factory=lambda: _env_int("TRACKCAP_EXPECTED_INTERVAL", 15))
    log_level: str = field(default_factory=lambda: os.getenv("TRACKCAP_LOG_LEVEL", "INFO").upper())

    def general_parameters(self) -> GeneralParameters:
        return GeneralParameters(
            window=self.window,
            alpha_s=self.alpha_s,
            alpha_t=self.alpha_t,
            alpha_u=self.alpha_u,
            expected_interval=self.expected_interval,
        )
