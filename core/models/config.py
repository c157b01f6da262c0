"""
Configuration models.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Any, List, Optional
from hashlib import sha256
import json

from .timeframe import Timeframe
from ..sampling.errors import UnknownTimeframeError
from ..utils.numeric import PRICE_TYPES

DEFAULT_TIMEFRAMES = ["M1", "M5", "M15", "H1", "H4", "D1", "W1", "MN1"]


@dataclass
class ConfigHash:
    """Configuration hash for reproducibility."""
    hash_value: str
    timestamp: str

    @staticmethod
    def compute(config_dict: Dict[str, Any]) -> str:
        """Compute SHA256 hash of config."""
        json_str = json.dumps(config_dict, sort_keys=True, default=str)
        return sha256(json_str.encode()).hexdigest()


@dataclass
class SamplingConfig:
    """Resampling run configuration."""
    timeframes: List[str] = field(default_factory=lambda: list(DEFAULT_TIMEFRAMES))
    price_type: str = "decimal"
    decimal_precision: int = 28
    input_configs: Dict[str, Any] = field(default_factory=dict)
    output_configs: Dict[str, Any] = field(default_factory=dict)
    logging_configs: Dict[str, Any] = field(default_factory=dict)
    config_hash: Optional[ConfigHash] = None

    def __post_init__(self):
        normalized = []
        for code in self.timeframes:
            timeframe = Timeframe.from_short(code)
            if timeframe is None:
                raise UnknownTimeframeError(code)
            normalized.append(timeframe.code)
        self.timeframes = normalized

        if self.price_type not in PRICE_TYPES:
            raise ValueError(f"price_type must be one of {PRICE_TYPES}")

        if self.config_hash is None:
            hash_value = ConfigHash.compute(self.to_dict())
            self.config_hash = ConfigHash(
                hash_value=hash_value,
                timestamp=datetime.now(timezone.utc).isoformat()
            )

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "SamplingConfig":
        """Build from a loaded sampling.json dictionary."""
        return cls(
            timeframes=list(config.get("timeframes", DEFAULT_TIMEFRAMES)),
            price_type=config.get("price_type", "decimal"),
            decimal_precision=int(config.get("decimal_precision", 28)),
            input_configs=dict(config.get("input", {})),
            output_configs=dict(config.get("output", {})),
            logging_configs=dict(config.get("logging", {})),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timeframes": self.timeframes,
            "price_type": self.price_type,
            "decimal_precision": self.decimal_precision,
            "input": self.input_configs,
            "output": self.output_configs,
            "logging": self.logging_configs,
        }
