#!/usr/bin/env python3
"""
Configuration Management for Alkansya

Handles environment-based configuration with sensible defaults and validation.
Supports multiple environments (development, test, production); test runs keep
their state under the system temp directory so real savings are never touched.
"""

import logging
import os
import tempfile
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from .currency import DEFAULT_CURRENCY_SYMBOL, parse_pesos_to_centavos
from .money import Money

# Load environment variables from .env file
load_dotenv()

DEFAULT_QUICK_ADD = "1,5,10,20,50,100,200,500,1000"


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


@dataclass
class StorageConfig:
    """Where and under which key ledger state is persisted."""

    data_dir: Path
    state_key: str = "alkansya_state"
    export_dir: Path | None = None


@dataclass
class LedgerConfig:
    """Ledger defaults and presentation preferences."""

    default_goal_cents: int = 1000000
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL
    quick_add_cents: list = field(default_factory=lambda: _parse_denominations(DEFAULT_QUICK_ADD))


@dataclass
class Config:
    """
    Main configuration class for the Alkansya application.

    Loads configuration from environment variables with defaults
    and validation for each environment type.
    """

    environment: Environment

    # Core directories
    data_dir: Path

    # Component configurations
    storage: StorageConfig
    ledger: LedgerConfig

    # Application settings
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(os.getenv("ALKANSYA_ENV", "development"))

        if env == Environment.TEST:
            default_test_dir = Path(tempfile.gettempdir()) / "test_alkansya"
            data_dir = Path(os.getenv("ALKANSYA_DATA_DIR", str(default_test_dir)))
        else:
            data_dir = Path(os.getenv("ALKANSYA_DATA_DIR", "~/.alkansya")).expanduser().resolve()

        data_dir.mkdir(parents=True, exist_ok=True)

        export_dir_env = os.getenv("ALKANSYA_EXPORT_DIR")
        storage = StorageConfig(
            data_dir=data_dir,
            state_key=os.getenv("ALKANSYA_STATE_KEY", "alkansya_state"),
            export_dir=Path(export_dir_env).expanduser() if export_dir_env else None,
        )

        ledger = LedgerConfig(
            default_goal_cents=parse_pesos_to_centavos(os.getenv("ALKANSYA_DEFAULT_GOAL", "10000")),
            currency_symbol=os.getenv("ALKANSYA_CURRENCY_SYMBOL", DEFAULT_CURRENCY_SYMBOL),
            quick_add_cents=_parse_denominations(os.getenv("ALKANSYA_QUICK_ADD", DEFAULT_QUICK_ADD)),
        )

        return cls(
            environment=env,
            data_dir=data_dir,
            storage=storage,
            ledger=ledger,
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    @property
    def default_goal(self) -> Money:
        """Goal used when no state has been saved yet."""
        return Money.from_cents(self.ledger.default_goal_cents)

    @property
    def quick_add_amounts(self) -> list[Money]:
        """Quick-add denominations as Money, smallest first."""
        return [Money.from_cents(c) for c in sorted(self.ledger.quick_add_cents)]

    def validate(self) -> list:
        """Validate configuration and return list of errors."""
        errors = []

        if not self.data_dir.exists():
            errors.append(f"data_dir does not exist: {self.data_dir}")

        if not self.storage.state_key or "/" in self.storage.state_key:
            errors.append(f"Invalid state key: {self.storage.state_key!r}")

        if self.ledger.default_goal_cents <= 0:
            errors.append("ALKANSYA_DEFAULT_GOAL must be positive")

        if any(c <= 0 for c in self.ledger.quick_add_cents):
            errors.append("ALKANSYA_QUICK_ADD denominations must be positive")

        if self.log_level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            errors.append(f"Unknown LOG_LEVEL: {self.log_level}")

        return errors

    def setup_logging(self) -> None:
        """Configure logging based on configuration."""
        level = getattr(logging, self.log_level, logging.INFO)

        # Configure format based on environment
        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")

        if self.debug:
            logging.getLogger("alkansya").setLevel(logging.DEBUG)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a JSON-friendly dictionary."""
        result: dict[str, Any] = {}

        for field_name, field_value in self.__dict__.items():
            if hasattr(field_value, "__dict__") and not isinstance(field_value, (Path, Enum)):
                # Nested dataclass
                result[field_name] = {name: _plain(value) for name, value in field_value.__dict__.items()}
            else:
                result[field_name] = _plain(field_value)

        return result


def _plain(value: Any) -> Any:
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    return value


def _parse_denominations(value: str, delimiter: str = ",") -> list:
    """Parse comma-separated peso amounts into a list of centavos, ignoring empty items."""
    if not value:
        return []
    return [parse_pesos_to_centavos(item.strip()) for item in value.split(delimiter) if item.strip()]


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_environment()

        # Validate configuration
        errors = _config.validate()
        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        # Setup logging
        _config.setup_logging()

    return _config


def reload_config() -> Config:
    """Reload configuration from environment (useful for testing)."""
    global _config
    _config = None
    return get_config()

