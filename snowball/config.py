"""Configuration management for snowball."""

from dataclasses import dataclass, field

from snowball.exceptions import ConfigurationError

CALCULATION_MODES = ("annual", "monthly")
LOG_FORMATS = ("standard", "json")


@dataclass
class DisplayConfig:
    """How presentation collaborators format figures."""

    locale: str = "ja-JP"
    currency: str = "JPY"
    currency_decimals: int = 0
    percentage_decimals: int = 1


@dataclass
class SnowballConfig:
    """Main configuration for snowball."""

    display: DisplayConfig = field(default_factory=DisplayConfig)
    log_level: str = "INFO"
    log_format: str = "standard"
    default_mode: str = "annual"

    def __post_init__(self) -> None:
        if self.default_mode not in CALCULATION_MODES:
            raise ConfigurationError(
                f"unknown calculation mode {self.default_mode!r}; expected one of {CALCULATION_MODES}"
            )
        if self.log_format not in LOG_FORMATS:
            raise ConfigurationError(
                f"unknown log format {self.log_format!r}; expected one of {LOG_FORMATS}"
            )

    @classmethod
    def from_env(cls) -> "SnowballConfig":
        """Create config from environment variables."""
        import os

        display = DisplayConfig(
            locale=os.getenv("SNOWBALL_LOCALE", "ja-JP"),
            currency=os.getenv("SNOWBALL_CURRENCY", "JPY"),
        )

        return cls(
            display=display,
            log_level=os.getenv("SNOWBALL_LOG_LEVEL", "INFO"),
            log_format=os.getenv("SNOWBALL_LOG_FORMAT", "standard"),
            default_mode=os.getenv("SNOWBALL_MODE", "annual").lower(),
        )
