"""
Pydantic models for SpotiHooks configuration validation

Type-safe configuration schema with automatic validation, so malformed
config files or environment overrides fail at load time instead of on the
first request.
"""

from typing import Any, Dict

from pydantic import BaseModel, Field, model_validator

from .constants import DEFAULT_PLAYER_NAME


class SpotiHooksConfig(BaseModel):
    """Complete SpotiHooks configuration schema.

    Example:
        >>> config = SpotiHooksConfig(**{"http_read_timeout": 20})
        >>> config.http_timeout
        (4.0, 20.0)
    """

    # Runtime settings
    environment: str = Field(default="development", description="Runtime environment")
    log_level: str = Field(default="INFO", pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$", description="Logging level")
    json_logs: bool = Field(default=False, description="Emit structured JSON logs")

    # HTTP transport
    http_connect_timeout: float = Field(default=4.0, ge=0.5, description="Connect timeout in seconds")
    http_read_timeout: float = Field(default=15.0, ge=1.0, description="Read timeout in seconds")
    http_pool_connections: int = Field(default=10, ge=1, description="Connection pools to cache")
    http_pool_maxsize: int = Field(default=20, ge=1, description="Connections kept per pool")
    http_max_workers: int = Field(default=4, ge=1, le=64, description="Worker threads issuing requests")

    # Playback widget
    player_name: str = Field(default=DEFAULT_PLAYER_NAME, min_length=1, description="Name shown in Spotify Connect")
    player_volume: float = Field(default=0.5, ge=0.0, le=1.0, description="Initial widget volume (0.0-1.0)")

    model_config = {
        "extra": "ignore",
        "str_strip_whitespace": True,
        "validate_assignment": True,
    }

    @model_validator(mode='before')
    @classmethod
    def normalise_log_level(cls, data: Any) -> Any:
        """Accept lower-case log levels from environment variables."""
        if isinstance(data, dict) and isinstance(data.get("log_level"), str):
            data = {**data, "log_level": data["log_level"].strip().upper()}
        return data

    @property
    def http_timeout(self) -> tuple:
        return (self.http_connect_timeout, self.http_read_timeout)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode='json')


def validate_config_dict(config_dict: Dict[str, Any]) -> SpotiHooksConfig:
    """Validate a config dictionary against the schema.

    Raises:
        ValueError: If config is invalid with detailed error messages
    """
    try:
        return SpotiHooksConfig(**config_dict)
    except Exception as e:
        raise ValueError(f"Configuration validation failed: {str(e)}") from e
