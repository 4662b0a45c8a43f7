"""Resolver configuration - default provider and private catalog settings.

The configuration is read once by the application and injected into the engine's
entry points as an immutable value. The library never decides where the file lives.
"""

import json
import logging
from pathlib import Path

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import ValidationError

from .exceptions import ConfigError

logger = logging.getLogger(__name__)

FALLBACK_PROVIDER = "adoptium"
PRIVATE_PROVIDER = "private"


class ResolverConfig(BaseModel):
    """
    Resolver settings (immutable).

    File format (JSON):
    {
      "default_provider": "azul",
      "private_endpoint": "https://releases.example.com/jdks.json",
      "private_token": "..."
    }
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    default_provider: str | None = None
    private_endpoint: str | None = None
    private_token: str | None = None

    @property
    def has_private_catalog(self) -> bool:
        return bool(self.private_endpoint)

    @property
    def effective_provider(self) -> str:
        """Provider used when the caller does not name one.

        An explicit default_provider wins; otherwise a configured private
        catalog is preferred over the public fallback.
        """
        if self.default_provider:
            return self.default_provider.strip().lower()
        if self.has_private_catalog:
            return PRIVATE_PROVIDER
        return FALLBACK_PROVIDER

    @classmethod
    def from_file(cls, config_path: Path) -> "ResolverConfig":
        """
        Load configuration from a JSON file.

        Args:
            config_path: Path to config file (app determines location)

        Returns:
            ResolverConfig instance; defaults when the file does not exist

        Raises:
            ConfigError: If the file is unreadable, not JSON, or has invalid fields

        Example:
            >>> config = ResolverConfig.from_file(Path.home() / ".jdks" / "config.json")
            >>> config.effective_provider
            'adoptium'
        """
        if not config_path.exists():
            logger.debug(f"No config file at {config_path}, using defaults")
            return cls()

        try:
            with open(config_path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(
                f"Failed to read config file {config_path}: {e}",
                context={"config_path": str(config_path)},
            ) from e

        if not isinstance(data, dict):
            raise ConfigError(
                f"Config file {config_path} must contain a JSON object",
                context={"config_path": str(config_path)},
            )

        try:
            config = cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(
                f"Invalid config file {config_path}: {e}",
                context={"config_path": str(config_path)},
            ) from e

        logger.debug(f"Loaded config from {config_path} (default provider: {config.effective_provider})")
        return config
