"""User-configured private catalog.

The only catalog whose endpoint and credential come from configuration.
Records: {"version", "download", "os", "arch", "lts"}.
"""

import logging
from typing import Any

from ..config import ResolverConfig
from ..exceptions import ConfigError
from ..host import HostPlatform
from ..http import get_json
from ..schema import PrivateRelease
from .base import BaseCatalog

logger = logging.getLogger(__name__)


class PrivateCatalog(BaseCatalog):
    """Catalog adapter for a bearer-token protected HTTPS endpoint."""

    name = "private"
    record_model = PrivateRelease

    def __init__(self, endpoint: str, token: str | None = None, host: HostPlatform | None = None):
        """Initialize with app-provided endpoint and credential.

        Args:
            endpoint: Catalog URL returning a JSON array
            token: Optional bearer token sent in the Authorization header
            host: Target platform; detected when omitted
        """
        super().__init__(host=host)
        if not endpoint:
            raise ConfigError(
                "Private catalog endpoint not configured",
                suggestion="Set private_endpoint (and private_token if required) in the configuration file.",
            )
        if not endpoint.lower().startswith("https://"):
            logger.warning(f"Private catalog endpoint is not HTTPS: {endpoint}")
        self.endpoint = endpoint
        self.token = token

    @classmethod
    def from_config(cls, config: ResolverConfig, host: HostPlatform | None = None) -> "PrivateCatalog":
        return cls(endpoint=config.private_endpoint or "", token=config.private_token, host=host)

    def fetch_raw(self) -> list[Any]:
        headers = {"Authorization": f"Bearer {self.token}"} if self.token else None
        data = get_json(self.endpoint, context=self.name, headers=headers)
        return self._expect_list(data, self.endpoint)
