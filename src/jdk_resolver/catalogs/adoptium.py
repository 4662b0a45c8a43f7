"""Eclipse Adoptium catalog.

Adoptium publishes one record per feature release version with a nested
`binaries` array; the list of feature releases comes from a separate endpoint.
"""

import logging
from typing import Any

from ..exceptions import NetworkError
from ..host import UNKNOWN
from ..http import get_json
from ..schema import AdoptiumRelease
from .base import BaseCatalog

logger = logging.getLogger(__name__)

API_BASE = "https://api.adoptium.net/v3"
PAGE_SIZE = 50

_ARCH_PARAMS = {"x32": "x86"}


class AdoptiumCatalog(BaseCatalog):
    """Catalog adapter for api.adoptium.net."""

    name = "adoptium"
    record_model = AdoptiumRelease

    def available_releases(self) -> list[int]:
        """Feature release numbers the API knows about (e.g. [8, 11, 17, 21])."""
        url = f"{API_BASE}/info/available_releases"
        data = get_json(url, context=self.name)
        releases = data.get("available_releases") if isinstance(data, dict) else None
        if not isinstance(releases, list):
            raise NetworkError(
                f"{self.name} returned no available_releases list",
                context={"url": url, "provider": self.name},
            )
        return [r for r in releases if isinstance(r, int)]

    def _params(self) -> dict[str, Any]:
        params: dict[str, Any] = {"image_type": "jdk", "page_size": PAGE_SIZE}
        if self.host.os != UNKNOWN:
            params["os"] = self.host.os
        if self.host.arch != UNKNOWN:
            params["architecture"] = _ARCH_PARAMS.get(self.host.arch, self.host.arch)
        return params

    def fetch_raw(self) -> list[Any]:
        """Fetch GA records of every feature release, one request per release.

        Raises:
            NetworkError: If any request fails (the whole fetch is aborted)
        """
        records: list[Any] = []
        params = self._params()
        for feature in self.available_releases():
            url = f"{API_BASE}/assets/feature_releases/{feature}/ga"
            data = get_json(url, context=self.name, params=params)
            batch = self._expect_list(data, url)
            logger.debug(f"{self.name}: {len(batch)} records for feature release {feature}")
            records.extend(batch)
        return records
