"""Azul Zulu catalog.

Flat package records; versions are integer arrays and the platform is only
recoverable from the package file name.
"""

from typing import Any

from ..host import UNKNOWN
from ..http import get_json
from ..schema import AzulPackage
from .base import BaseCatalog

API_URL = "https://api.azul.com/metadata/v1/zulu/packages"
PAGE_SIZE = 100

_OS_PARAMS = {"mac": "macos"}
_ARCH_PARAMS = {"x32": "i686"}


class AzulCatalog(BaseCatalog):
    """Catalog adapter for the Azul metadata API."""

    name = "azul"
    record_model = AzulPackage

    def _params(self) -> dict[str, Any]:
        params: dict[str, Any] = {
            "java_package_type": "jdk",
            "availability_types": "CA",
            "release_status": "ga",
            "page_size": PAGE_SIZE,
        }
        if self.host.os != UNKNOWN:
            params["os"] = _OS_PARAMS.get(self.host.os, self.host.os)
        if self.host.arch != UNKNOWN:
            params["arch"] = _ARCH_PARAMS.get(self.host.arch, self.host.arch)
        return params

    def fetch_raw(self) -> list[Any]:
        data = get_json(API_URL, context=self.name, params=self._params())
        return self._expect_list(data, API_URL)
