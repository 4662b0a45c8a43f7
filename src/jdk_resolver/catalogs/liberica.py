"""BellSoft Liberica catalog.

Flat records with plain-string version, os, architecture and downloadUrl.
Liberica reports 64-bit Intel as architecture "x86" with bitness 64.
"""

from typing import Any

from ..host import UNKNOWN
from ..http import get_json
from ..schema import LibericaRelease
from .base import BaseCatalog

API_URL = "https://api.bell-sw.com/v1/liberica/releases"

_OS_PARAMS = {"mac": "macos"}
_ARCH_PARAMS = {"x64": "x86", "x32": "x86", "aarch64": "arm"}
_BITNESS = {"x64": 64, "x32": 32, "aarch64": 64, "arm": 32}


class LibericaCatalog(BaseCatalog):
    """Catalog adapter for api.bell-sw.com."""

    name = "liberica"
    record_model = LibericaRelease

    def _params(self) -> dict[str, Any]:
        params: dict[str, Any] = {"bundle-type": "jdk"}
        if self.host.os != UNKNOWN:
            params["os"] = _OS_PARAMS.get(self.host.os, self.host.os)
            params["package-type"] = "zip" if self.host.os == "windows" else "tar.gz"
        if self.host.arch != UNKNOWN:
            params["arch"] = _ARCH_PARAMS.get(self.host.arch, self.host.arch)
            params["bitness"] = _BITNESS.get(self.host.arch, 64)
        return params

    def fetch_raw(self) -> list[Any]:
        data = get_json(API_URL, context=self.name, params=self._params())
        return self._expect_list(data, API_URL)
