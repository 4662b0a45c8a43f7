"""Host platform detection and OS/architecture name normalization.

Every catalog spells platforms differently ("mac", "macos", "macosx";
"x64", "x86_64", "amd64"). Adapters funnel their names through
normalize_os() / normalize_arch() so entries compare against the host
with plain equality.
"""

import platform

from pydantic import BaseModel
from pydantic import ConfigDict

UNKNOWN = "unknown"

_OS_ALIASES = {
    "windows": "windows",
    "win": "windows",
    "win32": "windows",
    "linux": "linux",
    "alpine-linux": "linux",
    "mac": "mac",
    "macos": "mac",
    "macosx": "mac",
    "darwin": "mac",
    "osx": "mac",
}

_ARCH_ALIASES = {
    "x64": "x64",
    "x86_64": "x64",
    "amd64": "x64",
    "x86-64": "x64",
    "x32": "x32",
    "x86": "x32",
    "i386": "x32",
    "i586": "x32",
    "i686": "x32",
    "386": "x32",
    "aarch64": "aarch64",
    "arm64": "aarch64",
    "arm": "arm",
    "arm32": "arm",
    "armv7l": "arm",
}


def normalize_os(name: str | None) -> str:
    """Map a provider or runtime OS name to windows/linux/mac."""
    if not name:
        return UNKNOWN
    return _OS_ALIASES.get(name.strip().lower(), UNKNOWN)


def normalize_arch(name: str | None) -> str:
    """Map a provider or runtime architecture name to x64/x32/aarch64/arm."""
    if not name:
        return UNKNOWN
    return _ARCH_ALIASES.get(name.strip().lower(), UNKNOWN)


def executable_name(os_name: str) -> str:
    """Name of the JDK launcher inside bin/ for the given OS."""
    return "java.exe" if os_name == "windows" else "java"


class HostPlatform(BaseModel):
    """Operating system and architecture a release must run on (immutable)."""

    model_config = ConfigDict(frozen=True)

    os: str
    arch: str

    @property
    def executable(self) -> str:
        return executable_name(self.os)

    def matches(self, os_name: str, arch: str) -> bool:
        return self.os == os_name and self.arch == arch


def detect_host() -> HostPlatform:
    """Detect the platform of the running interpreter.

    Returns:
        HostPlatform with normalized names, e.g. HostPlatform(os="linux", arch="x64")
    """
    return HostPlatform(os=normalize_os(platform.system()), arch=normalize_arch(platform.machine()))
