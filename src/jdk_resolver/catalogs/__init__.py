"""Release catalogs - one adapter per provider plus a small registry.

Provider selection is app policy: callers pass a provider name and an injected
ResolverConfig; nothing here reads global state.
"""

import logging
from dataclasses import dataclass
from dataclasses import field

from ..config import PRIVATE_PROVIDER
from ..config import ResolverConfig
from ..exceptions import ConfigError
from ..exceptions import ResolverError
from ..host import HostPlatform
from ..protocols import CatalogAdapter
from ..schema import ReleaseEntry
from .adoptium import AdoptiumCatalog
from .azul import AzulCatalog
from .base import BaseCatalog
from .liberica import LibericaCatalog
from .private import PrivateCatalog

logger = logging.getLogger(__name__)

PUBLIC_PROVIDERS: dict[str, type[BaseCatalog]] = {
    AdoptiumCatalog.name: AdoptiumCatalog,
    AzulCatalog.name: AzulCatalog,
    LibericaCatalog.name: LibericaCatalog,
}

PROVIDERS = (*PUBLIC_PROVIDERS, PRIVATE_PROVIDER)


@dataclass
class CatalogFetchResult:
    """Outcome of fetching several catalogs: entries per provider, errors per failed provider."""

    entries: dict[str, list[ReleaseEntry]] = field(default_factory=dict)
    errors: dict[str, ResolverError] = field(default_factory=dict)

    @property
    def all_entries(self) -> list[ReleaseEntry]:
        return [entry for entries in self.entries.values() for entry in entries]


def get_adapter(
    provider: str | None = None,
    config: ResolverConfig | None = None,
    host: HostPlatform | None = None,
) -> CatalogAdapter:
    """
    Build the adapter for a provider name.

    Args:
        provider: Provider name; the config's effective provider when omitted
        config: Injected configuration (defaults when omitted)
        host: Target platform; detected when omitted

    Returns:
        Catalog adapter

    Raises:
        ConfigError: If the provider is unknown or the private catalog is not configured
    """
    config = config or ResolverConfig()
    name = (provider or config.effective_provider).strip().lower()

    if name == PRIVATE_PROVIDER:
        return PrivateCatalog.from_config(config, host=host)

    adapter_cls = PUBLIC_PROVIDERS.get(name)
    if adapter_cls is None:
        raise ConfigError(
            f"Unknown provider '{name}'",
            context={"provider": name},
            suggestion=f"Use one of: {', '.join(PROVIDERS)}",
        )
    return adapter_cls(host=host)


def fetch_catalog(
    provider: str | None = None,
    config: ResolverConfig | None = None,
    host: HostPlatform | None = None,
) -> list[ReleaseEntry]:
    """Fetch and normalize one provider's catalog."""
    return get_adapter(provider, config=config, host=host).fetch()


def fetch_all_catalogs(
    config: ResolverConfig | None = None,
    host: HostPlatform | None = None,
    adapters: list[CatalogAdapter] | None = None,
) -> CatalogFetchResult:
    """
    Fetch every catalog one after another.

    A failing adapter is recorded in the result and does not stop the others.
    The private catalog is included only when an endpoint is configured.

    Args:
        config: Injected configuration
        host: Target platform; detected when omitted
        adapters: Explicit adapter list (overrides the built-in providers)

    Returns:
        CatalogFetchResult with entries and errors keyed by provider name
    """
    config = config or ResolverConfig()
    if adapters is None:
        adapters = [adapter_cls(host=host) for adapter_cls in PUBLIC_PROVIDERS.values()]
        if config.has_private_catalog:
            adapters.append(PrivateCatalog.from_config(config, host=host))

    result = CatalogFetchResult()
    for adapter in adapters:
        try:
            result.entries[adapter.name] = adapter.fetch()
        except ResolverError as e:
            logger.error(f"{adapter.name} catalog failed: {e.message}")
            result.errors[adapter.name] = e

    return result


__all__ = [
    "AdoptiumCatalog",
    "AzulCatalog",
    "BaseCatalog",
    "CatalogFetchResult",
    "LibericaCatalog",
    "PrivateCatalog",
    "PROVIDERS",
    "PUBLIC_PROVIDERS",
    "fetch_all_catalogs",
    "fetch_catalog",
    "get_adapter",
]
