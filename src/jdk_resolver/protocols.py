"""Protocols for release catalogs.

Apps can plug in any catalog (a mirror, a test fixture, a vendor not shipped
here). The engine only requires this interface.
"""

from typing import Any
from typing import Protocol
from typing import runtime_checkable

from .schema import ReleaseEntry


@runtime_checkable
class CatalogAdapter(Protocol):
    """Protocol for release catalog adapters.

    Implementations shipped with the library:
    - AdoptiumCatalog: Eclipse Adoptium (Temurin)
    - AzulCatalog: Azul Zulu
    - LibericaCatalog: BellSoft Liberica
    - PrivateCatalog: user-configured HTTPS endpoint
    """

    name: str

    def fetch_raw(self) -> list[Any]:
        """Fetch the provider's JSON records as returned by the endpoint.

        Raises:
            NetworkError: If the catalog cannot be fetched
        """
        ...

    def fetch(self) -> list[ReleaseEntry]:
        """Fetch and normalize the catalog into release entries.

        Malformed records are skipped; the rest of the catalog is returned.

        Raises:
            NetworkError: If the catalog cannot be fetched
        """
        ...
