"""Shared normalization for catalog adapters.

Subclasses fetch provider JSON; this base turns each record into release
entries with a lenient policy: a record that fails validation or version
parsing is skipped and the rest of the catalog survives.
"""

import logging
from typing import Any
from typing import ClassVar

from pydantic import ValidationError

from ..exceptions import NetworkError
from ..exceptions import ParseError
from ..host import HostPlatform
from ..host import detect_host
from ..schema import CatalogRecord
from ..schema import ReleaseEntry

logger = logging.getLogger(__name__)


class BaseCatalog:
    """Base class for the shipped catalog adapters."""

    name: ClassVar[str]
    record_model: ClassVar[type[CatalogRecord]]

    def __init__(self, host: HostPlatform | None = None):
        """Initialize with the platform whose releases should be requested.

        Args:
            host: Target platform used for provider-side filtering; detected when omitted
        """
        self.host = host or detect_host()

    def fetch_raw(self) -> list[Any]:
        raise NotImplementedError

    def fetch(self) -> list[ReleaseEntry]:
        records = self.fetch_raw()
        entries = self.normalize(records)
        logger.info(f"{self.name}: {len(entries)} release entries from {len(records)} records")
        return entries

    def normalize(self, records: list[Any]) -> list[ReleaseEntry]:
        """Convert provider records to release entries, skipping malformed ones.

        Duplicate (provider, version, os, arch) keys keep the first occurrence.
        """
        entries: list[ReleaseEntry] = []
        seen: set[tuple[str, str, str, str]] = set()

        for index, raw in enumerate(records):
            try:
                record = self.record_model.model_validate(raw)
                converted = record.to_entries(provider=self.name)
            except (ValidationError, ParseError) as e:
                logger.warning(f"{self.name}: skipping malformed record #{index}: {e}")
                continue

            for entry in converted:
                if entry.key in seen:
                    logger.debug(f"{self.name}: duplicate entry {entry.key} ignored")
                    continue
                seen.add(entry.key)
                entries.append(entry)

        return entries

    def _expect_list(self, data: Any, url: str) -> list[Any]:
        if not isinstance(data, list):
            raise NetworkError(
                f"{self.name} returned {type(data).__name__}, expected a JSON array",
                context={"url": url, "provider": self.name},
            )
        return data
