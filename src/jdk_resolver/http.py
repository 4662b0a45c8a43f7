"""Shared HTTP helpers used by the catalog adapters and the installer.

Encapsulates request/timeout error handling so adapters avoid duplicating
try/except blocks. Every failure is reported as NetworkError; nothing is retried.
"""

import json
import logging
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any

import requests

from .exceptions import NetworkError

logger = logging.getLogger(__name__)

USER_AGENT = "jdk-resolver/0.1"
REQUEST_TIMEOUT = 30  # seconds, per catalog request
DOWNLOAD_TIMEOUT = 30 * 60  # seconds, overall deadline for one download
CHUNK_SIZE = 32 * 1024

ProgressCallback = Callable[[int, int | None], None]


def get_json(url: str, *, context: str, headers: dict[str, str] | None = None, **kwargs: Any) -> Any:
    """Perform a GET request and decode the JSON body.

    Args:
        url: Target URL
        context: Human-readable source tag for logs and errors (e.g. "adoptium")
        headers: Optional extra request headers
        **kwargs: Passed through to requests.get (e.g. params)

    Returns:
        Decoded JSON document

    Raises:
        NetworkError: On transport failure, timeout, non-200 status or invalid JSON
    """
    request_headers = {"User-Agent": USER_AGENT, "Accept": "application/json"}
    if headers:
        request_headers.update(headers)

    logger.debug(f"{context}: GET {url}")
    try:
        response = requests.get(url, headers=request_headers, timeout=REQUEST_TIMEOUT, **kwargs)
    except requests.Timeout as e:
        raise NetworkError(
            f"{context} request timed out after {REQUEST_TIMEOUT} seconds",
            context={"url": url, "provider": context},
        ) from e
    except requests.RequestException as e:
        raise NetworkError(f"{context} connection error: {e}", context={"url": url, "provider": context}) from e

    if response.status_code != 200:
        raise NetworkError(
            f"{context} responded with status {response.status_code}",
            context={"url": url, "provider": context, "status_code": response.status_code},
        )

    try:
        return json.loads(response.text)
    except json.JSONDecodeError as e:
        raise NetworkError(
            f"{context} returned invalid JSON: {e}",
            context={"url": url, "provider": context},
        ) from e


def download_file(
    url: str,
    destination: Path,
    *,
    progress: ProgressCallback | None = None,
    deadline: float = DOWNLOAD_TIMEOUT,
) -> Path:
    """Stream a download straight to disk through a fixed-size buffer.

    An interrupted or failed download leaves the partial file in place.

    Args:
        url: Download URL
        destination: File to create (parent directories are created)
        progress: Optional callback receiving (bytes_downloaded, total_bytes or None)
        deadline: Overall time limit in seconds for the whole transfer

    Returns:
        The destination path

    Raises:
        NetworkError: On transport failure, non-200 status, write failure or deadline overrun
    """
    destination.parent.mkdir(parents=True, exist_ok=True)
    logger.info(f"Downloading {url} to {destination}")

    started = time.monotonic()
    downloaded = 0
    try:
        with requests.get(url, headers={"User-Agent": USER_AGENT}, stream=True, timeout=REQUEST_TIMEOUT) as response:
            if response.status_code != 200:
                raise NetworkError(
                    f"Download server responded with status {response.status_code}",
                    context={"url": url, "status_code": response.status_code},
                )

            length = response.headers.get("Content-Length")
            total = int(length) if length and length.isdigit() else None

            with open(destination, "wb") as out:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    if not chunk:
                        continue
                    out.write(chunk)
                    downloaded += len(chunk)
                    if progress is not None:
                        progress(downloaded, total)
                    if time.monotonic() - started > deadline:
                        raise NetworkError(
                            f"Download exceeded the {deadline:.0f} second deadline",
                            context={"url": url, "downloaded": downloaded},
                        )
    except requests.RequestException as e:
        raise NetworkError(f"Download failed: {e}", context={"url": url, "downloaded": downloaded}) from e
    except OSError as e:
        raise NetworkError(
            f"Failed to write {destination}: {e}",
            context={"url": url, "destination": str(destination)},
        ) from e

    logger.info(f"Downloaded {downloaded} bytes in {time.monotonic() - started:.1f}s")
    return destination
