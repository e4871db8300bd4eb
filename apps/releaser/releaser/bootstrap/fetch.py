"""Toolchain archive download.

Streams the file to `<dest>.part` and renames it into place only after
the body was fully received, so an interrupted download never looks like
a finished one on the next run.
"""

import logging
from pathlib import Path

import httpx

logger = logging.getLogger(__name__)

DOWNLOAD_TIMEOUT = 300
_CHUNK_SIZE = 1024 * 1024


def fetch_archive(url: str, dest: Path, timeout: float = DOWNLOAD_TIMEOUT) -> Path:
    """Download url to dest unless dest already exists.

    Raises httpx.HTTPStatusError on a non-2xx response and
    httpx.TransportError on connection problems.
    """
    dest = Path(dest)
    if dest.exists() and dest.stat().st_size > 0:
        logger.info("Archive already present, skipping download: %s", dest)
        return dest

    dest.parent.mkdir(parents=True, exist_ok=True)
    partial = dest.with_name(dest.name + ".part")

    logger.info("Downloading %s -> %s", url, dest)
    with httpx.stream("GET", url, follow_redirects=True, timeout=timeout) as response:
        response.raise_for_status()
        with open(partial, "wb") as fh:
            for chunk in response.iter_bytes(_CHUNK_SIZE):
                fh.write(chunk)

    partial.replace(dest)
    logger.info("Downloaded %s (%d bytes)", dest.name, dest.stat().st_size)
    return dest
