from __future__ import annotations

import logging
from pathlib import Path

import requests

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 64


def download(url: str, dest: str) -> str:
    """Stream url to dest, following redirects. Returns dest.

    No timeout is imposed; a stalled mirror stalls the run.
    """

    p = Path(dest)
    p.parent.mkdir(parents=True, exist_ok=True)
    logger.info("GET %s", url)
    with requests.get(url, stream=True, allow_redirects=True) as r:
        r.raise_for_status()
        with p.open("wb") as f:
            for chunk in r.iter_content(chunk_size=CHUNK_SIZE):
                if chunk:
                    f.write(chunk)
    logger.info("Downloaded %s (%d bytes)", str(p), p.stat().st_size)
    return dest
