"""
Catalog download: fetch the remote index and write it verbatim to disk
"""

import logging
import os
from pathlib import Path
from typing import Union

import httpx

from ..errors import NetworkError, StorageError

logger = logging.getLogger(__name__)


async def download_index(client: httpx.AsyncClient, url: str, output_path: Union[str, Path]) -> Path:
    """
    Download ``url`` and write the response body to ``output_path``.

    The status code is not checked: an error page is written just like a
    catalog would be, and only fails later when it is parsed.

    Args:
        client: HTTP client used for the request
        url: Catalog URL
        output_path: Destination file, overwritten if it exists

    Returns:
        Path of the written file

    Raises:
        NetworkError: If the request cannot be completed
        StorageError: If the destination cannot be created or written
    """
    file_path = Path(output_path)
    logger.info(f"Downloading catalog from {url}")

    try:
        response = await client.get(url)
    except (httpx.RequestError, httpx.InvalidURL) as e:
        raise NetworkError(url, str(e) or type(e).__name__) from e

    body = response.content
    if not response.is_success:
        logger.warning(f"Catalog download returned HTTP {response.status_code}, writing body anyway")
    logger.debug(f"Received {len(body)} bytes from {url}")

    # Write atomically (via temp file)
    tmp_path = file_path.with_name(file_path.name + '.tmp')
    try:
        if file_path.parent and not file_path.parent.exists():
            file_path.parent.mkdir(parents=True, exist_ok=True)

        with open(tmp_path, 'wb') as f:
            f.write(body)

        os.replace(tmp_path, file_path)
    except OSError as e:
        if tmp_path.exists():
            tmp_path.unlink()
        raise StorageError(str(file_path), e.strerror or str(e)) from e

    logger.info(f"Stored {len(body)} bytes at {file_path}")
    return file_path
