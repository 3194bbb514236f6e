"""
Reachability probe for a single source base URL
"""

import logging
import time
from dataclasses import dataclass

import httpx

from ..errors import NetworkError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProbeReport:
    """Outcome of one probe that received an HTTP response"""
    url: str
    status_code: int

    @property
    def available(self) -> bool:
        return self.status_code == 200

    def line(self) -> str:
        if self.available:
            return f"{self.url} is available"
        return f"{self.url} responded with {self.status_code}"


async def probe_url(client: httpx.AsyncClient, url: str) -> ProbeReport:
    """
    Issue a GET against ``url`` and classify the response.

    Any received response is a report, whatever its status. A request that
    cannot complete at all raises NetworkError. The body is never read, only
    the status line decides the outcome.
    """
    start_time = time.time()
    status_code = None
    try:
        async with client.stream("GET", url) as response:
            status_code = response.status_code
    except (httpx.RequestError, httpx.InvalidURL) as e:
        # A failure while closing a response that already arrived is still a response
        if status_code is None:
            logger.debug(f"No response from {url}: {e}")
            raise NetworkError(url, str(e) or type(e).__name__) from e
        logger.debug(f"Ignoring error after status line from {url}: {e}")

    latency_ms = (time.time() - start_time) * 1000
    logger.debug(f"{url} -> HTTP {status_code} in {latency_ms:.0f}ms")
    return ProbeReport(url=url, status_code=status_code)
