"""
Main probe service - runs the download, load, filter and probe stages in order
"""

import logging
import sys
from enum import Enum
from typing import List, Optional, TextIO

import httpx

from .config import ProbeConfig
from .io.catalog import filter_by_lang, load_catalog
from .net.fetcher import download_index
from .net.prober import ProbeReport, probe_url

logger = logging.getLogger(__name__)


class RunState(Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    LOADED = "loaded"
    FILTERING = "filtering"
    PROBING = "probing"
    DONE = "done"
    FAILED = "failed"


def build_client() -> httpx.AsyncClient:
    """HTTP client with the transport's default timeouts"""
    return httpx.AsyncClient(
        http2=True,
        follow_redirects=True,
        max_redirects=10,
    )


class ProbeService:
    """Sequential catalog probe pipeline"""

    def __init__(self, config: ProbeConfig, client: Optional[httpx.AsyncClient] = None,
                 out: Optional[TextIO] = None):
        """
        Initialize the service.

        Args:
            config: ProbeConfig instance
            client: HTTP client to use; when omitted the service creates and closes its own
            out: Stream for report lines (stdout by default)
        """
        self.config = config
        self._client = client
        self._owns_client = client is None
        self._out = out

        self.state = RunState.IDLE
        self.reports: List[ProbeReport] = []

    @property
    def out(self) -> TextIO:
        return self._out if self._out is not None else sys.stdout

    def _emit(self, line: str):
        print(line, file=self.out, flush=True)

    async def run(self) -> List[ProbeReport]:
        """
        Download the catalog, select extensions by language and probe every source.

        The first error of any kind aborts the run; no output follows it.

        Returns:
            One ProbeReport per probed source, in probe order
        """
        self.reports = []
        client = self._client or build_client()
        try:
            self.state = RunState.FETCHING
            path = await download_index(client, self.config.index_url, self.config.output)
            self._emit(f"File downloaded successfully to: {self.config.output_path}")

            extensions = load_catalog(path)
            self.state = RunState.LOADED

            self.state = RunState.FILTERING
            selected = filter_by_lang(extensions, self.config.lang)
            source_count = sum(len(extension.sources) for extension in selected)
            logger.info(
                "Selected %d of %d extensions for lang=%s (%d sources)",
                len(selected), len(extensions), self.config.lang, source_count,
            )

            self.state = RunState.PROBING
            for extension in selected:
                for source in extension.sources:
                    report = await probe_url(client, source.base_url)
                    self.reports.append(report)
                    self._emit(report.line())

            self.state = RunState.DONE
            logger.info(f"Probed {len(self.reports)} sources")
            return self.reports
        except Exception:
            self.state = RunState.FAILED
            raise
        finally:
            if self._owns_client:
                await client.aclose()

    async def probe_single(self, url: str) -> ProbeReport:
        """Probe one URL without touching the catalog"""
        client = self._client or build_client()
        try:
            self.state = RunState.PROBING
            self.reports = []
            report = await probe_url(client, url)
            self.reports.append(report)
            self._emit(report.line())
            self.state = RunState.DONE
            return report
        except Exception:
            self.state = RunState.FAILED
            raise
        finally:
            if self._owns_client:
                await client.aclose()
