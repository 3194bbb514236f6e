"""
Extension catalog prober.

This package provides:
- ProbeConfig: Index URL, output path and language selection
- download_index: Fetch the remote catalog and write it verbatim to disk
- load_catalog / filter_by_lang: Parse the catalog and select extensions
- probe_url: Single HTTP reachability check against a source base URL
- ProbeService: The sequential download -> load -> filter -> probe pipeline
"""

from .config import ProbeConfig
from .errors import ConfigError, NetworkError, ParseError, ProbeError, StorageError
from .models import Extension, Source
from .io.catalog import dump_catalog, filter_by_lang, load_catalog
from .net.fetcher import download_index
from .net.prober import ProbeReport, probe_url
from .run import ProbeService, RunState

__all__ = [
    'ProbeConfig',
    'ProbeError',
    'NetworkError',
    'StorageError',
    'ParseError',
    'ConfigError',
    'Source',
    'Extension',
    'load_catalog',
    'dump_catalog',
    'filter_by_lang',
    'download_index',
    'ProbeReport',
    'probe_url',
    'ProbeService',
    'RunState',
]
