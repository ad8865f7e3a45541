"""
Catalog Package

ARCHITECTURAL BOUNDARY:
=======================
The only place the viewer talks to the remote art catalog.
Everything above this package sees ArtworkRecord and CatalogPage,
never raw JSON or HTTP.

DIRECTION OF DEPENDENCY:
========================
frontend → catalog
backend → frontend → catalog
"""

from .contracts import (
    ArtworkRecord,
    CatalogPage,
    CatalogFetchError,
    FetchStatus,
    RECORD_FIELDS,
)
from .config import (
    CatalogConfig,
    ServerConfig,
    ViewerConfig,
    ConfigError,
    load_config,
)

__all__ = [
    'ArtworkRecord',
    'CatalogPage',
    'CatalogFetchError',
    'FetchStatus',
    'RECORD_FIELDS',
    'CatalogConfig',
    'ServerConfig',
    'ViewerConfig',
    'ConfigError',
    'load_config',
]
