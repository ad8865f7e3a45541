"""
Record Providers

Paged artwork sources behind a single async fetch contract.
"""

from .base import RecordProvider
from .artic import ArticCatalogProvider
from .mock import MockCatalogProvider, generate_records

from ..config import CatalogConfig


def create_provider(config: CatalogConfig) -> RecordProvider:
    """Build the provider named by the configuration."""
    if config.provider == "mock":
        return MockCatalogProvider(
            total_count=config.mock_total_count,
            rows_per_page=config.rows_per_page
        )
    return ArticCatalogProvider(config)


__all__ = [
    'RecordProvider',
    'ArticCatalogProvider',
    'MockCatalogProvider',
    'generate_records',
    'create_provider',
]
