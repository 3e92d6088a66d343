"""Data sources module - Fetching raw tables and boundary files."""

from .base import DataLoadError, DataSource, RawTable
from .files import LocalFileSource
from .remote import HttpSource, close_async_client
from .manager import DataSourceManager, source_manager

__all__ = [
    'DataLoadError',
    'DataSource',
    'RawTable',
    'LocalFileSource',
    'HttpSource',
    'close_async_client',
    'DataSourceManager',
    'source_manager',
]
