"""
Data Source Manager - Routes locations to sources and loads the catalog.

All tables and the boundary file are fetched together; parsing starts only
once every fetch has completed, and a single failure aborts the load.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

from .base import DataLoadError, DataSource, RawTable
from .files import LocalFileSource
from .remote import HttpSource
from cache import cache_manager
from config import Config, config
from geo.features import features_from_geojson
from processing.tabular import parse_country_table, parse_subnational_table
from registry import StoreCatalog, build_catalog, code_of

logger = logging.getLogger(__name__)


class DataSourceManager:
    """
    Routes locations to the appropriate data source.

    Handles caching and parallel fetching.
    """

    def __init__(self, sources: Optional[List[DataSource]] = None, base_dir: Path = Path('.')):
        self._sources: List[DataSource] = sources if sources is not None else [
            HttpSource(),
            LocalFileSource(base_dir),   # anything without a scheme
        ]
        self._source_status = {source.name: True for source in self._sources}
        for source in self._sources:
            print(f"[Sources] {source.name}: available")

    def get_source(self, location: str) -> Optional[DataSource]:
        """Find the data source that handles a location."""
        for source in self._sources:
            if source.supports(location):
                return source
        return None

    async def fetch(self, location: str, use_cache: bool = True) -> RawTable:
        """
        Fetch raw text, using cache if available.

        Args:
            location: Path or URL
            use_cache: Skip the cache when False (still stores the result)

        Returns:
            RawTable (error set on failure)
        """
        if use_cache:
            cached = cache_manager.get_table(location)
            if cached is not None:
                return RawTable(location=location, text=cached, from_cache=True)

        source = self.get_source(location)
        if not source:
            return RawTable(location=location, error=f"No data source found for {location}")

        result = await source.fetch(location)
        self._source_status[source.name] = result.is_valid

        if result.is_valid:
            cache_manager.set_table(location, result.text)
        else:
            logger.error(f"Fetch failed for {location}: {result.error}")

        return result

    async def fetch_many(self, locations: List[str], use_cache: bool = True) -> List[RawTable]:
        """Fetch multiple locations concurrently, in input order."""
        tasks = [self.fetch(loc, use_cache) for loc in locations]
        return await asyncio.gather(*tasks)

    async def load_catalog(self, cfg: Optional[Config] = None, use_cache: bool = True) -> StoreCatalog:
        """
        Fetch every configured table plus the boundary file and build the catalog.

        Raises:
            DataLoadError: if any fetch fails (no partial catalog)
        """
        cfg = cfg or config
        country_keys = list(cfg.tables)
        locations = [cfg.tables[key] for key in country_keys]
        locations += [loc for _, _, loc in cfg.subnational_tables]
        locations.append(cfg.geojson_url)

        results = await self.fetch_many(locations, use_cache)
        failures = {r.location: r.error for r in results if not r.is_valid}

        by_location: Dict[str, RawTable] = {r.location: r for r in results}
        collection = None
        if cfg.geojson_url not in failures:
            collection = _parse_geojson(by_location[cfg.geojson_url], failures, use_cache)
        if failures:
            raise DataLoadError(failures)

        country = {
            key: parse_country_table(by_location[cfg.tables[key]].text, f'{key[0]}/{key[1]}')
            for key in country_keys
        }

        subnational: Dict[tuple, list] = {}
        for indicator, basis, location in cfg.subnational_tables:
            store = parse_subnational_table(by_location[location].text, code_of, label=location)
            subnational.setdefault((indicator, basis), []).append((location, store))

        features = features_from_geojson(collection, cfg.geo_code_property, cfg.geo_name_property)
        catalog = build_catalog(country, subnational, features)
        print(f"[Sources] Loaded {catalog.stats()}")
        return catalog

    def available_sources(self) -> dict:
        """Status of every registered source: False once its latest fetch failed."""
        return dict(self._source_status)


def _parse_geojson(raw: RawTable, failures: dict, use_cache: bool = True) -> Optional[dict]:
    cached = cache_manager.get_boundaries(raw.location) if use_cache else None
    if cached is not None:
        return cached
    try:
        collection = json.loads(raw.text)
    except json.JSONDecodeError as e:
        failures[raw.location] = f"Invalid GeoJSON: {e}"
        return None
    cache_manager.set_boundaries(raw.location, collection)
    return collection


# Global instance
source_manager = DataSourceManager()
