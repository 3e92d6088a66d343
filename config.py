"""
GDP Explorer - Centralized Configuration

All environment variables, constants, and settings in one place.
"""

import os
from dataclasses import dataclass, field
from typing import Dict, List, Tuple


# World Bank WDI bulk-download files (GDP per capita, four valuation variants)
DEFAULT_TABLES: Dict[Tuple[str, str], str] = {
    ('gdp', 'constant'): 'data/API_NY.GDP.PCAP.KD_DS2_en_csv_v2_141.csv',
    ('gdp', 'current'): 'data/API_NY.GDP.PCAP.CD_DS2_en_csv_v2_139.csv',
    ('ppp', 'constant'): 'data/API_NY.GDP.PCAP.PP.KD_DS2_en_csv_v2_1423.csv',
    ('ppp', 'current'): 'data/API_NY.GDP.PCAP.PP.CD_DS2_en_csv_v2_1420.csv',
}

DEFAULT_GEOJSON_URL = 'https://raw.githubusercontent.com/datasets/geo-countries/master/data/countries.geojson'

INDICATORS = ('gdp', 'ppp')
BASES = ('constant', 'current')


@dataclass
class Config:
    """Application configuration loaded from environment."""

    # Data locations (local path or http(s) URL)
    tables: Dict[Tuple[str, str], str] = field(default_factory=lambda: dict(DEFAULT_TABLES))
    subnational_tables: List[Tuple[str, str, str]] = field(default_factory=list)
    geojson_url: str = DEFAULT_GEOJSON_URL

    # Boundary feature properties (key names vary by provider)
    geo_code_property: str = 'ISO_A3'
    geo_code_fallbacks: Tuple[str, ...] = ('ISO3166-1-Alpha-3', 'iso_a3', 'ADM0_A3')
    geo_name_property: str = 'ADMIN'
    geo_name_fallbacks: Tuple[str, ...] = ('name', 'NAME')

    # Cache / network
    data_cache_ttl: int = 1800         # 30 minutes
    max_cache_size: int = 64
    http_timeout: float = 30.0

    # Year bounds
    first_year: int = 1960
    last_year: int = 2024
    default_year_start: int = 1990
    default_year_end: int = 2024
    default_map_year: int = 2023
    reference_year: int = 2023         # "latest" year for tables and insights
    growth_span: int = 5               # years for table growth / CAGR

    # Map
    map_width: int = 1000
    map_height: int = 500
    max_latitude: float = 85.0

    # Subnational code namespace (never a 3-letter country code)
    subnational_prefix: str = 'SUB_'

    # Playback
    play_interval: float = 0.8

    default_selection: List[str] = field(default_factory=lambda: ['USA', 'CHN', 'BRA', 'FRA', 'IND'])

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        tables = dict(DEFAULT_TABLES)
        for (indicator, basis) in DEFAULT_TABLES:
            env_key = f'{indicator.upper()}_{basis.upper()}_TABLE'
            if os.environ.get(env_key):
                tables[(indicator, basis)] = os.environ[env_key]

        return cls(
            tables=tables,
            subnational_tables=parse_subnational_tables(os.environ.get('SUBNATIONAL_TABLES', '')),
            geojson_url=os.environ.get('GEOJSON_URL', DEFAULT_GEOJSON_URL),
            geo_code_property=os.environ.get('GEO_CODE_PROPERTY', 'ISO_A3'),
            geo_name_property=os.environ.get('GEO_NAME_PROPERTY', 'ADMIN'),

            # Allow override via env
            data_cache_ttl=int(os.environ.get('DATA_CACHE_TTL', 1800)),
            http_timeout=float(os.environ.get('HTTP_TIMEOUT', 30.0)),
            first_year=int(os.environ.get('FIRST_YEAR', 1960)),
            last_year=int(os.environ.get('LAST_YEAR', 2024)),
            play_interval=float(os.environ.get('PLAY_INTERVAL', 0.8)),
        )


def parse_subnational_tables(raw: str) -> List[Tuple[str, str, str]]:
    """
    Parse SUBNATIONAL_TABLES ("gdp:constant:data/us_states.csv;...").

    Entries with an unknown indicator or basis are ignored.
    """
    entries = []
    for chunk in raw.split(';'):
        chunk = chunk.strip()
        if not chunk:
            continue
        parts = chunk.split(':', 2)
        if len(parts) != 3:
            print(f"[Config] Ignoring subnational table entry '{chunk}'")
            continue
        indicator, basis, location = (p.strip() for p in parts)
        if indicator not in INDICATORS or basis not in BASES:
            print(f"[Config] Unknown indicator/basis in '{chunk}'")
            continue
        entries.append((indicator, basis, location))
    return entries


# Global config instance
config = Config.from_env()


# Line colours for selected regions (cycled by selection index)
SERIES_COLORS = [
    '#2563eb', '#059669', '#dc2626', '#7c3aed', '#ea580c',
    '#0891b2', '#be185d', '#4f46e5', '#65a30d', '#0d9488',
]

# Sequential blue palette for the choropleth, light -> dark
MAP_PALETTE = ['#dbeafe', '#93c5fd', '#3b82f6', '#1d4ed8', '#1e3a8a']
NO_DATA_COLOR = '#f3f4f6'


# Chart titles / axis labels per (view, basis)
VIEW_TITLES: Dict[str, Dict[str, Tuple[str, str]]] = {
    'gdp': {
        'constant': ('GDP per Capita (Constant 2015 US$)', 'USD'),
        'current': ('GDP per Capita (Current US$)', 'USD'),
    },
    'ppp': {
        'constant': ('GDP per Capita, PPP (Constant 2021 International $)', 'International $'),
        'current': ('GDP per Capita, PPP (Current International $)', 'International $'),
    },
    'ratio': {
        'constant': ('GDP to PPP Ratio (Current Prices)', 'Ratio'),
        'current': ('GDP to PPP Ratio (Current Prices)', 'Ratio'),
    },
    'compare': {
        'constant': ('GDP vs PPP Comparison', 'USD / International $'),
        'current': ('GDP vs PPP Comparison (Current Prices)', 'USD / International $'),
    },
}

VIEWS = ('gdp', 'ppp', 'compare', 'ratio', 'map')
