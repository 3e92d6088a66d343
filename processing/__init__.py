"""Processing module - Parsing, derived metrics, ranking and view-models."""

from .tabular import parse_country_table, parse_subnational_table, tokenize_line
from .metrics import MetricKind, MetricParams, cagr, get_metric, growth, ratio
from .ranking import RankingEntry, build_snapshot, rank
from .analytics import compute_insights, compute_region_analytics, insights_to_text
from .formatter import format_chart_data, format_data_table, format_map_view, render_chart
from .export import export_csv, export_table

__all__ = [
    'parse_country_table',
    'parse_subnational_table',
    'tokenize_line',
    'MetricKind',
    'MetricParams',
    'cagr',
    'get_metric',
    'growth',
    'ratio',
    'RankingEntry',
    'build_snapshot',
    'rank',
    'compute_insights',
    'compute_region_analytics',
    'insights_to_text',
    'format_chart_data',
    'format_data_table',
    'format_map_view',
    'render_chart',
    'export_csv',
    'export_table',
]
