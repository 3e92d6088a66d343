"""Geo module - Boundary features, map projection and choropleth binning."""

from .features import GeoFeature, features_from_geojson
from .projection import project_feature, project_point
from .choropleth import ChoroplethScale, build_scale, color_for

__all__ = [
    'GeoFeature',
    'features_from_geojson',
    'project_feature',
    'project_point',
    'ChoroplethScale',
    'build_scale',
    'color_for',
]
