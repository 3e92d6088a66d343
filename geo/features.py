"""Boundary features from a GeoJSON FeatureCollection."""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from config import config

logger = logging.getLogger(__name__)

# Natural Earth uses "-99" for territories without an ISO code
_INVALID_CODES = {'', '-99', '-1'}


@dataclass
class GeoFeature:
    code: Optional[str]
    name: str
    geometry: Optional[dict]


def _first_property(properties: dict, keys: Sequence[str]) -> Optional[str]:
    for key in keys:
        value = properties.get(key)
        if value is not None and str(value).strip() not in _INVALID_CODES:
            return str(value).strip()
    return None


def features_from_geojson(
    collection: Optional[dict],
    code_property: Optional[str] = None,
    name_property: Optional[str] = None,
) -> List[GeoFeature]:
    """
    Extract (code, name, geometry) from each feature.

    The code / name property keys vary by provider; the configured key is
    tried first, then the configured fallbacks.
    """
    if not collection:
        return []

    code_keys = [code_property or config.geo_code_property, *config.geo_code_fallbacks]
    name_keys = [name_property or config.geo_name_property, *config.geo_name_fallbacks]

    features = []
    for raw in collection.get('features') or []:
        properties = raw.get('properties') or {}
        code = _first_property(properties, code_keys)
        name = _first_property(properties, name_keys) or code or ''
        features.append(GeoFeature(code=code, name=name, geometry=raw.get('geometry')))

    missing = sum(1 for f in features if f.code is None)
    if missing:
        logger.info(f"{missing} of {len(features)} boundary features have no region code")
    return features
