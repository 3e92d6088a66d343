"""
Choropleth Binning - log-scaled values -> discrete palette colours.

    t = ln(value) / ln(max), clamped into [0, 1)
    bucket = min(floor(t * k), k - 1)

Values that are missing or <= 0 get the no-data colour. A degenerate range
(min == max, or ln(max) == 0) puts every defined value in the first bucket.
"""

import math
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Sequence

import numpy as np

from config import MAP_PALETTE, NO_DATA_COLOR

_BELOW_ONE = math.nextafter(1.0, 0.0)


@dataclass
class ChoroplethScale:
    """Colour assignment for one metric snapshot."""

    colors: Dict[str, str] = field(default_factory=dict)
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    palette: Sequence[str] = field(default_factory=lambda: list(MAP_PALETTE))
    no_data_color: str = NO_DATA_COLOR

    @property
    def has_data(self) -> bool:
        return self.max_value is not None

    def color_of(self, code: str) -> str:
        return self.colors.get(code, self.no_data_color)


def _is_defined(value: Optional[float]) -> bool:
    return value is not None and math.isfinite(value) and value > 0


def bucket_index(
    value: Optional[float],
    min_value: Optional[float],
    max_value: Optional[float],
    k: int,
) -> Optional[int]:
    """Palette index for a value, or None for no data."""
    if k <= 0 or not _is_defined(value) or not _is_defined(max_value):
        return None

    log_max = math.log(max_value)
    if min_value == max_value or log_max == 0:
        return 0

    t = math.log(value) / log_max
    t = min(max(t, 0.0), _BELOW_ONE)
    return min(math.floor(t * k), k - 1)


def color_for(
    value: Optional[float],
    min_value: Optional[float],
    max_value: Optional[float],
    palette: Sequence[str] = MAP_PALETTE,
    no_data_color: str = NO_DATA_COLOR,
) -> str:
    """Colour for one value given the snapshot's min/max."""
    idx = bucket_index(value, min_value, max_value, len(palette))
    return no_data_color if idx is None else palette[idx]


def build_scale(
    values: Mapping[str, Optional[float]],
    palette: Sequence[str] = MAP_PALETTE,
    no_data_color: str = NO_DATA_COLOR,
) -> ChoroplethScale:
    """
    Colour every region of a snapshot.

    min/max are taken over defined, positive values only. With no such
    value every region gets the no-data colour.
    """
    scale = ChoroplethScale(palette=list(palette), no_data_color=no_data_color)
    codes = list(values)
    raw = np.array([values[c] if values[c] is not None else np.nan for c in codes], dtype=float)
    defined = np.isfinite(raw) & (raw > 0)

    if not defined.any():
        scale.colors = {code: no_data_color for code in codes}
        return scale

    scale.min_value = float(raw[defined].min())
    scale.max_value = float(raw[defined].max())

    k = len(palette)
    log_max = math.log(scale.max_value)
    if scale.min_value == scale.max_value or log_max == 0:
        buckets = np.zeros(len(codes), dtype=int)
    else:
        with np.errstate(invalid='ignore', divide='ignore'):
            t = np.log(np.where(defined, raw, 1.0)) / log_max
        t = np.clip(t, 0.0, _BELOW_ONE)
        buckets = np.minimum(np.floor(t * k).astype(int), k - 1)

    scale.colors = {
        code: palette[int(bucket)] if ok else no_data_color
        for code, bucket, ok in zip(codes, buckets, defined)
    }
    return scale
