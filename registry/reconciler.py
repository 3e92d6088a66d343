"""
Region Reconciler - Merge country and subnational stores into one.

Subnational rows have no code of their own, so one is synthesized from the
region name: SUB_ + the uppercased name with whitespace runs replaced by "_".
Synthesized codes contain "_" and are longer than three characters, so they
never equal a 3-letter country code.

Merge policy is last-write-wins. Re-merging the same source reproduces the
same entries; an overwrite coming from a *different* origin is a collision
and is logged. Rows of one table that share a code (see
SeriesStore.duplicates) are collisions of that table with itself.
"""

import logging
import re
from typing import Dict, Iterable, Optional, Set, Tuple

from config import config
from .series_store import SeriesStore

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r'\s+')
_COUNTRY_CODE = re.compile(r'^[A-Z]{3}$')


def code_of(name: str, prefix: Optional[str] = None) -> str:
    """Deterministic subnational code for a region name."""
    prefix = config.subnational_prefix if prefix is None else prefix
    return prefix + _WHITESPACE.sub('_', name.strip()).upper()


def is_country_code(code: str) -> bool:
    return bool(_COUNTRY_CODE.match(code))


class RegionReconciler:
    """
    Builds a combined store from one country store plus subnational stores.

    Tracks the origin of every code so collisions can be told apart from
    idempotent re-merges.
    """

    def __init__(self, country_store: SeriesStore, label: Optional[str] = None):
        self.store = country_store.copy(label)
        self._origins: Dict[str, str] = {code: 'country' for code in country_store.codes()}
        self.collisions: list = []
        self._merged: Set[str] = set()

    def merge(self, source_id: str, subnational: SeriesStore) -> int:
        """
        Merge one parsed subnational table.

        Args:
            source_id: Stable identifier of the table (its location)
            subnational: Store keyed by synthesized codes

        Returns:
            Number of entries written
        """
        if source_id not in self._merged:
            for code, replaced, kept in subnational.duplicates:
                logger.warning(f"Region code collision on {code} within {source_id}: '{kept}' overwrites '{replaced}'")
                self.collisions.append((code, source_id, source_id))
            self._merged.add(source_id)

        written = 0
        for code, series in subnational.items():
            if is_country_code(code):
                logger.error(f"Synthesized code {code} from {source_id} looks like a country code")

            previous_origin = self._origins.get(code)
            if previous_origin is not None and previous_origin != source_id:
                logger.warning(f"Region code collision on {code}: {source_id} overwrites {previous_origin}")
                self.collisions.append((code, previous_origin, source_id))

            self.store.put(series)
            self._origins[code] = source_id
            written += 1

        return written

    def origin(self, code: str) -> Optional[str]:
        return self._origins.get(code)


def reconcile(
    country_store: SeriesStore,
    subnational: Iterable[Tuple[str, SeriesStore]],
    label: Optional[str] = None,
) -> SeriesStore:
    """Combined store for country + region comparison views."""
    reconciler = RegionReconciler(country_store, label)
    for source_id, store in subnational:
        reconciler.merge(source_id, store)
    return reconciler.store
