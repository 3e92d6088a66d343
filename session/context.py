"""
Explorer Context - the user's current selection and view settings.

One context is owned by the application and passed to every query and
render call. It is only mutated in response to discrete user actions.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional

from config import BASES, VIEWS, config


@dataclass
class ExplorerContext:
    """Selection, view, price basis, year range and map year."""

    selected: List[str] = field(default_factory=lambda: list(config.default_selection))
    view: str = 'gdp'
    basis: str = 'constant'
    year_start: int = config.default_year_start
    year_end: int = config.default_year_end
    map_year: int = config.default_map_year
    chart: Optional[Any] = None     # live handle from the chart renderer

    def add_regions(self, codes: List[str]) -> None:
        for code in codes:
            if code not in self.selected:
                self.selected.append(code)

    def remove_region(self, code: str) -> None:
        self.selected = [c for c in self.selected if c != code]

    def set_view(self, view: str) -> None:
        if view not in VIEWS:
            raise ValueError(f"Unknown view '{view}'")
        self.view = view

    def set_basis(self, basis: str) -> None:
        if basis not in BASES:
            raise ValueError(f"Unknown price basis '{basis}'")
        self.basis = basis

    def set_year_start(self, year: int) -> None:
        """Move the range start; pushes the end forward if they would cross."""
        self.year_start = _clamp(year, config.first_year, config.last_year)
        if self.year_start >= self.year_end:
            self.year_end = min(config.last_year, self.year_start + 1)
            if self.year_start >= self.year_end:
                self.year_start = self.year_end - 1

    def set_year_end(self, year: int) -> None:
        """Move the range end; pulls the start back if they would cross."""
        self.year_end = _clamp(year, config.first_year, config.last_year)
        if self.year_end <= self.year_start:
            self.year_start = max(config.first_year, self.year_end - 1)
            if self.year_end <= self.year_start:
                self.year_end = self.year_start + 1

    def set_map_year(self, year: int) -> None:
        self.map_year = _clamp(year, config.first_year, config.last_year)

    def next_map_year(self) -> int:
        """Advance the map year by one, wrapping to the first year."""
        year = self.map_year + 1
        self.map_year = config.first_year if year > config.last_year else year
        return self.map_year

    @property
    def years(self) -> List[int]:
        return list(range(self.year_start, self.year_end + 1))

    def to_dict(self) -> dict:
        return {
            'selected': list(self.selected),
            'view': self.view,
            'basis': self.basis,
            'year_start': self.year_start,
            'year_end': self.year_end,
            'map_year': self.map_year,
        }


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, int(value)))
