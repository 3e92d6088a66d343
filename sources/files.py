"""
Local File Source - tables shipped next to the app (the WDI bulk CSVs).
"""

import asyncio
from pathlib import Path

from .base import DataSource, RawTable


class LocalFileSource(DataSource):
    """Reads local paths, resolved against a base directory."""

    def __init__(self, base_dir: Path = Path('.')):
        self._base_dir = Path(base_dir)

    @property
    def name(self) -> str:
        return "Local files"

    def supports(self, location: str) -> bool:
        return '://' not in location or location.lower().startswith('file://')

    def _resolve(self, location: str) -> Path:
        if location.lower().startswith('file://'):
            location = location[len('file://'):]
        path = Path(location)
        return path if path.is_absolute() else self._base_dir / path

    async def fetch(self, location: str) -> RawTable:
        path = self._resolve(location)
        try:
            # utf-8-sig: WDI downloads start with a BOM
            text = await asyncio.to_thread(path.read_text, encoding='utf-8-sig')
        except (OSError, UnicodeDecodeError) as e:
            return RawTable(location=location, error=f"{type(e).__name__}: {e}")
        return RawTable(location=location, text=text)
