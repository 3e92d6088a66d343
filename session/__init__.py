"""Session module - Explorer context and map playback."""

from .context import ExplorerContext
from .playback import Playback

__all__ = ['ExplorerContext', 'Playback']
