"""Page sources: the only I/O boundary of the browser."""

from .base import FetchError, PageSource
from .artic import ArticPageSource
from .frame import FramePageSource

__all__ = ["FetchError", "PageSource", "ArticPageSource", "FramePageSource"]
