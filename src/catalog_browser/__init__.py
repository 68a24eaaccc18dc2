"""catalog-browser: paginated catalog view with deferred cross-page selection."""

from ._version import __version__
from .core.records import Page, Record
from .core.selection_store import SelectionStore
from .core.engine import SelectionEngine
from .core.validation import InvalidRequest
from .source import ArticPageSource, FetchError, FramePageSource, PageSource
from .config import BrowserConfig


def explore(source=None, page_size=None, port=0, show=True):
    """Launch the catalog browser in a web browser.

    Parameters
    ----------
    source : PageSource or pd.DataFrame, optional
        Where pages come from. A DataFrame (index = record ids) is served
        locally; the default is the Art Institute of Chicago API.
    page_size : int, optional
        Records per page. Defaults to the configured page size.
    port : int
        Port number. 0 = auto-assign.
    show : bool
        Whether to open the browser automatically.
    """
    import pandas as pd

    from .dashboard.app import BrowserApp

    config = BrowserConfig.from_env()
    if page_size is not None:
        config.page_size = page_size
    if isinstance(source, pd.DataFrame):
        config.fields = ["id"] + [str(c) for c in source.columns]
        source = FramePageSource(source)

    app = BrowserApp(source=source, config=config)
    app.serve(port=port, show=show)


__all__ = [
    "__version__",
    "explore",
    "Page",
    "Record",
    "SelectionStore",
    "SelectionEngine",
    "InvalidRequest",
    "PageSource",
    "ArticPageSource",
    "FramePageSource",
    "FetchError",
    "BrowserConfig",
]
