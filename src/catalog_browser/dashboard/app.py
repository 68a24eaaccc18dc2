"""BrowserApp: assembles the Panel template and serves the catalog browser."""

from __future__ import annotations

import logging

import panel as pn

from ..config import BrowserConfig
from ..core.engine import SelectionEngine
from ..display_utils import display_frame, empty_frame, prettify_name
from ..source.artic import ArticPageSource
from ..source.base import PageSource
from .controller import PageController
from .state import BrowserState

log = logging.getLogger(__name__)

_BROWSER_CSS = """
.cb-summary { font-size: 13px; color: #5f6368; }
.cb-summary b { color: #1a73e8; }
.cb-pending { color: #e37400; margin-left: 6px; }
.cb-error { color: #d93025; font-size: 12px; }
"""


class BrowserApp:
    """Interactive catalog browser.

    Assembles a Panel MaterialTemplate with:
    - Sidebar: custom "select N rows" card
    - Main area: header summary, records table, previous/next pager
    - Selection bridge: table checkboxes → BrowserState → table checkboxes

    One app instance is one browsing session. serve() builds a new instance
    for every browser tab, so closing one tab never stops another.
    """

    def __init__(
        self,
        source: PageSource | None = None,
        config: BrowserConfig | None = None,
    ) -> None:
        pn.extension("tabulator", sizing_mode="stretch_width")
        if _BROWSER_CSS not in pn.config.raw_css:
            pn.config.raw_css.append(_BROWSER_CSS)

        self.config = config if config is not None else BrowserConfig()
        # A caller-supplied source is shared by every session and never closed here
        self._shared_source = source
        self._owns_source = source is None
        if source is None:
            source = ArticPageSource(
                base_url=self.config.base_url,
                fields=self.config.fields,
                timeout=self.config.timeout,
            )
        self.source = source
        self.columns = [f for f in self.config.fields if f != "id"]

        self.controller = PageController(source, page_size=self.config.page_size)
        self.state = BrowserState(self.controller, SelectionEngine())

        # Guards against echoing our own checkbox updates back as user edits
        self._syncing_table = False

        self.table = pn.widgets.Tabulator(
            empty_frame(self.columns),
            selectable="checkbox",
            show_index=False,
            disabled=True,
            titles={c: prettify_name(c) for c in self.columns},
            sizing_mode="stretch_width",
            min_height=300,
        )
        self.summary = pn.pane.HTML(self._summary_html(), css_classes=["cb-summary"])
        self.error_text = pn.pane.HTML("", css_classes=["cb-error"])
        self.page_label = pn.pane.Markdown("Page 1", width=120)
        self.prev_button = pn.widgets.Button(name="‹ Previous", width=100, disabled=True)
        self.next_button = pn.widgets.Button(name="Next ›", width=100, disabled=True)

        self.count_input = pn.widgets.IntInput(
            name="Select rows (current page + future pages)",
            value=None, start=1, placeholder="Enter number...",
        )
        self.select_button = pn.widgets.Button(name="Select", button_type="primary")
        self.status = pn.pane.Markdown("", css_classes=["cb-error"])

        self._wire()

    def _wire(self) -> None:
        s = self.state
        c = self.controller

        self.table.param.watch(self._on_table_selection, "selection")
        c.param.watch(self._on_page_changed, "page")
        c.param.watch(lambda e: setattr(self.table, "loading", e.new), "loading")
        c.param.watch(
            lambda e: setattr(self.error_text, "object", e.new), "error",
        )
        s.param.watch(self._on_selection_changed, ["selected_count", "pending_debt"])
        s.param.watch(lambda e: setattr(self.status, "object", e.new), "status_text")

        # Input box <-> state.custom_select_count
        self.count_input.param.watch(
            lambda e: setattr(s, "custom_select_count", e.new), "value",
        )
        s.param.watch(
            lambda e: setattr(self.count_input, "value", e.new), "custom_select_count",
        )

        self.select_button.on_click(lambda event: s.request_bulk_select())
        self.prev_button.on_click(self._on_previous)
        self.next_button.on_click(self._on_next)

    # --- Event handlers ---

    async def _on_previous(self, event) -> None:
        await self.controller.previous_page()

    async def _on_next(self, event) -> None:
        await self.controller.next_page()

    async def _on_load(self) -> None:
        await self.controller.load_page(self.controller.page_index)

    def _on_session_destroyed(self, session_context) -> None:
        log.debug("Session destroyed, closing browser state")
        self.state.close()
        if self._owns_source:
            self.source.close()

    def _on_table_selection(self, event) -> None:
        if self._syncing_table:
            return
        self.state.update_visible_selection_indices(event.new)

    def _on_page_changed(self, event) -> None:
        page = event.new
        if page is None:
            return
        self._syncing_table = True
        try:
            self.table.value = display_frame(page, self.columns)
            self.table.selection = self.state.visible_selection_indices()
        finally:
            self._syncing_table = False
        c = self.controller
        self.page_label.object = f"Page {c.page_index} of {max(c.page_count, 1)}"
        self.prev_button.disabled = not c.has_previous
        self.next_button.disabled = not c.has_next

    def _on_selection_changed(self, *events) -> None:
        self.summary.object = self._summary_html()
        self._syncing_table = True
        try:
            self.table.selection = self.state.visible_selection_indices()
        finally:
            self._syncing_table = False

    def _summary_html(self) -> str:
        s = self.state
        html = f"Selected: <b>{s.selected_count}</b>"
        if s.pending_debt > 0:
            html += f'<span class="cb-pending">(Pending: {s.pending_debt})</span>'
        return html

    # --- Layout ---

    def _build_template(self) -> pn.template.MaterialTemplate:
        """Build the Panel MaterialTemplate layout."""
        template = pn.template.MaterialTemplate(
            title="Catalog Browser",
            sidebar=[
                pn.Card(
                    self.count_input,
                    self.select_button,
                    self.status,
                    title="Custom Selection",
                    collapsible=False,
                ),
            ],
            sidebar_width=280,
            header_background="#fafafa",
            header_color="#202124",
        )
        template.main.append(
            pn.Column(
                pn.Row(self.summary, self.error_text),
                self.table,
                pn.Row(self.prev_button, self.page_label, self.next_button),
                sizing_mode="stretch_width",
            )
        )
        pn.state.onload(self._on_load)
        pn.state.on_session_destroyed(self._on_session_destroyed)
        return template

    def new_session(self) -> BrowserApp:
        """Build an independent session sharing this app's source and config."""
        return type(self)(source=self._shared_source, config=self.config)

    def _session_template(self) -> pn.template.MaterialTemplate:
        return self.new_session()._build_template()

    def serve(self, port: int = 0, show: bool = True, **kwargs) -> None:
        """Start the Panel server and optionally open the browser.

        Parameters
        ----------
        port : int
            Port number. 0 = auto-assign.
        show : bool
            Whether to open the browser automatically.
        **kwargs
            Additional keyword arguments passed to pn.serve().
        """
        try:
            pn.serve(
                self._session_template,
                port=port or 0,
                show=show,
                title="Catalog Browser",
                **kwargs,
            )
        finally:
            if self._owns_source:
                self.source.close()
