"""inipack TUI Widgets - Custom panels for the config viewer."""

from __future__ import annotations

from rich.table import Table
from textual.app import ComposeResult
from textual.message import Message
from textual.reactive import reactive
from textual.widgets import Label, ListItem, ListView, Static

from inipack.cursor import Record

GLOBAL_LABEL = "(global)"


class SummaryPanel(Static):
    """Sidebar panel showing pair/section counts and the buffer fingerprint."""

    DEFAULT_CSS = """
    SummaryPanel {
        width: 32;
        border: solid $accent;
        padding: 1;
        overflow-y: auto;
    }
    SummaryPanel .summary-title {
        text-style: bold;
        color: $text;
        margin-bottom: 1;
    }
    SummaryPanel .summary-key {
        color: $text-muted;
    }
    SummaryPanel .summary-val {
        color: $text;
    }
    """

    def __init__(self, title: str, summary: dict[str, str], **kwargs) -> None:
        super().__init__(**kwargs)
        self._heading = title
        self._summary = summary

    def compose(self) -> ComposeResult:
        yield Label(self._heading, classes="summary-title")
        for key, val in self._summary.items():
            display = val[:21] + "..." if len(val) > 24 else val
            yield Label(f"{key}:", classes="summary-key")
            yield Label(f"  {display}", classes="summary-val")


class SectionList(ListView):
    """List of section names. The global pseudo-section maps to None."""

    DEFAULT_CSS = """
    SectionList {
        width: 24;
        border: solid $accent;
    }
    SectionList > ListItem {
        padding: 0 1;
    }
    SectionList > ListItem.--highlight {
        background: $accent;
    }
    """

    class SectionSelected(Message):
        """Fired when a section is selected."""

        def __init__(self, section: str | None, section_index: int) -> None:
            self.section = section
            self.section_index = section_index
            super().__init__()

    def __init__(self, sections: list[str | None], **kwargs) -> None:
        self._groups = sections
        super().__init__(**kwargs)

    def compose(self) -> ComposeResult:
        for name in self._groups:
            yield ListItem(Label(GLOBAL_LABEL if name is None else f"[{name}]"))

    def _post_current(self) -> None:
        idx = self.index or 0
        if 0 <= idx < len(self._groups):
            self.post_message(self.SectionSelected(self._groups[idx], idx))

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        self._post_current()

    def on_list_view_highlighted(self, event: ListView.Highlighted) -> None:
        self._post_current()


class RecordPanel(Static):
    """Key/value table for the selected section."""

    DEFAULT_CSS = """
    RecordPanel {
        border: solid $accent;
        padding: 1;
        overflow: auto;
    }
    RecordPanel .records-title {
        text-style: bold;
        color: $accent;
        margin-bottom: 1;
    }
    """

    current_section = reactive("")

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._title_widget: Label | None = None
        self._body_widget: Static | None = None

    def compose(self) -> ComposeResult:
        self._title_widget = Label("Select a section", classes="records-title")
        self._body_widget = Static("")
        yield self._title_widget
        yield self._body_widget

    def show_records(self, section: str | None, records: list[Record]) -> None:
        title = GLOBAL_LABEL if section is None else f"[{section}]"
        self.current_section = title
        if self._title_widget:
            self._title_widget.update(f"--- {title} ({len(records)} pairs) ---")
        if self._body_widget:
            self._body_widget.update(self.build_table(records))
        self.scroll_home()

    @staticmethod
    def build_table(records: list[Record]) -> Table:
        table = Table(expand=True)
        table.add_column("key", style="bold")
        table.add_column("value")
        for record in records:
            table.add_row(record.key, record.value)
        return table
