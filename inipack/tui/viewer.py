"""inipack TUI Viewer - Textual app with 3-panel layout."""

from __future__ import annotations

import sys
from pathlib import Path

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widgets import Footer, Header, Input

from inipack.config import IniConfig
from inipack.cursor import Record
from inipack.tui.widgets import RecordPanel, SectionList, SummaryPanel


def section_groups(config: IniConfig) -> list[str | None]:
    """Section names for the list. None stands for pairs before any header."""
    groups: list[str | None] = []
    first = config.begin()
    if not first.at_end and first.record.section is None:
        groups.append(None)
    groups.extend(config.sections())
    return groups


def group_records(config: IniConfig, section: str | None) -> list[Record]:
    """Every record of ``section``, including reopened runs."""
    return [r for r in config if r.section == section]


class IniViewerApp(App):
    """TUI viewer for INI configs. 3-panel layout with keyboard navigation."""

    TITLE = "inipack Viewer"
    CSS = """
    Screen {
        layout: vertical;
    }
    #main-area {
        height: 1fr;
    }
    #search-bar {
        dock: bottom;
        display: none;
        height: 3;
        padding: 0 1;
    }
    #search-bar.visible {
        display: block;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit", show=True),
        Binding("slash", "toggle_search", "Search", show=True),
        Binding("escape", "close_search", "Close search", show=False),
        Binding("j", "next_section", "Next", show=True),
        Binding("k", "prev_section", "Prev", show=True),
    ]

    def __init__(self, config: IniConfig, file_name: str = "", **kwargs) -> None:
        super().__init__(**kwargs)
        self._ini = config
        self._file_name = file_name
        self._all_sections = section_groups(config)
        self._sections = list(self._all_sections)

    def compose(self) -> ComposeResult:
        if self._file_name:
            self.title = f"inipack Viewer - {self._file_name}"

        layout = self._ini.layout
        summary = {
            "pairs": str(layout.pairs),
            "sections": str(layout.sections),
            "buffer": f"{layout.capacity} bytes",
            "fingerprint": self._ini.fingerprint(),
        }

        yield Header()

        with Horizontal(id="main-area"):
            yield SummaryPanel(title=self._file_name or "config", summary=summary, id="summary")
            yield SectionList(sections=self._sections, id="sections")
            yield RecordPanel(id="records")

        yield Input(placeholder="Search sections and keys... (Escape to close)", id="search-bar")
        yield Footer()

    def on_mount(self) -> None:
        """Auto-select first section on mount."""
        if self._sections:
            self._show(self._sections[0])
            self.query_one("#sections", SectionList).focus()

    def _show(self, section: str | None) -> None:
        panel = self.query_one("#records", RecordPanel)
        panel.show_records(section, group_records(self._ini, section))

    def on_section_list_section_selected(self, event: SectionList.SectionSelected) -> None:
        self._show(event.section)

    def action_next_section(self) -> None:
        self.query_one("#sections", SectionList).action_cursor_down()

    def action_prev_section(self) -> None:
        self.query_one("#sections", SectionList).action_cursor_up()

    def action_toggle_search(self) -> None:
        """Show/hide the search bar."""
        search = self.query_one("#search-bar", Input)
        search.toggle_class("visible")
        if search.has_class("visible"):
            search.focus()
        else:
            search.value = ""
            self._restore_sections()
            self.query_one("#sections", SectionList).focus()

    def action_close_search(self) -> None:
        search = self.query_one("#search-bar", Input)
        search.remove_class("visible")
        search.value = ""
        self._restore_sections()
        self.query_one("#sections", SectionList).focus()

    def on_input_changed(self, event: Input.Changed) -> None:
        """Filter section names as the user types."""
        if event.input.id != "search-bar":
            return
        query = event.value.lower().strip()
        if not query:
            self._restore_sections()
            return
        filtered = [s for s in self._all_sections if s is not None and query in s.lower()]
        self._update_section_list(filtered)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Search section names, keys and values."""
        if event.input.id != "search-bar":
            return
        query = event.value.lower().strip()
        if not query:
            return
        matches = []
        for section in self._all_sections:
            if section is not None and query in section.lower():
                matches.append(section)
                continue
            for record in group_records(self._ini, section):
                if query in record.key.lower() or query in record.value.lower():
                    matches.append(section)
                    break
        self._update_section_list(matches)

    def _update_section_list(self, sections: list[str | None]) -> None:
        old = self.query_one("#sections", SectionList)
        new_list = SectionList(sections=sections, id="sections")
        old.remove()
        self.query_one("#main-area", Horizontal).mount(new_list, before="#records")
        if sections:
            self._show(sections[0])

    def _restore_sections(self) -> None:
        self._update_section_list(self._all_sections)


def run_viewer(path: str | Path) -> None:
    """Launch the TUI viewer."""
    from inipack.spec import MAX_SOURCE_SIZE

    path = Path(path)
    if not path.is_file():
        print(f"Error: File not found: {path}", file=sys.stderr)
        sys.exit(1)
    if path.stat().st_size > MAX_SOURCE_SIZE:
        print(f"Error: File exceeds maximum {MAX_SOURCE_SIZE} bytes: {path}", file=sys.stderr)
        sys.exit(1)
    try:
        config = IniConfig(path.read_bytes())
    except ValueError as e:
        print(f"Error: {path}: {e}", file=sys.stderr)
        sys.exit(1)

    app = IniViewerApp(config, file_name=path.name)
    app.run()
