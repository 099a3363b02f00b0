"""Interactive Textual app hosting a single editing session."""

from __future__ import annotations

from typing import Optional

try:  # pragma: no cover - imported only when the TUI is run
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Input, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use line_editor.adapters.textual.app"
    ) from exc

from line_editor.config import EditorConfig
from line_editor.interpreter import Interpreter

from .controller import TextualEditorAdapter, TextualUIHooks


class EditorApp(App[None]):
    """Type protocol lines (``1 abc``, ``2 1``, ``3 1``, ``4``) and watch the buffer."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		border: round $accent;
		padding: 1 1;
		content-align: left top;
		overflow: auto;
	}

	#output-line {
		height: 1;
		padding: 0 1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, *, config: Optional[EditorConfig] = None) -> None:
        super().__init__()
        self.config = config or EditorConfig()
        self.adapter: TextualEditorAdapter | None = None
        self._buffer_widget: Static | None = None
        self._output_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view", markup=False)
            yield self._buffer_widget
        self._output_widget = Static("", id="output-line", markup=False)
        self._status_widget = Static("", id="status-line", markup=False)
        yield self._output_widget
        yield self._status_widget
        yield Input(placeholder="1 <text> | 2 <n> | 3 <i> | 4", id="command-input")
        yield Footer()

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            show_output=self._show_output,
        )
        self.adapter = TextualEditorAdapter(Interpreter.from_config(self.config), hooks)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if not self.adapter:
            return
        self.adapter.submit_line(event.value)
        event.input.value = ""

    def _update_buffer(self, text: str) -> None:
        if self._buffer_widget:
            self._buffer_widget.update(text)

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)

    def _show_output(self, output: str) -> None:
        if self._output_widget:
            self._output_widget.update(f"> {output}")
