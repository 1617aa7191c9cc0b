"""Textual front end: shows session state and turns key presses into intents."""

from __future__ import annotations

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Static, TextArea

from gridfolio.services.session import Create, Delete, Edit, EditingSession, Intent, intent_for_key, shortcuts_for

from . import render


class GridfolioApp(App):
    """Title list | editor | preview, with a shortcut bar underneath."""

    CSS = """
    #columns {
        height: 1fr;
    }

    #titles {
        width: 20%;
        border: round white;
        overflow-y: auto;
    }

    #middle {
        width: 50%;
    }

    #dialog {
        height: auto;
        border: round cyan;
        display: none;
    }

    #editor {
        height: 1fr;
    }

    #preview {
        width: 30%;
        border: round white;
        overflow: hidden;
    }

    #status {
        height: 3;
        border: round white;
    }
    """

    BINDINGS = [
        Binding("escape", "leave", "Back", priority=True),
    ]

    def __init__(self, session: EditingSession) -> None:
        super().__init__()
        self.session = session

    def compose(self) -> ComposeResult:
        yield Horizontal(
            Static(id="titles"),
            Vertical(
                Static(id="dialog"),
                TextArea(self.session.buffer_text, id="editor"),
                id="middle",
            ),
            Static(id="preview"),
            id="columns",
        )
        yield Static(id="status")

    def on_mount(self) -> None:
        self.query_one("#titles", Static).border_title = "Title"
        self.query_one("#preview", Static).border_title = "Preview"
        self.refresh_view()

    # Input -----------------------------------------------------------------------

    def action_leave(self) -> None:
        mode = self.session.mode
        if isinstance(mode, Edit):
            self.apply(Intent.COMMIT)
        elif isinstance(mode, (Create, Delete)):
            self.apply(Intent.CANCEL)

    def on_key(self, event: events.Key) -> None:
        if isinstance(self.session.mode, Edit):
            return
        key = event.character if event.character and event.character.isprintable() else event.key
        intent = intent_for_key(self.session.mode, key)
        if intent is None:
            return
        event.stop()
        event.prevent_default()
        self.apply(intent)

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        if self.session.edit_buffer(event.text_area.text):
            event.text_area.border_title = render.editor_title(self.session)

    def apply(self, intent: Intent) -> None:
        self.session.dispatch(intent)
        if self.session.finished:
            self.exit()
            return
        self.refresh_view()

    # Output ----------------------------------------------------------------------

    def refresh_view(self) -> None:
        session = self.session
        mode = session.mode
        editing = isinstance(mode, Edit)

        titles = self.query_one("#titles", Static)
        titles.update(render.title_list(session))
        titles.styles.border = ("round", "yellow" if not editing else "white")

        dialog = self.query_one("#dialog", Static)
        if isinstance(mode, Create):
            dialog.update(render.create_menu(session))
            dialog.display = True
        elif isinstance(mode, Delete):
            dialog.update(render.delete_prompt(session))
            dialog.display = True
        else:
            dialog.display = False

        editor = self.query_one("#editor", TextArea)
        if editor.text != session.buffer_text:
            editor.load_text(session.buffer_text)
        editor.read_only = not editing
        editor.border_title = render.editor_title(session)
        if editing:
            editor.focus()
        else:
            self.set_focus(None)

        preview = self.query_one("#preview", Static)
        visible_rows = max(1, (preview.size.height or 1) // render.CELL_HEIGHT)
        preview.update(render.preview_canvas(session, visible_rows=visible_rows))

        self.query_one("#status", Static).update(shortcuts_for(mode))


def run_editor(session: EditingSession) -> None:
    """Block until the session reaches Quit (or the app exits another way)."""

    GridfolioApp(session).run()
