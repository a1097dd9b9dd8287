"""Tests for commands, undo/redo, sessions and the clipboard."""

from ascii_studio.config import EditorConfig
from ascii_studio.document.document import Document
from ascii_studio.history.clipboard import Clipboard
from ascii_studio.history.command import (
    CellChange,
    CellChangeCommand,
    LayerStructureCommand,
    run_structural,
)
from ascii_studio.history.session import EditorSession, SessionManager
from ascii_studio.history.undo import HistoryStacks, UndoRedoManager

from conftest import cell


def draw(doc: Document, history: UndoRedoManager, x: int, y: int, char: str) -> CellChangeCommand:
    layer = doc.layers.get_active_layer()
    command = CellChangeCommand(doc, layer.id, [CellChange(x, y, layer.get_cell(x, y), cell(char))])
    history.perform(command)
    return command


class TestCellChangeCommand:
    def test_default_description(self, small_doc: Document) -> None:
        command = CellChangeCommand(small_doc, "layer_1", [CellChange(0, 0, None, cell('a'))] * 3)
        assert command.description == "Draw 3 cell(s)"

    def test_execute_and_undo_restore_absence(self, small_doc: Document) -> None:
        layer = small_doc.layers.layers[0]
        command = CellChangeCommand(small_doc, layer.id, [CellChange(1, 1, None, cell('X'))])
        command.execute()
        assert layer.get_cell(1, 1).char == 'X'
        command.undo()
        assert layer.get_cell(1, 1) is None

    def test_undo_applies_in_reverse(self, small_doc: Document) -> None:
        layer = small_doc.layers.layers[0]
        changes = [
            CellChange(0, 0, None, cell('A')),
            CellChange(0, 0, cell('A'), cell('B')),
        ]
        command = CellChangeCommand(small_doc, layer.id, changes)
        command.execute()
        assert layer.get_cell(0, 0).char == 'B'
        command.undo()
        assert layer.get_cell(0, 0) is None

    def test_replay_ignores_lock(self, small_doc: Document) -> None:
        layer = small_doc.layers.layers[0]
        command = CellChangeCommand(small_doc, layer.id, [CellChange(0, 0, None, cell('L'))])
        command.execute()
        layer.locked = True
        command.undo()
        assert layer.get_cell(0, 0) is None
        command.execute()
        assert layer.get_cell(0, 0).char == 'L'

    def test_missing_layer_is_noop(self, small_doc: Document) -> None:
        command = CellChangeCommand(small_doc, "layer_404", [CellChange(0, 0, None, cell('L'))])
        command.execute()
        command.undo()
        assert small_doc.layers.layers[0].is_empty()

    def test_emits_document_changed(self, small_doc: Document) -> None:
        hits = []
        small_doc.changed.connect(lambda: hits.append(True))
        layer_id = small_doc.layers.active_layer_id
        CellChangeCommand(small_doc, layer_id, [CellChange(0, 0, None, cell('c'))]).execute()
        assert hits == [True]


class TestUndoRedoManager:
    def test_undo_redo_round_trip(self, small_doc: Document) -> None:
        history = UndoRedoManager()
        draw(small_doc, history, 2, 2, 'U')
        assert history.can_undo() and not history.can_redo()

        assert history.undo() is not None
        assert small_doc.get_active_cell(2, 2) is None
        assert history.can_redo()

        history.redo()
        assert small_doc.get_active_cell(2, 2).char == 'U'

    def test_empty_stacks_return_none(self) -> None:
        history = UndoRedoManager()
        assert history.undo() is None
        assert history.redo() is None

    def test_new_command_clears_redo(self, small_doc: Document) -> None:
        history = UndoRedoManager()
        draw(small_doc, history, 0, 0, 'a')
        history.undo()
        draw(small_doc, history, 1, 0, 'b')
        assert not history.can_redo()

    def test_depth_cap_drops_oldest(self, small_doc: Document) -> None:
        history = UndoRedoManager()
        commands = [draw(small_doc, history, x, 0, str(x)) for x in range(10)]
        commands.append(draw(small_doc, history, 0, 1, 'k'))
        assert len(history.undo_stack) == 10
        assert history.undo_stack[0] is commands[1]
        assert history.undo_stack[-1] is commands[-1]

        while history.undo():
            pass
        # The very first edit can no longer be undone
        assert small_doc.get_active_cell(0, 0).char == '0'
        assert small_doc.get_active_cell(1, 0) is None

    def test_execute_does_not_run_command(self, small_doc: Document) -> None:
        history = UndoRedoManager()
        layer_id = small_doc.layers.active_layer_id
        history.execute(CellChangeCommand(small_doc, layer_id, [CellChange(0, 0, None, cell('z'))]))
        assert small_doc.get_active_cell(0, 0) is None
        assert history.can_undo()

    def test_stack_updated_signal(self, small_doc: Document) -> None:
        history = UndoRedoManager()
        hits = []
        history.stack_updated.connect(lambda: hits.append(True))
        draw(small_doc, history, 0, 0, 'a')
        history.undo()
        history.redo()
        history.clear()
        assert len(hits) == 4
        assert not history.can_undo()

    def test_custom_depth(self, small_doc: Document) -> None:
        history = UndoRedoManager(max_history=2)
        for x in range(4):
            draw(small_doc, history, x, 0, 'd')
        assert len(history.undo_stack) == 2

    def test_swapping_stacks(self, small_doc: Document) -> None:
        history = UndoRedoManager()
        hits = []
        history.stack_updated.connect(lambda: hits.append(True))
        draw(small_doc, history, 0, 0, 'a')
        saved = history.stacks

        history.stacks = HistoryStacks()
        assert not history.can_undo()
        draw(small_doc, history, 1, 0, 'b')

        history.stacks = saved
        assert [c.description for c in history.undo_stack] == ["Draw 1 cell(s)"]
        history.undo()
        assert small_doc.get_active_cell(0, 0) is None
        assert small_doc.get_active_cell(1, 0).char == 'b'
        assert len(hits) == 5


class TestStructuralCommands:
    def test_run_structural_records_change(self, small_doc: Document) -> None:
        history = UndoRedoManager()
        manager = small_doc.layers
        command = run_structural(history, manager, "Add layer", lambda: manager.add_layer("New"))
        assert isinstance(command, LayerStructureCommand)
        assert len(manager.layers) == 2
        # Already applied: execute only bookkeeps
        assert history.undo_stack == (command,)

        history.undo()
        assert [l.name for l in manager.layers] == ["Background"]
        history.redo()
        assert [l.name for l in manager.layers] == ["Background", "New"]

    def test_run_structural_skips_noop(self, small_doc: Document) -> None:
        history = UndoRedoManager()
        manager = small_doc.layers
        only = manager.layers[0].id
        assert run_structural(history, manager, "Delete layer", lambda: manager.remove_layer(only)) is None
        assert not history.can_undo()

    def test_cell_commands_survive_structural_undo(self, small_doc: Document) -> None:
        history = UndoRedoManager()
        manager = small_doc.layers
        layer = manager.add_layer("Ink")
        draw(small_doc, history, 0, 0, 'I')
        run_structural(history, manager, "Rename", lambda: manager.rename_layer(layer.id, "Renamed"))

        history.undo()
        history.undo()
        assert small_doc.get_cell(layer.id, 0, 0) is None
        history.redo()
        assert small_doc.get_cell(layer.id, 0, 0).char == 'I'

    def test_merge_down_onto_locked_records_nothing(self, small_doc: Document) -> None:
        history = UndoRedoManager()
        manager = small_doc.layers
        manager.layers[0].locked = True
        upper = manager.add_layer("Upper")
        upper.set_cell(0, 0, cell('U'))
        assert run_structural(history, manager, "Merge down", lambda: manager.merge_down(upper.id)) is None
        assert not history.can_undo()


class TestSessionManager:
    def test_create_session_defaults(self) -> None:
        sessions = SessionManager(EditorConfig(width=12, height=4))
        first = sessions.create_session()
        second = sessions.create_session(width=3, height=2)
        assert (first.id, first.name) == ("session-1", "Untitled 1")
        assert (second.id, second.name) == ("session-2", "Untitled 2")
        assert (first.document.width, first.document.height) == (12, 4)
        assert (second.document.width, second.document.height) == (3, 2)
        assert sessions.active_session is second

    def test_histories_are_isolated(self) -> None:
        sessions = SessionManager()
        a = sessions.create_session()
        b = sessions.create_session()
        draw(a.document, a.history, 0, 0, 'A')
        assert not b.history.can_undo()
        assert b.history.undo() is None
        assert a.document.get_active_cell(0, 0).char == 'A'

    def test_history_depth_from_config(self) -> None:
        sessions = SessionManager(EditorConfig(history_depth=3))
        assert sessions.create_session().history.max_history == 3

    def test_close_last_session_refused(self) -> None:
        sessions = SessionManager()
        only = sessions.create_session()
        assert sessions.close_session(only.id) is None
        assert sessions.sessions == (only,)

    def test_close_active_session(self) -> None:
        sessions = SessionManager()
        a = sessions.create_session()
        b = sessions.create_session()
        changed = []
        sessions.session_changed.connect(changed.append)
        assert sessions.close_session(b.id) is a
        assert sessions.active_session is a
        assert changed == [a]

    def test_close_session_before_active_keeps_active(self) -> None:
        sessions = SessionManager()
        a = sessions.create_session()
        b = sessions.create_session()
        c = sessions.create_session()
        changed = []
        sessions.session_changed.connect(changed.append)
        sessions.close_session(a.id)
        assert sessions.active_session is c
        assert sessions.active_index == 1
        assert changed == []
        assert b in sessions.sessions

    def test_switch_session(self) -> None:
        sessions = SessionManager()
        a = sessions.create_session()
        sessions.create_session()
        assert sessions.switch_session(a.id) is a
        assert sessions.switch_session(a.id) is None
        assert sessions.switch_session("session-99") is None

    def test_rename_session(self) -> None:
        sessions = SessionManager()
        a = sessions.create_session(name="Logo")
        assert a.name == "Logo"
        assert sessions.rename_session(a.id, "Banner")
        assert sessions.get_session(a.id).name == "Banner"


class TestClipboard:
    def test_copy_returns_text_and_keeps_absence(self, small_session: EditorSession) -> None:
        layer = small_session.document.layers.layers[0]
        layer.set_cell(1, 1, cell('a'))
        layer.set_cell(3, 1, cell('b'))
        clipboard = Clipboard()
        assert clipboard.copy(small_session, 3, 1, 1, 1) == "a b"
        assert clipboard.buffer.cells[0][1] is None
        assert (clipboard.buffer.width, clipboard.buffer.height) == (3, 1)

    def test_paste_skips_absent_and_clips(self, small_session: EditorSession) -> None:
        layer = small_session.document.layers.layers[0]
        layer.set_cell(0, 0, cell('a'))
        layer.set_cell(2, 0, cell('b'))
        layer.set_cell(9, 3, cell('k'))
        clipboard = Clipboard()
        clipboard.copy(small_session, 0, 0, 2, 0)

        assert clipboard.paste(small_session, 8, 3)
        assert layer.get_cell(8, 3).char == 'a'
        assert layer.get_cell(9, 3).char == 'k'

        small_session.history.undo()
        assert layer.get_cell(8, 3) is None

    def test_paste_without_buffer(self, small_session: EditorSession) -> None:
        assert Clipboard().paste(small_session, 0, 0) is False
        assert not small_session.history.can_undo()

    def test_paste_onto_locked_layer_refused(self, small_session: EditorSession) -> None:
        clipboard = Clipboard()
        small_session.document.layers.layers[0].locked = True
        assert clipboard.paste_text(small_session, "hi", 0, 0) is False
        assert not small_session.history.can_undo()

    def test_paste_text(self, small_session: EditorSession) -> None:
        clipboard = Clipboard()
        assert clipboard.paste_text(small_session, "ab\r\nc", 1, 1, fg=4, bg=1)
        doc = small_session.document
        assert doc.get_active_cell(1, 1).triple == ('a', 4, 1)
        assert doc.get_active_cell(2, 1).char == 'b'
        assert doc.get_active_cell(1, 2).char == 'c'
        assert small_session.history.undo_stack[-1].description == "Paste text"

    def test_paste_over_identical_cells_records_nothing(self, small_session: EditorSession) -> None:
        layer = small_session.document.layers.layers[0]
        layer.set_cell(0, 0, cell('a'))
        layer.set_cell(1, 0, cell('b'))
        clipboard = Clipboard()
        clipboard.copy(small_session, 0, 0, 1, 0)
        assert clipboard.paste(small_session, 0, 0) is False
        assert not small_session.history.can_undo()

        assert clipboard.paste(small_session, 1, 0)
        command = small_session.history.undo_stack[-1]
        assert [(c.x, c.y) for c in command.changes] == [(1, 0), (2, 0)]

    def test_paste_text_identical_records_nothing(self, small_session: EditorSession) -> None:
        clipboard = Clipboard()
        assert clipboard.paste_text(small_session, "hi", 0, 0)
        assert clipboard.paste_text(small_session, "hi", 0, 0) is False
        assert len(small_session.history.undo_stack) == 1
