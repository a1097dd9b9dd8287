"""Tests for saving, loading, exporting and importing documents."""

import json

import pytest
from PIL import Image

from ascii_studio.core.cell import TRANSPARENT, Cell
from ascii_studio.document.document import Document
from ascii_studio.history.undo import UndoRedoManager
from ascii_studio.io import export, load, loads, save
from ascii_studio.io.json_format import DocumentFormatError, DocumentParser, DocumentSerializer
from ascii_studio.io.text_import import import_plain_text
from ascii_studio.render.composite import ExportRegion
from ascii_studio.render.image import ImageRenderer

from conftest import cell


@pytest.fixture
def art() -> Document:
    doc = Document(10, 5)
    manager = doc.layers
    manager.layers[0].set_cell(0, 0, Cell.of('A', 4, 1))
    group = manager.add_group("Details")
    detail = manager.add_layer("Detail", group_id=group.id)
    detail.set_cell(2, 1, Cell.of('*', 14, TRANSPARENT))
    manager.add_layer("Hidden").visible = False
    return doc


class TestJsonFormat:
    def test_save_load_round_trip(self, art: Document, tmp_path) -> None:
        path = save(art, tmp_path / "art.json")
        assert path.read_text(encoding='utf-8').endswith('\n')
        loaded = load(path)
        assert loaded.to_data() == art.to_data()

    def test_unicode_is_written_verbatim(self, tmp_path) -> None:
        doc = Document(2, 1)
        doc.set_cell_on_active(0, 0, cell('█'))
        text = (save(doc, tmp_path / "block.json")).read_text(encoding='utf-8')
        assert '█' in text

    def test_absent_cells_are_null(self, art: Document) -> None:
        data = json.loads(DocumentSerializer().render(art))
        assert data["layers"][0]["cells"][0][1] is None
        assert data["layers"][1]["groupId"] == data["groups"][0]["id"]
        assert data["activeLayerId"] == art.layers.active_layer_id

    def test_region_export(self, art: Document) -> None:
        data = DocumentSerializer().to_dict(art, ExportRegion(2, 1, 20, 2))
        assert (data["width"], data["height"]) == (8, 2)
        assert data["region"] == {"x1": 2, "y1": 1, "x2": 9, "y2": 2}
        assert data["layers"][1]["cells"][0][0]["char"] == '*'

        sliced = DocumentParser().from_dict(data)
        assert (sliced.width, sliced.height) == (8, 2)

    def test_region_export_leaves_document_alone(self, art: Document) -> None:
        before = art.to_data()
        DocumentSerializer().to_dict(art, ExportRegion(0, 0, 1, 1))
        assert art.to_data() == before

    def test_region_outside_grid_is_rejected(self, art: Document, tmp_path) -> None:
        with pytest.raises(ValueError):
            DocumentSerializer().render(art, ExportRegion(20, 20, 30, 30))
        with pytest.raises(ValueError):
            save(art, tmp_path / "empty.json", ExportRegion(20, 20, 30, 30))
        assert not (tmp_path / "empty.json").exists()

    def test_compact_output(self, art: Document) -> None:
        assert '\n' not in DocumentSerializer(indent=None).render(art)

    @pytest.mark.parametrize("text", [
        "not json",
        "[]",
        '{"width": 2, "height": 1}',
        '{"width": 0, "height": 1, "layers": []}',
        '{"width": 2, "height": 1, "layers": []}',
        '{"width": 2, "height": 1, "layers": [{"id": "layer_1", "cells": [[null]]}]}',
        '{"width": 1, "height": 1, "layers": [{"cells": [[null]]}]}',
        '{"width": 1, "height": 1, "layers": [{"id": "layer_1", "cells": [[{"char": "x"}]]}]}',
    ])
    def test_malformed_documents(self, text: str) -> None:
        with pytest.raises(DocumentFormatError):
            loads(text)

    def test_dangling_group_reference_is_dropped(self) -> None:
        text = json.dumps({
            "width": 1,
            "height": 1,
            "layers": [{"id": "layer_4", "name": "L", "groupId": "group_9", "cells": [[None]]}],
        })
        doc = loads(text)
        assert doc.layers.layers[0].group_id is None
        assert doc.layers.active_layer_id == "layer_4"


class TestExport:
    def test_text_export(self, art: Document, tmp_path) -> None:
        path = export(art, tmp_path / "art.txt")
        assert path.read_text(encoding='utf-8') == "A\n  *\n"

    def test_ansi_export_keeps_codes(self, art: Document, tmp_path) -> None:
        content = export(art, tmp_path / "art.ans").read_text(encoding='utf-8')
        assert content.startswith("\x1b[31;44mA")
        assert content.rstrip('\n').endswith("\x1b[0m")

    def test_explicit_format_overrides_extension(self, art: Document, tmp_path) -> None:
        path = export(art, tmp_path / "art.out", fmt="txt")
        assert path.read_text(encoding='utf-8').startswith("A")

    def test_region_text_export(self, art: Document, tmp_path) -> None:
        path = export(art, tmp_path / "part.txt", region=ExportRegion(2, 1, 3, 1))
        assert path.read_text(encoding='utf-8') == "*\n"

    def test_unknown_format(self, art: Document, tmp_path) -> None:
        with pytest.raises(ValueError):
            export(art, tmp_path / "art.svg")

    def test_png_export(self, art: Document, tmp_path) -> None:
        path = export(art, tmp_path / "art.png")
        with Image.open(path) as img:
            assert img.size == (100, 80)
            assert img.mode == "RGBA"
            assert img.getpixel((95, 75))[3] == 0

    def test_png_backgrounds_only_where_resolved(self) -> None:
        doc = Document(2, 1)
        doc.set_cell_on_active(0, 0, Cell.of(' ', 7, 1))
        img = ImageRenderer().render(doc)
        assert img.getpixel((5, 8)) == (0, 0, 170, 255)
        assert img.getpixel((15, 8))[3] == 0

        bare = ImageRenderer(include_backgrounds=False).render(doc)
        assert bare.getpixel((5, 8))[3] == 0

    def test_image_renderer_region(self, art: Document) -> None:
        img = ImageRenderer(cell_width=4, cell_height=8).render(art, ExportRegion(0, 0, 1, 1))
        assert img.size == (8, 16)


class TestTextImport:
    def test_import_skips_spaces_and_clips(self) -> None:
        doc = Document(4, 2)
        doc.set_cell_on_active(1, 0, cell('u'))
        history = UndoRedoManager()
        command = import_plain_text(doc, history, "a bcdef\nxy\nlost", fg=2, bg=1)

        assert command.description == "Import text"
        assert doc.get_active_cell(0, 0).triple == ('a', 2, 1)
        assert doc.get_active_cell(1, 0).char == 'u'
        assert doc.get_active_cell(3, 0).char == 'c'
        assert doc.get_active_cell(1, 1).char == 'y'

        history.undo()
        assert doc.get_active_cell(0, 0) is None
        assert doc.get_active_cell(1, 0).char == 'u'

    def test_locked_layer(self) -> None:
        doc = Document(4, 2)
        doc.layers.layers[0].locked = True
        history = UndoRedoManager()
        assert import_plain_text(doc, history, "abc") is None
        assert not history.can_undo()

    def test_blank_text(self) -> None:
        doc = Document(4, 2)
        assert import_plain_text(doc, UndoRedoManager(), "   \n") is None

    def test_identical_text_records_nothing(self) -> None:
        doc = Document(4, 1)
        history = UndoRedoManager()
        import_plain_text(doc, history, "ab")
        command = import_plain_text(doc, history, "aX")
        assert [(c.x, c.y) for c in command.changes] == [(1, 0)]
        assert import_plain_text(doc, history, "aX") is None
        assert len(history.undo_stack) == 2
