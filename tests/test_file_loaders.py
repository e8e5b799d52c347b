import json

import pytest

from insightgraph.core.errors import InputLoadError
from insightgraph.core.file_loaders import iter_files, load_text


def test_txt_with_bom(tmp_path):
    p = tmp_path / "draft.txt"
    p.write_bytes(b"\xef\xbb\xbfHello world\r\nSecond line")
    assert load_text(p) == "Hello world\nSecond line"


def test_json_list_of_chapters(tmp_path):
    p = tmp_path / "book.json"
    p.write_text(json.dumps([
        {"title": "One", "content": "<p>First</p><p>Second &amp; more</p>"},
        {"title": "Two", "body": "Plain body"},
    ]), encoding="utf-8")
    text = load_text(p)
    assert "First" in text
    assert "Second & more" in text
    assert "Plain body" in text
    assert "<p>" not in text


def test_json_dict_with_chapters(tmp_path):
    p = tmp_path / "book.json"
    p.write_text(json.dumps({"chapters": [{"text": "Alpha"}, {"text": "Beta"}]}),
                 encoding="utf-8")
    assert load_text(p) == "Alpha\n\nBeta"


def test_json_single_dict(tmp_path):
    p = tmp_path / "page.json"
    p.write_text(json.dumps({"content": "Only page"}), encoding="utf-8")
    assert load_text(p) == "Only page"


def test_json_without_prose(tmp_path):
    p = tmp_path / "empty.json"
    p.write_text(json.dumps([{"title": "no body"}]), encoding="utf-8")
    with pytest.raises(InputLoadError):
        load_text(p)


def test_invalid_json(tmp_path):
    p = tmp_path / "broken.json"
    p.write_text("{not json", encoding="utf-8")
    with pytest.raises(InputLoadError, match="not valid JSON"):
        load_text(p)


def test_iter_files(tmp_path):
    (tmp_path / "b.txt").write_text("b", encoding="utf-8")
    (tmp_path / "a.md").write_text("a", encoding="utf-8")
    (tmp_path / "skip.png").write_bytes(b"")
    sub = tmp_path / "sub"
    sub.mkdir()
    (sub / "c.json").write_text("[]", encoding="utf-8")

    assert [p.name for p in iter_files(tmp_path)] == ["a.md", "b.txt"]
    assert [p.name for p in iter_files(tmp_path, recursive=True)] == ["a.md", "b.txt", "c.json"]
    assert list(iter_files(tmp_path / "a.md")) == [tmp_path / "a.md"]
