from __future__ import annotations

import json
from pathlib import Path

import pytest

from locale_table.core.errors import (
    InvalidKeyError,
    InvalidLanguageError,
    LanguageExistsError,
    LanguageNotFoundError,
)
from locale_table.services.aggregator import scan_flat
from locale_table.services.layouts import FlatLayout, NestedLayout
from locale_table.services.mutator import CellMutator


def read_json(path: Path):
    return json.loads(path.read_text(encoding="utf-8"))


def write_json(path: Path, data) -> None:
    path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")


@pytest.fixture
def mutator(flat_dir: Path) -> CellMutator:
    return CellMutator(FlatLayout(flat_dir))


def test_set_value_creates_missing_key_in_one_language(mutator, flat_dir):
    result = mutator.set_value("vi", "login.button", "Đăng nhập")
    assert result.changed == ["vi"]
    assert read_json(flat_dir / "vi.json") == {
        "home": {"title": "Xin chào"},
        "login": {"button": "Đăng nhập"},
    }
    # other languages untouched
    assert read_json(flat_dir / "en.json")["login"]["button"] == "Sign in"


def test_set_value_writes_unicode_and_indent(mutator, flat_dir):
    mutator.set_value("vi", "home.title", "Chào")
    text = (flat_dir / "vi.json").read_text(encoding="utf-8")
    assert "Chào" in text
    assert text.startswith('{\n  "home"')
    assert text.endswith("\n")


def test_set_value_on_array_element(mutator, flat_dir):
    mutator.set_value("en", "home.items[3]", "Four")
    assert read_json(flat_dir / "en.json")["home"]["items"] == ["One", "Two", "", "Four"]


def test_set_value_on_broken_file_reports_and_leaves_it(mutator, flat_dir):
    (flat_dir / "vi.json").write_text("{oops", encoding="utf-8")
    result = mutator.set_value("vi", "a", "b")
    assert result.changed == []
    assert result.notices[0].kind == "parse"
    assert (flat_dir / "vi.json").read_text(encoding="utf-8") == "{oops"


def test_set_value_on_unknown_language_is_a_read_notice(mutator):
    result = mutator.set_value("xx", "a", "b")
    assert result.notices[0].language == "xx"
    assert result.notices[0].kind == "read"


def test_add_key_fills_all_languages_without_clobbering(mutator, flat_dir):
    result = mutator.add_key("home.title")
    # Every language already had it: nothing rewritten
    assert result.changed == []

    result = mutator.add_key("new.key")
    assert sorted(result.changed) == ["en", "vi"]
    table = scan_flat(flat_dir)
    for lang in table.languages:
        assert table.data[lang]["new.key"] == ""
    assert table.data["en"]["home.title"] == "Welcome"
    assert table.data["vi"]["home.title"] == "Xin chào"


def test_add_key_keeps_existing_value(mutator, flat_dir):
    mutator.set_value("en", "greeting", "Hi")
    mutator.add_key("greeting")
    assert scan_flat(flat_dir).data["en"]["greeting"] == "Hi"
    assert scan_flat(flat_dir).data["vi"]["greeting"] == ""


def test_delete_key_removes_from_every_language(mutator, flat_dir):
    result = mutator.delete_key("home.title")
    assert sorted(result.changed) == ["en", "vi"]
    table = scan_flat(flat_dir)
    assert all("home.title" not in table.data[lang] for lang in table.languages)
    # vi had only that key; its document is now empty
    assert read_json(flat_dir / "vi.json") == {}


def test_delete_array_element_compacts_nothing_else(mutator, flat_dir):
    mutator.delete_key("home.items[1]")
    assert read_json(flat_dir / "en.json")["home"]["items"] == ["One"]


def test_duplicate_key_only_where_source_exists(mutator, flat_dir):
    result = mutator.duplicate_key("login.button", "login.button_copy")
    assert result.changed == ["en"]
    table = scan_flat(flat_dir)
    assert table.data["en"]["login.button_copy"] == table.data["en"]["login.button"]
    assert "login.button" not in table.data["vi"]
    assert "login.button_copy" not in table.data["vi"]


def test_rename_key_moves_values(mutator, flat_dir):
    mutator.rename_key("home.title", "home.heading")
    table = scan_flat(flat_dir)
    assert table.data["en"]["home.heading"] == "Welcome"
    assert table.data["vi"]["home.heading"] == "Xin chào"
    assert "home.title" not in table.keys


@pytest.mark.parametrize("call", ["duplicate_key", "rename_key"])
def test_copy_onto_same_key_is_rejected(mutator, call):
    with pytest.raises(InvalidKeyError):
        getattr(mutator, call)("a", "a")


@pytest.mark.parametrize("key", ["", "   "])
def test_blank_key_is_rejected(mutator, key):
    with pytest.raises(InvalidKeyError):
        mutator.add_key(key)


def test_multi_language_edit_is_best_effort(mutator, flat_dir):
    write_json(flat_dir / "fr.json", {"home": {"title": "Bienvenue"}})
    (flat_dir / "de.json").write_text("not json", encoding="utf-8")

    result = mutator.add_key("footer")

    assert [n.language for n in result.notices] == ["de"]
    assert sorted(result.changed) == ["en", "fr", "vi"]
    assert read_json(flat_dir / "fr.json")["footer"] == ""


def test_add_and_rename_language_flat(mutator, flat_dir):
    mutator.add_language("fr")
    assert read_json(flat_dir / "fr.json") == {}

    with pytest.raises(LanguageExistsError):
        mutator.add_language("fr")

    mutator.rename_language("fr", "fr-CA")
    assert not (flat_dir / "fr.json").exists()
    assert (flat_dir / "fr-CA.json").exists()

    with pytest.raises(LanguageNotFoundError):
        mutator.rename_language("fr", "es")
    with pytest.raises(LanguageExistsError):
        mutator.rename_language("fr-CA", "en")


@pytest.mark.parametrize("bad", ["", "../evil", "a/b"])
def test_invalid_language_ids(mutator, bad):
    with pytest.raises(InvalidLanguageError):
        mutator.add_language(bad)


def test_nested_mutations_touch_only_selected_file(nested_dir: Path):
    mutator = CellMutator(NestedLayout(nested_dir, "common.json"))

    mutator.add_key("save")

    assert read_json(nested_dir / "en" / "common.json")["save"] == ""
    assert read_json(nested_dir / "vi" / "common.json")["save"] == ""
    # languages without common.json are not created implicitly
    assert not (nested_dir / "de" / "common.json").exists()
    assert not (nested_dir / "fr" / "common.json").exists()
    assert "save" not in read_json(nested_dir / "en" / "errors.json")


def test_nested_add_and_rename_language(nested_dir: Path):
    mutator = CellMutator(NestedLayout(nested_dir, "common.json"))

    mutator.add_language("fr")
    assert read_json(nested_dir / "fr" / "common.json") == {}

    mutator.rename_language("vi", "vi-VN")
    assert (nested_dir / "vi-VN" / "common.json").exists()
    assert not (nested_dir / "vi").exists()


def test_delete_leading_array_element_blanks_it_in_place(mutator, flat_dir):
    result = mutator.delete_key("home.items[0]")
    assert result.changed == ["en"]
    assert read_json(flat_dir / "en.json")["home"]["items"] == ["", "Two"]
    table = scan_flat(flat_dir)
    assert table.data["en"]["home.items[0]"] == ""
    assert table.data["en"]["home.items[1]"] == "Two"

    # already blank: nothing left to do
    assert mutator.delete_key("home.items[0]").changed == []


def test_deeply_nested_language_becomes_notice(mutator, flat_dir):
    deep = "[" * 5000 + "]" * 5000
    (flat_dir / "de.json").write_text(deep, encoding="utf-8")
    result = mutator.add_key("fresh")
    assert result.changed == ["en", "vi"]
    assert [(n.language, n.kind) for n in result.notices] == [("de", "parse")]
    assert (flat_dir / "de.json").read_text(encoding="utf-8") == deep


def test_document_too_deep_to_flatten_becomes_notice(mutator, monkeypatch):
    deep = "x"
    for _ in range(5000):
        deep = [deep]
    monkeypatch.setattr(mutator.layout, "load", lambda language: deep)
    result = mutator.set_value("en", "a", "b")
    assert result.changed == []
    assert [(n.language, n.kind) for n in result.notices] == [("en", "parse")]


@pytest.mark.parametrize("key", ["x[1000000000]", "grid[0][10001]"])
def test_new_key_with_huge_array_index_is_rejected(mutator, flat_dir, key):
    before = (flat_dir / "en.json").read_text(encoding="utf-8")
    with pytest.raises(InvalidKeyError):
        mutator.set_value("en", key, "v")
    with pytest.raises(InvalidKeyError):
        mutator.add_key(key)
    with pytest.raises(InvalidKeyError):
        mutator.rename_key("login.button", key)
    assert (flat_dir / "en.json").read_text(encoding="utf-8") == before


def test_array_index_at_limit_is_accepted(mutator, flat_dir):
    result = mutator.set_value("vi", "list[10000]", "last")
    assert result.changed == ["vi"]
    items = read_json(flat_dir / "vi.json")["list"]
    assert len(items) == 10001
    assert items[-1] == "last"
