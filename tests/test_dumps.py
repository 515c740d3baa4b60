"""Tests de l'énumération et de la lecture des exports."""

from __future__ import annotations

from anicatalog.core.storage.dumps import list_dump_files, read_dump


def test_list_dump_files_sorted_and_case_insensitive(tmp_path) -> None:
    for name in ("filtered_b.txt", "Filtered_A.TXT", "other.txt", "filtered_c.json"):
        (tmp_path / name).write_text("x", encoding="utf-8")
    (tmp_path / "filtered_dir.txt").mkdir()
    files = list_dump_files(tmp_path)
    assert [p.name for p in files] == ["Filtered_A.TXT", "filtered_b.txt"]


def test_list_dump_files_custom_pattern(tmp_path) -> None:
    (tmp_path / "combined.txt").write_text("x", encoding="utf-8")
    (tmp_path / "filtered.txt").write_text("x", encoding="utf-8")
    assert [p.name for p in list_dump_files(tmp_path, "combined*.txt")] == ["combined.txt"]


def test_list_dump_files_skips_links_to_same_file(tmp_path) -> None:
    real = tmp_path / "filtered_1.txt"
    real.write_text("x", encoding="utf-8")
    (tmp_path / "filtered_2.txt").symlink_to(real)
    assert [p.name for p in list_dump_files(tmp_path)] == ["filtered_1.txt"]


def test_list_dump_files_missing_directory(tmp_path) -> None:
    assert list_dump_files(tmp_path / "nope") == []


def test_read_dump_utf8_and_cp1252_fallback(tmp_path) -> None:
    utf8 = tmp_path / "a.txt"
    utf8.write_text("《Foo》 #1", encoding="utf-8")
    assert read_dump(utf8) == "《Foo》 #1"
    legacy = tmp_path / "b.txt"
    legacy.write_bytes("Café #1".encode("cp1252"))
    assert read_dump(legacy) == "Café #1"


def test_read_dump_latin1_last_resort(tmp_path) -> None:
    # 0x81 n'existe pas en cp1252
    odd = tmp_path / "c.txt"
    odd.write_bytes(b"Foo \x81 #1")
    assert read_dump(odd) == "Foo \x81 #1"
