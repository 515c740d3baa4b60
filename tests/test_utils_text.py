"""Tests pour core.utils.text (video_id, noms de séries, lignes d'export)."""

import pytest

from anicatalog.core.utils.text import (
    clean_series_name,
    extract_video_id,
    is_separator_line,
    looks_like_url,
    normalize_for_compare,
)


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("https://www.youtube.com/watch?v=abc_DEF-12", "abc_DEF-12"),
        ("https://www.youtube.com/watch?list=PL1&v=XYZ&t=10", "XYZ"),
        ("https://youtu.be/short", None),
        ("", None),
        (None, None),
    ],
)
def test_extract_video_id(url: str | None, expected: str | None) -> None:
    assert extract_video_id(url) == expected


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("Foo Bar -", "Foo Bar"),
        ("  Foo~  ", "Foo"),
        ("Foo  Bar -", "Foo  Bar"),
        ("Foo...", "Foo"),
        ("Dr. Stone", "Dr. Stone"),
    ],
)
def test_clean_series_name(name: str, expected: str) -> None:
    assert clean_series_name(name) == expected


def test_normalize_for_compare() -> None:
    assert normalize_for_compare("Spy x Family!") == "spyxfamily"
    assert normalize_for_compare("Re:Zero - Season 2") == "rezeroseason2"


def test_line_helpers() -> None:
    assert looks_like_url("https://x")
    assert looks_like_url("http://x")
    assert not looks_like_url("URL: http://x")
    assert is_separator_line("---")
    assert is_separator_line("----------")
    assert not is_separator_line("--")
    assert not is_separator_line("--- text")
