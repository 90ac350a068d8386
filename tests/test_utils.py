import re

import pytest

from beatscript.exceptions import FileSystemError, ScriptSourceError
from beatscript.utils import ensure_dir_exists, find_all_matches, read_script_file


def test_find_all_matches_returns_positions_and_groups():
    matches = find_all_matches(r"(\d+)\.", "1. a 22. b")

    assert [(m.start, m.end, m.groups) for m in matches] == [(0, 2, ("1",)), (5, 8, ("22",))]


def test_find_all_matches_accepts_compiled_pattern():
    pattern = re.compile(r"beat", re.IGNORECASE)

    assert len(find_all_matches(pattern, "Beat beat BEAT")) == 3


def test_find_all_matches_is_repeatable():
    pattern = re.compile(r"x")

    assert find_all_matches(pattern, "xx") == find_all_matches(pattern, "xx")


def test_ensure_dir_exists_creates_nested(tmp_path):
    target = tmp_path / "a" / "b"

    ensure_dir_exists(str(target))

    assert target.is_dir()


def test_ensure_dir_exists_rejects_file(tmp_path):
    path = tmp_path / "file.txt"
    path.write_text("x")

    with pytest.raises(FileSystemError):
        ensure_dir_exists(str(path))


def test_ensure_dir_exists_rejects_empty_path():
    with pytest.raises(ValueError):
        ensure_dir_exists("")


def test_read_script_file(tmp_path):
    path = tmp_path / "script.md"
    path.write_text("1. Hi\n", encoding="utf-8")

    assert read_script_file(str(path)) == "1. Hi\n"


def test_read_script_file_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_script_file(str(tmp_path / "nope.md"))
    with pytest.raises(ScriptSourceError):
        read_script_file(str(tmp_path))
