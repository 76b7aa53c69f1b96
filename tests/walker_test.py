from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from newest_of.errors import TraversalError
from newest_of.scanmodel import Entry
from newest_of.walker import walk


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    """
    root/
        a.txt
        sub/
            b.txt
            deeper/
                c.txt
        z.txt
    """
    (tmp_path / "sub" / "deeper").mkdir(parents=True)
    (tmp_path / "a.txt").write_text("a")
    (tmp_path / "sub" / "b.txt").write_text("b")
    (tmp_path / "sub" / "deeper" / "c.txt").write_text("c")
    (tmp_path / "z.txt").write_text("z")
    return tmp_path


def test_walk_visits_in_preorder(tree: Path) -> None:
    root = str(tree)

    result = list(walk(root, sort_entries=True))

    assert result == [
        Entry(root, True),
        Entry(os.path.join(root, "a.txt"), False),
        Entry(os.path.join(root, "sub"), True),
        Entry(os.path.join(root, "sub", "b.txt"), False),
        Entry(os.path.join(root, "sub", "deeper"), True),
        Entry(os.path.join(root, "sub", "deeper", "c.txt"), False),
        Entry(os.path.join(root, "z.txt"), False),
    ]


def test_walk_visits_every_entry_once_unsorted(tree: Path) -> None:
    result = list(walk(str(tree)))

    assert len(result) == 7
    assert len(set(result)) == 7
    assert result[0] == Entry(str(tree), True)


def test_walk_file_root_reads_no_directory(tree: Path) -> None:
    filepath = str(tree / "a.txt")

    with patch("os.scandir") as mock_scandir:
        result = list(walk(filepath))

    assert result == [Entry(filepath, False)]
    mock_scandir.assert_not_called()


def test_walk_empty_directory(tmp_path: Path) -> None:
    assert list(walk(str(tmp_path))) == [Entry(str(tmp_path), True)]


def test_walk_is_lazy(tree: Path) -> None:
    walker = walk(str(tree))

    with patch("os.scandir") as mock_scandir:
        first = next(walker)

    assert first == Entry(str(tree), True)
    mock_scandir.assert_not_called()


def test_walk_raises_traversal_error_and_stops(tree: Path) -> None:
    root = str(tree)
    failing = os.path.join(root, "sub")
    real_scandir = os.scandir

    def scandir(path: str):  # type: ignore[no-untyped-def]
        if path == failing:
            raise PermissionError(13, "Permission denied", path)
        return real_scandir(path)

    seen: list[Entry] = []
    with patch("os.scandir", side_effect=scandir):
        with pytest.raises(TraversalError) as excinfo:
            for entry in walk(root, sort_entries=True):
                seen.append(entry)

    assert excinfo.value.path == failing
    assert excinfo.value.reason == "Permission denied"
    # Everything up to and including the failing directory was visited
    assert seen == [
        Entry(root, True),
        Entry(os.path.join(root, "a.txt"), False),
        Entry(failing, True),
    ]


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks not supported")
def test_walk_follows_directory_symlinks(tree: Path, tmp_path_factory: pytest.TempPathFactory) -> None:
    other = tmp_path_factory.mktemp("other")
    (other / "linked.txt").write_text("linked")
    link = tree / "link"
    link.symlink_to(other, target_is_directory=True)

    result = list(walk(str(tree)))

    assert Entry(str(link), True) in result
    assert Entry(os.path.join(str(link), "linked.txt"), False) in result


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks not supported")
def test_walk_reports_dangling_symlink_as_file(tmp_path: Path) -> None:
    link = tmp_path / "dangling"
    link.symlink_to(tmp_path / "nowhere")

    result = list(walk(str(tmp_path)))

    assert result == [Entry(str(tmp_path), True), Entry(str(link), False)]
