import pytest
from ftree import (
    FTAlreadyInTreeError,
    FTBadPathError,
    FTConflictingPathError,
    FTNotADirectoryError,
    FTStatus,
)
from tests.helpers.asserts import assert_tree_consistent, collect_paths

# ------------------------------------------------------------------
# insert_dir
# ------------------------------------------------------------------


def test_insert_root(ft):
    ft.insert_dir("/a")
    assert ft.count == 1
    assert ft.root.path.pathname == "/a"
    assert ft.contains_dir("/a")


def test_insert_creates_intermediate_dirs(ft):
    ft.insert_dir("/a/b/c")
    assert ft.count == 3
    assert ft.contains_dir("/a")
    assert ft.contains_dir("/a/b")
    assert ft.contains_dir("/a/b/c")
    assert_tree_consistent(ft)


def test_count_grows_by_levels_created(ft):
    ft.insert_dir("/a/b")
    ft.insert_dir("/a/b/c/d/e")
    assert ft.count == 5
    ft.insert_dir("/a/x")
    assert ft.count == 6


def test_insert_dir_twice_raises_and_keeps_count(ft):
    ft.insert_dir("/a/b")
    with pytest.raises(FTAlreadyInTreeError) as excinfo:
        ft.insert_dir("/a/b")
    assert excinfo.value.status is FTStatus.ALREADY_IN_TREE
    assert ft.count == 2


def test_insert_existing_root_raises(ft):
    ft.insert_dir("/a/b")
    with pytest.raises(FTAlreadyInTreeError):
        ft.insert_dir("/a")


def test_insert_dir_over_file_raises_already_in_tree(ft):
    ft.insert_file("/a/f")
    with pytest.raises(FTAlreadyInTreeError):
        ft.insert_dir("/a/f")


def test_insert_dir_under_file_raises(ft):
    ft.insert_file("/a/f")
    with pytest.raises(FTNotADirectoryError):
        ft.insert_dir("/a/f/sub")
    with pytest.raises(FTNotADirectoryError):
        ft.insert_dir("/a/f/sub/deeper")
    assert ft.count == 1


def test_insert_dir_under_other_root_raises(ft):
    ft.insert_dir("/a")
    with pytest.raises(FTConflictingPathError) as excinfo:
        ft.insert_dir("/b/c")
    assert excinfo.value.status is FTStatus.CONFLICTING_PATH
    with pytest.raises(FTConflictingPathError):
        ft.insert_dir("/b")


def test_insert_dir_bad_path(ft):
    with pytest.raises(FTBadPathError):
        ft.insert_dir("/a//b")
    with pytest.raises(FTBadPathError):
        ft.insert_dir("/")


def test_conflicting_wins_over_already_in_tree(ft):
    ft.insert_dir("/a/b")
    with pytest.raises(FTConflictingPathError):
        ft.insert_dir("/b/b")


def test_siblings_inserted_in_sorted_order(ft):
    for name in ["m", "b", "z", "a", "k"]:
        ft.insert_dir(f"/r/{name}")
    names = [c.path.name for c in ft.root.dir_children]
    assert names == ["a", "b", "k", "m", "z"]


# ------------------------------------------------------------------
# insert_file
# ------------------------------------------------------------------


def test_insert_file_creates_parents(ft):
    ft.insert_file("/a/b/c.txt", b"data")
    assert ft.count == 2
    assert ft.file_count == 1
    assert ft.contains_dir("/a/b")
    assert ft.contains_file("/a/b/c.txt")
    assert ft.get_file_contents("/a/b/c.txt") == b"data"


def test_insert_file_does_not_count_as_directory(ft):
    ft.insert_dir("/a/b")
    ft.insert_file("/a/b/f", b"x")
    assert ft.count == 2


def test_insert_file_without_contents(ft):
    ft.insert_file("/a/f")
    assert ft.contains_file("/a/f")
    assert ft.get_file_contents("/a/f") is None
    assert ft.stat("/a/f") == {"is_file": True, "size": 0}


def test_insert_file_empty_contents(ft):
    ft.insert_file("/a/f", b"")
    assert ft.get_file_contents("/a/f") == b""


def test_insert_file_as_root_raises(ft):
    with pytest.raises(FTConflictingPathError):
        ft.insert_file("/f.txt", b"x")
    assert ft.root is None
    assert ft.count == 0


def test_insert_file_at_root_path_raises_already_in_tree(ft):
    ft.insert_dir("/a")
    with pytest.raises(FTAlreadyInTreeError):
        ft.insert_file("/a")


def test_insert_file_twice_raises(ft):
    ft.insert_file("/a/f", b"1")
    with pytest.raises(FTAlreadyInTreeError):
        ft.insert_file("/a/f", b"2")
    assert ft.get_file_contents("/a/f") == b"1"
    assert ft.file_count == 1


def test_insert_file_over_dir_raises(ft):
    ft.insert_dir("/a/d")
    with pytest.raises(FTAlreadyInTreeError):
        ft.insert_file("/a/d")


def test_insert_file_under_file_raises(ft):
    ft.insert_file("/a/f")
    with pytest.raises(FTNotADirectoryError):
        ft.insert_file("/a/f/g")
    assert ft.count == 1
    assert ft.file_count == 1


def test_insert_file_under_other_root_raises(ft):
    ft.insert_dir("/a")
    with pytest.raises(FTConflictingPathError):
        ft.insert_file("/b/f")


def test_insert_file_str_contents_rejected_atomically(ft):
    ft.insert_dir("/a")
    with pytest.raises(TypeError):
        ft.insert_file("/a/b/c/f", "text")  # type: ignore[arg-type]
    assert ft.count == 1
    assert not ft.contains_dir("/a/b")
    assert collect_paths(ft) == ["/a"]


def test_insert_file_int_contents_rejected_atomically(ft):
    ft.insert_dir("/a")
    with pytest.raises(TypeError):
        ft.insert_file("/a/b/f", 3)  # type: ignore[arg-type]
    assert ft.file_count == 0
    assert not ft.contains_dir("/a/b")
    assert collect_paths(ft) == ["/a"]


def test_dir_and_file_siblings_coexist(ft):
    ft.insert_dir("/a/x")
    ft.insert_file("/a/y")
    ft.insert_file("/a/w")
    assert [c.path.name for c in ft.root.dir_children] == ["x"]
    assert [f.path.name for f in ft.root.file_children] == ["w", "y"]
    assert_tree_consistent(ft)


def test_no_duplicate_paths_after_many_inserts(ft):
    for p in ["/r/a/b", "/r/a/c", "/r/d"]:
        ft.insert_dir(p)
    for p in ["/r/a/f", "/r/a/b/g", "/r/h"]:
        ft.insert_file(p)
    paths = collect_paths(ft)
    assert len(paths) == len(set(paths)) == 8
