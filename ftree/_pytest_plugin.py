"""pytest fixture plugin.

Usage::

    # conftest.py
    pytest_plugins = ["ftree._pytest_plugin"]

This makes the ``ft`` fixture automatically available::

    def test_something(ft):
        ft.insert_file("/a/b.txt", b"hello")
        assert ft.contains_dir("/a")
"""

from collections.abc import Iterator

import pytest

from ._tree import FileTree


@pytest.fixture
def ft() -> Iterator[FileTree]:
    """An initialized :class:`FileTree` that re-checks its invariants after
    every mutation.

    Provides an independent instance per test (function scope) and
    destroys it afterwards if the test left it initialized.
    """
    tree = FileTree(check_invariants=True)
    tree.init()
    yield tree
    if tree.initialized:
        tree.destroy()
