import pytest
from ftree import FileTree
from ftree._pytest_plugin import ft  # noqa: F401


@pytest.fixture
def raw_ft() -> FileTree:
    """初期化前の FileTree（不変条件チェックなし）。"""
    return FileTree()
