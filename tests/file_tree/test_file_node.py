"""Unit tests for the FileNode class."""

from pathlib import Path

from dir2prompt.file_tree.file_node import FileNode


def test_file_node_initialization():
    """Test default state of a new node."""
    node = FileNode("main.py", "/repo/src/main.py", level=1)
    assert node.name == "main.py"
    assert node.file_path == Path("/repo/src/main.py")
    assert node.level == 1
    assert not node.is_directory
    assert not node.is_symlink
    assert not node.is_expanded
    assert not node.is_selected
    assert not node.children_loaded
    assert node.children == ()


def test_file_node_parent_child():
    """Test parent-child relationships inherited from anytree."""
    root = FileNode("src", "/repo/src", is_directory=True)
    child1 = FileNode("utils", "/repo/src/utils", level=1, is_directory=True, parent=root)
    child2 = FileNode("main.py", "/repo/src/main.py", level=1, parent=root)
    grandchild = FileNode("helpers.py", "/repo/src/utils/helpers.py", level=2, parent=child1)

    assert root.children == (child1, child2)
    assert grandchild.parent is child1
    assert root.descendants == (child1, grandchild, child2)
    assert grandchild.depth == 2


def test_from_path(tmp_path):
    (tmp_path / "pkg").mkdir()
    (tmp_path / "pkg" / "mod.py").write_text("")

    directory = FileNode.from_path(tmp_path / "pkg")
    assert directory.name == "pkg"
    assert directory.is_directory
    assert directory.level == 0

    file_node = FileNode.from_path(tmp_path / "pkg" / "mod.py", level=1)
    assert file_node.name == "mod.py"
    assert not file_node.is_directory
    assert file_node.level == 1


def test_from_path_missing_entry_is_a_file(tmp_path):
    node = FileNode.from_path(tmp_path / "vanished")
    assert not node.is_directory
    assert not node.is_symlink


def test_repr():
    node = FileNode("src", "/repo/src", is_directory=True)
    assert repr(node) == "FileNode('/repo/src', dir, level=0, selected=False)"
