"""Unit tests for the FileTree class."""

import os
import shutil
from unittest.mock import patch

import pytest

from dir2prompt.exceptions import DirectoryLoadError
from dir2prompt.file_tree.file_tree import FileTree


def names(nodes):
    return [node.name for node in nodes]


@pytest.fixture
def tree(project_dir):
    file_tree = FileTree(project_dir)
    file_tree.load_root()
    return file_tree


def test_initialization_does_not_touch_filesystem(project_dir):
    with patch("dir2prompt.file_tree.file_tree.os.listdir") as mock_listdir:
        file_tree = FileTree(project_dir)
    mock_listdir.assert_not_called()
    assert file_tree.roots == ()
    assert not file_tree.root_loaded
    assert file_tree.search_query == ""
    assert file_tree.tree_cursor == 0


def test_load_root_sorts_directories_first_then_by_name(tree):
    assert names(tree.roots) == ["docs", "src", "Zeta.py", "a.txt", "b.log"]
    assert all(node.level == 0 for node in tree.roots)
    assert all(not node.is_selected and not node.is_expanded for node in tree.roots)
    assert all(not node.children_loaded for node in tree.roots)


def test_load_root_twice_lists_once(project_dir):
    file_tree = FileTree(project_dir)
    with patch("dir2prompt.file_tree.file_tree.os.listdir", wraps=os.listdir) as mock_listdir:
        file_tree.load_root()
        file_tree.load_root()
    assert mock_listdir.call_count == 1


def test_load_root_failure(tmp_path):
    file_tree = FileTree(tmp_path / "missing")
    with pytest.raises(DirectoryLoadError) as exc_info:
        file_tree.load_root()
    assert exc_info.value.path == str(tmp_path / "missing")
    assert not file_tree.root_loaded


def test_load_children(tree, project_dir):
    tree.load_children(project_dir / "src")
    src = tree.find("src")
    assert src.children_loaded
    assert names(src.children) == ["utils", "main.py"]
    assert all(child.level == 1 for child in src.children)
    assert all(child.parent is src for child in src.children)
    assert tree.find(project_dir / "src" / "main.py") is src.children[1]


def test_load_children_twice_reads_once(tree):
    with patch("dir2prompt.file_tree.file_tree.os.listdir", wraps=os.listdir) as mock_listdir:
        tree.load_children("src")
        first_children = tree.find("src").children
        tree.load_children("src")
    assert mock_listdir.call_count == 1
    assert tree.find("src").children == first_children


def test_load_children_ignores_files_and_unknown_paths(tree):
    with patch("dir2prompt.file_tree.file_tree.os.listdir") as mock_listdir:
        tree.load_children("a.txt")
        tree.load_children("no/such/dir")
    mock_listdir.assert_not_called()
    assert not tree.find("a.txt").children_loaded


def test_load_children_failure_allows_retry(tree, project_dir):
    shutil.rmtree(project_dir / "docs")

    with pytest.raises(DirectoryLoadError) as exc_info:
        tree.load_children("docs")
    assert exc_info.value.path == str(project_dir / "docs")
    assert not tree.find("docs").children_loaded
    assert tree.find("docs").children == ()

    (project_dir / "docs").mkdir()
    (project_dir / "docs" / "guide.md").write_text("")
    tree.load_children("docs")
    assert tree.find("docs").children_loaded
    assert names(tree.find("docs").children) == ["guide.md"]


def test_load_children_permission_error(tree):
    with patch("dir2prompt.file_tree.file_tree.os.listdir", side_effect=PermissionError(13, "Permission denied")):
        with pytest.raises(DirectoryLoadError) as exc_info:
            tree.load_children("src")
    assert exc_info.value.reason == "Permission denied"
    assert isinstance(exc_info.value, OSError)
    assert not tree.find("src").children_loaded


def test_new_children_start_unselected_under_selected_parent(tree):
    tree.set_selection("src", True, is_directory=True)
    tree.load_children("src")
    assert tree.find("src").is_selected
    assert not any(child.is_selected for child in tree.find("src").children)


def test_directory_selection_propagates_to_loaded_descendants_only(tree):
    tree.load_children("src")
    tree.set_selection("src", True, is_directory=True)

    assert tree.find("src").is_selected
    assert tree.find("src/main.py").is_selected
    assert tree.find("src/utils").is_selected

    tree.load_children("src/utils")
    assert not tree.find("src/utils/helpers.py").is_selected
    assert not tree.find("src/utils/notes.txt").is_selected

    tree.set_selection("src", False, is_directory=True)
    assert not tree.find("src/main.py").is_selected
    assert not tree.find("src/utils").is_selected


def test_file_selection_does_not_propagate(tree):
    tree.load_children("src")
    tree.set_selection("src", True, is_directory=False)
    assert tree.find("src").is_selected
    assert not tree.find("src/main.py").is_selected
    assert not tree.find("src/utils").is_selected


def test_set_selection_unknown_path_is_ignored(tree):
    tree.set_selection("missing.txt", True, is_directory=False)
    assert not any(node.is_selected for node in tree.iter_loaded())


def test_expand_and_collapse(tree):
    tree.expand("src")
    assert tree.find("src").is_expanded
    assert not tree.find("src").children_loaded

    tree.load_children("src")
    tree.find("src/main.py").is_selected = True
    tree.collapse("src")
    assert not tree.find("src").is_expanded
    assert tree.find("src").children_loaded
    assert tree.find("src/main.py").is_selected


def test_expand_file_is_ignored(tree):
    tree.expand("a.txt")
    assert not tree.find("a.txt").is_expanded


def test_visible_nodes_without_expansion(tree):
    assert names(tree.visible_nodes()) == ["docs", "src", "Zeta.py", "a.txt", "b.log"]


def test_visible_nodes_pre_order(tree):
    tree.load_children("src")
    tree.expand("src")
    tree.load_children("src/utils")
    tree.expand("src/utils")
    assert names(tree.visible_nodes()) == [
        "docs",
        "src",
        "utils",
        "helpers.py",
        "notes.txt",
        "main.py",
        "Zeta.py",
        "a.txt",
        "b.log",
    ]


def test_collapsed_directory_hides_loaded_children(tree):
    tree.load_children("src")
    tree.expand("src")
    tree.collapse("src")
    assert "main.py" not in names(tree.visible_nodes())


def test_visible_nodes_descend_into_expanded_non_matching_directories(tree):
    tree.load_children("src")
    tree.expand("src")
    tree.load_children("src/utils")
    tree.expand("src/utils")
    tree.search_query = "helpers"
    assert names(tree.visible_nodes()) == ["helpers.py"]

    tree.collapse("src/utils")
    assert tree.visible_nodes() == []


def test_visible_nodes_match_by_full_path(tree):
    tree.load_children("src")
    tree.expand("src")
    tree.search_query = "src"
    assert names(tree.visible_nodes()) == ["src", "utils", "main.py"]


def test_visible_nodes_with_wildcard_query(tree):
    tree.load_children("src")
    tree.expand("src")
    tree.search_query = "*.py"
    assert names(tree.visible_nodes()) == ["main.py", "Zeta.py"]


def test_visible_nodes_is_a_fresh_list(tree):
    first = tree.visible_nodes()
    first.clear()
    assert len(tree.visible_nodes()) == 5
    assert tree.visible_nodes() is not tree.visible_nodes()


def test_count_loaded_files(tree):
    assert tree.count_loaded_files() == 3
    tree.load_children("src")
    assert tree.count_loaded_files() == 4


def test_relative_path(tree, project_dir):
    tree.load_children("src")
    assert tree.relative_path(tree.find("src/main.py")) == "src/main.py"


def test_refresh_rebuilds_everything(tree, project_dir):
    tree.load_children("src")
    tree.set_selection("src", True, is_directory=True)
    (project_dir / "c.md").write_text("")

    tree.refresh()

    assert "c.md" in names(tree.roots)
    assert tree.find("src/main.py") is None
    assert not tree.find("src").is_selected
    assert not tree.find("src").children_loaded
