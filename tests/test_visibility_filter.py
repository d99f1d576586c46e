"""Tests for the visibility filter."""

import os

import pytest

from flatten.exceptions import PatternCompileError, RelativePathError
from flatten.visibility_filter import FilterOptions, VisibilityFilter, is_vcs_path, to_slash


def visible(vf, root, rel_path, is_dir=False):
    return vf.include(os.path.join(str(root), *rel_path.split("/")), is_dir=is_dir)


class TestHelpers:
    def test_to_slash(self):
        assert to_slash("a\\b\\c.txt") == "a/b/c.txt"
        assert to_slash("a/b") == "a/b"

    @pytest.mark.parametrize(
        "path,expected",
        [
            (".git", True),
            (".git/config", True),
            ("vendor/lib/.git/HEAD", True),
            (".github/workflows/ci.yml", False),
            (".gitignore", False),
            ("docs/my.git.notes", False),
        ],
    )
    def test_is_vcs_path(self, path, expected):
        assert is_vcs_path(path) == expected

    def test_is_vcs_path_custom_name(self):
        assert is_vcs_path("repo/.hg/store", ".hg")
        assert not is_vcs_path("repo/.git/config", ".hg")

    def test_options_are_immutable(self):
        options = FilterOptions()
        with pytest.raises(AttributeError):
            options.include_vcs = True  # type: ignore[misc]


class TestRelativePath:
    def test_inside_root(self, tmp_path):
        vf = VisibilityFilter(tmp_path)
        assert vf.relative_path(tmp_path / "a" / "b.txt") == "a/b.txt"

    def test_outside_root_raises(self, tmp_path):
        vf = VisibilityFilter(tmp_path / "root")
        with pytest.raises(RelativePathError):
            vf.relative_path(tmp_path / "elsewhere.txt")

    def test_path_outside_root_is_included(self, tmp_path):
        """Pattern rules are skipped when no relative path exists."""
        root = tmp_path / "root"
        root.mkdir()
        (root / ".gitignore").write_text("*.txt\n")
        outside = tmp_path / "outside.txt"
        outside.write_text("text")

        vf = VisibilityFilter(root)
        assert vf.include(outside, is_dir=False)

    def test_vcs_check_applies_outside_root(self, tmp_path):
        root = tmp_path / "root"
        root.mkdir()
        vf = VisibilityFilter(root)
        assert not vf.include(tmp_path / ".git" / "config", is_dir=False)


class TestDecisions:
    def test_root_is_always_visible(self, tmp_path):
        vcs_dir = tmp_path / ".git"
        vcs_dir.mkdir()
        vf = VisibilityFilter(vcs_dir)
        assert vf.include(vcs_dir, is_root=True)

    def test_vcs_directory_and_contents_hidden(self, project_dir):
        vf = VisibilityFilter(project_dir)
        assert not visible(vf, project_dir, ".git", is_dir=True)
        assert not visible(vf, project_dir, ".git/config")

    def test_vcs_directory_visible_when_requested(self, project_dir):
        vf = VisibilityFilter(project_dir, FilterOptions(include_vcs=True))
        assert visible(vf, project_dir, ".git", is_dir=True)
        assert visible(vf, project_dir, ".git/config")

    def test_ignore_file_patterns(self, project_dir):
        vf = VisibilityFilter(project_dir)
        assert not visible(vf, project_dir, "debug.log")
        assert not visible(vf, project_dir, "nested/dir/debug.log")
        assert not visible(vf, project_dir, "build", is_dir=True)
        assert visible(vf, project_dir, "main.go")
        assert visible(vf, project_dir, "nested", is_dir=True)

    def test_directory_only_pattern_does_not_hide_files(self, make_tree):
        root = make_tree({".gitignore": "build/\n", "build": "a file named build"})
        vf = VisibilityFilter(root)
        assert visible(vf, root, "build", is_dir=False)

    def test_include_ignored_disables_ignore_file(self, project_dir):
        vf = VisibilityFilter(project_dir, FilterOptions(include_ignored=True))
        assert vf.ignore_rules is None
        assert visible(vf, project_dir, "debug.log")
        assert visible(vf, project_dir, "build", is_dir=True)

    def test_missing_ignore_file_includes_everything(self, make_tree):
        root = make_tree({"debug.log": "noise"})
        vf = VisibilityFilter(root)
        assert vf.ignore_rules is None
        assert visible(vf, root, "debug.log")

    def test_only_root_ignore_file_is_consulted(self, make_tree):
        root = make_tree({"sub/.gitignore": "*.txt\n", "sub/a.txt": "a"})
        vf = VisibilityFilter(root)
        assert visible(vf, root, "sub/a.txt")

    def test_root_ignore_file_is_hidden_while_in_use(self, make_tree):
        root = make_tree({".gitignore": "*.log\n", "a.txt": "a", "sub/.gitignore": "*.tmp\n"})
        vf = VisibilityFilter(root)
        assert not visible(vf, root, ".gitignore")
        assert visible(vf, root, "sub/.gitignore")
        assert visible(vf, root, "a.txt")

    def test_root_ignore_file_visible_with_include_ignored(self, make_tree):
        root = make_tree({".gitignore": "*.log\n"})
        vf = VisibilityFilter(root, FilterOptions(include_ignored=True))
        assert visible(vf, root, ".gitignore")

    def test_custom_ignore_file_name(self, make_tree):
        root = make_tree({".flattenignore": "*.txt\n", "a.txt": "a"})
        vf = VisibilityFilter(root, FilterOptions(ignore_file_name=".flattenignore"))
        assert not visible(vf, root, "a.txt")

    def test_binary_files_hidden(self, project_dir):
        vf = VisibilityFilter(project_dir)
        assert not visible(vf, project_dir, "assets/logo.png")

    def test_binary_detected_by_content(self, make_tree):
        root = make_tree({"blob": b"\x00\x01\x02\x03"})
        vf = VisibilityFilter(root)
        assert not visible(vf, root, "blob")

    def test_binary_files_visible_when_requested(self, project_dir):
        vf = VisibilityFilter(project_dir, FilterOptions(include_binary=True))
        assert visible(vf, project_dir, "assets/logo.png")

    def test_unreadable_file_is_not_treated_as_binary(self, tmp_path):
        vf = VisibilityFilter(tmp_path)
        assert visible(vf, tmp_path, "missing-without-extension")

    def test_max_size(self, make_tree):
        root = make_tree({"small.txt": "x" * 10, "large.txt": "x" * 2000})
        vf = VisibilityFilter(root, FilterOptions(max_size="1KB"))
        assert visible(vf, root, "small.txt")
        assert not visible(vf, root, "large.txt")

    def test_invalid_max_size_raises(self, tmp_path):
        with pytest.raises(ValueError):
            VisibilityFilter(tmp_path, FilterOptions(max_size="lots"))

    def test_include_patterns_keep_directories(self, project_dir):
        vf = VisibilityFilter(project_dir, FilterOptions(include_patterns=("*.go",)))
        assert visible(vf, project_dir, "main.go")
        assert visible(vf, project_dir, "docs", is_dir=True)
        assert visible(vf, project_dir, "docs/copy.go")
        assert not visible(vf, project_dir, "README.md")

    def test_exclude_patterns(self, project_dir):
        vf = VisibilityFilter(project_dir, FilterOptions(exclude_patterns=("docs/",)))
        assert not visible(vf, project_dir, "docs", is_dir=True)
        assert visible(vf, project_dir, "main.go")

    def test_is_dir_is_looked_up_when_omitted(self, project_dir):
        vf = VisibilityFilter(project_dir)
        assert not vf.include(project_dir / "build")
        assert vf.include(project_dir / "nested")

    def test_malformed_ignore_file_raises(self, make_tree):
        root = make_tree({".gitignore": "!\n"})
        with pytest.raises(PatternCompileError):
            VisibilityFilter(root)
