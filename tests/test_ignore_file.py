"""Tests for loading and maintaining the root ignore file."""

from flatten.ignore_file import append_ignore_entry, has_ignore_entry, load_ignore_rules


def test_load_missing_ignore_file(tmp_path):
    assert load_ignore_rules(tmp_path) is None


def test_load_ignore_file(tmp_path):
    (tmp_path / ".gitignore").write_text("*.log\n")
    rules = load_ignore_rules(tmp_path)

    assert rules is not None
    assert rules.matches("nested/debug.log")


def test_directory_named_like_ignore_file_is_skipped(tmp_path):
    (tmp_path / ".gitignore").mkdir()
    assert load_ignore_rules(tmp_path) is None


def test_append_creates_file(tmp_path):
    assert append_ignore_entry(tmp_path, "flat.txt")
    assert (tmp_path / ".gitignore").read_text() == "# Output files from flatten tool\nflat.txt\n"


def test_append_to_existing_file(tmp_path):
    ignore_file = tmp_path / ".gitignore"
    ignore_file.write_text("*.log\n")

    assert append_ignore_entry(tmp_path, "out/flat.txt")
    assert ignore_file.read_text() == "*.log\n\n# Output file from flatten tool\nout/flat.txt\n"


def test_append_existing_entry_is_noop(tmp_path):
    ignore_file = tmp_path / ".gitignore"
    ignore_file.write_text("*.log\n  flat.txt  \n")

    assert not append_ignore_entry(tmp_path, "flat.txt")
    assert ignore_file.read_text() == "*.log\n  flat.txt  \n"


def test_has_ignore_entry(tmp_path):
    assert not has_ignore_entry(tmp_path, "flat.txt")
    (tmp_path / ".gitignore").write_text("flat.txt.bak\n")
    assert not has_ignore_entry(tmp_path, "flat.txt")
    (tmp_path / ".gitignore").write_text("flat.txt\n")
    assert has_ignore_entry(tmp_path, "flat.txt")


def test_custom_ignore_file_name(tmp_path):
    append_ignore_entry(tmp_path, "flat.txt", ".flattenignore")
    assert has_ignore_entry(tmp_path, "flat.txt", ".flattenignore")
    assert not (tmp_path / ".gitignore").exists()
