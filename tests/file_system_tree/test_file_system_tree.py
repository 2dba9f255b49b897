"""Unit tests for the FileSystemTree class."""

import os
import sys

import pytest

from llmview.file_system_tree.file_system_node import DirectoryNode
from llmview.file_system_tree.file_system_tree import FileSystemTree, iter_file_nodes, scan_directory


def snapshot(node):
    """A comparable, nested representation of a scanned tree."""
    if not node.is_dir:
        return (node.relative_path, node.file_size)
    return (node.relative_path, [snapshot(child) for child in node.children])


def all_paths(root):
    return [node.relative_path for node in root.descendants]


@pytest.fixture
def project(make_files):
    return make_files(
        {
            "README.md": "# Project\n",
            "app.ts": "export {};\n",
            "b.txt": "b",
            "A.txt": "a",
            "src/main.ts": "main();\n",
            "src/lib/util.ts": "export const util = 1;\n",
            "docs/guide.md": "guide\n",
            "Zeta/z.txt": "z",
        }
    )


def test_children_sorted_directories_first_then_by_name(project):
    root = scan_directory(project)
    assert [child.name for child in root.children] == ["docs", "src", "Zeta", "A.txt", "app.ts", "b.txt", "README.md"]
    src = root.children[1]
    assert [child.name for child in src.children] == ["lib", "main.ts"]


def test_children_sorted_by_locale_collation(make_files):
    names = ["b.ts", "A.ts", "a.ts", "éclair.ts", "f.ts", "a_b.ts", "a-b.ts", "Zeta.ts"]
    root = scan_directory(make_files({f"web/{name}": "x" for name in names}) / "web")
    assert [child.name for child in root.children] == [
        "a_b.ts",
        "a-b.ts",
        "a.ts",
        "A.ts",
        "b.ts",
        "éclair.ts",
        "f.ts",
        "Zeta.ts",
    ]


@pytest.mark.parametrize("max_open_files", [1, 2, 64])
def test_scan_is_deterministic(project, max_open_files):
    first = scan_directory(project, max_open_files=max_open_files)
    second = scan_directory(project, max_open_files=max_open_files)
    assert snapshot(first) == snapshot(second)


def test_concurrent_scan_matches_sequential_scan(project):
    assert snapshot(scan_directory(project, max_open_files=1)) == snapshot(scan_directory(project, max_open_files=8))


def test_relative_paths_and_sizes(project):
    root = scan_directory(project)
    assert root.relative_path == ""
    assert root.name == project.name
    files = {node.relative_path: node.file_size for node in iter_file_nodes(root)}
    assert files["src/lib/util.ts"] == len("export const util = 1;\n")
    assert files["b.txt"] == 1


def test_base_ignores_without_ignore_file(make_files):
    root_path = make_files(
        {
            ".git/HEAD": "ref: refs/heads/main\n",
            ".DS_Store": b"\x00\x00\x00\x01Bud1",
            "src/.DS_Store": b"\x00",
            "__pycache__/mod.cpython-311.pyc": b"\x00",
            "pkg/__pycache__/mod.cpython-311.pyc": b"\x00",
            "node_modules/left-pad/index.js": "module.exports = 1;\n",
            "web/node_modules/react/index.js": "module.exports = 1;\n",
            "src/app.py": "print('hi')\n",
        }
    )
    paths = all_paths(scan_directory(root_path))
    assert paths == ["pkg", "src", "src/app.py", "web"]


def test_root_ignore_file(make_files):
    root_path = make_files(
        {
            ".gitignore": "*.log\n",
            "error.log": "boom\n",
            "src/error.log": "boom\n",
            "app.ts": "app\n",
        }
    )
    paths = all_paths(scan_directory(root_path))
    assert "error.log" not in paths
    assert "src/error.log" not in paths
    assert "app.ts" in paths
    assert ".gitignore" in paths


def test_nested_ignore_file_is_scoped(make_files):
    root_path = make_files(
        {
            "src/.gitignore": "*.generated.ts\n",
            "src/schema.generated.ts": "generated\n",
            "src/schema.ts": "schema\n",
            "root.generated.ts": "generated\n",
        }
    )
    paths = all_paths(scan_directory(root_path))
    assert "src/schema.generated.ts" not in paths
    assert "src/schema.ts" in paths
    assert "root.generated.ts" in paths


def test_nested_rules_do_not_leak_to_siblings(make_files):
    root_path = make_files(
        {
            "a/.gitignore": "*.ts\n",
            "a/x.ts": "x\n",
            "b/x.ts": "x\n",
        }
    )
    paths = all_paths(scan_directory(root_path, max_open_files=4))
    assert "a/x.ts" not in paths
    assert "b/x.ts" in paths


def test_scoped_negation_overrides_root_rule(make_files):
    root_path = make_files(
        {
            ".gitignore": "dist/\n",
            "dist/bundle.js": "bundle\n",
            "packages/special/.gitignore": "!dist/\n",
            "packages/special/dist/bundle.js": "bundle\n",
            "packages/other/dist/bundle.js": "bundle\n",
        }
    )
    paths = all_paths(scan_directory(root_path))
    assert "dist" not in paths
    assert "packages/special/dist/bundle.js" in paths
    assert "packages/other/dist" not in paths


def test_negation_within_one_ignore_file(make_files):
    root_path = make_files({".gitignore": "*.log\n!important.log\n", "debug.log": "", "important.log": ""})
    paths = all_paths(scan_directory(root_path))
    assert "debug.log" not in paths
    assert "important.log" in paths


def test_excluded_directory_is_not_descended(make_files):
    root_path = make_files({".gitignore": "build/\n!build/keep.txt\n", "build/keep.txt": "keep\n"})
    paths = all_paths(scan_directory(root_path))
    assert not any(path.startswith("build") for path in paths)


def test_directory_only_rule_keeps_same_named_file(make_files):
    root_path = make_files({".gitignore": "build/\n", "src/build": "a file named build\n"})
    assert "src/build" in all_paths(scan_directory(root_path))


def test_invalid_ignore_line_keeps_other_rules(make_files):
    root_path = make_files(
        {".gitignore": ".env\n*.log\nweird\\\n", ".env": "SECRET=1\n", "app.log": "log\n", "main.py": "main\n"}
    )
    assert all_paths(scan_directory(root_path)) == [".gitignore", "main.py"]


@pytest.mark.skipif(sys.platform == "win32", reason="Symlinks require special permissions on Windows")
def test_symlinks_are_skipped(make_files):
    root_path = make_files({"src/main.py": "main\n", "docs/readme.md": "docs\n"})
    os.symlink(root_path / "src" / "main.py", root_path / "link.py")
    os.symlink(root_path / "src", root_path / "src_link")
    os.symlink(root_path / "src", root_path / "src" / "loop")
    os.symlink(root_path / "missing", root_path / "dangling")

    paths = all_paths(scan_directory(root_path))
    assert paths == ["docs", "docs/readme.md", "src", "src/main.py"]


@pytest.mark.skipif(
    sys.platform == "win32" or (hasattr(os, "geteuid") and os.geteuid() == 0),
    reason="Permission bits are not enforced for root or on Windows",
)
def test_unreadable_directory_is_omitted(make_files):
    root_path = make_files({"secret/key.txt": "secret\n", "public/index.html": "<html></html>\n"})
    secret = root_path / "secret"
    secret.chmod(0o000)
    try:
        paths = all_paths(scan_directory(root_path))
    finally:
        secret.chmod(0o755)
    assert paths == ["public", "public/index.html"]


def test_entry_vanishing_during_scan_is_omitted(make_files, monkeypatch):
    root_path = make_files({"keep.txt": "keep\n", "gone.txt": "gone\n"})
    real_lstat = os.lstat

    def flaky_lstat(path, *args, **kwargs):
        if os.fspath(path).endswith("gone.txt"):
            raise FileNotFoundError(path)
        return real_lstat(path, *args, **kwargs)

    monkeypatch.setattr(os, "lstat", flaky_lstat)
    assert all_paths(scan_directory(root_path, max_open_files=1)) == ["keep.txt"]


def test_missing_root_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        scan_directory(tmp_path / "missing")


def test_root_that_is_a_file_raises(tmp_path):
    path = tmp_path / "file.txt"
    path.write_text("not a directory")
    with pytest.raises(NotADirectoryError):
        scan_directory(path)


def test_invalid_max_open_files(tmp_path):
    with pytest.raises(ValueError):
        FileSystemTree(tmp_path, max_open_files=0)


def test_empty_directory(tmp_path):
    tree = FileSystemTree(tmp_path)
    root = tree.get_tree()
    assert isinstance(root, DirectoryNode)
    assert root.children == ()
    assert list(iter_file_nodes(root)) == []


def test_iter_file_nodes_in_tree_order(project):
    root = scan_directory(project)
    assert [node.relative_path for node in iter_file_nodes(root)] == [
        "docs/guide.md",
        "src/lib/util.ts",
        "src/main.ts",
        "Zeta/z.txt",
        "A.txt",
        "app.ts",
        "b.txt",
        "README.md",
    ]


def test_tree_is_cached(project):
    tree = FileSystemTree(project)
    first = tree.get_tree()
    (project / "new.txt").write_text("new\n")
    assert tree.get_tree() is first
    assert "new.txt" not in [child.name for child in first.children]


def test_pruned_tree_representation(project):
    tree = FileSystemTree(project)
    representation = tree.get_tree_representation({"src", "src/lib", "src/lib/util.ts", "README.md"})
    assert representation.split("\n") == [
        f"{project.name}/",
        "├── src/",
        "│   └── lib/",
        "│       └── util.ts",
        "└── README.md",
    ]
