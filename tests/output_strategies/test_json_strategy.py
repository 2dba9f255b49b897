import json

from llmview.file_content_renderer import RenderedFile
from llmview.file_system_tree.file_system_node import FileNode
from llmview.output_strategies.json_strategy import JSONOutputStrategy


def rendered(relative_path, content, file_size=None):
    size = len(content.encode("utf-8")) if file_size is None else file_size
    return RenderedFile(FileNode(relative_path.rsplit("/", 1)[-1], relative_path, file_size=size), content)


def test_files_with_path_size_and_content():
    output = JSONOutputStrategy().format_output([rendered("src/index.ts", "hello")])
    parsed = json.loads(output)
    assert parsed == {"files": [{"path": "src/index.ts", "size": 5, "content": "hello"}]}


def test_size_is_file_size_not_rendered_length():
    output = JSONOutputStrategy().format_output([rendered("big.txt", "(Contents excluded)", file_size=10**6)])
    assert json.loads(output)["files"][0]["size"] == 10**6


def test_directory_included_when_given():
    parsed = json.loads(JSONOutputStrategy().format_output([rendered("a.ts", "x")], "project/\n└── a.ts"))
    assert parsed["directory"] == "project/\n└── a.ts"
    assert list(parsed) == ["directory", "files"]


def test_directory_omitted_without_tree():
    parsed = json.loads(JSONOutputStrategy().format_output([rendered("a.ts", "x")], None))
    assert "directory" not in parsed


def test_order_and_indentation():
    output = JSONOutputStrategy().format_output([rendered("a.ts", "aaa"), rendered("b.py", "bbb")])
    assert [item["path"] for item in json.loads(output)["files"]] == ["a.ts", "b.py"]
    assert output.startswith('{\n  "files": [\n    {\n      "path": "a.ts",')


def test_non_ascii_is_kept():
    output = JSONOutputStrategy().format_output([rendered("i18n.txt", "héllo → wörld")])
    assert "héllo → wörld" in output


def test_special_characters_round_trip():
    content = 'line "one"\n\ttab \\ backslash'
    parsed = json.loads(JSONOutputStrategy().format_output([rendered("x.txt", content)]))
    assert parsed["files"][0]["content"] == content
