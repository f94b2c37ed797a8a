from pathlib import Path

import pytest

from interface_extractor.errors import GoParseError

MARKER = "// +generate_interface"


@pytest.mark.parametrize("go_type,expected", [
    ("int", "int"),
    ("[] int", "[]int"),
    ("* Widget", "*Widget"),
    ("map[string] int", "map[string]int"),
    ("[ 4 ]byte", "[4]byte"),
    ("map[string] [] *pkg . Item", "map[string][]*pkg.Item"),
    ("func(\n\ta int,\n\tb string,\n) error", "func(a int, b string) error"),
    ("func() (int, error)", "func() (int, error)"),
    ("chan<-  int", "chan<- int"),
    ("<- chan int", "<-chan int"),
    ("struct{}", "struct{}"),
    ("interface{ Read(p []byte) (n int, err error) }", "interface{ Read(p []byte) (n int, err error) }"),
    ("struct {\n\tA int // first\n\tB int `json:\"b\"`\n}", "struct{ A int; B int `json:\"b\"` }"),
    ("func(args ...string)", "func(args ...string)"),
])
def test_param_types_print_like_go(go_parser, go_type, expected):
    source = f"package p\n\nfunc (t *T) M(v {go_type}) {{}}\n"
    go_file = go_parser.parse_source(source.encode(), Path("t.go"))
    assert go_file.methods[0].params[0].type == expected


def test_parse_package_types_and_doc(go_parser, write_go):
    path = write_go("widget.go", """
        package shapes

        // Widget is tagged.
        // +generate_interface
        type Widget struct{ n int }

        // +generate_interface

        type Spaced struct{}

        type Untagged struct{}

        // +generate_interface
        type ID int
    """)
    go_file = go_parser.parse_file(path)
    assert go_file.package == "shapes"
    decls = {d.name: d for d in go_file.types}
    assert decls["Widget"].doc == ["// Widget is tagged.", MARKER]
    assert decls["Widget"].is_struct
    assert decls["Spaced"].doc == []
    assert decls["Untagged"].doc == []
    assert decls["ID"].doc == [MARKER]
    assert not decls["ID"].is_struct


def test_trailing_comment_is_not_doc(go_parser, write_go):
    path = write_go("a.go", """
        package shapes

        var x = 1 // +generate_interface
        type Widget struct{}
    """)
    (decl,) = go_parser.parse_file(path).types
    assert decl.doc == []


def test_grouped_declaration_shares_doc(go_parser, write_go):
    path = write_go("a.go", """
        package shapes

        // +generate_interface
        type (
            First struct{}
            Second struct{ a, b int }
        )
    """)
    decls = go_parser.parse_file(path).types
    assert [d.name for d in decls] == ["First", "Second"]
    assert all(d.doc == [MARKER] for d in decls)


def test_block_comment_doc(go_parser, write_go):
    path = write_go("a.go", """
        package shapes

        /* +generate_interface */
        type Widget struct{}
    """)
    (decl,) = go_parser.parse_file(path).types
    assert decl.doc == ["/* +generate_interface */"]


def test_parse_methods(go_parser, write_go):
    path = write_go("methods.go", """
        package shapes

        import (
            "context"
            str "strings"
        )

        func (w *Widget) Foo(a, b int) (string, error) { return "", nil }

        func (Widget) Bar() error { return nil }

        func (w Widget) Log(ctx context.Context, format string, args ...interface{}) {}

        func (w *Widget) Split(int, string) (n int, err error) { return }

        func helper() {}
    """)
    go_file = go_parser.parse_file(path)
    assert [(i.path, i.alias) for i in go_file.imports] == [("context", None), ("strings", "str")]
    methods = {m.name: m for m in go_file.methods}
    assert set(methods) == {"Foo", "Bar", "Log", "Split"}

    foo = methods["Foo"]
    assert foo.receiver_type == "*Widget"
    assert [(g.names, g.type) for g in foo.params] == [(["a", "b"], "int")]
    assert [(g.names, g.type) for g in foo.results] == [([], "string"), ([], "error")]
    assert foo.source_file == path
    assert foo.line == 8

    bar = methods["Bar"]
    assert bar.receiver_type == "Widget"
    assert bar.params == []
    assert [(g.names, g.type) for g in bar.results] == [([], "error")]

    log = methods["Log"]
    assert log.results is None
    assert [(g.names, g.type) for g in log.params] == [
        (["ctx"], "context.Context"),
        (["format"], "string"),
        (["args"], "...interface{}"),
    ]

    split = methods["Split"]
    assert [(g.names, g.type) for g in split.params] == [([], "int"), ([], "string")]
    assert [(g.names, g.type) for g in split.results] == [(["n"], "int"), (["err"], "error")]


def test_parse_dir_groups_by_package(go_parser, write_go, tmp_path):
    write_go("a.go", "package shapes\n")
    write_go("b.go", "package shapes\n")
    write_go("a_test.go", "package shapes_test\n")
    write_go("notes.txt", "not go\n")
    write_go("sub/c.go", "package sub\n")
    packages = go_parser.parse_dir(tmp_path)
    assert sorted(packages) == ["shapes", "shapes_test"]
    assert [f.path.name for f in packages["shapes"].sorted_files()] == ["a.go", "b.go"]


def test_syntax_error_raises(go_parser, write_go):
    path = write_go("broken.go", """
        package shapes

        type Widget struct {
    """)
    with pytest.raises(GoParseError) as exc_info:
        go_parser.parse_file(path)
    assert exc_info.value.path == path
    assert exc_info.value.line is not None


def test_missing_package_clause_raises(go_parser, write_go):
    path = write_go("nopkg.go", "// just a comment\n")
    with pytest.raises(GoParseError, match="missing package clause"):
        go_parser.parse_file(path)


def test_invalid_utf8_raises(go_parser, tmp_path):
    path = tmp_path / "bad.go"
    path.write_bytes(b"package shapes\n// \xff\xfe\n")
    with pytest.raises(GoParseError, match="invalid UTF-8"):
        go_parser.parse_file(path)
