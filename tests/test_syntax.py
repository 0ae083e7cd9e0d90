import pytest

from auto_i18n import codegen
from auto_i18n.parser import SourceSyntaxError, dialect_for_path, parse_source
from auto_i18n.syntax import MalformedTreeError, SyntaxTree, Visit, traverse


SOURCE = '''\
// header comment
import React from "react";

export const Card = ({ title }: { title: string }) => {
  const x = `a ${title} b`; /* inline */
  return (
    <div className="card">
      {title} &amp; text
    </div>
  );
};
'''


def test_render_is_lossless():
    tree = parse_source(SOURCE)
    assert tree.render() == SOURCE


def test_render_keeps_surrounding_whitespace():
    source = "\n\n  const a = 1;  \n\n"
    assert parse_source(source, "typescript").render() == source


def test_syntax_error_is_reported():
    with pytest.raises(SourceSyntaxError) as exc_info:
        parse_source("function Broken( {\n")
    assert exc_info.value.line >= 1


def test_unknown_dialect():
    with pytest.raises(ValueError):
        parse_source("const a = 1;", "coffeescript")


def test_dialect_for_path():
    assert dialect_for_path("src/App.tsx") == "tsx"
    assert dialect_for_path("src/util.ts") == "typescript"
    assert dialect_for_path("src/App.jsx") == "javascript"
    assert dialect_for_path("README.md") is None


def test_replace_relinks_parent():
    tree = parse_source('const a = "x";\n', "javascript")
    string = next(n for n in tree.descendants(tree.root) if n.kind == "string")
    parent = tree.parent(string)

    call = codegen.call_expression(tree, "t", [codegen.string_literal(tree, "x")])
    tree.replace(string, call)

    assert tree.parent(call) is parent
    assert string.parent is None
    assert call.field_name == "value"
    assert tree.render() == 'const a = t("x");\n'


def test_replace_detached_node_fails():
    tree = SyntaxTree()
    lonely = tree.add("identifier", text="a")
    with pytest.raises(MalformedTreeError):
        tree.replace(lonely, tree.add("identifier", text="b"))


def test_detach_merges_gaps():
    tree = parse_source("f(a, b);\n", "javascript")
    b = next(n for n in tree.descendants(tree.root)
             if n.kind == "identifier" and tree.render(n) == "b")
    tree.detach(b)
    assert tree.render() == "f(a, );\n"


def test_insert_child_uses_separator():
    tree = parse_source("a();\nb();\n", "javascript")
    program = tree.root
    tree.insert_child(program, 1, codegen.raw_node(tree, "expression_statement", "x();"), "\n")
    assert tree.render() == "a();\nx();\nb();\n"


def test_add_checks_gap_count():
    tree = SyntaxTree()
    child = tree.add("identifier", text="a")
    with pytest.raises(MalformedTreeError):
        tree.add("arguments", children=[child], gaps=["("])


def test_traverse_dispatches_by_kind_and_skips():
    tree = parse_source("f(g(1), h(2));\n", "javascript")
    seen = []

    def on_call(node):
        name = tree.render(tree.child_by_field(node, "function"))
        seen.append(name)
        if name == "f":
            return None
        return Visit.SKIP

    traverse(tree, tree.root, {"call_expression": on_call, "number": lambda n: seen.append("num")})
    assert seen == ["f", "g", "h"]


def test_traverse_does_not_visit_replacement():
    tree = parse_source('f("a", "b");\n', "javascript")
    visited = []

    def on_string(node):
        visited.append(tree.render(node))
        tree.replace(node, codegen.call_expression(tree, "t", [codegen.string_literal(tree, "z")]))

    traverse(tree, tree.root, {"string": on_string})
    assert visited == ['"a"', '"b"']
    assert tree.render() == 'f(t("z"), t("z"));\n'


def test_has_short_circuits_and_includes_self():
    tree = parse_source("const a = <div />;\n")
    element = next(n for n in tree.descendants(tree.root) if n.kind == "jsx_self_closing_element")
    assert tree.has(element, lambda n: n.kind == "jsx_self_closing_element", include_self=True)
    assert not tree.has(element, lambda n: n.kind == "jsx_self_closing_element")


def test_jsx_text_runs_are_merged():
    tree = parse_source("const a = <p>\n  하나 &amp; 둘\n  셋\n</p>;\n")
    texts = [tree.render(n) for n in tree.descendants(tree.root) if n.kind == "jsx_text"]
    assert texts == ["\n  하나 &amp; 둘\n  셋\n"]
