#!/usr/bin/env python3
"""
Codegen - построение новых узлов и работа с JS-строками.

Новые узлы несут готовый текст в `gaps`/`text`, поэтому печатаются
тем же SyntaxTree.render(), что и исходные.
"""

import json
import re
from typing import List, Tuple

from .syntax import Node, SyntaxTree


_SIMPLE_ESCAPES = {
    "n": "\n", "r": "\r", "t": "\t", "b": "\b",
    "f": "\f", "v": "\v", "0": "\0",
}

# \n, LINE SEPARATOR, PARAGRAPH SEPARATOR
_LINE_TERMINATORS = ("\n", chr(0x2028), chr(0x2029))

_ESCAPE_RE = re.compile(
    r"\\(u[dD][89abAB][0-9a-fA-F]{2}\\u[dD][c-fC-F][0-9a-fA-F]{2}"
    r"|u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|[\s\S])"
)


def quote(value: str) -> str:
    """Строковый литерал JS в двойных кавычках (JSON - подмножество JS)."""
    return json.dumps(value, ensure_ascii=False)


def _is_surrogate(code: int) -> bool:
    return 0xD800 <= code <= 0xDFFF


def cook(raw: str) -> str:
    """
    Декодирует escape-последовательности JS ("cooked" значение).

    Поддерживает \\n, \\t, ..., \\xHH, \\uHHHH, \\u{H+}, продолжение строки
    (обратный слэш + перевод строки) и identity-escape (\\" -> ").
    Суррогатная пара \\uD83D\\uDE00 даёт один символ; одиночный суррогат
    в UTF-8 не записать, поэтому он остаётся исходным текстом escape.
    """
    raw = raw.replace("\r\n", "\n")

    def _decode(match: "re.Match") -> str:
        seq = match.group(1)
        if seq in _LINE_TERMINATORS:
            return ""
        if seq in _SIMPLE_ESCAPES:
            return _SIMPLE_ESCAPES[seq]
        if len(seq) > 1 and "\\" in seq:
            high, low = int(seq[1:5], 16), int(seq[7:], 16)
            return chr(0x10000 + ((high - 0xD800) << 10) + (low - 0xDC00))
        if seq.startswith("u{"):
            code = int(seq[2:-1], 16)
        elif seq.startswith("u") and len(seq) == 5:
            code = int(seq[1:], 16)
        elif seq.startswith("x") and len(seq) == 3:
            return chr(int(seq[1:], 16))
        else:
            return seq
        if _is_surrogate(code) or code > 0x10FFFF:
            return match.group(0)
        return chr(code)

    return _ESCAPE_RE.sub(_decode, raw)


def string_literal(tree: SyntaxTree, value: str) -> Node:
    return tree.add("string", text=quote(value))


def identifier(tree: SyntaxTree, name: str) -> Node:
    return tree.add("identifier", text=name)


def raw_node(tree: SyntaxTree, kind: str, text: str) -> Node:
    """Непрозрачный узел с готовым текстом (объявления, импорты)."""
    return tree.add(kind, text=text)


def arguments(tree: SyntaxTree, args: List[Node]) -> Node:
    if not args:
        return tree.add("arguments", text="()")
    gaps = ["("] + [", "] * (len(args) - 1) + [")"]
    return tree.add("arguments", children=args, gaps=gaps)


def call_expression(tree: SyntaxTree, name: str, args: List[Node]) -> Node:
    """name(arg1, arg2, ...)"""
    callee = identifier(tree, name)
    callee.field_name = "function"
    args_node = arguments(tree, args)
    args_node.field_name = "arguments"
    return tree.add("call_expression", children=[callee, args_node], gaps=["", "", ""])


def pair(tree: SyntaxTree, key: str, value: Node) -> Node:
    """Свойство объекта: "key": value."""
    key_node = string_literal(tree, key)
    key_node.field_name = "key"
    value.field_name = "value"
    return tree.add("pair", children=[key_node, value], gaps=["", ": ", ""])


def object_expression(tree: SyntaxTree, entries: List[Tuple[str, Node]]) -> Node:
    """{ "label": expr, ... } в порядке вставки."""
    if not entries:
        return tree.add("object", text="{}")
    pairs = [pair(tree, key, value) for key, value in entries]
    gaps = ["{ "] + [", "] * (len(pairs) - 1) + [" }"]
    return tree.add("object", children=pairs, gaps=gaps)


def jsx_expression(tree: SyntaxTree, expression: Node) -> Node:
    """{expression} - слот выражения в разметке."""
    return tree.add("jsx_expression", children=[expression], gaps=["{", "}"])


def return_statement(tree: SyntaxTree, expression: Node) -> Node:
    return tree.add("return_statement", children=[expression], gaps=["return ", ";"])


def statement_block(tree: SyntaxTree, statements: List[Node], indent: str = "  ") -> Node:
    """Блок { ... } с операторами на отдельных строках."""
    gaps = ["{\n" + indent] + ["\n" + indent] * (len(statements) - 1) + ["\n}"]
    return tree.add("statement_block", children=statements, gaps=gaps)
