#!/usr/bin/env python3
"""
Parser - разбор JS/TS/TSX исходников в SyntaxTree через tree-sitter.

Деревья tree-sitter неизменяемы, поэтому они один раз конвертируются
в арену SyntaxTree. Промежутки между детьми сохраняются, так что
render() без изменений возвращает исходный текст байт-в-байт.

Нормализация: подряд идущие jsx_text / html_character_reference,
разделённые только пробелами, склеиваются в один лист jsx_text -
одна текстовая вставка в разметке, независимо от версии грамматики.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from tree_sitter import Language, Node as TSNode, Parser

from .syntax import Node, SyntaxTree

logger = logging.getLogger(__name__)

DIALECTS = ("tsx", "typescript", "javascript")

EXTENSION_DIALECTS = {
    ".tsx": "tsx",
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".jsx": "javascript",
    ".js": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
}

_JSX_CONTAINERS = {"jsx_element", "jsx_fragment"}
_JSX_TEXT_KINDS = {"jsx_text", "html_character_reference"}

_PARSERS: Dict[str, Parser] = {}


class SourceSyntaxError(ValueError):
    """Исходник не разбирается без ошибок."""

    def __init__(self, message: str, line: int = 0, column: int = 0):
        super().__init__(f"{message} (строка {line}, столбец {column})")
        self.line = line
        self.column = column


@dataclass
class _Span:
    """Ребёнок tree-sitter узла (или склеенный текстовый отрезок)."""
    kind: str
    named: bool
    field_name: Optional[str]
    start: int
    end: int
    ts_node: Optional[TSNode] = None


def _load_language(dialect: str) -> Language:
    """Ленивая загрузка грамматик."""
    if dialect == "tsx":
        import tree_sitter_typescript as ts_typescript
        return Language(ts_typescript.language_tsx())
    if dialect == "typescript":
        import tree_sitter_typescript as ts_typescript
        return Language(ts_typescript.language_typescript())
    if dialect == "javascript":
        import tree_sitter_javascript as ts_javascript
        return Language(ts_javascript.language())
    raise ValueError(f"Неизвестный диалект: {dialect!r}. Доступны: {', '.join(DIALECTS)}")


def get_parser(dialect: str) -> Parser:
    """Кешированный парсер для диалекта."""
    if dialect not in _PARSERS:
        _PARSERS[dialect] = Parser(_load_language(dialect))
    return _PARSERS[dialect]


def dialect_for_path(path: Path) -> Optional[str]:
    """Диалект по расширению файла (None - не поддерживается)."""
    return EXTENSION_DIALECTS.get(Path(path).suffix.lower())


def parse_source(source: str, dialect: str = "tsx") -> SyntaxTree:
    """
    Разбирает исходник в SyntaxTree.

    Raises:
        SourceSyntaxError: в дереве есть ERROR или пропущенные узлы
    """
    data = source.encode("utf-8")
    ts_tree = get_parser(dialect).parse(data)
    root = ts_tree.root_node

    if root.has_error:
        line, column = _first_error_position(root)
        raise SourceSyntaxError("Ошибка синтаксиса", line, column)

    tree = SyntaxTree(source)
    tree.root = _convert(tree, root, data)
    return tree


def _first_error_position(root: TSNode):
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            row, column = node.start_point
            return row + 1, column + 1
        if node.has_error:
            stack.extend(reversed(node.children))
    row, column = root.start_point
    return row + 1, column + 1


def _child_spans(ts_node: TSNode) -> List[_Span]:
    spans: List[_Span] = []
    cursor = ts_node.walk()
    if not cursor.goto_first_child():
        return spans
    while True:
        child = cursor.node
        spans.append(_Span(child.type, child.is_named, cursor.field_name,
                           child.start_byte, child.end_byte, child))
        if not cursor.goto_next_sibling():
            break
    return spans


def _merge_jsx_text(spans: List[_Span], data: bytes) -> List[_Span]:
    """Склеивает текстовые отрезки разметки, разделённые только пробелами."""
    merged: List[_Span] = []
    for span in spans:
        prev = merged[-1] if merged else None
        if (prev is not None and span.kind in _JSX_TEXT_KINDS
                and prev.kind in _JSX_TEXT_KINDS
                and not data[prev.end:span.start].strip()):
            merged[-1] = _Span("jsx_text", True, None, prev.start, span.end)
            continue
        if span.kind in _JSX_TEXT_KINDS:
            span = _Span("jsx_text", True, span.field_name, span.start, span.end)
        merged.append(span)
    # Пробелы вокруг текста - часть текстового отрезка (как в JSXText)
    for i, span in enumerate(merged):
        if span.kind != "jsx_text":
            continue
        if i > 0 and not data[merged[i - 1].end:span.start].strip():
            span.start = merged[i - 1].end
        if i + 1 < len(merged) and not data[span.end:merged[i + 1].start].strip():
            span.end = merged[i + 1].start
    return merged


def _convert(tree: SyntaxTree, ts_root: TSNode, data: bytes) -> Node:
    """Итеративная конвертация (глубокие деревья не упираются в рекурсию)."""

    def _slice(start: int, end: int) -> str:
        return data[start:end].decode("utf-8")

    root = tree.add(ts_root.type, named=ts_root.is_named)
    stack = [(ts_root, root)]

    while stack:
        ts_node, node = stack.pop()
        spans = _child_spans(ts_node)
        if ts_node.type in _JSX_CONTAINERS:
            spans = _merge_jsx_text(spans, data)

        # Корень покрывает весь вход, включая крайние пробелы
        start, end = ts_node.start_byte, ts_node.end_byte
        if node is root:
            start, end = 0, len(data)

        if not spans:
            node.text = _slice(start, end)
            continue

        gaps = [_slice(start, spans[0].start)]
        for prev, span in zip(spans, spans[1:]):
            gaps.append(_slice(prev.end, span.start))
        gaps.append(_slice(spans[-1].end, end))
        node.gaps = gaps

        for span in spans:
            child = tree.add(span.kind, named=span.named, field_name=span.field_name)
            child.parent = node.index
            node.children.append(child.index)
            if span.ts_node is not None and span.ts_node.child_count:
                stack.append((span.ts_node, child))
            else:
                child.text = _slice(span.start, span.end)

    logger.debug("Конвертировано узлов: %d", len(tree.nodes))
    return root
