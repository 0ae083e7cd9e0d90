#!/usr/bin/env python3
"""
Locator - поиск функций-компонентов, внутри которых можно вызвать хук перевода.

Компонент = имя с заглавной латинской буквы + в теле есть JSX
(элемент или фрагмент). Имя стрелочной функции берётся из переменной,
которой она присвоена. Вложенные компоненты собираются независимо.
"""

import re
from typing import List, Optional

from .syntax import Node, SyntaxTree, traverse

FUNCTION_KINDS = (
    "function_declaration",
    "generator_function_declaration",
    "function_expression",
    "function",             # Старые версии грамматики
    "generator_function",
    "arrow_function",
)

MARKUP_KINDS = {"jsx_element", "jsx_self_closing_element", "jsx_fragment"}

_COMPONENT_NAME_RE = re.compile(r"^[A-Z]")
_HOOK_NAME_RE = re.compile(r"^use[A-Z0-9]")


def function_name(tree: SyntaxTree, node: Node) -> Optional[str]:
    """Отображаемое имя функции (None - анонимная)."""
    if node.kind == "arrow_function":
        parent = tree.parent(node)
        if parent is None or parent.kind != "variable_declarator":
            return None
        name_node = tree.child_by_field(parent, "name")
    else:
        name_node = tree.child_by_field(node, "name")

    if name_node is None or name_node.kind != "identifier":
        return None
    return tree.render(name_node)


def produces_markup(tree: SyntaxTree, node: Node) -> bool:
    """Есть ли JSX в теле функции."""
    body = tree.child_by_field(node, "body")
    if body is None:
        return False
    return tree.has(body, lambda n: n.kind in MARKUP_KINDS, include_self=True)


def is_functional_component(tree: SyntaxTree, node: Node) -> bool:
    name = function_name(tree, node)
    if not name or not _COMPONENT_NAME_RE.match(name):
        return False
    return produces_markup(tree, node)


def is_hook_function(tree: SyntaxTree, node: Node) -> bool:
    name = function_name(tree, node)
    return bool(name and _HOOK_NAME_RE.match(name))


def find_hook_context_nodes(tree: SyntaxTree, root: Optional[Node] = None,
                            include_hooks: bool = False) -> List[Node]:
    """
    Находит функции, которые можно считать контекстами перевода.

    Args:
        tree: Дерево
        root: Откуда начинать обход (по умолчанию корень)
        include_hooks: Считать пользовательские хуки (useXxx) контекстами

    Returns:
        Список функций в порядке обхода, без повторов
    """
    contexts: List[Node] = []

    def _visit(node: Node):
        if is_functional_component(tree, node) or (
                include_hooks and is_hook_function(tree, node)):
            contexts.append(node)

    start = root if root is not None else tree.root
    traverse(tree, start, {kind: _visit for kind in FUNCTION_KINDS})
    return contexts
