#!/usr/bin/env python3
"""
Hooks - объявление функции перевода в компонентах после обёртки.

Компонент, в котором появились вызовы t(), получает первой строкой
    const { t } = useTranslation();
а файл - импорт хука, если его ещё нет. Компоненты, где хук уже
вызывается или t приходит параметром, не трогаются.
"""

import logging
from typing import Iterator, List, Optional, Set

from . import codegen
from .syntax import Node, SyntaxTree

logger = logging.getLogger(__name__)

_PARAMETER_NAME_KINDS = {"identifier", "shorthand_property_identifier_pattern"}


class HookInjector:
    """Добавляет вызов хука перевода в контексты и импорт в модуль."""

    def __init__(self, tree: SyntaxTree, contexts: List[Node], function_name: str = "t",
                 hook_name: str = "useTranslation", import_source: str = "react-i18next"):
        self.tree = tree
        self.contexts = contexts
        self.function_name = function_name
        self.hook_name = hook_name
        self.import_source = import_source
        self._context_ids: Set[int] = {c.index for c in contexts}

    def inject(self) -> int:
        """
        Объявляет t в каждом контексте, который его использует.

        Returns:
            Количество изменённых контекстов
        """
        updated = 0
        for context in self.contexts:
            if not self.tree.is_attached(context):
                continue
            if not self._calls(context, self.function_name):
                continue
            if self._calls(context, self.hook_name) or self._receives_translation(context):
                continue
            self._insert_hook(context)
            updated += 1

        if updated:
            self.ensure_import()
        return updated

    def ensure_import(self) -> bool:
        """Добавляет import { useTranslation } from "...". True - если добавлен."""
        program = self.tree.root
        if program is None or not program.children:
            return False

        statements = self.tree.children(program, named_only=False)
        if any(self._imports_hook(s) for s in statements if s.kind == "import_statement"):
            return False

        import_node = codegen.raw_node(
            self.tree, "import_statement",
            f"import {{ {self.hook_name} }} from {codegen.quote(self.import_source)};",
        )

        position = self._import_position(statements)
        if position == 0:
            self.tree.insert_child(program, 0, import_node, "\n")
        else:
            # Новый импорт сразу за предыдущим оператором, исходный отступ - после него
            original = program.gaps[position]
            self.tree.insert_child(program, position, import_node, original)
            program.gaps[position] = "\n"
        logger.debug("Добавлен импорт %s из %s", self.hook_name, self.import_source)
        return True

    def _own_nodes(self, context: Node) -> Iterator[Node]:
        """Потомки контекста без вложенных контекстов."""
        stack = list(reversed(context.children))
        while stack:
            node = self.tree.nodes[stack.pop()]
            if node.index in self._context_ids:
                continue
            yield node
            stack.extend(reversed(node.children))

    def _calls(self, context: Node, name: str) -> bool:
        for node in self._own_nodes(context):
            if node.kind != "call_expression":
                continue
            callee = self.tree.child_by_field(node, "function")
            if callee is not None and callee.kind == "identifier" and self.tree.render(callee) == name:
                return True
        return False

    def _receives_translation(self, context: Node) -> bool:
        """t уже приходит параметром: function Foo({ t }) / (t) => ..."""
        params = (self.tree.child_by_field(context, "parameters")
                  or self.tree.child_by_field(context, "parameter"))
        if params is None:
            return False
        return self.tree.has(
            params,
            lambda n: n.kind in _PARAMETER_NAME_KINDS and self.tree.render(n) == self.function_name,
            include_self=True,
        )

    def _declaration(self) -> Node:
        return codegen.raw_node(
            self.tree, "lexical_declaration",
            f"const {{ {self.function_name} }} = {self.hook_name}();",
        )

    def _insert_hook(self, context: Node) -> None:
        body = self.tree.child_by_field(context, "body")
        if body is None:
            return

        if body.kind == "statement_block":
            # Сразу после "{", с тем же отступом, что у первого оператора
            gap = body.gaps[1] if len(body.gaps) > 1 else ""
            separator = gap if "\n" in gap else " "
            self.tree.insert_child(body, 1, self._declaration(), separator)
            return

        # () => <div/>  ->  () => { const { t } = useTranslation(); return <div/>; }
        placeholder = codegen.raw_node(self.tree, "expression", "")
        block = codegen.statement_block(
            self.tree, [self._declaration(), codegen.return_statement(self.tree, placeholder)]
        )
        self.tree.replace(body, block)
        self.tree.replace(placeholder, body)

    def _imports_hook(self, statement: Node) -> bool:
        source = self.tree.child_by_field(statement, "source")
        if source is None or self.tree.render(source)[1:-1] != self.import_source:
            return False
        return self.tree.has(
            statement,
            lambda n: n.kind == "identifier" and self.tree.render(n) == self.hook_name,
        )

    def _import_position(self, statements: List[Node]) -> int:
        """После последнего импорта, иначе после директив и ведущих комментариев."""
        last_import: Optional[int] = None
        for i, node in enumerate(statements):
            if node.kind == "import_statement":
                last_import = i
        if last_import is not None:
            return last_import + 1

        position = 0
        for node in statements:
            if node.kind == "comment" or self._is_directive(node):
                position += 1
                continue
            break
        return position

    def _is_directive(self, node: Node) -> bool:
        if node.kind != "expression_statement":
            return False
        inner = self.tree.children(node)
        return len(inner) == 1 and inner[0].kind == "string"
