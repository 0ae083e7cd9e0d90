#!/usr/bin/env python3
"""
TWrapper - оборачивает переводимые литералы в вызовы функции перевода.

Три независимых прохода по всем контекстам (компонентам), строго по очереди:
1. Строковые литералы:   "안녕"            -> t("안녕")
                         title="안녕"      -> title={t("안녕")}
2. Текст в разметке:     <p> 안녕 </p>     -> <p>{t("안녕")}</p>
3. Шаблонные строки:     `안녕, ${name}!`  -> t("안녕, {{name}}!", { "name": name })

Уже обёрнутый литерал (родитель - вызов t) не трогается, поэтому
повторный запуск ничего не меняет. Признак обёртки каждый раз
вычисляется по форме дерева, а не кешируется.
"""

import html
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from . import codegen
from .syntax import MalformedTreeError, Node, SyntaxTree, Visit, traverse

logger = logging.getLogger(__name__)

# Обёртки типа: на рантайм не влияют, в ключ и аргументы не попадают
TYPE_WRAPPER_KINDS = {"as_expression", "satisfies_expression", "type_assertion"}

# Выражения, которые грамматика может положить в ${...}
RUNTIME_KINDS = {
    "identifier", "this", "super", "member_expression", "subscript_expression",
    "call_expression", "new_expression", "await_expression", "yield_expression",
    "binary_expression", "unary_expression", "update_expression",
    "ternary_expression", "parenthesized_expression", "sequence_expression",
    "assignment_expression", "augmented_assignment_expression",
    "arrow_function", "function_expression", "function", "generator_function",
    "class", "object", "array", "string", "template_string", "number", "regex",
    "true", "false", "null", "undefined", "non_null_expression",
    "jsx_element", "jsx_self_closing_element", "meta_property",
}

# Типовые узлы без рантайм-значения
TYPE_ONLY_KINDS = {
    "type_identifier", "nested_type_identifier", "predefined_type",
    "type_annotation", "type_arguments", "type_query", "this_type",
}

# Строки в этих позициях - не выражения: вызов там синтаксически невозможен
_NON_EXPRESSION_PARENTS = {
    "import_statement", "export_statement", "import_require_clause",
    "external_module_reference", "literal_type", "module", "internal_module",
    "ambient_declaration", "enum_body", "import_attribute",
}
_KEY_FIELDS = {"key", "name", "property"}   # property - ключ поля класса (field_definition)


def is_type_only(kind: str) -> bool:
    return kind in TYPE_ONLY_KINDS or kind.endswith("_type")


@dataclass
class WrapStats:
    """Результат обёртки одного дерева."""
    string_literals: int = 0
    jsx_texts: int = 0
    template_literals: int = 0
    keys: List[str] = field(default_factory=list)   # В порядке создания

    @property
    def total(self) -> int:
        return self.string_literals + self.jsx_texts + self.template_literals


class TWrapper:
    """
    Переписывает литералы внутри контекстов в вызовы функции перевода.

    Дерево меняется на месте. Ошибка классификатора прерывает проход
    без отката уже сделанных замен.
    """

    def __init__(self, tree: SyntaxTree, contexts: List[Node],
                 check_language: Callable[[str], bool], function_name: str = "t"):
        self.tree = tree
        self.contexts = contexts
        self.check_language = check_language
        self.function_name = function_name
        self.stats = WrapStats()

    def wrap(self) -> WrapStats:
        """Все три прохода по очереди."""
        self.wrap_string_literal()
        self.wrap_jsx_text()
        self.wrap_template_literal()
        logger.debug(
            "Обёрнуто: строк %d, текстов %d, шаблонов %d",
            self.stats.string_literals, self.stats.jsx_texts, self.stats.template_literals,
        )
        return self.stats

    # === Проход 1: строковые литералы ===

    def wrap_string_literal(self) -> None:
        for context in self.contexts:
            traverse(self.tree, context, {"string": self._on_string})

    def _on_string(self, node: Node) -> Optional[Visit]:
        if self._already_wrapped_string(node) or not self._is_expression_position(node):
            return Visit.SKIP

        parent = self.tree.parent(node)
        in_attribute = parent is not None and parent.kind == "jsx_attribute"
        value = self._string_value(node, in_attribute)
        if not self._check(value):
            return Visit.SKIP

        call = codegen.call_expression(
            self.tree, self.function_name, [codegen.string_literal(self.tree, value)]
        )
        if in_attribute:
            # В атрибуте разметки голый вызов недопустим: title={t("...")}
            self.tree.replace(node, codegen.jsx_expression(self.tree, call))
        else:
            self.tree.replace(node, call)

        self.stats.string_literals += 1
        self.stats.keys.append(value)
        return Visit.SKIP

    # === Проход 2: текст в разметке ===

    def wrap_jsx_text(self) -> None:
        for context in self.contexts:
            traverse(self.tree, context, {"jsx_text": self._on_jsx_text})

    def _on_jsx_text(self, node: Node) -> Optional[Visit]:
        if self._already_wrapped_jsx(node):
            return Visit.SKIP

        # Пробелы по краям отбрасываются безвозвратно
        trimmed = html.unescape(self.tree.render(node)).strip()
        if not trimmed or not self._check(trimmed):
            return Visit.SKIP

        call = codegen.call_expression(
            self.tree, self.function_name, [codegen.string_literal(self.tree, trimmed)]
        )
        self.tree.replace(node, codegen.jsx_expression(self.tree, call))

        self.stats.jsx_texts += 1
        self.stats.keys.append(trimmed)
        return Visit.SKIP

    # === Проход 3: шаблонные строки ===

    def wrap_template_literal(self) -> None:
        for context in self.contexts:
            traverse(self.tree, context, {"template_string": self._on_template})

    def _on_template(self, node: Node) -> Optional[Visit]:
        if self._is_tagged_template(node) or self._already_wrapped_string(node):
            return None

        quasis, substitutions = self._template_parts(node)
        if len(quasis) != len(substitutions) + 1:
            raise MalformedTreeError(
                f"Шаблон: {len(quasis)} фрагментов на {len(substitutions)} выражений"
            )

        translation_key = ""
        entries: List[Tuple[str, Node]] = []

        for i, substitution in enumerate(substitutions):
            translation_key += quasis[i]
            expr = self._unwrap_type_assertion(self._substitution_expression(substitution))

            if is_type_only(expr.kind):
                # Тип без значения - только пустой плейсхолдер
                translation_key += "{{}}"
                continue

            if expr.kind not in RUNTIME_KINDS:
                logger.warning(
                    "Неизвестный вид выражения в шаблоне: %s - считаем рантайм-выражением",
                    expr.kind,
                )
            label = self.tree.render(expr)
            translation_key += "{{" + label + "}}"
            entries.append((label, expr))

        translation_key += quasis[-1]

        if not self._check(translation_key):
            return None

        labels = [label for label, _ in entries]
        if len(set(labels)) != len(labels):
            logger.debug("Повторяющиеся метки в %r: побеждает последняя", translation_key)

        # Выражения переносятся в новый вызов, а не копируются
        for _, expr in entries:
            self.tree.detach(expr)

        call = codegen.call_expression(self.tree, self.function_name, [
            codegen.string_literal(self.tree, translation_key),
            codegen.object_expression(self.tree, entries),
        ])
        self.tree.replace(node, call)

        self.stats.template_literals += 1
        self.stats.keys.append(translation_key)

        # Вложенные шаблоны внутри перенесённых выражений
        for _, expr in entries:
            traverse(self.tree, expr, {"template_string": self._on_template},
                     include_start=True)
        return Visit.SKIP

    def _template_parts(self, node: Node) -> Tuple[List[str], List[Node]]:
        """Декодированные фрагменты и подстановки шаблона в исходном порядке."""
        quasis: List[str] = []
        substitutions: List[Node] = []
        current: List[str] = []

        for i, child in enumerate(self.tree.children(node, named_only=False)):
            current.append(node.gaps[i])
            if child.kind == "`":
                continue
            if child.kind == "template_substitution":
                quasis.append(codegen.cook("".join(current)))
                substitutions.append(child)
                current = []
                continue
            current.append(self.tree.render(child))
        if node.gaps:
            current.append(node.gaps[-1])
        quasis.append(codegen.cook("".join(current)))
        return quasis, substitutions

    def _substitution_expression(self, substitution: Node) -> Node:
        inner = self.tree.children(substitution)
        if len(inner) != 1 or inner[0].kind == "ERROR":
            raise MalformedTreeError(
                f"Подстановка в шаблоне: ожидалось одно выражение, найдено {len(inner)}"
            )
        return inner[0]

    def _unwrap_type_assertion(self, node: Node) -> Node:
        """Снимает вложенные `as` / `satisfies` / `<T>x`, в том числе в скобках."""
        while True:
            if node.kind == "parenthesized_expression":
                inner = self.tree.children(node)
                if len(inner) != 1 or inner[0].kind not in TYPE_WRAPPER_KINDS:
                    return node
                node = inner[0]
                continue
            if node.kind not in TYPE_WRAPPER_KINDS:
                return node
            inner = [c for c in self.tree.children(node) if c.kind != "type_arguments"]
            if not inner:
                raise MalformedTreeError(f"{node.kind} без выражения")
            node = inner[-1] if node.kind == "type_assertion" else inner[0]

    # === Проверки ===

    def _check(self, text: str) -> bool:
        result = self.check_language(text)
        if not isinstance(result, bool):
            raise TypeError(
                f"Классификатор вернул {type(result).__name__} вместо bool для {text!r}"
            )
        return result

    def _is_translation_call(self, node: Optional[Node]) -> bool:
        if node is None or node.kind != "call_expression":
            return False
        callee = self.tree.child_by_field(node, "function")
        return (callee is not None and callee.kind == "identifier"
                and self.tree.render(callee) == self.function_name)

    def _already_wrapped_string(self, node: Node) -> bool:
        parent = self.tree.parent(node)
        if parent is not None and parent.kind == "arguments":
            parent = self.tree.parent(parent)
        return self._is_translation_call(parent)

    def _already_wrapped_jsx(self, node: Node) -> bool:
        parent = self.tree.parent(node)
        if parent is None or parent.kind != "jsx_expression":
            return False
        inner = self.tree.children(parent)
        return bool(inner) and self._is_translation_call(inner[0])

    def _is_expression_position(self, node: Node) -> bool:
        parent = self.tree.parent(node)
        if parent is None:
            return False
        if parent.kind in _NON_EXPRESSION_PARENTS:
            return False
        return node.field_name not in _KEY_FIELDS

    def _is_tagged_template(self, node: Node) -> bool:
        parent = self.tree.parent(node)
        return (parent is not None and parent.kind == "call_expression"
                and node.field_name == "arguments")

    def _string_value(self, node: Node, in_attribute: bool) -> str:
        inner = self.tree.render(node)[1:-1]
        if in_attribute:
            # Атрибуты разметки: без escape-последовательностей, но с сущностями
            return html.unescape(inner)
        return codegen.cook(inner)
