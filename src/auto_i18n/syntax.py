#!/usr/bin/env python3
"""
Syntax - изменяемое синтаксическое дерево для переписывания исходников.

Дерево хранится как арена узлов: каждый узел адресуется индексом,
дети и родитель - тоже индексы. Замена узла = перестановка слота
в списке детей родителя, без циклических ссылок между объектами.

Печать без потерь: у каждого внутреннего узла есть `gaps` - исходный
текст между детьми (пробелы, комментарии, пунктуация). Нетронутые
участки печатаются байт-в-байт, новые узлы несут свой текст сами.

Обход (traverse) - аналог ast.NodeVisitor, но с диспетчеризацией
по словарю {kind: handler} и явным управлением спуском (Visit.SKIP).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Iterator, List, Optional


class MalformedTreeError(ValueError):
    """Узел нарушает ожидаемую форму (например, пустая подстановка в шаблоне)."""


class Visit(Enum):
    """Сигнал обработчика обходу."""
    CONTINUE = "continue"
    SKIP = "skip"       # Не спускаться в поддерево узла


@dataclass
class Node:
    """Узел дерева."""
    kind: str
    named: bool = True
    text: str = ""                  # Только для листьев
    field_name: Optional[str] = None  # Имя поля в родителе (name, body, ...)
    children: List[int] = field(default_factory=list)
    gaps: List[str] = field(default_factory=list)
    parent: Optional[int] = None
    index: int = -1

    @property
    def is_leaf(self) -> bool:
        return not self.children


Handler = Callable[[Node], Optional[Visit]]


class SyntaxTree:
    """
    Арена узлов с корнем.

    Новые узлы регистрируются через add(); отсоединённые узлы остаются
    в арене, но недостижимы из корня и не печатаются.
    """

    def __init__(self, source: str = ""):
        self.source = source
        self.nodes: List[Node] = []
        self.root: Optional[Node] = None

    def add(self, kind: str, text: str = "", children: Optional[List[Node]] = None,
            gaps: Optional[List[str]] = None, named: bool = True,
            field_name: Optional[str] = None) -> Node:
        """Регистрирует новый узел и привязывает к нему детей."""
        node = Node(kind=kind, named=named, text=text, field_name=field_name)
        node.index = len(self.nodes)
        self.nodes.append(node)

        children = children or []
        if children:
            gaps = gaps if gaps is not None else [""] * (len(children) + 1)
            if len(gaps) != len(children) + 1:
                raise MalformedTreeError(
                    f"{kind}: ожидалось {len(children) + 1} промежутков, получено {len(gaps)}"
                )
            node.gaps = list(gaps)
            for child in children:
                child.parent = node.index
                node.children.append(child.index)
        return node

    def node(self, index: int) -> Node:
        return self.nodes[index]

    def parent(self, node: Node) -> Optional[Node]:
        if node.parent is None:
            return None
        return self.nodes[node.parent]

    def children(self, node: Node, named_only: bool = True) -> List[Node]:
        result = [self.nodes[i] for i in node.children]
        if named_only:
            result = [c for c in result if c.named and c.kind != "comment"]
        return result

    def child_by_field(self, node: Node, name: str) -> Optional[Node]:
        for index in node.children:
            child = self.nodes[index]
            if child.field_name == name:
                return child
        return None

    def ancestors(self, node: Node) -> Iterator[Node]:
        current = self.parent(node)
        while current is not None:
            yield current
            current = self.parent(current)

    def descendants(self, node: Node, include_self: bool = False) -> Iterator[Node]:
        """Все потомки в порядке обхода в глубину (pre-order)."""
        stack = [node.index] if include_self else list(reversed(node.children))
        while stack:
            current = self.nodes[stack.pop()]
            yield current
            stack.extend(reversed(current.children))

    def has(self, node: Node, predicate: Callable[[Node], bool],
            include_self: bool = False) -> bool:
        """Есть ли в поддереве узел, удовлетворяющий предикату (до первого совпадения)."""
        return any(predicate(n) for n in self.descendants(node, include_self))

    def is_attached(self, node: Node) -> bool:
        """Достижим ли узел из корня."""
        if node is self.root:
            return True
        return any(a is self.root for a in self.ancestors(node))

    def replace(self, old: Node, new: Node) -> Node:
        """Ставит new в слот old у родителя. Старый узел отсоединяется."""
        parent = self.parent(old)
        if parent is None:
            raise MalformedTreeError(f"Нельзя заменить корневой/отсоединённый узел {old.kind}")
        slot = parent.children.index(old.index)
        parent.children[slot] = new.index
        new.parent = parent.index
        new.field_name = old.field_name
        old.parent = None
        return new

    def detach(self, node: Node) -> Node:
        """Убирает узел из родителя, склеивая соседние промежутки."""
        parent = self.parent(node)
        if parent is None:
            return node
        slot = parent.children.index(node.index)
        del parent.children[slot]
        merged = parent.gaps[slot] + parent.gaps[slot + 1]
        parent.gaps[slot:slot + 2] = [merged]
        if not parent.children:
            parent.text = merged
            parent.gaps = []
        node.parent = None
        return node

    def insert_child(self, parent: Node, position: int, child: Node,
                     separator: str = "") -> Node:
        """
        Вставляет child перед parent.children[position].

        Текст до нового узла остаётся прежним промежутком, после него
        ставится separator.
        """
        if not parent.children:
            raise MalformedTreeError(f"Вставка в лист {parent.kind} не поддерживается")
        parent.children.insert(position, child.index)
        parent.gaps.insert(position + 1, separator)
        child.parent = parent.index
        return child

    def render(self, node: Optional[Node] = None) -> str:
        """Печатает поддерево обратно в исходный текст."""
        start = node if node is not None else self.root
        if start is None:
            return ""
        out: List[str] = []
        stack: list = [start]
        while stack:
            item = stack.pop()
            if isinstance(item, str):
                out.append(item)
                continue
            if item.is_leaf:
                out.append(item.text)
                continue
            parts: list = [item.gaps[0]]
            for i, child in enumerate(item.children):
                parts.append(self.nodes[child])
                parts.append(item.gaps[i + 1])
            stack.extend(reversed(parts))
        return "".join(out)


def traverse(tree: SyntaxTree, start: Node, handlers: Dict[str, Handler],
             include_start: bool = False) -> None:
    """
    Обход потомков start в глубину с диспетчеризацией по kind.

    Сам start посещается только при include_start. Если обработчик вернул
    Visit.SKIP или заменил узел (узел отсоединён), в его поддерево обход
    не спускается; новые узлы, вставленные обработчиком, в этом обходе
    не посещаются.
    """
    stack = [start.index] if include_start else list(reversed(start.children))
    while stack:
        node = tree.nodes[stack.pop()]
        handler = handlers.get(node.kind)
        if handler is not None:
            if handler(node) is Visit.SKIP:
                continue
            if node.parent is None and node is not tree.root:
                continue
        stack.extend(reversed(node.children))
