import pytest

from auto_i18n.language import check_language
from auto_i18n.locator import find_hook_context_nodes
from auto_i18n.parser import parse_source
from auto_i18n.twrapper import TWrapper


def _wrap(source, dialect="tsx", check=check_language, function_name="t"):
    tree = parse_source(source, dialect)
    contexts = find_hook_context_nodes(tree)
    stats = TWrapper(tree, contexts, check, function_name).wrap()
    return tree.render(), stats


@pytest.fixture
def wrap_source():
    """Разбор + поиск контекстов + три прохода обёртки, без хука и импорта."""
    return _wrap


@pytest.fixture
def component_names():
    def _names(source, dialect="tsx", include_hooks=False):
        from auto_i18n.locator import function_name
        tree = parse_source(source, dialect)
        return [function_name(tree, n)
                for n in find_hook_context_nodes(tree, include_hooks=include_hooks)]
    return _names
