"""
auto_i18n - автоматическая интернационализация JSX/TSX-компонентов.

Модули:
- syntax: изменяемое дерево (арена узлов) и обход с диспетчеризацией
- parser: разбор исходников через tree-sitter
- language: классификатор текста по письменности
- locator: поиск компонентов-контекстов перевода
- twrapper: обёртка литералов в вызовы t()
- hooks: объявление useTranslation() и импорта
- catalog: каталоги ключей (JSON per locale)
- transformer: прогон по файлу и проекту
- manager: CLI-оркестратор
"""

from .config import WrapConfig, load_config
from .language import check_language, make_classifier
from .locator import find_hook_context_nodes
from .parser import SourceSyntaxError, parse_source
from .syntax import MalformedTreeError, SyntaxTree, Visit, traverse
from .transformer import ProjectTransformer, transform_source
from .twrapper import TWrapper, WrapStats

__all__ = [
    "WrapConfig",
    "load_config",
    "check_language",
    "make_classifier",
    "find_hook_context_nodes",
    "SourceSyntaxError",
    "parse_source",
    "MalformedTreeError",
    "SyntaxTree",
    "Visit",
    "traverse",
    "ProjectTransformer",
    "transform_source",
    "TWrapper",
    "WrapStats",
]
