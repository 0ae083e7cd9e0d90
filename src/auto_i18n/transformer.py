#!/usr/bin/env python3
"""
Transformer - прогон обёртки по файлу и по всему проекту.

Pipeline одного файла:
    parse -> find_hook_context_nodes -> TWrapper.wrap -> HookInjector -> render

Файлы с синтаксическими ошибками и нечитаемые файлы пропускаются
с предупреждением; ошибки формы дерева и классификатора - нет.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from .config import WrapConfig
from .hooks import HookInjector
from .language import make_classifier
from .locator import find_hook_context_nodes, function_name
from .parser import SourceSyntaxError, dialect_for_path, parse_source
from .twrapper import TWrapper, WrapStats

logger = logging.getLogger(__name__)


@dataclass
class TransformResult:
    """Результат обработки одного исходника."""
    contexts: List[str] = field(default_factory=list)   # Имена компонентов
    stats: WrapStats = field(default_factory=WrapStats)
    hooks_injected: int = 0
    changed: bool = False


@dataclass
class FileResult:
    """Результат обработки файла проекта."""
    path: str
    result: Optional[TransformResult] = None
    error: str = ""

    @property
    def skipped(self) -> bool:
        return self.result is None


def transform_source(source: str, dialect: str = "tsx",
                     config: Optional[WrapConfig] = None,
                     check_language: Optional[Callable[[str], bool]] = None
                     ) -> Tuple[str, TransformResult]:
    """
    Обёртывает переводимые литералы в исходнике.

    Args:
        source: Исходный текст
        dialect: tsx | typescript | javascript
        config: Настройки (по умолчанию WrapConfig())
        check_language: Классификатор (по умолчанию - по config.scripts)

    Returns:
        (новый исходник, TransformResult)
    """
    config = config or WrapConfig()
    classify = check_language or make_classifier(config.scripts)

    tree = parse_source(source, dialect)
    contexts = find_hook_context_nodes(tree, include_hooks=config.include_hooks)

    result = TransformResult(
        contexts=[function_name(tree, c) or "<anonymous>" for c in contexts]
    )
    if not contexts:
        return source, result

    result.stats = TWrapper(tree, contexts, classify, config.function_name).wrap()

    if config.inject_hook and result.stats.total:
        injector = HookInjector(tree, contexts, config.function_name,
                                config.hook_name, config.import_source)
        result.hooks_injected = injector.inject()

    output = tree.render()
    result.changed = output != source
    return output, result


class ProjectTransformer:
    """
    Обходит файлы проекта и обёртывает литералы в каждом.

    Поддерживает .tsx, .ts, .jsx, .js (список - в config.extensions).
    """

    def __init__(self, project_root: Path, config: Optional[WrapConfig] = None):
        self.project_root = Path(project_root)
        self.config = config or WrapConfig()
        self._classify = make_classifier(self.config.scripts)

    def find_files(self) -> List[Path]:
        """Находит все файлы с подходящими расширениями."""
        files = []
        extensions = {e.lower() for e in self.config.extensions}
        for path in self.project_root.rglob("*"):
            if not path.is_file() or path.suffix.lower() not in extensions:
                continue
            parts = path.relative_to(self.project_root).parts
            if any(exc in parts for exc in self.config.exclude_dirs):
                continue
            if dialect_for_path(path) is None:
                continue
            files.append(path)
        return sorted(files)

    def transform_file(self, path: Path, write: bool = True) -> FileResult:
        """Обрабатывает один файл; при write=True сохраняет изменения."""
        rel_path = str(path.relative_to(self.project_root))
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("[SKIP] Ошибка чтения: %s: %s", rel_path, e)
            return FileResult(path=rel_path, error=str(e))

        try:
            output, result = transform_source(
                source, dialect_for_path(path), self.config, self._classify
            )
        except SourceSyntaxError as e:
            logger.warning("[SKIP] Ошибка синтаксиса: %s: %s", rel_path, e)
            return FileResult(path=rel_path, error=str(e))

        if result.changed and write:
            path.write_text(output, encoding="utf-8")
            logger.info("Обновлён %s (%d вызовов)", rel_path, result.stats.total)
        return FileResult(path=rel_path, result=result)

    def run(self, write: bool = True) -> List[FileResult]:
        """Прогоняет обёртку по всем файлам проекта."""
        files = self.find_files()
        logger.debug("Файлов для обработки: %d", len(files))
        return [self.transform_file(path, write=write) for path in files]

    @staticmethod
    def collect_keys(results: List[FileResult]) -> List[str]:
        """Все ключи t() из результатов, без повторов, в порядке появления."""
        keys: Dict[str, None] = {}
        for item in results:
            if item.result is not None:
                keys.update(dict.fromkeys(item.result.stats.keys))
        return list(keys)

    @staticmethod
    def generate_report(results: List[FileResult]) -> Dict:
        """Сводка по прогону."""
        processed = [r for r in results if not r.skipped]
        by_file = {
            r.path: r.result.stats.total
            for r in processed if r.result.stats.total
        }
        return {
            "files_total": len(results),
            "files_changed": sum(1 for r in processed if r.result.changed),
            "files_skipped": len(results) - len(processed),
            "contexts": sum(len(r.result.contexts) for r in processed),
            "string_literals": sum(r.result.stats.string_literals for r in processed),
            "jsx_texts": sum(r.result.stats.jsx_texts for r in processed),
            "template_literals": sum(r.result.stats.template_literals for r in processed),
            "hooks_injected": sum(r.result.hooks_injected for r in processed),
            "by_file": by_file,
            "skipped": {r.path: r.error for r in results if r.skipped},
        }
