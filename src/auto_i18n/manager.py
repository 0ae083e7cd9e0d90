#!/usr/bin/env python3
"""
Manager - CLI для автоматической обёртки строк в t().

Команды:
  wrap      Обёртывает литералы в компонентах и сохраняет файлы
  check     Проверяет, что необёрнутых строк не осталось (для CI)
  contexts  Показывает найденные компоненты по файлам
  stats     Показывает покрытие каталогов ключей

Использование:
  python -m auto_i18n.manager wrap --project-root . --merge-catalog
  python -m auto_i18n.manager wrap --dry-run --scripts hangul han
  python -m auto_i18n.manager check --project-root apps/web
  python -m auto_i18n.manager stats --locales-dir src/locales
"""

import argparse
import logging
import sys
from pathlib import Path

from .catalog import KeyCatalog
from .config import WrapConfig, load_config
from .transformer import ProjectTransformer


def _build_config(args) -> WrapConfig:
    """Конфиг из файла + переопределения из аргументов."""
    config = load_config(Path(args.project_root), args.config or None)
    if getattr(args, "extensions", None):
        config.extensions = args.extensions
    if getattr(args, "scripts", None):
        config.scripts = args.scripts
    if getattr(args, "function_name", None):
        config.function_name = args.function_name
    if getattr(args, "no_hook", False):
        config.inject_hook = False
    if getattr(args, "include_hooks", False):
        config.include_hooks = True
    return config


def _print_report(report: dict, title: str):
    print(f"\n{'='*60}")
    print(f"  {title}")
    print(f"{'='*60}")
    print(f"    Файлов:            {report['files_total']}")
    print(f"    Изменено:          {report['files_changed']}")
    print(f"    Пропущено:         {report['files_skipped']}")
    print(f"    Компонентов:       {report['contexts']}")
    print(f"    Строк:             {report['string_literals']}")
    print(f"    Текстов JSX:       {report['jsx_texts']}")
    print(f"    Шаблонов:          {report['template_literals']}")
    print(f"    Хуков добавлено:   {report['hooks_injected']}")

    if report["by_file"]:
        print(f"\n  По файлам:")
        for f, count in sorted(report["by_file"].items(), key=lambda x: -x[1]):
            print(f"    {f:<50} {count}")

    if report["skipped"]:
        print(f"\n  Пропущены:")
        for f, error in sorted(report["skipped"].items()):
            print(f"    {f}: {error}")


def cmd_wrap(args):
    """Команда: обёртка литералов."""
    config = _build_config(args)
    project_root = Path(args.project_root)
    transformer = ProjectTransformer(project_root, config)

    mode = "пробный прогон" if args.dry_run else "запись файлов"
    print(f"\n🔧 Обёртка строк в {config.function_name}(): {project_root} ({mode})")
    print(f"   Письменности: {', '.join(config.scripts)}")
    print(f"   Расширения: {', '.join(config.extensions)}")

    results = transformer.run(write=not args.dry_run)
    report = transformer.generate_report(results)
    _print_report(report, "Результат обёртки")

    if args.merge_catalog:
        keys = transformer.collect_keys(results)
        locales_dir = project_root / config.locales_dir
        catalog = KeyCatalog(locales_dir)
        print(f"\n  Merge ключей в каталоги ({locales_dir}):")
        for locale in [config.source_locale] + config.target_locales:
            if args.dry_run:
                print(f"    {locale:<10} пропущено (пробный прогон)")
                continue
            new, existing = catalog.merge_keys(
                locale, keys, fill=locale == config.source_locale
            )
            print(f"    {locale:<10} новых: {new}, существующих: {existing}")

    return results


def cmd_check(args):
    """
    Команда: проверка без записи.

    Код выхода 1 - есть что оборачивать или есть файлы, которые
    не удалось разобрать (их строки не проверены).
    """
    config = _build_config(args)
    transformer = ProjectTransformer(Path(args.project_root), config)
    results = transformer.run(write=False)

    pending = [r for r in results if not r.skipped and r.result.changed]
    skipped = [r for r in results if r.skipped]
    if pending:
        print(f"\n❌ Необёрнутые строки в {len(pending)} файлах:")
        for item in pending:
            print(f"    {item.path:<50} {item.result.stats.total}")
    if skipped:
        print(f"\n❌ Не проверено {len(skipped)} файлов:")
        for item in skipped:
            print(f"    {item.path}: {item.error}")
    if pending or skipped:
        return 1

    print(f"\n✅ Все строки обёрнуты ({len(results)} файлов)")
    return 0


def cmd_contexts(args):
    """Команда: список компонентов-контекстов."""
    config = _build_config(args)
    transformer = ProjectTransformer(Path(args.project_root), config)
    results = transformer.run(write=False)

    total = 0
    for item in results:
        if item.skipped or not item.result.contexts:
            continue
        print(f"\n  {item.path}")
        for name in item.result.contexts:
            print(f"    - {name}")
        total += len(item.result.contexts)

    print(f"\n{'='*60}")
    print(f"  Компонентов: {total}")
    print(f"{'='*60}\n")
    return results


def cmd_stats(args):
    """Команда: статистика каталогов."""
    catalog = KeyCatalog(Path(args.locales_dir))
    locales = catalog.list_locales()
    if not locales:
        print(f"  Каталогов не найдено: {args.locales_dir}")
        return

    print(f"\n📊 Каталоги: {args.locales_dir}\n")
    for locale in locales:
        stats = catalog.get_stats(locale)
        print(f"    {locale:<10} {stats['translated']}/{stats['total']} "
              f"({stats['coverage']}%)")


def _add_common(p: argparse.ArgumentParser):
    p.add_argument("--project-root", default=".", help="Корень проекта")
    p.add_argument("--config", default="", help="Путь к auto-i18n.json")
    p.add_argument("--extensions", nargs="+", default=None, help="Расширения файлов")
    p.add_argument("--scripts", nargs="+", default=None,
                   help="Письменности переводимого текста (hangul, han, cyrillic, ...)")
    p.add_argument("--function-name", default="", help="Имя функции перевода")
    p.add_argument("--include-hooks", action="store_true",
                   help="Считать пользовательские хуки (useXxx) контекстами")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="auto-i18n",
        description="Автоматическая обёртка строк JSX/TSX-компонентов в t()",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Подробный лог")

    subparsers = parser.add_subparsers(dest="command", help="Команда")

    # === wrap ===
    p_wrap = subparsers.add_parser("wrap", help="Обернуть строки и сохранить файлы")
    _add_common(p_wrap)
    p_wrap.add_argument("--dry-run", action="store_true", help="Не записывать файлы")
    p_wrap.add_argument("--no-hook", action="store_true",
                        help="Не добавлять useTranslation() и импорт")
    p_wrap.add_argument("--merge-catalog", action="store_true",
                        help="Добавить новые ключи в каталоги локалей")

    # === check ===
    p_check = subparsers.add_parser("check", help="Проверить, что всё обёрнуто")
    _add_common(p_check)

    # === contexts ===
    p_ctx = subparsers.add_parser("contexts", help="Показать компоненты-контексты")
    _add_common(p_ctx)

    # === stats ===
    p_stats = subparsers.add_parser("stats", help="Статистика каталогов")
    p_stats.add_argument("--locales-dir", default="src/locales",
                         help="Директория каталогов")

    return parser


def main(argv=None) -> int:
    """Точка входа CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 1

    commands = {
        "wrap": cmd_wrap,
        "check": cmd_check,
        "contexts": cmd_contexts,
        "stats": cmd_stats,
    }

    try:
        result = commands[args.command](args)
    except ValueError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 2

    return result if isinstance(result, int) else 0


if __name__ == "__main__":
    sys.exit(main())
