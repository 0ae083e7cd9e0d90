#!/usr/bin/env python3
"""
Config - настройки автоматической обёртки строк в t().

Файл конфигурации (необязательный): auto-i18n.json в корне проекта.
Формат: {"function_name": "t", "scripts": ["hangul"], ...}
"""

import json
import logging
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "auto-i18n.json"


class ConfigError(ValueError):
    """Некорректный файл конфигурации."""


@dataclass
class WrapConfig:
    """Конфигурация обёртки."""
    function_name: str = "t"                   # Имя функции перевода
    hook_name: str = "useTranslation"          # Хук, объявляющий t
    import_source: str = "react-i18next"       # Откуда импортировать хук
    inject_hook: bool = True                   # Добавлять хук и импорт
    include_hooks: bool = False                # use*-функции тоже контексты
    scripts: List[str] = field(default_factory=lambda: ["hangul"])
    extensions: List[str] = field(default_factory=lambda: [".tsx", ".jsx"])
    exclude_dirs: List[str] = field(default_factory=lambda: [
        "node_modules", ".git", "dist", "build", ".next", "coverage", "locales",
    ])
    locales_dir: str = "src/locales"           # Каталоги ключей (относительно корня)
    source_locale: str = "ko"                  # Язык исходных строк
    target_locales: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "WrapConfig":
        """Создаёт конфиг из словаря с проверкой ключей и типов."""
        if not isinstance(data, dict):
            raise ConfigError("Конфигурация должна быть JSON-объектом")

        known = {f.name: f for f in fields(cls)}
        unknown = sorted(set(data) - set(known))
        if unknown:
            raise ConfigError(f"Неизвестные ключи конфигурации: {', '.join(unknown)}")

        defaults = asdict(cls())
        for key, value in data.items():
            expected = type(defaults[key])
            if not isinstance(value, expected):
                raise ConfigError(
                    f"{key}: ожидался {expected.__name__}, получено {type(value).__name__}"
                )
            if expected is list and not all(isinstance(v, str) for v in value):
                raise ConfigError(f"{key}: ожидался список строк")

        return cls(**data)


def load_config(project_root: Path, path: Optional[Path] = None) -> WrapConfig:
    """
    Загружает конфигурацию проекта.

    Args:
        project_root: Корень проекта (там ищется auto-i18n.json)
        path: Явный путь к файлу (обязан существовать)

    Returns:
        WrapConfig (значения по умолчанию, если файла нет)
    """
    config_path = Path(path) if path else Path(project_root) / CONFIG_FILENAME
    if not config_path.exists():
        if path:
            raise ConfigError(f"Файл конфигурации не найден: {config_path}")
        return WrapConfig()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"{config_path}: некорректный JSON: {e}") from e

    logger.debug("Конфигурация загружена из %s", config_path)
    return WrapConfig.from_dict(data)
