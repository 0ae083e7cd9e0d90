#!/usr/bin/env python3
"""
Catalog - каталоги ключей перевода в формате i18next.

Хранит ключи в JSON-файлах: locales/{locale}.json
Формат: {"안녕, {{name}}!": "안녕, {{name}}!", ...}

Ключ - исходный текст (с плейсхолдерами {{...}}), поэтому для исходной
локали значение совпадает с ключом, а для остальных ждёт перевода.
"""

import json
import logging
import shutil
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, List, Tuple

logger = logging.getLogger(__name__)


class KeyCatalog:
    """
    Управление каталогами ключей для нескольких локалей.

    Структура файлов:
        locales/
            ko.json    - Исходная локаль (ключ -> ключ)
            en.json    - Целевая локаль (ключ -> перевод или "")
            _meta.json - Метаданные (даты, количество)
    """

    def __init__(self, locales_dir: Path):
        self.locales_dir = Path(locales_dir)

    def load(self, locale: str) -> Dict[str, str]:
        """Загружает каталог локали (пустой, если файла нет)."""
        catalog_path = self.locales_dir / f"{locale}.json"
        if not catalog_path.exists():
            return {}

        data = _read_json(catalog_path)
        if not isinstance(data, dict):
            raise ValueError(f"{catalog_path}: ожидался JSON-объект")
        return {str(k): v if isinstance(v, str) else "" for k, v in data.items()}

    def save(self, locale: str, entries: Dict[str, str]) -> Path:
        """Сохраняет каталог (с бэкапом предыдущей версии)."""
        self.locales_dir.mkdir(parents=True, exist_ok=True)
        catalog_path = self.locales_dir / f"{locale}.json"
        if catalog_path.exists():
            backup_path = self.locales_dir / f"{locale}.backup.json"
            shutil.copy2(catalog_path, backup_path)

        with open(catalog_path, "w", encoding="utf-8") as f:
            json.dump(dict(sorted(entries.items())), f, ensure_ascii=False, indent=2)
            f.write("\n")

        self._update_meta(locale, entries)
        return catalog_path

    def merge_keys(self, locale: str, keys: Iterable[str],
                   fill: bool = False) -> Tuple[int, int]:
        """
        Добавляет новые ключи в каталог, не трогая существующие переводы.

        Args:
            locale: Код языка
            keys: Ключи из обёрнутых вызовов t()
            fill: Заполнить значение самим ключом (исходная локаль)

        Returns:
            (new_count, existing_count)
        """
        entries = self.load(locale)
        new_count = 0
        existing_count = 0

        for key in dict.fromkeys(keys):
            if key in entries:
                if fill and not entries[key]:
                    entries[key] = key
                existing_count += 1
                continue
            entries[key] = key if fill else ""
            new_count += 1

        self.save(locale, entries)
        logger.debug("%s: новых ключей %d, существующих %d", locale, new_count, existing_count)
        return new_count, existing_count

    def get_untranslated(self, locale: str) -> List[str]:
        """Ключи без перевода."""
        return [k for k, v in self.load(locale).items() if not v]

    def get_stats(self, locale: str) -> Dict:
        """Статистика покрытия переводами."""
        entries = self.load(locale)
        total = len(entries)
        translated = sum(1 for v in entries.values() if v)
        return {
            "total": total,
            "translated": translated,
            "pending": total - translated,
            "coverage": round(translated / total * 100, 1) if total else 0.0,
        }

    def list_locales(self) -> List[str]:
        """Список доступных локалей."""
        if not self.locales_dir.exists():
            return []
        # _meta.json и бэкапы - не локали
        return sorted(
            p.stem for p in self.locales_dir.glob("*.json")
            if not p.stem.startswith("_") and not p.stem.endswith(".backup")
        )

    def _update_meta(self, locale: str, entries: Dict[str, str]):
        """Пишет в _meta.json число ключей и непереведённых для локали."""
        meta_path = self.locales_dir / "_meta.json"
        meta = _read_json(meta_path) if meta_path.exists() else {}
        meta[locale] = {
            "entries": len(entries),
            "pending": sum(1 for v in entries.values() if not v),
            "updated_at": datetime.now().isoformat(),
        }
        meta_path.write_text(
            json.dumps(meta, ensure_ascii=False, indent=2) + "\n", encoding="utf-8"
        )


def _read_json(path: Path):
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)
