#!/usr/bin/env python3
"""
Language - классификатор текста: есть ли в строке символы целевой письменности.

Без LLM и словарей - только диапазоны Unicode, как detect_language()
в сканере строк. Классификатор - чистая функция (str) -> bool.
"""

import re
from typing import Callable, Dict, Iterable, List, Tuple

# Диапазоны кодовых точек Unicode по письменностям
SCRIPT_RANGES: Dict[str, List[Tuple[int, int]]] = {
    "hangul": [(0x1100, 0x11FF), (0x3130, 0x318F), (0xA960, 0xA97F),
               (0xAC00, 0xD7AF), (0xD7B0, 0xD7FF)],
    "han": [(0x3400, 0x4DBF), (0x4E00, 0x9FFF), (0xF900, 0xFAFF)],
    "kana": [(0x3040, 0x309F), (0x30A0, 0x30FF), (0x31F0, 0x31FF)],
    "cyrillic": [(0x0400, 0x04FF), (0x0500, 0x052F)],
    "greek": [(0x0370, 0x03FF)],
    "arabic": [(0x0600, 0x06FF), (0x0750, 0x077F)],
    "hebrew": [(0x0590, 0x05FF)],
    "thai": [(0x0E00, 0x0E7F)],
    "devanagari": [(0x0900, 0x097F)],
}


def make_classifier(scripts: Iterable[str]) -> Callable[[str], bool]:
    """
    Строит классификатор для набора письменностей.

    Args:
        scripts: Имена из SCRIPT_RANGES (hangul, cyrillic, ...)

    Returns:
        Функция text -> True, если есть хотя бы один символ этих письменностей
    """
    scripts = list(scripts)
    unknown = [s for s in scripts if s not in SCRIPT_RANGES]
    if unknown:
        raise ValueError(
            f"Неизвестные письменности: {', '.join(unknown)}. "
            f"Доступны: {', '.join(sorted(SCRIPT_RANGES))}"
        )
    if not scripts:
        raise ValueError("Нужна хотя бы одна письменность")

    ranges = "".join(
        f"{re.escape(chr(low))}-{re.escape(chr(high))}"
        for script in scripts
        for low, high in SCRIPT_RANGES[script]
    )
    pattern = re.compile(f"[{ranges}]")

    def classify(text: str) -> bool:
        return pattern.search(text) is not None

    return classify


# По умолчанию - корейский
check_language = make_classifier(["hangul"])
