"""
Контекст рендеринга.

Контекст - это отображение идентификатор -> значение замкнутого типа
(str, int, float, bool, None). Здесь же задано правило превращения
значения в строку при подстановке выражения.
"""

from __future__ import annotations

import math
from typing import Any, Dict, Mapping, Optional, Union

from .errors import ContextValueError

ContextValue = Union[str, int, float, bool, None]
Context = Mapping[str, ContextValue]


def stringify(key: str, value: Any) -> str:
    """
    Возвращает строковое представление значения контекста.

    None выводится как пустая строка, bool - как "true"/"false",
    целые float - без дробной части.

    Raises:
        ContextValueError: Если тип значения не поддерживается
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    # bool проверяется раньше int: bool является подклассом int
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return str(int(value))
        return repr(value)
    raise ContextValueError(key, value)


def lookup(context: Optional[Context], key: str) -> str:
    """Разрешает выражение в контексте; отсутствующий ключ даёт пустую строку."""
    if not context:
        return ""
    return stringify(key, context.get(key))


def validate_context(data: Mapping[Any, Any]) -> Dict[str, ContextValue]:
    """
    Проверяет, что все ключи - строки, а значения - поддерживаемых типов.

    Returns:
        Копия контекста в виде обычного словаря

    Raises:
        ContextValueError: При значении неподдерживаемого типа
    """
    result: Dict[str, ContextValue] = {}
    for key, value in data.items():
        key = str(key)
        if value is not None and not isinstance(value, (str, int, float, bool)):
            raise ContextValueError(key, value)
        result[key] = value
    return result


__all__ = ["ContextValue", "Context", "stringify", "lookup", "validate_context"]
