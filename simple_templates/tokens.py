"""
Лексические типы.

Определяет типы токенов, которые порождает токенизатор шаблонов.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional


class TokenType(enum.Enum):
    """Типы токенов в шаблоне."""

    STRING = "String"                        # обычный текст
    EXPRESSION = "Expression"                # {{ name }}
    TEMPLATE_START = "TemplateStart"         # {{t Name}}
    TEMPLATE_STOP = "TemplateStop"           # {{/t}}


@dataclass(frozen=True)
class Token:
    """
    Токен с позиционной информацией для точной диагностики ошибок.
    """
    type: TokenType
    value: Optional[str]  # None только для TEMPLATE_STOP
    position: int        # Позиция в исходном тексте
    line: int           # Номер строки (начиная с 1)
    column: int         # Номер колонки (начиная с 1)

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"


__all__ = ["TokenType", "Token"]
