"""
Base exception for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from TemplateUserError.

Programming errors and bugs should NOT inherit from TemplateUserError:
they will propagate with full tracebacks.
"""

from __future__ import annotations

from typing import Optional


class TemplateUserError(Exception):
    """
    Base class for all user-facing errors in simple-templates.

    These errors indicate problems that the user can fix:
    malformed template source, unknown block names, bad context data.
    """
    pass


class TemplateSyntaxError(TemplateUserError, SyntaxError):
    """Ошибка компиляции шаблона (лексическая или структурная)."""

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
        position: Optional[int] = None,
    ):
        if line is not None and column is not None:
            super().__init__(f"{message} at {line}:{column}")
        else:
            super().__init__(message)
        self.message = message
        self.line = line
        self.column = column
        self.position = position
        # Совместимость с атрибутами встроенного SyntaxError
        self.lineno = line
        self.offset = column

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else self.message


class TemplateNotFoundError(TemplateUserError, LookupError):
    """Блок с указанным именем не найден в дереве шаблона."""

    def __init__(self, name: str):
        super().__init__(f"Template not found: {name!r}")
        self.name = name


class ContextValueError(TemplateUserError, TypeError):
    """Значение контекста не относится к поддерживаемым типам."""

    def __init__(self, key: str, value: object):
        super().__init__(
            f"Unsupported context value for {key!r}: {type(value).__name__} "
            f"(expected str, int, float, bool or None)"
        )
        self.key = key
        self.value = value


class ContextFileError(TemplateUserError, ValueError):
    """Файл контекста отсутствует, не читается или не является мапой."""
    pass


class TemplateFileError(TemplateUserError, ValueError):
    """Файл шаблона отсутствует или не читается."""
    pass


__all__ = [
    "TemplateUserError",
    "TemplateSyntaxError",
    "TemplateNotFoundError",
    "ContextValueError",
    "ContextFileError",
    "TemplateFileError",
]
