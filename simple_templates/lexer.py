"""
Лексический анализатор шаблонов.

Разбивает исходный текст шаблона на последовательность токенов:
- обычный текст
- выражения {{ name }}
- начало блока {{t Name}}
- конец блока {{/t}}

Токены выдаются лениво, по одному за вызов.
"""

from __future__ import annotations

import logging
import re
from typing import Iterator, Optional

from .errors import TemplateSyntaxError
from .tokens import Token, TokenType

logger = logging.getLogger(__name__)

IDENTIFIER = r'[_a-zA-Z][_a-zA-Z0-9]*'

# Ключевое слово блока, с которого не может начинаться выражение
BLOCK_KEYWORD = "{{t"


class Tokenizer:
    """
    Лексический анализатор шаблонов.

    Хранит исходную строку и курсор. Каждый вызов get_next_token()
    потребляет ровно один токен, порядок проверок фиксирован:
    начало блока, конец блока, выражение, ошибочный блок, текст.
    """

    _TEMPLATE_START = re.compile(r'\{\{t\s+(' + IDENTIFIER + r')\}\}')
    _TEMPLATE_STOP = re.compile(r'\{\{/t\}\}')
    _EXPRESSION = re.compile(r'\{\{\s*(' + IDENTIFIER + r')\s*\}\}')
    # Любой другой {{...}} - ошибка; может захватывать переводы строк
    _INVALID_BLOCK = re.compile(r'\{\{.*?\}\}', re.DOTALL)

    def __init__(self, text: str):
        self.text = text
        self.position = 0
        self.line = 1
        self.column = 1
        self.length = len(text)

    def has_more_tokens(self) -> bool:
        """Есть ли ещё непрочитанный ввод."""
        return self.position < self.length

    def get_next_token(self) -> Optional[Token]:
        """
        Извлекает следующий токен из входного потока.

        Returns:
            Очередной токен или None, если ввод исчерпан

        Raises:
            TemplateSyntaxError: Если в текущей позиции находится
                блок {{...}} неизвестного вида
        """
        if not self.has_more_tokens():
            return None

        start_pos = self.position
        start_line = self.line
        start_column = self.column

        # Начало блока
        match = self._TEMPLATE_START.match(self.text, self.position)
        if match:
            self._advance(match.end() - start_pos)
            return Token(TokenType.TEMPLATE_START, match.group(1), start_pos, start_line, start_column)

        # Конец блока
        match = self._TEMPLATE_STOP.match(self.text, self.position)
        if match:
            self._advance(match.end() - start_pos)
            return Token(TokenType.TEMPLATE_STOP, None, start_pos, start_line, start_column)

        # Выражение
        match = self._EXPRESSION.match(self.text, self.position)
        if match and not self.text.startswith(BLOCK_KEYWORD, self.position):
            self._advance(match.end() - start_pos)
            return Token(TokenType.EXPRESSION, match.group(1), start_pos, start_line, start_column)

        # Не выражение и не блок
        match = self._INVALID_BLOCK.match(self.text, self.position)
        if match:
            raise TemplateSyntaxError(
                "Expected {{ expression }} or {{t TemplateName}} ... {{/t}} "
                f"but got {match.group(0)}",
                start_line, start_column, start_pos,
            )

        # Обычный текст до следующего {{
        text_end = self.text.find("{{", self.position)
        if text_end == self.position:
            # Незакрытая {{ без последующей }} - остаток ввода является текстом
            text_end = self.length
        elif text_end == -1:
            text_end = self.length

        value = self.text[self.position:text_end]
        self._advance(len(value))
        return Token(TokenType.STRING, value, start_pos, start_line, start_column)

    def tokenize(self) -> Iterator[Token]:
        """
        Генератор для ленивой токенизации.

        Yields:
            Token: Очередной токен
        """
        count = 0
        while self.has_more_tokens():
            token = self.get_next_token()
            if token is None:
                break
            count += 1
            yield token

        logger.debug("Tokenized template of length %d into %d tokens", self.length, count)

    def _advance(self, count: int) -> None:
        """
        Перемещает позицию на указанное количество символов,
        обновляя номера строк и колонок.
        """
        chunk = self.text[self.position:self.position + count]
        newlines = chunk.count("\n")
        if newlines:
            self.line += newlines
            self.column = len(chunk) - chunk.rfind("\n")
        else:
            self.column += len(chunk)
        self.position += len(chunk)


def tokenize_template(text: str) -> Iterator[Token]:
    """
    Удобная функция для токенизации шаблона.

    Args:
        text: Исходный текст шаблона

    Returns:
        Ленивый итератор токенов

    Raises:
        TemplateSyntaxError: При ошибке лексического анализа (во время итерации)
    """
    return Tokenizer(text).tokenize()


__all__ = ["Tokenizer", "tokenize_template", "IDENTIFIER", "BLOCK_KEYWORD"]
