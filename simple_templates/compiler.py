"""
Компилятор шаблонов.

Читает токены из Tokenizer и собирает дерево узлов Template,
поддерживая явный стек открытых блоков.
"""

from __future__ import annotations

import logging
from typing import List

from .errors import TemplateSyntaxError
from .lexer import Tokenizer
from .template import ROOT_NAME, Template
from .tokens import Token, TokenType

logger = logging.getLogger(__name__)


def compile(source: str) -> Template:
    """
    Компилирует строку в шаблон.

    Компиляция атомарна: при любой ошибке дерево не возвращается.

    Args:
        source: Исходный текст шаблона

    Returns:
        Корневой узел дерева

    Raises:
        TemplateSyntaxError: При неизвестном блоке {{...}}, лишнем {{/t}},
            незакрытом {{t ...}} или зарезервированном имени блока
    """
    tokenizer = Tokenizer(source)
    template_stack: List[Template] = [Template()]
    open_tokens: List[Token] = []

    for token in tokenizer.tokenize():
        current_template = template_stack[-1]

        if token.type == TokenType.STRING:
            current_template._add_string(token.value)

        elif token.type == TokenType.EXPRESSION:
            current_template._add_expression(token.value)

        elif token.type == TokenType.TEMPLATE_START:
            if token.value == ROOT_NAME:
                raise TemplateSyntaxError(
                    f"Template name {ROOT_NAME} is reserved",
                    token.line, token.column, token.position,
                )
            new_template = Template(token.value)
            current_template._add_template(new_template)
            template_stack.append(new_template)
            open_tokens.append(token)
            logger.debug("Opened block %r at %d:%d", token.value, token.line, token.column)

        elif token.type == TokenType.TEMPLATE_STOP:
            if len(template_stack) == 1:
                raise TemplateSyntaxError(
                    "Found unexpected {{/t}}",
                    token.line, token.column, token.position,
                )
            closed = template_stack.pop()
            open_tokens.pop()
            logger.debug("Closed block %r at %d:%d", closed.name, token.line, token.column)

    if len(template_stack) != 1:
        unclosed = ", ".join(t.value for t in open_tokens)
        first = open_tokens[0]
        raise TemplateSyntaxError(
            f"Missing one or more {{{{/t}}}} (unclosed: {unclosed})",
            first.line, first.column, first.position,
        )

    return template_stack[0]


__all__ = ["compile"]
