"""
Простой шаблонизатор: текст, выражения {{ name }} и именованные
вложенные блоки {{t Name}} ... {{/t}}.

    >>> from simple_templates import compile
    >>> compile("hello {{name}}!").render({"name": "world"})
    'hello world!'
"""

from __future__ import annotations

from .compiler import compile
from .errors import (
    ContextFileError,
    ContextValueError,
    TemplateFileError,
    TemplateNotFoundError,
    TemplateSyntaxError,
    TemplateUserError,
)
from .lexer import Tokenizer, tokenize_template
from .selectors import Selector
from .template import ROOT_NAME, Template
from .tokens import Token, TokenType

__all__ = [
    "compile",
    "Template",
    "ROOT_NAME",
    "Tokenizer",
    "tokenize_template",
    "Token",
    "TokenType",
    "Selector",
    "TemplateUserError",
    "TemplateSyntaxError",
    "TemplateNotFoundError",
    "ContextValueError",
    "ContextFileError",
    "TemplateFileError",
]
