"""
Элементы шаблона.

Каждый узел Template хранит упорядоченный список элементов трёх видов:
текст, выражение и ссылка на дочерний блок.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from .template import Template


@dataclass(frozen=True)
class TextNode:
    """
    Обычный текстовый контент в шаблоне.

    Выводится в результат как есть.
    """
    text: str


@dataclass(frozen=True)
class ExpressionNode:
    """Подстановка {{ name }}, разрешаемая по контексту."""
    name: str


@dataclass(frozen=True)
class BlockNode:
    """Ссылка на дочерний блок {{t Name}} ... {{/t}}."""
    template: "Template"

    @property
    def name(self) -> str:
        return self.template.name


TemplateEntry = Union[TextNode, ExpressionNode, BlockNode]


__all__ = ["TextNode", "ExpressionNode", "BlockNode", "TemplateEntry"]
