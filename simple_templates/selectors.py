"""
Селекторы для выборочного рендеринга (only / except_ / some).

Селектор - это имя блока, возможно вместе с собственным контекстом.
Пользовательские аргументы нормализуются в кортеж Selector.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence, Tuple, Union

from .context import Context


@dataclass(frozen=True)
class Selector:
    """
    Имя блока с необязательным собственным контекстом.

    context=None означает "голое" имя: блок рендерится с общим контекстом.
    """
    name: str
    context: Optional[Context] = None

    def context_or(self, fallback: Optional[Context]) -> Optional[Context]:
        """Собственный контекст селектора или общий, если своего нет."""
        return self.context if self.context is not None else fallback


SelectorLike = Union[str, Selector, Tuple[str, Optional[Context]], Mapping[str, Any]]
SelectorArg = Union[SelectorLike, Sequence[SelectorLike]]


def to_selector(item: SelectorLike) -> Selector:
    """
    Приводит одиночный аргумент к Selector.

    Поддерживаемые формы:
    - "Name"
    - Selector("Name", {...})
    - ("Name", {...})
    - {"name": "Name", "context": {...}}

    Raises:
        TypeError: Если аргумент не распознан
    """
    if isinstance(item, Selector):
        return item
    if isinstance(item, str):
        return Selector(item)
    if isinstance(item, tuple) and _is_named_pair(item):
        return Selector(item[0], item[1])
    if isinstance(item, Mapping) and isinstance(item.get("name"), str):
        return Selector(item["name"], item.get("context"))
    raise TypeError(f"Invalid template selector: {item!r}")


def normalize(selector: SelectorArg) -> Tuple[bool, Tuple[Selector, ...]]:
    """
    Нормализует аргумент only/except_/some.

    Returns:
        Пара (is_list, selectors). Для одиночного селектора is_list=False
        и кортеж содержит ровно один элемент.
    """
    if isinstance(selector, (str, Selector, Mapping)):
        return False, (to_selector(selector),)
    if isinstance(selector, tuple) and _is_named_pair(selector):
        return False, (to_selector(selector),)
    if isinstance(selector, (list, tuple)):
        return True, tuple(to_selector(item) for item in selector)
    raise TypeError(f"Invalid template selector: {selector!r}")


def _is_named_pair(item: tuple) -> bool:
    # ("Name", {...}) или ("Name", None), но не ("A", "B")
    return (
        len(item) == 2
        and isinstance(item[0], str)
        and (item[1] is None or isinstance(item[1], Mapping))
    )


__all__ = ["Selector", "SelectorLike", "SelectorArg", "to_selector", "normalize"]
