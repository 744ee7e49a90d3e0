"""
Скомпилированный шаблон.

Template - узел дерева, построенного компилятором. Узел хранит
упорядоченные элементы (текст, выражения, дочерние блоки) и реестр
непосредственных дочерних блоков по имени. После компиляции дерево
только читается, поэтому один шаблон можно рендерить сколько угодно
раз с разными контекстами.

Пример:

    >>> from simple_templates import compile
    >>> template = compile("hello {{name}}!")
    >>> template.render({"name": "world"})
    'hello world!'
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from .context import Context, lookup
from .errors import TemplateNotFoundError
from .nodes import BlockNode, ExpressionNode, TemplateEntry, TextNode
from .selectors import Selector, SelectorArg, normalize

# Зарезервированное имя корневого узла
ROOT_NAME = "__ROOT__"


class Template:
    """
    Узел дерева шаблона.

    Узел владеет своими дочерними блоками; обратных ссылок на родителя нет.
    """

    def __init__(self, name: str = ROOT_NAME):
        self.name = name
        self._entries: List[TemplateEntry] = []
        self._templates_map: Dict[str, Template] = {}
        self._templates_list: List[Template] = []

    # ---------------------------------------------------------------- #
    # Построение (используется компилятором)
    # ---------------------------------------------------------------- #

    def _add_string(self, text: str) -> None:
        """Добавляет текст в конец узла."""
        self._entries.append(TextNode(text))

    def _add_expression(self, name: str) -> None:
        """Добавляет выражение {{ name }} в конец узла."""
        self._entries.append(ExpressionNode(name))

    def _add_template(self, template: Template) -> None:
        """
        Добавляет дочерний блок в конец узла.

        При совпадении имён у соседних блоков реестр сохраняет первый.
        """
        self._entries.append(BlockNode(template))
        self._templates_map.setdefault(template.name, template)
        self._templates_list.append(template)

    # ---------------------------------------------------------------- #
    # Чтение структуры
    # ---------------------------------------------------------------- #

    @property
    def is_root(self) -> bool:
        return self.name == ROOT_NAME

    @property
    def entries(self) -> Tuple[TemplateEntry, ...]:
        return tuple(self._entries)

    @property
    def children(self) -> Tuple[Template, ...]:
        """Непосредственные дочерние блоки в порядке появления."""
        return tuple(self._templates_list)

    @property
    def children_map(self) -> Mapping[str, Template]:
        return MappingProxyType(self._templates_map)

    def search(self, name: str) -> Optional[Template]:
        """
        Ищет блок по имени.

        Порядок: сам узел, затем реестр непосредственных детей, затем
        в глубину каждый ребёнок в порядке появления. Возвращает первое
        совпадение.

        Returns:
            Найденный узел или None
        """
        if self.name == name:
            return self

        # Обход в глубину без рекурсии: глубина вложенности не ограничена.
        # Имя ребёнка всегда есть в реестре родителя, поэтому достаточно
        # проверять реестры.
        stack: List[Iterator[Template]] = [iter((self,))]
        while stack:
            node = next(stack[-1], None)
            if node is None:
                stack.pop()
                continue

            found = node._templates_map.get(name)
            if found is not None:
                return found

            if node._templates_list:
                stack.append(iter(node._templates_list))

        return None

    def find(self, name: str) -> Template:
        """
        Как search(), но отсутствие блока является ошибкой.

        Raises:
            TemplateNotFoundError: Если блок не найден
        """
        found = self.search(name)
        if found is None:
            raise TemplateNotFoundError(name)
        return found

    def outline(self) -> Dict[str, Any]:
        """Структура блоков в виде вложенных словарей (для CLI и отладки)."""
        result: Dict[str, Any] = {"name": self.name, "children": []}
        stack: List[Tuple[Template, Dict[str, Any]]] = [(self, result)]
        while stack:
            node, out = stack.pop()
            for child in node._templates_list:
                child_out: Dict[str, Any] = {"name": child.name, "children": []}
                out["children"].append(child_out)
                stack.append((child, child_out))
        return result

    # ---------------------------------------------------------------- #
    # Рендеринг
    # ---------------------------------------------------------------- #

    def render(
        self,
        name_or_context: Union[str, Context, None] = None,
        context: Optional[Context] = None,
    ) -> str:
        """
        Рендерит шаблон.

        render(context) - весь узел целиком.
        render(name, context) - только блок name, найденный через search().

        Отсутствующие в контексте значения и None не выводятся.

        Raises:
            TemplateNotFoundError: Если указано имя и блок не найден
            TypeError: Если контекст передан дважды
        """
        if isinstance(name_or_context, str):
            return self.find(name_or_context)._render(context)

        if name_or_context is not None:
            if context is not None:
                raise TypeError("render() got two contexts; pass a block name as the first argument")
            context = name_or_context
        return self._render(context)

    def only(self, selector: SelectorArg, context: Optional[Context] = None) -> str:
        """
        Рендерит только указанные блоки.

        Одиночный селектор рендерит найденный через search() блок.
        Список селекторов проходит по непосредственным детям в порядке
        их появления; ребёнок выводится столько раз, сколько селекторов
        с его именем указано. Текст и выражения вне блоков не выводятся.

        Пример:

            >>> t = compile("{{t a}}A{{/t}} {{t b}}{{x}}{{/t}}")
            >>> t.only(["b", ("a", {})], {"x": "B"})
            'AB'
        """
        is_list, selectors = normalize(selector)

        if is_list and not selectors:
            return ""

        if not is_list:
            target = selectors[0]
            found = self.search(target.name)
            if found is None:
                return ""
            return found._render(target.context_or(context))

        output: List[str] = []
        for child in self._templates_list:
            for item in selectors:
                if child.name == item.name:
                    output.append(child._render(item.context_or(context)))

        return "".join(output)

    def except_(self, selector: SelectorArg, context: Optional[Context] = None) -> str:
        """
        Рендерит всё, кроме указанных дочерних блоков.

        Учитываются только имена селекторов; собственные контексты
        селекторов игнорируются.
        """
        is_list, selectors = normalize(selector)

        if is_list and not selectors:
            return ""

        excluded = {item.name for item in selectors}
        kept = [
            entry for entry in self._entries
            if not (isinstance(entry, BlockNode) and entry.name in excluded)
        ]
        return self._render_entries(kept, context)

    def some(self, selector: SelectorArg, context: Optional[Context] = None) -> str:
        """
        Рендерит всё содержимое узла, подставляя выбранным блокам
        их собственные контексты.

        Блоки без совпадения (или с "голым" именем) получают общий
        контекст; ни один блок не пропускается.
        """
        is_list, selectors = normalize(selector)

        if is_list and not selectors:
            return ""

        output: List[str] = []
        for entry in self._entries:
            if isinstance(entry, BlockNode):
                match = _first_match(selectors, entry.name)
                child_context = match.context_or(context) if match is not None else context
                output.append(entry.template._render(child_context))
            elif isinstance(entry, ExpressionNode):
                output.append(lookup(context, entry.name))
            else:
                output.append(entry.text)

        return "".join(output)

    def _render(self, context: Optional[Context]) -> str:
        return self._render_entries(self._entries, context)

    def _render_entries(self, entries: Iterable[TemplateEntry], context: Optional[Context]) -> str:
        """
        Обходит элементы в глубину с явным стеком (итератор, контекст).

        Дочерний блок наследует контекст уровня, на котором он встретился.
        """
        output: List[str] = []
        stack: List[Tuple[Iterator[TemplateEntry], Optional[Context]]] = [(iter(entries), context)]

        while stack:
            entries_iter, current_context = stack[-1]
            entry = next(entries_iter, None)
            if entry is None:
                stack.pop()
            elif isinstance(entry, TextNode):
                output.append(entry.text)
            elif isinstance(entry, ExpressionNode):
                output.append(lookup(current_context, entry.name))
            else:
                stack.append((iter(entry.template._entries), current_context))

        return "".join(output)

    def __repr__(self) -> str:
        return f"Template({self.name!r}, entries={len(self._entries)}, children={len(self._templates_list)})"


def _first_match(selectors: Tuple[Selector, ...], name: str) -> Optional[Selector]:
    for item in selectors:
        if item.name == name:
            return item
    return None


__all__ = ["Template", "ROOT_NAME"]
