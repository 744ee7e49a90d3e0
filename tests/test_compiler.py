"""Тесты для компилятора шаблонов compile()."""

import pytest

from simple_templates import ROOT_NAME, compile
from simple_templates.errors import TemplateSyntaxError
from simple_templates.nodes import BlockNode, ExpressionNode, TextNode
from simple_templates.template import Template


class TestCompile:
    """Построение дерева шаблона."""

    def test_compile_empty(self):
        template = compile("")

        assert isinstance(template, Template)
        assert template.name == ROOT_NAME
        assert template.is_root
        assert template.entries == ()
        assert template.children == ()

    def test_compile_text_and_expression(self):
        template = compile("hello {{name}}!")

        assert template.entries == (
            TextNode("hello "),
            ExpressionNode("name"),
            TextNode("!"),
        )

    def test_compile_nested_blocks(self):
        template = compile("{{t A}}x{{t B}}y{{/t}}z{{/t}}")

        assert len(template.entries) == 1
        block = template.entries[0]
        assert isinstance(block, BlockNode)
        assert block.name == "A"

        outer = template.children_map["A"]
        assert block.template is outer
        assert [type(e) for e in outer.entries] == [TextNode, BlockNode, TextNode]
        assert outer.children[0].name == "B"
        assert outer.children_map["B"].entries == (TextNode("y"),)

    def test_children_keep_insertion_order(self):
        template = compile("{{t B}}{{/t}}{{t A}}{{/t}}{{t C}}{{/t}}")

        assert [child.name for child in template.children] == ["B", "A", "C"]
        assert set(template.children_map) == {"A", "B", "C"}

    def test_duplicate_sibling_names_keep_first_in_registry(self):
        template = compile("{{t A}}first{{/t}}{{t A}}second{{/t}}")

        assert len(template.children) == 2
        assert template.children_map["A"] is template.children[0]

    def test_children_map_is_read_only(self):
        template = compile("{{t A}}{{/t}}")

        with pytest.raises(TypeError):
            template.children_map["B"] = Template("B")  # type: ignore[index]

    def test_block_named_like_expression_keyword(self):
        """Имя блока может совпадать с именем выражения."""
        template = compile("{{t name}}{{ name }}{{/t}}")

        assert template.children[0].entries == (ExpressionNode("name"),)


class TestCompileErrors:
    """Нарушения структуры блоков."""

    def test_unmatched_stop(self):
        with pytest.raises(TemplateSyntaxError, match="unexpected"):
            compile("{{/t}}")

    def test_extra_stop_after_block(self):
        with pytest.raises(TemplateSyntaxError):
            compile("{{t A}}x{{/t}}{{/t}}")

    def test_unclosed_block(self):
        with pytest.raises(TemplateSyntaxError, match="Missing"):
            compile("{{t A}}x")

    def test_unclosed_block_reports_names(self):
        with pytest.raises(TemplateSyntaxError) as exc_info:
            compile("{{t Outer}}\n{{t Inner}}x{{/t}}{{t Other}}")

        message = str(exc_info.value)
        assert "Outer" in message
        assert "Other" in message
        assert "Inner" not in message
        assert exc_info.value.line == 1

    def test_reserved_root_name(self):
        with pytest.raises(TemplateSyntaxError, match="reserved"):
            compile("{{t __ROOT__}}x{{/t}}")

    def test_lexical_error_aborts_compile(self):
        with pytest.raises(TemplateSyntaxError):
            compile("{{t A}}fine{{/t}} {{ not valid }}")


class TestCompileIsRepeatable:
    """Повторная компиляция того же текста даёт эквивалентное дерево."""

    def test_same_output(self):
        source = "a {{x}} {{t A}}{{y}}{{t B}}b{{/t}}{{/t}} c"
        context = {"x": 1, "y": "Y"}

        first = compile(source)
        second = compile(source)

        assert first is not second
        assert first.render(context) == second.render(context)
        assert first.render("B") == second.render("B")
        assert first.outline() == second.outline()
