from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .compiler import compile as compile_template
from .config import load_context, read_template
from .errors import TemplateUserError
from .lexer import Tokenizer
from .logs import setup_logging
from .selectors import Selector
from .version import tool_version


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="simple-templates",
        description="Compile and render {{t Name}}...{{/t}} templates",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument("--debug", action="store_true", help="отладочное логирование в stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    sp_render = sub.add_parser("render", help="Отрендерить шаблон в stdout")
    sp_render.add_argument("template", help="файл шаблона или - для чтения из stdin")
    sp_render.add_argument(
        "-c", "--context",
        metavar="FILE",
        help="файл контекста (YAML или JSON)",
    )
    mode = sp_render.add_mutually_exclusive_group()
    mode.add_argument(
        "--block",
        metavar="NAME",
        help="отрендерить только блок NAME (ошибка, если блок не найден)",
    )
    mode.add_argument(
        "--only",
        action="append",
        metavar="NAME[:FILE]",
        help="отрендерить только указанные блоки (можно указать несколько)",
    )
    mode.add_argument(
        "--except",
        dest="except_",
        action="append",
        metavar="NAME",
        help="отрендерить всё, кроме указанных блоков (можно указать несколько)",
    )
    mode.add_argument(
        "--some",
        action="append",
        metavar="NAME[:FILE]",
        help="отрендерить всё, подставив блокам собственные контексты",
    )

    sp_tokens = sub.add_parser("tokens", help="Поток токенов (JSON)")
    sp_tokens.add_argument("template", help="файл шаблона или - для чтения из stdin")

    sp_tree = sub.add_parser("tree", help="Дерево блоков (JSON)")
    sp_tree.add_argument("template", help="файл шаблона или - для чтения из stdin")

    return p


def _parse_selectors(items: List[str]) -> Union[Selector, List[Selector]]:
    """
    Парсит селекторы в формате 'NAME' или 'NAME:FILE'.

    Один селектор остаётся одиночным (поиск по всему дереву),
    несколько - списком (только непосредственные дети корня).
    """
    result: List[Selector] = []
    for item in items:
        name, sep, ctx_file = item.partition(":")
        name = name.strip()
        if not name:
            raise ValueError(f"Invalid selector '{item}'. Expected 'NAME' or 'NAME:FILE'")
        if sep:
            result.append(Selector(name, load_context(Path(ctx_file.strip()))))
        else:
            result.append(Selector(name))

    return result[0] if len(result) == 1 else result


def _run_render(ns: argparse.Namespace) -> str:
    source = read_template(ns.template)
    template = compile_template(source)
    context: Dict[str, Any] = load_context(Path(ns.context)) if ns.context else {}

    if ns.block:
        return template.render(ns.block, context)
    if ns.only:
        return template.only(_parse_selectors(ns.only), context)
    if ns.except_:
        return template.except_(_parse_selectors(ns.except_), context)
    if ns.some:
        return template.some(_parse_selectors(ns.some), context)
    return template.render(context)


def _run_tokens(ns: argparse.Namespace) -> List[Dict[str, Any]]:
    source = read_template(ns.template)
    return [
        {
            "type": token.type.value,
            "value": token.value,
            "line": token.line,
            "column": token.column,
        }
        for token in Tokenizer(source).tokenize()
    ]


def _run_tree(ns: argparse.Namespace) -> Dict[str, Any]:
    source = read_template(ns.template)
    return compile_template(source).outline()


def main(argv: Optional[List[str]] = None) -> int:
    ns = _build_parser().parse_args(argv)
    setup_logging(debug=ns.debug)

    try:
        if ns.cmd == "render":
            sys.stdout.write(_run_render(ns))
            return 0

        if ns.cmd == "tokens":
            sys.stdout.write(json.dumps(_run_tokens(ns), ensure_ascii=False))
            return 0

        if ns.cmd == "tree":
            sys.stdout.write(json.dumps(_run_tree(ns), ensure_ascii=False))
            return 0

    except TemplateUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    except ValueError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
