from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Dict

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .context import ContextValue, validate_context
from .errors import ContextFileError, TemplateFileError

# Переменная окружения, включающая отладочное логирование CLI
DEBUG_ENV_VAR = "SIMPLE_TEMPLATES_DEBUG"

# --------------------------------------------------------------------------- #
# YAML loader (JSON - подмножество YAML, отдельный парсер не нужен)
# --------------------------------------------------------------------------- #
_yaml = YAML(typ="safe")


# --------------------------------------------------------------------------- #
# PUBLIC API
# --------------------------------------------------------------------------- #
def load_context(path: Path) -> Dict[str, ContextValue]:
    """
    Загрузить контекст рендеринга из YAML/JSON файла.

    • Пустой файл даёт пустой контекст.
    • Верхний уровень обязан быть мапой.
    • Значения проверяются на принадлежность к типам контекста.
    """
    if not path.is_file():
        raise ContextFileError(f"Context file not found: {path}")

    try:
        with path.open(encoding="utf-8") as f:
            raw: Any = _yaml.load(f)
    except (OSError, UnicodeDecodeError, YAMLError) as e:
        raise ContextFileError(f"Failed to read context file {path}: {e}") from e

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ContextFileError(
            f"Context file {path} must contain a mapping, got {type(raw).__name__}"
        )

    return validate_context(raw)


def read_template(source: str) -> str:
    """Прочитать текст шаблона: путь к файлу или '-' для stdin."""
    if source == "-":
        return sys.stdin.read()

    path = Path(source)
    if not path.is_file():
        raise TemplateFileError(f"Template file not found: {path}")
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise TemplateFileError(f"Failed to read template file {path}: {e}") from e


__all__ = ["DEBUG_ENV_VAR", "load_context", "read_template"]
