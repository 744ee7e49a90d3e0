"""Общая инфраструктура тестов."""

from .file_utils import write

__all__ = ["write"]
