"""Textual front-end: controller plus an optional interactive app."""

from .controller import SubmitResult, TextualEditorAdapter, TextualUIHooks

__all__ = ["SubmitResult", "TextualEditorAdapter", "TextualUIHooks"]
