"""Operator interaction for folder consolidator."""

from .prompts import ConsoleOperatorPrompt, UnattendedOperatorPrompt, CONFLICT_MENU

__all__ = ["ConsoleOperatorPrompt", "UnattendedOperatorPrompt", "CONFLICT_MENU"]
