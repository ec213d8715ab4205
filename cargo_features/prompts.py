"""
Interactive selection capability.

The resolvers and the feature selection engine only talk to a
:class:`Selector`; :class:`QuestionarySelector` backs it with terminal
prompts. Tests and embedders inject their own implementation.
"""

from __future__ import annotations

import logging
import sys
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Union

import questionary

from .errors import CANCELLED, Cancelled, SelectionError, is_cancelled

logger = logging.getLogger(__name__)


class Selector(ABC):
    """Minimal prompt capability: pick one label, or pick a subset of labels."""

    @abstractmethod
    def select_one(
        self,
        message: str,
        options: Sequence[str],
        starting_filter: Optional[str] = None,
    ) -> Union[str, Cancelled]:
        """Return one of ``options``, or CANCELLED."""

    @abstractmethod
    def select_subset(
        self,
        message: str,
        options: Sequence[str],
        defaults: Sequence[str] = (),
    ) -> Union[List[str], Cancelled]:
        """Return the checked subset of ``options``, or CANCELLED. ``defaults`` start checked."""


class QuestionarySelector(Selector):
    """Selector backed by questionary terminal prompts."""

    def __init__(self, require_tty: bool = True):
        self.require_tty = require_tty

    def _ensure_interactive(self) -> None:
        if self.require_tty and not sys.stdin.isatty():
            raise SelectionError(
                "Interactive selection requires a terminal",
                hint="Pass --package and --dependency to narrow the choice, or run from a terminal",
            )

    def _ask(self, question: questionary.Question):
        try:
            return question.unsafe_ask()
        except KeyboardInterrupt:
            logger.debug("Prompt cancelled by user")
            return CANCELLED
        except (EOFError, OSError) as exc:
            raise SelectionError(f"Interactive selection failed: {exc}") from exc

    def select_one(
        self,
        message: str,
        options: Sequence[str],
        starting_filter: Optional[str] = None,
    ) -> Union[str, Cancelled]:
        self._ensure_interactive()
        choices = list(options)
        if starting_filter:
            question = questionary.autocomplete(
                message,
                choices=choices,
                default=starting_filter,
                match_middle=True,
                validate=lambda text: text in choices or "Pick one of the listed names",
            )
        else:
            question = questionary.select(
                message,
                choices=choices,
                use_search_filter=True,
                use_jk_keys=False,
            )
        answer = self._ask(question)
        if answer is None or is_cancelled(answer):
            return CANCELLED
        return answer

    def select_subset(
        self,
        message: str,
        options: Sequence[str],
        defaults: Sequence[str] = (),
    ) -> Union[List[str], Cancelled]:
        self._ensure_interactive()
        checked = set(defaults)
        choices = [
            questionary.Choice(title=option, value=option, checked=option in checked)
            for option in options
        ]
        answer = self._ask(questionary.checkbox(message, choices=choices))
        if answer is None or is_cancelled(answer):
            return CANCELLED
        return list(answer)


__all__ = ["Selector", "QuestionarySelector"]
