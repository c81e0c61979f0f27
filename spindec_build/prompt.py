#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Interactive yes/no confirmation driven by a line reader.

The loop is a small state machine: it stays in PROMPTING until a line of
``y``/``Y``/``n``/``N`` or an empty line (meaning yes) moves it to
CONFIRMED or DECLINED. Any other input re-prompts.
"""

from __future__ import annotations

from typing import Callable, Optional

from loguru import logger
from rich.console import Console

from .core.models import PromptState

LineReader = Callable[[str], str]

YES_ANSWERS = frozenset({"y", "Y", ""})
NO_ANSWERS = frozenset({"n", "N"})


def next_state(answer: str) -> PromptState:
    """Transition for a single line of input, ignoring surrounding whitespace."""
    answer = answer.strip()
    if answer in YES_ANSWERS:
        return PromptState.CONFIRMED
    if answer in NO_ANSWERS:
        return PromptState.DECLINED
    return PromptState.PROMPTING


class YesNoPrompt:
    """
    Ask a [Y/n] question until a valid answer is read.

    Args:
        reader: Called with the question text, returns one line without the
            trailing newline. Defaults to reading from the console.
        console: Where the "Not a valid option" notice is written.
    """

    def __init__(self, reader: Optional[LineReader] = None, console: Optional[Console] = None) -> None:
        self.console = console or Console()
        self.reader = reader or self._read_console
        self.attempts = 0

    def _read_console(self, question: str) -> str:
        return self.console.input(question, markup=False)

    def ask(self, question: str) -> bool:
        """
        Return True for yes and False for no.

        End of input is treated as no.
        """
        state = PromptState.PROMPTING
        self.attempts = 0

        while state is PromptState.PROMPTING:
            self.attempts += 1
            try:
                answer = self.reader(question)
            except EOFError:
                logger.warning("End of input while waiting for confirmation, treating as no")
                state = PromptState.DECLINED
                continue

            state = next_state(answer)
            if state is PromptState.PROMPTING:
                logger.debug(f"Rejected prompt answer: {answer!r}")
                self.console.print("Not a valid option\n", markup=False, highlight=False)

        return state is PromptState.CONFIRMED
