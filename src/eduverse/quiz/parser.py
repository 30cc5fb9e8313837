"""Parse generated quiz text into questions.

The generator asks for blocks shaped like::

    1. What is the capital of France?
    A) Berlin
    B) Paris
    C) Rome
    D) Madrid
    Correct Answer: B) Paris

Blocks are separated by blank lines. Blocks that do not follow the shape are skipped.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from pydantic import ValidationError

from .models import Question

LOGGER = logging.getLogger(__name__)

CORRECT_PREFIX = "correct answer:"
ANSWER_COUNT = 4

_BLOCK_SPLIT = re.compile(r"\n\s*\n")
_LABEL = re.compile(r"^\(?([A-Da-d])[\).:\-]\s*")


def parse_questions(text: str) -> list[Question]:
    """Return every well-formed question found in ``text``."""
    questions: list[Question] = []
    for block in _BLOCK_SPLIT.split(text.strip()):
        lines = [line.strip() for line in block.splitlines() if line.strip()]
        if len(lines) < 2 or not lines[-1].lower().startswith(CORRECT_PREFIX):
            continue
        answers = lines[1:-1]
        if len(answers) != ANSWER_COUNT:
            LOGGER.debug("Skipping question with %d options", len(answers))
            continue
        raw_correct = lines[-1][len(CORRECT_PREFIX) :].strip()
        correct = match_answer(answers, raw_correct)
        if correct is None:
            LOGGER.debug("Skipping question with unmatched answer %r", raw_correct)
            continue
        try:
            questions.append(Question(text=lines[0], answers=answers, correct_answer=correct))
        except ValidationError as exc:
            LOGGER.debug("Skipping malformed question block: %s", exc)
    return questions


def match_answer(answers: list[str], raw: str) -> Optional[str]:
    """Find the option ``raw`` designates: exact text, bare label, or unlabeled text."""
    if raw in answers:
        return raw

    raw_label = _label_of(raw)
    raw_text = _strip_label(raw).lower()
    for answer in answers:
        if raw_text and _strip_label(answer).lower() == raw_text:
            return answer
    if raw_label is not None and not raw_text:
        for answer in answers:
            if _label_of(answer) == raw_label:
                return answer
    return None


def _label_of(value: str) -> Optional[str]:
    match = _LABEL.match(value)
    if match:
        return match.group(1).upper()
    if len(value) == 1 and value.upper() in "ABCD":
        return value.upper()
    return None


def _strip_label(value: str) -> str:
    if len(value) == 1 and value.upper() in "ABCD":
        return ""
    return _LABEL.sub("", value, count=1).strip()


__all__ = ["parse_questions", "match_answer"]
