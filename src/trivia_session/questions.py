# Area: Questions
"""
trivia_session.questions — Question bank helpers
================================================

Loading a question bank from JSON, picking the questions for one game,
and shuffling answer order. The schema itself lives with the event
models (Question, AnswerOption) since questions travel in events.
"""

from __future__ import annotations

import json
import logging
import random
from pathlib import Path
from typing import List, Optional, Sequence, Union

from pydantic import ValidationError

from ._events.catalog import AnswerOption, Question
from .errors import ConfigError

logger = logging.getLogger("trivia_session.questions")

__all__ = [
    "AnswerOption",
    "Question",
    "correct_index",
    "shuffle_answers",
    "select_questions",
    "load_questions",
]


def correct_index(question: Question) -> int:
    """Index of the first answer flagged correct, or -1 if none is."""
    for index, answer in enumerate(question.answers):
        if answer.correct:
            return index
    return -1


def shuffle_answers(question: Question, rng: Optional[random.Random] = None) -> Question:
    """Return a copy of the question with its answers in random order."""
    rng = rng or random.Random()
    answers = list(question.answers)
    rng.shuffle(answers)
    return question.model_copy(update={"answers": answers})


def select_questions(
    bank: Sequence[Question],
    category: Optional[str],
    difficulty: Optional[str],
    count: int,
    rng: Optional[random.Random] = None,
) -> List[Question]:
    """
    Pick up to ``count`` questions for a game.

    Questions are filtered by category and difficulty (a None filter
    matches everything). If nothing matches, the whole bank is used.

    Returns:
        A random sample, at most ``count`` long
    """
    rng = rng or random.Random()
    matching = [
        q for q in bank
        if (category is None or q.category == category)
        and (difficulty is None or q.difficulty == difficulty)
    ]
    if not matching:
        if bank:
            logger.info(
                f"No questions for category={category!r} difficulty={difficulty!r}; "
                f"using the whole bank"
            )
        matching = list(bank)
    return rng.sample(matching, min(count, len(matching)))


def load_questions(path: Union[str, Path]) -> List[Question]:
    """
    Load a question bank from a JSON file.

    The file holds either a list of questions or an object with a
    ``questions`` list.

    Raises:
        ConfigError: If the file is missing or malformed
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as exc:
        raise ConfigError(f"Question file not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Question file {path} is not valid JSON: {exc}") from exc

    if isinstance(data, dict):
        data = data.get("questions", [])
    if not isinstance(data, list):
        raise ConfigError(f"Question file {path} must hold a list of questions")

    try:
        questions = [Question.model_validate(item) for item in data]
    except ValidationError as exc:
        raise ConfigError(f"Invalid question in {path}: {exc}") from exc

    logger.info(f"Loaded {len(questions)} questions from {path}")
    return questions
