"""Opening questions shown before the user responds."""

from __future__ import annotations

import random

OPENING_QUESTIONS: tuple[str, ...] = (
    # Most neutral
    "Where are you right now.",
    "What is happening right now.",
    "What is here.",
    # Slightly sharper
    "What are you avoiding noticing.",
    "What feels most immediate.",
    "What is loud right now.",
    # Physical anchoring
    "What do you feel in your body.",
    "Is your body tense or loose.",
)


def get_random_question(rng: random.Random | None = None) -> str:
    """Pick one opening question uniformly at random."""
    return (rng or random).choice(OPENING_QUESTIONS)
