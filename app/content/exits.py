"""Exit sentences closing every successful reflection."""

from __future__ import annotations

import random

PRIMARY_EXITS: tuple[str, ...] = (
    "Close this now.",
    "That's enough. Return.",
    "Go back to your day.",
    "You can leave this.",
    "Nothing more is needed.",
)

SECONDARY_EXITS: tuple[str, ...] = (
    "Step away from the screen.",
    "Let life continue.",
    "This is complete.",
)

PRIMARY_WEIGHT = 3

# Primary exits are replicated so each is 3x as likely as a secondary one
EXIT_SENTENCES: tuple[str, ...] = PRIMARY_EXITS * PRIMARY_WEIGHT + SECONDARY_EXITS


def get_random_exit_sentence(rng: random.Random | None = None) -> str:
    """Draw one exit sentence from the weighted pool."""
    return (rng or random).choice(EXIT_SENTENCES)
