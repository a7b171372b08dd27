"""Stable multiple-choice answers for math activities."""

import random

# Wrong answers are drawn from answer-3 .. answer+2
_LOW_OFFSET = 3
_HIGH_OFFSET = 2


def answer_options(activity_id: int, answer: int, count: int = 4) -> list[int]:
    """Return ``count`` distinct choices including ``answer``, in shuffled order.

    The generator is seeded with the activity id, so a given activity always
    gets the same choices in the same order. Choices never go below 1; when
    the window around the answer holds too few candidates it is widened
    upwards.
    """
    rng = random.Random(activity_id)
    candidates = sorted({max(1, answer + offset) for offset in range(-_LOW_OFFSET, _HIGH_OFFSET + 1)} - {answer})
    upper = answer + _HIGH_OFFSET
    while len(candidates) < count - 1:
        upper += 1
        if upper != answer:
            candidates.append(upper)

    options = [answer] + rng.sample(candidates, count - 1)
    rng.shuffle(options)
    return options
