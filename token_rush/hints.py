"""
Hint Generator
===============
Rule-triggered gameplay tips drawn from the current session snapshot.
"""

import random
from typing import List, Sequence

from .session import HintContext


SCORE_TIPS = (
    (5, 'Collect green tokens to raise your score quickly.'),
    (15, 'Try chaining pickups; stay near clusters of tokens.'),
)
HIGH_SCORE_TIP = 'High score! Hazards get faster every level, keep moving.'

LAST_LIFE_TIP = 'Critical life: play evasively and avoid chasing far tokens.'
FULL_LIVES_TIP = 'You have full lives; be aggressive early.'
SLOW_PACE_TIP = 'Feels easy? Every 25 seconds the hazards speed up and multiply.'

GENERAL_TIPS = (
    'Hazards wrap around the edges; watch the opposite side before you cross.',
    'Taking a hit sends you back to the center; keep the middle clear.',
    'Tokens respawn right away when collected, so sweep the open areas.',
)


def candidate_hints(context: HintContext) -> List[str]:
    """Every tip whose rule fires for this snapshot."""
    hints = []

    for threshold, tip in SCORE_TIPS:
        if context.score < threshold:
            hints.append(tip)
            break
    else:
        hints.append(HIGH_SCORE_TIP)

    if context.lives == 1:
        hints.append(LAST_LIFE_TIP)
    elif context.lives == 3 and context.elapsed < 20:
        hints.append(FULL_LIVES_TIP)

    if context.elapsed > 30 and context.difficulty < 2:
        hints.append(SLOW_PACE_TIP)

    hints.extend(GENERAL_TIPS)
    return hints


def random_join(items: Sequence[str], count: int, rng) -> str:
    """Pick up to `count` distinct items in random order, blank-line separated."""
    pool = list(items)
    picked = []
    while pool and len(picked) < count:
        picked.append(pool.pop(int(rng.random() * len(pool))))
    return '\n\n'.join(picked)


def generate_hint(context: HintContext, rng=random) -> str:
    """Two tips, plus one more per 15 points scored, at most four."""
    count = 2 + min(2, context.score // 15)
    return random_join(candidate_hints(context), count, rng)
