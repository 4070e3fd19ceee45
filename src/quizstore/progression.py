"""Grade level progression across "continue this topic" rounds."""

GRADE_LEVELS = ("elementary", "middle school", "high school", "college")

# Cumulative continue counts that each grant one level: +1 after 2, +2 after 6, +3 after 14.
PROGRESSION_THRESHOLDS = (2, 6, 14)

DEFAULT_GRADE_LEVEL = "middle school"


def calculate_next_grade_level(continue_count: int, starting_level: str) -> str:
    """Grade level for the next quiz in a continue chain.

    Args:
        continue_count: Rounds continued so far (0 = the initial quiz)
        starting_level: Grade level the chain started at. Unknown levels
            are treated as "middle school".

    Returns:
        A name from GRADE_LEVELS, never above "college".
    """
    if starting_level in GRADE_LEVELS:
        start = GRADE_LEVELS.index(starting_level)
    else:
        start = GRADE_LEVELS.index(DEFAULT_GRADE_LEVEL)

    levels_to_add = sum(1 for t in PROGRESSION_THRESHOLDS if continue_count >= t)
    return GRADE_LEVELS[min(start + levels_to_add, len(GRADE_LEVELS) - 1)]


def get_continues_until_next_level(continue_count: int) -> int | None:
    """Rounds left until the next level-up, or None once past the last threshold."""
    for threshold in PROGRESSION_THRESHOLDS:
        if continue_count < threshold:
            return threshold - continue_count
    return None
