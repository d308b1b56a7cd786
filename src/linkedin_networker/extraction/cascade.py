# ABOUTME: Ordered first-success-wins application of extraction strategies.
# ABOUTME: Strategies are (name, function) pairs kept as plain data.

from collections.abc import Callable, Sequence
from typing import TypeVar

S = TypeVar("S")
R = TypeVar("R")


def first_success(
    strategies: Sequence[tuple[str, Callable[[S], R | None]]],
    subject: S,
) -> tuple[str, R] | None:
    """Apply strategies in order and return the first non-empty result.

    A strategy abstains by returning None or an empty value.

    Args:
        strategies: Ordered (name, function) pairs.
        subject: The document or element every strategy receives.

    Returns:
        The winning strategy's name and result, or None if all abstained.
    """
    for name, strategy in strategies:
        result = strategy(subject)
        if result:
            return name, result
    return None
