"""Named day-parts and the hours of the day they cover."""

from collections.abc import Iterable

TIME_SLOT_HOURS: dict[str, frozenset[int]] = {
    "morning": frozenset({7, 8, 9, 10, 11}),
    "afternoon": frozenset({12, 13, 14, 15, 16, 17}),
    "evening": frozenset({18, 19, 20, 21}),
    "night": frozenset({22, 23, 0, 1, 2, 3, 4, 5, 6}),
}


def resolve_hours(slots: Iterable[str]) -> set[int]:
    """Union of the hours covered by the given slot names.

    Unknown slot names are ignored. An empty result means "no hour
    filtering" to the scorer.
    """
    hours: set[int] = set()
    for slot in slots:
        hours |= TIME_SLOT_HOURS.get(slot, frozenset())
    return hours
