"""Single repair pass run on every loaded document.

Documents written by older versions, or hand-edited ones, may lack count
entries for users who joined after a category was created (or the reverse),
may hold fractional weights or counts, or may hold ids at or past a
sequence's next value.
Fixing all of that here means no operation has to patch counts on its own.
"""

import logging
from typing import Any

from choretally.domain.document import Document, IdKind


logger = logging.getLogger(__name__)


def _max_ids(document: Document) -> dict[IdKind, int]:
    highest = dict.fromkeys(IdKind, 0)
    for household in document.households:
        highest[IdKind.HOUSEHOLD] = max(highest[IdKind.HOUSEHOLD], household.id)
        for user in household.users:
            highest[IdKind.USER] = max(highest[IdKind.USER], user.id)
        for category in household.categories:
            highest[IdKind.CATEGORY] = max(highest[IdKind.CATEGORY], category.id)
        for task in household.tasks:
            highest[IdKind.TASK] = max(highest[IdKind.TASK], task.id)
    return highest


def _round_fraction(value: Any) -> tuple[Any, bool]:
    if isinstance(value, float) and not value.is_integer():
        return round(value), True
    return value, False


def _round_count_map(counts: Any) -> int:
    if not isinstance(counts, dict):
        return 0
    rounded = 0
    for key, value in counts.items():
        counts[key], changed = _round_fraction(value)
        rounded += changed
    return rounded


def round_fractional_values(raw: Any) -> int:
    """Round fractional weights and counts in a decoded, not yet validated document.

    Older files may hold a weight such as 1.5 along with the fractional
    overall counts it produced. Weights rounded below 1 are then clamped by
    ``Category``. Anything that is not shaped like a document is left for
    validation to report.

    Returns:
        Number of values rounded
    """
    if not isinstance(raw, dict) or not isinstance(raw.get("households"), list):
        return 0

    rounded = 0
    for household in raw["households"]:
        if not isinstance(household, dict):
            continue
        rounded += _round_count_map(household.get("overall_counts"))
        categories = household.get("categories")
        if not isinstance(categories, list):
            continue
        for category in categories:
            if not isinstance(category, dict):
                continue
            if "weight" in category:
                category["weight"], changed = _round_fraction(category["weight"])
                rounded += changed
            rounded += _round_count_map(category.get("task_counts"))
    return rounded


def repair_document(document: Document, *, values_rounded: int = 0) -> int:
    """Restore count and id-sequence invariants in place.

    Args:
        document: Freshly validated document
        values_rounded: Fractional values already rounded by
            ``round_fractional_values``, reported with the other fixes

    Returns:
        Number of fixes applied (0 for an already consistent document)
    """
    counts_added = 0
    sequences_raised = 0

    for household in document.households:
        counts_added += household.backfill_counts()

    for kind, highest in _max_ids(document).items():
        if document.raise_sequence(kind, highest + 1):
            sequences_raised += 1

    fixes = counts_added + sequences_raised + values_rounded
    if fixes:
        logger.info(
            "document_repaired",
            extra={
                "counts_added": counts_added,
                "sequences_raised": sequences_raised,
                "values_rounded": values_rounded,
            },
        )
    return fixes
