"""Helpers for commands that edit a twelve-month row through the auto-saver."""

from decimal import Decimal
from typing import Callable, Hashable, Sequence

from finboard.domain.autosave import DebouncedSaver, MonthlyGridEditor
from finboard.utils.amount_parser import parse_month_assignment


def apply_month_edits(
    key: Hashable,
    months: Sequence[Decimal],
    assignments: Sequence[str],
    save: Callable[[Hashable, tuple], None],
    delay: float,
) -> tuple[tuple[Decimal, ...], int, list[Exception]]:
    """Apply "POSITION=AMOUNT" edits to a row and save it through a DebouncedSaver.

    Edits are submitted one at a time as a grid would; the saver coalesces
    edits that arrive within ``delay`` seconds. Saves may run on timer threads
    but never overlap, and all of them have finished when this returns.

    Returns:
        Tuple of (final months, number of saves, save errors)

    Raises:
        ValueError: If an assignment is malformed
    """
    edits = [parse_month_assignment(assignment) for assignment in assignments]
    errors: list[Exception] = []

    saver = DebouncedSaver(save, delay=delay, on_error=lambda k, p, e: errors.append(e))
    with saver:
        editor = MonthlyGridEditor(saver, {key: months})
        for month_index, amount in edits:
            editor.set_value(key, month_index, amount)
    return editor.row(key), saver.save_count, errors
