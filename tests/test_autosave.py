"""Tests for the debounced auto-saver and the monthly grid editor."""

import threading
import time
from decimal import Decimal

import pytest

from finboard.domain.autosave import DebouncedSaver, MonthlyGridEditor
from finboard.domain.errors import ValidationError


class RecordingSave:
    """Save callback that records calls and signals each save."""

    def __init__(self, fail=False):
        self.calls = []
        self.fail = fail
        self.saved = threading.Event()

    def __call__(self, key, payload):
        if self.fail:
            raise RuntimeError("backend unavailable")
        self.calls.append((key, payload))
        self.saved.set()


def test_rapid_submissions_are_coalesced():
    save = RecordingSave()
    saver = DebouncedSaver(save, delay=60)

    saver.submit("row", [1])
    saver.submit("row", [2])
    saver.submit("row", [3])

    assert save.calls == []
    assert saver.pending_keys == ["row"]
    assert saver.flush() == 1
    assert save.calls == [("row", [3])]
    assert saver.pending_keys == []


def test_keys_are_debounced_independently():
    save = RecordingSave()
    saver = DebouncedSaver(save, delay=60)

    saver.submit("a", 1)
    saver.submit("b", 2)
    saver.submit("a", 3)

    assert saver.flush() == 2
    assert sorted(save.calls) == [("a", 3), ("b", 2)]


def test_timer_saves_after_quiet_period():
    save = RecordingSave()
    saver = DebouncedSaver(save, delay=0.01)

    saver.submit("row", {"m1": 5})

    assert save.saved.wait(timeout=5)
    assert save.calls == [("row", {"m1": 5})]
    assert saver.pending_keys == []


def test_payload_is_copied_on_submit():
    save = RecordingSave()
    saver = DebouncedSaver(save, delay=60)
    payload = [1, 2]

    saver.submit("row", payload)
    payload.append(3)
    saver.flush()

    assert save.calls == [("row", [1, 2])]


def test_unchanged_payload_is_not_saved_again():
    save = RecordingSave()
    saver = DebouncedSaver(save, delay=60)

    saver.submit("row", [1])
    saver.flush()
    saver.submit("row", [1])

    assert saver.flush() == 0
    assert len(save.calls) == 1


def test_cancel_drops_pending():
    save = RecordingSave()
    saver = DebouncedSaver(save, delay=60)
    saver.submit("row", [1])

    assert saver.cancel() == 1
    assert saver.flush() == 0
    assert save.calls == []


def test_failed_save_is_reported_not_raised():
    errors = []
    saver = DebouncedSaver(
        RecordingSave(fail=True), delay=60, on_error=lambda k, p, e: errors.append((k, p, e))
    )

    saver.submit("row", [1])

    assert saver.flush() == 0
    assert saver.save_count == 0
    assert len(errors) == 1
    assert errors[0][0] == "row"
    assert isinstance(errors[0][2], RuntimeError)


def test_close_flushes_and_rejects_new_submissions():
    save = RecordingSave()
    with DebouncedSaver(save, delay=60) as saver:
        saver.submit("row", [1])

    assert save.calls == [("row", [1])]
    with pytest.raises(RuntimeError):
        saver.submit("row", [2])


def test_negative_delay_is_rejected():
    with pytest.raises(ValueError):
        DebouncedSaver(RecordingSave(), delay=-1)


def test_grid_editor_sanitizes_and_submits_rows():
    save = RecordingSave()
    saver = DebouncedSaver(save, delay=60)
    editor = MonthlyGridEditor(saver, {"rent": [100] * 12})

    assert editor.row_total("rent") == Decimal("1200")

    assert editor.set_value("rent", 0, "150") == Decimal("1250")
    assert editor.set_value("rent", 1, -20) == Decimal("1150")
    assert editor.set_value("rent", 2, "abc") == Decimal("1050")
    saver.flush()

    assert len(save.calls) == 1
    key, months = save.calls[0]
    assert key == "rent"
    assert months[:3] == (Decimal("150"), Decimal("0"), Decimal("0"))


def test_grid_editor_new_row_and_grand_total():
    saver = DebouncedSaver(RecordingSave(), delay=60)
    editor = MonthlyGridEditor(saver)
    editor.load("a", [10] * 12)

    editor.set_value("b", 11, 5)

    assert editor.row("b")[11] == Decimal("5")
    assert editor.grand_total() == Decimal("125")
    saver.cancel()


def test_grid_editor_rejects_bad_month_index():
    editor = MonthlyGridEditor(DebouncedSaver(RecordingSave(), delay=60))

    with pytest.raises(ValidationError):
        editor.set_value("row", 12, 1)


class OverlapCheckingSave:
    """Save callback that records how many saves ran at the same time."""

    def __init__(self):
        self.calls = []
        self.active = 0
        self.max_active = 0
        self._lock = threading.Lock()

    def __call__(self, key, payload):
        with self._lock:
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        time.sleep(0.002)
        with self._lock:
            self.active -= 1
            self.calls.append((key, payload))


def test_timer_saves_never_overlap():
    save = OverlapCheckingSave()
    saver = DebouncedSaver(save, delay=0)

    for version in range(5):
        for key in range(6):
            saver.submit(key, (key, version))
    saver.close()

    assert save.max_active == 1
    last_saved = {}
    for key, payload in save.calls:
        last_saved[key] = payload
    assert last_saved == {key: (key, 4) for key in range(6)}
    assert saver.pending_keys == []


def test_superseded_timer_does_not_save():
    save = RecordingSave()
    saver = DebouncedSaver(save, delay=60)
    saver.submit("row", [1])
    first_timer = saver._timers["row"]

    saver.submit("row", [2])
    # The replaced timer firing late must leave the newer payload pending
    saver._on_timer("row", first_timer)

    assert save.calls == []
    assert saver.pending_keys == ["row"]
    assert saver.flush() == 1
    assert save.calls == [("row", [2])]


def test_grid_editor_without_debounce_saves_final_row():
    save = OverlapCheckingSave()
    with DebouncedSaver(save, delay=0) as saver:
        editor = MonthlyGridEditor(saver)
        for index in range(12):
            editor.set_value("sales", index, (index + 1) * 100)

    assert save.max_active == 1
    assert save.calls[-1] == ("sales", editor.row("sales"))
    assert sum(save.calls[-1][1]) == Decimal("7800")
