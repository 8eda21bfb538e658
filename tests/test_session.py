"""Tests for session.py - Calculator session and display surface."""

import pytest

from flux_calc.config import CalcConfig
from flux_calc.editor import Mode
from flux_calc.history import HistoryLedger
from flux_calc.keypad import UnknownKeyError, resolve_key
from flux_calc.session import CalculatorSession, DisplaySnapshot


@pytest.fixture
def session():
    """Create a session with default configuration."""
    return CalculatorSession()


class TestPressing:
    """Tests for feeding keys into a session."""

    def test_press_by_token(self, session):
        session.press("7").press("×").press("6")
        assert session.expression == "7*6"

    def test_press_key(self, session):
        session.press(resolve_key("9"))
        assert session.expression == "9"

    def test_input_and_command(self, session):
        session.input("5").input("0").command("percent")
        assert session.expression == "0.5"

    def test_enter(self, session):
        session.enter("12*3=")
        assert session.computed_result == "36"

    def test_operator_symbols_collide(self, session):
        session.enter("5+/-")
        assert session.expression == "5-"

    def test_enter_with_words(self, session):
        session.enter("AC 4 x 2 enter")
        assert session.computed_result == "8"

    def test_enter_unknown_key_leaves_state(self, session):
        session.enter("12")
        with pytest.raises(UnknownKeyError):
            session.enter("3 q")
        assert session.expression == "12"

    def test_unknown_token(self, session):
        with pytest.raises(UnknownKeyError):
            session.press("sqrt")


class TestScenarios:
    """End-to-end keypad scenarios."""

    def test_preview_then_commit(self, session):
        session.press_many(["7", "+", "3"])
        assert session.preview == "10"
        assert session.preview_annotation == "10"

        session.press("=")
        assert session.computed_result == "10"
        assert session.just_evaluated
        assert len(session.history_entries) == 1
        entry = session.history_entries[0]
        assert entry.raw_expression == "7+3"
        assert entry.result == "10"

    def test_division_by_zero(self, session):
        session.press_many(["5", "/", "0", "="])
        assert session.computed_result == "Error"
        assert session.highlighted_value == "Error"
        assert session.history_entries == []

    def test_clear_after_anything(self, session):
        session.press_many(["5", "/", "0", "=", "AC"])
        assert session.expression == ""
        assert session.computed_result == "0"
        assert session.mode == Mode.EDITING
        assert session.just_evaluated is False

    def test_history_is_bounded(self, session):
        for i in range(11):
            session.enter(f"{i}+1=")
        assert len(session.history_entries) == 10
        assert session.history_entries[0].raw_expression == "10+1"
        assert session.history_entries[-1].raw_expression == "1+1"

    def test_commit_then_digit_starts_over(self, session):
        session.enter("7+3=")
        session.press("2")
        assert session.expression == "2"
        assert session.computed_result == "10"
        assert session.history_entries[0].result == "10"

    def test_no_annotation_after_commit(self, session):
        session.enter("7+3=")
        assert session.preview_annotation is None

    def test_no_annotation_without_preview(self, session):
        session.enter("7+")
        assert session.preview_annotation is None
        assert session.highlighted_value == "7+"


class TestRecall:
    """Tests for history recall."""

    def test_recall_entry(self, session):
        session.enter("7+3=")
        entry = session.history_entries[0]
        session.enter("AC 2*2=")

        session.recall(entry)
        assert session.expression == "7+3"
        assert session.computed_result == "10"
        assert session.just_evaluated
        assert session.highlighted_value == "10"

    def test_recall_does_not_change_history(self, session):
        session.enter("7+3=")
        session.recall(session.history_entries[0].id)
        assert len(session.history_entries) == 1

    def test_digit_after_recall_starts_over(self, session):
        session.enter("7+3=")
        session.recall(session.history_entries[0])
        session.press("4")
        assert session.expression == "4"

    def test_clear_history(self, session):
        session.enter("7+3=")
        session.clear_history()
        assert session.history_entries == []


class TestConfiguration:
    """Tests for configuration passed to a session."""

    def test_history_capacity(self):
        session = CalculatorSession(config=CalcConfig(history_capacity=3))
        for i in range(5):
            session.enter(f"{i}*2=")
        assert len(session.history_entries) == 3

    def test_significant_digits(self):
        session = CalculatorSession(config=CalcConfig(significant_digits=4))
        session.enter("1/3=")
        assert session.computed_result == "0.3333"

    def test_explicit_ledger(self):
        ledger = HistoryLedger(capacity=1)
        session = CalculatorSession(ledger=ledger)
        assert session.ledger is ledger
        session.enter("1+1=")
        assert len(ledger) == 1

    def test_explicit_config(self):
        config = CalcConfig(history_capacity=4)
        assert CalculatorSession(config=config).config is config

    def test_sessions_are_independent(self):
        first = CalculatorSession()
        second = CalculatorSession()
        first.enter("7+3=")
        assert second.history_entries == []
        assert second.expression == ""


class TestSnapshot:
    """Tests for DisplaySnapshot."""

    def test_initial(self, session):
        snapshot = session.snapshot()
        assert snapshot == DisplaySnapshot(
            expression="",
            value="0",
            preview=None,
            just_evaluated=False,
            history=[],
        )
        assert snapshot.caption == "Live preview"

    def test_grouped_values(self, session):
        session.enter("1234567")
        snapshot = session.snapshot()
        assert snapshot.value == "1,234,567"
        assert snapshot.preview == "1,234,567"
        assert snapshot.caption == "≈ 1,234,567"

    def test_translated_expression(self, session):
        session.enter("6*3/2")
        assert session.snapshot().expression == "6×3÷2"

    def test_after_commit(self, session):
        session.enter("7+3=")
        snapshot = session.snapshot()
        assert snapshot.value == "10"
        assert snapshot.preview is None
        assert snapshot.caption == "Result"
        assert len(snapshot.history) == 1

    def test_without_grouping(self):
        session = CalculatorSession(config=CalcConfig(grouping=False))
        session.enter("1234567")
        assert session.snapshot().value == "1234567"
