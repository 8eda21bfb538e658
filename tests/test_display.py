"""Tests for display.py - Rich rendering."""

from datetime import datetime, timezone

import pytest
from rich.console import Console

from flux_calc.display import render_display, render_history, render_keypad
from flux_calc.history import HistoryEntry
from flux_calc.session import CalculatorSession


def _render(renderable) -> str:
    console = Console(record=True, width=80, color_system=None)
    console.print(renderable)
    return console.export_text()


@pytest.fixture
def session():
    return CalculatorSession()


class TestRenderDisplay:
    """Tests for render_display."""

    def test_ready_when_empty(self, session):
        text = _render(render_display(session.snapshot()))
        assert "Ready" in text
        assert "Live preview" in text

    def test_preview(self, session):
        session.enter("1200+34")
        text = _render(render_display(session.snapshot()))
        assert "1200+34" in text
        assert "≈ 1,234" in text

    def test_result(self, session):
        session.enter("6*7=")
        text = _render(render_display(session.snapshot()))
        assert "42" in text
        assert "Result" in text


class TestRenderHistory:
    """Tests for render_history."""

    def test_empty(self):
        text = _render(render_history([]))
        assert "No calculations yet" in text

    def test_entries(self):
        entry = HistoryEntry("1", "2500*2", "5000", datetime(2024, 1, 1, tzinfo=timezone.utc))
        text = _render(render_history([entry]))
        assert "2500×2" in text
        assert "5,000" in text

    def test_formatting_options(self):
        entry = HistoryEntry("1", "1/3", "0.333333333333", datetime(2024, 1, 1, tzinfo=timezone.utc))
        big = HistoryEntry("2", "2500*2", "5000", datetime(2024, 1, 1, tzinfo=timezone.utc))
        text = _render(render_history([entry, big], max_fraction_digits=3, grouping=False))
        assert "0.333" in text
        assert "0.333333" not in text
        assert "5000" in text
        assert "5,000" not in text


class TestRenderKeypad:
    """Tests for render_keypad."""

    def test_all_labels_present(self):
        text = _render(render_keypad())
        for label in ("AC", "DEL", "%", "÷", "×", "−", "+", "±", "0", ".", "="):
            assert f"[{label}]" in text
