# tests/test_plan_parser.py
from __future__ import annotations

import pytest

from core.plan_parser import END_TAG, START_TAG, extract_plan


def _wrap(body: str, before: str = "", after: str = "") -> str:
    return f"{before}{START_TAG}{body}{END_TAG}{after}"


# ── tagged responses ─────────────────────────────────────────────────
def test_extracts_body_between_tags():
    raw = "<weight_loss_plan>Eat less, move more.</weight_loss_plan>"
    assert extract_plan(raw) == "Eat less, move more."


@pytest.mark.parametrize(
    "body, before, after",
    [
        ("Plan A", "", ""),
        ("", "", ""),
        ("1. Walk daily\n2. Sleep 8h\n", "Here is your plan:\n", "\nGood luck!"),
        ("  padded  ", "<thinking>notes</thinking>", ""),
    ],
)
def test_surrounding_text_is_dropped(body, before, after):
    assert extract_plan(_wrap(body, before, after)) == body


def test_extraction_is_stable_for_marker_free_body():
    once = extract_plan(_wrap("Drink water", "intro ", " outro"))
    assert extract_plan(once) == once


# ── fallback to raw text ─────────────────────────────────────────────
@pytest.mark.parametrize(
    "raw",
    [
        "Plain text with no tags",
        "",
        f"{START_TAG}unterminated plan",
        f"dangling close{END_TAG}",
    ],
)
def test_missing_marker_returns_raw(raw):
    assert extract_plan(raw) == raw


def test_end_marker_before_start_marker_returns_raw():
    raw = f"{END_TAG}oops{START_TAG}"
    assert extract_plan(raw) == raw
