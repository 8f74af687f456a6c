# core/plan_parser.py
"""
Pull the plan body out of the text returned by `generateWeightLossPlan`.

The function wraps its answer in

    <weight_loss_plan> ... </weight_loss_plan>

but may also return plain prose.  Extraction never fails: anything that
does not look like a well-formed wrapper comes back untouched.
"""
from __future__ import annotations

START_TAG = "<weight_loss_plan>"
END_TAG = "</weight_loss_plan>"


def extract_plan(raw: str) -> str:
    start = raw.find(START_TAG)
    end = raw.find(END_TAG)
    if start == -1 or end == -1:
        return raw

    body_start = start + len(START_TAG)
    # end tag before (or inside) the start tag -> treat as untagged
    if body_start > end:
        return raw
    return raw[body_start:end]
