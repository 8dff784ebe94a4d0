"""
Intent Classifier

Routes a message by plain substring tests on the lowercased text. The
rules are checked in table order and the first match wins, so a message
that mentions both devices and job status is a device query.
"""

from __future__ import annotations

from .models import Intent

GATE_KEYWORD = "qbraid"

# (intent, keyword groups); every group needs at least one hit
INTENT_RULES: tuple[tuple[Intent, tuple[tuple[str, ...], ...]], ...] = (
    (
        Intent.DEVICE_QUERY,
        (("devices", "simulators", "qpus"), ("online", "available")),
    ),
    (
        Intent.JOB_QUERY,
        (("job",), ("status",)),
    ),
)


def _matches(text: str, groups: tuple[tuple[str, ...], ...]) -> bool:
    return all(any(word in text for word in group) for group in groups)


def classify(text: str) -> Intent:
    """Classify a message as a device query, job query, or free-form chat."""
    lowered = (text or "").lower()
    if GATE_KEYWORD not in lowered:
        return Intent.FREEFORM_CHAT

    for intent, groups in INTENT_RULES:
        if _matches(lowered, groups):
            return intent
    return Intent.FREEFORM_CHAT
