"""
Onboarding Validation - Per-field predicates and step diagnostics.

Validation never raises. Bad input just fails the predicate and keeps the
user on the current step.
"""

import re
import unicodedata
from typing import Any

import regex

from .artists import MAX_SELECTED_ARTISTS
from .steps import OnboardingStep


EMAIL_PATTERN = re.compile(r"[A-Z0-9a-z._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,64}")

# Digits with an optional sign; no whitespace, no underscores
AGE_PATTERN = re.compile(r"[+-]?[0-9]+")

# Parsed ages must fit a signed 64-bit integer
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1
MAX_AGE_DIGITS = 19

GRAPHEME_PATTERN = regex.compile(r"\X")

MIN_PASSWORD_LENGTH = 8
MIN_AGE = 13
MAX_AGE = 120


def text_length(text: str) -> int:
    """Number of user-perceived characters (extended grapheme clusters)."""
    return len(GRAPHEME_PATTERN.findall(text))


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.fullmatch(email) is not None


def is_valid_password(password: str) -> bool:
    return text_length(password) >= MIN_PASSWORD_LENGTH


def parse_age(age: str) -> int | None:
    """Parse the raw age field, or None when it is not a plain integer."""
    if not AGE_PATTERN.fullmatch(age):
        return None
    digits = age.lstrip("+-").lstrip("0") or "0"
    if len(digits) > MAX_AGE_DIGITS:
        return None
    value = -int(digits) if age.startswith("-") else int(digits)
    if not INT64_MIN <= value <= INT64_MAX:
        return None
    return value


def is_valid_age(age: str) -> bool:
    value = parse_age(age)
    if value is None:
        return False
    return MIN_AGE <= value <= MAX_AGE


def is_valid_name(name: str) -> bool:
    return bool(name.strip())


def has_special_chars(text: str) -> bool:
    """True if the text contains any Unicode punctuation character."""
    return any(unicodedata.category(ch).startswith("P") for ch in text)


def can_complete_step(
    step: OnboardingStep,
    *,
    email: str = "",
    password: str = "",
    age: str = "",
    name: str = "",
    selected_artists: list[str] | None = None,
) -> bool:
    """Check whether the given field values satisfy a step's rule."""
    if step == OnboardingStep.EMAIL:
        return is_valid_email(email)
    if step == OnboardingStep.PASSWORD:
        return is_valid_password(password)
    if step == OnboardingStep.AGE:
        return is_valid_age(age)
    if step == OnboardingStep.NAME:
        return is_valid_name(name)
    if step == OnboardingStep.ARTISTS:
        return len(selected_artists or []) == MAX_SELECTED_ARTISTS
    return False


def step_data(
    step: OnboardingStep,
    *,
    email: str = "",
    password: str = "",
    age: str = "",
    name: str = "",
    selected_artists: list[str] | None = None,
) -> dict[str, Any]:
    """
    Diagnostic payload attached to a step-completed event.

    Only lengths and flags for sensitive fields; the raw age is kept as typed.
    """
    if step == OnboardingStep.EMAIL:
        return {"email_length": text_length(email)}
    if step == OnboardingStep.PASSWORD:
        return {
            "password_length": text_length(password),
            "has_special_chars": has_special_chars(password),
        }
    if step == OnboardingStep.AGE:
        return {"age": age}
    if step == OnboardingStep.NAME:
        return {"name_length": text_length(name)}
    if step == OnboardingStep.ARTISTS:
        return {"selected_count": len(selected_artists or [])}
    return {}
