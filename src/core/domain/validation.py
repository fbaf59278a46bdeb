"""Email validation rule.

Pure and deterministic: the CLI runs it before any network call and the
subscription service runs it again, so both call sites share this function.
"""

from __future__ import annotations

import re

from core.domain.models import (
    EMAIL_REQUIRED_MESSAGE,
    INVALID_EMAIL_MESSAGE,
    ValidationResult,
)

# local-part "@" labels "." tld; no whitespace, no leading/double dots.
_EMAIL_RE = re.compile(
    r"^(?!\.)(?!.*\.\.)[A-Z0-9_'+\-.]*[A-Z0-9_+\-]"
    r"@(?:[A-Z0-9][A-Z0-9\-]*\.)+[A-Z]{2,}$",
    re.IGNORECASE | re.ASCII,
)


def validate_email(candidate: str) -> ValidationResult:
    """Check `candidate` and return it unchanged when it looks like an email."""

    if not candidate or not candidate.strip():
        return ValidationResult.reject(EMAIL_REQUIRED_MESSAGE)
    if _EMAIL_RE.fullmatch(candidate) is None:
        return ValidationResult.reject(INVALID_EMAIL_MESSAGE)
    return ValidationResult.accept(candidate)
