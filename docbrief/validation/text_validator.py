"""Heuristic checks run on extracted text before it is sent for analysis.

Checks run in order: length, readability, language, contract-likeness. The
first three are hard errors and short-circuit the chain; the last is a soft
warning. Character and keyword counts are always reported.
"""

import re

from docbrief.validation.models import (
    TextValidationError,
    TextValidationWarning,
    ValidationResult,
)

MIN_TEXT_LENGTH = 300

MIN_READABLE_RATIO = 0.85
MAX_BINARY_RATIO = 0.05

MIN_ENGLISH_TOKENS = 40
MIN_ENGLISH_RATIO = 0.04
COMMON_ENGLISH_WORDS = frozenset({
    "the", "and", "is", "in", "to", "of", "a", "for", "with", "that",
    "this", "be", "are", "or", "an", "will", "as", "by", "not", "from",
    "have", "has", "been", "may", "any", "all", "such", "shall", "under",
})

CONTRACT_KEYWORDS = (
    "agreement",
    "party",
    "parties",
    "terms",
    "payment",
    "termination",
    "obligations",
    "whereas",
    "hereby",
    "shall",
    "covenant",
    "indemnify",
    "liability",
    "confidential",
    "effective date",
)
MIN_CONTRACT_KEYWORDS = 2

_NON_LETTER = re.compile(r"[^a-z\s]")
_WHITESPACE = re.compile(r"\s+")


def validate_text_length(text: str) -> bool:
    return len(text.strip()) >= MIN_TEXT_LENGTH


def _is_printable(code: int) -> bool:
    return (
        32 <= code <= 126
        or 160 <= code <= 255
        or 8192 <= code <= 8303
        or code in (9, 10, 13)
    )


def is_readable_text(text: str) -> bool:
    """Return True if the text looks human-readable rather than binary junk.

    Printable: ASCII 32-126, Latin-1 supplement, the General Punctuation block,
    tab, newline and carriage return. Binary: any other code point below 32.
    Everything else (e.g. CJK, emoji) counts as neither.
    """
    if not text:
        return False

    printable_count = 0
    binary_count = 0
    for char in text:
        code = ord(char)
        if _is_printable(code):
            printable_count += 1
        elif code < 32:
            binary_count += 1

    total = len(text)
    return (
        printable_count / total >= MIN_READABLE_RATIO
        and binary_count / total <= MAX_BINARY_RATIO
    )


def _tokenize(text: str) -> list[str]:
    normalized = _NON_LETTER.sub(" ", text.lower())
    normalized = _WHITESPACE.sub(" ", normalized).strip()
    return [token for token in normalized.split(" ") if token]


def is_english(text: str) -> bool:
    """Frequency check of common English function words.

    Names and dates dominate some offer letters, so the ratio threshold is
    tolerant; the minimum token count keeps tiny or garbled outputs out.
    """
    tokens = _tokenize(text)
    if len(tokens) < MIN_ENGLISH_TOKENS:
        return False
    english_count = sum(1 for token in tokens if token in COMMON_ENGLISH_WORDS)
    return english_count / len(tokens) >= MIN_ENGLISH_RATIO


def get_contract_keyword_count(text: str) -> int:
    """Number of distinct contract keywords present (presence, not frequency)."""
    lower_text = text.lower()
    return sum(1 for keyword in CONTRACT_KEYWORDS if keyword in lower_text)


def is_contract_like(text: str) -> bool:
    return get_contract_keyword_count(text) >= MIN_CONTRACT_KEYWORDS


def validate_extracted_text(text: str, *, check_contract_keywords: bool = True) -> ValidationResult:
    """Run all text validation checks and return a single verdict.

    With ``check_contract_keywords`` off, the contract-likeness warning is
    skipped; the keyword count is still reported.
    """
    character_count = len(text.strip())
    keyword_count = get_contract_keyword_count(text)
    readable = is_readable_text(text)

    def verdict(
        error: TextValidationError | None,
        warning: TextValidationWarning | None = None,
    ) -> ValidationResult:
        return ValidationResult(
            error=error,
            warning=warning,
            character_count=character_count,
            keyword_count=keyword_count,
            is_readable=readable,
        )

    if not validate_text_length(text):
        return verdict(TextValidationError.INSUFFICIENT_TEXT)

    if not readable:
        return verdict(TextValidationError.UNREADABLE_TEXT)

    if not is_english(text):
        return verdict(TextValidationError.NON_ENGLISH)

    if check_contract_keywords and keyword_count < MIN_CONTRACT_KEYWORDS:
        return verdict(None, TextValidationWarning.NOT_CONTRACT_LIKE)

    return verdict(None)
