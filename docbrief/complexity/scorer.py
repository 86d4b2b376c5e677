"""Coarse difficulty label for a document. Informational only, never gates processing."""

import re
from dataclasses import dataclass
from enum import Enum


class ComplexityLevel(str, Enum):
    SIMPLE = "Simple"
    MODERATE = "Moderate"
    COMPLEX = "Complex"


COMPLEX_TERMS = (
    "indemnify",
    "indemnification",
    "liability",
    "arbitration",
    "jurisdiction",
    "notwithstanding",
    "hereinafter",
    "whereas",
    "pursuant",
    "heretofore",
    "covenant",
    "warranty",
    "warranties",
    "representations",
    "severability",
    "confidentiality",
    "non-compete",
    "non-disclosure",
    "intellectual property",
    "force majeure",
    "liquidated damages",
    "consequential damages",
    "governing law",
    "assigns",
    "waiver",
    "amendment",
)

_SENTENCE_SPLIT = re.compile(r"[.!?]+")
_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")


@dataclass(frozen=True)
class ComplexityFactors:
    word_count: int
    sentence_count: int
    avg_sentence_length: float
    complex_terms_count: int
    section_count: int

    @property
    def terms_density(self) -> float:
        """Complex terms per 100 words."""
        if self.word_count == 0:
            return 0.0
        return self.complex_terms_count / (self.word_count / 100)


def analyze_factors(text: str) -> ComplexityFactors:
    words = text.split()
    sentences = [s for s in _SENTENCE_SPLIT.split(text) if s.strip()]
    section_count = len(_PARAGRAPH_BREAK.findall(text)) + 1

    lower_text = text.lower()
    complex_terms_count = sum(lower_text.count(term) for term in COMPLEX_TERMS)

    return ComplexityFactors(
        word_count=len(words),
        sentence_count=len(sentences),
        avg_sentence_length=len(words) / len(sentences) if sentences else 0.0,
        complex_terms_count=complex_terms_count,
        section_count=section_count,
    )


def score_factors(factors: ComplexityFactors) -> int:
    score = 0

    if factors.word_count > 3000:
        score += 3
    elif factors.word_count > 1500:
        score += 2
    elif factors.word_count > 500:
        score += 1

    if factors.avg_sentence_length > 30:
        score += 2
    elif factors.avg_sentence_length > 20:
        score += 1

    density = factors.terms_density
    if density > 2:
        score += 3
    elif density > 1:
        score += 2
    elif density > 0.5:
        score += 1

    if factors.section_count > 10:
        score += 2
    elif factors.section_count > 5:
        score += 1

    return score


def analyze_complexity(text: str) -> ComplexityLevel:
    if not text or not text.strip():
        return ComplexityLevel.SIMPLE

    score = score_factors(analyze_factors(text))
    if score >= 6:
        return ComplexityLevel.COMPLEX
    if score >= 3:
        return ComplexityLevel.MODERATE
    return ComplexityLevel.SIMPLE
