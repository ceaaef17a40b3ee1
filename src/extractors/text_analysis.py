# src/extractors/text_analysis.py — v1
"""Lightweight text heuristics used by deep section payloads.

Keyword frequency, call-to-action and contact detection, sentiment,
readability and duration parsing. Deterministic and dependency-free.
"""

from __future__ import annotations

import re
from collections import Counter

STOPWORDS: frozenset[str] = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
    "of", "with", "by", "from", "as", "is", "was", "are", "were", "be",
    "been", "being", "have", "has", "had", "do", "does", "did", "will",
    "would", "could", "should", "may", "might", "can", "this", "that",
    "these", "those", "i", "you", "he", "she", "it", "we", "they", "my",
    "your", "our", "their", "me", "us", "them", "who", "what", "which",
    "when", "where", "why", "how", "all", "each", "more", "most", "other",
    "some", "such", "than", "too", "very", "just", "also", "into", "about",
})

_CALL_TO_ACTION = tuple(re.compile(p, re.IGNORECASE) for p in (
    r"contact\s+me",
    r"reach\s+out",
    r"get\s+in\s+touch",
    r"let'?s\s+connect",
    r"feel\s+free\s+to",
    r"don'?t\s+hesitate",
    r"available\s+for",
    r"looking\s+for",
    r"open\s+to",
))

_CONTACT = tuple(re.compile(p) for p in (
    r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b",
    r"\b\d{3}[-.]?\d{3}[-.]?\d{4}\b",
    r"\bwww\.[a-zA-Z0-9-]+\.[a-zA-Z]{2,}\b",
    r"https?://\S+",
))

_POSITIVE = ("passionate", "expert", "leader", "innovative", "experienced",
             "driven", "award", "proven", "successful")
_NEGATIVE = ("seeking", "looking", "unemployed", "former", "unfortunately")

_QUANTIFIED = re.compile(r"\d+\s*(%|percent|x\b|k\b|m\b|million|billion)|\$\s*\d", re.IGNORECASE)

_YEARS = re.compile(r"(\d+)\s*(?:yrs?|years?)\b", re.IGNORECASE)
_MONTHS = re.compile(r"(\d+)\s*(?:mos?|months?)\b", re.IGNORECASE)
_YEAR_RANGE = re.compile(r"((?:19|20)\d{2})\s*[-–—]\s*((?:19|20)\d{2}|Present)", re.IGNORECASE)

EMPLOYMENT_TYPES = (
    "Full-time", "Part-time", "Self-employed", "Freelance", "Contract",
    "Internship", "Apprenticeship", "Seasonal",
)


def words(text: str) -> list[str]:
    return re.findall(r"[A-Za-z][A-Za-z+#.'-]*", text)


def word_count(text: str) -> int:
    return len(text.split())


def extract_keywords(text: str, limit: int = 10) -> list[str]:
    """Most frequent non-stopword terms, ties broken by first appearance."""
    counter: Counter[str] = Counter()
    first_seen: dict[str, int] = {}
    for index, word in enumerate(words(text.lower())):
        word = word.strip(".'-")
        if len(word) <= 2 or word in STOPWORDS:
            continue
        counter[word] += 1
        first_seen.setdefault(word, index)
    ranked = sorted(counter, key=lambda w: (-counter[w], first_seen[w]))
    return ranked[:limit]


def has_call_to_action(text: str) -> bool:
    return any(p.search(text) for p in _CALL_TO_ACTION)


def has_contact_info(text: str) -> bool:
    return any(p.search(text) for p in _CONTACT)


def has_quantified_achievement(text: str) -> bool:
    return bool(_QUANTIFIED.search(text))


def sentiment(text: str) -> str:
    """positive / negative / neutral from a small lexicon."""
    lower = text.lower()
    score = sum(w in lower for w in _POSITIVE) - sum(w in lower for w in _NEGATIVE)
    if score > 0:
        return "positive"
    if score < 0:
        return "negative"
    return "neutral"


def readability(text: str) -> float:
    """Simplified Flesch reading ease, clamped to 0-100."""
    sentences = len([s for s in re.split(r"[.!?]+", text) if s.strip()]) or 1
    tokens = text.split()
    n_words = len(tokens) or 1
    syllables = sum(_syllables(t) for t in tokens) or 1
    score = 206.835 - 1.015 * (n_words / sentences) - 84.6 * (syllables / n_words)
    return round(max(0.0, min(100.0, score)), 1)


def _syllables(token: str) -> int:
    groups = re.findall(r"[aeiouy]+", token.lower())
    return max(1, len(groups))


def split_paragraphs(text: str) -> list[str]:
    return [p.strip() for p in re.split(r"\n\s*\n|\n", text) if p.strip()]


def chunk_text(text: str, size: int = 1000) -> list[str]:
    """Split on word boundaries into chunks of at most ``size`` characters."""
    if size <= 0:
        raise ValueError("size must be > 0")
    chunks: list[str] = []
    current = ""
    for token in text.split():
        candidate = f"{current} {token}" if current else token
        if len(candidate) <= size:
            current = candidate
            continue
        if current:
            chunks.append(current)
        while len(token) > size:
            chunks.append(token[:size])
            token = token[size:]
        current = token
    if current:
        chunks.append(current)
    return chunks


def parse_duration_months(text: str) -> int:
    """Months in a duration string such as '2 yrs 3 mos'."""
    months = 0
    year = _YEARS.search(text)
    if year:
        months += int(year.group(1)) * 12
    month = _MONTHS.search(text)
    if month:
        months += int(month.group(1))
    return months


def parse_year_range(text: str) -> tuple[int | None, int | None, bool]:
    """(start_year, end_year, is_current) from text like '2018 - 2022' or '2020 - Present'."""
    match = _YEAR_RANGE.search(text)
    if not match:
        return None, None, False
    start = int(match.group(1))
    if match.group(2).lower() == "present":
        return start, None, True
    return start, int(match.group(2)), False


def employment_type(text: str) -> str | None:
    lower = text.lower()
    for kind in EMPLOYMENT_TYPES:
        if kind.lower() in lower:
            return kind
    return None
