"""Candidate deduplication - no I/O dependencies."""

from .extraction import CandidateTask


def dedupe_key(text: str) -> str:
    return text.strip().lower()


def dedupe_candidates(candidates: list[CandidateTask]) -> list[CandidateTask]:
    """
    Keep the first candidate for each normalized text.

    Keys of 2 characters or fewer are dropped. Order-preserving.
    """
    seen: set[str] = set()
    unique = []
    for candidate in candidates:
        key = dedupe_key(candidate.text)
        if len(key) <= 2 or key in seen:
            continue
        seen.add(key)
        unique.append(candidate)
    return unique
