"""Pure task extraction from email-like text - no I/O dependencies."""

import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import Callable

from .dates import normalize
from .priority import MEDIUM, classify_priority

logger = logging.getLogger(__name__)


@dataclass
class CandidateTask:
    """An unconfirmed task found in free text."""

    text: str
    priority: str = MEDIUM
    estimated_hours: float = 0.0
    deadline: str = ""
    source_line: int = 0


@dataclass(frozen=True)
class ExtractionRule:
    """A (matcher, extractor) pair. `min_length` is the shortest text it may emit."""

    name: str
    pattern: re.Pattern
    extract: Callable[[re.Match, str], str]
    min_length: int

    def apply(self, line: str) -> str | None:
        """Extracted text for a matching line, or None if the rule doesn't match."""
        match = self.pattern.search(line)
        if not match:
            return None
        return self.extract(match, line).strip()


def _captured_or_stripped(match: re.Match, line: str) -> str:
    if match.lastindex:
        return match.group(1)
    return line[: match.start()] + line[match.end() :]


# Optional list marker in front of a label ("- TODO: ...", "1. 確認: ...")
_LIST_PREFIX = r"^(?:[-*•]\s*|\d+[.)]\s*)?"
# Mid-line labels ("本日の作業: ...") must not sit inside an English word
_MID_LINE = r"(?<![A-Za-z])"
_SEP_COLON = r"\s*[:：]\s*"
_SEP_ANY = r"(?:\s*[:：]\s*|\s+)"

# (label regex, separator at line start) in match order. English prose labels
# need a colon, and any label further into the line needs one too.
KEYWORD_LABELS: tuple[tuple[str, str], ...] = (
    ("TODO", _SEP_ANY),
    ("To Do", _SEP_COLON),
    ("To-Do", _SEP_ANY),
    ("Action Items?", _SEP_COLON),
    ("Tasks?", _SEP_COLON),
    ("Confirm", _SEP_COLON),
    ("Prepare", _SEP_COLON),
    ("Review", _SEP_COLON),
    ("タスク", _SEP_ANY),
    ("やること", _SEP_ANY),
    ("作業", _SEP_ANY),
    ("確認", _SEP_ANY),
    ("要対応", _SEP_ANY),
    ("対応", _SEP_ANY),
    ("検討", _SEP_ANY),
    ("準備", _SEP_ANY),
    ("緊急", _SEP_ANY),
    ("至急", _SEP_ANY),
)

_BRACKET_TAG = r"^[【\[]\s*(?:TODO|To-?Do|要対応|Action)\s*[】\]]\s*"

LABEL_RULES: tuple[ExtractionRule, ...] = tuple(
    ExtractionRule(
        name=label,
        pattern=re.compile(
            r"(?:" + _LIST_PREFIX + label + sep + r"|" + _MID_LINE + label + _SEP_COLON + r")(.+)$",
            re.IGNORECASE,
        ),
        extract=_captured_or_stripped,
        min_length=3,
    )
    for label, sep in KEYWORD_LABELS
) + (
    ExtractionRule(
        name="bracket-tag",
        pattern=re.compile(_BRACKET_TAG, re.IGNORECASE),
        extract=_captured_or_stripped,
        min_length=3,
    ),
)

MARKER_RULES: tuple[ExtractionRule, ...] = (
    ExtractionRule(
        name="bullet",
        pattern=re.compile(r"^[-*•]\s*(.+)$"),
        extract=_captured_or_stripped,
        min_length=4,
    ),
    ExtractionRule(
        name="numbered",
        pattern=re.compile(r"^\d+[.)]\s*(.+)$"),
        extract=_captured_or_stripped,
        min_length=4,
    ),
)

_LABEL_MARKER_RE = re.compile(
    r"^[【\[]?\s*(?:"
    + "|".join(label for label, _ in KEYWORD_LABELS)
    + r"|期限|締切|締め切り|〆切|deadline|due)\s*[】\]:：]",
    re.IGNORECASE,
)

_NUMBER = r"(\d+(?:\.\d+)?)"

DURATION_PATTERNS: tuple[re.Pattern, ...] = (
    re.compile(_NUMBER + r"\s*時間"),
    re.compile(_NUMBER + r"\s*(?:hours?|hrs?)(?![a-z])", re.IGNORECASE),
    re.compile(_NUMBER + r"\s*h(?![a-z])", re.IGNORECASE),
)


@dataclass(frozen=True)
class DeadlinePattern:
    """A deadline label notation. Groups: (year or None, month, day)."""

    name: str
    pattern: re.Pattern


_DEADLINE_WORDS = "期限|締切|締め切り|〆切"

DEADLINE_PATTERNS: tuple[DeadlinePattern, ...] = (
    DeadlinePattern(
        name="kanji",
        pattern=re.compile(
            r"(?:" + _DEADLINE_WORDS + r")"
            r"\s*[:：]?\s*(?:(\d{4})\s*年\s*)?(\d{1,2})\s*月\s*(\d{1,2})\s*日"
        ),
    ),
    DeadlinePattern(
        name="numeric",
        pattern=re.compile(
            r"(?:" + _DEADLINE_WORDS + r"|\b(?:deadline|due))"
            r"\s*[:：]?\s*(?:(\d{4})[-/])?(\d{1,2})[-/](\d{1,2})(?!\d)",
            re.IGNORECASE,
        ),
    ),
)


def _scan_deadline(text: str, as_of: date) -> str | None:
    """
    First deadline-label match in DEADLINE_PATTERNS order.

    Returns the normalized date ("" if the match is not a real date), or None
    when no pattern matches.
    """
    for deadline in DEADLINE_PATTERNS:
        match = deadline.pattern.search(text)
        if match:
            year, month, day = match.groups()
            raw = f"{year or as_of.year}-{month}-{day}"
            return normalize(raw, as_of)
    return None


def find_global_deadline(text: str, as_of: date | None = None) -> str | None:
    """The single deadline that applies to candidates without their own."""
    as_of = as_of or date.today()
    return _scan_deadline(text or "", as_of) or None


def extract_hours(line: str) -> float:
    """First duration on the line (N時間, N hours, Nh), 0 if none."""
    for pattern in DURATION_PATTERNS:
        match = pattern.search(line)
        if match:
            return float(match.group(1))
    return 0.0


def starts_with_label(text: str) -> bool:
    """True if text opens with a keyword or deadline label marker."""
    return bool(_LABEL_MARKER_RE.match(text.strip()))


def extract_candidates(
    subject: str | None,
    body: str | None,
    as_of: date | None = None,
) -> list[CandidateTask]:
    """
    Scan a subject/body pair for task candidates.

    The subject becomes a candidate on its own unless it opens with a label.
    Every line is then tested against LABEL_RULES (first match only), then
    each of MARKER_RULES independently, so one line can yield several
    candidates. Output is in discovery order and may contain duplicates.

    Pure function - no I/O.
    """
    as_of = as_of or date.today()
    subject = (subject or "").strip()
    body = body or ""
    full_text = f"{subject}\n{body}"

    global_deadline = find_global_deadline(full_text, as_of)
    candidates: list[CandidateTask] = []

    if subject and len(subject) > 2 and not starts_with_label(subject):
        candidates.append(
            CandidateTask(
                text=subject,
                priority=MEDIUM,
                estimated_hours=0.0,
                deadline=global_deadline or "",
                source_line=0,
            )
        )

    lines = full_text.split("\n")
    for index, raw_line in enumerate(lines, start=1):
        line = raw_line.strip()
        if not line:
            continue

        texts = []
        for rule in LABEL_RULES:
            text = rule.apply(line)
            if text is None:
                continue
            if len(text) >= rule.min_length:
                texts.append(text)
            break

        for rule in MARKER_RULES:
            text = rule.apply(line)
            if text is not None and len(text) >= rule.min_length:
                texts.append(text)

        if not texts:
            continue

        priority = classify_priority(line)
        hours = extract_hours(line)
        deadline = _scan_deadline(line, as_of) or global_deadline or ""
        for text in texts:
            candidates.append(
                CandidateTask(
                    text=text,
                    priority=priority,
                    estimated_hours=hours,
                    deadline=deadline,
                    source_line=index,
                )
            )

    logger.debug(f"Extracted {len(candidates)} raw candidates from {len(lines)} lines")
    return candidates
