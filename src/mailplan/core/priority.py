"""Keyword-based priority classification - no I/O dependencies."""

HIGH = "high"
MEDIUM = "medium"
LOW = "low"

PRIORITIES = (HIGH, MEDIUM, LOW)

# Checked in order; the first level with a keyword hit wins.
PRIORITY_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    (HIGH, ("緊急", "急ぎ", "重要", "優先", "至急", "urgent", "important", "asap")),
    (MEDIUM, ("中程度", "普通", "medium", "moderate")),
    (LOW, ("低", "ゆっくり", "low", "later")),
)

PRIORITY_RANK = {HIGH: 3, MEDIUM: 2, LOW: 1}

PRIORITY_LABELS = {HIGH: "高", MEDIUM: "中", LOW: "低"}


def classify_priority(line: str) -> str:
    """
    Map a line of text to a priority level.

    Case-insensitive substring match against PRIORITY_KEYWORDS, checked
    high -> medium -> low. Defaults to medium.
    """
    lowered = (line or "").lower()
    for priority, keywords in PRIORITY_KEYWORDS:
        for keyword in keywords:
            if keyword.lower() in lowered:
                return priority
    return MEDIUM


def priority_rank(priority: str | None) -> int:
    """Sort rank for a priority; unknown values rank as medium."""
    return PRIORITY_RANK.get(priority or "", PRIORITY_RANK[MEDIUM])


def priority_label(priority: str | None) -> str:
    return PRIORITY_LABELS.get(priority or "", PRIORITY_LABELS[MEDIUM])
