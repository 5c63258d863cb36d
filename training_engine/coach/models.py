"""Coaching insight models."""

from dataclasses import dataclass
from enum import StrEnum


class InsightKind(StrEnum):
    DANGER = "danger"
    WARNING = "warning"
    POSITIVE = "positive"
    INFO = "info"


@dataclass(frozen=True)
class Insight:
    """One rule-based coaching insight.

    Attributes:
        kind: Severity
        icon: Icon identifier
        title_key: Title label key
        desc_key: Description label key
        priority: 1 (most urgent) to 5 (least urgent)
        meta: Free text carried with the insight (e.g. the niggle)
    """

    kind: InsightKind
    icon: str
    title_key: str
    desc_key: str
    priority: int
    meta: str | None = None
