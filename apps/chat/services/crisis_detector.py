"""
Keyword-based crisis detection.

A deterministic stand-in for a future risk classifier: any replacement only
has to return the same CrisisAssessment shape from ``detect``.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple


@dataclass(frozen=True)
class CrisisAssessment:
    is_crisis: bool
    risk_level: str
    matched_keyword: Optional[str] = None
    safety_message: Optional[str] = None


NO_RISK = CrisisAssessment(is_crisis=False, risk_level="none")


class CrisisDetector:
    """Scans message text for risk phrases.

    The keyword list is ordered: when several phrases occur, the one listed
    first wins, regardless of where each appears in the text.
    """

    def __init__(self, keywords: Sequence[str], safety_message: str):
        self.keywords: Tuple[str, ...] = tuple(k.lower() for k in keywords if k and k.strip())
        self.safety_message = safety_message.strip()

    def detect(self, text: Optional[str]) -> CrisisAssessment:
        if not text or not text.strip():
            return NO_RISK

        normalized = text.lower()
        for keyword in self.keywords:
            if keyword in normalized:
                return CrisisAssessment(
                    is_crisis=True,
                    risk_level="high",
                    matched_keyword=keyword,
                    safety_message=self.safety_message,
                )

        return NO_RISK
