"""
Test cases for keyword crisis detection
"""
from apps.chat.config import DEFAULT_CRISIS_KEYWORDS
from apps.chat.services import CrisisDetector


class TestCrisisDetector:
    """Test cases for CrisisDetector.detect"""

    def test_detects_keyword_case_insensitively(self, detector):
        """Upper-case text still matches lower-case keywords"""
        result = detector.detect("Sometimes I think I WANT TO DIE")

        assert result.is_crisis is True
        assert result.risk_level == "high"
        assert result.matched_keyword == "want to die"
        assert result.safety_message == detector.safety_message

    def test_keyword_inside_longer_text(self, detector):
        result = detector.detect("honestly everyone would be better off dead without me around")

        assert result.is_crisis is True
        assert result.matched_keyword == "better off dead"

    def test_plain_text_is_not_a_crisis(self, detector):
        result = detector.detect("I had a stressful day at work")

        assert result.is_crisis is False
        assert result.risk_level == "none"
        assert result.matched_keyword is None
        assert result.safety_message is None

    def test_empty_and_blank_text(self, detector):
        """Empty input is never a crisis"""
        assert detector.detect("").is_crisis is False
        assert detector.detect("   ").is_crisis is False
        assert detector.detect(None).is_crisis is False

    def test_first_listed_keyword_wins(self, detector):
        """List order decides, not position in the text"""
        text = "I want to die, I keep thinking about suicide"

        result = detector.detect(text)

        assert DEFAULT_CRISIS_KEYWORDS.index("suicide") < DEFAULT_CRISIS_KEYWORDS.index("want to die")
        assert result.matched_keyword == "suicide"

    def test_custom_keyword_list(self):
        detector = CrisisDetector(["Give Up", "", "  "], "  Call someone you trust.  ")

        result = detector.detect("I just want to give up")

        assert detector.keywords == ("give up",)
        assert result.matched_keyword == "give up"
        assert result.safety_message == "Call someone you trust."

    def test_detection_is_deterministic(self, detector):
        first = detector.detect("I want to hurt myself")
        second = detector.detect("I want to hurt myself")

        assert first == second
