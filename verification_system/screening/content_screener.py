"""Content screening run by callers before handing text to the orchestrator.

The orchestrator assumes pre-validated input. Web handlers and chat commands
use this module to reject hostile or oversized input, normalize what is left,
and attach a quick rule-based risk estimate to their replies.

Risk scoring (keyword points, then extra signals):
| Signal                         | Points |
|--------------------------------|--------|
| High-risk phrase               | 3 each |
| Medium-risk phrase             | 2 each |
| Low-risk phrase                | 1 each |
| More than two URLs             | 2      |
| Urgency wording                | 2      |
| Money mentions                 | 1      |
| Shouting / !!! / emoji floods  | 1      |

Score >= 8 CRITICAL, >= 5 HIGH, >= 3 MEDIUM, >= 1 LOW, else MINIMAL.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from loguru import logger
from yarl import URL

from verification_system.config.settings import settings
from verification_system.data_management.schemas import RiskLevel, utc_now

# Markup, injection and traversal shapes that are never legitimate in a claim
HOSTILE_PATTERNS = [
    r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>",
    r"javascript:",
    r"\bon\w+\s*=",
    r"\b(select|insert|update|delete|drop|union|alter)\b\s+.*\b(from|into|table|set|select)\b",
    r"'\s*or\s*'[^']*'\s*=\s*'",
    r"\bor\b\s+1\s*=\s*1\b",
    r"\$\(|`|&&|\|\|",
    r"\.\./",
    r"[!@#$%^&*()_+=\[\]{}|\\:\";'<>?,./~`]{10,}",
]

MALICIOUS_DOMAINS = [
    "bit.ly/malicious",
    "tinyurl.com/scam",
    "suspicious-domain.fake",
    "phishing-site.com",
    "malware-host.net",
]

RISK_KEYWORDS = {
    "high": [
        "click here to claim",
        "urgent action required",
        "your account will be closed",
        "verify your password",
        "suspicious activity detected",
        "claim your prize now",
        "limited time offer",
        "act now or lose",
        "wire transfer",
        "bitcoin payment",
        "cryptocurrency required",
    ],
    "medium": [
        "exclusive offer",
        "make money fast",
        "work from home",
        "guaranteed profit",
        "no experience needed",
        "easy money",
        "secret method",
        "insider information",
    ],
    "low": [
        "special discount",
        "limited availability",
        "popular product",
        "recommended by experts",
    ],
}

KEYWORD_POINTS = {"high": 3, "medium": 2, "low": 1}

URGENCY_WORDS = [
    "urgent", "immediately", "asap", "right now", "expires today",
    "limited time", "act fast", "hurry", "don't wait", "emergency",
]

MONEY_PATTERNS = [
    r"\$[0-9,]+",
    r"[0-9,]+\s*(dollars?|euros?|pounds?|bitcoin|btc|crypto)",
    r"(free\s*money|cash\s*prize|win\s*money|lottery)",
]

SUSPICIOUS_URL_PATTERNS = [
    r"bit\.ly/[a-zA-Z0-9]{6,}",
    r"tinyurl\.com/[a-zA-Z0-9]{6,}",
    r"[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}",
    r"[a-zA-Z0-9]+-[a-zA-Z0-9]+-[a-zA-Z0-9]+\.(tk|ml|ga|cf)\b",
]

URL_PATTERN = re.compile(r"https?://[^\s]+", re.IGNORECASE)

EMOJI_PATTERN = re.compile(
    "[\U0001F600-\U0001F64F\U0001F300-\U0001F5FF\U0001F680-\U0001F6FF"
    "\U0001F1E0-\U0001F1FF☀-⛿✀-➿]"
)

FLAG_MULTIPLE_URLS = "Multiple URLs detected"
FLAG_URGENCY = "Urgency indicators present"
FLAG_MONEY = "Financial content detected"
FLAG_FORMATTING = "Suspicious formatting patterns"
FLAG_HOSTILE = "Potentially malicious pattern detected"


@dataclass
class UrlCheck:
    """Outcome of validate_url."""

    valid: bool
    suspicious: bool = False
    reason: Optional[str] = None


@dataclass
class ScreeningReport:
    """Everything the screener noticed about one piece of content."""

    content_length: int
    risk_level: Optional[RiskLevel]
    is_valid: bool
    flags: List[str] = field(default_factory=list)
    timestamp: datetime = field(default_factory=utc_now)


class ContentScreener:
    """
    Rule-based validation, normalization and risk estimation for raw input.

    Usage:
        screener = ContentScreener()
        if screener.validate_content(text):
            outcome = await orchestrator.verify(screener.prepare_content(text), user_id)
    """

    def __init__(
        self,
        max_content_length: Optional[int] = None,
        prepared_length: Optional[int] = None,
    ):
        """
        Initialize the screener.

        Args:
            max_content_length: Longest accepted content (settings default)
            prepared_length: Length cap applied by prepare_content/sanitize_input
        """
        self.max_content_length = max_content_length or settings.max_content_length
        self.prepared_length = prepared_length or settings.prepared_content_length
        self.hostile_patterns = [re.compile(p, re.IGNORECASE) for p in HOSTILE_PATTERNS]
        self.money_patterns = [re.compile(p, re.IGNORECASE) for p in MONEY_PATTERNS]
        self.suspicious_url_patterns = [re.compile(p) for p in SUSPICIOUS_URL_PATTERNS]
        self._logger = logger.bind(component="ContentScreener")

    def validate_content(self, content: object) -> bool:
        """False for non-strings, empty or oversized text, hostile patterns and known bad domains."""
        if not content or not isinstance(content, str):
            return False

        if len(content) > self.max_content_length:
            self._logger.warning("Content exceeds maximum length", length=len(content))
            return False

        if self._has_hostile_pattern(content):
            self._logger.warning("Suspicious pattern detected in content")
            return False

        domain = self._malicious_domain(content)
        if domain:
            self._logger.warning(f"Malicious domain detected: {domain}")
            return False

        return True

    def assess_risk_level(self, content: Optional[str]) -> Optional[RiskLevel]:
        """Keyword-scored risk; None when there is no content to assess."""
        if not content:
            return None

        content_lower = content.lower()
        score = 0

        for tier, phrases in RISK_KEYWORDS.items():
            score += KEYWORD_POINTS[tier] * sum(1 for p in phrases if p in content_lower)

        if self.has_multiple_urls(content):
            score += 2
        if self.has_urgency_indicators(content):
            score += 2
        if self.has_money_mentions(content):
            score += 1
        if self.has_suspicious_formatting(content):
            score += 1

        if score >= 8:
            return RiskLevel.CRITICAL
        if score >= 5:
            return RiskLevel.HIGH
        if score >= 3:
            return RiskLevel.MEDIUM
        if score >= 1:
            return RiskLevel.LOW
        return RiskLevel.MINIMAL

    def sanitize_input(self, text: object) -> str:
        """Strip markup delimiters, script URLs and inline handlers."""
        if not text or not isinstance(text, str):
            return ""

        cleaned = text.strip()
        cleaned = re.sub(r"[<>]", "", cleaned)
        cleaned = re.sub(r"javascript:", "", cleaned, flags=re.IGNORECASE)
        cleaned = re.sub(r"\bon\w+\s*=", "", cleaned, flags=re.IGNORECASE)
        return cleaned[: self.prepared_length]

    def prepare_content(self, content: Optional[str]) -> str:
        """Trim, collapse whitespace and cap length before analysis."""
        if not content:
            return ""
        return re.sub(r"\s+", " ", content.strip())[: self.prepared_length]

    def validate_url(self, url: str) -> UrlCheck:
        """Check an absolute http(s) URL against bad domains and shady shapes."""
        try:
            parsed = URL(url)
        except (TypeError, ValueError) as e:
            self._logger.debug(f"Failed to parse URL '{url}': {e}")
            return UrlCheck(valid=False, reason="URL validation error")

        if parsed.scheme not in ("http", "https") or not parsed.host or "." not in parsed.host:
            return UrlCheck(valid=False, reason="Invalid URL format")

        if self._malicious_domain(url):
            return UrlCheck(valid=False, reason="Known malicious domain")

        lower_url = url.lower()
        if any(p.search(lower_url) for p in self.suspicious_url_patterns):
            return UrlCheck(valid=True, suspicious=True, reason="Potentially suspicious URL pattern")

        return UrlCheck(valid=True, suspicious=False)

    def extract_urls(self, content: str) -> List[str]:
        return URL_PATTERN.findall(content)

    def has_multiple_urls(self, content: str) -> bool:
        """More than two links in one message."""
        return len(self.extract_urls(content)) > 2

    def has_urgency_indicators(self, content: str) -> bool:
        content_lower = content.lower()
        return any(word in content_lower for word in URGENCY_WORDS)

    def has_money_mentions(self, content: str) -> bool:
        return any(p.search(content) for p in self.money_patterns)

    def has_suspicious_formatting(self, content: str) -> bool:
        """Shouting (caps ratio > 0.3), more than three '!' or more than five emoji."""
        if not content:
            return False

        caps = sum(1 for ch in content if "A" <= ch <= "Z")
        if caps / len(content) > 0.3:
            return True

        if content.count("!") > 3:
            return True

        return len(EMOJI_PATTERN.findall(content)) > 5

    def generate_report(self, content: str) -> ScreeningReport:
        report = ScreeningReport(
            content_length=len(content),
            risk_level=self.assess_risk_level(content),
            is_valid=self.validate_content(content),
        )

        if self.has_multiple_urls(content):
            report.flags.append(FLAG_MULTIPLE_URLS)
        if self.has_urgency_indicators(content):
            report.flags.append(FLAG_URGENCY)
        if self.has_money_mentions(content):
            report.flags.append(FLAG_MONEY)
        if self.has_suspicious_formatting(content):
            report.flags.append(FLAG_FORMATTING)
        if self._has_hostile_pattern(content):
            report.flags.append(FLAG_HOSTILE)

        return report

    def recommendations_for(self, report: ScreeningReport) -> List[str]:
        """User-facing advice derived from a screening report."""
        recommendations = []

        if report.risk_level in (RiskLevel.CRITICAL, RiskLevel.HIGH):
            recommendations.extend([
                "🚨 HIGH RISK: Do not click any links or provide personal information",
                "📞 Consider reporting this content to relevant authorities",
                "🔒 Verify sender identity through alternative channels",
            ])

        if FLAG_MULTIPLE_URLS in report.flags:
            recommendations.append("🔗 Be cautious of multiple links - verify each URL separately")
        if FLAG_URGENCY in report.flags:
            recommendations.append("⏰ Urgency tactics are common in scams - take time to verify")
        if FLAG_MONEY in report.flags:
            recommendations.append("💰 Never provide financial information to unverified sources")
        if FLAG_FORMATTING in report.flags:
            recommendations.append("📝 Excessive formatting may indicate spam or manipulation")

        if not recommendations:
            recommendations.extend([
                "✅ Content appears safe, but always verify important information",
                "🔍 Cross-check with multiple reliable sources",
            ])

        return recommendations

    def requires_additional_verification(self, content: str) -> bool:
        return self.assess_risk_level(content) in (RiskLevel.HIGH, RiskLevel.CRITICAL)

    def _has_hostile_pattern(self, content: str) -> bool:
        return any(p.search(content) for p in self.hostile_patterns)

    def _malicious_domain(self, content: str) -> Optional[str]:
        content_lower = content.lower()
        for domain in MALICIOUS_DOMAINS:
            if domain in content_lower:
                return domain
        return None
