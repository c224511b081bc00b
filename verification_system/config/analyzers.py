"""Analyzer catalogue: identity, trigger keywords and simulated latency.

Each entry describes one specialist analyzer. Entries are declared in the
order the agent selector walks them; that order also decides which analyzers
survive when more than the configured maximum match.

Latency is in seconds and models how long the stub takes to "think":
  news:     3.5s  cross-referencing outlets
  fact:     4.2s  academic and scientific databases
  scam:     2.8s  fraud pattern matching
  phishing: 3.1s  domain reputation lookups
  image:    5.5s  metadata and manipulation analysis
  video:    6.8s  frame-by-frame deepfake analysis
"""

from typing import Any, Dict

ANALYZERS: Dict[str, Dict[str, Any]] = {
    "news": {
        "display_name": "News Verification Agent",
        "icon": "📰",
        "description": "Validates news claims against credible sources",
        "trigger_keywords": ["breaking", "news", "report", "journalist", "headline", "media", "press"],
        "simulated_latency": 3.5,
        "capabilities": ["fact-checking", "source verification", "news analysis"],
        "scenario_evidence": "Cross-referenced with major news outlets",
        "scenario_recommendation": "Verify with official news sources",
    },
    "fact": {
        "display_name": "Fact Verification Agent",
        "icon": "📚",
        "description": "Checks scientific and historical facts",
        "trigger_keywords": ["study", "research", "scientist", "data", "percent", "statistics", "academic"],
        "simulated_latency": 4.2,
        "capabilities": ["scientific analysis", "historical verification", "data validation"],
        "scenario_evidence": "Checked against scientific databases",
        "scenario_recommendation": "Consult peer-reviewed research",
    },
    "scam": {
        "display_name": "Scam Detection Agent",
        "icon": "⚠️",
        "description": "Identifies fraud patterns and suspicious content",
        "trigger_keywords": ["winner", "lottery", "money", "urgent", "fee", "prize", "cash", "inheritance"],
        "simulated_latency": 2.8,
        "capabilities": ["fraud detection", "pattern analysis", "risk assessment"],
        "scenario_evidence": "Analyzed against known fraud patterns",
        "scenario_recommendation": "Report to relevant authorities",
    },
    "phishing": {
        "display_name": "Phishing Link Detector",
        "icon": "🔗",
        "description": "Analyzes URLs and links for threats",
        "trigger_keywords": ["click", "link", "login", "account", "verify", "security", "password", "update"],
        "simulated_latency": 3.1,
        "capabilities": ["URL analysis", "domain verification", "threat detection"],
        "scenario_evidence": "Domain reputation analysis completed",
        "scenario_recommendation": "Do not click suspicious links",
    },
    "image": {
        "display_name": "Image Forgery Detector",
        "icon": "🖼️",
        "description": "Detects manipulated and synthetic images",
        "trigger_keywords": ["photo", "image", "picture", "ai-generated", "deepfake", "manipulated"],
        "simulated_latency": 5.5,
        "capabilities": ["image analysis", "metadata extraction", "forgery detection"],
        "scenario_evidence": "Image metadata and manipulation analysis",
        "scenario_recommendation": "Verify original source",
    },
    "video": {
        "display_name": "Video Forgery Detector",
        "icon": "📹",
        "description": "Identifies deepfakes and video manipulation",
        "trigger_keywords": ["video", "deepfake", "ai-generated", "manipulated", "synthetic"],
        "simulated_latency": 6.8,
        "capabilities": ["deepfake detection", "video analysis", "temporal consistency"],
        "scenario_evidence": "Video frame and audio analysis completed",
        "scenario_recommendation": "Check for original upload",
    },
}

# Analyzer forced in whenever content carries an http(s) link
LINK_ANALYZER_ID = "phishing"

# Used when no trigger keyword matches
DEFAULT_ANALYZER_IDS = ("news", "fact")

# Analyzers allowed to flag heuristic fraud phrases as SUSPICIOUS
FRAUD_ORIENTED_IDS = frozenset({"scam", "phishing"})

SUSPICIOUS_PHRASES = [
    "click here",
    "urgent",
    "limited time",
    "act now",
    "congratulations",
    "you won",
    "lottery",
    "inheritance",
    "prince",
    "million dollars",
]
