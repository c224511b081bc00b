"""Canned demo scenarios with precomputed verdicts.

The stub analyzers answer these exactly (case-insensitive, whole-content
match) so demos and end-to-end tests are reproducible.
"""

from typing import Any, Dict, List

DEMO_SCENARIOS: List[Dict[str, Any]] = [
    {
        "id": "medical_misinformation",
        "title": "🚨 Medical Misinformation",
        "content": "Breaking: Scientists discover cure for diabetes using AI technology!",
        "expected_result": "FALSE",
        "confidence": 95,
        "explanation": "No credible sources found, contradicts medical research standards",
    },
    {
        "id": "phishing_attempt",
        "title": "🎣 Phishing Attempt",
        "content": "Your bank account compromised! Click: https://secure-bank-update.fake/login",
        "expected_result": "MALICIOUS",
        "confidence": 96,
        "explanation": "Fraudulent domain, classic phishing patterns detected",
    },
    {
        "id": "legitimate_news",
        "title": "✅ Legitimate News",
        "content": "NASA announces new Mars mission scheduled for 2026",
        "expected_result": "TRUE",
        "confidence": 87,
        "explanation": "Verified by official sources, aligns with space program timeline",
    },
    {
        "id": "mixed_content",
        "title": "❓ Mixed Content",
        "content": "Climate change causes 50% of wildfires! Learn more: https://climate-truth.info",
        "expected_result": "UNVERIFIED",
        "confidence": 65,
        "explanation": "Climate connection valid, but statistics unverified and suspicious link",
    },
    {
        "id": "advance_fee_fraud",
        "title": "⚠️ Advance Fee Fraud",
        "content": "Congratulations! You won $1M lottery. Send $500 processing fee to claim!",
        "expected_result": "SCAM",
        "confidence": 99,
        "explanation": "Classic 419 scam pattern, no legitimate lottery requires upfront payment",
    },
]
