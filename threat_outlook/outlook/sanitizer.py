from __future__ import annotations

import re

from threat_outlook.outlook.schemas import ReportType

DOCUMENT_START = "<!DOCTYPE html>"
DOCUMENT_END = "</html>"
TEXT_REPORT_TITLE = "Daily Threat Outlook"

_CODE_FENCE_RE = re.compile(r"```(?:html)?\s*", re.IGNORECASE)
_URL_RE = re.compile(r"https?://\S+", re.IGNORECASE)
# [1], [1, 2]; adjacent markers such as [1][2] are removed one by one.
_NUMERIC_CITATION_RE = re.compile(r"\[\s*\d+(?:\s*,\s*\d+)*\s*\]")
_NAMED_CITATION_RE = re.compile(r"\[\s*(?:source|citation)s?\s*\]", re.IGNORECASE)
# Keep the terminator so paragraphs and line breaks stay balanced.
_REFERENCE_LINE_RE = re.compile(
    r"(?:Source|References|Citations):\s*.*?(<br\s*/?>|\n|</p>)", re.IGNORECASE
)
_ANCHOR_RE = re.compile(r"<a\s[^>]*>(.*?)</a>", re.IGNORECASE)
_EMPTY_PARENS_RE = re.compile(r"\(\s*\)")
_REPEATED_SPACES_RE = re.compile(r" {2,}")
_OPENER_LINE_RE = re.compile(
    r"\A\s*(?:I'll|I've|I will|Let me|Based on my research)\b[^\n]*(?:\n|\Z)"
)


def _strip_artifacts(text: str) -> str:
    text = _CODE_FENCE_RE.sub("", text)
    text = _URL_RE.sub("", text)
    text = _NUMERIC_CITATION_RE.sub("", text)
    text = _NAMED_CITATION_RE.sub("", text)
    text = _REFERENCE_LINE_RE.sub(r"\1", text)
    text = _ANCHOR_RE.sub(r"\1", text)
    text = _EMPTY_PARENS_RE.sub("", text)
    return _REPEATED_SPACES_RE.sub(" ", text)


def _trim_to_document(text: str) -> str:
    start = text.find(DOCUMENT_START)
    if start > 0:
        text = text[start:]
    end = text.find(DOCUMENT_END)
    if end != -1:
        text = text[: end + len(DOCUMENT_END)]
    return text


def _trim_to_title(text: str) -> str:
    title = text.find(TEXT_REPORT_TITLE)
    if title > 0:
        return text[title:].strip()
    if title == -1:
        # No title to anchor on: drop conversational opener lines only.
        text = _OPENER_LINE_RE.sub("", text)
    return text.strip()


def _sanitize_once(text: str, report_type: ReportType) -> str:
    text = _trim_to_document(_strip_artifacts(text))
    if report_type == "text":
        text = _trim_to_title(text)
    return text


def sanitize_report(raw: str, *, report_type: ReportType = "html") -> str:
    """
    Strip citations, URLs and non-report text from model output.

    Every step only removes characters, so the passes are repeated until nothing
    changes; the result is a fixed point and sanitizing it again is a no-op.
    """

    cleaned = raw
    while True:
        candidate = _sanitize_once(cleaned, report_type)
        if candidate == cleaned:
            return cleaned
        cleaned = candidate
