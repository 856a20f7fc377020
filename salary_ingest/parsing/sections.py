"""Body cleaning and section title detection.

Community markdown often carries zero-width characters, non-breaking
spaces and stray control characters that break line-anchored patterns.
clean_body() removes them while keeping line structure intact.
"""

import re
import unicodedata
from typing import Iterable

from .models import SectionMatch, SectionReport

# Zero-width and other invisible format characters seen in pasted posts
_INVISIBLE = "\u200b\u200c\u200d\u200e\u200f\u2060\u2061\u2062\u2063\ufeff\u00ad"
_INVISIBLE_RE = re.compile(f"[{_INVISIBLE}]")
_HORIZONTAL_WS_RE = re.compile(r"[^\S\n]+")
_ANY_WS_RE = re.compile(r"\s+")
_MARKUP_RE = re.compile(r"\\(?=[^\w\s])|[#*_]")


def _strip_controls(text: str) -> str:
    return "".join(
        ch for ch in text
        if ch == "\n" or ch == "\t" or unicodedata.category(ch) != "Cc"
    )


def clean_body(body: str) -> str:
    """Normalize a raw post body for line-anchored matching.

    Line endings become ``\\n``, invisible and control characters go, runs of
    horizontal whitespace (including non-breaking spaces) become one space
    and every line is trimmed. Line breaks are preserved.
    """
    if not body:
        return ""
    text = body.replace("\r\n", "\n").replace("\r", "\n")
    text = _INVISIBLE_RE.sub("", text)
    text = _strip_controls(text)
    text = _HORIZONTAL_WS_RE.sub(" ", text)
    return "\n".join(line.strip() for line in text.split("\n"))


def _collapse(text: str) -> str:
    return _ANY_WS_RE.sub(" ", text).strip()


def _strip_markup(text: str) -> str:
    """Drop heading marks, emphasis markers and markdown escapes."""
    return _collapse(_MARKUP_RE.sub("", text)).casefold()


def detect_sections(body: str, titles: Iterable[str]) -> SectionReport:
    """Report which section titles appear in ``body``.

    Each title is looked for verbatim, then with all whitespace collapsed on
    both sides, then with markdown markup (``#`` headings, ``*``/``_``
    emphasis, backslash escapes) removed and case folded.

    Example:
        >>> detect_sections("## **1. PERSONALIA**\\nAge: 30", ["1. PERSONALIA", "4. SALARY"]).missing
        ['4. SALARY']
    """
    cleaned = clean_body(body)
    collapsed = _collapse(cleaned)
    unmarked = _strip_markup(cleaned)

    report = SectionReport()
    for title in titles:
        if title in cleaned:
            match = SectionMatch.VERBATIM
        elif _collapse(title) in collapsed:
            match = SectionMatch.NORMALIZED
        elif _strip_markup(title) in unmarked:
            match = SectionMatch.MARKUP
        else:
            report.missing.append(title)
            continue
        report.found.append(title)
        report.matched_by[title] = match
    return report
