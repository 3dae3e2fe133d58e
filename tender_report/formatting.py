"""
Formatter utilities applied to every value before it is measured or drawn.

The built-in PDF fonts only cover Latin-1, and layout budgets are computed
from the sanitized text, so callers clean and truncate first, draw second.
"""

import math
import re
from typing import Any, Callable, List

import pandas as pd

CURRENCY_PREFIX = "Rs"
CRORE = 10_000_000
LAKH = 100_000
ELLIPSIS = "..."

_QUOTE_MAP = str.maketrans(
    {
        "‘": "'",
        "’": "'",
        "‚": "'",
        "‛": "'",
        "′": "'",
        "“": '"',
        "”": '"',
        "„": '"',
        "‟": '"',
        "″": '"',
    }
)
_WHITESPACE_RE = re.compile(r"\s+")
_NON_PRINTABLE_RE = re.compile(r"[^\x20-\x7E]")
_NUMERIC_JUNK_RE = re.compile(r"[^\d.\-]")

Measure = Callable[[str], float]


def to_number(value: Any, default: float = 0.0) -> float:
    """
    Coerce any payload value to a finite float.
    Handles None, NaN/inf, and pre-formatted strings like 'Rs 1,23,456.78'.
    """
    if value is None or isinstance(value, bool):
        return default
    try:
        v = float(value)
    except (TypeError, ValueError):
        cleaned = _NUMERIC_JUNK_RE.sub("", str(value))
        try:
            v = float(cleaned) if cleaned else default
        except ValueError:
            return default
    if math.isnan(v) or math.isinf(v):
        return default
    return v


def _group_indian(n: int) -> str:
    digits = str(abs(n))
    if len(digits) > 3:
        head, tail = digits[:-3], digits[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        digits = ",".join(groups + [tail])
    return f"-{digits}" if n < 0 else digits


def format_currency(amount: Any) -> str:
    """
    Three-tier rupee formatting:
    >= 1 crore -> 'Rs 12.00 Cr', >= 1 lakh -> 'Rs 2.50 L', else 'Rs 5,000'.
    """
    value = to_number(amount)
    if value >= CRORE:
        return f"{CURRENCY_PREFIX} {value / CRORE:.2f} Cr"
    if value >= LAKH:
        return f"{CURRENCY_PREFIX} {value / LAKH:.2f} L"
    return f"{CURRENCY_PREFIX} {_group_indian(int(round(value)))}"


def format_count(value: Any) -> str:
    return _group_indian(int(round(to_number(value))))


def format_percent(value: Any, decimals: int = 1) -> str:
    return f"{to_number(value):.{decimals}f}%"


def format_date(value: Any, default: str = "N/A") -> str:
    """Render a timestamp as '05 Mar 2025'; unparseable input yields the default."""
    if value is None or value == "":
        return default
    ts = pd.to_datetime(value, errors="coerce")
    if pd.isna(ts):
        return default
    return ts.strftime("%d %b %Y")


def clean_text(value: Any) -> str:
    """
    Normalize text for the Latin core fonts: curly quotes become straight,
    any whitespace run becomes one space, anything outside printable ASCII
    is dropped, and the result is trimmed.
    """
    if value is None:
        return ""
    text = str(value).translate(_QUOTE_MAP)
    text = _WHITESPACE_RE.sub(" ", text)
    text = _NON_PRINTABLE_RE.sub("", text)
    text = _WHITESPACE_RE.sub(" ", text)
    return text.strip()


def truncate(value: Any, max_chars: int, ellipsis: str = ELLIPSIS) -> str:
    """Character-budget truncation; the ellipsis is added only when text was cut."""
    text = clean_text(value)
    if max_chars <= 0:
        return ""
    if len(text) <= max_chars:
        return text
    keep = max(1, max_chars - len(ellipsis))
    return text[:keep].rstrip() + ellipsis


def fit_text(value: Any, max_width: float, measure: Measure, ellipsis: str = ELLIPSIS) -> str:
    """
    Width-budget truncation using a string-width callback (e.g. FPDF.get_string_width).
    Returns the cleaned text unchanged when it already fits.
    """
    text = clean_text(value)
    if measure(text) <= max_width:
        return text
    cut = text
    while len(cut) > 1 and measure(cut.rstrip() + ellipsis) > max_width:
        cut = cut[:-1]
    return cut.rstrip() + ellipsis


def wrap_text(value: Any, max_width: float, measure: Measure) -> List[str]:
    """
    Greedy word wrap against a width budget. Words wider than the budget
    are split by character.
    """
    text = clean_text(value)
    if not text:
        return []
    if max_width <= 0:
        return [text]
    lines: List[str] = []
    current = ""
    for word in text.split(" "):
        candidate = word if not current else f"{current} {word}"
        if measure(candidate) <= max_width:
            current = candidate
            continue
        if current:
            lines.append(current)
            current = ""
        if measure(word) <= max_width:
            current = word
            continue
        chunk = ""
        for ch in word:
            if not chunk or measure(chunk + ch) <= max_width:
                chunk += ch
            else:
                lines.append(chunk)
                chunk = ch
        current = chunk
    if current:
        lines.append(current)
    return lines
