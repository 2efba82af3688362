# readapt/engine/text_transform.py
import re
from typing import Iterable, Optional

from .presets import ReadingPreferences

DEFAULT_KEYWORDS = (
    "important",
    "key",
    "main",
    "primary",
    "significant",
    "crucial",
    "essential",
)

SYLLABLE_MARK = "•"

_TAG_RX = re.compile(r"<[^>]*>")
_SENTENCE_END_RX = re.compile(r"([.!?])\s+")


def highlight_keywords(text: str, keywords: Iterable[str] = DEFAULT_KEYWORDS) -> str:
    words = [re.escape(k) for k in keywords if k]
    if not words:
        return text
    rx = re.compile(r"\b(" + "|".join(words) + r")\b", re.I)
    return rx.sub(r'<mark class="bg-highlight px-1 rounded font-medium">\1</mark>', text)


def syllable_breaks(text: str, min_length: int = 6, chunk: int = 3) -> str:
    """
    Split long words into fixed-size chunks joined by a bullet.
    Not linguistic syllabification, just a visual pacing aid.
    """
    word_rx = re.compile(r"\b\w{%d,}\b" % min_length)
    chunk_rx = re.compile(r".{1,%d}" % chunk)

    def _split(m: re.Match) -> str:
        return SYLLABLE_MARK.join(chunk_rx.findall(m.group(0)))

    # leave markup (e.g. <mark class=...>) untouched
    parts = re.split(r"(<[^>]*>)", text)
    return "".join(p if i % 2 else word_rx.sub(_split, p) for i, p in enumerate(parts))


def chunk_sentences(text: str) -> str:
    return _SENTENCE_END_RX.sub(r"\1\n\n", text)


def focus_wrap(text: str) -> str:
    return f'<div class="focus-mode bg-card/50 p-4 rounded-lg border-l-4 border-primary">{text}</div>'


def strip_html(text: str) -> str:
    """Plain text for speech output."""
    return _TAG_RX.sub("", text)


def adapt_text(
    text: str,
    prefs: ReadingPreferences,
    keywords: Optional[Iterable[str]] = None,
) -> str:
    adapted = text
    if prefs.highlight_keywords:
        adapted = highlight_keywords(adapted, keywords if keywords is not None else DEFAULT_KEYWORDS)
    if prefs.syllable_breaks:
        adapted = syllable_breaks(adapted)
    if prefs.sentence_chunking:
        adapted = chunk_sentences(adapted)
    if prefs.focus_mode:
        adapted = focus_wrap(adapted)
    return adapted
