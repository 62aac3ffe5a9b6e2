# services/text_utils.py
import html
import re

_BLOCK_END = re.compile(r"</(p|div|li|h[1-6])>|<br\s*/?>", re.IGNORECASE)
_ANY_TAG = re.compile(r"<[^>]+>")
_BLANK_RUN = re.compile(r"\n\s*\n")


def strip_html(content: str) -> str:
    """Turn editor HTML into plain text, keeping paragraph breaks."""
    if not content:
        return ""

    text = _BLOCK_END.sub("\n", content)
    text = _ANY_TAG.sub("", text)
    text = html.unescape(text)
    text = _BLANK_RUN.sub("\n\n", text)
    return text.strip()


def count_words(content: str) -> int:
    return len(strip_html(content).split())
