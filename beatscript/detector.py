"""Decides whether raw script text follows the numbered-beat convention."""

import re

# A line opening beat N: up to 4 '#', optional bold, optional "Beat", then "N."
_ANCHOR_TEMPLATE = r'(?:^|\n)#{{0,4}}\s*(?:\*{{0,2}})?\s*(?:Beat\s+)?{number}\.\s+'

_BEAT_ONE_RE = re.compile(_ANCHOR_TEMPLATE.format(number=1), re.IGNORECASE)
_BEAT_FOUR_RE = re.compile(_ANCHOR_TEMPLATE.format(number=4), re.IGNORECASE)


def is_structured_script(content: str) -> bool:
    """
    Checks for both a beat-1 and a beat-4 heading anchor.

    Requiring beat 4 keeps short numbered lists (three items or fewer) from
    being mistaken for a call flow.

    Args:
        content: Raw script text.

    Returns:
        True if both anchors are present, False otherwise.
    """
    content = content or ""
    return bool(_BEAT_ONE_RE.search(content)) and bool(_BEAT_FOUR_RE.search(content))
