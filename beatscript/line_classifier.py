"""Classifies single lines of beat content for the segmenter's state machine."""

import re
from typing import Optional

from .models import ClassifiedLine, LineKind

_QUOTES = "\"'“”‘’" # straight and curly, single and double
_DQ = "\"“”"

_BRANCH_HEADER_RE = re.compile(
    r'^(?:\*{1,2})?(?:GUARDRAILS|BRANCHES|IF THEY SAY|CONDITIONAL|BRANCH)',
    re.IGNORECASE,
)

# "- If they say "X" → Rep: "Y" → Move to Beat 3"
_RICH_BRANCH_RE = re.compile(
    r'^[-•*]?\s*'
    r'(?:If\s+they\s+(?:say|respond|ask|interrupt|push back|resist)[^:→' + _DQ + r']*)?'
    r'[:' + _DQ + r']?\s*(.+?)\s*[' + _DQ + r']?\s*→\s*'
    r'(?:Rep:\s*)?[' + _DQ + r']?\s*(.+?)'
    r'(?:[' + _DQ + r']?\s*→\s*(?:Move to\s*)?Beat\s*#?([0-9]+))?$',
    re.IGNORECASE,
)

# "If they ask about price: Walk them through tiers → Beat 5"
_SIMPLE_BRANCH_RE = re.compile(
    r'^[-•*]?\s*(?:\*{0,2})?If\s+(?:they\s+)?(.+?)(?:\*{0,2})?:\s*(.+)',
    re.IGNORECASE,
)
_EMBEDDED_TARGET_RE = re.compile(r'(.+?)→?\s*(?:Move to\s*)?Beat\s*#?([0-9]+)', re.IGNORECASE)

_MOVE_ONLY_RE = re.compile(r'^[-•*]?\s*→?\s*(?:Move to\s*)?Beat\s*#?([0-9]+)', re.IGNORECASE)

_META_LABEL_RE = re.compile(r'^(?:SAY THIS|WHAT TO SAY|PRIMARY LINE|REP SAYS)', re.IGNORECASE)
_RULE_RE = re.compile(r'^(?:---+|===+|\*\*\*+)$')

_BOLD_REP_LABEL_RE = re.compile(r'^\*{1,2}Rep:\*{0,2}\s*', re.IGNORECASE)
_REP_LABEL_RE = re.compile(r'^Rep:\s*', re.IGNORECASE)
_LEADING_BOLD_RE = re.compile(r'^\*{1,2}')
_TRAILING_BOLD_RE = re.compile(r'\*{1,2}$')
_MARKDOWN_HEADING_RE = re.compile(r'^#{1,4}\s')
_ANNOTATION_RE = re.compile(r'^(?:Example|Note|Pattern):', re.IGNORECASE)

_LEADING_QUOTES_RE = re.compile('^[' + _QUOTES + ']+')
_TRAILING_QUOTES_RE = re.compile('[' + _QUOTES + ']+$')
_TRAILING_ARROW_RE = re.compile(r'→\s*$')
_TITLE_TRAILER_RE = re.compile(r'[:\-–—]+$')


def clean_text(text: str) -> str:
    """Strips quotes, bold markers and a trailing arrow from a branch capture, in that order."""
    text = _LEADING_QUOTES_RE.sub('', text, count=1)
    text = _TRAILING_QUOTES_RE.sub('', text, count=1)
    text = _LEADING_BOLD_RE.sub('', text, count=1)
    text = _TRAILING_BOLD_RE.sub('', text, count=1)
    text = _TRAILING_ARROW_RE.sub('', text, count=1)
    return text.strip()


def clean_title(text: str) -> str:
    """Trims a heading title and drops trailing colon/dash runs."""
    return _TITLE_TRAILER_RE.sub('', text.strip(), count=1).strip()


def _parse_target(raw: Optional[str]) -> Optional[int]:
    if not raw:
        return None
    number = int(raw)
    return number if number > 0 else None


def _clean_spoken(line: str) -> str:
    line = _BOLD_REP_LABEL_RE.sub('', line, count=1)
    line = _REP_LABEL_RE.sub('', line, count=1)
    line = _LEADING_BOLD_RE.sub('', line, count=1)
    return _TRAILING_BOLD_RE.sub('', line, count=1)


def classify_line(line: str) -> ClassifiedLine:
    """
    Classifies one line of beat content.

    Rules are tried in a fixed order and the first one that matches wins:
    branch-section header, rich branch (arrow form), simple "If ...:" branch,
    standalone "Move to Beat N", meta/noise marker, and finally spoken text.
    The classifier knows nothing about the surrounding section; deciding
    whether a spoken line is kept is up to the caller.

    Branch captures are returned raw. They are cleaned when the branch is
    flushed, not here.

    Args:
        line: A single line of text. Surrounding whitespace is ignored.

    Returns:
        A ClassifiedLine. Never raises.
    """
    line = line.strip()
    if not line:
        return ClassifiedLine(LineKind.UNMATCHED)

    if _BRANCH_HEADER_RE.match(line):
        return ClassifiedLine(LineKind.BRANCH_HEADER, text=line)

    # only arrow lines can be rich branches; skip the pattern otherwise
    rich = _RICH_BRANCH_RE.match(line) if "→" in line else None
    if rich:
        return ClassifiedLine(
            LineKind.RICH_BRANCH,
            text=line,
            condition=rich.group(1),
            response=rich.group(2),
            target_beat=_parse_target(rich.group(3)),
        )

    simple = _SIMPLE_BRANCH_RE.match(line)
    if simple:
        response, target = simple.group(2), None
        embedded = _EMBEDDED_TARGET_RE.search(response)
        if embedded:
            response, target = embedded.group(1), _parse_target(embedded.group(2))
        return ClassifiedLine(
            LineKind.SIMPLE_BRANCH,
            text=line,
            condition=simple.group(1),
            response=response,
            target_beat=target,
        )

    move = _MOVE_ONLY_RE.match(line)
    if move:
        return ClassifiedLine(LineKind.MOVE_ONLY, text=line, target_beat=_parse_target(move.group(1)))

    if _META_LABEL_RE.match(line) or _RULE_RE.match(line):
        return ClassifiedLine(LineKind.META, text=line)

    spoken = _clean_spoken(line)
    if not spoken:
        return ClassifiedLine(LineKind.UNMATCHED, text=line)
    if _MARKDOWN_HEADING_RE.match(spoken):
        return ClassifiedLine(LineKind.HEADING, text=spoken)
    if _ANNOTATION_RE.match(spoken):
        return ClassifiedLine(LineKind.META, text=spoken)
    return ClassifiedLine(LineKind.SPOKEN_LINE, text=spoken)
