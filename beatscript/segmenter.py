"""Splits a structured call script into beats and extracts their lines and branches."""

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Pattern, Tuple

from .detector import is_structured_script
from .line_classifier import classify_line, clean_text, clean_title
from .models import LineKind, ParsedScript, ScriptBeat, ScriptBranch
from .utils import find_all_matches

logger = logging.getLogger(__name__)

MIN_BEATS = 3
MAX_BEAT_NUMBER = 8
FOLLOW_THE_FLOW = "(Follow the flow)"

# "1. Attention Capture", "## 1. Attention Capture", "**1. Attention Capture**",
# "Beat 1 – Attention Capture", "## Beat 1: Attention Capture"
_HEADING_RE = re.compile(
    r'(?:^|\n)(?:#{1,4}\s*)?(?:\*{1,2})?(?:Beat\s+)?([0-9]+)[.):\s–—-]+\s*([^\n*#]+?)(?:\*{1,2})?\s*\n',
    re.IGNORECASE,
)

_SECTION_END_RE = re.compile(
    r'(?:^|\n)(?:#{1,4}\s*)?(?:\*{1,2})?\s*(?:CONVERSATION WIN CONDITION|HOW TO THINK|SECTION 2|-{3,})',
    re.IGNORECASE,
)


@dataclass(frozen=True)
class BeatHeading:
    """An accepted beat heading and the offset where its body starts."""
    number: int
    title: str
    body_start: int


def _heading_for(number: int) -> Pattern[str]:
    return re.compile(
        r'(?:^|\n)(?:#{1,4}\s*)?(?:\*{1,2})?(?:Beat\s+)?' + re.escape(str(number)) + r'[.):\s–—-]+',
        re.IGNORECASE,
    )


def find_beat_headings(content: str) -> List[BeatHeading]:
    """
    Finds beat headings in encounter order.

    Only numbers 1-8 are accepted, and the first heading with a given number
    wins. Later duplicates are ignored as beat starts.
    """
    headings: List[BeatHeading] = []
    seen = set()
    for match in find_all_matches(_HEADING_RE, content):
        number = int(match.groups[0])
        if number < 1 or number > MAX_BEAT_NUMBER or number in seen:
            continue
        seen.add(number)
        headings.append(BeatHeading(number=number, title=clean_title(match.groups[1]), body_start=match.end))
    return headings


def _beat_body(content: str, heading: BeatHeading, next_heading: Optional[BeatHeading]) -> str:
    rest = content[heading.body_start:]
    stop = _heading_for(next_heading.number) if next_heading else _SECTION_END_RE
    found = stop.search(rest)
    return rest[:found.start()] if found else rest


@dataclass
class _PendingBranch:
    condition: str
    response: str
    target_beat: Optional[int]

    def flush(self) -> ScriptBranch:
        return ScriptBranch(
            condition=clean_text(self.condition),
            response=clean_text(self.response),
            target_beat=self.target_beat,
        )


def parse_beat_content(raw: str) -> Tuple[str, List[ScriptBranch]]:
    """
    Extracts the spoken lines and the branches from one beat's body.

    Lines are fed through `classify_line` into a two-state machine. While
    collecting say lines, spoken text is kept. Once a branch header or a
    branch line has been seen, the beat is collecting branches and any
    unrecognised text is dropped. A branch stays pending until the next
    branch line or the end of the beat.

    Args:
        raw: The beat body, without its heading.

    Returns:
        A (say_this, branches) tuple. say_this falls back to
        "(Follow the flow)" when no spoken line was found.
    """
    say_lines: List[str] = []
    branches: List[ScriptBranch] = []
    in_branches = False
    pending: Optional[_PendingBranch] = None

    for raw_line in raw.split("\n"):
        line = classify_line(raw_line)
        kind = line.kind

        if kind is LineKind.BRANCH_HEADER:
            in_branches = True
        elif kind in (LineKind.RICH_BRANCH, LineKind.SIMPLE_BRANCH):
            in_branches = True
            if pending:
                branches.append(pending.flush())
            pending = _PendingBranch(line.condition, line.response, line.target_beat)
        elif kind is LineKind.MOVE_ONLY:
            if pending:
                pending.target_beat = line.target_beat
        elif kind is LineKind.SPOKEN_LINE and not in_branches:
            say_lines.append(line.text)

    if pending:
        branches.append(pending.flush())

    return "\n".join(say_lines) or FOLLOW_THE_FLOW, branches


def parse_script(content: str) -> ParsedScript:
    """
    Parses a beat-structured call script.

    Never raises. Text that is not a structured script, or that yields fewer
    than three beats, comes back as an empty, unstructured result.

    Args:
        content: Raw script text.

    Returns:
        A fresh ParsedScript.
    """
    content = content or ""
    if not is_structured_script(content):
        logger.debug("Script has no beat 1/beat 4 anchors. Treating as unstructured.")
        return ParsedScript(beats=[], is_structured=False)

    headings = find_beat_headings(content)
    if len(headings) < MIN_BEATS:
        logger.debug(f"Only {len(headings)} beat headings accepted (need {MIN_BEATS}). Treating as unstructured.")
        return ParsedScript(beats=[], is_structured=False)

    beats: List[ScriptBeat] = []
    for i, heading in enumerate(headings):
        next_heading = headings[i + 1] if i < len(headings) - 1 else None
        say_this, branches = parse_beat_content(_beat_body(content, heading, next_heading))
        beats.append(ScriptBeat(number=heading.number, title=heading.title, say_this=say_this, branches=branches))

    logger.debug(f"Parsed {len(beats)} beats: {[beat.number for beat in beats]}")
    return ParsedScript(beats=beats, is_structured=len(beats) >= MIN_BEATS)
