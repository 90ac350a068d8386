"""Data models for BeatScript."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

@dataclass
class ScriptBranch:
    """A conditional deviation inside a beat: what they say, what we answer, where to go."""
    condition: str
    response: str
    target_beat: Optional[int] = None # None means stay in the current flow

    def to_dict(self) -> Dict[str, Any]:
        return {
            "condition": self.condition,
            "response": self.response,
            "targetBeat": self.target_beat,
        }

@dataclass
class ScriptBeat:
    """One numbered step of the call flow."""
    number: int
    title: str
    say_this: str
    branches: List[ScriptBranch] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "number": self.number,
            "title": self.title,
            "sayThis": self.say_this,
            "branches": [branch.to_dict() for branch in self.branches],
        }

@dataclass
class ParsedScript:
    """Holds the structured output of the script parser."""
    beats: List[ScriptBeat] = field(default_factory=list)
    is_structured: bool = False

    def find_beat(self, number: int) -> Optional[ScriptBeat]:
        """Returns the beat with the given number, or None."""
        for beat in self.beats:
            if beat.number == number:
                return beat
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "beats": [beat.to_dict() for beat in self.beats],
            "isStructured": self.is_structured,
        }


class LineKind(Enum):
    """What a single trimmed line of beat content turned out to be."""
    HEADING = "heading"
    BRANCH_HEADER = "branch_header"
    RICH_BRANCH = "rich_branch"
    SIMPLE_BRANCH = "simple_branch"
    MOVE_ONLY = "move_only"
    META = "meta"
    SPOKEN_LINE = "spoken_line"
    UNMATCHED = "unmatched"

@dataclass(frozen=True)
class ClassifiedLine:
    """Result of classifying one line. Only the fields relevant to `kind` are set."""
    kind: LineKind
    text: str = ""
    condition: str = ""
    response: str = ""
    target_beat: Optional[int] = None
