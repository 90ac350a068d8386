"""Steps through a parsed script during a live call."""

import logging
from typing import List, Optional

from .models import ParsedScript, ScriptBeat, ScriptBranch

logger = logging.getLogger(__name__)

class ScriptNavigator:
    """
    Tracks the rep's position in a parsed script.

    Every move (next beat or a branch jump) is pushed onto a history stack so
    `previous()` retraces the path actually taken, not the numeric order.
    """

    def __init__(self, parsed: ParsedScript):
        self.parsed = parsed
        self._index = 0
        self._history: List[int] = [0]

    @property
    def beats(self) -> List[ScriptBeat]:
        return self.parsed.beats if self.parsed.is_structured else []

    @property
    def position(self) -> int:
        return self._index

    @property
    def history(self) -> List[int]:
        return list(self._history)

    @property
    def current_beat(self) -> Optional[ScriptBeat]:
        if 0 <= self._index < len(self.beats):
            return self.beats[self._index]
        return None

    @property
    def can_go_next(self) -> bool:
        return self._index < len(self.beats) - 1

    @property
    def can_go_back(self) -> bool:
        return len(self._history) > 1

    @property
    def progress(self) -> str:
        """Position as "current/total", e.g. "2/5". "0/0" when there are no beats."""
        if not self.beats:
            return "0/0"
        return f"{self._index + 1}/{len(self.beats)}"

    def go_to_beat(self, number: int) -> bool:
        """
        Jumps to the first beat with the given number.

        Returns:
            False (and stays put) if no beat has that number.
        """
        for idx, beat in enumerate(self.beats):
            if beat.number == number:
                self._move_to(idx)
                return True
        logger.debug(f"No beat numbered {number} in script. Staying on beat index {self._index}.")
        return False

    def take_branch(self, branch: ScriptBranch) -> bool:
        """
        Follows a branch. Without a target beat the call just carries on to
        the next beat.
        """
        if branch.target_beat is None:
            return self.next()
        return self.go_to_beat(branch.target_beat)

    def next(self) -> bool:
        if not self.can_go_next:
            return False
        self._move_to(self._index + 1)
        return True

    def previous(self) -> bool:
        if not self.can_go_back:
            return False
        self._history.pop()
        self._index = self._history[-1]
        return True

    def reset(self) -> None:
        self._index = 0
        self._history = [0]

    def _move_to(self, idx: int) -> None:
        self._index = idx
        self._history.append(idx)
