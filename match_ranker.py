import logging
from enum import Enum

import pandas as pd

logger = logging.getLogger(__name__)


class CursorSignal(str, Enum):
    MOVED = "moved"
    END_OF_MATCHES = "end_of_matches"
    AT_START = "at_start"
    EMPTY = "empty"


def rank_matches(results):
    """Sort by compatibility descending, then mentor id ascending.

    Ties never depend on the order rows came back from the backend.
    """
    if len(results) == 0:
        return []

    frame = pd.DataFrame({
        'position': range(len(results)),
        'compatibility_score': [r.compatibility_score for r in results],
        'mentor_id': [r.mentor_id for r in results],
    })
    frame = frame.sort_values(by=['compatibility_score', 'mentor_id', 'position'],
                              ascending=[False, True, True], kind='stable')
    return [results[i] for i in frame['position']]


class MatchCursor:
    """Forward/backward traversal over one ranked snapshot of matches."""

    def __init__(self, ranked):
        self.matches = list(ranked)
        self.index = 0
        self.is_active = len(self.matches) > 0

    @property
    def total(self):
        return len(self.matches)

    @property
    def position(self):
        """1-based position of the current match, 0 when inactive."""
        return self.index + 1 if self.is_active else 0

    def current(self):
        if not self.is_active:
            return None
        return self.matches[self.index]

    def next(self):
        if not self.is_active:
            return CursorSignal.EMPTY
        if self.index + 1 < len(self.matches):
            self.index += 1
            return CursorSignal.MOVED

        logger.info("Reached end of matches")
        self.index = 0
        self.is_active = False
        return CursorSignal.END_OF_MATCHES

    def previous(self):
        if not self.is_active:
            return CursorSignal.EMPTY
        if self.index == 0:
            return CursorSignal.AT_START
        self.index -= 1
        return CursorSignal.MOVED

    def restart(self):
        self.index = 0
        self.is_active = len(self.matches) > 0
        return self.current()
