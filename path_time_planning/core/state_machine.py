"""Sampling state machine for a single obstacle.

This module defines the states an obstacle goes through while its predicted
trajectory is sampled over the planning horizon, and the transitions between
them.
"""

from dataclasses import dataclass
from enum import Enum, auto


class SamplingState(Enum):
    """Relevance states of an obstacle during sampling."""
    NOT_YET_ENTERED = auto()
    ACTIVE = auto()
    EXITED = auto()


@dataclass
class SamplingDecision:
    """What the builder should do with the current sample."""
    state: SamplingState
    record: bool = False
    is_entry: bool = False
    stop: bool = False


class ObstacleSamplingStateMachine:
    """Tracks whether an obstacle is in play, one time sample at a time.

    NOT_YET_ENTERED stays put while samples are irrelevant and moves to ACTIVE
    on the first relevant one. ACTIVE moves to EXITED on the first irrelevant
    sample. EXITED is terminal and no further samples are recorded.
    """

    def __init__(self) -> None:
        self.current_state = SamplingState.NOT_YET_ENTERED

    @property
    def finished(self) -> bool:
        return self.current_state == SamplingState.EXITED

    def update(self, relevant: bool) -> SamplingDecision:
        """Advance on one sample.

        Args:
            relevant: Whether the obstacle passed the relevance test at this sample

        Returns:
            SamplingDecision telling whether to record the sample and whether to stop
        """
        if self.current_state == SamplingState.NOT_YET_ENTERED:
            if relevant:
                self.current_state = SamplingState.ACTIVE
                return SamplingDecision(self.current_state, record=True, is_entry=True)
            return SamplingDecision(self.current_state)

        elif self.current_state == SamplingState.ACTIVE:
            if relevant:
                return SamplingDecision(self.current_state, record=True)
            self.current_state = SamplingState.EXITED
            return SamplingDecision(self.current_state, stop=True)

        # EXITED
        return SamplingDecision(self.current_state, stop=True)
