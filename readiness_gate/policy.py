"""Decision policy applied to each tick's reading."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .status import PodHealthSnapshot, ReplicaStatus


class PollOutcome(Enum):
    """Result of one poll tick."""
    READY = "READY"
    FATAL = "FATAL"
    PENDING = "PENDING"


class FatalReason(Enum):
    ZERO_DESIRED_REPLICAS = "ZeroDesiredReplicas"
    POD_FAILURE_DETECTED = "PodFailureDetected"


@dataclass(frozen=True)
class Decision:
    outcome: PollOutcome
    reason: Optional[FatalReason] = None

    @property
    def is_terminal(self) -> bool:
        return self.outcome != PollOutcome.PENDING


READY = Decision(PollOutcome.READY)
PENDING = Decision(PollOutcome.PENDING)


def decide(replicas: ReplicaStatus, pods: PodHealthSnapshot) -> Decision:
    """
    Classify a reading as READY, FATAL or PENDING.

    Checks run in a fixed order: zero desired replicas, then failure
    signatures, then readiness. A crashing pod therefore fails the check
    even on a tick where the replica counts already match.
    """
    if replicas.desired_replicas == 0:
        return Decision(PollOutcome.FATAL, FatalReason.ZERO_DESIRED_REPLICAS)

    if pods.crash_signature_count > 0 or pods.high_restart_count > 0:
        return Decision(PollOutcome.FATAL, FatalReason.POD_FAILURE_DETECTED)

    if replicas.ready_replicas == replicas.desired_replicas and pods.not_ready_count == 0:
        return READY

    return PENDING
