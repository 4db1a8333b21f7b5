"""Tests for the decision policy."""
import pytest

from readiness_gate.policy import FatalReason, PollOutcome, decide
from readiness_gate.status import PodHealthSnapshot, ReplicaStatus


@pytest.mark.parametrize("pods", [
    PodHealthSnapshot(),
    PodHealthSnapshot(not_ready_count=2),
    PodHealthSnapshot(crash_signature_count=1, high_restart_count=1),
])
def test_zero_desired_is_fatal_regardless_of_pods(pods):
    decision = decide(ReplicaStatus(desired_replicas=0, ready_replicas=0), pods)

    assert decision.outcome == PollOutcome.FATAL
    assert decision.reason == FatalReason.ZERO_DESIRED_REPLICAS


def test_all_replicas_ready():
    """Desired 3, ready 3, nothing failing."""
    decision = decide(ReplicaStatus(desired_replicas=3, ready_replicas=3), PodHealthSnapshot())

    assert decision.outcome == PollOutcome.READY
    assert decision.reason is None
    assert decision.is_terminal


def test_crash_signature_beats_matching_counts():
    decision = decide(
        ReplicaStatus(desired_replicas=2, ready_replicas=2),
        PodHealthSnapshot(crash_signature_count=1),
    )

    assert decision.outcome == PollOutcome.FATAL
    assert decision.reason == FatalReason.POD_FAILURE_DETECTED


def test_high_restarts_beat_matching_counts():
    decision = decide(
        ReplicaStatus(desired_replicas=2, ready_replicas=2),
        PodHealthSnapshot(high_restart_count=1),
    )

    assert decision.reason == FatalReason.POD_FAILURE_DETECTED


@pytest.mark.parametrize("ready,not_ready", [(2, 1), (3, 1), (0, 0)])
def test_pending_until_counts_match_and_pods_ready(ready, not_ready):
    decision = decide(
        ReplicaStatus(desired_replicas=3, ready_replicas=ready),
        PodHealthSnapshot(not_ready_count=not_ready),
    )

    assert decision.outcome == PollOutcome.PENDING
    assert not decision.is_terminal
