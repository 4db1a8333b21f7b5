"""Readiness gate for Kubernetes Deployments and StatefulSets."""
from .config import Settings, load_settings
from .errors import (
    InvalidTimeout,
    MissingArgument,
    NamespaceNotFound,
    PodFailureDetected,
    ReadinessError,
    ResourceNotFound,
    TimeoutExceeded,
    UnsupportedKind,
    ZeroDesiredReplicas,
)
from .kubernetes_client import KubernetesClient
from .monitor import ReadinessMonitor
from .policy import Decision, FatalReason, PollOutcome, decide
from .status import PodHealthSnapshot, Reading, ReplicaStatus, StatusAggregator
from .validators import WorkloadRef, validate_arguments, validate_target

__all__ = [
    "Decision",
    "FatalReason",
    "InvalidTimeout",
    "KubernetesClient",
    "MissingArgument",
    "NamespaceNotFound",
    "PodFailureDetected",
    "PodHealthSnapshot",
    "PollOutcome",
    "ReadinessError",
    "ReadinessMonitor",
    "Reading",
    "ReplicaStatus",
    "ResourceNotFound",
    "Settings",
    "StatusAggregator",
    "TimeoutExceeded",
    "UnsupportedKind",
    "WorkloadRef",
    "ZeroDesiredReplicas",
    "decide",
    "load_settings",
    "validate_arguments",
    "validate_target",
]
