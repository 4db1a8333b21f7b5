"""
Per-tick status aggregation for a workload.

Each call to StatusAggregator.read() issues fresh queries:

1. read the workload object and take its replica counts and pod selector
2. list the pods matching that selector and scan their statuses

Nothing is carried over from one tick to the next.
"""
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from kubernetes import client
from kubernetes.client.rest import ApiException
from urllib3.exceptions import HTTPError

from .config import Settings
from .kubernetes_client import KubernetesClient, Workload
from .validators import WorkloadRef

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReplicaStatus:
    """Replica counts reported by the workload itself."""
    desired_replicas: int = 0
    ready_replicas: int = 0


@dataclass(frozen=True)
class PodHealthSnapshot:
    """Health counts over the pods selected by the workload."""
    not_ready_count: int = 0
    crash_signature_count: int = 0
    high_restart_count: int = 0
    failing_pods: Tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Reading:
    """One tick's view of a workload."""
    replicas: ReplicaStatus
    pods: PodHealthSnapshot
    selector: str = ""

    def describe(self) -> str:
        return (
            f"Ready: {self.replicas.ready_replicas}, "
            f"Desired: {self.replicas.desired_replicas}, "
            f"Not Ready Pods: {self.pods.not_ready_count}, "
            f"CrashLoopBackOff: {self.pods.crash_signature_count}, "
            f"HighRestarts: {self.pods.high_restart_count}"
        )


def _as_count(value) -> int:
    try:
        return max(int(value or 0), 0)
    except (TypeError, ValueError):
        return 0


def replica_status(workload: Optional[Workload]) -> ReplicaStatus:
    """Read status.replicas and status.readyReplicas, defaulting to 0."""
    status = getattr(workload, "status", None)
    if status is None:
        return ReplicaStatus()
    return ReplicaStatus(
        desired_replicas=_as_count(getattr(status, "replicas", 0)),
        ready_replicas=_as_count(getattr(status, "ready_replicas", 0)),
    )


def _render_requirement(req: client.V1LabelSelectorRequirement) -> Optional[str]:
    values = ",".join(req.values or [])
    if req.operator == "In":
        return f"{req.key} in ({values})"
    if req.operator == "NotIn":
        return f"{req.key} notin ({values})"
    if req.operator == "Exists":
        return req.key
    if req.operator == "DoesNotExist":
        return f"!{req.key}"
    logger.warning(f"Ignoring selector requirement with unknown operator: {req.operator}")
    return None


def label_selector(workload: Optional[Workload]) -> str:
    """Render the workload's spec.selector as a label selector string."""
    spec = getattr(workload, "spec", None)
    selector = getattr(spec, "selector", None)
    if selector is None:
        return ""

    terms = [f"{key}={value}" for key, value in (selector.match_labels or {}).items()]
    for req in selector.match_expressions or []:
        term = _render_requirement(req)
        if term:
            terms.append(term)
    return ",".join(terms)


def _container_statuses(pod: client.V1Pod, include_init: bool = False) -> List[client.V1ContainerStatus]:
    status = pod.status
    if status is None:
        return []
    statuses = list(status.container_statuses or [])
    if include_init:
        statuses += status.init_container_statuses or []
    return statuses


def is_not_ready(pod: client.V1Pod) -> bool:
    """Pod carries a Ready condition that is not True."""
    conditions = pod.status.conditions if pod.status else None
    return any(c.type == "Ready" and c.status != "True" for c in conditions or [])


def has_crash_signature(pod: client.V1Pod, reasons: Iterable[str]) -> bool:
    """Any container (init containers included) is waiting with a failure reason."""
    for cs in _container_statuses(pod, include_init=True):
        waiting = cs.state.waiting if cs.state else None
        if waiting is not None and waiting.reason in reasons:
            return True
    return False


def restart_total(pod: client.V1Pod) -> int:
    return sum(_as_count(cs.restart_count) for cs in _container_statuses(pod))


def snapshot_pods(pods: Iterable[client.V1Pod], settings: Settings) -> PodHealthSnapshot:
    """Count not-ready, crashing and frequently restarting pods."""
    not_ready = crashing = restarting = 0
    failing = []
    for pod in pods:
        if is_not_ready(pod):
            not_ready += 1

        crashed = has_crash_signature(pod, settings.failure_reasons)
        restarted = restart_total(pod) > settings.restart_threshold
        crashing += crashed
        restarting += restarted
        if crashed or restarted:
            failing.append(pod.metadata.name if pod.metadata else "<unknown>")

    return PodHealthSnapshot(
        not_ready_count=not_ready,
        crash_signature_count=crashing,
        high_restart_count=restarting,
        failing_pods=tuple(failing),
    )


class StatusAggregator:
    """Takes a fresh Reading of a workload on every call."""

    def __init__(self, k8s: KubernetesClient, settings: Settings):
        self.k8s = k8s
        self.settings = settings

    def _fetch_workload(self, ref: WorkloadRef) -> Optional[Workload]:
        try:
            workload = self.k8s.get_workload(ref.kind, ref.name)
        except (ApiException, HTTPError) as e:
            logger.warning(f"Error reading {ref}, treating counts as 0: {e}")
            return None
        if workload is None:
            logger.warning(f"{ref} disappeared, treating counts as 0")
        return workload

    def _list_pods(self, ref: WorkloadRef, selector: str) -> List[client.V1Pod]:
        try:
            return self.k8s.list_pods(label_selector=selector)
        except (ApiException, HTTPError) as e:
            logger.warning(f"Error listing pods for {ref}, treating pod counts as 0: {e}")
            return []

    def read(self, ref: WorkloadRef) -> Reading:
        """Query the workload and its pods once."""
        workload = self._fetch_workload(ref)
        replicas = replica_status(workload)
        selector = label_selector(workload)

        if selector:
            pods = snapshot_pods(self._list_pods(ref, selector), self.settings)
        else:
            if workload is not None:
                logger.warning(f"{ref} has an empty pod selector, skipping pod checks")
            pods = PodHealthSnapshot()

        reading = Reading(replicas=replicas, pods=pods, selector=selector)
        logger.debug(f"{ref}: selector='{selector}' {reading.describe()}")
        return reading
