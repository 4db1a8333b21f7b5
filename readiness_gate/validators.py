"""Validators run once before polling begins."""
import logging
from dataclasses import dataclass
from typing import Optional

from .errors import (
    InvalidTimeout,
    MissingArgument,
    NamespaceNotFound,
    ResourceNotFound,
    UnsupportedKind,
)
from .kubernetes_client import DEPLOYMENT, STATEFUL_SET, KubernetesClient

logger = logging.getLogger(__name__)

# kubectl spellings accepted for each supported kind
KIND_ALIASES = {
    "deployment": DEPLOYMENT,
    "deployments": DEPLOYMENT,
    "deploy": DEPLOYMENT,
    "statefulset": STATEFUL_SET,
    "statefulsets": STATEFUL_SET,
    "sts": STATEFUL_SET,
}


@dataclass(frozen=True)
class WorkloadRef:
    """Identifies the workload under check."""
    kind: str
    name: str
    namespace: str

    def __str__(self) -> str:
        return f"{self.kind.lower()}/{self.name} in namespace {self.namespace}"


def normalize_kind(kind: str) -> str:
    """Map a kubectl-style kind to Deployment or StatefulSet."""
    try:
        return KIND_ALIASES[kind.strip().lower()]
    except KeyError:
        raise UnsupportedKind(kind)


def parse_timeout(value: Optional[str]) -> Optional[int]:
    """Convert the optional timeout argument to whole seconds."""
    if value is None or value == "":
        return None
    try:
        timeout = int(value)
    except ValueError:
        raise InvalidTimeout(value)
    if timeout < 0:
        raise InvalidTimeout(value)
    return timeout


def validate_arguments(kind: str, name: str, namespace: str) -> WorkloadRef:
    """Check that all arguments are present and build a WorkloadRef."""
    if not kind or not name or not namespace:
        raise MissingArgument()
    return WorkloadRef(kind=normalize_kind(kind), name=name, namespace=namespace)


def validate_target(k8s: KubernetesClient, ref: WorkloadRef):
    """Confirm the namespace and the workload exist."""
    if not k8s.namespace_exists():
        raise NamespaceNotFound(ref.namespace)

    if k8s.get_workload(ref.kind, ref.name) is None:
        raise ResourceNotFound(ref.kind, ref.name, ref.namespace)

    logger.debug(f"Validated {ref}")
