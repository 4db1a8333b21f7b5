"""
Read-only Kubernetes API client wrapper for readiness checks.
"""

import logging
from typing import List, Optional, Union
from kubernetes import client, config
from kubernetes.client.rest import ApiException
from urllib3.exceptions import HTTPError

logger = logging.getLogger(__name__)

DEPLOYMENT = "Deployment"
STATEFUL_SET = "StatefulSet"

Workload = Union[client.V1Deployment, client.V1StatefulSet]


class KubernetesClient:
    """Wrapper for the read operations the readiness gate needs."""

    def __init__(self, namespace: str = "default", context: Optional[str] = None):
        """Initialize Kubernetes client."""
        try:
            config.load_kube_config(context=context)
        except Exception:
            config.load_incluster_config()

        self.namespace = namespace
        self.core_v1 = client.CoreV1Api()
        self.apps_v1 = client.AppsV1Api()

    def namespace_exists(self) -> bool:
        """Check whether the client's namespace exists."""
        try:
            self.core_v1.read_namespace(self.namespace)
            return True
        except ApiException as e:
            if e.status == 404:
                return False
            raise

    def get_workload(self, kind: str, name: str) -> Optional[Workload]:
        """Get a Deployment or StatefulSet by name."""
        try:
            if kind == DEPLOYMENT:
                return self.apps_v1.read_namespaced_deployment(name, self.namespace)
            if kind == STATEFUL_SET:
                return self.apps_v1.read_namespaced_stateful_set(name, self.namespace)
        except ApiException as e:
            if e.status == 404:
                return None
            raise
        raise ValueError(f"Unsupported workload kind: {kind}")

    def list_pods(self, label_selector: str = None) -> List[client.V1Pod]:
        """List pods with optional label selector."""
        try:
            result = self.core_v1.list_namespaced_pod(
                self.namespace,
                label_selector=label_selector
            )
            return result.items
        except (ApiException, HTTPError) as e:
            logger.warning(f"Error listing pods with selector '{label_selector}': {e}")
            return []
