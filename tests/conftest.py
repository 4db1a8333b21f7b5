"""
Pytest configuration and shared fixtures for readiness gate tests.
"""

import os
import logging
from unittest.mock import MagicMock

import pytest
from kubernetes import client

from readiness_gate.config import Settings
from readiness_gate.kubernetes_client import DEPLOYMENT, KubernetesClient

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s'
)


class FakeClock:
    """Monotonic clock that only moves when sleep() is called (or tick_cost is set)."""

    def __init__(self, start: float = 1000.0, tick_cost: float = 0.0):
        self.now = start
        self.tick_cost = tick_cost
        self.sleeps = []

    def __call__(self) -> float:
        current = self.now
        self.now += self.tick_cost
        return current

    def sleep(self, seconds: float):
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def settings():
    """Default settings."""
    return Settings()


@pytest.fixture
def k8s():
    """Kubernetes client stand-in bound to the 'apps' namespace."""
    mock = MagicMock(spec=KubernetesClient)
    mock.namespace = "apps"
    mock.namespace_exists.return_value = True
    mock.list_pods.return_value = []
    return mock


@pytest.fixture
def make_workload():
    """Build a V1Deployment / V1StatefulSet with the given status and selector."""
    def _make(replicas=3, ready=3, kind=DEPLOYMENT, name="web",
              match_labels=None, match_expressions=None, with_status=True):
        model = client.V1Deployment if kind == DEPLOYMENT else client.V1StatefulSet
        spec_model = client.V1DeploymentSpec if kind == DEPLOYMENT else client.V1StatefulSetSpec
        status_model = client.V1DeploymentStatus if kind == DEPLOYMENT else client.V1StatefulSetStatus

        selector = client.V1LabelSelector(
            match_labels={"app": name} if match_labels is None else match_labels,
            match_expressions=match_expressions,
        )
        template = client.V1PodTemplateSpec(metadata=client.V1ObjectMeta(labels={"app": name}))
        if kind == DEPLOYMENT:
            spec = spec_model(selector=selector, template=template)
        else:
            spec = spec_model(selector=selector, template=template, service_name=name)
        status = status_model(replicas=replicas, ready_replicas=ready) if with_status else None
        return model(
            metadata=client.V1ObjectMeta(name=name, namespace="apps"),
            spec=spec,
            status=status,
        )
    return _make


@pytest.fixture
def make_pod():
    """Build a V1Pod with a single container in the requested state."""
    def _make(name="web-0", ready=True, waiting_reason=None, restarts=0,
              init_waiting_reason=None, with_statuses=True, containers=1):
        if not with_statuses:
            return client.V1Pod(
                metadata=client.V1ObjectMeta(name=name),
                status=client.V1PodStatus(phase="Pending"),
            )

        def _status(container_name, reason, restart_count):
            if reason:
                state = client.V1ContainerState(waiting=client.V1ContainerStateWaiting(reason=reason))
            else:
                state = client.V1ContainerState(running=client.V1ContainerStateRunning())
            return client.V1ContainerStatus(
                name=container_name,
                image="example/web:1.0",
                image_id="",
                ready=reason is None,
                restart_count=restart_count,
                state=state,
            )

        container_statuses = [
            _status(f"c{i}", waiting_reason if i == 0 else None, restarts)
            for i in range(containers)
        ]
        init_statuses = [_status("init", init_waiting_reason, 0)] if init_waiting_reason else None
        return client.V1Pod(
            metadata=client.V1ObjectMeta(name=name),
            status=client.V1PodStatus(
                phase="Running",
                conditions=[client.V1PodCondition(type="Ready", status="True" if ready else "False")],
                container_statuses=container_statuses,
                init_container_statuses=init_statuses,
            ),
        )
    return _make


@pytest.fixture(scope="session")
def k8s_namespace():
    """Return the Kubernetes namespace for integration tests."""
    return os.environ.get("READINESS_TEST_NAMESPACE")


@pytest.fixture(scope="session")
def k8s_deployment():
    """Return the Deployment name for integration tests."""
    return os.environ.get("READINESS_TEST_DEPLOYMENT")


def pytest_configure(config):
    """Pytest configuration hook."""
    config.addinivalue_line(
        "markers", "integration: Integration test requiring a live cluster"
    )


def pytest_collection_modifyitems(config, items):
    """Mark everything under integration/ as an integration test."""
    for item in items:
        if "integration/" in item.nodeid:
            item.add_marker(pytest.mark.integration)
