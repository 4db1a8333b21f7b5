"""
Readiness monitor: the polling loop behind ``check_readiness``.
"""
import logging
import time
from typing import Callable, Optional

from .config import Settings
from .errors import PodFailureDetected, TimeoutExceeded, ZeroDesiredReplicas
from .kubernetes_client import KubernetesClient
from .policy import FatalReason, PollOutcome, decide
from .status import Reading, StatusAggregator
from .validators import WorkloadRef, validate_target

logger = logging.getLogger(__name__)


class ReadinessMonitor:
    """
    Poll a workload until it is ready, fails, or the timeout expires.

    Args:
        k8s: Kubernetes client bound to the workload's namespace
        settings: Check tunables (timeout, delays, thresholds)
        clock: Monotonic clock returning seconds
        sleep: Blocking sleep taking seconds
        echo: Receives the human-readable progress lines
    """

    def __init__(
        self,
        k8s: KubernetesClient,
        settings: Optional[Settings] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        echo: Callable[[str], None] = print,
    ):
        self.k8s = k8s
        self.settings = settings or Settings()
        self.aggregator = StatusAggregator(k8s, self.settings)
        self.clock = clock
        self.sleep = sleep
        self.echo = echo

    def wait_until_ready(self, ref: WorkloadRef) -> Reading:
        """
        Validate the target, then poll it until a terminal outcome.

        Returns:
            The reading on which the workload was found ready

        Raises:
            NamespaceNotFound, ResourceNotFound: before any tick runs
            ZeroDesiredReplicas, PodFailureDetected: on the first fatal tick
            TimeoutExceeded: once the timeout has fully elapsed
        """
        validate_target(self.k8s, ref)

        self.echo(f"Checking readiness for {ref.kind}: {ref.name} in namespace: {ref.namespace}")
        if self.settings.settle_delay:
            logger.debug(f"Settling for {self.settings.settle_delay}s before first tick")
            self.sleep(self.settings.settle_delay)

        timeout = self.settings.timeout
        start_time = self.clock()
        ticks = 0

        while True:
            elapsed = self.clock() - start_time
            if elapsed >= timeout:
                logger.error(f"{ref} not ready after {timeout}s ({ticks} ticks)")
                raise TimeoutExceeded(timeout)

            ticks += 1
            reading = self.aggregator.read(ref)
            decision = decide(reading.replicas, reading.pods)
            logger.debug(f"Tick {ticks} at {elapsed:.1f}s: {decision.outcome.value}")

            if not decision.is_terminal:
                self.echo(f"Waiting... {reading.describe()}")
                self.sleep(self.settings.poll_interval)
                continue

            if decision.outcome == PollOutcome.FATAL:
                self._raise_fatal(ref, decision.reason, reading)

            self.echo(f"{ref.kind} '{ref.name}' is ready. Ready replicas: {reading.replicas.ready_replicas}.")
            logger.info(f"{ref} ready after {ticks} ticks")
            return reading

    def _raise_fatal(self, ref: WorkloadRef, reason: FatalReason, reading: Reading):
        if reason == FatalReason.ZERO_DESIRED_REPLICAS:
            raise ZeroDesiredReplicas(ref.kind, ref.name)

        pods = reading.pods
        detail = f"CrashLoop: {pods.crash_signature_count}, HighRestarts: {pods.high_restart_count}"
        if pods.failing_pods:
            detail += f"; pods: {', '.join(pods.failing_pods)}"
        raise PodFailureDetected(detail)
