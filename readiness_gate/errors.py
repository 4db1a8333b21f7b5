"""Errors raised by the readiness gate.

Every error is terminal: the gate reports it once and exits non-zero.
Retrying is left to whoever invoked the gate.
"""


class ReadinessError(Exception):
    """Base class for all readiness gate failures."""


class ValidationError(ReadinessError):
    """Raised before polling starts."""


class MissingArgument(ValidationError):
    def __init__(self):
        super().__init__("Missing arguments. Usage: <kind> <name> <namespace> [timeout]")


class UnsupportedKind(ValidationError):
    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"Unsupported kind '{kind}'. Expected deployment or statefulset.")


class InvalidTimeout(ValidationError):
    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid timeout '{value}'. Expected a non-negative number of seconds.")


class NamespaceNotFound(ValidationError):
    def __init__(self, namespace: str):
        self.namespace = namespace
        super().__init__(f"Namespace {namespace} does not exist.")


class ResourceNotFound(ValidationError):
    def __init__(self, kind: str, name: str, namespace: str):
        self.kind = kind
        self.name = name
        self.namespace = namespace
        super().__init__(f"{kind} {name} not found in namespace {namespace}.")


class ZeroDesiredReplicas(ReadinessError):
    def __init__(self, kind: str, name: str):
        super().__init__(f"{kind} {name} has 0 desired replicas.")


class PodFailureDetected(ReadinessError):
    def __init__(self, detail: str):
        super().__init__(f"Detected pod failure conditions ({detail}).")


class TimeoutExceeded(ReadinessError):
    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(f"Timeout reached after {timeout:g} seconds.")
