"""Error taxonomy for kuberoot.

AuthError        -- no usable cluster session.  Always fatal.
EnumerationError -- a list/get call failed.  Fatal only when listing
                    namespaces; pods and containers are skipped instead.
ExecError        -- a probe could not run inside a container.  Never fatal;
                    the container is recorded as an error case.
"""

from __future__ import annotations


class KubeRootError(Exception):
    """Base class for every error raised by kuberoot."""


class AuthError(KubeRootError):
    """Raised when a cluster session cannot be established."""


class EnumerationError(KubeRootError):
    """Raised when listing namespaces, pods or containers fails."""

    def __init__(
        self,
        level: str,
        message: str,
        namespace: str = "",
        pod: str = "",
    ) -> None:
        super().__init__(message)
        self.level = level
        self.namespace = namespace
        self.pod = pod


class ExecError(KubeRootError):
    """Raised when a command cannot be executed inside a container."""

    def __init__(self, namespace: str, pod: str, container: str, message: str) -> None:
        super().__init__(f"exec in {namespace}/{pod}/{container} failed: {message}")
        self.namespace = namespace
        self.pod = pod
        self.container = container
        self.reason = message
