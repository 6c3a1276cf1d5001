"""kuberoot: audit a Kubernetes cluster for containers running as root."""

__version__ = "0.1.0"
