"""Audit package: cluster traversal and root-identity classification."""

from kuberoot.audit.traversal import RootAuditor, find_root_containers, is_root_identity

__all__ = ["RootAuditor", "find_root_containers", "is_root_identity"]
