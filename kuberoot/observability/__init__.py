"""Logging and metrics for kuberoot."""
