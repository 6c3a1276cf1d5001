"""Entry point for `python -m kuberoot`.

Usage:
    python -m kuberoot scan
    uv run python -m kuberoot scan --output json
"""

from __future__ import annotations

from kuberoot.cli import cli

cli(prog_name="kuberoot")
