"""Report rendering and delivery.

Exposes:
    render         -- text or JSON rendering of a ClassificationResult.
    build_payload  -- JSON-ready dict shared by ``--output json`` and the webhook.
    ReportWebhook  -- POSTs the payload to an HTTP endpoint.
"""

from kuberoot.report.render import build_payload, render, render_json, render_text
from kuberoot.report.webhook import ReportWebhook

__all__ = ["ReportWebhook", "build_payload", "render", "render_json", "render_text"]
