"""JSON webhook delivery of audit reports.

Posts the same payload as ``--output json`` to any configured HTTP endpoint
so that results can be collected centrally from many clusters.
"""

from __future__ import annotations

import httpx
import structlog

_log = structlog.get_logger(component="report.webhook")


class ReportWebhook:
    """Delivers reports by POSTing a JSON payload to a configurable URL.

    Args:
        url:     Full endpoint URL (must be HTTPS in production).
        headers: Optional extra headers (e.g. Authorization).
        timeout: HTTP request timeout in seconds. Defaults to 10.
        transport: Optional httpx transport, used by tests.
    """

    def __init__(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not url:
            raise ValueError("Webhook url must not be empty")
        self._url = url
        self._headers = headers or {}
        self._timeout = timeout
        self._transport = transport

    async def send(self, payload: dict[str, object]) -> bool:
        """POST *payload* as JSON to the configured endpoint.

        Returns True on 2xx response, False otherwise.  Never raises for
        delivery failures; a lost report must not fail the audit.
        """
        request_headers = {
            "Content-Type": "application/json",
            **self._headers,
        }

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(
                    self._url,
                    json=payload,
                    headers=request_headers,
                )
                if response.is_success:
                    _log.info("report delivered", url=self._url, status_code=response.status_code)
                    return True
                _log.warning(
                    "webhook_non_2xx_response",
                    status_code=response.status_code,
                    body=response.text[:200],
                )
                return False
        except httpx.TimeoutException:
            _log.warning("webhook_request_timeout", url=self._url)
            return False
        except httpx.HTTPError as exc:
            _log.warning("webhook_http_error", error=str(exc), url=self._url)
            return False
        except httpx.InvalidURL as exc:
            _log.warning("webhook_invalid_url", error=str(exc), url=self._url)
            return False
