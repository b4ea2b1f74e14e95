from __future__ import annotations

import httpx

from rollsum.config.settings import settings

JSON_HEADERS = {"content-type": "application/json"}


class MetricsClientError(RuntimeError):
    """Raised when the metrics service answers with a non-200 status."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"metrics service returned {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class MetricsClient:
    """
    Thin HTTP client for the /metric API.

    Pass `client` to reuse a connection pool or to inject an
    httpx.MockTransport in tests.
    """

    def __init__(
        self,
        base_url: str | None = None,
        client: httpx.Client | None = None,
        timeout_s: float | None = None,
    ) -> None:
        self.base_url = (base_url or settings.base_url).rstrip("/")
        self.timeout_s = timeout_s if timeout_s is not None else settings.client_timeout_s
        self._client = client

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        url = f"{self.base_url}{path}"
        if self._client is not None:
            resp = self._client.request(method, url, headers=JSON_HEADERS, **kwargs)
        else:
            with httpx.Client(timeout=self.timeout_s) as c:
                resp = c.request(method, url, headers=JSON_HEADERS, **kwargs)
        if resp.status_code != 200:
            raise MetricsClientError(resp.status_code, resp.text)
        return resp

    def record(self, key: str, value: int) -> None:
        self._request("POST", f"/metric/{key}", json={"value": value})

    def sum(self, key: str) -> int:
        resp = self._request("GET", f"/metric/{key}/sum")
        return int(resp.json()["value"])
