from __future__ import annotations

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from rollsum.clients.metrics_client import MetricsClient, MetricsClientError


def test_record_and_sum_without_network():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if request.method == "POST":
            return httpx.Response(200, json={})
        return httpx.Response(200, json={"value": 42})

    client = httpx.Client(transport=httpx.MockTransport(handler))
    metrics = MetricsClient(base_url="http://metrics.test/", client=client)

    metrics.record("foo", 30)
    assert metrics.sum("foo") == 42

    post, get = seen
    assert post.method == "POST"
    assert str(post.url) == "http://metrics.test/metric/foo"
    assert post.headers["content-type"] == "application/json"
    assert json.loads(post.content) == {"value": 30}

    assert get.method == "GET"
    assert str(get.url) == "http://metrics.test/metric/foo/sum"
    assert get.headers["content-type"] == "application/json"


def test_non_200_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"detail": "Error: nope"})

    client = httpx.Client(transport=httpx.MockTransport(handler))
    metrics = MetricsClient(base_url="http://metrics.test", client=client)

    with pytest.raises(MetricsClientError) as exc_info:
        metrics.sum("foo")
    assert exc_info.value.status_code == 404
    assert "nope" in exc_info.value.body


def test_against_app(client, clock):
    metrics = MetricsClient(base_url="http://testserver", client=client)

    metrics.record("foo", 4)
    metrics.record("foo", -1)
    assert metrics.sum("foo") == 3

    clock.advance(61 * 60)
    assert metrics.sum("foo") == 0


def test_server_rejection_surfaces_as_error(client):
    metrics = MetricsClient(base_url="http://testserver", client=client)
    with pytest.raises(MetricsClientError) as exc_info:
        metrics.record("not-a-word-key", 1)
    assert exc_info.value.status_code == 404
