from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from graphite_adapter.core.errors import (
    GraphiteProtocolError,
    GraphiteServerError,
    GraphiteTransportError,
    GraphiteUnavailableError,
    GraphiteValidationError,
)
from graphite_adapter.core.transport import GraphiteTransport, build_default_headers
from graphite_adapter.config import GraphiteClientConfig
from graphite_adapter.timeseries.queries import RenderRequest
from tests.shared.payloads import make_series_payload
from tests.shared.transport import Response, Step, SyncSequencedClient, build_config

START = datetime(2026, 1, 1, 0, 0, tzinfo=timezone.utc)
REQUEST = RenderRequest(targets=["a.*"], start=START, end=START + timedelta(hours=1))
OK = Response(200, [make_series_payload("a.b")])


def _transport(steps: list[Step], *, max_attempts: int = 3) -> tuple[GraphiteTransport, SyncSequencedClient]:
    client = SyncSequencedClient(steps)
    transport = GraphiteTransport(
        build_config(max_attempts=max_attempts),
        client=client,
        sleeper=lambda _: None,
    )
    return transport, client


@pytest.mark.parametrize(
    ("steps", "max_attempts", "expected_exception", "expected_calls"),
    [
        ([Response(503, None), OK], 2, None, 2),
        ([Response(500, None)], 1, GraphiteServerError, 1),
        ([Response(502, None), Response(504, None)], 2, GraphiteUnavailableError, 2),
        ([RuntimeError("network down"), OK], 2, None, 2),
        ([RuntimeError("network down")], 1, GraphiteTransportError, 1),
        ([Response(400, None), OK], 3, GraphiteValidationError, 1),
        ([Response(200, ValueError("bad json"))], 3, GraphiteProtocolError, 1),
    ],
    ids=[
        "503-then-success",
        "500-exhausted",
        "gateway-exhausted",
        "network-then-success",
        "network-exhausted",
        "400-not-retried",
        "invalid-json",
    ],
)
def test_transport_retry_matrix(steps, max_attempts, expected_exception, expected_calls):
    transport, client = _transport(steps, max_attempts=max_attempts)

    if expected_exception is not None:
        with pytest.raises(expected_exception):
            transport.query(REQUEST)
    else:
        raw = transport.query(REQUEST)
        assert [series.target for series in raw.series] == ["a.b"]

    assert len(client.calls) == expected_calls


def test_transport_sends_render_params():
    transport, client = _transport([OK])
    transport.query(REQUEST)
    endpoint, params = client.calls[0]
    assert endpoint == "render"
    assert params == REQUEST.params()


def test_transport_rejects_use_after_close():
    transport, client = _transport([OK])
    transport.close()
    with pytest.raises(GraphiteTransportError, match="closed"):
        transport.query(REQUEST)
    assert client.closed is False


def test_default_headers_include_configured_extras():
    config = GraphiteClientConfig(headers={"X-Org": "ops"})
    headers = build_default_headers(config)
    assert headers["X-Org"] == "ops"
    assert headers["User-Agent"] == config.user_agent


def test_transport_can_initialize_and_close_with_real_httpx_client():
    transport = GraphiteTransport(build_config(max_attempts=1))
    transport.close()
