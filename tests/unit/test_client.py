from __future__ import annotations

from datetime import timedelta

import pytest

from graphite_adapter.client import GraphiteClient
from graphite_adapter.config import BandConfig, CacheConfig, GraphiteClientConfig, RetryConfig
from graphite_adapter.core.errors import GraphiteClientClosedError, GraphiteValidationError
from tests.shared.client_fakes import RecordingTransport


def test_client_context_manager_closes_transport():
    transport = RecordingTransport()
    with GraphiteClient(transport=transport) as client:
        assert client is not None
    assert transport.closed is True


def test_client_raises_when_used_after_close():
    client = GraphiteClient(transport=RecordingTransport())
    client.close()
    with pytest.raises(GraphiteClientClosedError):
        client.query("a.b", "1h", "", "")


def test_client_rejects_invalid_config():
    with pytest.raises(GraphiteValidationError, match="retry.max_attempts"):
        GraphiteClient(
            config=GraphiteClientConfig(retry=RetryConfig(max_attempts=0)),
            transport=RecordingTransport(),
        )


def test_client_uses_injected_clock_and_records_queries(now):
    transport = RecordingTransport()
    client = GraphiteClient(transport=transport, clock=lambda: now)

    client.band("a.b", "1h", "1h", "x.y", 2)
    client.query("a.b", "1h", "", "x.y")

    assert [request.end for request in client.queries] == [
        now - timedelta(hours=1),
        now - timedelta(hours=2),
        now,
    ]


def test_client_caches_identical_windows_by_default(now):
    transport = RecordingTransport()
    client = GraphiteClient(transport=transport, clock=lambda: now)

    client.query("a.b", "1h", "", "")
    client.query("a.b", "1h", "", "")

    assert len(client.queries) == 2
    assert len(transport.requests) == 1


def test_client_cache_can_be_disabled(now):
    transport = RecordingTransport()
    client = GraphiteClient(
        config=GraphiteClientConfig(cache=CacheConfig(enabled=False)),
        transport=transport,
        clock=lambda: now,
    )

    client.query("a.b", "1h", "", "")
    client.query("a.b", "1h", "", "")

    assert len(transport.requests) == 2


def test_client_tag_keys():
    assert GraphiteClient.tag_keys("host..") == frozenset({"host"})


def test_client_rejects_band_limit_above_hundred():
    transport = RecordingTransport()
    with pytest.raises(GraphiteValidationError, match="band.max_windows"):
        GraphiteClient(
            config=GraphiteClientConfig(band=BandConfig(max_windows=500)),
            transport=transport,
        )
    assert transport.requests == []
