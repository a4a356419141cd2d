from __future__ import annotations

import pytest

from graphite_adapter.core.errors import GraphiteProtocolError
from graphite_adapter.core.response_parsing import parse_json_payload, parse_render_payload
from tests.shared.transport import Response


def test_parse_json_payload_maps_invalid_json_to_protocol_error():
    with pytest.raises(GraphiteProtocolError, match="not valid JSON"):
        parse_json_payload(Response(200, ValueError("bad json")), http_status=200)


def test_parse_render_payload_builds_raw_series():
    raw = parse_render_payload(
        [
            {"target": "a.b", "datapoints": [[1.0, 100], [None, 160]]},
            {"target": "a.c", "datapoints": []},
        ]
    )
    assert [series.target for series in raw.series] == ["a.b", "a.c"]
    assert raw.series[0].datapoints == ((1.0, 100), (None, 160))


def test_parse_render_payload_null_body_is_empty():
    assert len(parse_render_payload(None)) == 0


@pytest.mark.parametrize(
    ("payload", "message"),
    [
        ({"target": "a"}, "root must be a list"),
        ([1], "series must be an object"),
        ([{"datapoints": []}], "target must be a string"),
        ([{"target": "a", "datapoints": {}}], "datapoints must be a list"),
        ([{"target": "a", "datapoints": [5]}], "datapoint must be a list"),
    ],
)
def test_parse_render_payload_rejects_bad_shapes(payload, message):
    with pytest.raises(GraphiteProtocolError, match=message):
        parse_render_payload(payload, http_status=200)
