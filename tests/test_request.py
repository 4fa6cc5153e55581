"""Tests for request building."""

from __future__ import annotations

import json

from ecp_client.catalog import PressKey, Query, QueryAppIcon
from ecp_client.message import TextMessage
from ecp_client.request import EcpRequest, build_request_text


class TestBuildRequestText:
    """Tests for build_request_text()."""

    def test_no_params(self):
        """Subject and request-id only."""
        assert (
            build_request_text("query-device-info", 4)
            == '{"request":"query-device-info","request-id":"4"}'
        )

    def test_params_before_request_id(self):
        """Params are inserted between request and request-id."""
        text = build_request_text("key-press", 1, {"param-key": "Home"})
        assert text == '{"request":"key-press","param-key":"Home","request-id":"1"}'

    def test_multiple_params_parse(self):
        """Output is valid JSON carrying every param."""
        params = {"param-id": "volume", "param-value": "10"}
        body = json.loads(build_request_text("set-audio-setting", 2, params))
        assert body == {
            "request": "set-audio-setting",
            "param-id": "volume",
            "param-value": "10",
            "request-id": "2",
        }
        assert list(body)[0] == "request"
        assert list(body)[-1] == "request-id"


class TestEcpRequest:
    """Tests for the fluent builder."""

    def test_defaults(self):
        """A new request has an empty subject and id 0."""
        request = EcpRequest()
        assert request.build() == TextMessage('{"request":"","request-id":"0"}')

    def test_fluent_chain(self):
        """Setters return the builder."""
        request = (
            EcpRequest()
            .set_subject("launch")
            .set_request_id(9)
            .add_param("param-channel-id", "12")
        )
        assert request.build() == TextMessage(
            '{"request":"launch","param-channel-id":"12","request-id":"9"}'
        )

    def test_set_params_none_keeps_existing(self):
        """set_params(None) leaves params untouched."""
        request = EcpRequest().add_param("a", "1").set_params(None)
        assert request.params == {"a": "1"}

    def test_set_params_replaces(self):
        """set_params replaces previous params."""
        request = EcpRequest().add_param("a", "1").set_params({"b": "2"})
        assert request.params == {"b": "2"}

    def test_from_query(self):
        """Parameterless queries map to their subject."""
        request = EcpRequest.from_operation(Query.DEVICE_INFO)
        assert request.subject == "query-device-info"
        assert request.params == {}

    def test_from_query_with_params(self):
        """Parameterized queries carry their params."""
        request = EcpRequest.from_operation(QueryAppIcon(channel_id=140704))
        assert request.subject == "query-icon"
        assert request.params == {"param-channel-id": "140704"}

    def test_from_command(self):
        """Commands carry their params."""
        request = EcpRequest.from_operation(PressKey("Power")).set_request_id(5)
        assert request.build().text == (
            '{"request":"key-press","param-key":"Power","request-id":"5"}'
        )
