from unittest.mock import MagicMock, patch

import pytest
import requests

from cluster_report.ingestion.errors import DecodeError, PollError, PollTimeoutError, TriggerError
from cluster_report.ingestion.fetch_status import (
    StatusPayload,
    fetch_status,
    parse_status_payload,
    poll_for_status,
    trigger_status,
)

API = "https://status.example.com"
STATUS_URL = "https://status.example.com/api/v1/ocp-shared-clusters/status"


def _pending(make_response):
    return make_response(200, {"status": "pending", "body": {}})


def _success(make_response, clusters=None):
    return make_response(200, {"status": "success", "body": {"clusters": clusters or {"c1": {"a": 1}}}})


class TestParseStatusPayload:
    def test_success_payload(self):
        payload = parse_status_payload({"status": "success", "body": {"clusters": {"c1": {}}}})
        assert payload == StatusPayload(status="success", clusters={"c1": {}})
        assert payload.is_success

    def test_missing_body_means_no_clusters(self):
        payload = parse_status_payload({"status": "pending"})
        assert payload.clusters == {}
        assert not payload.is_success

    def test_missing_status_is_not_success(self):
        assert parse_status_payload({}).status == ""

    @pytest.mark.parametrize(
        "data",
        [
            ["not", "an", "object"],
            {"status": "success", "body": "oops"},
            {"status": "success", "body": {"clusters": ["c1"]}},
        ],
    )
    def test_malformed_payload_raises(self, data):
        with pytest.raises(DecodeError):
            parse_status_payload(data)


@patch("cluster_report.ingestion.fetch_status.requests.post")
def test_trigger_sends_post_with_bearer(mock_post, make_response):
    mock_post.return_value = make_response(202, None)

    trigger_status(API, "tok")

    args, kwargs = mock_post.call_args
    assert args[0] == STATUS_URL
    assert kwargs["headers"] == {"Authorization": "Bearer tok"}
    assert kwargs["timeout"] == 10


@patch("cluster_report.ingestion.fetch_status.requests.post")
def test_trigger_ignores_error_status(mock_post, make_response):
    mock_post.return_value = make_response(500, {"error": "busy"})
    trigger_status(API, "tok")


@patch("cluster_report.ingestion.fetch_status.requests.post")
def test_trigger_transport_error_raises(mock_post):
    mock_post.side_effect = requests.ConnectionError("down")
    with pytest.raises(TriggerError):
        trigger_status(API, "tok")


@patch("cluster_report.ingestion.fetch_status.requests.get")
def test_fetch_status_decode_error(mock_get, make_response):
    mock_get.return_value = make_response(502, text="Bad Gateway")
    with pytest.raises(DecodeError):
        fetch_status(API, "tok")


@patch("cluster_report.ingestion.fetch_status.requests.get")
def test_fetch_status_transport_error(mock_get):
    mock_get.side_effect = requests.Timeout("slow")
    with pytest.raises(PollError):
        fetch_status(API, "tok")


@patch("cluster_report.ingestion.fetch_status.requests.post")
@patch("cluster_report.ingestion.fetch_status.requests.get")
class TestPollForStatus:
    def test_returns_first_success_without_further_gets(self, mock_get, mock_post, make_response):
        mock_post.return_value = make_response(202, None)
        mock_get.side_effect = [
            _pending(make_response),
            _pending(make_response),
            _success(make_response),
            _success(make_response, {"never": {}}),
        ]
        sleep = MagicMock()

        payload = poll_for_status(API, "tok", sleep=sleep)

        assert payload.clusters == {"c1": {"a": 1}}
        assert mock_post.call_count == 1
        assert mock_get.call_count == 3
        assert sleep.call_count == 3
        sleep.assert_called_with(2)

    def test_post_happens_before_any_get(self, mock_get, mock_post, make_response):
        calls = []
        mock_post.side_effect = lambda *a, **k: calls.append("POST") or make_response(202, None)
        mock_get.side_effect = lambda *a, **k: calls.append("GET") or _success(make_response)

        poll_for_status(API, "tok", sleep=lambda _: None)

        assert calls == ["POST", "GET"]

    def test_times_out_after_ten_attempts(self, mock_get, mock_post, make_response):
        mock_post.return_value = make_response(202, None)
        mock_get.side_effect = [_pending(make_response) for _ in range(11)]
        sleep = MagicMock()

        with pytest.raises(PollTimeoutError, match="10 attempts"):
            poll_for_status(API, "tok", sleep=sleep)

        assert mock_post.call_count == 1
        assert mock_get.call_count == 10
        assert sleep.call_count == 10

    def test_custom_budget_and_interval(self, mock_get, mock_post, make_response):
        mock_post.return_value = make_response(202, None)
        mock_get.return_value = _pending(make_response)
        sleep = MagicMock()

        with pytest.raises(PollTimeoutError):
            poll_for_status(API, "tok", attempts=3, interval=0.5, sleep=sleep)

        assert mock_get.call_count == 3
        sleep.assert_called_with(0.5)

    def test_other_status_keeps_polling(self, mock_get, mock_post, make_response):
        mock_post.return_value = make_response(202, None)
        mock_get.side_effect = [
            make_response(200, {"status": "failed"}),
            _success(make_response),
        ]

        payload = poll_for_status(API, "tok", sleep=lambda _: None)

        assert payload.is_success
        assert mock_get.call_count == 2

    def test_trigger_failure_skips_polling(self, mock_get, mock_post):
        mock_post.side_effect = requests.ConnectionError("down")

        with pytest.raises(TriggerError):
            poll_for_status(API, "tok", sleep=lambda _: None)

        mock_get.assert_not_called()

    def test_malformed_poll_response_is_fatal(self, mock_get, mock_post, make_response):
        mock_post.return_value = make_response(202, None)
        mock_get.side_effect = [make_response(200, text="{"), _success(make_response)]

        with pytest.raises(DecodeError):
            poll_for_status(API, "tok", sleep=lambda _: None)

        assert mock_get.call_count == 1

    def test_bearer_token_on_every_get(self, mock_get, mock_post, make_response):
        mock_post.return_value = make_response(202, None)
        mock_get.side_effect = [_pending(make_response), _success(make_response)]

        poll_for_status(API, "tok", sleep=lambda _: None)

        for call in mock_get.call_args_list:
            assert call.args[0] == STATUS_URL
            assert call.kwargs["headers"]["Authorization"] == "Bearer tok"
