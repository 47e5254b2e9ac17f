"""Unit tests for request building, classification and decoding.

The transport is replaced by an inline fake so every call completes before
``call`` returns.
"""

from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from newtwitch.core.endpoints import BITS_LEADERBOARD, EXTENSION_ANALYTICS, GAME_ANALYTICS, Endpoint
from newtwitch.core.errors import AuthorizationError, DecodeError, InvalidCredentials
from newtwitch.core.models import (
    BitsLeaderboardParams,
    BitsLeaderboardRecord,
    ExtensionAnalytics,
    Failure,
    GameAnalyticsParams,
    Period,
    Success,
)
from newtwitch.data.credential_store import StaticTokenManager, TokenManager
from newtwitch.infrastructure.api import HelixAPI, decode_outcome, error_occurred
from tests.fakes import FailingTokenManager, FakeTransport, make_response

LEADER = {"user_id": "158010205", "user_login": "tundracowboy", "user_name": "TundraCowboy", "rank": 1, "score": 12543}


# ---------------------------------------------------------------------------
# Response classifier
# ---------------------------------------------------------------------------


class TestErrorOccurred:
    def test_missing_data_is_error(self) -> None:
        assert error_occurred(None, make_response(200), None) is True

    def test_ok_response_is_success(self) -> None:
        assert error_occurred(b"{}", make_response(200), None) is False

    def test_non_200_is_error(self) -> None:
        assert error_occurred(b"{}", make_response(404), None) is True

    @pytest.mark.parametrize("status_code", [201, 204, 401, 429, 500])
    def test_every_other_status_is_error(self, status_code: int) -> None:
        assert error_occurred(b"{}", make_response(status_code), None) is True

    @pytest.mark.parametrize(
        "data, error",
        [(None, None), (b"{}", None), (b"{}", requests.ConnectionError()), (None, requests.Timeout())],
    )
    def test_missing_response_is_error(self, data, error) -> None:
        assert error_occurred(data, None, error) is True

    def test_reported_error_wins_over_200(self) -> None:
        assert error_occurred(b"{}", make_response(200), requests.ConnectionError()) is True

    def test_response_without_status_code(self) -> None:
        response = MagicMock(spec=[])
        assert error_occurred(b"{}", response, None) is False


# ---------------------------------------------------------------------------
# Response decoder
# ---------------------------------------------------------------------------


class TestDecodeOutcome:
    def test_list_payload(self) -> None:
        response = make_response(200, payload={"data": [{"extension_id": "e", "URL": "u"}], "pagination": {}})
        result = decode_outcome(EXTENSION_ANALYTICS, response.content, response, None)

        assert isinstance(result, Success)
        assert result.value == [ExtensionAnalytics(extension_id="e", url="u")]

    def test_empty_list_is_success(self) -> None:
        response = make_response(200, payload={"data": []})
        result = decode_outcome(GAME_ANALYTICS, response.content, response, None)
        assert result == Success([])

    def test_single_payload(self) -> None:
        response = make_response(200, payload={"data": LEADER})
        result = decode_outcome(BITS_LEADERBOARD, response.content, response, None)
        assert isinstance(result, Success)
        assert result.value.user_name == "TundraCowboy"

    def test_failure_keeps_raw_artifacts_without_decoding(self) -> None:
        response = make_response(500, body=b"not json")
        result = decode_outcome(GAME_ANALYTICS, response.content, response, None)

        assert isinstance(result, Failure)
        assert result.body == b"not json"
        assert result.response is response
        assert result.error is None

    def test_missing_field_after_200(self) -> None:
        response = make_response(200, payload={"unexpected": 1})
        result = decode_outcome(BITS_LEADERBOARD, response.content, response, None)

        assert isinstance(result, Failure)
        assert isinstance(result.error, DecodeError)
        assert result.body == response.content
        assert result.response is response

    @pytest.mark.parametrize(
        "body",
        [b"not json", b"[1, 2]", b'{"data": {"extension_id": "e", "URL": "u"}}', b'{"data": [{"URL": "u"}]}'],
    )
    def test_malformed_bodies(self, body: bytes) -> None:
        response = make_response(200, body=body)
        result = decode_outcome(EXTENSION_ANALYTICS, body, response, None)
        assert isinstance(result, Failure)
        assert result.kind == "decode"

    def test_deeply_nested_body(self) -> None:
        body = b"[" * 200000 + b"]" * 200000
        response = make_response(200, body=body)

        result = decode_outcome(BITS_LEADERBOARD, body, response, None)

        assert isinstance(result, Failure)
        assert result.kind == "decode"
        assert result.response is response


# ---------------------------------------------------------------------------
# Request builder
# ---------------------------------------------------------------------------


class TestBuildRequest:
    def test_headers(self, make_api) -> None:
        api = make_api(FakeTransport(), base_headers={"Client-Id": "abc", "content-type": "text/plain"})
        request = api.build_request(BITS_LEADERBOARD, {})

        assert request.headers["Content-Type"] == "application/json"
        assert request.headers["Authorization"] == "Bearer test-token"
        assert request.headers["Client-Id"] == "abc"

    def test_get_sends_json_body(self, make_api) -> None:
        api = make_api(FakeTransport())
        params = BitsLeaderboardParams(count=5, period=Period.WEEK).encode()
        request = api.build_request(BITS_LEADERBOARD, params)

        assert request.method == "GET"
        assert request.url == "https://api.twitch.tv/helix/bits/leaderboard"
        assert json.loads(request.body) == {"count": 5, "period": "week"}

    def test_query_placement(self, make_api) -> None:
        api = make_api(FakeTransport(), params_in_query=True)
        request = api.build_request(GAME_ANALYTICS, GameAnalyticsParams(game_id="493057", first=3).encode())

        assert request.url == "https://api.twitch.tv/helix/analytics/games?game_id=493057&first=3"
        assert request.body is None

    def test_token_failure_propagates(self, make_api) -> None:
        api = make_api(FakeTransport(), token_manager=FailingTokenManager(AuthorizationError("expired")))
        with pytest.raises(AuthorizationError):
            api.build_request(GAME_ANALYTICS, {})

    def test_headers_file_is_read_once(self) -> None:
        api = HelixAPI(transport=FakeTransport(), token_manager=StaticTokenManager("t"))

        with patch("newtwitch.infrastructure.api.load_headers_config", return_value={"Client-Id": "cfg"}) as load:
            first = api.build_request(GAME_ANALYTICS, {})
            second = api.build_request(BITS_LEADERBOARD, {})

        load.assert_called_once_with()
        assert first.headers["Client-Id"] == "cfg"
        assert second.headers["Client-Id"] == "cfg"


# ---------------------------------------------------------------------------
# Full call
# ---------------------------------------------------------------------------


class TestCall:
    def test_bits_leaderboard_success(self, make_api) -> None:
        transport = FakeTransport.replying(200, payload={"data": LEADER, "total": 1})
        api = make_api(transport)
        seen = []

        future = api.call(
            BITS_LEADERBOARD,
            BitsLeaderboardParams(count=5, period=Period.WEEK).encode(),
            completion=seen.append,
        )

        result = future.result(timeout=1)
        assert result == Success(BitsLeaderboardRecord.from_dict(LEADER))
        assert seen == [result]
        assert json.loads(transport.sent[0].body) == {"count": 5, "period": "week"}

    def test_game_analytics_bad_status(self, make_api) -> None:
        transport = FakeTransport.replying(401, body=b'{"error":"Unauthorized","status":401}')
        api = make_api(transport)

        result = api.call(GAME_ANALYTICS, GameAnalyticsParams().encode()).result(timeout=1)

        assert isinstance(result, Failure)
        assert result.kind == "status"
        assert result.status_code == 401
        assert result.body == b'{"error":"Unauthorized","status":401}'
        assert result.error is None

    def test_missing_field_is_failure_despite_200(self, make_api) -> None:
        api = make_api(FakeTransport.replying(200, payload={"unexpected": 1}))
        result = api.call(BITS_LEADERBOARD, {}).result(timeout=1)

        assert isinstance(result, Failure)
        assert result.kind == "decode"
        assert result.status_code == 200

    @pytest.mark.parametrize("error", [AuthorizationError("no token"), InvalidCredentials("bad json")])
    def test_auth_short_circuit(self, make_api, error) -> None:
        transport = FakeTransport.replying(200, payload={"data": LEADER})
        api = make_api(transport, token_manager=FailingTokenManager(error))
        seen = []

        future = api.call(BITS_LEADERBOARD, {}, completion=seen.append)

        assert transport.sent == []
        assert len(seen) == 1
        assert seen[0] == Failure(body=None, response=None, error=error)
        assert future.done()
        assert future.result() is seen[0]

    def test_transport_error(self, make_api) -> None:
        error = requests.ConnectionError("connection refused")
        api = make_api(FakeTransport(error=error))

        result = api.call(EXTENSION_ANALYTICS, {}).result(timeout=1)

        assert isinstance(result, Failure)
        assert result.kind == "transport"
        assert result.error is error
        assert result.body is None

    def test_completion_fires_exactly_once(self, make_api) -> None:
        api = make_api(FakeTransport.replying(200, payload={"data": []}))
        completion = MagicMock()

        future = api.call(EXTENSION_ANALYTICS, {}, completion=completion)

        completion.assert_called_once_with(future.result())

    def test_calls_cannot_be_cancelled(self, make_api) -> None:
        transport = MagicMock()
        api = make_api(transport)

        future = api.call(GAME_ANALYTICS, {})

        assert transport.send.call_count == 1
        assert future.cancel() is False
        assert not future.done()

    def test_shut_down_transport_gives_failure(self, make_api) -> None:
        transport = MagicMock()
        transport.send.side_effect = RuntimeError("cannot schedule new futures after shutdown")
        api = make_api(transport)

        result = api.call(GAME_ANALYTICS, {}).result(timeout=1)

        assert isinstance(result, Failure)
        assert isinstance(result.error, RuntimeError)

    def test_call_sync(self, make_api) -> None:
        api = make_api(FakeTransport.replying(200, payload={"data": [{"game_id": "1", "URL": "u"}]}))
        result = api.call_sync(GAME_ANALYTICS, {}, timeout=1)
        assert result.ok
        assert result.value[0].game_id == "1"

    def test_debug_output(self, make_api, capsys) -> None:
        api = make_api(FakeTransport.replying(404, body=b""), debug=True)
        api.call(GAME_ANALYTICS, {}).result(timeout=1)

        err = capsys.readouterr().err
        assert "GET https://api.twitch.tv/helix/analytics/games -> 404" in err

    def test_decoder_crash_still_completes_once(self, make_api) -> None:
        def explode(value):
            raise ZeroDivisionError("boom")

        endpoint = Endpoint(name="Broken", method="GET", path="/broken", scope="", decoder=explode)
        response = make_response(200, payload={"data": {}})
        api = make_api(FakeTransport(data=response.content, response=response))
        completion = MagicMock()

        result = api.call(endpoint, {}, completion=completion).result(timeout=1)

        assert isinstance(result, Failure)
        assert result.kind == "decode"
        assert result.response is response
        completion.assert_called_once_with(result)

    def test_malformed_credentials_file_gives_authorization_failure(self, make_api, tmp_path) -> None:
        path = tmp_path / "credentials.json"
        path.write_text(json.dumps({"twitchOauth": {"accessToken": "a", "expiresAt": "1700000000000"}}))
        transport = FakeTransport.replying(200, payload={"data": LEADER})
        api = make_api(transport, token_manager=TokenManager(path))

        result = api.call(BITS_LEADERBOARD, {}).result(timeout=1)

        assert isinstance(result, Failure)
        assert result.kind == "authorization"
        assert isinstance(result.error, InvalidCredentials)
        assert transport.sent == []
