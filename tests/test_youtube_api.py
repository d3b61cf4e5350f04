import json
from unittest.mock import MagicMock

import pytest
from googleapiclient.errors import HttpError

from oxysound.domain.errors import AuthenticationError, YouTubeApiError
from oxysound.youtube_api import MAX_IDS_PER_REQUEST, fetch_metadata


def _item(video_id, title):
    return {
        "kind": "youtube#video",
        "id": video_id,
        "snippet": {
            "title": title,
            "publishedAt": "2009-10-25T06:57:33Z",
            "channelTitle": "Some Channel",
        },
    }


def _service_returning(*responses):
    service = MagicMock()
    service.videos().list().execute.side_effect = list(responses)
    service.videos.reset_mock()
    return service


def _http_error(status, content):
    mock_http_resp = MagicMock()
    mock_http_resp.status = status
    mock_http_resp.reason = "Error"
    return HttpError(resp=mock_http_resp, content=content)


# Scenario 1: every video resolves
def test_fetch_metadata_success(mocker):
    service = _service_returning(
        {"items": [_item("dQw4w9WgXcQ", "Never Gonna Give You Up")]}
    )

    result = fetch_metadata(["dQw4w9WgXcQ"], "key", service=service)

    assert result.is_right()
    video = result.value.videos["dQw4w9WgXcQ"]
    assert video.title == "Never Gonna Give You Up"
    assert video.channel == "Some Channel"
    assert video.fetched is True
    assert result.value.missing == ()
    service.videos().list.assert_called_with(
        part="snippet", id="dQw4w9WgXcQ", maxResults=MAX_IDS_PER_REQUEST
    )


# Scenario 2: one ID does not resolve, the batch still succeeds
def test_fetch_metadata_reports_missing_ids():
    service = _service_returning({"items": [_item("a", "A")]})

    result = fetch_metadata(["a", "b"], "key", service=service)

    assert result.is_right()
    assert list(result.value.videos) == ["a"]
    assert result.value.missing == ("b",)


# Scenario 3: requests are split in batches of 50
def test_fetch_metadata_batches_requests():
    ids = [f"id_{n}" for n in range(MAX_IDS_PER_REQUEST + 5)]
    service = _service_returning(
        {"items": [_item(i, i) for i in ids[:MAX_IDS_PER_REQUEST]]},
        {"items": [_item(i, i) for i in ids[MAX_IDS_PER_REQUEST:]]},
    )

    result = fetch_metadata(ids, "key", service=service)

    assert len(result.value.videos) == len(ids)
    assert service.videos().list().execute.call_count == 2


def test_fetch_metadata_without_key_does_not_call_api(mocker):
    build = mocker.patch("oxysound.youtube_api.build")

    result = fetch_metadata(["a"], "", service=None)

    assert result.is_left()
    assert isinstance(result.monoid[0], AuthenticationError)
    build.assert_not_called()


def test_fetch_metadata_without_ids_does_not_call_api(mocker):
    build = mocker.patch("oxysound.youtube_api.build")

    result = fetch_metadata([], "key")

    assert result.is_right()
    assert result.value.videos == {}
    build.assert_not_called()


def test_fetch_metadata_builds_service_from_key(mocker):
    service = _service_returning({"items": []})
    build = mocker.patch("oxysound.youtube_api.build", return_value=service)

    fetch_metadata(["a"], "my-key")

    build.assert_called_once_with(
        "youtube", "v3", developerKey="my-key", cache_discovery=False
    )


# Scenario 4: the platform rejects the key
def test_fetch_metadata_invalid_key(caplog):
    service = MagicMock()
    service.videos().list().execute.side_effect = _http_error(
        400, b'{"error": {"message": "API key not valid. Please pass a valid API key."}}'
    )

    result = fetch_metadata(["a"], "bad", service=service)

    assert result.is_left()
    error_value, _ = result.monoid
    assert isinstance(error_value, AuthenticationError)
    assert "API key not valid" in error_value.message
    assert "Failed to fetch metadata" in caplog.text


def _api_error_body(status, reason, message="Request failed."):
    return json.dumps(
        {
            "error": {
                "code": status,
                "message": message,
                "errors": [{"message": message, "domain": "global", "reason": reason}],
            }
        }
    ).encode("utf-8")


@pytest.mark.parametrize(
    "status, reason",
    [
        (400, "keyInvalid"),
        (400, "keyExpired"),
        (403, "ipRefererBlocked"),
    ],
)
def test_fetch_metadata_key_reasons_are_auth_errors(status, reason):
    service = MagicMock()
    service.videos().list().execute.side_effect = _http_error(status, _api_error_body(status, reason))

    result = fetch_metadata(["a"], "key", service=service)

    error_value, _ = result.monoid
    assert isinstance(error_value, AuthenticationError)
    assert reason in error_value.message


def test_fetch_metadata_key_reason_in_details_is_auth_error():
    body = json.dumps(
        {
            "error": {
                "code": 400,
                "message": "API key not valid. Please pass a valid API key.",
                "status": "INVALID_ARGUMENT",
                "details": [
                    {
                        "@type": "type.googleapis.com/google.rpc.ErrorInfo",
                        "reason": "API_KEY_INVALID",
                        "domain": "googleapis.com",
                    }
                ],
            }
        }
    ).encode("utf-8")
    service = MagicMock()
    service.videos().list().execute.side_effect = _http_error(400, body)

    result = fetch_metadata(["a"], "key", service=service)

    assert isinstance(result.monoid[0], AuthenticationError)


@pytest.mark.parametrize("reason", ["quotaExceeded", "accessNotConfigured", "forbidden"])
def test_fetch_metadata_other_403_reasons_are_api_errors(reason):
    body = _api_error_body(403, reason, message=f"The request failed: {reason}.")
    service = MagicMock()
    service.videos().list().execute.side_effect = _http_error(403, body)

    result = fetch_metadata(["a"], "key", service=service)

    error_value, _ = result.monoid
    assert isinstance(error_value, YouTubeApiError)
    assert not isinstance(error_value, AuthenticationError)
    assert body.decode("utf-8") in error_value.message


def test_fetch_metadata_plain_403_is_api_error():
    service = MagicMock()
    service.videos().list().execute.side_effect = _http_error(403, b"Forbidden")

    result = fetch_metadata(["a"], "key", service=service)

    error_value, _ = result.monoid
    assert isinstance(error_value, YouTubeApiError)
    assert "Forbidden" in error_value.message


# Scenario 5: any other API failure is surfaced verbatim
def test_fetch_metadata_other_http_error():
    service = MagicMock()
    service.videos().list().execute.side_effect = _http_error(500, b"Backend Error")

    result = fetch_metadata(["a"], "key", service=service)

    error_value, _ = result.monoid
    assert isinstance(error_value, YouTubeApiError)
    assert "Backend Error" in error_value.message


def test_fetch_metadata_unexpected_error():
    service = MagicMock()
    service.videos.side_effect = ConnectionError("offline")

    result = fetch_metadata(["a"], "key", service=service)

    assert isinstance(result.monoid[0], YouTubeApiError)
    assert "offline" in result.monoid[0].message
