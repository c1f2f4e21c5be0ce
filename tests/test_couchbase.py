"""Couchbase actions against a mocked cluster (respx) and a recording client."""
# @file purpose: Test Couchbase REST actions.

import base64
from typing import Callable

import httpx
import pytest
import respx

from content_actions.actions.couchbase import resource_url
from content_actions.core.context import ActionContext
from content_actions.core.controller.runner import execute
from content_actions.core.result import FAILURE_CODE, SUCCESS_CODE

ENDPOINT = "http://couchbase.example.com:8091"
BASE_INPUTS = {"endpoint": ENDPOINT, "username": "Administrator", "password": "password"}
BUCKETS = '[{"name":"travel-sample","bucketType":"membase"}]'


@respx.mock
def test_get_all_buckets_success() -> None:
    route = respx.get(f"{ENDPOINT}/pools/default/buckets").mock(
        return_value=httpx.Response(200, text=BUCKETS)
    )

    res = execute("get_all_buckets", BASE_INPUTS)

    assert res.to_outputs() == {"returnCode": SUCCESS_CODE, "returnResult": BUCKETS}
    request = route.calls.last.request
    expected = base64.b64encode(b"Administrator:password").decode()
    assert request.headers["Authorization"] == f"Basic {expected}"
    assert request.headers["Accept"] == "application/json"


@respx.mock
def test_get_bucket_statistics_path() -> None:
    route = respx.get(f"{ENDPOINT}/pools/default/buckets/travel-sample/stats").mock(
        return_value=httpx.Response(200, text="{}")
    )
    res = execute("get_bucket_statistics", {**BASE_INPUTS, "bucketName": "travel-sample"})
    assert res.ok
    assert route.called


@respx.mock
def test_non_2xx_response_is_failure() -> None:
    respx.get(f"{ENDPOINT}/pools/default/buckets/missing").mock(
        return_value=httpx.Response(404, text="Requested resource not found.")
    )

    out = execute("get_bucket", {**BASE_INPUTS, "bucketName": "missing"}).to_outputs()

    assert out["returnCode"] == FAILURE_CODE
    assert "HTTP 404" in out["returnResult"]
    assert "Requested resource not found." in out["exception"]


@respx.mock
def test_transport_error_is_contained() -> None:
    respx.get(f"{ENDPOINT}/pools/default").mock(side_effect=httpx.ConnectError("refused"))

    out = execute("get_cluster_info", BASE_INPUTS).to_outputs()

    assert out["returnCode"] == FAILURE_CODE
    assert "ConnectError" in out["exception"]


@pytest.mark.parametrize("omitted", ["endpoint", "username", "password"])
def test_missing_required_input(omitted: str) -> None:
    inputs = dict(BASE_INPUTS)
    del inputs[omitted]
    out = execute("get_all_buckets", inputs).to_outputs()
    assert out["returnCode"] == FAILURE_CODE
    assert out["returnResult"] == f"The {omitted} can't be null or empty."


def test_missing_bucket_name() -> None:
    out = execute("delete_bucket", BASE_INPUTS).to_outputs()
    assert out["returnResult"] == "The bucketName can't be null or empty."


def test_invalid_endpoint() -> None:
    out = execute("get_all_buckets", {**BASE_INPUTS, "endpoint": "ftp://nowhere"}).to_outputs()
    assert out["returnCode"] == FAILURE_CODE
    assert out["returnResult"].startswith("The endpoint is invalid:")


def test_partial_proxy_group_fails_before_any_call(recording_http: Callable) -> None:
    http = recording_http(200, BUCKETS)
    out = execute(
        "get_all_buckets", {**BASE_INPUTS, "proxyHost": "proxy.local"}, ActionContext(http=http)
    ).to_outputs()
    assert out["returnCode"] == FAILURE_CODE
    assert "proxyPort" in out["returnResult"]
    assert http.calls == []


def test_validated_config_handed_to_client(recording_http: Callable) -> None:
    http = recording_http(200, BUCKETS)
    res = execute(
        "delete_bucket",
        {
            **BASE_INPUTS,
            "bucketName": "beer-sample",
            "proxyHost": "proxy.local",
            "proxyPort": "8080",
            "trustAllRoots": "true",
            "connectTimeout": "10",
            "keepAlive": "false",
        },
        ActionContext(http=http),
    )

    assert res.ok
    call = http.calls[0]
    assert call["method"] == "DELETE"
    assert call["url"] == f"{ENDPOINT}/pools/default/buckets/beer-sample"
    config = call["config"]
    assert (config.proxy.host, config.proxy.port) == ("proxy.local", 8080)
    assert config.tls.trust_all_roots is True
    assert config.timeouts.connect == 10
    assert config.keep_alive is False
    assert config.auth.username == "Administrator"


def test_resource_url_encodes_bucket_name() -> None:
    assert resource_url("http://h:8091/", "get_bucket", bucket="a/b c") == (
        "GET",
        "http://h:8091/pools/default/buckets/a%2Fb%20c",
    )


def test_trust_keystore_with_password_is_accepted(recording_http: Callable) -> None:
    http = recording_http(200, BUCKETS)
    res = execute(
        "get_all_buckets",
        {**BASE_INPUTS, "trustKeystore": "/tmp/ca.pem", "trustPassword": "changeit"},
        ActionContext(http=http),
    )
    assert res.to_outputs() == {"returnCode": SUCCESS_CODE, "returnResult": BUCKETS}
    assert http.calls[0]["config"].tls.trust_keystore == "/tmp/ca.pem"
