"""httpx client wiring: validated config -> httpx.Client keyword arguments."""
# @file purpose: Test the httpx-backed HttpClient.

import ssl
from http.cookiejar import CookieJar

import httpx
import pytest
import respx

from content_actions.core.config import (
    BasicAuth,
    HttpClientConfig,
    ProxyConfig,
    TimeoutConfig,
    TlsConfig,
)
from content_actions.core.errors import DelegatedOperationError
from content_actions.io.httpx_client import HttpxClient, client_kwargs


def test_defaults_verify_hostnames_and_keep_cookies() -> None:
    kwargs = client_kwargs(HttpClientConfig())
    ctx = kwargs["verify"]
    assert isinstance(ctx, ssl.SSLContext)
    assert ctx.check_hostname is True
    assert ctx.verify_mode == ssl.CERT_REQUIRED
    assert "proxy" not in kwargs and "auth" not in kwargs
    assert "cookies" not in kwargs and "headers" not in kwargs
    assert kwargs["timeout"].connect is None and kwargs["timeout"].read is None


def test_full_config() -> None:
    config = HttpClientConfig(
        auth=BasicAuth(username="admin", password="pw"),
        proxy=ProxyConfig(host="proxy.local", port=3128, username="svc", password="s3cret"),
        tls=TlsConfig(trust_all_roots=True),
        timeouts=TimeoutConfig(connect=5, socket=30),
        use_cookies=False,
        keep_alive=False,
    )

    kwargs = client_kwargs(config)

    assert isinstance(kwargs["auth"], httpx.BasicAuth)
    proxy = kwargs["proxy"]
    assert proxy.url == httpx.URL("http://proxy.local:3128")
    assert proxy.auth == ("svc", "s3cret")
    assert kwargs["verify"].verify_mode == ssl.CERT_NONE
    assert kwargs["verify"].check_hostname is False
    assert kwargs["timeout"].connect == 5 and kwargs["timeout"].read == 30
    assert isinstance(kwargs["cookies"], CookieJar)
    assert kwargs["headers"] == {"Connection": "close"}


def test_allow_all_skips_hostname_check_only() -> None:
    ctx = client_kwargs(HttpClientConfig(tls=TlsConfig(x509_hostname_verifier="allow_all")))["verify"]
    assert ctx.check_hostname is False
    assert ctx.verify_mode == ssl.CERT_REQUIRED


def test_missing_keystore_file_is_a_delegated_failure(tmp_path) -> None:
    config = HttpClientConfig(tls=TlsConfig(keystore=str(tmp_path / "missing.pem")))
    with pytest.raises(DelegatedOperationError) as ei:
        HttpxClient().request(config, "GET", "https://cluster.local")
    assert ei.value.url == "https://cluster.local"
    assert isinstance(ei.value.cause, OSError)


@respx.mock
def test_request_returns_plain_response() -> None:
    respx.get("http://cluster.local/ping").mock(
        return_value=httpx.Response(201, text="pong", headers={"X-Node": "n1"})
    )
    resp = HttpxClient().request(HttpClientConfig(), "GET", "http://cluster.local/ping")
    assert (resp.status_code, resp.text, resp.ok) == (201, "pong", True)
    assert resp.headers["x-node"] == "n1"
