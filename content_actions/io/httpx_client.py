"""
httpx-based HttpClient implementation.

Conforms to io/http_client.py's HttpClient Protocol. Every request builds its
own httpx.Client from the validated HttpClientConfig and closes it afterwards:
- basic auth            -> httpx.BasicAuth
- proxy (+credentials)  -> httpx.Proxy
- TLS options           -> ssl.SSLContext (trust-all, hostname policy, PEM bundles)
- timeouts (0 = none)   -> httpx.Timeout
- use_cookies=false     -> a cookie jar that accepts nothing
- keep_alive=false      -> "Connection: close"
"""

from __future__ import annotations

import logging
import ssl
from http.cookiejar import CookieJar, DefaultCookiePolicy
from typing import Any, Mapping, Optional

import httpx

from ..core.config import HttpClientConfig, ProxyConfig, TimeoutConfig, TlsConfig
from ..core.errors import DelegatedOperationError
from .http_client import HttpResponse

logger = logging.getLogger(__name__)


def build_ssl_context(tls: TlsConfig) -> ssl.SSLContext:
    ctx = ssl.create_default_context(cafile=tls.trust_keystore)
    if tls.keystore:
        password = tls.keystore_password.get_secret_value() if tls.keystore_password else None
        ctx.load_cert_chain(certfile=tls.keystore, password=password)
    if tls.trust_all_roots:
        ctx.check_hostname = False
        ctx.verify_mode = ssl.CERT_NONE
    elif tls.x509_hostname_verifier == "allow_all":
        ctx.check_hostname = False
    # "strict" and "browser_compatible" both use the ssl module's RFC 6125 matching
    return ctx


def build_proxy(proxy: Optional[ProxyConfig]) -> Optional[httpx.Proxy]:
    if proxy is None:
        return None
    auth = None
    if proxy.username:
        password = proxy.password.get_secret_value() if proxy.password else ""
        auth = (proxy.username, password)
    return httpx.Proxy(proxy.url, auth=auth)


def build_timeout(timeouts: TimeoutConfig) -> httpx.Timeout:
    return httpx.Timeout(timeouts.socket or None, connect=timeouts.connect or None)


def client_kwargs(config: HttpClientConfig) -> dict[str, Any]:
    """Keyword arguments for httpx.Client; split out so it can be inspected in tests."""
    kwargs: dict[str, Any] = {
        "verify": build_ssl_context(config.tls),
        "timeout": build_timeout(config.timeouts),
        "follow_redirects": True,
    }
    if config.auth is not None:
        kwargs["auth"] = httpx.BasicAuth(
            config.auth.username, config.auth.password.get_secret_value()
        )
    proxy = build_proxy(config.proxy)
    if proxy is not None:
        kwargs["proxy"] = proxy
    if not config.use_cookies:
        kwargs["cookies"] = CookieJar(policy=DefaultCookiePolicy(allowed_domains=[]))
    if not config.keep_alive:
        kwargs["headers"] = {"Connection": "close"}
    return kwargs


class HttpxClient:
    """A concrete HttpClient backed by a short-lived httpx.Client per request."""

    def __init__(self, *, transport: Optional[httpx.BaseTransport] = None) -> None:
        self._transport = transport

    def request(
        self,
        config: HttpClientConfig,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        data: Mapping[str, str] | None = None,
    ) -> HttpResponse:
        logger.debug("%s %s (proxy=%s)", method, url, config.proxy.url if config.proxy else None)
        try:
            kwargs = client_kwargs(config)
            if self._transport is not None:
                kwargs["transport"] = self._transport
            with httpx.Client(**kwargs) as client:
                resp = client.request(method, url, headers=headers, data=data)
        except (httpx.HTTPError, ssl.SSLError, OSError) as e:
            raise DelegatedOperationError(
                action="http",
                message=f"{method} request failed: {type(e).__name__}: {e}",
                url=url,
                cause=e,
            ) from e

        logger.debug("%s %s -> %s", method, url, resp.status_code)
        return HttpResponse(
            status_code=resp.status_code,
            text=resp.text,
            headers=dict(resp.headers),
        )
