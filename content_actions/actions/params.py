"""
Input groups shared by the HTTP-based actions.
Why: every HTTP action accepts the same proxy/TLS/connection inputs; declaring
them once keeps names, defaults and coupling rules identical everywhere.
Contains:
- CredentialInputs { username, password }                      (both required)
- ProxyInputs { proxyHost, proxyPort, proxyUsername, proxyPassword }
- TlsInputs { trustAllRoots, x509HostnameVerifier, trustKeystore, trustPassword, keystore, keystorePassword }
- ConnectionInputs { connectTimeout, socketTimeout, useCookies, keepAlive }
- HttpInputs: proxy + TLS + connection, with http_config() -> HttpClientConfig
"""
# @file purpose: Define shared input groups for HTTP-based actions.

from __future__ import annotations

from typing import Optional

from pydantic import Field, SecretStr, model_validator

from ..core.config import (
    BasicAuth,
    HttpClientConfig,
    ProxyConfig,
    TimeoutConfig,
    TlsConfig,
)
from ..core.settings import settings
from ..core.validators import (
    ActionParams,
    Flag,
    HostnameVerifier,
    NonNegativeInt,
    Port,
    RequiredSecret,
    RequiredStr,
    require_together,
    require_with,
)


class CredentialInputs(ActionParams):
    """Basic authentication credentials."""

    username: RequiredStr
    password: RequiredSecret

    def basic_auth(self) -> BasicAuth:
        return BasicAuth(username=self.username, password=self.password)


class ProxyInputs(ActionParams):
    """
    proxyHost and proxyPort go together; proxy credentials need a proxy host,
    and a proxy password needs a proxy username.
    """

    proxy_host: Optional[str] = None
    proxy_port: Optional[Port] = None
    proxy_username: Optional[str] = None
    proxy_password: Optional[SecretStr] = None

    @model_validator(mode="after")
    def _check_proxy_group(self) -> "ProxyInputs":
        require_together(self, "proxy_host", "proxy_port")
        require_with(self, "proxy_username", "proxy_host")
        require_with(self, "proxy_password", "proxy_username")
        return self

    def proxy_config(self) -> Optional[ProxyConfig]:
        if self.proxy_host is None or self.proxy_port is None:
            return None
        return ProxyConfig(
            host=self.proxy_host,
            port=self.proxy_port,
            username=self.proxy_username,
            password=self.proxy_password,
        )


class TlsInputs(ActionParams):
    trust_all_roots: Flag = Field(default_factory=lambda: settings.trust_all_roots)
    x509_hostname_verifier: HostnameVerifier = Field(
        default_factory=lambda: settings.x509_hostname_verifier
    )
    trust_keystore: Optional[str] = None
    # PEM CA bundles are not encrypted; accepted so existing callers keep working
    trust_password: Optional[SecretStr] = None
    keystore: Optional[str] = None
    keystore_password: Optional[SecretStr] = None

    @model_validator(mode="after")
    def _check_keystore_group(self) -> "TlsInputs":
        require_with(self, "trust_password", "trust_keystore")
        require_with(self, "keystore_password", "keystore")
        return self

    def tls_config(self) -> TlsConfig:
        return TlsConfig(
            trust_all_roots=self.trust_all_roots,
            x509_hostname_verifier=self.x509_hostname_verifier,
            trust_keystore=self.trust_keystore,
            keystore=self.keystore,
            keystore_password=self.keystore_password,
        )


class ConnectionInputs(ActionParams):
    """Timeouts are in seconds; 0 waits forever."""

    connect_timeout: NonNegativeInt = Field(default_factory=lambda: settings.connect_timeout)
    socket_timeout: NonNegativeInt = Field(default_factory=lambda: settings.socket_timeout)
    use_cookies: Flag = Field(default_factory=lambda: settings.use_cookies)
    keep_alive: Flag = Field(default_factory=lambda: settings.keep_alive)

    def timeout_config(self) -> TimeoutConfig:
        return TimeoutConfig(connect=self.connect_timeout, socket=self.socket_timeout)


class HttpInputs(ProxyInputs, TlsInputs, ConnectionInputs):
    def http_config(self, auth: Optional[BasicAuth] = None) -> HttpClientConfig:
        return HttpClientConfig(
            auth=auth,
            proxy=self.proxy_config(),
            tls=self.tls_config(),
            timeouts=self.timeout_config(),
            use_cookies=self.use_cookies,
            keep_alive=self.keep_alive,
        )
