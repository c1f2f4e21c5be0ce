"""
Typed configuration produced by input validation and handed to the HTTP client.
Every model is frozen: once validated it is never mutated.
"""
# @file purpose: Define validated HTTP client configuration models.

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr

HostnameVerifierPolicy = Literal["strict", "browser_compatible", "allow_all"]


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class BasicAuth(_Frozen):
    username: str
    password: SecretStr


class ProxyConfig(_Frozen):
    """Either fully present (host + port) or not built at all."""

    host: str
    port: int = Field(..., ge=1, le=65535)
    username: Optional[str] = None
    password: Optional[SecretStr] = None

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}"


class TlsConfig(_Frozen):
    trust_all_roots: bool = False
    x509_hostname_verifier: HostnameVerifierPolicy = "strict"
    trust_keystore: Optional[str] = Field(default=None, description="PEM CA bundle path.")
    keystore: Optional[str] = Field(default=None, description="PEM client certificate chain path.")
    keystore_password: Optional[SecretStr] = None


class TimeoutConfig(_Frozen):
    """Seconds; 0 means no timeout."""

    connect: int = Field(default=0, ge=0)
    socket: int = Field(default=0, ge=0)


class HttpClientConfig(_Frozen):
    auth: Optional[BasicAuth] = None
    proxy: Optional[ProxyConfig] = None
    tls: TlsConfig = Field(default_factory=TlsConfig)
    timeouts: TimeoutConfig = Field(default_factory=TimeoutConfig)
    use_cookies: bool = True
    keep_alive: bool = True
