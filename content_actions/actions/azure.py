"""
Azure authentication actions:
- get_auth_token: OAuth2 resource-owner password grant against the authority
- get_shared_access_key_token: API Management shared access signature, computed locally

Defaults for authority, resource and client id come from settings.
"""
# @file purpose: Implement and register Azure authentication actions.

from __future__ import annotations

import base64
import hashlib
import hmac
import json
from datetime import datetime, timezone

from pydantic import Field

from ..core.context import ActionContext
from ..core.errors import DelegatedOperationError
from ..core.registry import action
from ..core.settings import settings
from ..core.validators import (
    ActionParams,
    RequiredDatetime,
    RequiredSecret,
    RequiredStr,
    RequiredUrl,
)
from .params import CredentialInputs, HttpInputs

NEW_LINE = "\n"
SHARED_ACCESS_SIGNATURE = "SharedAccessSignature uid={uid}&ex={expiry}&sn={signature}"
TOKEN_PATH = "/oauth2/token"


class AuthTokenParams(CredentialInputs, HttpInputs):
    client_id: str = Field(default_factory=lambda: settings.azure_client_id)
    authority: RequiredUrl = Field(
        default_factory=lambda: settings.azure_authority, validate_default=True
    )
    resource: str = Field(default_factory=lambda: settings.azure_resource)


class SharedAccessKeyParams(ActionParams):
    identifier: RequiredStr
    primary_or_secondary_key: RequiredSecret
    expiry: RequiredDatetime


@action("get_auth_token", params_model=AuthTokenParams)
def get_auth_token(ctx: ActionContext, params: AuthTokenParams) -> str:
    """Obtain an Azure AD bearer token; the result is "<token_type> <access_token>"."""
    url = str(params.authority).rstrip("/") + TOKEN_PATH
    resp = ctx.http.request(
        params.http_config(),
        "POST",
        url,
        headers={"Accept": "application/json"},
        data={
            "grant_type": "password",
            "client_id": params.client_id,
            "resource": params.resource,
            "username": params.username,
            "password": params.password.get_secret_value(),
        },
    )

    try:
        body = resp.json()
    except json.JSONDecodeError as e:
        raise DelegatedOperationError(
            action="get_auth_token",
            message="authority returned a non-JSON response",
            url=url,
            status_code=resp.status_code,
            cause=e,
        ) from e

    if not isinstance(body, dict):
        body = {}
    if not resp.ok or "access_token" not in body:
        raise DelegatedOperationError(
            action="get_auth_token",
            message=body.get("error_description") or "authority did not return an access token",
            url=url,
            status_code=resp.status_code,
            details={"error": body["error"]} if body.get("error") else None,
        )
    return f"{body.get('token_type', 'Bearer')} {body['access_token']}"


def format_expiry(expiry: datetime) -> str:
    """UTC, seven fractional digits, trailing Z: 2017-01-01T00:00:00.0000000Z"""
    if expiry.tzinfo is None:
        expiry = expiry.replace(tzinfo=timezone.utc)
    expiry = expiry.astimezone(timezone.utc)
    return expiry.strftime("%Y-%m-%dT%H:%M:%S.") + f"{expiry.microsecond:06d}0Z"


def sign(key: str, identifier: str, expiry: str) -> str:
    digest = hmac.new(
        key.encode("utf-8"), (identifier + NEW_LINE + expiry).encode("utf-8"), hashlib.sha512
    ).digest()
    return base64.b64encode(digest).decode("ascii")


@action("get_shared_access_key_token", params_model=SharedAccessKeyParams)
def get_shared_access_key_token(ctx: ActionContext, params: SharedAccessKeyParams) -> str:
    expiry = format_expiry(params.expiry)
    signature = sign(params.primary_or_secondary_key.get_secret_value(), params.identifier, expiry)
    return SHARED_ACCESS_SIGNATURE.format(uid=params.identifier, expiry=expiry, signature=signature)
