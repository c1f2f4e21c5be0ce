"""
Couchbase cluster REST actions (basic authentication).

Each action is a fixed (verb, path) pair against the cluster's admin endpoint,
e.g. http://somewhere.couchbase.com:8091. A 2xx response body is returned
verbatim; any other status is a failure carrying the status and body.
Reference: https://docs.couchbase.com/server/current/rest-api/rest-bucket-intro.html
"""
# @file purpose: Implement and register Couchbase REST actions.

from __future__ import annotations

from urllib.parse import quote

from ..core.context import ActionContext
from ..core.errors import DelegatedOperationError
from ..core.registry import action
from ..core.validators import RequiredStr, RequiredUrl
from .params import CredentialInputs, HttpInputs

# action name -> (HTTP verb, path template)
COUCHBASE_API: dict[str, tuple[str, str]] = {
    "get_all_buckets": ("GET", "/pools/default/buckets"),
    "get_bucket": ("GET", "/pools/default/buckets/{bucket}"),
    "get_bucket_statistics": ("GET", "/pools/default/buckets/{bucket}/stats"),
    "delete_bucket": ("DELETE", "/pools/default/buckets/{bucket}"),
    "get_cluster_info": ("GET", "/pools/default"),
}

_BODY_LIMIT = 2000


class CouchbaseParams(CredentialInputs, HttpInputs):
    """endpoint, username, password plus the shared proxy/TLS/connection inputs."""

    endpoint: RequiredUrl


class BucketParams(CouchbaseParams):
    bucket_name: RequiredStr


def resource_url(endpoint: str, action_name: str, **path_args: str) -> tuple[str, str]:
    """Resolve (method, url) for an action; path arguments are percent-encoded."""
    method, template = COUCHBASE_API[action_name]
    path = template.format(**{k: quote(v, safe="") for k, v in path_args.items()})
    return method, endpoint.rstrip("/") + path


def call_couchbase(
    ctx: ActionContext, params: CouchbaseParams, action_name: str, **path_args: str
) -> str:
    method, url = resource_url(str(params.endpoint), action_name, **path_args)
    resp = ctx.http.request(
        params.http_config(params.basic_auth()),
        method,
        url,
        headers={"Accept": "application/json"},
    )
    if not resp.ok:
        raise DelegatedOperationError(
            action=action_name,
            message=f"Couchbase API returned HTTP {resp.status_code}",
            url=url,
            status_code=resp.status_code,
            details={"body": resp.text[:_BODY_LIMIT]} if resp.text else None,
        )
    return resp.text


@action("get_all_buckets", params_model=CouchbaseParams)
def get_all_buckets(ctx: ActionContext, params: CouchbaseParams) -> str:
    """Retrieve all bucket information for a cluster."""
    return call_couchbase(ctx, params, "get_all_buckets")


@action("get_bucket", params_model=BucketParams)
def get_bucket(ctx: ActionContext, params: BucketParams) -> str:
    """Retrieve information for a single bucket."""
    return call_couchbase(ctx, params, "get_bucket", bucket=params.bucket_name)


@action("get_bucket_statistics", params_model=BucketParams)
def get_bucket_statistics(ctx: ActionContext, params: BucketParams) -> str:
    """Retrieve statistics samples for a bucket."""
    return call_couchbase(ctx, params, "get_bucket_statistics", bucket=params.bucket_name)


@action("delete_bucket", params_model=BucketParams)
def delete_bucket(ctx: ActionContext, params: BucketParams) -> str:
    """Delete a bucket and all of its data."""
    return call_couchbase(ctx, params, "delete_bucket", bucket=params.bucket_name)


@action("get_cluster_info", params_model=CouchbaseParams)
def get_cluster_info(ctx: ActionContext, params: CouchbaseParams) -> str:
    """Retrieve cluster-wide details: nodes, quotas and storage totals."""
    return call_couchbase(ctx, params, "get_cluster_info")
