from __future__ import annotations

import json
import os
import ssl
from dataclasses import dataclass
from typing import Any
from urllib import error, request

import certifi

from promptlint.errors import ConfigurationError, TransportError

INSECURE_ENV = "PROMPTLINT_INSECURE_SKIP_VERIFY"

# First one set wins.
CA_BUNDLE_ENVS = ("PROMPTLINT_CA_BUNDLE", "SSL_CERT_FILE", "REQUESTS_CA_BUNDLE")


@dataclass(frozen=True)
class HttpResponse:
    status: int
    body: str


def post_json(
    url: str,
    payload: Any,
    headers: dict[str, str] | None = None,
    timeout: float = 300,
) -> HttpResponse:
    """POST ``payload`` as JSON and return the raw reply body.

    Raises ConfigurationError for an unusable URL or CA bundle, before any
    connection is opened, and TransportError for non-2xx replies and
    send failures. Error bodies are kept verbatim on ``TransportError.body``.
    """
    merged_headers = {"Content-Type": "application/json"}
    merged_headers.update(headers or {})
    try:
        req = request.Request(
            url=url,
            data=json.dumps(payload).encode("utf-8"),
            headers=merged_headers,
            method="POST",
        )
    except ValueError as exc:
        raise ConfigurationError(f"Invalid API endpoint {url!r}: {exc}") from exc

    context = ssl_context()
    try:
        with request.urlopen(req, timeout=timeout, context=context) as response:
            body = response.read().decode("utf-8", errors="replace")
            return HttpResponse(status=response.status, body=body)
    except error.HTTPError as exc:
        detail = exc.read().decode("utf-8", errors="replace")
        raise TransportError(f"API returned error {exc.code}: {detail}", status=exc.code, body=detail) from exc
    except error.URLError as exc:
        raise TransportError(f"Failed request to {url}: {exc.reason}") from exc
    except OSError as exc:
        raise TransportError(f"Failed request to {url}: {exc}") from exc


def ssl_context() -> ssl.SSLContext:
    if os.getenv(INSECURE_ENV, "").strip().lower() in {"1", "true", "yes", "on"}:
        return ssl._create_unverified_context()

    env_name, cafile = _ca_bundle()
    try:
        return ssl.create_default_context(cafile=cafile)
    except OSError as exc:
        source = env_name or "certifi"
        raise ConfigurationError(f"Cannot load CA bundle {cafile} from {source}: {exc}") from exc


def _ca_bundle() -> tuple[str | None, str]:
    for name in CA_BUNDLE_ENVS:
        value = os.getenv(name)
        if value:
            return name, value
    return None, certifi.where()
