"""Client tokens: signed, time-bounded capabilities for untrusted callers.

A client token lets e.g. a browser perform one scoped operation without ever
seeing the read-write secret. Tokens are minted locally; the store verifies
them.
"""

from __future__ import annotations

import hmac
import json
import time
from dataclasses import dataclass
from hashlib import sha256
from typing import Any

from .errors import BlobInvalidInputError

DEFAULT_CLIENT_TOKEN_TTL = 60 * 60


@dataclass(frozen=True, slots=True)
class ClientTokenOptions:
    operation: str
    pathname: str | None = None
    expires_at: int | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"operation": self.operation}
        if self.pathname:
            payload["pathname"] = self.pathname
        if self.expires_at:
            payload["expiresAt"] = int(self.expires_at)
        return payload


def encode_client_token_payload(options: ClientTokenOptions) -> bytes:
    return json.dumps(options.to_payload(), separators=(",", ":")).encode("utf-8")


def generate_client_token(
    secret: str,
    options: ClientTokenOptions,
    *,
    now: float | None = None,
) -> str:
    """Return ``hex(payload) + "." + hex(hmac_sha256(secret, payload))``.

    ``expires_at`` defaults to one hour after ``now`` (the current time unless
    given). Identical inputs always produce an identical token.
    """
    if not secret:
        raise BlobInvalidInputError("secret")
    if not options.operation:
        raise BlobInvalidInputError("operation")
    if not options.expires_at:
        issued_at = int(now if now is not None else time.time())
        options = ClientTokenOptions(
            operation=options.operation,
            pathname=options.pathname,
            expires_at=issued_at + DEFAULT_CLIENT_TOKEN_TTL,
        )

    payload = encode_client_token_payload(options)
    signature = hmac.new(secret.encode("utf-8"), payload, sha256).hexdigest()
    return f"{payload.hex()}.{signature}"


def get_payload_from_client_token(client_token: str) -> ClientTokenOptions:
    """Decode the options carried by a client token. The signature is not checked."""
    encoded, sep, _signature = client_token.partition(".")
    if not sep:
        raise BlobInvalidInputError("client_token", "Invalid client token")
    try:
        payload = json.loads(bytes.fromhex(encoded).decode("utf-8"))
        return ClientTokenOptions(
            operation=payload["operation"],
            pathname=payload.get("pathname"),
            expires_at=payload.get("expiresAt"),
        )
    except (ValueError, KeyError, TypeError) as exc:
        raise BlobInvalidInputError("client_token", "Invalid client token") from exc


__all__ = [
    "DEFAULT_CLIENT_TOKEN_TTL",
    "ClientTokenOptions",
    "encode_client_token_payload",
    "generate_client_token",
    "get_payload_from_client_token",
]
