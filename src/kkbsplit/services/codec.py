"""Shareable link tokens for a bill.

A token is the compact JSON form of ``{"v": TOKEN_VERSION, "state": ...}``,
UTF-8 encoded and written in URL-safe base64 without padding, so it can be
placed in a query string as is. Names and currency glyphs are encoded as
UTF-8 text before base64, never byte by byte.
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from typing import Optional, Union

from pydantic import TypeAdapter, ValidationError

from kkbsplit.logging import get_logger
from kkbsplit.models import BillState

TOKEN_VERSION = 1


@dataclass(slots=True)
class SharePayload:
    v: int
    state: BillState


@dataclass(slots=True)
class DecodeFailure:
    reason: str


_payload_adapter = TypeAdapter(SharePayload)

log = get_logger(__name__)


def encode(state: BillState) -> str:
    raw = _payload_adapter.dump_json(SharePayload(v=TOKEN_VERSION, state=state))
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def decode(token: object) -> Union[BillState, DecodeFailure]:
    if not isinstance(token, str) or not token.strip():
        return DecodeFailure("empty token")

    token = token.strip()
    padded = token + "=" * (-len(token) % 4)
    try:
        raw = base64.b64decode(padded, altchars=b"-_", validate=True)
    except (binascii.Error, ValueError):
        return DecodeFailure("invalid base64")

    try:
        raw.decode("utf-8")
    except UnicodeDecodeError:
        return DecodeFailure("invalid utf-8")

    try:
        # Model invariants (e.g. a shared item without sharers) surface as ValidationError too.
        payload = _payload_adapter.validate_json(raw)
    except ValidationError as exc:
        return DecodeFailure(f"invalid payload: {exc.error_count()} error(s)")

    if payload.v != TOKEN_VERSION:
        return DecodeFailure(f"unsupported version {payload.v}")
    return payload.state


def decode_or_default(token: object, currency: Optional[str] = None) -> BillState:
    result = decode(token)
    if isinstance(result, DecodeFailure):
        log.warning("codec.decode.failed", reason=result.reason)
        return BillState(currency=currency) if currency else BillState()
    return result
