from __future__ import annotations

from typing import Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from kkbsplit.config import get_settings
from kkbsplit.models import BillState
from kkbsplit.services.codec import decode_or_default, encode


def build_share_url(state: BillState, base_url: Optional[str] = None, param: Optional[str] = None) -> str:
    settings = get_settings()
    base_url = base_url or settings.share_url
    param = param or settings.share_param

    parts = urlsplit(base_url)
    query = [(key, value) for key, value in parse_qsl(parts.query, keep_blank_values=True) if key != param]
    query.append((param, encode(state)))
    return urlunsplit(parts._replace(query=urlencode(query)))


def token_from_url(url: str, param: Optional[str] = None) -> Optional[str]:
    param = param or get_settings().share_param
    for key, value in parse_qsl(urlsplit(url).query, keep_blank_values=True):
        if key == param:
            return value
    return None


def state_from_url(url: str, param: Optional[str] = None) -> BillState:
    settings = get_settings()
    token = token_from_url(url, param)
    if token is None:
        return BillState(currency=settings.currency)
    return decode_or_default(token, currency=settings.currency)
