from __future__ import annotations

import argparse
from typing import Optional, Sequence

from kkbsplit.config import get_settings
from kkbsplit.logging import configure_logging, get_logger
from kkbsplit.models import BillState
from kkbsplit.services.codec import decode_or_default, encode
from kkbsplit.services.links import state_from_url
from kkbsplit.services.summary import format_summary


def load_state(link: str) -> BillState:
    if "://" in link or "?" in link:
        return state_from_url(link)
    return decode_or_default(link, currency=get_settings().currency)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="kkbsplit", description="Show how a shared bill splits per person.")
    parser.add_argument("link", help="share URL or bare token")
    parser.add_argument("--token", action="store_true", help="print the re-encoded token instead of the summary")
    args = parser.parse_args(argv)

    configure_logging(get_settings().log_level)
    log = get_logger(__name__)

    state = load_state(args.link)
    log.debug("cli.loaded", items=len(state.items), shared_items=len(state.shared_items))

    print(encode(state) if args.token else format_summary(state))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
