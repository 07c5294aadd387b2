"""
Estimate the cost of a market buy and the revenue of a market sell for a
fixed quantity, using the combined public books of several exchanges.

Run from the repo root:
python -m book_cost --qty 2.5 --exchanges coinbase,gemini
"""

import argparse
import logging
import math
import sys
from typing import List, Optional

from book_cost.aggregator import BookAggregator
from book_cost.connector_registry import DEFAULT_EXCHANGES, get_connectors, list_connectors
from book_cost.fill import simulate_buy, simulate_sell
from book_cost.settings import load_settings
from book_cost.types import FetchStatus, FillResult

logger = logging.getLogger(__name__)

DEFAULT_QTY = 10.0


def finite_float(text: str) -> float:
    try:
        value = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid quantity: {text!r} is not a number")
    if not math.isfinite(value):
        raise argparse.ArgumentTypeError(f"invalid quantity: {text!r} is not finite")
    return value


def exchange_list(text: str) -> List[str]:
    names = [n.strip().lower() for n in text.split(',') if n.strip()]
    unknown = [n for n in names if n not in list_connectors()]
    if not names or unknown:
        raise argparse.ArgumentTypeError(
            f"unknown exchange(s) {', '.join(unknown) or text!r}; choose from {', '.join(list_connectors())}"
        )
    return names


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="book-cost",
        description="Estimate market order cost across combined exchange order books.",
    )
    parser.add_argument('--qty', type=finite_float, default=DEFAULT_QTY,
                        help=f"quantity to buy and sell (default {DEFAULT_QTY})")
    parser.add_argument('--exchanges', type=exchange_list, default=list(DEFAULT_EXCHANGES),
                        help=f"comma separated exchanges (default {','.join(DEFAULT_EXCHANGES)})")
    parser.add_argument('--asset', help="base asset, e.g. BTC")
    parser.add_argument('--quote', help="quote currency, e.g. USD")
    parser.add_argument('--timeout', type=float, help="per-request timeout in seconds")
    parser.add_argument('--log-level', help="logging level for stderr diagnostics")
    return parser


def _report_shortfall(side: str, fill: FillResult, asset: str):
    if not fill.complete:
        logger.warning(
            f"Insufficient liquidity to {side} {fill.requested_qty} {asset}: "
            f"only {fill.filled_qty} available in the combined book"
        )


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings()
    except ValueError as e:
        parser.error(str(e))

    if args.asset:
        settings.asset = args.asset.upper()
    if args.quote:
        settings.quote = args.quote.upper()
    if args.timeout is not None:
        if not args.timeout > 0:
            parser.error("--timeout must be positive")
        settings.timeout = args.timeout
    if args.log_level:
        settings.log_level = args.log_level.upper()

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    qty = args.qty
    providers = get_connectors(args.exchanges, settings)
    # overall deadline leaves the per-request timeout room to expire first
    book = BookAggregator(deadline=settings.timeout * 2).combine(providers)

    if not book.venues_with(FetchStatus.OK):
        logger.warning("No exchange returned a fresh order book; costs below are 0")

    buy = simulate_buy(book.asks, qty)
    sell = simulate_sell(book.bids, qty)
    _report_shortfall("buy", buy, settings.asset)
    _report_shortfall("sell", sell, settings.asset)

    print(f"To buy {qty} {settings.asset}: ${buy.notional}")
    print(f"To sell {qty} {settings.asset}: ${sell.notional}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
