"""
CLI: Analyse portfolio exposure and size futures / option hedges.

Usage:
    python -m portfolio_hedger.cli.analyze_hedges --holdings holdings.csv
    python -m portfolio_hedger.cli.analyze_hedges --holdings holdings.json --prices prices.json \
        --hedge-pct 75 --commodity-hedge gold=50 --commodity-hedge copper=0

Holdings files are CSV or JSON record lists with columns ticker, name, shares,
avgCost, currentPrice, value, pnlPercent. Price files are JSON: either a
``{"NQ": 21500, "VIX": 16.2}`` mapping or a market-feed list of
``{"name", "ticker", "price"}`` items.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd
from tabulate import tabulate

from portfolio_hedger.analytics.pricing import StrategyType
from portfolio_hedger.config import HedgeConfigError, HedgeConfigLoader, get_hedge_config, get_settings, setup_logging
from portfolio_hedger.services.hedging import HedgeParameters
from portfolio_hedger.services.hedging_engine import AnalysisStatus, HedgingEngine, HedgingReport
from portfolio_hedger.services.market_data import FuturesPriceBook

logger = logging.getLogger(__name__)


def load_holdings(path: Path) -> List[Dict[str, Any]]:
    """Read holdings records from CSV or JSON."""
    if path.suffix.lower() == '.json':
        frame = pd.read_json(path, orient='records', dtype=False)
    else:
        frame = pd.read_csv(path, keep_default_na=False, dtype={'ticker': str, 'name': str})
    return frame.to_dict(orient='records')


def load_prices(path: Path, config) -> FuturesPriceBook:
    with open(path, 'r') as f:
        raw = json.load(f)

    if isinstance(raw, list):
        return FuturesPriceBook.from_market_items(raw, config)
    if isinstance(raw, dict):
        return FuturesPriceBook({str(k).upper(): v for k, v in raw.items()}, config)
    raise ValueError(f"Unsupported price file layout in {path}")


def parse_commodity_hedges(values: Optional[List[str]]) -> Dict[str, float]:
    """Parse repeated ``commodity=pct`` arguments."""
    result = {}
    for value in values or []:
        commodity, sep, pct = value.partition('=')
        if not sep or not commodity.strip():
            raise argparse.ArgumentTypeError(f"Expected commodity=pct, got '{value}'")
        try:
            result[commodity.strip().lower()] = float(pct)
        except ValueError:
            raise argparse.ArgumentTypeError(f"Invalid percentage in '{value}'")
    return result


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        description="Analyse portfolio exposure and size futures and option hedges"
    )
    parser.add_argument(
        '--holdings', type=Path, required=True,
        help='Holdings file (.csv or .json)',
    )
    parser.add_argument(
        '--prices', type=Path,
        help='Live futures / VIX prices (.json mapping or market item list)',
    )
    parser.add_argument(
        '--hedge-pct', type=float, default=settings.default_equity_hedge_pct,
        help='Equity hedge percentage, 0-100 (default: %(default)s)',
    )
    parser.add_argument(
        '--commodity-hedge', action='append', metavar='COMMODITY=PCT',
        help='Per-commodity hedge percentage (repeatable, default 100)',
    )
    parser.add_argument(
        '--total-value', type=float,
        help='Total portfolio value (default: sum of holding values)',
    )
    parser.add_argument(
        '--config', type=Path,
        help='Hedge config YAML (default: bundled hedge_config.yaml)',
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    setup_logging()
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        commodity_pcts = parse_commodity_hedges(args.commodity_hedge)
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))

    try:
        config = HedgeConfigLoader().load(str(args.config)) if args.config else get_hedge_config()
    except (FileNotFoundError, HedgeConfigError) as e:
        print(f"ERROR: {e}")
        return 2

    try:
        holdings = load_holdings(args.holdings)
        price_book = load_prices(args.prices, config) if args.prices else FuturesPriceBook(config=config)
    except (OSError, ValueError) as e:
        print(f"ERROR: Could not read input: {e}")
        return 2

    engine = HedgingEngine(config)
    parameters = HedgeParameters.from_percentages(args.hedge_pct, commodity_pcts)
    report = engine.analyze_holdings(holdings, args.total_value, price_book, parameters)

    if report.status == AnalysisStatus.NO_POSITIONS:
        print("\nNo positions to analyse.")
        return 1

    _print_report(report)
    return 0


def _money(value: float) -> str:
    return f"${value:,.0f}"


def _print_report(report: HedgingReport):
    a = report.analysis
    b = report.breakdown

    print(f"\n{'=' * 70}")
    print(f"  Portfolio value: {_money(a.portfolio_value)}  |  {len(b.positions)} positions")
    print(f"{'=' * 70}\n")

    exposure_rows = [
        ["NASDAQ", len(b.nasdaq), _money(a.nasdaq_notional_usd), _money(a.nasdaq_beta_adjusted_usd), f"{a.nasdaq_weighted_beta:.2f}"],
        ["S&P 500", len(b.sp500), _money(a.sp500_notional_usd), _money(a.sp500_beta_adjusted_usd), f"{a.sp500_weighted_beta:.2f}"],
        ["ASX", len(b.asx), _money(a.asx_notional_usd), "-", "-"],
        ["Other", len(b.other), _money(b.other_notional_usd), "-", "-"],
    ]
    for commodity, bucket in b.commodity_buckets.items():
        exposure_rows.append([f"Commodity: {commodity}", len(bucket.positions), _money(bucket.value_usd), "-", "-"])
    print(tabulate(exposure_rows, headers=["Bucket", "Positions", "Notional (USD)", "Beta-adj (USD)", "Beta"], tablefmt="simple"))

    print()
    summary = [
        ["Long / Short", f"{_money(a.total_long_value)} / {_money(a.total_short_value)}"],
        ["Net / Gross", f"{_money(a.net_exposure)} / {_money(a.gross_exposure)}"],
        ["Portfolio beta", f"{a.portfolio_beta:.2f}"],
        ["Daily volatility", f"{a.daily_volatility:.2%}"],
        ["VaR 95% (1d)", _money(a.var_95_1d)],
        ["VaR 99% (1d)", _money(a.var_99_1d)],
        ["VaR 95% (10d)", _money(a.var_95_10d)],
    ]
    print(tabulate(summary, tablefmt="grid"))

    print("\nStress scenarios")
    stress_rows = [[s.name, s.move, _money(s.impact), f"{s.impact_percent:.1f}%"] for s in report.risk.stress_results]
    print(tabulate(stress_rows, headers=["Scenario", "Move", "Impact", "% of portfolio"], tablefmt="simple"))

    print("\nTop positions")
    conc_rows = [[c.ticker, c.name, f"{c.weight_percent:.1f}%", _money(c.value)] for c in report.risk.concentration.top_positions]
    print(tabulate(conc_rows, headers=["Ticker", "Name", "Weight", "Value"], tablefmt="simple"))

    _print_hedges(report)
    _print_options(report)


def _print_hedges(report: HedgingReport):
    hedges = report.hedges
    print(f"\nFutures hedges ({hedges.equity_hedge_fraction:.0%} equity hedge)")
    lines = hedges.summary_lines()
    if lines:
        rows = [[l.instrument, l.direction, l.contracts, _money(l.notional), _money(l.margin), l.hedges] for l in lines]
        print(tabulate(rows, headers=["Instrument", "Direction", "Contracts", "Notional", "Margin", "Hedges"], tablefmt="simple"))
    else:
        print("  No futures contracts required at the current hedge ratios.")

    for h in hedges.non_hedgeable:
        print(f"  {h.label}: {_money(h.exposure_usd)} (no liquid futures contract)")

    print(
        f"\n  Total notional: {_money(hedges.total_notional)} "
        f"({hedges.notional_to_portfolio:.1%} of portfolio)  |  "
        f"Margin: {_money(hedges.total_margin)} ({hedges.margin_to_portfolio:.1%} of portfolio)"
    )
    print(f"  Beta: {hedges.portfolio_beta:.2f} -> {hedges.hedged_beta:.2f}")


def _print_options(report: HedgingReport):
    options = report.options
    source = "live" if options.volatility_is_live else "default"
    print(
        f"\nOption hedges on {options.underlying} @ {options.spot:,.0f} "
        f"({source} IV {options.implied_volatility:.1%}, {options.contracts_needed} contracts)"
    )
    for expiry in options.expiries:
        rows = []
        for strategy in StrategyType:
            q = expiry.quote(strategy)
            rows.append([q.label, _money(abs(q.per_contract)), _money(abs(q.total)), q.debit_credit])
        print(f"\n  {expiry.label} expiry  (put strikes {expiry.put_strikes}, call strike {expiry.call_strike})")
        print(tabulate(rows, headers=["Strategy", "Per contract", "Total", ""], tablefmt="simple"))
    print()


if __name__ == "__main__":
    sys.exit(main())
