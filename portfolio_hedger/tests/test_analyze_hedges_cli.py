"""
Tests for the analyze_hedges CLI.

Validates:
- CSV and JSON holdings, JSON price files
- Report tables are printed
- Exit codes: 0 ok (cash-only included), 1 empty holdings, 2 unreadable input
"""

import argparse
import json
import pytest

import portfolio_hedger.cli.analyze_hedges as cli
from portfolio_hedger.tests.conftest import BUNDLED_CONFIG_PATH

HOLDINGS_CSV = (
    "ticker,name,shares,avgCost,currentPrice,value,pnlPercent\n"
    "NVDA,NVIDIA Corp,5000,150,200,1000000,33.3\n"
    "NEM,Newmont Corp,10000,45,60,600000,33.3\n"
    "CASH,Cash,,,,50000,\n"
)


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch):
    """Keep the CLI from replacing the test runner's log handlers."""
    monkeypatch.setattr(cli, 'setup_logging', lambda *args, **kwargs: None)


@pytest.fixture
def holdings_csv(tmp_path):
    path = tmp_path / 'holdings.csv'
    path.write_text(HOLDINGS_CSV)
    return path


def _run(*args):
    return cli.main(['--config', str(BUNDLED_CONFIG_PATH), *args])


class TestMain:

    def test_csv_report(self, holdings_csv, capsys):
        assert _run('--holdings', str(holdings_csv)) == 0
        out = capsys.readouterr().out
        assert 'NQ E-mini NASDAQ 100' in out
        assert 'GC COMEX Gold' in out
        assert 'Collar (Buy 5% Put, Sell 10% Call)' in out
        assert 'NASDAQ -10% selloff' in out
        assert 'Margin: $' in out

    def test_json_holdings_and_prices(self, tmp_path, capsys):
        holdings = tmp_path / 'holdings.json'
        holdings.write_text(json.dumps([
            {'ticker': 'NVDA', 'name': 'NVIDIA', 'shares': 5000, 'avgCost': 150,
             'currentPrice': 200, 'value': 1000000, 'pnlPercent': 33.3},
        ]))
        prices = tmp_path / 'prices.json'
        prices.write_text(json.dumps({'nq': 21500, 'VIX': 25}))

        assert _run('--holdings', str(holdings), '--prices', str(prices), '--hedge-pct', '100') == 0
        out = capsys.readouterr().out
        assert 'live IV 25.0%' in out
        assert '(100% equity hedge)' in out

    def test_market_item_prices(self, holdings_csv, tmp_path, capsys):
        prices = tmp_path / 'markets.json'
        prices.write_text(json.dumps([{'name': 'Gold', 'ticker': 'GC=F', 'price': 3000}]))
        assert _run('--holdings', str(holdings_csv), '--prices', str(prices)) == 0

    def test_commodity_hedge_zero(self, holdings_csv, capsys):
        assert _run('--holdings', str(holdings_csv), '--commodity-hedge', 'gold=0') == 0
        assert 'GC COMEX Gold' not in capsys.readouterr().out

    def test_no_positions_exit_code(self, tmp_path, capsys):
        path = tmp_path / 'empty.csv'
        path.write_text("ticker,name,value\n")
        assert _run('--holdings', str(path)) == 1
        assert 'No positions' in capsys.readouterr().out

    def test_cash_only_reports_zero_hedges(self, tmp_path, capsys):
        path = tmp_path / 'cash.csv'
        path.write_text("ticker,name,value\nCASH,Cash,1000\n")
        assert _run('--holdings', str(path)) == 0
        out = capsys.readouterr().out
        assert 'No futures contracts required' in out
        assert '0 contracts)' in out

    def test_missing_holdings_file(self, tmp_path, capsys):
        assert _run('--holdings', str(tmp_path / 'missing.csv')) == 2

    def test_missing_config(self, holdings_csv, tmp_path, capsys):
        assert cli.main(['--config', str(tmp_path / 'nope.yaml'), '--holdings', str(holdings_csv)]) == 2

    def test_bad_commodity_argument(self, holdings_csv):
        with pytest.raises(SystemExit):
            _run('--holdings', str(holdings_csv), '--commodity-hedge', 'gold')


class TestParseCommodityHedges:

    def test_parse(self):
        assert cli.parse_commodity_hedges(['Gold=75', 'copper = 20']) == {'gold': 75.0, 'copper': 20.0}

    def test_none(self):
        assert cli.parse_commodity_hedges(None) == {}

    @pytest.mark.parametrize('value', ['gold', '=50', 'gold=lots'])
    def test_invalid(self, value):
        with pytest.raises(argparse.ArgumentTypeError):
            cli.parse_commodity_hedges([value])
