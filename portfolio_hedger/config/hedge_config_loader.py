"""
Hedge Configuration Loader

Loads the hedging reference tables (commodity tickers, beta tables, futures
contract specs) and model parameters from YAML.
Provides typed access to all hedging settings.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Any
from pathlib import Path
import yaml
import logging

logger = logging.getLogger(__name__)


class HedgeConfigError(Exception):
    """Raised when a hedge config file has a malformed section"""
    pass


# =============================================================================
# Configuration Data Classes
# =============================================================================

@dataclass(frozen=True)
class FuturesContractSpec:
    """Static reference data for one futures contract"""
    symbol: str
    name: str
    multiplier: float
    default_price: float
    margin_per_contract: float

    def contract_value(self, price: float) -> float:
        """Notional of one contract at the given price."""
        return price * self.multiplier


@dataclass(frozen=True)
class CommodityMeta:
    """Display label and mapped futures symbol for a commodity key"""
    key: str
    label: str
    futures_symbol: Optional[str] = None

    @property
    def hedgeable(self) -> bool:
        return self.futures_symbol is not None


@dataclass
class ClassificationTables:
    """Ticker lists used by the position classifier"""
    commodity_tickers: Dict[str, List[str]] = field(default_factory=dict)
    sp500_hedge_stocks: List[str] = field(default_factory=list)
    nasdaq_correlated_asx: List[str] = field(default_factory=list)

    def commodity_for_ticker(self, ticker: str) -> Optional[str]:
        """First commodity whose ticker list contains ``ticker``."""
        for commodity, tickers in self.commodity_tickers.items():
            if ticker in tickers:
                return commodity
        return None


@dataclass
class BetaTables:
    """Per-ticker betas against each equity benchmark"""
    nasdaq: Dict[str, float] = field(default_factory=dict)
    sp500: Dict[str, float] = field(default_factory=dict)
    nasdaq_default: float = 1.15
    sp500_default: float = 0.95

    def nasdaq_beta(self, ticker: str) -> float:
        return self.nasdaq.get(ticker, self.nasdaq_default)

    def sp500_beta(self, ticker: str) -> float:
        return self.sp500.get(ticker, self.sp500_default)


@dataclass
class RiskParameters:
    """Risk metric proxies"""
    asx_proxy_beta: float = 0.85
    daily_vol_per_beta: float = 0.012
    z_score_95: float = 1.645
    z_score_99: float = 2.326
    long_horizon_days: int = 10
    concentration_top_n: int = 5


@dataclass
class StressScenarioConfig:
    """
    One row of the stress table.

    basis:
        beta       shock × portfolio beta
        commodity  shock × commodity share (``bucket`` = one commodity, None = all)
        currency   shock × currency share (``bucket`` = currency code)
    """
    name: str
    shock: float
    basis: str = "beta"
    move: str = ""
    bucket: Optional[str] = None


VALID_SCENARIO_BASES = ("beta", "commodity", "currency")


@dataclass
class OptionsConfig:
    """Option strategy pricing settings"""
    underlying: str = "NQ"
    volatility_symbol: str = "VIX"
    default_vix: float = 18.0
    risk_free_rate: float = 0.045
    expiry_days: List[int] = field(default_factory=lambda: [30, 90])
    days_per_year: int = 365
    put_strike_factors: List[float] = field(default_factory=lambda: [0.95, 0.90, 0.85])
    call_strike_factor: float = 1.10


@dataclass
class HedgeConfig:
    """
    Complete hedging configuration.

    This is the main configuration object passed to every engine component.
    """
    classification: ClassificationTables = field(default_factory=ClassificationTables)
    betas: BetaTables = field(default_factory=BetaTables)
    commodities: Dict[str, CommodityMeta] = field(default_factory=dict)
    futures: Dict[str, FuturesContractSpec] = field(default_factory=dict)

    # Benchmark key ("nasdaq" / "sp500") -> futures symbol
    equity_index_futures: Dict[str, str] = field(
        default_factory=lambda: {"nasdaq": "NQ", "sp500": "ES"}
    )

    # Currency -> USD conversion; currencies not listed pass through unconverted
    fx_rates_to_usd: Dict[str, float] = field(default_factory=lambda: {"USD": 1.0, "AUD": 0.63})

    risk: RiskParameters = field(default_factory=RiskParameters)
    stress_scenarios: List[StressScenarioConfig] = field(default_factory=list)
    options: OptionsConfig = field(default_factory=OptionsConfig)

    def fx_rate(self, currency: str) -> float:
        return self.fx_rates_to_usd.get(currency, 1.0)

    def futures_spec(self, symbol: Optional[str]) -> Optional[FuturesContractSpec]:
        if not symbol:
            return None
        return self.futures.get(symbol)

    def commodity_label(self, commodity: str) -> str:
        meta = self.commodities.get(commodity)
        return meta.label if meta else commodity


# =============================================================================
# Configuration Loader
# =============================================================================

class HedgeConfigLoader:
    """
    Load hedge configuration from YAML file.

    Usage:
        loader = HedgeConfigLoader()
        config = loader.load()  # Loads from default location

        # Or specify path
        config = loader.load('/path/to/hedge_config.yaml')

        print(config.betas.nasdaq_beta('NVDA'))
        print(config.futures['NQ'].multiplier)
    """

    DEFAULT_PATHS = [
        Path('config/hedge_config.yaml'),
        Path(__file__).parent / 'hedge_config.yaml',
    ]

    def __init__(self):
        self._config: Optional[HedgeConfig] = None
        self._config_path: Optional[Path] = None

    def load(self, config_path: str = None) -> HedgeConfig:
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to config file (optional, will search defaults)

        Returns:
            HedgeConfig object
        """
        if config_path:
            path = Path(config_path)
            if not path.exists():
                raise FileNotFoundError(f"Config file not found: {config_path}")
        else:
            path = self._find_config_file()

        self._config_path = path
        logger.info(f"Loading hedge config from: {path}")

        with open(path, 'r') as f:
            raw_config = yaml.safe_load(f) or {}

        if not isinstance(raw_config, dict):
            raise HedgeConfigError(f"Top level of {path} must be a mapping")

        self._config = self._parse_config(raw_config)

        logger.info(
            f"Loaded hedge configuration: {len(self._config.futures)} futures specs, "
            f"{len(self._config.commodities)} commodities, "
            f"{len(self._config.stress_scenarios)} stress scenarios"
        )
        return self._config

    def get_config(self) -> HedgeConfig:
        """Get loaded config (load if not already loaded)."""
        if self._config is None:
            return self.load()
        return self._config

    def reload(self) -> HedgeConfig:
        """Reload configuration from file."""
        if self._config_path:
            return self.load(str(self._config_path))
        return self.load()

    def _find_config_file(self) -> Path:
        """Find config file in default locations."""
        for path in self.DEFAULT_PATHS:
            if path.exists():
                return path

        raise FileNotFoundError(
            f"Hedge config file not found. Tried: {[str(p) for p in self.DEFAULT_PATHS]}"
        )

    def _parse_config(self, raw: Dict[str, Any]) -> HedgeConfig:
        """Parse raw YAML into typed config."""
        config = HedgeConfig()

        try:
            # Classification tables
            config.classification = ClassificationTables(
                commodity_tickers={
                    str(commodity): [_symbol(t) for t in tickers or []]
                    for commodity, tickers in raw.get('commodity_tickers', {}).items()
                },
                sp500_hedge_stocks=[_symbol(t) for t in raw.get('sp500_hedge_stocks', [])],
                nasdaq_correlated_asx=[_symbol(t) for t in raw.get('nasdaq_correlated_asx', [])],
            )

            # Betas
            if 'betas' in raw:
                b = raw['betas']
                config.betas = BetaTables(
                    nasdaq={_symbol(k): float(v) for k, v in b.get('nasdaq', {}).items()},
                    sp500={_symbol(k): float(v) for k, v in b.get('sp500', {}).items()},
                    nasdaq_default=float(b.get('nasdaq_default', 1.15)),
                    sp500_default=float(b.get('sp500_default', 0.95)),
                )

            # Commodities
            for key, meta in raw.get('commodities', {}).items():
                config.commodities[str(key)] = CommodityMeta(
                    key=str(key),
                    label=meta.get('label', str(key)),
                    futures_symbol=meta.get('futures'),
                )

            # Futures specs
            for symbol, spec in raw.get('futures', {}).items():
                config.futures[str(symbol)] = FuturesContractSpec(
                    symbol=str(symbol),
                    name=spec['name'],
                    multiplier=float(spec['multiplier']),
                    default_price=float(spec['default_price']),
                    margin_per_contract=float(spec['margin_per_contract']),
                )

            if 'equity_index_futures' in raw:
                config.equity_index_futures = dict(raw['equity_index_futures'])

            if 'fx_rates_to_usd' in raw:
                config.fx_rates_to_usd = {
                    str(cur): float(rate) for cur, rate in raw['fx_rates_to_usd'].items()
                }

            if 'risk' in raw:
                config.risk = RiskParameters(**raw['risk'])

            config.stress_scenarios = [
                StressScenarioConfig(**s) for s in raw.get('stress_scenarios', [])
            ]

            if 'options' in raw:
                config.options = OptionsConfig(**raw['options'])

        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise HedgeConfigError(f"Malformed hedge config: {e}") from e

        for scenario in config.stress_scenarios:
            if scenario.basis not in VALID_SCENARIO_BASES:
                raise HedgeConfigError(
                    f"Stress scenario '{scenario.name}' has unknown basis '{scenario.basis}'"
                )

        for key, meta in config.commodities.items():
            if meta.futures_symbol and meta.futures_symbol not in config.futures:
                logger.warning(f"Commodity '{key}' maps to unknown futures symbol {meta.futures_symbol}")

        return config


def _symbol(value: Any) -> str:
    return str(value).strip().upper()


# =============================================================================
# Global Config Instance
# =============================================================================

_hedge_config_loader: Optional[HedgeConfigLoader] = None


def get_hedge_config() -> HedgeConfig:
    """
    Get global hedge configuration (singleton).

    Honours HEDGE_CONFIG_PATH from settings, falling back to the bundled file.

    Usage:
        from portfolio_hedger.config.hedge_config_loader import get_hedge_config

        config = get_hedge_config()
        nq = config.futures['NQ']
    """
    global _hedge_config_loader
    if _hedge_config_loader is None:
        from portfolio_hedger.config.settings import get_settings

        _hedge_config_loader = HedgeConfigLoader()
        override = get_settings().hedge_config_path
        if override:
            return _hedge_config_loader.load(str(override))
    return _hedge_config_loader.get_config()


def reload_hedge_config() -> HedgeConfig:
    """Reload hedge configuration from file."""
    global _hedge_config_loader
    if _hedge_config_loader is None:
        _hedge_config_loader = HedgeConfigLoader()
    return _hedge_config_loader.reload()
