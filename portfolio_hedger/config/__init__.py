"""
Configuration Module

Usage:
    from portfolio_hedger.config import get_hedge_config, get_settings, setup_logging
"""

from portfolio_hedger.config.hedge_config_loader import (
    HedgeConfig,
    HedgeConfigError,
    HedgeConfigLoader,
    FuturesContractSpec,
    CommodityMeta,
    ClassificationTables,
    BetaTables,
    RiskParameters,
    StressScenarioConfig,
    OptionsConfig,
    get_hedge_config,
    reload_hedge_config,
)
from portfolio_hedger.config.settings import Settings, get_settings, reload_settings, setup_logging

__all__ = [
    'HedgeConfig',
    'HedgeConfigError',
    'HedgeConfigLoader',
    'FuturesContractSpec',
    'CommodityMeta',
    'ClassificationTables',
    'BetaTables',
    'RiskParameters',
    'StressScenarioConfig',
    'OptionsConfig',
    'get_hedge_config',
    'reload_hedge_config',
    'Settings',
    'get_settings',
    'reload_settings',
    'setup_logging',
]
