"""Configuration system using pydantic-settings with environment variable loading."""

from decimal import Decimal
from typing import Literal

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ExchangeSettings(BaseSettings):
    """Exchange connection settings (any ccxt exchange id)."""

    model_config = SettingsConfigDict(env_prefix="EXCHANGE_")

    exchange_id: str = "hyperliquid"
    api_key: SecretStr = SecretStr("")
    api_secret: SecretStr = SecretStr("")
    wallet_address: str = ""  # DEX account address, if the exchange needs one
    private_key: SecretStr = SecretStr("")
    sandbox: bool = False


class StrategySettings(BaseSettings):
    """Market making parameters for a single trading pair.

    Immutable for the lifetime of a run. All amounts are Decimal and are
    expressed in quote currency unless the name says otherwise.
    """

    model_config = SettingsConfigDict(env_prefix="STRATEGY_", frozen=True)

    pair: str = "TOKEN/ETH"  # BASE/QUOTE
    bot_address: str = ""
    fund_minimum: Decimal = Decimal("0.1")  # quote reserve never deployed
    token_limit: Decimal = Decimal("1000")  # max base-token exposure
    spread: Decimal = Decimal("0.0001")  # min market spread before quoting
    dust_cutoff: Decimal = Decimal("0.01")  # min notional worth keeping
    band_size: Decimal = Decimal("3")  # multiplier on spread around mid
    price_decimals: int = 6

    @field_validator("pair")
    @classmethod
    def _validate_pair(cls, value: str) -> str:
        parts = value.split("/")
        if len(parts) != 2 or not all(parts):
            raise ValueError(f"pair must look like BASE/QUOTE, got {value!r}")
        return value

    @field_validator("token_limit", "spread", "band_size", "dust_cutoff", "fund_minimum")
    @classmethod
    def _validate_non_negative(cls, value: Decimal) -> Decimal:
        if value < Decimal("0"):
            raise ValueError("must be >= 0")
        return value

    @property
    def base_token(self) -> str:
        """The traded (base) token symbol."""
        return self.pair.split("/")[0]

    @property
    def quote_token(self) -> str:
        """The quote currency symbol."""
        return self.pair.split("/")[1]


class TradingSettings(BaseSettings):
    """Runner parameters."""

    model_config = SettingsConfigDict(env_prefix="TRADING_")

    mode: Literal["paper", "live"] = "paper"
    cycle_interval: int = 30  # seconds between decision cycles


class AppSettings(BaseSettings):
    """Root application settings, composing all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    log_level: str = "INFO"
    exchange: ExchangeSettings = ExchangeSettings()
    strategy: StrategySettings = StrategySettings()
    trading: TradingSettings = TradingSettings()
