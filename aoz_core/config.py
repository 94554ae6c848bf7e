"""Configuration for AOZ Core."""

import re
from typing import Optional

from pydantic import ConfigDict
from pydantic_settings import BaseSettings

from aoz_core.constants import (
    SOLANA_ADDRESS_REGEX,
    USDC_MINT_DEVNET,
    USDC_MINT_MAINNET,
    VERIFIED_ADDRESS,
)
from aoz_core.exceptions import ConfigurationError


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # 'extra=ignore' allows extra environment variables without raising errors
    model_config = ConfigDict(
        env_prefix="AOZ_",
        env_file=".env",
        extra="ignore",
    )

    # API Settings
    api_host: str = "0.0.0.0"
    api_port: int = 5000
    api_prefix: str = "/api"
    cors_origins: list[str] = ["*"]

    # dev, test and local expose error details; anything else hides them
    environment: str = "dev"
    log_level: str = "INFO"

    # x402 payment gate
    x402_enabled: bool = False
    facilitator_url: str = "https://facilitator.payai.network"
    agent_creation_price: str = "1000000"  # $1.00 USDC in micro-units
    treasury_wallet_address: str = "7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU"
    payment_verification_timeout: float = 15.0
    facilitator_timeout: float = 30.0
    payment_description: str = "Create AI Agent on AOZ Platform"

    # "solana" is mainnet, anything else is treated as devnet
    solana_network: str = "solana-devnet"
    usdc_decimals: int = 6

    # AI provider (OpenAI-compatible)
    openai_api_key: Optional[str] = None
    openai_base_url: Optional[str] = None
    ai_model: str = "gpt-4o-mini"
    ai_temperature: float = 0.7
    ai_max_tokens: int = 1000

    # Registry
    verified_wallet_address: str = VERIFIED_ADDRESS
    seed_demo_agents: bool = True

    @property
    def is_mainnet(self) -> bool:
        return self.solana_network == "solana"

    @property
    def usdc_mint(self) -> str:
        """USDC mint used as the settlement asset on the selected network."""
        return USDC_MINT_MAINNET if self.is_mainnet else USDC_MINT_DEVNET

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() not in ("dev", "test", "local")

    def validate_x402(self) -> None:
        """
        Check the payment gate configuration.

        Raises:
            ConfigurationError: If the gate is enabled without a usable
                treasury address
        """
        if not self.x402_enabled:
            return
        address = self.treasury_wallet_address or ""
        if not re.fullmatch(SOLANA_ADDRESS_REGEX, address):
            raise ConfigurationError(
                "x402 requires a valid treasury wallet address",
                setting="treasury_wallet_address",
            )
        if not self.agent_creation_price.isdigit() or int(self.agent_creation_price) <= 0:
            raise ConfigurationError(
                "x402 price must be a positive integer amount in micro-units",
                setting="agent_creation_price",
            )


# Global settings instance
settings = Settings()
