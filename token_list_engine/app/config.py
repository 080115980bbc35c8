"""Config file."""
import re

from pydantic import Field, PositiveInt, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from token_list_engine.app.domain.chains import ETHEREUM_MAINNET, LINEA_MAINNET

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


class Settings(BaseSettings):
    """Application settings."""

    # PROJECT
    project_name: str = Field("linea-token-list", alias="PROJECT_NAME")

    # RPC
    l1_provider_url: str | None = Field(None, alias="PROVIDER_URL")
    l2_provider_url: str | None = Field(None, alias="LINEA_PROVIDER_URL")
    rpc_timeout_seconds: float = Field(10.0, alias="RPC_TIMEOUT_SECONDS", gt=0)

    # BRIDGE
    l1_token_bridge_address: str = Field(
        "0x051F1D88f0aF5763fB888eC4378b4D8B29ea3319", alias="CONTRACT_ADDRESS"
    )
    l2_token_bridge_address: str = Field(
        "0x353012dc4a9A6cF55c941bADC267f82004A8ceB9", alias="L2_CONTRACT_ADDRESS"
    )

    # TOKEN LISTS
    token_full_list_path: str = Field(
        "json/linea-mainnet-token-fulllist.json", alias="TOKEN_FULL_LIST_PATH"
    )
    token_short_list_path: str = Field(
        "json/linea-mainnet-token-shortlist.json", alias="TOKEN_SHORT_LIST_PATH"
    )
    verify_batch_size: PositiveInt = Field(10, alias="VERIFY_BATCH_SIZE")

    # LOGOS
    coingecko_url: str = Field(
        "https://api.coingecko.com/api/v3/coins", alias="COINGECKO_URL"
    )

    @field_validator("l1_token_bridge_address", "l2_token_bridge_address")
    @classmethod
    def check_bridge_address(cls, value: str) -> str:
        if not _ADDRESS_RE.match(value):
            raise ValueError(f"Bridge address must be 20-byte hex, got {value!r}")
        return value

    def rpc_url(self, chain_id: int) -> str | None:
        """Configured RPC URL for a chain, None when only public endpoints should be used."""
        if chain_id == ETHEREUM_MAINNET.chain_id:
            return self.l1_provider_url or None
        if chain_id == LINEA_MAINNET.chain_id:
            return self.l2_provider_url or None
        raise ValueError(f"Unsupported chain_id: {chain_id}")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
        extra="ignore",
    )


settings: Settings = Settings()
