import pytest
from pydantic import ValidationError

from token_list_engine.app.config import Settings

_ENV_VARS = (
    "PROVIDER_URL",
    "LINEA_PROVIDER_URL",
    "CONTRACT_ADDRESS",
    "L2_CONTRACT_ADDRESS",
    "TOKEN_FULL_LIST_PATH",
    "TOKEN_SHORT_LIST_PATH",
    "VERIFY_BATCH_SIZE",
    "RPC_TIMEOUT_SECONDS",
    "COINGECKO_URL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestSettings:
    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.l1_token_bridge_address == "0x051F1D88f0aF5763fB888eC4378b4D8B29ea3319"
        assert settings.l2_token_bridge_address == "0x353012dc4a9A6cF55c941bADC267f82004A8ceB9"
        assert settings.token_short_list_path == "json/linea-mainnet-token-shortlist.json"
        assert settings.verify_batch_size == 10
        assert settings.rpc_timeout_seconds == 10.0
        assert settings.coingecko_url == "https://api.coingecko.com/api/v3/coins"

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("VERIFY_BATCH_SIZE", "3")
        monkeypatch.setenv("LINEA_PROVIDER_URL", "https://linea.example/rpc")

        settings = Settings(_env_file=None)

        assert settings.verify_batch_size == 3
        assert settings.rpc_url(59144) == "https://linea.example/rpc"

    def test_rpc_url(self):
        settings = Settings(_env_file=None, PROVIDER_URL="https://mainnet.example/rpc")

        assert settings.rpc_url(1) == "https://mainnet.example/rpc"
        assert settings.rpc_url(59144) is None
        with pytest.raises(ValueError):
            settings.rpc_url(10)

    @pytest.mark.parametrize("address", ["0x123", "not-an-address", "0x" + "zz" * 20])
    def test_invalid_bridge_address(self, address):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, CONTRACT_ADDRESS=address)

    def test_batch_size_must_be_positive(self, monkeypatch):
        monkeypatch.setenv("VERIFY_BATCH_SIZE", "0")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)
