"""
Tests for client configuration and network presets.
"""

import os
from unittest.mock import patch

import pydantic
import pytest

from cfx_rpc.config import NETWORKS, ClientConfig, Network, get_network_config
from cfx_rpc.constants import MAINNET_ID, TESTNET_ID
from cfx_rpc.utils.retry import RetryConfig


class TestNetworks:
    """Tests for network presets."""

    def test_presets(self) -> None:
        assert NETWORKS[Network.MAINNET].network_id == MAINNET_ID
        assert NETWORKS[Network.TESTNET].network_id == TESTNET_ID

    def test_get_network_config_by_name(self) -> None:
        assert get_network_config("testnet") is NETWORKS[Network.TESTNET]

    def test_rpc_url_override(self) -> None:
        cfg = get_network_config(Network.MAINNET, rpc_url="http://my-node:12537")

        assert cfg.rpc_url == "http://my-node:12537"
        assert cfg.network_id == MAINNET_ID

    def test_unknown_network(self) -> None:
        with pytest.raises(ValueError):
            get_network_config("devnet")


class TestClientConfig:
    """Tests for ClientConfig."""

    def test_defaults(self) -> None:
        config = ClientConfig(url="http://localhost:12537")

        assert config.network_id is None
        assert config.timeout == 30
        assert config.default_gas_price is None
        assert config.default_gas_ratio == 1.1
        assert config.default_storage_ratio == 1.1
        assert config.retry is None

    def test_for_network(self) -> None:
        config = ClientConfig.for_network("mainnet", default_gas_price=1, retry=RetryConfig(max_attempts=2))

        assert config.url == NETWORKS[Network.MAINNET].rpc_url
        assert config.network_id == MAINNET_ID
        assert config.default_gas_price == 1
        assert config.retry.max_attempts == 2

    def test_is_frozen(self) -> None:
        config = ClientConfig(url="http://localhost:12537")

        with pytest.raises(pydantic.ValidationError):
            config.url = "http://elsewhere"

    def test_rejects_bad_values(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            ClientConfig(url="http://localhost:12537", default_storage_ratio=0)
        with pytest.raises(pydantic.ValidationError):
            ClientConfig(url="http://localhost:12537", timeout=-1)


class TestFromEnv:
    """Tests for ClientConfig.from_env."""

    def test_reads_environment(self, tmp_path) -> None:
        env = {
            "CFX_RPC_URL": "http://env-node:12537",
            "CFX_NETWORK_ID": "1029",
            "CFX_RPC_TIMEOUT": "5",
            "CFX_DEFAULT_GAS_PRICE": "1000000000",
            "CFX_DEFAULT_GAS_RATIO": "1.5",
            "CFX_DEFAULT_STORAGE_RATIO": "1.2",
        }
        with patch.dict(os.environ, env):
            config = ClientConfig.from_env(str(tmp_path / "missing.env"))

        assert config.url == "http://env-node:12537"
        assert config.network_id == 1029
        assert config.timeout == 5.0
        assert config.default_gas_price == 1_000_000_000
        assert config.default_gas_ratio == 1.5
        assert config.default_storage_ratio == 1.2

    def test_dotenv_file_does_not_override(self, tmp_path) -> None:
        dotenv = tmp_path / ".env"
        dotenv.write_text("CFX_RPC_URL=http://file-node:12537\nCFX_NETWORK_ID=1\n")

        with patch.dict(os.environ, {"CFX_RPC_URL": "http://shell-node:12537"}):
            os.environ.pop("CFX_NETWORK_ID", None)
            config = ClientConfig.from_env(str(dotenv))

        assert config.url == "http://shell-node:12537"
        assert config.network_id == 1

    def test_url_required(self, tmp_path) -> None:
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(KeyError):
                ClientConfig.from_env(str(tmp_path / "missing.env"))
