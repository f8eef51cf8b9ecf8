"""
Client configuration.

``ClientConfig`` holds everything a ``ConfluxClient`` needs besides its
collaborators: the node URL, the network id, and the defaults used while
populating transactions. ``Network`` presets cover the public networks.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from cfx_rpc.constants import (
    DEFAULT_GAS_RATIO,
    DEFAULT_STORAGE_RATIO,
    MAINNET_ID,
    RPC_TIMEOUT_SECONDS,
    TESTNET_ID,
)
from cfx_rpc.utils.retry import RetryConfig

__all__ = [
    "Network",
    "NetworkConfig",
    "NETWORKS",
    "get_network_config",
    "ClientConfig",
]


class Network(str, Enum):
    MAINNET = "mainnet"
    TESTNET = "testnet"


@dataclass(frozen=True)
class NetworkConfig:
    name: Network
    network_id: int
    rpc_url: str


NETWORKS: dict[Network, NetworkConfig] = {
    Network.MAINNET: NetworkConfig(
        name=Network.MAINNET,
        network_id=MAINNET_ID,
        rpc_url="https://main.confluxrpc.com",
    ),
    Network.TESTNET: NetworkConfig(
        name=Network.TESTNET,
        network_id=TESTNET_ID,
        rpc_url="https://test.confluxrpc.com",
    ),
}


def get_network_config(network: Union[Network, str], rpc_url: Optional[str] = None) -> NetworkConfig:
    cfg = NETWORKS[Network(network)]
    if rpc_url:
        return NetworkConfig(name=cfg.name, network_id=cfg.network_id, rpc_url=rpc_url)
    return cfg


class ClientConfig(BaseModel):
    """
    Configuration for ``ConfluxClient``.

    Example:
        ```python
        config = ClientConfig(
            url="https://test.confluxrpc.com",
            network_id=1,
            default_gas_price=1_000_000_000,
        )
        ```
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    url: str = Field(
        ...,
        description="JSON-RPC endpoint of the node",
    )
    network_id: Optional[int] = Field(
        default=None,
        ge=0,
        description="Network id; queried from cfx_getStatus when unset",
    )
    timeout: float = Field(
        default=RPC_TIMEOUT_SECONDS,
        gt=0,
        description="Per-request timeout in seconds",
    )
    default_gas_price: Optional[int] = Field(
        default=None,
        ge=0,
        description="Gas price used for legacy transactions instead of cfx_gasPrice",
    )
    default_gas_ratio: Optional[float] = Field(
        default=DEFAULT_GAS_RATIO,
        gt=0,
        description="Multiplier over estimated gasUsed; None uses the node's gasLimit",
    )
    default_storage_ratio: float = Field(
        default=DEFAULT_STORAGE_RATIO,
        gt=0,
        description="Multiplier over estimated storageCollateralized",
    )
    retry: Optional[RetryConfig] = Field(
        default=None,
        description="Transport-level retry policy; disabled when None",
    )

    @classmethod
    def for_network(cls, network: Union[Network, str], **overrides: object) -> ClientConfig:
        """Build a config from one of the ``NETWORKS`` presets."""
        preset = get_network_config(network)
        values: dict = {"url": preset.rpc_url, "network_id": preset.network_id}
        values.update(overrides)
        return cls(**values)

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> ClientConfig:
        """
        Build a config from environment variables.

        A ``.env`` file is loaded first (existing variables win). Recognized
        variables: ``CFX_RPC_URL`` (required), ``CFX_NETWORK_ID``,
        ``CFX_RPC_TIMEOUT``, ``CFX_DEFAULT_GAS_PRICE``,
        ``CFX_DEFAULT_GAS_RATIO``, ``CFX_DEFAULT_STORAGE_RATIO``.

        Raises:
            KeyError: If ``CFX_RPC_URL`` is not set.
        """
        load_dotenv(dotenv_path)

        values: dict = {"url": os.environ["CFX_RPC_URL"]}
        if os.getenv("CFX_NETWORK_ID"):
            values["network_id"] = int(os.environ["CFX_NETWORK_ID"])
        if os.getenv("CFX_RPC_TIMEOUT"):
            values["timeout"] = float(os.environ["CFX_RPC_TIMEOUT"])
        if os.getenv("CFX_DEFAULT_GAS_PRICE"):
            values["default_gas_price"] = int(os.environ["CFX_DEFAULT_GAS_PRICE"])
        if os.getenv("CFX_DEFAULT_GAS_RATIO"):
            values["default_gas_ratio"] = float(os.environ["CFX_DEFAULT_GAS_RATIO"])
        if os.getenv("CFX_DEFAULT_STORAGE_RATIO"):
            values["default_storage_ratio"] = float(os.environ["CFX_DEFAULT_STORAGE_RATIO"])
        return cls(**values)
