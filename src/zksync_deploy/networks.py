"""Layer-1 / layer-2 endpoint resolution for zksync-deploy library."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Mapping

from .constants import (
    DEFAULT_NETWORK_NAME,
    ETH_DEFAULT_NETWORK_RPC_URL,
    LOCALHOST_ETH_NETWORK,
    PUBLIC_L1_RPC_URLS,
    ZKSYNC_DEFAULT_NETWORK_RPC_URL,
)
from .exceptions import ConfigurationError
from .types import ActiveNetwork, NetworkConfig, NetworkEndpoints

logger = logging.getLogger(__name__)


class L1TargetKind(Enum):
    """
    How a network's ``ethNetwork`` value is interpreted.

    - KNOWN_NETWORK: one of the recognized public networks (PUBLIC_L1_RPC_URLS)
    - LOCALHOST: the local node at ETH_DEFAULT_NETWORK_RPC_URL
    - URL: the value itself is an RPC URL
    """

    KNOWN_NETWORK = "known-network"
    LOCALHOST = "localhost"
    URL = "url"


@dataclass(frozen=True)
class L1Target:
    kind: L1TargetKind
    value: str


def classify_l1_target(eth_network: str) -> L1Target:
    """Tag a layer-1 target identifier with its kind."""
    if eth_network in PUBLIC_L1_RPC_URLS:
        return L1Target(L1TargetKind.KNOWN_NETWORK, eth_network)
    if eth_network == LOCALHOST_ETH_NETWORK:
        return L1Target(L1TargetKind.LOCALHOST, eth_network)
    return L1Target(L1TargetKind.URL, eth_network)


def resolve_l1_url(target: L1Target, networks: Mapping[str, NetworkConfig]) -> str:
    """
    Map a classified layer-1 target to an RPC URL.

    A recognized network configured with its own HTTP URL uses that URL;
    recognized but unconfigured falls back to the public default.
    """
    match target.kind:
        case L1TargetKind.KNOWN_NETWORK:
            configured = networks.get(target.value)
            if configured is not None and configured.url:
                return configured.url
            return PUBLIC_L1_RPC_URLS[target.value]
        case L1TargetKind.LOCALHOST:
            return ETH_DEFAULT_NETWORK_RPC_URL
        case L1TargetKind.URL:
            return target.value
        case _:
            # Unreachable but exhaustive
            raise ConfigurationError(f"Unsupported layer-1 target: {target}")


def resolve_endpoints(
    networks: Mapping[str, NetworkConfig], network: ActiveNetwork
) -> NetworkEndpoints:
    """
    Decide which RPC URLs to use for layer 1 and layer 2.

    A non-default network without ethNetwork is rejected rather than falling
    back to the local layer-1 node.

    Args:
        networks: All configured networks by name
        network: The active network

    Returns:
        NetworkEndpoints for the active network

    Raises:
        ConfigurationError: If the active network has no ethNetwork or no HTTP url
    """
    if network.name == DEFAULT_NETWORK_NAME:
        endpoints = NetworkEndpoints(
            l1_url=ETH_DEFAULT_NETWORK_RPC_URL,
            l2_url=ZKSYNC_DEFAULT_NETWORK_RPC_URL,
        )
    else:
        if not network.eth_network:
            raise ConfigurationError(
                f"Network '{network.name}' does not declare an ethNetwork"
            )
        if not network.config.url:
            raise ConfigurationError(
                f"Network '{network.name}' does not declare an HTTP url"
            )

        target = classify_l1_target(network.eth_network)
        endpoints = NetworkEndpoints(
            l1_url=resolve_l1_url(target, networks),
            l2_url=network.config.url,
        )

    logger.info(
        "Network '%s': layer-1 %s, layer-2 %s",
        network.name,
        endpoints.l1_url,
        endpoints.l2_url,
    )
    return endpoints
