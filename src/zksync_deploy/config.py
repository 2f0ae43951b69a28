"""Network configuration loading for zksync-deploy library."""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .constants import DEFAULT_NETWORK_NAME, NETWORK_ENV
from .exceptions import ConfigurationError
from .paths import get_default_config_path
from .types import ActiveNetwork, DeployConfig, NetworkConfig


def parse_network_config(data: Dict[str, Any]) -> NetworkConfig:
    """
    Parse one network entry.

    Args:
        data: {"url": str?, "ethNetwork": str?, "zksync": bool?}

    Returns:
        NetworkConfig
    """
    return NetworkConfig(
        url=data.get("url"),
        eth_network=data.get("ethNetwork"),
        zksync=bool(data.get("zksync", False)),
    )


def parse_deploy_config(data: Dict[str, Any]) -> DeployConfig:
    """
    Parse a decoded config document.

    Raises:
        ConfigurationError: If "networks" is not a mapping
    """
    networks = data.get("networks", {})
    if not isinstance(networks, dict):
        raise ConfigurationError("'networks' must be a mapping of network name to config")

    return DeployConfig(
        networks={name: parse_network_config(entry) for name, entry in networks.items()},
        default_network=data.get("defaultNetwork"),
    )


def load_deploy_config(config_path: Optional[Union[Path, str]] = None) -> DeployConfig:
    """
    Load network configuration from a JSON file.

    Args:
        config_path: Path to config file (defaults to ./zksync.config.json)

    Returns:
        DeployConfig; empty when the default file does not exist

    Raises:
        ConfigurationError: If an explicit file is missing or is not valid JSON
    """
    explicit = config_path is not None
    path = Path(config_path) if explicit else get_default_config_path()

    if not path.exists():
        if explicit:
            raise ConfigurationError(f"Config file not found at {path}")
        return DeployConfig(networks={})

    try:
        with open(path) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Config file {path} is not valid JSON: {e}") from e

    return parse_deploy_config(data)


def select_network(config: DeployConfig, network_name: Optional[str] = None) -> ActiveNetwork:
    """
    Pick the active network.

    Precedence: explicit name, then $ZKSYNC_NETWORK, then the config's
    defaultNetwork, then "hardhat".

    Raises:
        ConfigurationError: If a named network is not in the config
    """
    if network_name is None:
        network_name = os.environ.get(NETWORK_ENV)
    if network_name is None:
        network_name = config.default_network or DEFAULT_NETWORK_NAME

    if network_name in config.networks:
        return ActiveNetwork(name=network_name, config=config.networks[network_name])

    if network_name == DEFAULT_NETWORK_NAME:
        return ActiveNetwork(name=network_name, config=NetworkConfig(zksync=True))

    raise ConfigurationError(f"Network '{network_name}' not found in config")
