"""AgentKit action providers for the Aave V3 WETH market."""

from .action_providers import (
    AaveActionProvider,
    AaveConfig,
    Action,
    ActionProvider,
    WethActionProvider,
    WethConfig,
    aave_action_provider,
    create_action,
    weth_action_provider,
)
from .agentkit import AgentKit, AgentKitConfig
from .network import Network
from .wallet_providers import (
    EthAccountWalletProvider,
    EthAccountWalletProviderConfig,
    EvmWalletProvider,
    WalletProvider,
)

__version__ = "0.1.0"

__all__ = [
    "AgentKit",
    "AgentKitConfig",
    "Action",
    "ActionProvider",
    "create_action",
    "AaveActionProvider",
    "AaveConfig",
    "aave_action_provider",
    "WethActionProvider",
    "WethConfig",
    "weth_action_provider",
    "Network",
    "WalletProvider",
    "EvmWalletProvider",
    "EthAccountWalletProvider",
    "EthAccountWalletProviderConfig",
]
