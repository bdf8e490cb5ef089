"""Action providers and the action registry."""

from .aave import AaveActionProvider, AaveConfig, aave_action_provider
from .action_decorator import ActionMetadata, create_action
from .action_provider import Action, ActionProvider
from .weth import WethActionProvider, WethConfig, weth_action_provider

__all__ = [
    "Action",
    "ActionMetadata",
    "ActionProvider",
    "create_action",
    "AaveActionProvider",
    "AaveConfig",
    "aave_action_provider",
    "WethActionProvider",
    "WethConfig",
    "weth_action_provider",
]
