"""WETH action provider for wrapping and unwrapping ETH."""

from .schemas import WethConfig
from .weth_action_provider import WethActionProvider, weth_action_provider

__all__ = ["WethActionProvider", "weth_action_provider", "WethConfig"]
