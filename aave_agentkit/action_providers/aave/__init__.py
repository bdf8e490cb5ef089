"""Aave action provider for the Aave V3 WETH market."""

from .aave_action_provider import AaveActionProvider, aave_action_provider
from .schemas import AaveConfig

__all__ = ["AaveActionProvider", "aave_action_provider", "AaveConfig"]
