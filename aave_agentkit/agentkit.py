"""AgentKit aggregates action providers for a single wallet."""

from typing import Any

from loguru import logger
from pydantic import BaseModel, ConfigDict

from .action_providers.action_provider import Action, ActionProvider
from .wallet_providers import WalletProvider


class AgentKitConfig(BaseModel):
    """Configuration options for AgentKit."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    wallet_provider: WalletProvider
    action_providers: list[ActionProvider] = []


class AgentKit:
    """Exposes the actions of several providers, bound to one wallet."""

    def __init__(self, config: AgentKitConfig):
        """Initialize AgentKit.

        Args:
            config: The wallet and the action providers to expose.

        """
        self.wallet_provider = config.wallet_provider
        self.action_providers = config.action_providers

    def _supported_providers(self) -> list[ActionProvider]:
        network = self.wallet_provider.get_network()
        supported = []
        for provider in self.action_providers:
            if provider.supports_network(network):
                supported.append(provider)
            else:
                logger.debug(
                    f"Action provider {provider.name} does not support network {network.network_id}"
                )
        return supported

    def get_actions(self) -> list[Action]:
        """Get the actions of every provider that supports the wallet's network.

        Action names are prefixed with the provider class name, e.g.
        `AaveActionProvider_supply_weth`, so they stay unique across providers.

        Returns:
            list[Action]: The bound actions.

        """
        actions = []
        for provider in self._supported_providers():
            prefix = type(provider).__name__
            for action in provider.get_actions(self.wallet_provider):
                actions.append(action.model_copy(update={"name": f"{prefix}_{action.name}"}))
        return actions

    def invoke(self, name: str, args: dict[str, Any] | None = None) -> str:
        """Invoke an action by its prefixed or bare name.

        Args:
            name: The action name, e.g. `AaveActionProvider_supply_weth` or `supply_weth`.
            args: Raw action input.

        Returns:
            str: The action result or an error message.

        """
        providers = self._supported_providers()
        for provider in providers:
            prefix = f"{type(provider).__name__}_"
            action_name = name.removeprefix(prefix)
            if any(metadata.name == action_name for metadata in provider.list_actions()):
                return provider.invoke(action_name, args, self.wallet_provider)

        available = ", ".join(
            f"{type(provider).__name__}_{metadata.name}"
            for provider in providers
            for metadata in provider.list_actions()
        )
        return f"Error: Unknown action '{name}'. Available actions: {available or 'none'}"
