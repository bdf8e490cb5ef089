"""Base action provider and the action registry it owns."""

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any, Generic, TypeVar

from loguru import logger
from pydantic import BaseModel, ConfigDict, ValidationError

from ..network import Network
from ..wallet_providers import WalletProvider
from .action_decorator import ActionMetadata, get_action_metadata

TWalletProvider = TypeVar("TWalletProvider", bound=WalletProvider)


class Action(BaseModel):
    """An action bound to a wallet, ready to be handed to an agent framework."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str
    description: str
    args_schema: type[BaseModel] | None = None
    invoke: Callable[..., str]


def format_validation_error(error: ValidationError) -> str:
    """Render a pydantic validation error as `field: message` pairs.

    Args:
        error: The validation error.

    Returns:
        str: One `field: message` entry per failing field, joined by `; `.

    """
    parts = []
    for err in error.errors():
        field = ".".join(str(loc) for loc in err["loc"]) or "input"
        parts.append(f"{field}: {err['msg']}")
    return "; ".join(parts)


class ActionProvider(Generic[TWalletProvider], ABC):
    """Base class for action providers.

    Actions are the methods decorated with `create_action`. They are
    collected once, in class definition order, into a read-only table.
    """

    def __init__(self, name: str, action_providers: list["ActionProvider"]):
        """Initialize the provider and build its action table.

        Args:
            name: The provider name.
            action_providers: Nested providers, kept for compatibility with composite providers.

        Raises:
            ValueError: If two actions share a name.

        """
        self.name = name
        self.action_providers = action_providers
        self._actions: Mapping[str, ActionMetadata] = MappingProxyType(self._collect_actions())

    def _collect_actions(self) -> dict[str, ActionMetadata]:
        by_attr: dict[str, str] = {}
        for cls in reversed(type(self).__mro__):
            for attr_name, attr in vars(cls).items():
                metadata = get_action_metadata(attr)
                if metadata is not None:
                    by_attr[attr_name] = metadata.name
                elif attr_name in by_attr:
                    # overridden without the decorator
                    del by_attr[attr_name]

        actions: dict[str, ActionMetadata] = {}
        for attr_name, action_name in by_attr.items():
            if action_name in actions:
                raise ValueError(
                    f"Duplicate action name '{action_name}' in provider {self.name}"
                )
            metadata = get_action_metadata(getattr(type(self), attr_name))
            actions[action_name] = metadata.model_copy(update={"invoke": getattr(self, attr_name)})
        return actions

    def list_actions(self) -> list[ActionMetadata]:
        """Return the provider's action descriptors in registration order."""
        return list(self._actions.values())

    def get_actions(self, wallet_provider: TWalletProvider) -> list[Action]:
        """Return the provider's actions bound to a wallet.

        Args:
            wallet_provider: The wallet the actions will operate on.

        Returns:
            list[Action]: One action per descriptor, invoking through `invoke`.

        """

        def bind(action_name: str) -> Callable[[dict[str, Any]], str]:
            def invoke(args: dict[str, Any] | None = None) -> str:
                return self.invoke(action_name, args or {}, wallet_provider)

            return invoke

        return [
            Action(
                name=metadata.name,
                description=metadata.description,
                args_schema=metadata.args_schema,
                invoke=bind(metadata.name),
            )
            for metadata in self._actions.values()
        ]

    def invoke(
        self,
        name: str,
        args: dict[str, Any] | None = None,
        wallet_provider: TWalletProvider | None = None,
    ) -> str:
        """Validate the input of an action and dispatch to it.

        Every outcome is returned as a string: unknown actions, schema
        violations and errors raised by the action itself are rendered
        rather than raised.

        Args:
            name: The exact action name.
            args: Raw action input.
            wallet_provider: The wallet to run the action against.

        Returns:
            str: The action result or an error message.

        """
        metadata = self._actions.get(name)
        if metadata is None:
            available = ", ".join(self._actions) or "none"
            return f"Error: Unknown action '{name}' for provider {self.name}. Available actions: {available}"

        payload = dict(args or {})
        if metadata.args_schema is not None:
            try:
                payload = metadata.args_schema.model_validate(payload).model_dump()
            except ValidationError as e:
                return f"Error: Invalid input for {name}: {format_validation_error(e)}"

        if metadata.wallet_provider and wallet_provider is None:
            return f"Error: Action {name} requires a wallet provider"

        try:
            if metadata.wallet_provider:
                return metadata.invoke(wallet_provider, payload)
            return metadata.invoke(payload)
        except Exception as e:
            logger.exception(f"Action {name} raised")
            return f"Error: Action {name} failed: {e!s}"

    @abstractmethod
    def supports_network(self, network: Network) -> bool:
        """Check if the provider supports a network.

        Args:
            network: The network to check.

        Returns:
            bool: True if the provider's actions can run on the network.

        """
