"""Decorator used to register provider methods as agent actions."""

import inspect
from collections.abc import Callable
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict

F = TypeVar("F", bound=Callable[..., str])


class ActionMetadata(BaseModel):
    """Descriptor of a registered action."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    name: str
    description: str
    args_schema: type[BaseModel] | None = None
    invoke: Callable[..., str]
    wallet_provider: bool = False


def create_action(
    name: str, description: str, schema: type[BaseModel] | None = None
) -> Callable[[F], F]:
    """Mark a provider method as an action.

    The decorated method must take `(self, args)` or
    `(self, wallet_provider, args)` and return a string.

    Args:
        name: Unique action name within the provider.
        description: Description shown to the agent.
        schema: Pydantic model the action input is validated against.

    Returns:
        The decorator.

    """

    def decorator(func: F) -> F:
        params = inspect.signature(func).parameters
        func._action_metadata = ActionMetadata(  # type: ignore[attr-defined]
            name=name,
            description=description.strip(),
            args_schema=schema,
            invoke=func,
            wallet_provider="wallet_provider" in params,
        )
        return func

    return decorator


def get_action_metadata(obj: Any) -> ActionMetadata | None:
    """Return the action metadata attached to `obj`, if any."""
    return getattr(obj, "_action_metadata", None)
