"""Base wallet provider interface."""

from abc import ABC, abstractmethod
from decimal import Decimal

from ..network import Network


class WalletProvider(ABC):
    """Abstract base class for all wallet providers."""

    @abstractmethod
    def get_address(self) -> str:
        """Get the wallet address.

        Returns:
            str: The address of the wallet.

        """

    @abstractmethod
    def get_network(self) -> Network:
        """Get the network the wallet is connected to.

        Returns:
            Network: The current network.

        """

    @abstractmethod
    def get_balance(self) -> Decimal:
        """Get the native balance of the wallet in atomic units."""

    @abstractmethod
    def get_name(self) -> str:
        """Get the name of the wallet provider."""
