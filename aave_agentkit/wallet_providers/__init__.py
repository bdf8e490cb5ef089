"""Wallet providers."""

from .eth_account_wallet_provider import (
    EthAccountWalletProvider,
    EthAccountWalletProviderConfig,
)
from .evm_wallet_provider import EvmWalletProvider
from .wallet_provider import WalletProvider

__all__ = [
    "WalletProvider",
    "EvmWalletProvider",
    "EthAccountWalletProvider",
    "EthAccountWalletProviderConfig",
]
