from unittest.mock import MagicMock

import pytest

from aave_agentkit.network import Network
from aave_agentkit.wallet_providers import EvmWalletProvider

WALLET_ADDRESS = "0x1234567890123456789012345678901234567890"
TX_HASH = "0x" + "ab" * 32


@pytest.fixture(autouse=True)
def clear_provider_env(monkeypatch):
    """Keep provider configuration independent of the test environment."""
    monkeypatch.delenv("AAVE_VALIDATE_USER_STATE", raising=False)
    monkeypatch.delenv("AAVE_RECEIPT_TIMEOUT", raising=False)
    monkeypatch.delenv("WETH_RECEIPT_TIMEOUT", raising=False)


@pytest.fixture
def evm_wallet():
    """Create a mock EVM wallet provider on Base Sepolia."""
    mock_wallet = MagicMock(spec=EvmWalletProvider)
    mock_wallet.get_address.return_value = WALLET_ADDRESS
    mock_wallet.get_network.return_value = Network(
        protocol_family="evm",
        network_id="base-sepolia",
        chain_id="84532",
    )
    mock_wallet.send_transaction.return_value = TX_HASH
    mock_wallet.wait_for_transaction_receipt.return_value = {"status": 1}
    return mock_wallet
