from unittest.mock import patch

import pytest
from eth_abi import decode
from web3 import Web3

from aave_agentkit.action_providers.aave.aave_action_provider import AaveActionProvider
from aave_agentkit.action_providers.aave.constants import MAX_UINT256
from aave_agentkit.action_providers.aave.schemas import AaveConfig
from aave_agentkit.network import Network

WALLET = "0x1234567890123456789012345678901234567890"
TX_HASH = "0x" + "ab" * 32


def sent_transaction(wallet):
    wallet.send_transaction.assert_called_once()
    return wallet.send_transaction.call_args[0][0]


def decode_call(data, signature, types):
    selector = "0x" + bytes(Web3.keccak(text=signature))[:4].hex()
    assert data[:10] == selector
    return decode(types, bytes.fromhex(data[10:]))


def test_supply_weth(aave_provider, evm_wallet, sepolia_config):
    """Test that supply_weth sends the supply call to the pool."""
    result = aave_provider.supply_weth(evm_wallet, {"amount": "0.5"})

    assert result == f"Successfully supplied 0.5 WETH to Aave.\nTransaction hash: {TX_HASH}"
    params = sent_transaction(evm_wallet)
    assert params["to"] == sepolia_config.pool_address
    assert params["gas"] == 300000
    asset, amount, on_behalf_of, referral_code = decode_call(
        params["data"],
        "supply(address,uint256,address,uint16)",
        ["address", "uint256", "address", "uint16"],
    )
    assert Web3.to_checksum_address(asset) == sepolia_config.weth_address
    assert amount == 5 * 10**17
    assert Web3.to_checksum_address(on_behalf_of) == WALLET
    assert referral_code == 0
    evm_wallet.wait_for_transaction_receipt.assert_called_once_with(TX_HASH, timeout=120)


def test_supply_weth_encoding_is_deterministic(aave_provider, evm_wallet):
    """Test that the same input produces byte-identical calldata."""
    aave_provider.supply_weth(evm_wallet, {"amount": "0.5"})
    aave_provider.supply_weth(evm_wallet, {"amount": "0.5 WETH"})

    first, second = (call[0][0] for call in evm_wallet.send_transaction.call_args_list)
    assert first == second


def test_approve_weth_for_aave(aave_provider, evm_wallet, sepolia_config):
    """Test that the approval targets the WETH contract with the pool as spender."""
    result = aave_provider.approve_weth_for_aave(evm_wallet, {"amount": "1 WETH"})

    assert result.startswith("Successfully approved Aave to spend 1 WETH")
    params = sent_transaction(evm_wallet)
    assert params["to"] == sepolia_config.weth_address
    assert params["gas"] == 100000
    spender, amount = decode_call(
        params["data"], "approve(address,uint256)", ["address", "uint256"]
    )
    assert Web3.to_checksum_address(spender) == sepolia_config.pool_address
    assert amount == 10**18


def test_withdraw_weth(aave_provider, evm_wallet, sepolia_config):
    """Test that withdraw_weth sends funds back to the wallet."""
    result = aave_provider.withdraw_weth(evm_wallet, {"amount": "0.25"})

    assert result.startswith("Successfully withdrew 0.25 WETH from Aave.")
    params = sent_transaction(evm_wallet)
    assert params["to"] == sepolia_config.pool_address
    asset, amount, to = decode_call(
        params["data"], "withdraw(address,uint256,address)", ["address", "uint256", "address"]
    )
    assert Web3.to_checksum_address(asset) == sepolia_config.weth_address
    assert amount == 25 * 10**16
    assert Web3.to_checksum_address(to) == WALLET


def test_borrow_weth_uses_variable_rate(aave_provider, evm_wallet, sepolia_config):
    """Test that borrow_weth borrows at the variable rate without referral."""
    result = aave_provider.borrow_weth(evm_wallet, {"amount": "0.01"})

    assert result.startswith("Successfully borrowed 0.01 WETH from Aave.")
    params = sent_transaction(evm_wallet)
    assert params["gas"] == 300000
    asset, amount, rate_mode, referral_code, on_behalf_of = decode_call(
        params["data"],
        "borrow(address,uint256,uint256,uint16,address)",
        ["address", "uint256", "uint256", "uint16", "address"],
    )
    assert Web3.to_checksum_address(asset) == sepolia_config.weth_address
    assert amount == 10**16
    assert rate_mode == 2
    assert referral_code == 0
    assert Web3.to_checksum_address(on_behalf_of) == WALLET


def test_repay_weth(aave_provider, evm_wallet):
    """Test that repay_weth repays the given amount of variable debt."""
    result = aave_provider.repay_weth(evm_wallet, {"amount": "0.01"})

    assert result.startswith("Successfully repaid 0.01 WETH to Aave.")
    _, amount, rate_mode, on_behalf_of = decode_call(
        sent_transaction(evm_wallet)["data"],
        "repay(address,uint256,uint256,address)",
        ["address", "uint256", "uint256", "address"],
    )
    assert amount == 10**16
    assert rate_mode == 2
    assert Web3.to_checksum_address(on_behalf_of) == WALLET


def test_repay_all_weth_uses_max_uint256(aave_provider, evm_wallet):
    """Test that repaying everything encodes the uint256 maximum."""
    result = aave_provider.repay_all_weth(evm_wallet, {})

    assert result == f"Successfully repaid all WETH debt to Aave.\nTransaction hash: {TX_HASH}"
    _, amount, rate_mode, _ = decode_call(
        sent_transaction(evm_wallet)["data"],
        "repay(address,uint256,uint256,address)",
        ["address", "uint256", "uint256", "address"],
    )
    assert amount == MAX_UINT256 == 2**256 - 1
    assert rate_mode == 2


def test_unknown_network_uses_default_addresses(aave_provider, evm_wallet, sepolia_config):
    """Test that an unconfigured network falls back to the default market."""
    evm_wallet.get_network.return_value = Network(
        protocol_family="evm", network_id="ethereum-mainnet", chain_id="1"
    )

    aave_provider.supply_weth(evm_wallet, {"amount": "1"})

    assert sent_transaction(evm_wallet)["to"] == sepolia_config.pool_address


@pytest.mark.parametrize(
    ("action", "args"),
    [
        ("approve_weth_for_aave", {"amount": "1"}),
        ("supply_weth", {"amount": "1"}),
        ("withdraw_weth", {"amount": "1"}),
        ("borrow_weth", {"amount": "1"}),
        ("repay_weth", {"amount": "1"}),
        ("repay_all_weth", {}),
    ],
)
def test_wallet_rejection_returns_error(aave_provider, evm_wallet, action, args):
    """Test that a rejected transaction is reported, not raised."""
    evm_wallet.send_transaction.side_effect = Exception("User rejected the request")

    result = getattr(aave_provider, action)(evm_wallet, args)

    assert result.startswith("Error")
    assert "User rejected the request" in result


def test_wallet_rejection_through_registry(aave_provider, evm_wallet):
    """Test that the registry also returns the rejection as a string."""
    evm_wallet.send_transaction.side_effect = Exception("insufficient funds for gas")

    result = aave_provider.invoke("borrow_weth", {"amount": "0.1"}, evm_wallet)

    assert result == "Error borrowing WETH from Aave: insufficient funds for gas"


def test_reverted_transaction(aave_provider, evm_wallet):
    """Test that a mined but failed transaction is reported as reverted."""
    evm_wallet.wait_for_transaction_receipt.return_value = {"status": 0}

    result = aave_provider.supply_weth(evm_wallet, {"amount": "1"})

    assert result == f"Error: Transaction {TX_HASH} reverted"


def test_receipt_timeout_returns_error(aave_provider, evm_wallet):
    """Test that a receipt timeout is reported with its message."""
    evm_wallet.wait_for_transaction_receipt.side_effect = TimeoutError("not mined after 120s")

    result = aave_provider.withdraw_weth(evm_wallet, {"amount": "1"})

    assert result == "Error withdrawing WETH from Aave: not mined after 120s"


def test_no_wait_for_receipt(evm_wallet):
    """Test that waiting for the receipt can be disabled."""
    provider = AaveActionProvider(AaveConfig(validate_user_state=False, wait_for_receipt=False))

    result = provider.supply_weth(evm_wallet, {"amount": "1"})

    assert TX_HASH in result
    evm_wallet.wait_for_transaction_receipt.assert_not_called()


def test_custom_receipt_timeout(evm_wallet):
    """Test that the configured receipt timeout is passed to the wallet."""
    provider = AaveActionProvider(AaveConfig(validate_user_state=False, receipt_timeout=15))

    provider.repay_all_weth(evm_wallet, {})

    evm_wallet.wait_for_transaction_receipt.assert_called_once_with(TX_HASH, timeout=15)


def test_invalid_amount_called_directly(aave_provider, evm_wallet):
    """Test that calling an action directly still validates the amount."""
    result = aave_provider.supply_weth(evm_wallet, {"amount": "0"})

    assert result.startswith("Error: Invalid input: amount:")
    evm_wallet.send_transaction.assert_not_called()


def test_encoding_error_returns_error(aave_provider, evm_wallet):
    """Test that unexpected failures while building the call are reported."""
    with patch(
        "aave_agentkit.action_providers.aave.aave_action_provider.encode_pool_call",
        side_effect=RuntimeError("ABI mismatch"),
    ):
        result = aave_provider.repay_weth(evm_wallet, {"amount": "1"})

    assert result == "Error repaying WETH to Aave: ABI mismatch"
