import pytest

from aave_agentkit.action_providers.aave import aave_action_provider
from aave_agentkit.action_providers.aave.aave_action_provider import AaveActionProvider
from aave_agentkit.action_providers.aave.schemas import AaveConfig
from aave_agentkit.network import Network

EXPECTED_ACTIONS = [
    "check_weth_balance",
    "check_atoken_balance",
    "check_debt_balance",
    "check_weth_allowance",
    "approve_weth_for_aave",
    "supply_weth",
    "withdraw_weth",
    "borrow_weth",
    "repay_weth",
    "repay_all_weth",
    "get_user_account_data",
]


def test_supports_network(aave_provider):
    """Test that the AaveActionProvider accepts EVM networks only."""
    supported_networks = [
        Network(protocol_family="evm", network_id="base-mainnet", chain_id="8453"),
        Network(protocol_family="evm", network_id="base-sepolia", chain_id="84532"),
        Network(protocol_family="evm", network_id="ethereum-mainnet", chain_id="1"),
    ]
    unsupported_networks = [
        Network(protocol_family="solana", network_id="solana-devnet"),
        Network(protocol_family="bitcoin"),
    ]
    for network in supported_networks:
        assert aave_provider.supports_network(network)
    for network in unsupported_networks:
        assert not aave_provider.supports_network(network)


def test_list_actions(aave_provider):
    """Test that actions are listed in registration order with complete descriptors."""
    actions = aave_provider.list_actions()

    assert [action.name for action in actions] == EXPECTED_ACTIONS
    assert len({action.name for action in actions}) == len(actions)
    for action in actions:
        assert action.description
        assert action.args_schema is not None
        assert action.wallet_provider


def test_list_actions_is_restartable(aave_provider):
    """Test that listing twice yields the same sequence."""
    first = [action.name for action in aave_provider.list_actions()]
    second = [action.name for action in aave_provider.list_actions()]
    assert first == second


def test_invoke_unknown_action(aave_provider, evm_wallet):
    """Test that an unknown action yields an error string instead of raising."""
    result = aave_provider.invoke("nonexistent_action", {}, evm_wallet)

    assert result.startswith("Error: Unknown action 'nonexistent_action'")
    assert "supply_weth" in result


def test_invoke_reports_field_errors(aave_provider, evm_wallet):
    """Test that schema violations name the failing field."""
    missing = aave_provider.invoke("supply_weth", {}, evm_wallet)
    invalid = aave_provider.invoke("supply_weth", {"amount": "lots"}, evm_wallet)

    assert missing.startswith("Error: Invalid input for supply_weth")
    assert "amount" in missing
    assert invalid.startswith("Error: Invalid input for supply_weth")
    assert "amount" in invalid
    assert "lots" in invalid
    evm_wallet.send_transaction.assert_not_called()


def test_invoke_dispatches_sanitized_input(aave_provider, evm_wallet):
    """Test that the registry validates, sanitizes and dispatches."""
    result = aave_provider.invoke("supply_weth", {"amount": " 0.5 WETH "}, evm_wallet)

    assert result.startswith("Successfully supplied 0.5 WETH")
    evm_wallet.send_transaction.assert_called_once()


def test_get_actions_binds_wallet(aave_provider, evm_wallet):
    """Test that bound actions invoke against the given wallet."""
    evm_wallet.read_contract.return_value = 3 * 10**18
    actions = {action.name: action for action in aave_provider.get_actions(evm_wallet)}

    assert actions["check_weth_balance"].invoke({}) == "Your WETH balance is 3 WETH"


def test_config_defaults():
    """Test the default configuration."""
    provider = aave_action_provider()

    assert provider._config == AaveConfig(
        validate_user_state=True, wait_for_receipt=True, receipt_timeout=120
    )


def test_config_environment_fallback(monkeypatch):
    """Test that environment variables fill in fields left at their defaults."""
    monkeypatch.setenv("AAVE_VALIDATE_USER_STATE", "false")
    monkeypatch.setenv("AAVE_RECEIPT_TIMEOUT", "30")

    provider = AaveActionProvider()

    assert provider._config.validate_user_state is False
    assert provider._config.receipt_timeout == 30


def test_config_explicit_values_win(monkeypatch):
    """Test that explicit configuration is not overridden by the environment."""
    monkeypatch.setenv("AAVE_RECEIPT_TIMEOUT", "30")

    provider = AaveActionProvider(AaveConfig(receipt_timeout=10, wait_for_receipt=False))

    assert provider._config.receipt_timeout == 10
    assert provider._config.wait_for_receipt is False


def test_config_explicit_default_values_win(monkeypatch):
    """Test that values equal to the defaults still take precedence over the environment."""
    monkeypatch.setenv("AAVE_VALIDATE_USER_STATE", "false")
    monkeypatch.setenv("AAVE_RECEIPT_TIMEOUT", "30")

    provider = AaveActionProvider(AaveConfig(validate_user_state=True, receipt_timeout=120))

    assert provider._config.validate_user_state is True
    assert provider._config.receipt_timeout == 120


def test_config_malformed_timeout_falls_back(monkeypatch):
    """Test that an unparsable timeout in the environment uses the default."""
    monkeypatch.setenv("AAVE_RECEIPT_TIMEOUT", "two minutes")

    provider = AaveActionProvider()

    assert provider._config.receipt_timeout == 120


@pytest.mark.parametrize("amount", ["1e-30000000", "1e-999999999"])
def test_invoke_rejects_tiny_exponent(aave_provider, evm_wallet, amount):
    """Test that amounts below one wei are rejected on the amount field."""
    result = aave_provider.invoke("supply_weth", {"amount": amount}, evm_wallet)

    assert result.startswith("Error: Invalid input for supply_weth: amount:")
    assert "more than 18 decimal places" in result
    evm_wallet.send_transaction.assert_not_called()
