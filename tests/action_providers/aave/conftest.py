import pytest

from aave_agentkit.action_providers.aave.aave_action_provider import AaveActionProvider
from aave_agentkit.action_providers.aave.constants import NETWORK_CONFIGS
from aave_agentkit.action_providers.aave.schemas import AaveConfig

DATA_PROVIDER_ADDRESS = "0x2222222222222222222222222222222222222222"
ADDRESSES_PROVIDER_ADDRESS = "0x1111111111111111111111111111111111111111"

ONE_WETH = 10**18


@pytest.fixture
def aave_provider():
    """Create an AaveActionProvider without pre-flight checks."""
    return AaveActionProvider(AaveConfig(validate_user_state=False))


@pytest.fixture
def aave_provider_with_preflight():
    """Create an AaveActionProvider with pre-flight checks enabled."""
    return AaveActionProvider(AaveConfig(validate_user_state=True))


@pytest.fixture
def sepolia_config():
    """Return the Base Sepolia market addresses."""
    return NETWORK_CONFIGS["base-sepolia"]


@pytest.fixture
def chain_state():
    """Create the on-chain state served by `contract_reader`.

    Defaults describe a healthy account with WETH supplied and borrowed in an
    active, unfrozen reserve.
    """
    return {
        "reserve": {
            "borrowingEnabled": True,
            "isActive": True,
            "isFrozen": False,
        },
        "a_token_balance": ONE_WETH,
        "scaled_balance": ONE_WETH,
        "variable_debt": ONE_WETH // 10,
        "usage_as_collateral": True,
        "liquidity": 1000 * ONE_WETH,
        "health_factor": 2 * ONE_WETH,
        "total_debt_base": 100 * 10**8,
    }


@pytest.fixture
def contract_reader(chain_state):
    """Build a `read_contract` side effect serving `chain_state`."""

    def read_contract(contract_address, abi, function_name, args=None, block_identifier="latest"):
        reserve = chain_state["reserve"]
        if function_name == "ADDRESSES_PROVIDER":
            return ADDRESSES_PROVIDER_ADDRESS
        if function_name == "getPoolDataProvider":
            return DATA_PROVIDER_ADDRESS
        if function_name == "getReserveConfigurationData":
            return (
                18,
                8000,
                8250,
                10500,
                1500,
                True,
                reserve["borrowingEnabled"],
                False,
                reserve["isActive"],
                reserve["isFrozen"],
            )
        if function_name == "getUserReserveData":
            return (
                chain_state["a_token_balance"],
                0,
                chain_state["variable_debt"],
                0,
                chain_state["variable_debt"],
                0,
                0,
                0,
                chain_state["usage_as_collateral"],
            )
        if function_name == "scaledBalanceOf":
            return chain_state["scaled_balance"]
        if function_name == "balanceOf":
            return chain_state["liquidity"]
        if function_name == "getUserAccountData":
            return (
                300 * 10**8,
                chain_state["total_debt_base"],
                100 * 10**8,
                8250,
                8000,
                chain_state["health_factor"],
            )
        raise AssertionError(f"Unexpected read of {function_name}")

    return read_contract
