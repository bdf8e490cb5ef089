"""Constants for the Aave action provider."""

from enum import IntEnum

from pydantic import BaseModel, ConfigDict, field_validator
from web3 import Web3

# Aave reads MAX_UINT256 as "the full balance" for withdraw and repay.
from ..erc20.constants import MAX_UINT256  # noqa: F401


class InterestRateMode(IntEnum):
    """Aave V3 interest rate modes."""

    NONE = 0
    STABLE = 1
    VARIABLE = 2


class NetworkConfig(BaseModel):
    """Contract addresses of the Aave V3 WETH market on one network."""

    model_config = ConfigDict(frozen=True)

    network_id: str
    chain_id: str
    pool_address: str
    weth_address: str
    a_weth_address: str
    variable_debt_weth_address: str

    @field_validator(
        "pool_address", "weth_address", "a_weth_address", "variable_debt_weth_address"
    )
    @classmethod
    def checksum(cls, value: str) -> str:
        """Store addresses in checksum form."""
        return Web3.to_checksum_address(value)


NETWORK_CONFIGS: dict[str, NetworkConfig] = {
    "base-sepolia": NetworkConfig(
        network_id="base-sepolia",
        chain_id="84532",
        pool_address="0x07eA79F68B2B3df564D0A34F8e19D9B1e339814b",
        weth_address="0x4200000000000000000000000000000000000006",
        a_weth_address="0x96e32dE4B1d1617B8c2AE13a88B9cC287239b13f",
        variable_debt_weth_address="0xf0f0025dc51f532ab84c33eb9d01583eaa0f74c7",
    ),
    "base-mainnet": NetworkConfig(
        network_id="base-mainnet",
        chain_id="8453",
        pool_address="0xA238Dd80C259a72e81d7e4664a9801593F98d1c5",
        weth_address="0x4200000000000000000000000000000000000006",
        a_weth_address="0xD4a0e0b9149BCee3C920d2E00b5dE09138fd8bb7",
        variable_debt_weth_address="0x24e6e0795b3c7c71D965fCc4f371803d1c1DcA1E",
    ),
}

DEFAULT_NETWORK_ID = "base-sepolia"

WETH_DECIMALS = 18

# Aave reports account values in the market base currency with 8 decimals
# and the health factor with 18.
BASE_CURRENCY_DECIMALS = 8
HEALTH_FACTOR_DECIMALS = 18

REFERRAL_CODE = 0

GAS_LIMITS: dict[str, int] = {
    "approve": 100_000,
    "supply": 300_000,
    "withdraw": 300_000,
    "borrow": 300_000,
    "repay": 300_000,
}

POOL_ABI = [
    {
        "type": "function",
        "name": "supply",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "asset", "type": "address"},
            {"name": "amount", "type": "uint256"},
            {"name": "onBehalfOf", "type": "address"},
            {"name": "referralCode", "type": "uint16"},
        ],
        "outputs": [],
    },
    {
        "type": "function",
        "name": "withdraw",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "asset", "type": "address"},
            {"name": "amount", "type": "uint256"},
            {"name": "to", "type": "address"},
        ],
        "outputs": [{"name": "", "type": "uint256"}],
    },
    {
        "type": "function",
        "name": "borrow",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "asset", "type": "address"},
            {"name": "amount", "type": "uint256"},
            {"name": "interestRateMode", "type": "uint256"},
            {"name": "referralCode", "type": "uint16"},
            {"name": "onBehalfOf", "type": "address"},
        ],
        "outputs": [],
    },
    {
        "type": "function",
        "name": "repay",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "asset", "type": "address"},
            {"name": "amount", "type": "uint256"},
            {"name": "interestRateMode", "type": "uint256"},
            {"name": "onBehalfOf", "type": "address"},
        ],
        "outputs": [{"name": "", "type": "uint256"}],
    },
    {
        "type": "function",
        "name": "getUserAccountData",
        "stateMutability": "view",
        "inputs": [{"name": "user", "type": "address"}],
        "outputs": [
            {"name": "totalCollateralBase", "type": "uint256"},
            {"name": "totalDebtBase", "type": "uint256"},
            {"name": "availableBorrowsBase", "type": "uint256"},
            {"name": "currentLiquidationThreshold", "type": "uint256"},
            {"name": "ltv", "type": "uint256"},
            {"name": "healthFactor", "type": "uint256"},
        ],
    },
    {
        "type": "function",
        "name": "ADDRESSES_PROVIDER",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "address"}],
    },
]

ATOKEN_ABI = [
    {
        "type": "function",
        "name": "balanceOf",
        "stateMutability": "view",
        "inputs": [{"name": "account", "type": "address"}],
        "outputs": [{"name": "", "type": "uint256"}],
    },
    {
        "type": "function",
        "name": "decimals",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint8"}],
    },
    {
        "type": "function",
        "name": "scaledBalanceOf",
        "stateMutability": "view",
        "inputs": [{"name": "user", "type": "address"}],
        "outputs": [{"name": "", "type": "uint256"}],
    },
]

POOL_ADDRESSES_PROVIDER_ABI = [
    {
        "type": "function",
        "name": "getPoolDataProvider",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "address"}],
    },
]

POOL_DATA_PROVIDER_ABI = [
    {
        "type": "function",
        "name": "getReserveConfigurationData",
        "stateMutability": "view",
        "inputs": [{"name": "asset", "type": "address"}],
        "outputs": [
            {"name": "decimals", "type": "uint256"},
            {"name": "ltv", "type": "uint256"},
            {"name": "liquidationThreshold", "type": "uint256"},
            {"name": "liquidationBonus", "type": "uint256"},
            {"name": "reserveFactor", "type": "uint256"},
            {"name": "usageAsCollateralEnabled", "type": "bool"},
            {"name": "borrowingEnabled", "type": "bool"},
            {"name": "stableBorrowRateEnabled", "type": "bool"},
            {"name": "isActive", "type": "bool"},
            {"name": "isFrozen", "type": "bool"},
        ],
    },
    {
        "type": "function",
        "name": "getUserReserveData",
        "stateMutability": "view",
        "inputs": [
            {"name": "asset", "type": "address"},
            {"name": "user", "type": "address"},
        ],
        "outputs": [
            {"name": "currentATokenBalance", "type": "uint256"},
            {"name": "currentStableDebt", "type": "uint256"},
            {"name": "currentVariableDebt", "type": "uint256"},
            {"name": "principalStableDebt", "type": "uint256"},
            {"name": "scaledVariableDebt", "type": "uint256"},
            {"name": "stableBorrowRate", "type": "uint256"},
            {"name": "liquidityRate", "type": "uint256"},
            {"name": "stableRateLastUpdated", "type": "uint40"},
            {"name": "usageAsCollateralEnabled", "type": "bool"},
        ],
    },
]
