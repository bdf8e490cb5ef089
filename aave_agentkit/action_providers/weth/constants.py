"""Constants for the WETH action provider."""

WETH_ABI = [
    {
        "type": "function",
        "name": "deposit",
        "stateMutability": "payable",
        "inputs": [],
        "outputs": [],
    },
    {
        "type": "function",
        "name": "withdraw",
        "stateMutability": "nonpayable",
        "inputs": [{"name": "wad", "type": "uint256"}],
        "outputs": [],
    },
]

GAS_LIMITS: dict[str, int] = {
    "wrap": 100_000,
    "unwrap": 100_000,
}

WETH_DECIMALS = 18

DEFAULT_NETWORK_ID = "base-sepolia"

# Base uses the OP Stack predeploy for WETH on every network.
WETH_ADDRESSES: dict[str, str] = {
    "base-mainnet": "0x4200000000000000000000000000000000000006",
    "base-sepolia": "0x4200000000000000000000000000000000000006",
}

# Matches both `eth` and `weth`, since a wrap amount is equally an amount of WETH.
ETH_UNIT_PATTERN = r"w?eth"
