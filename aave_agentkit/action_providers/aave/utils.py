"""Utility functions for Aave action provider."""

from decimal import Decimal
from typing import Any, Literal

from eth_typing import HexStr
from loguru import logger
from web3 import Web3

from ...wallet_providers import EvmWalletProvider
from ..erc20.utils import get_token_balance
from .constants import (
    ATOKEN_ABI,
    BASE_CURRENCY_DECIMALS,
    DEFAULT_NETWORK_ID,
    HEALTH_FACTOR_DECIMALS,
    NETWORK_CONFIGS,
    POOL_ABI,
    POOL_ADDRESSES_PROVIDER_ABI,
    POOL_DATA_PROVIDER_ABI,
    NetworkConfig,
)

PreflightOperation = Literal["supply", "withdraw", "borrow", "repay"]

_ONE_HEALTH_FACTOR = 10**HEALTH_FACTOR_DECIMALS


class AaveError(Exception):
    """Base class for errors reported by the Aave action provider."""


class AavePreflightError(AaveError):
    """Raised when the on-chain state makes an operation certain to fail."""


def resolve_network_config(network_id: str | None) -> NetworkConfig:
    """Get the Aave contract addresses for a network.

    Unknown or missing network ids fall back to the default network.

    Args:
        network_id: The network id, e.g. `base-sepolia`.

    Returns:
        NetworkConfig: The addresses for the network.

    """
    config = NETWORK_CONFIGS.get(network_id or "")
    if config is None:
        logger.debug(f"No Aave config for network {network_id!r}, using {DEFAULT_NETWORK_ID}")
        return NETWORK_CONFIGS[DEFAULT_NETWORK_ID]
    return config


def encode_pool_call(pool_address: str, function_name: str, args: list[Any]) -> HexStr:
    """Encode a call to the Aave Pool.

    Args:
        pool_address: The address of the Aave Pool contract.
        function_name: One of `supply`, `withdraw`, `borrow` or `repay`.
        args: The positional arguments of the call.

    Returns:
        HexStr: The 0x-prefixed calldata.

    """
    pool_contract = Web3().eth.contract(
        address=Web3.to_checksum_address(pool_address), abi=POOL_ABI
    )
    return HexStr(pool_contract.encode_abi(function_name, args=args))


def get_user_account_data(
    wallet: EvmWalletProvider, pool_address: str, account: str | None = None
) -> dict[str, Decimal | int]:
    """Get user account data from Aave pool.

    Args:
        wallet: The wallet provider for reading from contracts.
        pool_address: The address of the Aave Pool contract.
        account: Optional account address. Defaults to wallet address.

    Returns:
        dict[str, Decimal | int]: Account values in the market base currency,
        ratios as fractions and the raw health factor.

    """
    result = wallet.read_contract(
        contract_address=Web3.to_checksum_address(pool_address),
        abi=POOL_ABI,
        function_name="getUserAccountData",
        args=[Web3.to_checksum_address(account or wallet.get_address())],
    )

    (
        total_collateral_base,
        total_debt_base,
        available_borrows_base,
        current_liquidation_threshold,
        ltv,
        health_factor,
    ) = result

    base_scale = Decimal(10**BASE_CURRENCY_DECIMALS)
    return {
        "totalCollateralBase": Decimal(total_collateral_base) / base_scale,
        "totalDebtBase": Decimal(total_debt_base) / base_scale,
        "availableBorrowsBase": Decimal(available_borrows_base) / base_scale,
        # Basis points
        "currentLiquidationThreshold": Decimal(current_liquidation_threshold) / Decimal(10**4),
        "ltv": Decimal(ltv) / Decimal(10**4),
        "healthFactor": Decimal(health_factor) / Decimal(_ONE_HEALTH_FACTOR)
        if total_debt_base > 0
        else Decimal("Infinity"),
        "healthFactorRaw": health_factor,
    }


def get_pool_data_provider(wallet: EvmWalletProvider, pool_address: str) -> str:
    """Look up the pool data provider registered for a pool.

    Args:
        wallet: The wallet provider for reading from contracts.
        pool_address: The address of the Aave Pool contract.

    Returns:
        str: The checksummed address of the pool data provider.

    """
    addresses_provider = wallet.read_contract(
        contract_address=Web3.to_checksum_address(pool_address),
        abi=POOL_ABI,
        function_name="ADDRESSES_PROVIDER",
        args=[],
    )
    data_provider = wallet.read_contract(
        contract_address=Web3.to_checksum_address(addresses_provider),
        abi=POOL_ADDRESSES_PROVIDER_ABI,
        function_name="getPoolDataProvider",
        args=[],
    )
    return Web3.to_checksum_address(data_provider)


def get_reserve_configuration(
    wallet: EvmWalletProvider, data_provider: str, asset_address: str
) -> dict[str, Any]:
    """Get the reserve configuration of an asset."""
    (
        decimals,
        ltv,
        liquidation_threshold,
        _liquidation_bonus,
        _reserve_factor,
        usage_as_collateral_enabled,
        borrowing_enabled,
        _stable_borrow_rate_enabled,
        is_active,
        is_frozen,
    ) = wallet.read_contract(
        contract_address=data_provider,
        abi=POOL_DATA_PROVIDER_ABI,
        function_name="getReserveConfigurationData",
        args=[Web3.to_checksum_address(asset_address)],
    )
    return {
        "decimals": decimals,
        "ltv": ltv,
        "liquidationThreshold": liquidation_threshold,
        "usageAsCollateralEnabled": usage_as_collateral_enabled,
        "borrowingEnabled": borrowing_enabled,
        "isActive": is_active,
        "isFrozen": is_frozen,
    }


def get_user_reserve_data(
    wallet: EvmWalletProvider, data_provider: str, asset_address: str
) -> dict[str, Any]:
    """Get the wallet's position in a reserve."""
    result = wallet.read_contract(
        contract_address=data_provider,
        abi=POOL_DATA_PROVIDER_ABI,
        function_name="getUserReserveData",
        args=[
            Web3.to_checksum_address(asset_address),
            Web3.to_checksum_address(wallet.get_address()),
        ],
    )
    return {
        "currentATokenBalance": result[0],
        "currentVariableDebt": result[2],
        "scaledVariableDebt": result[4],
        "usageAsCollateralEnabled": result[8],
    }


def _health_factor_at_or_below_one(wallet: EvmWalletProvider, config: NetworkConfig) -> bool:
    account_data = get_user_account_data(wallet, config.pool_address)
    return account_data["healthFactorRaw"] <= _ONE_HEALTH_FACTOR


def _check_supply(wallet: EvmWalletProvider, config: NetworkConfig) -> None:
    data_provider = get_pool_data_provider(wallet, config.pool_address)
    reserve = get_reserve_configuration(wallet, data_provider, config.weth_address)
    if not reserve["isActive"]:
        raise AavePreflightError("The WETH reserve is not active")
    if reserve["isFrozen"]:
        raise AavePreflightError("The WETH reserve is frozen")


def _check_withdraw(wallet: EvmWalletProvider, config: NetworkConfig) -> None:
    data_provider = get_pool_data_provider(wallet, config.pool_address)
    user_reserve = get_user_reserve_data(wallet, data_provider, config.weth_address)
    if user_reserve["currentATokenBalance"] == 0:
        raise AavePreflightError("You have no WETH deposited in Aave")

    scaled_balance = wallet.read_contract(
        contract_address=config.a_weth_address,
        abi=ATOKEN_ABI,
        function_name="scaledBalanceOf",
        args=[Web3.to_checksum_address(wallet.get_address())],
    )
    if scaled_balance == 0:
        raise AavePreflightError("Your scaled aWETH balance is zero")

    if user_reserve["usageAsCollateralEnabled"] and _health_factor_at_or_below_one(
        wallet, config
    ):
        raise AavePreflightError(
            "Your health factor is at or below 1, withdrawing collateral is not allowed"
        )


def _check_borrow(wallet: EvmWalletProvider, config: NetworkConfig) -> None:
    data_provider = get_pool_data_provider(wallet, config.pool_address)
    reserve = get_reserve_configuration(wallet, data_provider, config.weth_address)
    if not reserve["borrowingEnabled"]:
        raise AavePreflightError("Borrowing is not enabled for WETH")
    if reserve["isFrozen"]:
        raise AavePreflightError("The WETH reserve is frozen")

    liquidity = get_token_balance(wallet, config.weth_address, owner=config.a_weth_address)
    if liquidity == 0:
        raise AavePreflightError("The WETH reserve has no available liquidity")

    if _health_factor_at_or_below_one(wallet, config):
        raise AavePreflightError("Your health factor is at or below 1, borrowing is not allowed")


def _check_repay(wallet: EvmWalletProvider, config: NetworkConfig) -> None:
    data_provider = get_pool_data_provider(wallet, config.pool_address)
    user_reserve = get_user_reserve_data(wallet, data_provider, config.weth_address)
    if user_reserve["currentVariableDebt"] == 0:
        raise AavePreflightError("You have no variable WETH debt to repay")


_PREFLIGHT_CHECKS = {
    "supply": _check_supply,
    "withdraw": _check_withdraw,
    "borrow": _check_borrow,
    "repay": _check_repay,
}


def validate_user_state(
    wallet: EvmWalletProvider, config: NetworkConfig, operation: PreflightOperation
) -> None:
    """Check the on-chain state before submitting an operation.

    The checks are advisory. If the state cannot be read the operation is
    allowed through and the chain validates it.

    Args:
        wallet: The wallet provider for reading from contracts.
        config: The addresses of the market.
        operation: The operation about to be submitted.

    Raises:
        AavePreflightError: If the state shows the operation would fail.

    """
    check = _PREFLIGHT_CHECKS[operation]
    try:
        check(wallet, config)
    except AavePreflightError:
        raise
    except Exception as e:
        logger.warning(f"Could not validate state before {operation}, submitting anyway: {e!s}")
