"""Aave action provider for interacting with the Aave V3 WETH market."""

import os
from typing import Any

from eth_typing import HexStr
from pydantic import ValidationError
from web3.types import TxParams

from ...network import Network
from ...wallet_providers import EvmWalletProvider
from ..action_decorator import create_action
from ..action_provider import ActionProvider, format_validation_error
from ..erc20.utils import (
    TransactionRevertedError,
    build_transaction,
    encode_approve,
    format_units,
    get_receipt_timeout,
    get_token_allowance,
    get_token_balance,
    get_token_decimals,
    parse_amount,
    send_and_confirm,
)
from .constants import (
    GAS_LIMITS,
    MAX_UINT256,
    REFERRAL_CODE,
    WETH_DECIMALS,
    InterestRateMode,
    NetworkConfig,
)
from .schemas import (
    AaveApproveSchema,
    AaveBorrowSchema,
    AaveConfig,
    AaveEmptySchema,
    AaveRepaySchema,
    AaveSupplySchema,
    AaveWithdrawSchema,
)
from .utils import (
    AaveError,
    PreflightOperation,
    encode_pool_call,
    get_user_account_data,
    resolve_network_config,
    validate_user_state,
)


class AaveActionProvider(ActionProvider[EvmWalletProvider]):
    """Provides actions for supplying, borrowing and repaying WETH on Aave V3."""

    def __init__(self, config: AaveConfig | None = None):
        """Initialize the Aave action provider.

        Args:
            config: Optional configuration. Environment variables are used
                for fields left unset.

        """
        super().__init__("aave", [])

        if config is None:
            config = AaveConfig()

        validate = config.validate_user_state
        if validate is None:
            validate = os.getenv("AAVE_VALIDATE_USER_STATE", "true").lower() != "false"

        self._config = AaveConfig(
            validate_user_state=validate,
            wait_for_receipt=config.wait_for_receipt,
            receipt_timeout=get_receipt_timeout(config.receipt_timeout, "AAVE_RECEIPT_TIMEOUT"),
        )

    def supports_network(self, network: Network) -> bool:
        """Check if network is supported by Aave actions.

        Args:
            network: The network to check.

        Returns:
            bool: True if the network is an EVM network.

        """
        return network.protocol_family == "evm"

    def _get_network_config(self, wallet_provider: EvmWalletProvider) -> NetworkConfig:
        return resolve_network_config(wallet_provider.get_network().network_id)

    def _submit(
        self,
        wallet_provider: EvmWalletProvider,
        network_config: NetworkConfig,
        operation: PreflightOperation,
        params: TxParams,
    ) -> HexStr:
        if self._config.validate_user_state:
            validate_user_state(wallet_provider, network_config, operation)
        return send_and_confirm(
            wallet_provider,
            params,
            wait_for_receipt=self._config.wait_for_receipt,
            receipt_timeout=self._config.receipt_timeout,
        )

    @create_action(
        name="check_weth_balance",
        description="""
This tool checks the WETH balance of the wallet.
It takes no inputs.
""",
        schema=AaveEmptySchema,
    )
    def check_weth_balance(self, wallet_provider: EvmWalletProvider, args: dict[str, Any]) -> str:
        """Check the wallet's WETH balance.

        Args:
            wallet_provider: The wallet to check.
            args: Unused.

        Returns:
            str: A message containing the balance.

        """
        try:
            network_config = self._get_network_config(wallet_provider)
            balance = get_token_balance(wallet_provider, network_config.weth_address)
            return f"Your WETH balance is {format_units(balance, WETH_DECIMALS)} WETH"
        except Exception as e:
            return f"Error checking WETH balance: {e!s}"

    @create_action(
        name="check_atoken_balance",
        description="""
This tool checks the aWETH balance of the wallet, i.e. how much WETH it has
supplied to Aave including accrued interest.
It takes no inputs.
""",
        schema=AaveEmptySchema,
    )
    def check_atoken_balance(self, wallet_provider: EvmWalletProvider, args: dict[str, Any]) -> str:
        """Check the wallet's aWETH balance."""
        try:
            network_config = self._get_network_config(wallet_provider)
            balance = get_token_balance(wallet_provider, network_config.a_weth_address)
            decimals = get_token_decimals(wallet_provider, network_config.a_weth_address)
            return f"Your aWETH balance on Aave is {format_units(balance, decimals)} aWETH"
        except Exception as e:
            return f"Error checking aWETH balance: {e!s}"

    @create_action(
        name="check_debt_balance",
        description="""
This tool checks how much WETH the wallet owes Aave at the variable rate.
It takes no inputs.
""",
        schema=AaveEmptySchema,
    )
    def check_debt_balance(self, wallet_provider: EvmWalletProvider, args: dict[str, Any]) -> str:
        """Check the wallet's variable WETH debt."""
        try:
            network_config = self._get_network_config(wallet_provider)
            debt = get_token_balance(wallet_provider, network_config.variable_debt_weth_address)
            return (
                f"Your Aave debt balance is {format_units(debt, WETH_DECIMALS)} variableDebtWETH"
            )
        except Exception as e:
            return f"Error checking debt balance: {e!s}"

    @create_action(
        name="check_weth_allowance",
        description="""
This tool checks how much WETH the Aave Pool is allowed to spend on behalf of the wallet.
It takes no inputs.

Supplying or repaying requires an allowance at least as large as the amount.
""",
        schema=AaveEmptySchema,
    )
    def check_weth_allowance(self, wallet_provider: EvmWalletProvider, args: dict[str, Any]) -> str:
        """Check the WETH allowance granted to the Aave Pool."""
        try:
            network_config = self._get_network_config(wallet_provider)
            allowance = get_token_allowance(
                wallet_provider, network_config.weth_address, network_config.pool_address
            )
            return f"You have approved Aave to spend {format_units(allowance, WETH_DECIMALS)} WETH"
        except Exception as e:
            return f"Error checking WETH allowance: {e!s}"

    @create_action(
        name="approve_weth_for_aave",
        description="""
This tool approves the Aave Pool to spend the wallet's WETH.
It takes:
- amount: The amount of WETH to approve in human-readable format
    Examples:
    - 0.1
    - 1 WETH

Important notes:
- Approve at least the amount you intend to supply or repay
""",
        schema=AaveApproveSchema,
    )
    def approve_weth_for_aave(
        self, wallet_provider: EvmWalletProvider, args: dict[str, Any]
    ) -> str:
        """Approve the Aave Pool to spend WETH.

        Args:
            wallet_provider: The wallet to approve from.
            args: The input arguments for the approval.

        Returns:
            str: A message containing the result of the approval.

        """
        try:
            validated_args = AaveApproveSchema(**args)
            network_config = self._get_network_config(wallet_provider)
            amount_atomic = parse_amount(validated_args.amount)

            data = encode_approve(
                network_config.weth_address, network_config.pool_address, amount_atomic
            )
            params = build_transaction(network_config.weth_address, data, GAS_LIMITS["approve"])
            tx_hash = send_and_confirm(
                wallet_provider,
                params,
                wait_for_receipt=self._config.wait_for_receipt,
                receipt_timeout=self._config.receipt_timeout,
            )
        except ValidationError as e:
            return f"Error: Invalid input: {format_validation_error(e)}"
        except (AaveError, TransactionRevertedError) as e:
            return f"Error: {e!s}"
        except Exception as e:
            return f"Error approving WETH for Aave: {e!s}"

        return (
            f"Successfully approved Aave to spend {validated_args.amount} WETH.\n"
            f"Transaction hash: {tx_hash}"
        )

    @create_action(
        name="supply_weth",
        description="""
This tool supplies WETH to the Aave V3 market to earn interest and serve as collateral.
It takes:
- amount: The amount of WETH to supply in human-readable format
    Examples:
    - 0.1
    - 1 WETH

Important notes:
- The Aave Pool must first be approved to spend at least this amount, see approve_weth_for_aave
- Supplied WETH is used as collateral by default
""",
        schema=AaveSupplySchema,
    )
    def supply_weth(self, wallet_provider: EvmWalletProvider, args: dict[str, Any]) -> str:
        """Supply WETH to Aave.

        Args:
            wallet_provider: The wallet to use for the supply operation.
            args: The input arguments for the supply operation.

        Returns:
            str: A message containing the result of the supply operation.

        """
        try:
            validated_args = AaveSupplySchema(**args)
            network_config = self._get_network_config(wallet_provider)
            amount_atomic = parse_amount(validated_args.amount)

            data = encode_pool_call(
                network_config.pool_address,
                "supply",
                [
                    network_config.weth_address,
                    amount_atomic,
                    wallet_provider.get_address(),
                    REFERRAL_CODE,
                ],
            )
            params = build_transaction(network_config.pool_address, data, GAS_LIMITS["supply"])
            tx_hash = self._submit(wallet_provider, network_config, "supply", params)
        except ValidationError as e:
            return f"Error: Invalid input: {format_validation_error(e)}"
        except (AaveError, TransactionRevertedError) as e:
            return f"Error: {e!s}"
        except Exception as e:
            return f"Error supplying WETH to Aave: {e!s}"

        return (
            f"Successfully supplied {validated_args.amount} WETH to Aave.\n"
            f"Transaction hash: {tx_hash}"
        )

    @create_action(
        name="withdraw_weth",
        description="""
This tool withdraws supplied WETH from the Aave V3 market back to the wallet.
It takes:
- amount: The amount of WETH to withdraw in human-readable format
    Examples:
    - 0.1
    - 1 WETH

Important notes:
- If you have active borrows, withdrawing collateral lowers your health factor
""",
        schema=AaveWithdrawSchema,
    )
    def withdraw_weth(self, wallet_provider: EvmWalletProvider, args: dict[str, Any]) -> str:
        """Withdraw WETH from Aave.

        Args:
            wallet_provider: The wallet to use for the withdraw operation.
            args: The input arguments for the withdraw operation.

        Returns:
            str: A message containing the result of the withdraw operation.

        """
        try:
            validated_args = AaveWithdrawSchema(**args)
            network_config = self._get_network_config(wallet_provider)
            amount_atomic = parse_amount(validated_args.amount)

            data = encode_pool_call(
                network_config.pool_address,
                "withdraw",
                [network_config.weth_address, amount_atomic, wallet_provider.get_address()],
            )
            params = build_transaction(network_config.pool_address, data, GAS_LIMITS["withdraw"])
            tx_hash = self._submit(wallet_provider, network_config, "withdraw", params)
        except ValidationError as e:
            return f"Error: Invalid input: {format_validation_error(e)}"
        except (AaveError, TransactionRevertedError) as e:
            return f"Error: {e!s}"
        except Exception as e:
            return f"Error withdrawing WETH from Aave: {e!s}"

        return (
            f"Successfully withdrew {validated_args.amount} WETH from Aave.\n"
            f"Transaction hash: {tx_hash}"
        )

    @create_action(
        name="borrow_weth",
        description="""
This tool borrows WETH from the Aave V3 market against supplied collateral at the variable rate.
It takes:
- amount: The amount of WETH to borrow in human-readable format
    Examples:
    - 0.01
    - 0.5 WETH

Important notes:
- Make sure you have enough collateral supplied
- Borrowing reduces your health factor, keep it above 1 to avoid liquidation
""",
        schema=AaveBorrowSchema,
    )
    def borrow_weth(self, wallet_provider: EvmWalletProvider, args: dict[str, Any]) -> str:
        """Borrow WETH from Aave.

        Args:
            wallet_provider: The wallet to use for the borrow operation.
            args: The input arguments for the borrow operation.

        Returns:
            str: A message containing the result of the borrow operation.

        """
        try:
            validated_args = AaveBorrowSchema(**args)
            network_config = self._get_network_config(wallet_provider)
            amount_atomic = parse_amount(validated_args.amount)

            data = encode_pool_call(
                network_config.pool_address,
                "borrow",
                [
                    network_config.weth_address,
                    amount_atomic,
                    int(InterestRateMode.VARIABLE),
                    REFERRAL_CODE,
                    wallet_provider.get_address(),
                ],
            )
            params = build_transaction(network_config.pool_address, data, GAS_LIMITS["borrow"])
            tx_hash = self._submit(wallet_provider, network_config, "borrow", params)
        except ValidationError as e:
            return f"Error: Invalid input: {format_validation_error(e)}"
        except (AaveError, TransactionRevertedError) as e:
            return f"Error: {e!s}"
        except Exception as e:
            return f"Error borrowing WETH from Aave: {e!s}"

        return (
            f"Successfully borrowed {validated_args.amount} WETH from Aave.\n"
            f"Transaction hash: {tx_hash}"
        )

    @create_action(
        name="repay_weth",
        description="""
This tool repays variable-rate WETH debt to the Aave V3 market.
It takes:
- amount: The amount of WETH to repay in human-readable format
    Examples:
    - 0.01
    - 0.5 WETH

Important notes:
- The Aave Pool must first be approved to spend at least this amount, see approve_weth_for_aave
- Use repay_all_weth to repay the whole debt including accrued interest
""",
        schema=AaveRepaySchema,
    )
    def repay_weth(self, wallet_provider: EvmWalletProvider, args: dict[str, Any]) -> str:
        """Repay WETH debt to Aave.

        Args:
            wallet_provider: The wallet to use for the repay operation.
            args: The input arguments for the repay operation.

        Returns:
            str: A message containing the result of the repay operation.

        """
        try:
            validated_args = AaveRepaySchema(**args)
            network_config = self._get_network_config(wallet_provider)
            amount_atomic = parse_amount(validated_args.amount)

            tx_hash = self._repay(wallet_provider, network_config, amount_atomic)
        except ValidationError as e:
            return f"Error: Invalid input: {format_validation_error(e)}"
        except (AaveError, TransactionRevertedError) as e:
            return f"Error: {e!s}"
        except Exception as e:
            return f"Error repaying WETH to Aave: {e!s}"

        return (
            f"Successfully repaid {validated_args.amount} WETH to Aave.\n"
            f"Transaction hash: {tx_hash}"
        )

    @create_action(
        name="repay_all_weth",
        description="""
This tool repays the whole variable-rate WETH debt, including accrued interest, to the Aave V3 market.
It takes no inputs.

Important notes:
- The wallet must hold enough WETH and the Aave Pool must be approved to spend it
""",
        schema=AaveEmptySchema,
    )
    def repay_all_weth(self, wallet_provider: EvmWalletProvider, args: dict[str, Any]) -> str:
        """Repay all WETH debt to Aave."""
        try:
            network_config = self._get_network_config(wallet_provider)
            tx_hash = self._repay(wallet_provider, network_config, MAX_UINT256)
        except (AaveError, TransactionRevertedError) as e:
            return f"Error: {e!s}"
        except Exception as e:
            return f"Error repaying all WETH to Aave: {e!s}"

        return f"Successfully repaid all WETH debt to Aave.\nTransaction hash: {tx_hash}"

    def _repay(
        self, wallet_provider: EvmWalletProvider, network_config: NetworkConfig, amount: int
    ) -> HexStr:
        data = encode_pool_call(
            network_config.pool_address,
            "repay",
            [
                network_config.weth_address,
                amount,
                int(InterestRateMode.VARIABLE),
                wallet_provider.get_address(),
            ],
        )
        params = build_transaction(network_config.pool_address, data, GAS_LIMITS["repay"])
        return self._submit(wallet_provider, network_config, "repay", params)

    @create_action(
        name="get_user_account_data",
        description="""
This tool summarizes the wallet's Aave account: total collateral, total debt,
available borrows (in the market base currency, USD), loan to value, liquidation
threshold and health factor.
It takes no inputs.
""",
        schema=AaveEmptySchema,
    )
    def get_user_account_data(self, wallet_provider: EvmWalletProvider, args: dict[str, Any]) -> str:
        """Summarize the wallet's Aave account."""
        try:
            network_config = self._get_network_config(wallet_provider)
            account_data = get_user_account_data(wallet_provider, network_config.pool_address)
        except Exception as e:
            return f"Error getting Aave account data: {e!s}"

        health_factor = account_data["healthFactor"]
        if health_factor.is_infinite():
            health_text = "∞ (no debt)"
        else:
            health_text = f"{health_factor:.4f}"

        return (
            f"Aave account data for {wallet_provider.get_address()}:\n"
            f"Total collateral (USD): {account_data['totalCollateralBase']:.2f}\n"
            f"Total debt (USD): {account_data['totalDebtBase']:.2f}\n"
            f"Available to borrow (USD): {account_data['availableBorrowsBase']:.2f}\n"
            f"Loan to value: {account_data['ltv']:.2%}\n"
            f"Liquidation threshold: {account_data['currentLiquidationThreshold']:.2%}\n"
            f"Health factor: {health_text}"
        )


def aave_action_provider(config: AaveConfig | None = None) -> AaveActionProvider:
    """Create a new AaveActionProvider instance.

    Args:
        config: Optional configuration for the provider.

    Returns:
        AaveActionProvider: A new instance of the Aave action provider.

    """
    return AaveActionProvider(config)
