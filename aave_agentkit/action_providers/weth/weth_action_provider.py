"""WETH action provider for wrapping and unwrapping ETH."""

from typing import Any

from eth_typing import HexStr
from pydantic import ValidationError
from web3 import Web3
from web3.types import TxParams

from ...network import Network
from ...wallet_providers import EvmWalletProvider
from ..action_decorator import create_action
from ..action_provider import ActionProvider, format_validation_error
from ..erc20.utils import (
    TransactionRevertedError,
    build_transaction,
    format_units,
    get_receipt_timeout,
    get_token_balance,
    parse_amount,
    send_and_confirm,
)
from .constants import (
    DEFAULT_NETWORK_ID,
    GAS_LIMITS,
    WETH_ABI,
    WETH_ADDRESSES,
    WETH_DECIMALS,
)
from .schemas import UnwrapWethSchema, WethConfig, WrapEthSchema


def _encode_weth_call(weth_address: str, function_name: str, args: list[Any]) -> HexStr:
    weth_contract = Web3().eth.contract(
        address=Web3.to_checksum_address(weth_address), abi=WETH_ABI
    )
    return HexStr(weth_contract.encode_abi(function_name, args=args))


class WethActionProvider(ActionProvider[EvmWalletProvider]):
    """Provides actions for wrapping ETH into WETH and back."""

    def __init__(self, config: WethConfig | None = None):
        """Initialize the WETH action provider.

        Args:
            config: Optional configuration. The receipt timeout falls back to
                the WETH_RECEIPT_TIMEOUT environment variable when unset.

        """
        super().__init__("weth", [])

        if config is None:
            config = WethConfig()

        self._config = WethConfig(
            wait_for_receipt=config.wait_for_receipt,
            receipt_timeout=get_receipt_timeout(config.receipt_timeout, "WETH_RECEIPT_TIMEOUT"),
        )

    def supports_network(self, network: Network) -> bool:
        """Check if network is supported by WETH actions.

        Args:
            network: The network to check.

        Returns:
            bool: True if the network is an EVM network.

        """
        return network.protocol_family == "evm"

    def _get_weth_address(self, wallet_provider: EvmWalletProvider) -> str:
        network_id = wallet_provider.get_network().network_id
        return WETH_ADDRESSES.get(network_id or "", WETH_ADDRESSES[DEFAULT_NETWORK_ID])

    def _send(self, wallet_provider: EvmWalletProvider, params: TxParams) -> HexStr:
        return send_and_confirm(
            wallet_provider,
            params,
            wait_for_receipt=self._config.wait_for_receipt,
            receipt_timeout=self._config.receipt_timeout,
        )

    @create_action(
        name="wrap_eth",
        description="""
This tool wraps ETH into WETH, which is required before supplying to Aave.
It takes:
- amount: The amount of ETH to wrap in human-readable format
    Examples:
    - 0.1
    - 1 ETH
""",
        schema=WrapEthSchema,
    )
    def wrap_eth(self, wallet_provider: EvmWalletProvider, args: dict[str, Any]) -> str:
        """Wrap ETH into WETH.

        Args:
            wallet_provider: The wallet holding the ETH.
            args: The input arguments for the wrap operation.

        Returns:
            str: A message containing the result of the wrap operation.

        """
        try:
            validated_args = WrapEthSchema(**args)
            weth_address = self._get_weth_address(wallet_provider)
            amount_atomic = parse_amount(validated_args.amount)

            balance = int(wallet_provider.get_balance())
            if balance < amount_atomic:
                return (
                    f"Error: Insufficient ETH balance. You have "
                    f"{format_units(balance, WETH_DECIMALS)} ETH, but tried to wrap "
                    f"{validated_args.amount}"
                )

            data = _encode_weth_call(weth_address, "deposit", [])
            params = build_transaction(
                weth_address, data, GAS_LIMITS["wrap"], value=amount_atomic
            )
            tx_hash = self._send(wallet_provider, params)
        except ValidationError as e:
            return f"Error: Invalid input: {format_validation_error(e)}"
        except TransactionRevertedError as e:
            return f"Error: {e!s}"
        except Exception as e:
            return f"Error wrapping ETH: {e!s}"

        return (
            f"Successfully wrapped {validated_args.amount} ETH into WETH.\n"
            f"Transaction hash: {tx_hash}"
        )

    @create_action(
        name="unwrap_weth",
        description="""
This tool unwraps WETH back into ETH.
It takes:
- amount: The amount of WETH to unwrap in human-readable format
    Examples:
    - 0.1
    - 1 WETH
""",
        schema=UnwrapWethSchema,
    )
    def unwrap_weth(self, wallet_provider: EvmWalletProvider, args: dict[str, Any]) -> str:
        """Unwrap WETH into ETH."""
        try:
            validated_args = UnwrapWethSchema(**args)
            weth_address = self._get_weth_address(wallet_provider)
            amount_atomic = parse_amount(validated_args.amount)

            balance = get_token_balance(wallet_provider, weth_address)
            if balance < amount_atomic:
                return (
                    f"Error: Insufficient WETH balance. You have "
                    f"{format_units(balance, WETH_DECIMALS)} WETH, but tried to unwrap "
                    f"{validated_args.amount}"
                )

            data = _encode_weth_call(weth_address, "withdraw", [amount_atomic])
            params = build_transaction(weth_address, data, GAS_LIMITS["unwrap"])
            tx_hash = self._send(wallet_provider, params)
        except ValidationError as e:
            return f"Error: Invalid input: {format_validation_error(e)}"
        except TransactionRevertedError as e:
            return f"Error: {e!s}"
        except Exception as e:
            return f"Error unwrapping WETH: {e!s}"

        return (
            f"Successfully unwrapped {validated_args.amount} WETH into ETH.\n"
            f"Transaction hash: {tx_hash}"
        )


def weth_action_provider(config: WethConfig | None = None) -> WethActionProvider:
    """Create a new WethActionProvider instance.

    Args:
        config: Optional configuration for the provider.

    Returns:
        WethActionProvider: A new instance of the WETH action provider.

    """
    return WethActionProvider(config)
