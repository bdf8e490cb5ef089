"""Utility functions shared by the token action providers."""

import os
import re
from decimal import Decimal, InvalidOperation, localcontext

from eth_typing import HexStr
from loguru import logger
from web3 import Web3
from web3.types import TxParams

from ...wallet_providers import EvmWalletProvider
from .constants import DEFAULT_RECEIPT_TIMEOUT, ERC20_ABI, MAX_UINT256

# Upper bound on the decimal digits of a uint256.
_UINT256_DIGITS = len(str(MAX_UINT256))


class TransactionRevertedError(Exception):
    """Raised when a submitted transaction is mined with a failed status."""

    def __init__(self, tx_hash: str):
        """Initialize the error.

        Args:
            tx_hash: The hash of the reverted transaction.

        """
        super().__init__(f"Transaction {tx_hash} reverted")
        self.tx_hash = tx_hash


def get_receipt_timeout(configured: float | None, env_var: str) -> float:
    """Resolve the receipt timeout from configuration or the environment.

    Args:
        configured: The configured timeout, or None if unset.
        env_var: The environment variable read when the timeout is unset.

    Returns:
        float: The timeout in seconds.

    """
    if configured is not None:
        return configured

    raw = os.getenv(env_var)
    if raw is None:
        return DEFAULT_RECEIPT_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError:
        timeout = None
    if timeout is None or not timeout > 0 or timeout == float("inf"):
        logger.warning(
            f"Ignoring invalid {env_var}={raw!r}, using {DEFAULT_RECEIPT_TIMEOUT} seconds"
        )
        return DEFAULT_RECEIPT_TIMEOUT
    return timeout


def sanitize_amount(raw: str, unit: str = "weth") -> str:
    """Strip a unit token and surrounding whitespace from an amount.

    Args:
        raw: The amount as typed by the user, e.g. `0.1 WETH`.
        unit: Regular expression for the unit token, matched case-insensitively.

    Returns:
        str: The bare amount, e.g. `0.1`.

    """
    pattern = re.compile(unit, re.IGNORECASE)
    cleaned = raw
    while True:
        stripped = pattern.sub("", cleaned)
        if stripped == cleaned:
            return cleaned.strip()
        cleaned = stripped


def parse_amount(amount: str, decimals: int = 18) -> int:
    """Convert a human-readable amount to atomic units.

    The amount must be a finite, strictly positive decimal that is exactly
    representable with `decimals` fractional digits and fits in a uint256.
    Nothing is ever truncated.

    Args:
        amount: The amount, e.g. `0.5`.
        decimals: The decimal scale of the token.

    Returns:
        int: The amount in atomic units.

    Raises:
        ValueError: If the amount does not satisfy the rules above.

    """
    try:
        value = Decimal(amount)
    except (InvalidOperation, TypeError, ValueError) as e:
        raise ValueError(f"Invalid amount '{amount}': not a decimal number") from e

    if not value.is_finite():
        raise ValueError(f"Invalid amount '{amount}': must be a finite number")
    if value <= 0:
        raise ValueError(f"Invalid amount '{amount}': must be greater than 0")
    if value.adjusted() + decimals >= _UINT256_DIGITS:
        raise ValueError(f"Invalid amount '{amount}': exceeds the maximum uint256 value")
    if value.adjusted() < -decimals:
        raise ValueError(f"Invalid amount '{amount}': more than {decimals} decimal places")

    # Trailing zeros carry no precision, drop them before checking the scale.
    _, digits, exponent = value.as_tuple()
    significant = "".join(str(digit) for digit in digits).rstrip("0")
    exponent += len(digits) - len(significant)
    if exponent < -decimals:
        raise ValueError(f"Invalid amount '{amount}': more than {decimals} decimal places")

    raw = int(significant) * 10 ** (exponent + decimals)
    if raw > MAX_UINT256:
        raise ValueError(f"Invalid amount '{amount}': exceeds the maximum uint256 value")
    return raw


def format_units(raw: int, decimals: int) -> str:
    """Format an atomic amount as a plain decimal string.

    Args:
        raw: The amount in atomic units.
        decimals: The decimal scale of the token.

    Returns:
        str: The amount without exponent notation or trailing zeros.

    """
    if raw == 0:
        return "0"
    with localcontext() as ctx:
        ctx.prec = _UINT256_DIGITS * 2
        text = format(Decimal(raw).scaleb(-decimals), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def get_token_decimals(wallet: EvmWalletProvider, token_address: str) -> int:
    """Get the number of decimals for a token.

    Args:
        wallet: The wallet provider for reading from contracts.
        token_address: The address of the token.

    Returns:
        int: The number of decimals for the token.

    """
    return wallet.read_contract(
        contract_address=Web3.to_checksum_address(token_address),
        abi=ERC20_ABI,
        function_name="decimals",
        args=[],
    )


def get_token_balance(
    wallet: EvmWalletProvider, token_address: str, owner: str | None = None
) -> int:
    """Get the token balance of an account, the wallet by default.

    Args:
        wallet: The wallet provider for reading from contracts.
        token_address: The address of the token.
        owner: Optional account address. Defaults to wallet address.

    Returns:
        int: The balance in atomic units.

    """
    return wallet.read_contract(
        contract_address=Web3.to_checksum_address(token_address),
        abi=ERC20_ABI,
        function_name="balanceOf",
        args=[Web3.to_checksum_address(owner or wallet.get_address())],
    )


def get_token_allowance(
    wallet: EvmWalletProvider, token_address: str, spender_address: str
) -> int:
    """Get how much of the wallet's tokens a spender may transfer.

    Args:
        wallet: The wallet provider for reading from contracts.
        token_address: The address of the token.
        spender_address: The address of the spender.

    Returns:
        int: The allowance in atomic units.

    """
    return wallet.read_contract(
        contract_address=Web3.to_checksum_address(token_address),
        abi=ERC20_ABI,
        function_name="allowance",
        args=[
            Web3.to_checksum_address(wallet.get_address()),
            Web3.to_checksum_address(spender_address),
        ],
    )


def encode_approve(token_address: str, spender_address: str, amount: int) -> HexStr:
    """Encode an ERC-20 `approve(spender, amount)` call."""
    token_contract = Web3().eth.contract(
        address=Web3.to_checksum_address(token_address), abi=ERC20_ABI
    )
    return HexStr(
        token_contract.encode_abi(
            "approve", args=[Web3.to_checksum_address(spender_address), amount]
        )
    )


def build_transaction(to: str, data: HexStr, gas: int, value: int = 0) -> TxParams:
    """Build the transaction request handed to the wallet."""
    params: TxParams = {
        "to": Web3.to_checksum_address(to),
        "data": data,
        "gas": gas,
    }
    if value:
        params["value"] = value
    return params


def send_and_confirm(
    wallet: EvmWalletProvider,
    params: TxParams,
    wait_for_receipt: bool = True,
    receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT,
) -> HexStr:
    """Send a transaction and optionally wait for it to be mined.

    Args:
        wallet: The wallet provider for sending transactions.
        params: The transaction request.
        wait_for_receipt: Whether to wait for the receipt.
        receipt_timeout: Seconds to wait for the receipt.

    Returns:
        HexStr: The transaction hash.

    Raises:
        TransactionRevertedError: If the transaction was mined but failed.

    """
    tx_hash = wallet.send_transaction(params)
    if not wait_for_receipt:
        return tx_hash

    receipt = wallet.wait_for_transaction_receipt(tx_hash, timeout=receipt_timeout)
    if receipt["status"] != 1:
        raise TransactionRevertedError(tx_hash)
    return tx_hash
