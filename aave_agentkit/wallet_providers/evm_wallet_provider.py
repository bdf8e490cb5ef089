"""EVM wallet provider interface."""

from abc import abstractmethod
from typing import Any

from eth_typing import HexStr
from web3.types import BlockIdentifier, TxParams, TxReceipt

from .wallet_provider import WalletProvider


class EvmWalletProvider(WalletProvider):
    """Abstract base class for EVM wallet providers.

    Action providers only depend on this narrow surface: reading view
    functions, sending a prepared transaction and waiting for its receipt.
    """

    @abstractmethod
    def read_contract(
        self,
        contract_address: str,
        abi: list[dict[str, Any]],
        function_name: str,
        args: list[Any] | None = None,
        block_identifier: BlockIdentifier = "latest",
    ) -> Any:
        """Call a view function on a contract.

        Args:
            contract_address: The address of the contract.
            abi: The ABI fragment containing the function.
            function_name: The name of the function to call.
            args: Positional arguments for the function.
            block_identifier: The block to read at.

        Returns:
            Any: The decoded return value.

        """

    @abstractmethod
    def send_transaction(self, transaction: TxParams) -> HexStr:
        """Sign and send a transaction.

        Args:
            transaction: The transaction parameters, at least `to` and `data`.

        Returns:
            HexStr: The transaction hash.

        """

    @abstractmethod
    def wait_for_transaction_receipt(
        self, tx_hash: HexStr, timeout: float = 120, poll_latency: float = 1
    ) -> TxReceipt:
        """Wait for a transaction to be mined.

        Args:
            tx_hash: The hash of the transaction.
            timeout: Seconds to wait before giving up.
            poll_latency: Seconds between polls.

        Returns:
            TxReceipt: The transaction receipt.

        """
