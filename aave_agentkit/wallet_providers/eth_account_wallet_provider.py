"""Wallet provider backed by a local eth-account signer and a web3 HTTP RPC."""

from decimal import Decimal
from typing import Any

from eth_account.signers.local import LocalAccount
from eth_typing import HexStr
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field
from web3 import Web3
from web3.types import BlockIdentifier, TxParams, TxReceipt

from ..network import CHAIN_ID_TO_NETWORK_ID, Network
from .evm_wallet_provider import EvmWalletProvider

DEFAULT_RPC_URLS: dict[str, str] = {
    "base-mainnet": "https://mainnet.base.org",
    "base-sepolia": "https://sepolia.base.org",
}

# Priority fee used when the node cannot suggest one, in wei.
DEFAULT_MAX_PRIORITY_FEE = 1_000_000


class EthAccountWalletProviderConfig(BaseModel):
    """Configuration for EthAccountWalletProvider."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    account: LocalAccount = Field(..., description="The local account used for signing")
    chain_id: str = Field(..., description="The chain id, e.g. `84532` for Base Sepolia")
    rpc_url: str | None = Field(
        None, description="RPC endpoint. Defaults to the public endpoint of the network."
    )
    request_timeout: float = Field(
        30, gt=0, description="Seconds before an RPC request is abandoned"
    )
    fee_multiplier: float = Field(
        2.0, gt=0, description="Multiplier applied to the latest base fee for maxFeePerGas"
    )


class EthAccountWalletProvider(EvmWalletProvider):
    """EVM wallet provider that signs locally and submits raw transactions."""

    def __init__(self, config: EthAccountWalletProviderConfig):
        """Initialize the wallet provider.

        Args:
            config: The wallet configuration.

        Raises:
            ValueError: If no RPC url is given and the chain has no default.

        """
        self._config = config
        self._account = config.account

        network_id = CHAIN_ID_TO_NETWORK_ID.get(config.chain_id)
        rpc_url = config.rpc_url or DEFAULT_RPC_URLS.get(network_id or "")
        if not rpc_url:
            raise ValueError(f"No RPC url configured for chain {config.chain_id}")

        self._network = Network(
            protocol_family="evm",
            network_id=network_id,
            chain_id=config.chain_id,
        )
        self._web3 = Web3(
            Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": config.request_timeout})
        )

    def get_address(self) -> str:
        """Get the checksummed address of the local account."""
        return self._account.address

    def get_network(self) -> Network:
        """Get the network the wallet is connected to."""
        return self._network

    def get_name(self) -> str:
        """Get the name of the wallet provider."""
        return "eth_account_wallet_provider"

    def get_balance(self) -> Decimal:
        """Get the native balance in wei."""
        return Decimal(self._web3.eth.get_balance(self.get_address()))

    def read_contract(
        self,
        contract_address: str,
        abi: list[dict[str, Any]],
        function_name: str,
        args: list[Any] | None = None,
        block_identifier: BlockIdentifier = "latest",
    ) -> Any:
        """Call a view function on a contract."""
        contract = self._web3.eth.contract(
            address=Web3.to_checksum_address(contract_address), abi=abi
        )
        func = getattr(contract.functions, function_name)
        return func(*(args or [])).call(block_identifier=block_identifier)

    def send_transaction(self, transaction: TxParams) -> HexStr:
        """Fill, sign and send a transaction.

        Missing `from`, `chainId`, `nonce`, fee fields and `gas` are filled in
        from the node. An explicit `gas` is kept as given.
        """
        tx: dict[str, Any] = dict(transaction)
        tx["from"] = self.get_address()
        tx["chainId"] = int(self._config.chain_id)
        tx.setdefault("value", 0)
        if "to" in tx:
            tx["to"] = Web3.to_checksum_address(tx["to"])
        if "nonce" not in tx:
            tx["nonce"] = self._web3.eth.get_transaction_count(self.get_address(), "pending")

        if "maxFeePerGas" not in tx and "gasPrice" not in tx:
            max_fee, priority_fee = self._estimate_fees()
            tx["maxFeePerGas"] = max_fee
            tx["maxPriorityFeePerGas"] = priority_fee

        if "gas" not in tx:
            tx["gas"] = self._web3.eth.estimate_gas(tx)

        signed = self._account.sign_transaction(tx)
        tx_hash = self._web3.eth.send_raw_transaction(signed.raw_transaction)
        logger.debug(f"Sent transaction {tx_hash.to_0x_hex()} to {tx.get('to')}")
        return HexStr(tx_hash.to_0x_hex())

    def wait_for_transaction_receipt(
        self, tx_hash: HexStr, timeout: float = 120, poll_latency: float = 1
    ) -> TxReceipt:
        """Wait for a transaction receipt, raising on timeout."""
        return self._web3.eth.wait_for_transaction_receipt(
            tx_hash, timeout=timeout, poll_latency=poll_latency
        )

    def _estimate_fees(self) -> tuple[int, int]:
        """Estimate EIP-1559 fees as (maxFeePerGas, maxPriorityFeePerGas)."""
        latest = self._web3.eth.get_block("latest")
        base_fee = int(latest.get("baseFeePerGas", 0))
        try:
            priority_fee = int(self._web3.eth.max_priority_fee)
        except Exception as e:
            logger.warning(f"Could not fetch max priority fee, using default: {e!s}")
            priority_fee = DEFAULT_MAX_PRIORITY_FEE
        max_fee = int(base_fee * self._config.fee_multiplier) + priority_fee
        return max_fee, priority_fee
