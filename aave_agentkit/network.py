"""Network model shared by wallet providers and action providers."""

from pydantic import BaseModel, ConfigDict, Field

CHAIN_ID_TO_NETWORK_ID: dict[str, str] = {
    "8453": "base-mainnet",
    "84532": "base-sepolia",
}

NETWORK_ID_TO_CHAIN_ID: dict[str, str] = {
    network_id: chain_id for chain_id, network_id in CHAIN_ID_TO_NETWORK_ID.items()
}


class Network(BaseModel):
    """Represents a blockchain network a wallet is connected to."""

    model_config = ConfigDict(frozen=True)

    protocol_family: str = Field(..., description="The protocol family, e.g. `evm`")
    network_id: str | None = Field(None, description="The network id, e.g. `base-sepolia`")
    chain_id: str | None = Field(None, description="The chain id as a string, e.g. `84532`")
