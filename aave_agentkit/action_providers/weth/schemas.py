"""Schemas for WETH action provider."""

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..erc20.utils import parse_amount, sanitize_amount
from .constants import ETH_UNIT_PATTERN, WETH_DECIMALS


@dataclass
class WethConfig:
    """Configuration options for WethActionProvider."""

    # Wait for each transaction to be mined and report reverts.
    wait_for_receipt: bool = True

    # Seconds to wait for a transaction receipt.
    # Default: 120 (or WETH_RECEIPT_TIMEOUT env var)
    receipt_timeout: float | None = None


class WrapEthSchema(BaseModel):
    """Input schema for wrapping ETH into WETH."""

    model_config = ConfigDict(extra="forbid")

    amount: str = Field(..., description="The amount of ETH to wrap, e.g. `0.1`")

    @field_validator("amount", mode="before")
    @classmethod
    def validate_amount(cls, value: object) -> str:
        """Strip the `eth` or `weth` unit token and check the amount."""
        if not isinstance(value, str):
            raise ValueError("amount must be a string")
        amount = sanitize_amount(value, unit=ETH_UNIT_PATTERN)
        parse_amount(amount, WETH_DECIMALS)
        return amount


class UnwrapWethSchema(BaseModel):
    """Input schema for unwrapping WETH into ETH."""

    model_config = ConfigDict(extra="forbid")

    amount: str = Field(..., description="The amount of WETH to unwrap, e.g. `0.1`")

    @field_validator("amount", mode="before")
    @classmethod
    def validate_amount(cls, value: object) -> str:
        """Strip the `weth` unit token and check the amount."""
        if not isinstance(value, str):
            raise ValueError("amount must be a string")
        amount = sanitize_amount(value)
        parse_amount(amount, WETH_DECIMALS)
        return amount
