"""Schemas for Aave action provider."""

from dataclasses import dataclass
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..erc20.utils import parse_amount, sanitize_amount


@dataclass
class AaveConfig:
    """Configuration options for AaveActionProvider.

    Fields left as None are read from the environment.
    """

    # Check reserve and account state before submitting transactions.
    # Default: True (or AAVE_VALIDATE_USER_STATE="false" env var to disable)
    validate_user_state: bool | None = None

    # Wait for each transaction to be mined and report reverts.
    wait_for_receipt: bool = True

    # Seconds to wait for a transaction receipt.
    # Default: 120 (or AAVE_RECEIPT_TIMEOUT env var)
    receipt_timeout: float | None = None


class AaveEmptySchema(BaseModel):
    """Input schema for actions that take no parameters."""

    model_config = ConfigDict(extra="forbid")


class AaveAmountSchema(BaseModel):
    """Base input schema for actions that take a WETH amount."""

    model_config = ConfigDict(extra="forbid")

    amount: str = Field(..., description="The amount of WETH, e.g. `0.1`")

    @field_validator("amount", mode="before")
    @classmethod
    def validate_amount(cls, value: object) -> str:
        """Strip the unit token and check the amount is a valid WETH amount."""
        if isinstance(value, int | float | Decimal) and not isinstance(value, bool):
            value = str(value)
        if not isinstance(value, str):
            raise ValueError("amount must be a string")
        amount = sanitize_amount(value)
        parse_amount(amount)
        return amount


class AaveApproveSchema(AaveAmountSchema):
    """Input schema for approving the Aave Pool to spend WETH."""

    amount: str = Field(
        ...,
        description="The amount of WETH the Aave Pool may spend, e.g. `0.1`",
    )


class AaveSupplySchema(AaveAmountSchema):
    """Input schema for supplying WETH to Aave."""

    amount: str = Field(
        ...,
        description="The amount of WETH to supply to the Aave market, e.g. `0.1`",
    )


class AaveWithdrawSchema(AaveAmountSchema):
    """Input schema for withdrawing WETH from Aave."""

    amount: str = Field(
        ...,
        description="The amount of WETH to withdraw from the Aave market, e.g. `0.1`",
    )


class AaveBorrowSchema(AaveAmountSchema):
    """Input schema for borrowing WETH from Aave."""

    amount: str = Field(
        ...,
        description="The amount of WETH to borrow from the Aave market, e.g. `0.01`",
    )


class AaveRepaySchema(AaveAmountSchema):
    """Input schema for repaying borrowed WETH to Aave."""

    amount: str = Field(
        ...,
        description="The amount of WETH to repay to the Aave market, e.g. `0.01`",
    )
