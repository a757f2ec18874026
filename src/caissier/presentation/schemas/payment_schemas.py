"""
Payment API schemas.

Amounts travel as strings of decimal digits in both directions.
"""

from datetime import datetime
from typing import Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from caissier.application.dto.payment_dtos import PaymentPage, PaymentStats
from caissier.domain.entities.payment import Payment

# ================================================================
# Request Schemas
# ================================================================


class SubmitPaymentRequest(BaseModel):
    """Claim that an on-chain transaction paid to_address."""

    to_address: str = Field(..., description="Recipient address")
    amount: str = Field(
        ...,
        description="Amount in smallest units (wei), decimal digits",
        examples=["1000000000000000000"],
    )
    tx_hash: str = Field(..., description="Transaction hash (0x + 64 hex)")
    currency: Optional[str] = Field(None, max_length=10)
    description: Optional[str] = Field(None, max_length=500)


# ================================================================
# Response Schemas
# ================================================================


class PaymentResponse(BaseModel):
    """Payment record."""

    id: UUID
    from_address: str
    to_address: str
    amount: str
    currency: str
    transaction_hash: str
    status: str
    block_number: Optional[int] = None
    gas_used: Optional[int] = None
    gas_price: Optional[str] = None
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    confirmed_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, payment: Payment) -> "PaymentResponse":
        return cls(
            id=payment.id,
            from_address=payment.from_address,
            to_address=payment.to_address,
            amount=str(payment.amount),
            currency=payment.currency,
            transaction_hash=payment.transaction_hash,
            status=payment.status.value,
            block_number=payment.block_number,
            gas_used=payment.gas_used,
            gas_price=(
                str(payment.gas_price) if payment.gas_price is not None else None
            ),
            description=payment.description,
            created_at=payment.created_at,
            updated_at=payment.updated_at,
            confirmed_at=payment.confirmed_at,
        )


class PaymentListResponse(BaseModel):
    items: List[PaymentResponse]
    total: int
    page: int
    page_size: int

    @classmethod
    def from_page(cls, page: PaymentPage) -> "PaymentListResponse":
        return cls(
            items=[PaymentResponse.from_entity(p) for p in page.items],
            total=page.total,
            page=page.page,
            page_size=page.page_size,
        )


class PaymentStatsResponse(BaseModel):
    counts: Dict[str, int] = Field(..., description="Payments per status")
    total: int
    total_confirmed_amount: str = Field(
        ..., description="Sum of confirmed amounts, decimal digits"
    )

    @classmethod
    def from_stats(cls, stats: PaymentStats) -> "PaymentStatsResponse":
        return cls(
            counts={status.value: count for status, count in stats.counts.items()},
            total=stats.total,
            total_confirmed_amount=str(stats.total_confirmed_amount),
        )
