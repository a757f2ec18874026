"""
Payment API routes.

Provides endpoints for payment reconciliation:
- POST /payments - Submit a payment claim
- GET /payments - List own payments
- GET /payments/stats - Counts and confirmed total
- GET /payments/tx/{tx_hash} - Lookup by transaction hash
- GET /payments/{payment_id} - Lookup by id
- POST /payments/{payment_id}/refresh - Re-check a pending payment
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from caissier.application.dto.payment_dtos import PaymentClaim
from caissier.application.use_cases.get_payment import GetPayment
from caissier.application.use_cases.get_payment_stats import GetPaymentStats
from caissier.application.use_cases.list_payments import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    ListPayments,
)
from caissier.application.use_cases.refresh_payment_status import (
    RefreshPaymentStatus,
)
from caissier.application.use_cases.submit_payment import SubmitPayment
from caissier.di.dependencies import (
    get_get_payment,
    get_get_payment_stats,
    get_list_payments,
    get_refresh_payment_status,
    get_submit_payment,
)
from caissier.domain.entities.payment import PaymentStatus
from caissier.domain.entities.user import User
from caissier.presentation.api.middleware.auth import get_current_user
from caissier.presentation.schemas.payment_schemas import (
    PaymentListResponse,
    PaymentResponse,
    PaymentStatsResponse,
    SubmitPaymentRequest,
)

router = APIRouter(prefix="/payments", tags=["Payments"])


@router.post(
    "",
    response_model=PaymentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit payment",
    description=(
        "Validate an on-chain transaction against the claim and record it. "
        "Resubmitting a known transaction hash returns the stored payment."
    ),
    responses={200: {"description": "Transaction already recorded"}},
)
async def submit_payment(
    request: SubmitPaymentRequest,
    response: Response,
    current_user: User = Depends(get_current_user),
    use_case: SubmitPayment = Depends(get_submit_payment),
) -> PaymentResponse:
    """
    Raises:
        400: No wallet bound
        403: Sender is not one of the caller's wallets
        404: Transaction unknown to the ledger
        409: Transaction hash recorded by another account
        422: Malformed claim or claim/ledger mismatch
        503: Ledger unavailable (retryable)
    """
    result = await use_case.execute(
        current_user.id,
        PaymentClaim(
            to_address=request.to_address,
            amount=request.amount,
            tx_hash=request.tx_hash,
            currency=request.currency,
            description=request.description,
        ),
    )
    if not result.created:
        response.status_code = status.HTTP_200_OK
    return PaymentResponse.from_entity(result.payment)


@router.get("", response_model=PaymentListResponse, summary="List payments")
async def list_payments(
    page: int = Query(1, ge=1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    payment_status: Optional[PaymentStatus] = Query(None, alias="status"),
    currency: Optional[str] = Query(None, max_length=10),
    current_user: User = Depends(get_current_user),
    use_case: ListPayments = Depends(get_list_payments),
) -> PaymentListResponse:
    result = await use_case.execute(
        current_user.id,
        page=page,
        page_size=page_size,
        status=payment_status,
        currency=currency,
    )
    return PaymentListResponse.from_page(result)


@router.get(
    "/stats",
    response_model=PaymentStatsResponse,
    summary="Payment statistics",
)
async def get_payment_stats(
    current_user: User = Depends(get_current_user),
    use_case: GetPaymentStats = Depends(get_get_payment_stats),
) -> PaymentStatsResponse:
    return PaymentStatsResponse.from_stats(await use_case.execute(current_user.id))


@router.get(
    "/tx/{tx_hash}",
    response_model=PaymentResponse,
    summary="Get payment by transaction hash",
)
async def get_payment_by_tx_hash(
    tx_hash: str,
    current_user: User = Depends(get_current_user),
    use_case: GetPayment = Depends(get_get_payment),
) -> PaymentResponse:
    payment = await use_case.execute_by_tx_hash(current_user.id, tx_hash)
    return PaymentResponse.from_entity(payment)


@router.get(
    "/{payment_id}",
    response_model=PaymentResponse,
    summary="Get payment",
)
async def get_payment(
    payment_id: UUID,
    current_user: User = Depends(get_current_user),
    use_case: GetPayment = Depends(get_get_payment),
) -> PaymentResponse:
    payment = await use_case.execute(current_user.id, payment_id)
    return PaymentResponse.from_entity(payment)


@router.post(
    "/{payment_id}/refresh",
    response_model=PaymentResponse,
    summary="Refresh payment status",
    description=(
        "Re-query the ledger for a pending payment. Confirmed and failed "
        "payments are returned without contacting the ledger."
    ),
)
async def refresh_payment_status(
    payment_id: UUID,
    current_user: User = Depends(get_current_user),
    use_case: RefreshPaymentStatus = Depends(get_refresh_payment_status),
) -> PaymentResponse:
    payment = await use_case.execute(current_user.id, payment_id)
    return PaymentResponse.from_entity(payment)
