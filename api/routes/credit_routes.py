"""
Credit Routes
"""
from fastapi import APIRouter, Depends, HTTPException, status
import logging

from api.schemas.request_schemas import GrantCreditsRequest
from api.schemas.response_schemas import (
    BalanceResponse,
    CreditPack,
    CreditPacksResponse,
    GrantCreditsResponse
)
from api.dependencies import get_current_user, get_domain_service, require_admin
from config.settings import settings
from config.constants import CREDIT_PACKS, ERROR_MESSAGES
from core.models import CurrentUser
from services.credit_service import CreditGranted
from utils.formatters import format_currency
from services.domain_service import DomainService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/balance", response_model=BalanceResponse)
async def get_balance(
    user: CurrentUser = Depends(get_current_user),
    service: DomainService = Depends(get_domain_service)
) -> BalanceResponse:
    """Current balance; first call provisions the starter credits"""
    balance = await service.gate.get_balance(user.user_id)

    return BalanceResponse(
        user_id=user.user_id,
        current_credits=balance.current_credits,
        total_purchased_credits=balance.total_purchased_credits,
        is_admin=user.is_admin,
        credit_costs=settings.get_credit_costs()
    )


@router.get("/packs", response_model=CreditPacksResponse)
async def list_packs() -> CreditPacksResponse:
    """Purchasable credit packs"""
    return CreditPacksResponse(
        packs=[
            CreditPack(
                id=pack["id"],
                name=pack["name"],
                credits=pack["credits"],
                price_usd=float(pack["price_usd"]),
                price_label=format_currency(pack["price_usd"]),
                description=pack.get("description")
            )
            for pack in CREDIT_PACKS
        ]
    )


@router.post("/grant", response_model=GrantCreditsResponse)
async def grant_credits(
    request: GrantCreditsRequest,
    admin: CurrentUser = Depends(require_admin),
    service: DomainService = Depends(get_domain_service)
) -> GrantCreditsResponse:
    """Add credits to a user's balance (admin only)"""
    outcome = await service.gate.grant(
        request.user_id,
        request.amount,
        request.reason,
        purchased=request.purchased
    )

    if not isinstance(outcome, CreditGranted):
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=ERROR_MESSAGES["ledger_unavailable"]
        )

    logger.info(f"👑 Admin {admin.user_id} granted {request.amount} credits to {request.user_id}")
    return GrantCreditsResponse(user_id=request.user_id, new_balance=outcome.new_balance)
