"""
Domain Discovery Routes
"""
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse
from typing import Union
import logging

from api.schemas.request_schemas import (
    SearchRequest,
    SuggestRequest,
    ScoreRequest,
    CheckRequest,
    BuyLinkRequest
)
from api.schemas.response_schemas import (
    DomainResult,
    SearchResponse,
    ScoreResponse,
    CheckResponse,
    SearchHistoryItem,
    SearchHistoryResponse,
    BuyLinkResponse
)
from api.schemas.error_schemas import (
    AuthenticationErrorResponse,
    InsufficientCreditsErrorResponse,
    ServiceErrorResponse
)
from api.dependencies import get_current_user, get_domain_service
from core.models import CurrentUser, SearchResult
from services.domain_service import DomainService

logger = logging.getLogger(__name__)
router = APIRouter()

# Gate and validation outcomes that are not 200
ERROR_STATUS = {
    "empty_keyword": status.HTTP_400_BAD_REQUEST,
    "insufficient_credits": status.HTTP_402_PAYMENT_REQUIRED,
    "ledger_unavailable": status.HTTP_503_SERVICE_UNAVAILABLE
}

SEARCH_RESPONSES = {
    400: {"model": ServiceErrorResponse, "description": "Empty keyword"},
    401: {"model": AuthenticationErrorResponse},
    402: {"model": InsufficientCreditsErrorResponse, "description": "Not enough credits"},
    503: {"model": ServiceErrorResponse, "description": "Credit ledger unavailable"}
}


def to_search_response(result: SearchResult) -> Union[SearchResponse, JSONResponse]:
    """Render a SearchResult; denials keep the same body shape with a non-200 status"""
    response = SearchResponse(
        success=result.ok,
        message=result.message,
        domains=[DomainResult(**record.to_dict()) for record in result.domains],
        count=len(result.domains),
        error=result.error,
        error_code=result.error_code,
        credits_remaining=result.credits_remaining,
        details=result.details or None
    )

    if result.ok:
        return response

    return JSONResponse(
        status_code=ERROR_STATUS.get(result.error_code, status.HTTP_500_INTERNAL_SERVER_ERROR),
        content=response.model_dump(mode="json")
    )


@router.post("/search", response_model=SearchResponse, responses=SEARCH_RESPONSES)
async def search_domains(
    request: SearchRequest,
    user: CurrentUser = Depends(get_current_user),
    service: DomainService = Depends(get_domain_service)
):
    """Keyword or wildcard search (billed per request)"""
    result = await service.search(
        request.pattern,
        user,
        include_unavailable=request.include_unavailable
    )
    return to_search_response(result)


@router.post("/suggest", response_model=SearchResponse, responses=SEARCH_RESPONSES)
async def suggest_domains(
    request: SuggestRequest,
    user: CurrentUser = Depends(get_current_user),
    service: DomainService = Depends(get_domain_service)
):
    """AI-assisted suggestions (billed per request)"""
    result = await service.suggest(
        request.keyword,
        user,
        include_unavailable=request.include_unavailable
    )
    return to_search_response(result)


@router.post("/score", response_model=ScoreResponse)
async def score_domain(
    request: ScoreRequest,
    user: CurrentUser = Depends(get_current_user),
    service: DomainService = Depends(get_domain_service)
) -> ScoreResponse:
    """FlipScore preview; free and never touches the ledger"""
    flip = service.score_preview(request.domain)
    return ScoreResponse(
        domain=request.domain,
        flip_score=flip.flip_score,
        trend_strength=flip.trend_strength
    )


@router.post("/check", response_model=CheckResponse)
async def check_domain(
    request: CheckRequest,
    user: CurrentUser = Depends(get_current_user),
    service: DomainService = Depends(get_domain_service)
) -> CheckResponse:
    """Availability of one domain; not billed"""
    record = await service.check(request.domain)
    return CheckResponse(domain=DomainResult(**record.to_dict()))


@router.get("/history", response_model=SearchHistoryResponse)
async def search_history(
    limit: int = Query(10, ge=1, le=50),
    user: CurrentUser = Depends(get_current_user),
    service: DomainService = Depends(get_domain_service)
) -> SearchHistoryResponse:
    """The caller's recent searches"""
    entries = await service.recent_searches(user, limit=limit)
    searches = [
        SearchHistoryItem(
            keyword=entry.keyword,
            operation=entry.operation,
            result_count=entry.result_count,
            available_count=entry.available_count,
            created_at=entry.created_at
        )
        for entry in entries
    ]
    return SearchHistoryResponse(searches=searches, count=len(searches))


@router.post("/buy-link", response_model=BuyLinkResponse)
async def validate_buy_link(
    request: BuyLinkRequest,
    user: CurrentUser = Depends(get_current_user),
    service: DomainService = Depends(get_domain_service)
) -> BuyLinkResponse:
    """Check the registrar purchase page answers before showing it"""
    result = await service.validate_buy_link(request.domain)
    return BuyLinkResponse(**result.to_dict())
