"""
Domain Discovery Service

Entry points for billable discovery (keyword/wildcard search, AI suggest)
and the free score preview and single-domain check. Every billable call goes through the credit
gate before any upstream work.
"""
from typing import Callable, List, Optional, Union
import logging

from config.settings import settings
from config.constants import ERROR_MESSAGES, OperationType, ResolutionStatus
from core.ai_manager import AIManager
from core.exceptions import AIGenerationError, EmptyKeywordError, MissingAPIKeyError
from core.models import (
    Candidate,
    CurrentUser,
    DomainRecord,
    FlipScore,
    SearchHistoryEntry,
    SearchResult
)
from services.availability_service import AvailabilityResolver
from services.buy_link_service import BuyLinkValidator
from services.credit_service import (
    CreditLedgerGate,
    InsufficientCredits,
    LedgerUnavailable
)
from services.pattern_expander import (
    candidates_from_names,
    expand,
    expand_base_names,
    is_wildcard,
    normalize_pattern,
    WILDCARD
)
from services.ranking import rank
from services.scoring_service import score
from utils.formatters import build_purchase_url, format_credits, format_domain

logger = logging.getLogger(__name__)


class DomainService:
    """Search pipeline: expand, gate, resolve, score, rank"""

    def __init__(
        self,
        gate: CreditLedgerGate,
        resolver: AvailabilityResolver,
        audit_log,
        history=None,
        ai_manager: Optional[AIManager] = None,
        link_builder: Callable[[str], str] = build_purchase_url,
        buy_link_validator: Optional[BuyLinkValidator] = None
    ):
        self.gate = gate
        self.resolver = resolver
        self.audit_log = audit_log
        self.history = history
        self.ai = ai_manager
        self.link_builder = link_builder
        self.buy_links = buy_link_validator or BuyLinkValidator(audit_log)

    async def search(
        self,
        pattern: str,
        user: CurrentUser,
        include_unavailable: bool = False
    ) -> SearchResult:
        """
        Keyword or wildcard search

        Args:
            pattern: Keyword ("mind") or wildcard pattern ("ai*", "*mind", "get*mind")
            user: Authenticated caller
            include_unavailable: Also return unavailable records, ranked last

        Returns:
            SearchResult; failures are carried in error/error_code, never raised
        """
        try:
            candidates = expand(pattern)
        except EmptyKeywordError:
            return self._empty_keyword()

        if not candidates:
            # Nothing brandable to check; not billed
            return SearchResult(message=ERROR_MESSAGES["no_results"])

        operation = OperationType.WILDCARD_EXPLORE if is_wildcard(pattern) else OperationType.SEARCH
        outcome = await self.gate.try_debit(
            user.user_id,
            settings.credit_cost(operation),
            operation.value,
            is_admin=user.is_admin
        )
        if not outcome.ok:
            return self._denied(outcome)

        logger.info(f"🔍 {operation.value} '{pattern}': checking {len(candidates)} candidates")
        result = await self._discover(candidates, include_unavailable)
        result.credits_remaining = outcome.new_balance
        await self._record_history(user, normalize_pattern(pattern), operation, result)
        return result

    async def suggest(
        self,
        keyword: str,
        user: CurrentUser,
        include_unavailable: bool = False
    ) -> SearchResult:
        """
        AI-assisted suggestions, resolved through the same pipeline

        Falls back to pattern expansion when the text model is unavailable
        or returns nothing usable.
        """
        cleaned = normalize_pattern(keyword).replace(WILDCARD, "").strip("-")
        if not cleaned:
            return self._empty_keyword()

        if not expand_base_names(cleaned):
            # Same rule as search: nothing brandable, nothing billed
            return SearchResult(message=ERROR_MESSAGES["no_results"])

        operation = OperationType.AI_SUGGEST
        outcome = await self.gate.try_debit(
            user.user_id,
            settings.credit_cost(operation),
            operation.value,
            is_admin=user.is_admin
        )
        if not outcome.ok:
            return self._denied(outcome)

        candidates = await self._suggest_candidates(cleaned)
        result = await self._discover(candidates, include_unavailable)
        result.credits_remaining = outcome.new_balance
        await self._record_history(user, cleaned, operation, result)
        return result

    def score_preview(self, domain_name: str) -> FlipScore:
        """Score a single domain without touching the ledger or upstreams"""
        return score(domain_name)

    async def check(self, domain_name: str) -> DomainRecord:
        """
        Resolve one fully-qualified domain through both authorities

        Not billed. Available records get a score and purchase link like
        search results.
        """
        base_name, _, tld = format_domain(domain_name).partition(".")
        record = await self.resolver.resolve(Candidate(base_name=base_name, tld=tld))
        if record.available:
            self._enrich(record)

        logger.info(f"🔎 check {record.name}: {record.status.value}")
        return record

    async def recent_searches(self, user: CurrentUser, limit: int = 10) -> List[SearchHistoryEntry]:
        """The caller's own billable searches, newest first"""
        if self.history is None:
            return []
        return await self.history.list_for_user(user.user_id, limit=limit)

    async def validate_buy_link(self, domain_name: str):
        return await self.buy_links.validate(domain_name)

    async def _suggest_candidates(self, keyword: str) -> List[Candidate]:
        if self.ai is not None:
            try:
                names = await self.ai.suggest_domains(keyword)
                candidates = candidates_from_names(names)
                if candidates:
                    return candidates
                logger.warning(f"⚠️ AI suggestions for '{keyword}' were unusable, falling back")
            except (AIGenerationError, MissingAPIKeyError) as e:
                logger.warning(f"⚠️ AI suggest failed for '{keyword}', falling back to expansion: {e.message}")

        return expand(keyword)

    async def _discover(
        self,
        candidates: List[Candidate],
        include_unavailable: bool
    ) -> SearchResult:
        records = await self.resolver.resolve_all(candidates)

        if records and all(r.status == ResolutionStatus.ERROR for r in records):
            logger.error(f"❌ No candidates resolvable ({len(records)} upstream failures)")
            return SearchResult(
                domains=[],
                message=ERROR_MESSAGES["search_unavailable"],
                details={"upstream_unavailable": True}
            )

        available = [r for r in records if r.available]
        for record in available:
            self._enrich(record)

        visible = records if include_unavailable else available
        ranked = rank(visible)

        logger.info(f"✅ {len(available)}/{len(records)} candidates available")
        return SearchResult(
            domains=ranked,
            message=None if available else ERROR_MESSAGES["no_results"]
        )

    def _enrich(self, record: DomainRecord) -> None:
        """Attach score and purchase link; only ever called for available records"""
        flip = score(record.name)
        record.flip_score = flip.flip_score
        record.trend_strength = flip.trend_strength
        record.purchase_url = self.link_builder(record.name)

    def _empty_keyword(self) -> SearchResult:
        return SearchResult(
            error=ERROR_MESSAGES["empty_keyword"],
            error_code="empty_keyword"
        )

    def _denied(self, outcome: Union[InsufficientCredits, LedgerUnavailable]) -> SearchResult:
        if isinstance(outcome, InsufficientCredits):
            return SearchResult(
                error=ERROR_MESSAGES["insufficient_credits"].format(
                    required=format_credits(outcome.required_credits),
                    available=format_credits(outcome.available_credits)
                ),
                error_code="insufficient_credits",
                credits_remaining=outcome.available_credits,
                details={
                    "available": outcome.available_credits,
                    "required": outcome.required_credits
                }
            )

        return SearchResult(
            error=ERROR_MESSAGES["ledger_unavailable"],
            error_code="ledger_unavailable"
        )

    async def _record_history(
        self,
        user: CurrentUser,
        keyword: str,
        operation: OperationType,
        result: SearchResult
    ) -> None:
        if self.history is None:
            return
        try:
            await self.history.record(
                user_id=user.user_id,
                keyword=keyword,
                operation=operation.value,
                result_count=len(result.domains),
                available_count=sum(1 for d in result.domains if d.available)
            )
        except Exception as e:
            logger.warning(f"⚠️ Failed to record search history for {user.user_id}: {e}")

    async def close(self) -> None:
        """Release upstream sessions"""
        await self.resolver.primary.close()
        await self.resolver.secondary.close()
        await self.buy_links.close()


def build_domain_service() -> DomainService:
    """Wire the service from settings: Supabase stores when configured, in-process otherwise"""
    from services.authorities import build_authorities

    if settings.has_supabase():
        from database.repositories import (
            CreditRepository,
            SearchHistoryRepository,
            ValidationLogRepository
        )
        ledger = CreditRepository()
        audit_log = ValidationLogRepository()
        history = SearchHistoryRepository()
        logger.info("✅ Using Supabase ledger and audit log")
    else:
        from database.memory_store import InMemoryAuditLog, InMemoryLedger, InMemorySearchHistory
        ledger = InMemoryLedger()
        audit_log = InMemoryAuditLog()
        history = InMemorySearchHistory()
        logger.warning("⚠️ Using in-process ledger and audit log (data is not persisted)")

    authorities = build_authorities()
    resolver = AvailabilityResolver(
        primary=authorities["primary"],
        secondary=authorities["secondary"],
        audit_log=audit_log
    )

    return DomainService(
        gate=CreditLedgerGate(ledger),
        resolver=resolver,
        audit_log=audit_log,
        history=history,
        ai_manager=AIManager.get_instance()
    )
