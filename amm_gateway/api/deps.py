from __future__ import annotations

from functools import lru_cache
import logging

from fastapi import HTTPException

from amm_gateway.application.services.allowance_manager import AllowanceManager
from amm_gateway.application.services.asset_custodian import AssetCustodian
from amm_gateway.application.services.event_ledger import EventLedger
from amm_gateway.application.services.exchange_delegate import ExchangeDelegate
from amm_gateway.application.services.operation_scope import OperationScope
from amm_gateway.application.use_cases.add_liquidity import AddLiquidityETHUseCase, AddLiquidityUseCase
from amm_gateway.application.use_cases.ledger_accounts import ApproveSpenderUseCase, GetBalanceUseCase
from amm_gateway.application.use_cases.list_events import ListEventsUseCase
from amm_gateway.application.use_cases.remove_liquidity import RemoveLiquidityUseCase
from amm_gateway.application.use_cases.rescue import RescueAssetUseCase, RescueNativeUseCase
from amm_gateway.application.use_cases.swap import SwapUseCase
from amm_gateway.application.use_cases.transfer_ownership import GetOwnerUseCase, TransferOwnershipUseCase
from amm_gateway.domain.services.reentrancy import ReentrancyGuard
from amm_gateway.infrastructure.clients.amm_router_client import (
    AmmRouterClientSettings,
    HttpAmmRouterClient,
)
from amm_gateway.infrastructure.db.engine import SqlConnectionScope, create_schema, get_engine
from amm_gateway.infrastructure.db.repositories.asset_ledger_repository import SqlAssetLedgerRepository
from amm_gateway.infrastructure.db.repositories.ledger_event_repository import SqlLedgerEventRepository
from amm_gateway.infrastructure.db.repositories.ownership_repository import SqlOwnershipRepository
from amm_gateway.infrastructure.security.token_service import JwtTokenService
from amm_gateway.shared.config import get_settings


logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _get_connection_scope() -> SqlConnectionScope:
    settings = get_settings()
    if not settings.ledger_dsn:
        raise HTTPException(status_code=500, detail="LEDGER_DSN is required.")
    engine = get_engine(settings.ledger_dsn)
    create_schema(engine)
    return SqlConnectionScope(engine)


@lru_cache(maxsize=1)
def _get_ledger() -> SqlAssetLedgerRepository:
    settings = get_settings()
    return SqlAssetLedgerRepository(
        _get_connection_scope(),
        strict_approvals=settings.strict_approvals,
    )


@lru_cache(maxsize=1)
def _get_ownership_repository() -> SqlOwnershipRepository:
    settings = get_settings()
    repository = SqlOwnershipRepository(_get_connection_scope())
    if settings.deployer_address:
        owner = repository.ensure_owner(default_owner=settings.deployer_address)
        logger.info("deps: owner=%s", owner)
    return repository


@lru_cache(maxsize=1)
def _get_event_sink() -> SqlLedgerEventRepository:
    return SqlLedgerEventRepository(_get_connection_scope())


@lru_cache(maxsize=1)
def _get_event_ledger() -> EventLedger:
    return EventLedger(sink=_get_event_sink())


@lru_cache(maxsize=1)
def _get_operation_scope() -> OperationScope:
    return OperationScope(guard=ReentrancyGuard(), ledger=_get_ledger(), events=_get_event_ledger())


@lru_cache(maxsize=1)
def _get_amm_client() -> HttpAmmRouterClient:
    settings = get_settings()
    if not settings.amm_router_address:
        raise HTTPException(status_code=500, detail="AMM_ROUTER_ADDRESS is required.")
    if not settings.amm_wrapped_native:
        raise HTTPException(status_code=500, detail="AMM_WRAPPED_NATIVE is required.")
    return HttpAmmRouterClient(
        AmmRouterClientSettings(
            api_base=settings.amm_api_base,
            router_address=settings.amm_router_address,
            wrapped_native=settings.amm_wrapped_native,
            timeout_seconds=settings.amm_timeout_seconds,
        ),
        ledger=_get_ledger(),
    )


@lru_cache(maxsize=1)
def get_token_service() -> JwtTokenService:
    settings = get_settings()
    if not settings.jwt_secret:
        raise HTTPException(status_code=500, detail="JWT_SECRET is required.")
    return JwtTokenService(
        jwt_secret=settings.jwt_secret,
        access_ttl_minutes=settings.jwt_access_ttl_minutes,
    )


def _get_custodian() -> AssetCustodian:
    return AssetCustodian(ledger=_get_ledger(), core_address=get_settings().core_address)


def _get_allowance_manager() -> AllowanceManager:
    return AllowanceManager(ledger=_get_ledger(), owner=get_settings().core_address)


def _get_exchange_delegate() -> ExchangeDelegate:
    return ExchangeDelegate(amm=_get_amm_client(), sender=get_settings().core_address)


def _orchestration_kwargs() -> dict:
    return {
        "scope": _get_operation_scope(),
        "custodian": _get_custodian(),
        "allowances": _get_allowance_manager(),
        "delegate": _get_exchange_delegate(),
        "events": _get_event_ledger(),
    }


def get_swap_use_case() -> SwapUseCase:
    return SwapUseCase(**_orchestration_kwargs())


def get_add_liquidity_use_case() -> AddLiquidityUseCase:
    return AddLiquidityUseCase(**_orchestration_kwargs())


def get_add_liquidity_eth_use_case() -> AddLiquidityETHUseCase:
    return AddLiquidityETHUseCase(**_orchestration_kwargs())


def get_remove_liquidity_use_case() -> RemoveLiquidityUseCase:
    return RemoveLiquidityUseCase(**_orchestration_kwargs())


def get_rescue_asset_use_case() -> RescueAssetUseCase:
    return RescueAssetUseCase(
        scope=_get_operation_scope(),
        custodian=_get_custodian(),
        ownership_port=_get_ownership_repository(),
    )


def get_rescue_native_use_case() -> RescueNativeUseCase:
    return RescueNativeUseCase(
        scope=_get_operation_scope(),
        custodian=_get_custodian(),
        ownership_port=_get_ownership_repository(),
    )


def get_transfer_ownership_use_case() -> TransferOwnershipUseCase:
    return TransferOwnershipUseCase(
        scope=_get_operation_scope(),
        ownership_port=_get_ownership_repository(),
        events=_get_event_ledger(),
    )


def get_owner_use_case() -> GetOwnerUseCase:
    return GetOwnerUseCase(ownership_port=_get_ownership_repository())


def get_list_events_use_case() -> ListEventsUseCase:
    return ListEventsUseCase(event_sink=_get_event_sink(), max_limit=get_settings().events_max_limit)


def get_approve_spender_use_case() -> ApproveSpenderUseCase:
    return ApproveSpenderUseCase(scope=_get_operation_scope(), ledger=_get_ledger())


def get_balance_use_case() -> GetBalanceUseCase:
    return GetBalanceUseCase(ledger=_get_ledger())
