from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


def _address(name: str, default: str = "") -> str:
    return (_env(name, default) or "").strip().lower()


def _bool(name: str, default: str = "false") -> bool:
    return (_env(name, default) or "").strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    ledger_dsn: str
    core_address: str
    deployer_address: str
    amm_api_base: str
    amm_router_address: str
    amm_wrapped_native: str
    amm_timeout_seconds: float
    strict_approvals: bool
    events_max_limit: int
    jwt_secret: str
    jwt_access_ttl_minutes: int
    log_level: str


def get_settings() -> Settings:
    return Settings(
        ledger_dsn=_env("LEDGER_DSN", "sqlite+pysqlite:///./amm_gateway.db"),
        core_address=_address("CORE_ADDRESS", "0x000000000000000000000000000000000000c0de"),
        deployer_address=_address("DEPLOYER_ADDRESS"),
        amm_api_base=_env("AMM_API_BASE", "http://localhost:8545/amm"),
        amm_router_address=_address("AMM_ROUTER_ADDRESS"),
        amm_wrapped_native=_address("AMM_WRAPPED_NATIVE"),
        amm_timeout_seconds=float(_env("AMM_TIMEOUT_SECONDS", "10")),
        strict_approvals=_bool("STRICT_APPROVALS"),
        events_max_limit=int(_env("EVENTS_MAX_LIMIT", "500")),
        jwt_secret=_env("JWT_SECRET", "") or "",
        jwt_access_ttl_minutes=int(_env("JWT_ACCESS_TTL_MINUTES", "60")),
        log_level=_env("LOG_LEVEL", "INFO").upper(),
    )
