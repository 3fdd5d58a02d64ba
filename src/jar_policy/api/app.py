from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse

from jar_policy.chains import get_token_symbol
from jar_policy.config import AppSettings, get_settings
from jar_policy.errors import JarNotFoundError
from jar_policy.formatting import format_amount, format_cooldown_period, format_countdown
from jar_policy.observability.logging import configure_logging
from jar_policy.policy.evaluator import effective_withdrawal_cap
from jar_policy.providers.base import JarStateProvider, MemberList
from jar_policy.providers.memory import InMemoryJarStateProvider
from jar_policy.service import EligibilityService
from jar_policy.types import Amount


def _parse_amount(raw_amount: str) -> Amount:
    try:
        return int(raw_amount)
    except ValueError:
        pass
    try:
        return Decimal(raw_amount)
    except InvalidOperation as exc:
        raise HTTPException(status_code=400, detail="amount must be numeric") from exc


def build_api_app(settings: AppSettings, provider: JarStateProvider) -> FastAPI:
    app = FastAPI(title=f"{settings.service_name}-api", version="0.1.0")
    service = EligibilityService(provider)

    @app.exception_handler(JarNotFoundError)
    async def jar_not_found(_: Request, exc: JarNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(ValueError)
    async def invalid_input(_: Request, exc: ValueError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.get("/livez")
    async def livez() -> dict[str, str]:
        return {"status": "ok", "service": settings.service_name}

    @app.get("/jars/{jar_id}")
    async def jar_details(jar_id: int) -> dict[str, Any]:
        jar = provider.get_jar(jar_id)
        symbol = get_token_symbol(jar.token_address, jar.chain_id or settings.default_chain_id)
        return {
            **jar.as_dict(),
            "token_symbol": symbol,
            "display": {
                "balance": format_amount(jar.balance, symbol),
                "max_withdrawal_amount": format_amount(
                    jar.max_withdrawal_amount if jar.has_withdrawal_limit else None, symbol
                ),
                "effective_max_withdrawal": format_amount(effective_withdrawal_cap(jar), symbol),
                "cooldown_period": format_cooldown_period(jar.cooldown_period),
            },
        }

    @app.get("/jars/{jar_id}/eligibility")
    async def eligibility(
        jar_id: int,
        address: str = Query(...),
        amount: str = Query(...),
        now: int | None = Query(default=None),
    ) -> dict[str, Any]:
        result = service.check_withdrawal(jar_id, address, _parse_amount(amount), now=now)
        return {
            **result.as_dict(),
            "countdown": format_countdown(result.time_until_next_withdrawal),
        }

    @app.get("/jars/{jar_id}/cooldown")
    async def cooldown(
        jar_id: int,
        address: str = Query(...),
        now: int | None = Query(default=None),
    ) -> dict[str, Any]:
        remaining = service.time_until_next_withdrawal(jar_id, address, now=now)
        return {
            "time_until_next_withdrawal": remaining,
            "countdown": format_countdown(remaining),
        }

    @app.get("/jars/{jar_id}/whitelist")
    async def whitelist(jar_id: int) -> list[str]:
        return provider.list_members(jar_id, MemberList.WHITELIST)

    @app.get("/jars/{jar_id}/blacklist")
    async def blacklist(jar_id: int) -> list[str]:
        return provider.list_members(jar_id, MemberList.BLACKLIST)

    @app.get("/jars/{jar_id}/admins")
    async def admins(jar_id: int) -> list[str]:
        return provider.list_members(jar_id, MemberList.ADMIN)

    @app.get("/jars/{jar_id}/claims")
    async def claims(jar_id: int) -> list[dict[str, Any]]:
        return [claim.as_dict() for claim in provider.list_claims(jar_id)]

    return app


def default_api_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)
    return build_api_app(settings, InMemoryJarStateProvider())
