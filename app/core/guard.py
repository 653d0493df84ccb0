import logging
from dataclasses import dataclass
from typing import Optional, Dict, Any
from urllib.parse import quote

from starlette.requests import Request
from starlette.responses import RedirectResponse
from starlette.types import ASGIApp, Receive, Scope, Send

from app.core.security import verify_token, extract_token_from_header

logger = logging.getLogger(__name__)

PROTECTED_PREFIX = "/dashboard"
UNAUTHORIZED_PATH = "/dashboard/unauthorized"
LOGIN_PATH = "/login"
SESSION_COOKIE = "session_token"

# Префикс раздела -> роли, которым он доступен
ROLE_RULES = (
    ("/dashboard/admin", ("ADMIN",)),
    ("/dashboard/editor", ("ADMIN", "EDITOR")),
)


@dataclass(frozen=True)
class GuardDecision:
    action: str  # "pass" | "redirect" | "rewrite"
    target: Optional[str] = None


def _under(path: str, prefix: str) -> bool:
    return path == prefix or path.startswith(prefix + "/")


def decide(path: str, claims: Optional[Dict[str, Any]]) -> GuardDecision:
    """Решение для запроса по пути и данным токена"""
    if not _under(path, PROTECTED_PREFIX):
        return GuardDecision("pass")

    if not claims:
        return GuardDecision("redirect", f"{LOGIN_PATH}?callbackUrl={quote(path, safe='')}")

    role = claims.get("role")
    for prefix, roles in ROLE_RULES:
        if _under(path, prefix) and role not in roles:
            return GuardDecision("rewrite", UNAUTHORIZED_PATH)

    return GuardDecision("pass")


def read_claims(request: Request) -> Optional[Dict[str, Any]]:
    """Токен из заголовка Authorization или из cookie сессии"""
    token = extract_token_from_header(request.headers.get("authorization"))
    token = token or request.cookies.get(SESSION_COOKIE)
    if not token:
        return None
    return verify_token(token)


class RoleGuardMiddleware:
    """Защита разделов дашборда по ролям"""

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope)
        decision = decide(scope["path"], read_claims(request))

        if decision.action == "redirect":
            logger.info(f"Unauthenticated access to {scope['path']}, redirecting to login")
            response = RedirectResponse(decision.target)
            await response(scope, receive, send)
            return

        if decision.action == "rewrite":
            logger.info(f"Insufficient role for {scope['path']}, serving unauthorized view")
            scope = dict(scope, path=decision.target, raw_path=decision.target.encode())

        await self.app(scope, receive, send)
