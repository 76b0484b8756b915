from collections.abc import Callable

from fastapi import Request

from app.application.services.rate_limit_service import register_hit

UNKNOWN_CLIENT = "unknown"


def client_identity(request: Request) -> str:
    if request.client is None or not request.client.host:
        return UNKNOWN_CLIENT
    return request.client.host


def rate_limited(scope: str, *, limit: int, window_seconds: int) -> Callable:
    def checker(request: Request) -> None:
        register_hit(scope=scope, client_id=client_identity(request), limit=limit, window_seconds=window_seconds)

    return checker
