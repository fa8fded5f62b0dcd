from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from contactscout.core.config import settings
from contactscout.core.logging import client_ip_var


def cors_headers() -> dict[str, str]:
    return {
        "Access-Control-Allow-Origin": settings.CORS_ALLOW_ORIGIN,
        "Access-Control-Allow-Methods": ", ".join(settings.CORS_ALLOW_METHODS),
        "Access-Control-Allow-Headers": ", ".join(settings.CORS_ALLOW_HEADERS),
    }


async def add_cors_headers(request: Request, call_next):
    """Answer pre-flight requests and add permissive CORS headers to responses"""
    if request.method == "OPTIONS":
        return Response(status_code=200, headers=cors_headers())

    response = await call_next(request)
    response.headers.update(cors_headers())
    return response


class ClientIPMiddleware(BaseHTTPMiddleware):
    """Expose the caller's IP to log records emitted while serving the request"""

    async def dispatch(self, request, call_next):
        client_ip = request.client.host if request.client else "unknown"
        request.state.client_ip = client_ip

        token = client_ip_var.set(client_ip)
        try:
            return await call_next(request)
        finally:
            client_ip_var.reset(token)
