"""Lightweight JWT verification middleware.

This middleware performs a best-effort JWT validation. Route-level dependencies
(`get_current_user`, `get_current_admin`) still enforce auth; this middleware
simply rejects obviously bad tokens early and attaches the decoded payload to
`request.state.auth`. Requests without an Authorization header pass through
untouched, since booking is open to anonymous visitors.
"""
from starlette.requests import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse
from dentalbook.core.security import decode_token


class JWTMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request.state.auth = None
        auth_header = request.headers.get("authorization")
        if not auth_header:
            return await call_next(request)

        scheme, _, token = auth_header.partition(" ")
        if scheme.lower() != "bearer" or not token:
            return JSONResponse(
                status_code=401,
                content={"detail": "Invalid authorization header", "kind": "unauthorized"},
            )

        payload = decode_token(token)
        if not payload:
            return JSONResponse(status_code=401, content={"detail": "Invalid token", "kind": "unauthorized"})

        if not payload.get("sub") or not payload.get("jti"):
            return JSONResponse(
                status_code=401,
                content={"detail": "Invalid token payload", "kind": "unauthorized"},
            )

        request.state.auth = payload
        return await call_next(request)
