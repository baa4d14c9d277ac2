"""Fixed single-origin cross-origin policy.

Unlike Starlette's CORSMiddleware the headers are set on every response,
whatever the request's Origin, and every OPTIONS request is answered here
without reaching the router.
"""
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp


class CrossOriginPolicyMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, allow_origin: str, allow_methods: str, allow_headers: str):
        super().__init__(app)
        self.policy_headers = {
            "Access-Control-Allow-Origin": allow_origin,
            "Access-Control-Allow-Methods": allow_methods,
            "Access-Control-Allow-Headers": allow_headers,
        }

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        # Preflight
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=self.policy_headers)

        response = await call_next(request)
        response.headers.update(self.policy_headers)
        return response
