"""
CORS Middleware - Cross-Origin Resource Sharing configuration.

The dashboard page is usually served from this same app, but the API is
also consumed from other origins (embedded dashboards, local frontends).

Configuration:
- CORS_ALLOWED_ORIGINS lists the origins allowed to call the API
- A "*" entry allows any origin

Usage:
    from app.middleware.cors import CORSMiddleware

    app.add_middleware(
        CORSMiddleware,
        allowed_origins=["http://localhost:5173"],
        allow_credentials=False,
    )

Headers added:
- Access-Control-Allow-Origin: Which origin is allowed
- Access-Control-Allow-Methods: Which HTTP methods allowed (preflight)
- Access-Control-Allow-Headers: Which headers allowed (preflight)
- Access-Control-Allow-Credentials: Whether cookies/auth allowed
- Access-Control-Max-Age: How long to cache preflight responses
"""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from app.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)

WILDCARD = "*"


class CORSMiddleware(BaseHTTPMiddleware):
    """
    CORS middleware.

    Handles preflight OPTIONS requests and adds CORS headers to responses.
    """

    def __init__(
        self,
        app,
        allowed_origins: list[str] | None = None,
        allow_credentials: bool = False,
        allow_methods: list[str] | None = None,
        allow_headers: list[str] | None = None,
        max_age: int = 600,
    ):
        """
        Initialize CORS middleware.

        Args:
            app: FastAPI application
            allowed_origins: Allowed origins, "*" for any
            allow_credentials: Whether to allow credentials (cookies, auth headers)
            allow_methods: Allowed HTTP methods
            allow_headers: Allowed request headers
            max_age: How long (seconds) to cache preflight responses
        """
        super().__init__(app)
        self.allowed_origins = allowed_origins or []
        self.allow_any_origin = WILDCARD in self.allowed_origins
        self.allow_credentials = allow_credentials
        self.allow_methods = allow_methods or ["GET", "HEAD", "POST", "OPTIONS"]
        self.allow_headers = allow_headers or [
            "Accept",
            "Accept-Language",
            "Content-Type",
            "Content-Language",
            "Authorization",
            "X-Request-ID",
            "X-Requested-With",
        ]
        self.max_age = max_age

        logger.info(
            "CORS middleware initialized",
            allowed_origins=self.allowed_origins,
            allow_credentials=self.allow_credentials,
        )

    def is_allowed_origin(self, origin: str | None) -> bool:
        if not origin:
            return False
        return self.allow_any_origin or origin in self.allowed_origins

    def _allow_origin_value(self, origin: str) -> str:
        # Browsers reject "*" together with credentials, so echo the origin then
        if self.allow_any_origin and not self.allow_credentials:
            return WILDCARD
        return origin

    async def dispatch(self, request, call_next):
        origin = request.headers.get("origin")
        is_allowed_origin = self.is_allowed_origin(origin)

        is_preflight = (
            request.method == "OPTIONS" and "access-control-request-method" in request.headers
        )
        if is_preflight:
            if is_allowed_origin:
                return self._preflight_response(origin)
            logger.warning(
                "CORS preflight rejected - origin not allowed",
                origin=origin,
                allowed_origins=self.allowed_origins,
            )
            return Response(status_code=403, content="Origin not allowed")

        response = await call_next(request)

        if is_allowed_origin:
            response.headers["Access-Control-Allow-Origin"] = self._allow_origin_value(origin)
            if self.allow_credentials:
                response.headers["Access-Control-Allow-Credentials"] = "true"
            if not self.allow_any_origin or self.allow_credentials:
                response.headers["Vary"] = "Origin"
        elif origin:
            logger.warning(
                "CORS request from disallowed origin",
                origin=origin,
                path=request.url.path,
            )

        return response

    def _preflight_response(self, origin: str) -> Response:
        headers = {
            "Access-Control-Allow-Origin": self._allow_origin_value(origin),
            "Access-Control-Allow-Methods": ", ".join(self.allow_methods),
            "Access-Control-Allow-Headers": ", ".join(self.allow_headers),
            "Access-Control-Max-Age": str(self.max_age),
        }

        if self.allow_credentials:
            headers["Access-Control-Allow-Credentials"] = "true"

        logger.debug("CORS preflight request handled", origin=origin)

        return Response(status_code=204, headers=headers)
