from starlette.middleware.base import BaseHTTPMiddleware
from fastapi import Request
from jose import jwt, JWTError
from ..core import logger

class AuthMiddleware(BaseHTTPMiddleware):
    """Puts the email from a valid bearer token into request.state.user_email."""

    def __init__(self, app, secret_key: str | None, algorithm: str = "HS256"):
        super().__init__(app)
        self.secret_key = secret_key
        self.algorithm = algorithm

    async def dispatch(self, request: Request, call_next):
        request.state.user_email = None
        auth_header = request.headers.get("Authorization")
        if self.secret_key and auth_header and auth_header.startswith("Bearer "):
            token = auth_header.split(" ", 1)[1]
            try:
                payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
                request.state.user_email = payload.get("sub")
            except JWTError as e:
                logger.info("Rejected bearer token: %s", e)

        response = await call_next(request)
        return response
