from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware
from ..core import ConfigService, get_config_service
from .auth_middleware import AuthMiddleware
from .error_handler import ExceptionMiddleware

def register_middlewares(app: FastAPI, config: ConfigService | None = None):
    config = config or get_config_service()

    app.add_middleware(AuthMiddleware, secret_key=config.get("SECRET_KEY"))
    app.add_middleware(ExceptionMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
