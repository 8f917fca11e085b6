from .auth_middleware import AuthMiddleware
from .error_handler import ExceptionMiddleware
from .middlewares_registration import register_middlewares
