import os
from starlette.config import Config


class ConfigService:
    def __init__(self, environ=None):
        self.config = Config(environ=environ if environ is not None else os.environ)

    def get(self, key: str, default=None):
        """Returns the value of a given config key."""
        return self.config(key, default=default)

    def get_float(self, key: str, default: float) -> float:
        return self.config(key, cast=float, default=default)

    def get_bool(self, key: str, default: bool = False) -> bool:
        return self.config(key, cast=bool, default=default)


_config_service_instance: ConfigService | None = None

def get_config_service() -> ConfigService:
    global _config_service_instance
    if _config_service_instance is None:
        _config_service_instance = ConfigService()
    return _config_service_instance
