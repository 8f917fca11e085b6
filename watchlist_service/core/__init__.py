from .config_service import ConfigService, get_config_service
from .logger import logger
