"""
Configuration Management

Unified configuration for the APRE reporting dashboard. Settings are grouped
into dataclass sections and loaded once from an optional .config.json file,
with APRE_* environment variables taking precedence over file values.
"""

import os
import json
import logging
import logging.handlers
from pathlib import Path
from typing import Dict, List, Optional, Any
from dataclasses import dataclass, field
from enum import Enum


class Environment(Enum):
    """Supported environments"""
    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"


class LogLevel(Enum):
    """Supported log levels"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class DatabaseConfig:
    """MongoDB connection settings"""
    uri: str = "mongodb://localhost:27017"
    database: str = "apre"
    server_selection_timeout_ms: int = 5000
    connect_timeout_ms: int = 10000
    max_pool_size: int = 10


@dataclass
class LoggingConfig:
    """Logging configuration"""
    level: LogLevel = LogLevel.INFO
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"
    logs_dir: Path = field(default_factory=lambda: Path("data/logs"))
    file_rotation_size: int = 10 * 1024 * 1024  # 10MB
    file_retention_count: int = 5
    enable_console: bool = True
    enable_file: bool = False


@dataclass
class WebConfig:
    """Web server configuration"""
    host: str = "0.0.0.0"
    port: int = 3000
    reload: bool = False
    log_level: str = "info"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    api_prefix: str = "/api"


@dataclass
class ClientConfig:
    """Settings used by the report view components"""
    api_base_url: str = "http://localhost:3000/api"
    request_timeout: float = 10.0


class UnifiedConfig:
    """
    Central configuration management system
    Implements singleton pattern and environment-aware configuration
    Loads from .config.json file with environment variable overrides
    """

    _instance: Optional['UnifiedConfig'] = None
    _initialized: bool = False
    _config_file = Path(".config.json")
    _json_config: Optional[Dict[str, Any]] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self._load_json_config()

        env_mode = self._get_config_value('environment', 'mode', default='development')
        if not env_mode or not isinstance(env_mode, str):
            env_mode = 'development'
        env_var = os.getenv('APRE_ENVIRONMENT')
        if env_var:
            env_mode = env_var
        self.environment = Environment(env_mode.lower())

        self.database = self._load_database_config()
        self.logging = self._load_logging_config()
        self.web = self._load_web_config()
        self.client = self._load_client_config()

        self._initialized = True

    def _load_json_config(self):
        """Load configuration from .config.json file"""
        if self._config_file.exists():
            try:
                with open(self._config_file, 'r', encoding='utf-8') as f:
                    self._json_config = json.load(f)
                logging.getLogger(__name__).info(f"Loaded configuration from {self._config_file}")
            except (json.JSONDecodeError, IOError) as e:
                logging.getLogger(__name__).warning(f"Error loading {self._config_file}: {e}. Using defaults.")
                self._json_config = None
        else:
            logging.getLogger(__name__).debug(f"Config file {self._config_file} not found. Using defaults.")
            self._json_config = None

    def _get_config_value(self, *keys, default=None):
        """
        Get a value from JSON config using nested keys
        Example: _get_config_value('database', 'uri', default='mongodb://localhost:27017')
        """
        if not self._json_config:
            return default

        value = self._json_config
        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        # Skip documentation keys (keys starting with _)
        if isinstance(value, dict):
            return {k: v for k, v in value.items() if not k.startswith('_')} if value else default

        return value if value is not None else default

    def _load_database_config(self) -> DatabaseConfig:
        """Load database configuration from JSON and environment overrides"""
        db_config = self._get_config_value('database', default={})
        config = DatabaseConfig()

        config.uri = os.getenv('APRE_MONGO_URI', db_config.get('uri', config.uri))
        config.database = os.getenv('APRE_MONGO_DATABASE', db_config.get('database', config.database))
        config.server_selection_timeout_ms = int(os.getenv(
            'APRE_MONGO_SERVER_SELECTION_TIMEOUT_MS',
            str(db_config.get('server_selection_timeout_ms', config.server_selection_timeout_ms))
        ))
        config.connect_timeout_ms = int(db_config.get('connect_timeout_ms', config.connect_timeout_ms))
        config.max_pool_size = int(os.getenv(
            'APRE_MONGO_MAX_POOL_SIZE',
            str(db_config.get('max_pool_size', config.max_pool_size))
        ))

        return config

    def _load_logging_config(self) -> LoggingConfig:
        """Load logging configuration from JSON and environment overrides"""
        log_config = self._get_config_value('logging', default={})
        config = LoggingConfig()

        log_level = os.getenv('APRE_LOG_LEVEL', log_config.get('level', 'INFO'))
        try:
            config.level = LogLevel(log_level.upper())
        except ValueError:
            config.level = LogLevel.INFO

        config.format = os.getenv('APRE_LOG_FORMAT', log_config.get('format', config.format))
        config.date_format = log_config.get('date_format', config.date_format)
        config.logs_dir = Path(os.getenv('APRE_LOGS_DIR', log_config.get('logs_dir', 'data/logs')))
        rotation_mb = log_config.get('file_rotation_size_mb', 10)
        config.file_rotation_size = rotation_mb * 1024 * 1024
        config.file_retention_count = log_config.get('file_retention_count', 5)
        config.enable_console = log_config.get('enable_console', True)
        config.enable_file = log_config.get('enable_file', False)

        # Adjust for environment
        if self.environment == Environment.DEVELOPMENT:
            config.level = LogLevel.DEBUG
        elif self.environment == Environment.PRODUCTION:
            config.level = LogLevel.INFO
            config.enable_console = False

        return config

    def _load_web_config(self) -> WebConfig:
        """Load web configuration from JSON and environment overrides"""
        web_config = self._get_config_value('web', default={})
        config = WebConfig()

        config.host = os.getenv('APRE_WEB_HOST', web_config.get('host', config.host))
        config.port = int(os.getenv('APRE_WEB_PORT', str(web_config.get('port', config.port))))
        config.reload = web_config.get('reload', False)
        config.log_level = os.getenv('APRE_WEB_LOG_LEVEL', web_config.get('log_level', 'info'))
        config.cors_origins = web_config.get('cors_origins', ['*'])
        config.api_prefix = web_config.get('api_prefix', config.api_prefix)

        if self.environment == Environment.DEVELOPMENT:
            config.reload = True
            config.log_level = "debug"

        return config

    def _load_client_config(self) -> ClientConfig:
        """Load report client configuration from JSON and environment overrides"""
        client_config = self._get_config_value('client', default={})
        config = ClientConfig()

        config.api_base_url = os.getenv(
            'APRE_API_BASE_URL', client_config.get('api_base_url', config.api_base_url)
        ).rstrip('/')
        config.request_timeout = float(os.getenv(
            'APRE_REQUEST_TIMEOUT', str(client_config.get('request_timeout', config.request_timeout))
        ))

        return config

    def is_production(self) -> bool:
        """Check if running in production mode"""
        return self.environment == Environment.PRODUCTION


# Global configuration instance (singleton)
config = UnifiedConfig()


def get_config() -> UnifiedConfig:
    """Get the global configuration instance"""
    return config


def setup_logging():
    """Setup logging configuration based on current config"""
    log_config = config.logging
    root_logger = logging.getLogger()

    logging.basicConfig(
        level=getattr(logging, log_config.level.value),
        format=log_config.format,
        datefmt=log_config.date_format,
        force=True
    )

    if log_config.enable_file:
        log_config.logs_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_config.logs_dir / "apre.log"

        existing_file_handler = None
        for handler in root_logger.handlers:
            if isinstance(handler, logging.handlers.RotatingFileHandler):
                if handler.baseFilename == str(log_file.resolve()):
                    existing_file_handler = handler
                    break

        if existing_file_handler is None:
            file_handler = logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=log_config.file_rotation_size,
                backupCount=log_config.file_retention_count
            )
            file_handler.setFormatter(logging.Formatter(log_config.format, log_config.date_format))
            root_logger.addHandler(file_handler)

    # Disable console logging in production if configured
    if not log_config.enable_console and config.is_production():
        root_logger.handlers = [h for h in root_logger.handlers
                                if isinstance(h, logging.handlers.RotatingFileHandler)]
