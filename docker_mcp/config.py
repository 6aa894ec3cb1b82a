"""
Configuration management for docker-mcp
"""
import os
import sys
from dataclasses import dataclass
from typing import Optional

import yaml

from docker_mcp.utils.exceptions import ConfigurationException
from docker_mcp.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_SOCKET_PATH = '/var/run/docker.sock'
DEFAULT_API_VERSION = 'v1.41'
DEFAULT_STATE_FILE = 'docker-mcp-config.json'


@dataclass(frozen=True)
class ConnectionSettings:
    """Where and how to reach the Docker Engine. Immutable once built."""

    socket_path: str = DEFAULT_SOCKET_PATH
    host: str = 'localhost'
    port: int = 2375
    use_socket: bool = True
    version: str = DEFAULT_API_VERSION
    timeout: int = 60

    def __post_init__(self):
        if not self.version.startswith('v'):
            object.__setattr__(self, 'version', f"v{self.version}")

    @property
    def via_socket(self) -> bool:
        """Unix sockets are not used on Windows"""
        return self.use_socket and sys.platform != 'win32'

    @property
    def base_url(self) -> str:
        if self.via_socket:
            return f"unix://{self.socket_path}"
        return f"tcp://{self.host}:{self.port}"


class ConnectorConfig:
    """YAML-backed configuration with environment overrides"""

    def __init__(self, config_path: Optional[str] = None):
        """Initialize configuration

        Args:
            config_path: Path to config file (default: ~/.docker-mcp/config.yaml)
        """
        self.config_path = config_path or os.getenv(
            'DOCKER_MCP_CONFIG',
            os.path.expanduser('~/.docker-mcp/config.yaml')
        )
        self.config = self._load_config()

    def _load_config(self) -> dict:
        """Load configuration from file"""
        default_config = {
            'docker': {
                'socket': DEFAULT_SOCKET_PATH,
                'host': 'localhost',
                'port': 2375,
                'use_socket': True,
                'version': DEFAULT_API_VERSION,
                'timeout': 60
            },
            'connector': {
                'auto_reconnect': True,
                'reconnect_interval': 5.0,
                'max_retries': 10,
                'state_file': DEFAULT_STATE_FILE
            },
            'logging': {
                'level': 'INFO',
                'file': None,
                'max_size': 10485760,  # 10MB
                'backup_count': 3
            }
        }

        if not os.path.exists(self.config_path):
            return default_config

        try:
            with open(self.config_path, 'r') as f:
                file_config = yaml.safe_load(f) or {}
            if not isinstance(file_config, dict):
                raise ConfigurationException(
                    f"Top level of {self.config_path} must be a mapping"
                )
            return self._merge_config(default_config, file_config)
        except (OSError, yaml.YAMLError, ConfigurationException) as e:
            logger.warning(f"Failed to load config file {self.config_path}: {e}")
            return default_config

    def _merge_config(self, default: dict, override: dict) -> dict:
        """Recursively merge configuration dictionaries"""
        result = default.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_config(result[key], value)
            else:
                result[key] = value
        return result

    @property
    def docker_socket(self) -> str:
        return self.config['docker']['socket']

    @property
    def docker_host(self) -> str:
        return os.getenv('DOCKER_MCP_HOST', self.config['docker']['host'])

    @property
    def docker_port(self) -> int:
        return int(os.getenv('DOCKER_MCP_PORT', self.config['docker']['port']))

    @property
    def use_socket(self) -> bool:
        return bool(self.config['docker']['use_socket'])

    @property
    def api_version(self) -> str:
        return str(self.config['docker']['version'])

    @property
    def docker_timeout(self) -> int:
        return int(self.config['docker']['timeout'])

    @property
    def auto_reconnect(self) -> bool:
        return bool(self.config['connector']['auto_reconnect'])

    @property
    def reconnect_interval(self) -> float:
        """Seconds between reconnect attempts"""
        return float(self.config['connector']['reconnect_interval'])

    @property
    def max_retries(self) -> int:
        return int(self.config['connector']['max_retries'])

    @property
    def state_file(self) -> str:
        """Path of the JSON file holding the last connection"""
        return os.path.join(os.getcwd(), self.config['connector']['state_file'])

    @property
    def log_level(self) -> str:
        return os.getenv('DOCKER_MCP_LOG_LEVEL', self.config['logging']['level'])

    @property
    def log_file(self) -> Optional[str]:
        return self.config['logging']['file']

    @property
    def log_max_size(self) -> int:
        return self.config['logging']['max_size']

    @property
    def log_backup_count(self) -> int:
        return self.config['logging']['backup_count']

    def connection_settings(self, **overrides) -> ConnectionSettings:
        """Build the immutable connection settings

        Args:
            **overrides: ConnectionSettings fields that win over the file
                (None values are ignored)

        Returns:
            ConnectionSettings instance
        """
        values = {
            'socket_path': self.docker_socket,
            'host': self.docker_host,
            'port': self.docker_port,
            'use_socket': self.use_socket,
            'version': self.api_version,
            'timeout': self.docker_timeout
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return ConnectionSettings(**values)
