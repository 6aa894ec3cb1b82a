"""
Connection management for the Docker Engine API

The connector owns one DockerApiClient and tracks whether the daemon is
reachable. A failed connect schedules a bounded number of fixed-interval
retries through an injected scheduler.
"""
import itertools
import threading
from functools import partial
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from docker_mcp.config import ConnectionSettings, ConnectorConfig
from docker_mcp.connector.scheduler import ScheduledCall, TimerScheduler
from docker_mcp.connector.state_store import StateStore
from docker_mcp.docker_client.client import DockerApiClient
from docker_mcp.utils.exceptions import DockerMcpException, NotConnectedException
from docker_mcp.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ConnectionInfo:
    """What the daemon reported when the connection was made"""

    version: Optional[str]
    api_version: Optional[str]
    platform: Any
    connected_at: str

    @classmethod
    def from_version(cls, version_info: Dict[str, Any]) -> 'ConnectionInfo':
        """Build from a ``/version`` response"""
        return cls(
            version=version_info.get('Version'),
            api_version=version_info.get('ApiVersion'),
            platform=version_info.get('Platform'),
            connected_at=datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'version': self.version,
            'apiVersion': self.api_version,
            'platform': self.platform,
            'connectedAt': self.connected_at
        }


class DockerMcpConnector:
    """Connected/Disconnected state machine around a DockerApiClient"""

    def __init__(
        self,
        client: DockerApiClient,
        state_store: StateStore,
        scheduler=None,
        auto_reconnect: bool = True,
        reconnect_interval: float = 5.0,
        max_retries: int = 10
    ):
        """Initialize the connector

        Args:
            client: API client used for liveness checks and handed out by get_client
            state_store: Where the last connection is recorded
            scheduler: Delayed-callback scheduler (default: TimerScheduler)
            auto_reconnect: Retry failed connects and reconnect on lost liveness
            reconnect_interval: Seconds between retries
            max_retries: Retries before giving up (0 disables retrying)
        """
        if max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if reconnect_interval < 0:
            raise ValueError("reconnect_interval must be >= 0")

        self.docker = client
        self.state_store = state_store
        self.scheduler = scheduler or TimerScheduler()
        self.auto_reconnect = auto_reconnect
        self.reconnect_interval = reconnect_interval
        self.max_retries = max_retries

        self.connected = False
        self.connection_info: Optional[ConnectionInfo] = None
        self.retry_count = 0
        self._pending_retry: Optional[ScheduledCall] = None
        self._retry_token = None
        self._retry_tokens = itertools.count(1)
        self._lock = threading.RLock()

    @classmethod
    def from_config(cls, config: ConnectorConfig,
                    settings: Optional[ConnectionSettings] = None,
                    scheduler=None) -> 'DockerMcpConnector':
        """Build a connector and its client from configuration

        Args:
            config: Loaded ConnectorConfig
            settings: Connection settings (default: ``config.connection_settings()``)
            scheduler: Delayed-callback scheduler
        """
        client = DockerApiClient(settings or config.connection_settings())
        return cls(
            client,
            StateStore(config.state_file),
            scheduler=scheduler,
            auto_reconnect=config.auto_reconnect,
            reconnect_interval=config.reconnect_interval,
            max_retries=config.max_retries
        )

    def connect(self) -> bool:
        """Ping the daemon and record the connection

        Returns:
            True if connected; False if the daemon could not be reached (a
            retry may have been scheduled)
        """
        with self._lock:
            try:
                logger.info("Attempting to connect to Docker Engine...")
                ping_response = self.docker.ping()
                logger.debug(f"Docker API ping response: {ping_response}")
                version_info = self.docker.get_version()
            except DockerMcpException as e:
                logger.error(f"Failed to connect to Docker Engine: {e}")
                self._schedule_retry()
                return False

            self.connection_info = ConnectionInfo.from_version(version_info)
            self.connected = True
            self.state_store.record_connection(self.connection_info.to_dict())
            self.retry_count = 0

            logger.info(
                f"Connected to Docker Engine {self.connection_info.version}, "
                f"API {self.connection_info.api_version}"
            )
            return True

    def _schedule_retry(self):
        if not self.auto_reconnect:
            return
        if self.retry_count >= self.max_retries:
            logger.error(f"Maximum retry attempts ({self.max_retries}) reached. Giving up.")
            return

        self.retry_count += 1
        logger.info(
            f"Retrying connection ({self.retry_count}/{self.max_retries}) "
            f"in {self.reconnect_interval:g} seconds..."
        )
        self.cancel_reconnect()
        token = next(self._retry_tokens)
        self._retry_token = token
        self._pending_retry = self.scheduler.schedule(
            self.reconnect_interval, partial(self._run_retry, token)
        )

    def _run_retry(self, token: int):
        """Scheduled entry point; a retry that was cancelled or replaced while
        waiting for the lock does nothing"""
        with self._lock:
            if self._pending_retry is None or token != self._retry_token:
                logger.debug("Skipping stale reconnect attempt")
                return False
            self._pending_retry = None
            self._retry_token = None
            return self.connect()

    def cancel_reconnect(self) -> bool:
        """Cancel a pending reconnect attempt

        Returns:
            True if one was pending
        """
        with self._lock:
            pending = self._pending_retry
            self._pending_retry = None
            self._retry_token = None
            if pending is None or not pending.pending:
                return False
            pending.cancel()
            logger.info("Cancelled pending reconnect")
            return True

    @property
    def reconnect_pending(self) -> bool:
        return self._pending_retry is not None and self._pending_retry.pending

    def disconnect(self):
        """Drop the connection and any pending reconnect"""
        with self._lock:
            self.cancel_reconnect()
            if self.connected:
                logger.info("Disconnecting from Docker Engine...")
            self._mark_disconnected()

    def _mark_disconnected(self):
        self.connected = False
        self.connection_info = None

    def check_connection(self) -> bool:
        """Re-check liveness of a connected daemon

        Returns:
            False without any request when disconnected; otherwise whether
            the daemon answered (or whether the reconnect succeeded)
        """
        with self._lock:
            if not self.connected:
                return False

            try:
                self.docker.ping()
                return True
            except DockerMcpException as e:
                logger.error(f"Connection check failed: {e}")
                self._mark_disconnected()

            if self.auto_reconnect:
                logger.info("Attempting to reconnect...")
                return self.connect()
            return False

    def get_connection_info(self) -> Optional[ConnectionInfo]:
        return self.connection_info

    def get_client(self) -> DockerApiClient:
        """Get the API client

        Raises:
            NotConnectedException: if not connected
        """
        if not self.connected:
            raise NotConnectedException("Not connected to Docker Engine")
        return self.docker

    def close(self):
        """Disconnect and release the client's HTTP session"""
        self.disconnect()
        self.docker.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
