"""
Best-effort JSON persistence of connector state
"""
import json
import os
from typing import Any, Dict

from docker_mcp.utils.logger import get_logger

logger = get_logger(__name__)


class StateStore:
    """Reads and writes the connector's JSON state file

    Failures are logged and never raised: losing the last-connection record
    must not break a connection.
    """

    def __init__(self, path: str):
        self.path = path

    def load(self) -> Dict[str, Any]:
        """Load state from file

        Returns:
            Parsed state, or an empty dict if the file is missing or unreadable
        """
        if not os.path.exists(self.path):
            return {}

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                state = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load configuration: {e}")
            return {}

        if not isinstance(state, dict):
            logger.error(f"Ignoring {self.path}: expected a JSON object")
            return {}

        logger.info(f"Loaded configuration from {self.path}")
        return state

    def save(self, state: Dict[str, Any]) -> bool:
        """Write state to file

        Returns:
            True if the file was written
        """
        try:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump(state, f, indent=2)
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to save configuration: {e}")
            return False

        logger.info(f"Configuration saved to {self.path}")
        return True

    def record_connection(self, connection_info: Dict[str, Any]) -> bool:
        """Store ``connection_info`` as ``lastConnection``, keeping other keys"""
        state = self.load()
        state['lastConnection'] = connection_info
        return self.save(state)
