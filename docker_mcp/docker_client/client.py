"""
Docker Engine API client for docker-mcp

One method per endpoint. Every call goes through ``request``, which sends a
single HTTP request to ``/<version><path>`` and maps the response to a
return value or an exception.
"""
import json
from typing import Any, Dict, List, Optional

import docker
from docker.errors import DockerException, StreamParseError
import requests

from docker_mcp.config import ConnectionSettings
from docker_mcp.docker_client.utils import (
    build_query,
    demux_log_stream,
    merge_options,
    parse_json_stream,
    with_query
)
from docker_mcp.utils.exceptions import (
    APIException,
    ConfigurationException,
    ResponseParseException,
    TransportException
)
from docker_mcp.utils.logger import get_logger

logger = get_logger(__name__)

REMOVE_DEFAULTS = {'v': False, 'force': False, 'link': False}
LOG_DEFAULTS = {'stdout': True, 'stderr': True}


class DockerApiClient:
    """Thin client for the Docker Engine REST API"""

    def __init__(self, settings: Optional[ConnectionSettings] = None, session=None):
        """Initialize the client

        Args:
            settings: Connection settings (default: local socket, API v1.41)
            session: requests-compatible session with a ``base_url``
                (default: a ``docker.APIClient`` for ``settings.base_url``)
        """
        self.settings = settings or ConnectionSettings()
        self._session = session if session is not None else self._open_session()

    def _open_session(self):
        try:
            return docker.APIClient(
                base_url=self.settings.base_url,
                version=self.settings.version.lstrip('v'),
                timeout=self.settings.timeout
            )
        except DockerException as e:
            raise ConfigurationException(
                f"Invalid Docker connection settings ({self.settings.base_url}): {e}"
            ) from e

    def _url(self, path: str) -> str:
        return f"{self._session.base_url}/{self.settings.version}{path}"

    def request(self, method: str, path: str, body: Optional[Any] = None,
                query: str = '', decode: str = 'json') -> Any:
        """Send one request to the Docker API

        Args:
            method: HTTP method
            path: Endpoint path, e.g. ``/containers/json``
            body: JSON-serializable request body
            query: Encoded query string (see ``build_query``)
            decode: ``json``, ``jsonl``, ``text`` or ``bytes``

        Returns:
            Decoded response body; an empty JSON body decodes to ``{}``

        Raises:
            TransportException: the daemon could not be reached
            APIException: the status code is outside [200, 300)
            ResponseParseException: the body is not valid JSON
        """
        url = self._url(with_query(path, query))
        headers = {'Content-Type': 'application/json'}
        payload = None
        if body is not None:
            payload = json.dumps(body).encode('utf-8')
            headers['Content-Length'] = str(len(payload))

        logger.debug(f"{method} {url}")
        try:
            response = self._session.request(
                method,
                url,
                data=payload,
                headers=headers,
                timeout=self.settings.timeout
            )
        except (requests.exceptions.RequestException, OSError) as e:
            raise TransportException(f"Docker API request failed: {e}") from e

        raw = response.text if decode != 'bytes' else None

        if not 200 <= response.status_code < 300:
            error_text = response.text
            try:
                error_body = json.loads(error_text) if error_text else {}
            except ValueError:
                error_body = error_text
            raise APIException(
                f"Docker API Error: {response.status_code} {json.dumps(error_body)}",
                status_code=response.status_code,
                body=error_body
            )

        if decode == 'bytes':
            return response.content
        if decode == 'text':
            return raw

        try:
            if decode == 'jsonl':
                return parse_json_stream(raw)
            return json.loads(raw) if raw else {}
        except (ValueError, StreamParseError) as e:
            raise ResponseParseException(
                f"Failed to parse Docker API response: {e}. Raw data: {raw}",
                raw=raw
            ) from e

    # Containers

    def list_containers(self, filters: Optional[Dict[str, Any]] = None,
                        all: bool = False) -> List[Dict[str, Any]]:
        """List containers (running only unless ``all``)"""
        query = build_query({'all': all}, filters)
        return self.request('GET', '/containers/json', query=query)

    def get_container(self, container_id: str) -> Dict[str, Any]:
        """Inspect a container by ID or name"""
        return self.request('GET', f"/containers/{container_id}/json")

    def start_container(self, container_id: str) -> Dict[str, Any]:
        return self.request('POST', f"/containers/{container_id}/start")

    def stop_container(self, container_id: str, timeout: int = 10) -> Dict[str, Any]:
        """Stop a container

        Args:
            container_id: Container ID or name
            timeout: Seconds to wait before the daemon kills the container
        """
        query = build_query({'t': timeout})
        return self.request('POST', f"/containers/{container_id}/stop", query=query)

    def remove_container(self, container_id: str,
                         options: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Remove a container

        Args:
            container_id: Container ID or name
            options: ``v``, ``force`` and ``link`` flags, merged over all-false
                defaults
        """
        query = build_query(merge_options(REMOVE_DEFAULTS, options))
        return self.request('DELETE', f"/containers/{container_id}", query=query)

    def create_container(self, config: Dict[str, Any],
                         name: Optional[str] = None) -> Dict[str, Any]:
        """Create a container

        Args:
            config: Container configuration body (``Image``, ``HostConfig``, ...)
            name: Optional container name

        Returns:
            ``{"Id": ..., "Warnings": [...]}``
        """
        query = build_query({'name': name})
        return self.request('POST', '/containers/create', body=config, query=query)

    def get_container_logs(self, container_id: str,
                           options: Optional[Dict[str, Any]] = None) -> str:
        """Fetch container logs

        Args:
            container_id: Container ID or name
            options: ``stdout``, ``stderr``, ``since``, ``until``,
                ``timestamps``, ``tail``; merged over stdout+stderr defaults.
                ``follow`` is not supported, the call returns once.

        Returns:
            Log text
        """
        options = merge_options(LOG_DEFAULTS, options)
        options.pop('follow', None)
        query = build_query(options)
        data = self.request('GET', f"/containers/{container_id}/logs",
                            query=query, decode='bytes')
        return demux_log_stream(data)

    # Images

    def list_images(self, filters: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        return self.request('GET', '/images/json', query=build_query(filters=filters))

    def pull_image(self, name: str, tag: str = 'latest') -> List[Dict[str, Any]]:
        """Pull an image from its registry

        Returns:
            Progress messages reported by the daemon

        Raises:
            APIException: the daemon reported an error in the progress stream
        """
        query = build_query({'fromImage': name, 'tag': tag})
        messages = self.request('POST', '/images/create', query=query, decode='jsonl')
        for message in messages:
            if isinstance(message, dict) and message.get('error'):
                raise APIException(
                    f"Failed to pull {name}:{tag}: {message['error']}",
                    status_code=200,
                    body=message
                )
        logger.info(f"Pulled image {name}:{tag}")
        return messages

    # Networks and volumes

    def list_networks(self, filters: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        return self.request('GET', '/networks', query=build_query(filters=filters))

    def list_volumes(self, filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """List volumes; the Engine wraps them in ``{"Volumes": [...], "Warnings": ...}``"""
        return self.request('GET', '/volumes', query=build_query(filters=filters))

    # System

    def get_system_info(self) -> Dict[str, Any]:
        return self.request('GET', '/info')

    def get_version(self) -> Dict[str, Any]:
        return self.request('GET', '/version')

    def ping(self) -> str:
        """Ping the daemon

        Returns:
            ``"OK"`` when the daemon is responding
        """
        return self.request('GET', '/_ping', decode='text')

    def close(self):
        """Close the underlying HTTP session"""
        try:
            self._session.close()
        except OSError as e:
            logger.warning(f"Error closing Docker API session: {e}")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
