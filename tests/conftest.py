"""Shared fixtures for the docker-mcp test suite.

FakeSession stands in for the docker.APIClient transport so no daemon is
needed; responses are routed on (method, path) with the query stripped.
"""

import json
import logging
from urllib.parse import urlsplit

import pytest
import requests

from docker_mcp.config import ConnectionSettings
from docker_mcp.connector.scheduler import ManualScheduler
from docker_mcp.connector.state_store import StateStore
from docker_mcp.docker_client.client import DockerApiClient
from docker_mcp.utils.logger import PACKAGE_LOGGER


class FakeResponse:
    def __init__(self, status_code=200, body=None):
        self.status_code = status_code
        if body is None:
            self.content = b''
        elif isinstance(body, bytes):
            self.content = body
        elif isinstance(body, str):
            self.content = body.encode('utf-8')
        else:
            self.content = json.dumps(body).encode('utf-8')

    @property
    def text(self):
        return self.content.decode('utf-8', errors='replace')


class FakeSession:
    """Records requests and answers from a route table."""

    base_url = 'http+docker://localhost'

    def __init__(self):
        self.routes = {}
        self.requests = []
        self.closed = False

    def route(self, method, path, status=200, body=None):
        self.routes[(method, path)] = FakeResponse(status, body)

    def route_sequence(self, method, path, *responses):
        """Answer with each (status, body) in turn, repeating the last."""
        self.routes[(method, path)] = [FakeResponse(status, body) for status, body in responses]

    def fail(self, method, path, error=None):
        self.routes[(method, path)] = error or requests.exceptions.ConnectionError(
            'Connection refused'
        )

    def request(self, method, url, data=None, headers=None, timeout=None):
        parts = urlsplit(url)
        self.requests.append({
            'method': method,
            'url': url,
            'path': parts.path,
            'query': parts.query,
            'data': data,
            'headers': headers,
        })
        # strip the /v1.41 prefix
        path = '/' + parts.path.split('/', 2)[2]
        result = self.routes.get((method, path))
        if result is None:
            return FakeResponse(404, {'message': f'page not found: {path}'})
        if isinstance(result, list):
            result = result.pop(0) if len(result) > 1 else result[0]
        if isinstance(result, Exception):
            raise result
        return result

    def paths(self):
        return [(r['method'], '/' + r['path'].split('/', 2)[2]) for r in self.requests]

    def close(self):
        self.closed = True


VERSION_BODY = {
    'Version': '24.0.7',
    'ApiVersion': '1.43',
    'MinAPIVersion': '1.12',
    'Platform': {'Name': 'Docker Engine - Community'},
    'Os': 'linux',
    'Arch': 'amd64',
}


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def healthy_session(session):
    session.route('GET', '/_ping', body='OK')
    session.route('GET', '/version', body=VERSION_BODY)
    return session


@pytest.fixture
def settings():
    return ConnectionSettings()


@pytest.fixture
def client(settings, session):
    return DockerApiClient(settings, session=session)


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def state_path(tmp_path):
    return tmp_path / 'docker-mcp-config.json'


@pytest.fixture
def state_store(state_path):
    return StateStore(str(state_path))


@pytest.fixture(autouse=True)
def reset_package_logger():
    """The CLI installs handlers on the package logger; undo that per test."""
    yield
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
