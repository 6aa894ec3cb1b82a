"""
Custom exceptions for docker-mcp
"""


class DockerMcpException(Exception):
    """Base exception for docker-mcp"""
    pass


class TransportException(DockerMcpException):
    """Docker daemon could not be reached (refused, socket error, timeout)"""
    pass


class APIException(DockerMcpException):
    """Docker API answered with a non-2xx status"""

    def __init__(self, message, status_code=None, body=None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ResponseParseException(DockerMcpException):
    """Docker API response body was not valid JSON"""

    def __init__(self, message, raw=None):
        super().__init__(message)
        self.raw = raw


class NotConnectedException(DockerMcpException):
    """Operation attempted while the connector is disconnected"""
    pass


class ConfigurationException(DockerMcpException):
    """Configuration related exceptions"""
    pass
