"""
Query string and response helpers for the Docker API client
"""
import json
import struct
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import quote

from docker.utils.json_stream import json_stream

# Multiplexed log frame header: stream type, 3 padding bytes, big-endian size
_FRAME_HEADER = struct.Struct('>BxxxL')
_STREAM_TYPES = (0, 1, 2)


def encode_filters(filters: Optional[Dict[str, Any]]) -> Optional[str]:
    """JSON-encode a filter map for the ``filters`` query parameter

    Args:
        filters: Filter map, e.g. ``{"status": ["running"]}``

    Returns:
        Encoded JSON text, or None when there is nothing to filter on
    """
    if not filters:
        return None
    return json.dumps(filters, separators=(',', ':'))


def encode_options(options: Optional[Dict[str, Any]]) -> List[Tuple[str, str]]:
    """Encode option values the way the Engine expects them

    Booleans are sent by presence: ``key=1`` when true, left out when false.
    None values are left out; everything else is sent as text.
    """
    pairs = []
    for key, value in (options or {}).items():
        if isinstance(value, bool):
            if value:
                pairs.append((key, '1'))
        elif value is not None:
            pairs.append((key, str(value)))
    return pairs


def build_query(options: Optional[Dict[str, Any]] = None,
                filters: Optional[Dict[str, Any]] = None) -> str:
    """Build a URL-escaped query string

    Args:
        options: Plain options, encoded with ``encode_options``
        filters: Filter map, JSON-encoded into ``filters``

    Returns:
        Query string without the leading ``?`` (empty if nothing to send)
    """
    pairs = encode_options(options)
    encoded_filters = encode_filters(filters)
    if encoded_filters is not None:
        pairs.append(('filters', encoded_filters))
    return '&'.join(f"{quote(key, safe='')}={quote(value, safe='')}" for key, value in pairs)


def with_query(path: str, query: str) -> str:
    return f"{path}?{query}" if query else path


def merge_options(defaults: Dict[str, Any], options: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Overlay caller options on the endpoint defaults"""
    merged = dict(defaults)
    if options:
        merged.update(options)
    return merged


def demux_log_stream(data: bytes) -> str:
    """Decode container log output

    Containers without a TTY send frames prefixed by an 8-byte header; TTY
    containers send the raw stream. Anything that does not parse as frames
    is returned as plain text.

    Args:
        data: Raw response body

    Returns:
        Log text with stdout and stderr interleaved in arrival order
    """
    if not data:
        return ''

    chunks = []
    offset = 0
    while offset < len(data):
        if len(data) - offset < _FRAME_HEADER.size:
            return data.decode('utf-8', errors='replace')
        stream_type, size = _FRAME_HEADER.unpack_from(data, offset)
        if stream_type not in _STREAM_TYPES:
            return data.decode('utf-8', errors='replace')
        offset += _FRAME_HEADER.size
        chunks.append(data[offset:offset + size])
        offset += size

    return b''.join(chunks).decode('utf-8', errors='replace')


def parse_json_stream(text: str) -> List[Any]:
    """Parse a stream of JSON messages (e.g. image pull progress)

    Messages may be separated by newlines or simply concatenated.

    Raises:
        docker.errors.StreamParseError: if trailing data is not valid JSON
    """
    return list(json_stream([text]))


def format_ports(ports: Optional[List[Dict[str, Any]]]) -> str:
    """Format the ``Ports`` list of a container summary

    Args:
        ports: Port entries as returned by ``/containers/json``

    Returns:
        e.g. ``"8080->80/tcp, 443/tcp"`` or ``"None"``
    """
    if not ports:
        return 'None'

    formatted = []
    for port in ports:
        public = f"{port['PublicPort']}->" if port.get('PublicPort') else ''
        private = port.get('PrivatePort', '')
        formatted.append(f"{public}{private}/{port.get('Type') or 'tcp'}")
    return ', '.join(formatted)


def short_id(identifier: str) -> str:
    """First 12 characters of a container or image ID, sans ``sha256:``"""
    if identifier.startswith('sha256:'):
        identifier = identifier[len('sha256:'):]
    return identifier[:12]
