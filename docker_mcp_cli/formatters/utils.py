"""
Value formatting for the demo CLI
"""
from datetime import datetime
from typing import Any, Dict, Optional


def format_size(size: Optional[int]) -> str:
    """Decimal units, as the docker CLI prints image sizes"""
    if size is None:
        return '-'
    value = float(size)
    for unit in ['B', 'kB', 'MB', 'GB']:
        if value < 1000.0:
            return f"{value:.3g}{unit}"
        value /= 1000.0
    return f"{value:.3g}TB"


def format_created(epoch: Optional[int]) -> str:
    """Local time for a ``Created`` epoch value"""
    if not epoch:
        return '-'
    return datetime.fromtimestamp(epoch).strftime('%Y-%m-%d %H:%M:%S')


def container_name(container: Dict[str, Any]) -> str:
    """First name of a container summary, without the leading slash"""
    names = container.get('Names') or []
    if not names:
        return '<unnamed>'
    return names[0].lstrip('/')


def platform_name(platform: Any) -> str:
    """``Platform`` is ``{"Name": ...}`` in version responses"""
    if isinstance(platform, dict):
        return platform.get('Name') or '-'
    return str(platform) if platform else '-'
