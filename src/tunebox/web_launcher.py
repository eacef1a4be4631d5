"""
Web server launcher for Tunebox.

Checks the configured port and runs the FastAPI backend under uvicorn.
"""

import socket

import uvicorn
from loguru import logger

from .core.config import ServerConfig

APP_FACTORY = "web.backend.main:create_app"


def is_port_available(host: str, port: int) -> bool:
    """
    Check if a port is available for binding.

    Args:
        host: Interface to bind
        port: Port number to check

    Returns:
        True if port is available, False if already in use
    """
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        try:
            s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            s.settimeout(1.0)  # Add timeout to avoid hanging
            s.bind((host, port))
            return True
        except OSError:
            return False


def check_server_prerequisites(config: ServerConfig) -> tuple[bool, str]:
    """
    Validate that the server can start.

    Returns:
        (True, "") if all checks pass
        (False, "error message") with specific error if any check fails
    """
    if not 0 < config.port < 65536:
        return False, f"Invalid port {config.port}."

    if not is_port_available(config.host, config.port):
        return False, f"Port {config.port} is already in use."

    return True, ""


def run_server(config: ServerConfig) -> None:
    """Run uvicorn in the foreground until interrupted."""
    logger.info(f"Starting Tunebox API on http://{config.host}:{config.port}")
    uvicorn.run(
        APP_FACTORY,
        factory=True,
        host=config.host,
        port=config.port,
        reload=config.reload,
    )
