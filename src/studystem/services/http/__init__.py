"""HTTP surface for the portal API."""

from .server import app, invoke_api_function, list_api_functions, run_local_server, status_for

__all__ = [
    "app",
    "invoke_api_function",
    "list_api_functions",
    "run_local_server",
    "status_for",
]
