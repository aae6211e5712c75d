"""A networked rock-paper-scissors match server and client over asyncio streams."""

__version__ = "0.1.0"
__all__ = [
    "types",
    "wire",
    "server_match",
    "server_client",
    "server_tournament",
    "server",
    "client_util",
    "client_match",
    "client",
]