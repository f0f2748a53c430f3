from sgas4py.user.client import TokenClient

__all__ = [
    "TokenClient",
]
