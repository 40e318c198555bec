from __future__ import annotations


class PortUnavailableError(Exception):
    """Raised when the listen port cannot be bound (usually already in use)."""

    def __init__(self, host: str, port: int, reason: str = "address already in use"):
        super().__init__(f"cannot bind {host}:{port}: {reason}")
        self.host = host
        self.port = port
        self.reason = reason
