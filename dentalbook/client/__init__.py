"""Client side of the booking site: typed API client, retry wrapper and booking flow."""

__all__ = [
    "api",
    "booking",
    "errors",
    "network",
    "retry",
]
