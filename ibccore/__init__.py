"""In-memory model of the IBC core: host, clients, connections, packet sending and timeouts."""

__version__ = "0.1.0"

__all__ = [
    "types",
    "errors",
    "codec",
    "validation",
    "chain",
    "packets",
    "client_interface",
    "paths",
    "storage",
    "host",
    "client",
    "merkle",
    "connection_lib",
    "connection_types",
    "channel_lib",
    "connection",
    "module_interface",
    "timeout",
    "send",
]