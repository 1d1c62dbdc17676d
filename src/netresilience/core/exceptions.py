"""Custom exceptions for the network resilience engine."""


class NetResilienceError(Exception):
    """Base exception for all network resilience errors."""

    def __init__(self, message: str, details: str | None = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class ValidationError(NetResilienceError):
    """Malformed topology input."""

    pass


class InvalidNodeReference(NetResilienceError):
    """An edge or a query names a node id absent from the graph."""

    def __init__(self, node_id: object, context: str | None = None):
        message = f"Unknown node id: {node_id!r}"
        super().__init__(message, context)
        self.node_id = node_id
        self.context = context


class EmptyGraph(NetResilienceError):
    """Operation requires at least one node."""

    def __init__(self, operation: str):
        message = f"{operation} requires a graph with at least one node"
        super().__init__(message)
        self.operation = operation


class TopologyFileError(NetResilienceError):
    """Topology file could not be read or written."""

    pass
