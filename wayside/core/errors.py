"""Fatal errors raised by the route search pipeline.

Each error records the pipeline stage that failed so callers can render a
message without inspecting the exception type.
"""


class PipelineError(Exception):
    """Base class for errors that abort a route search."""

    stage = "pipeline"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class EndpointResolutionFailed(PipelineError):
    """The origin or destination address could not be resolved."""

    stage = "resolve_endpoints"

    def __init__(self, which: str, address: str, reason: str = ""):
        self.which = which
        self.address = address
        message = f"Could not resolve {which} address '{address}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class RouteNotFound(PipelineError):
    """The routing service returned no route for the endpoints and mode."""

    stage = "fetch_route"


class MalformedPolyline(PipelineError):
    """The encoded path could not be decoded."""

    stage = "decode"

    def __init__(self, message: str, position: int = -1):
        self.position = position
        if position >= 0:
            message = f"{message} (at offset {position})"
        super().__init__(message)


class EmptyRoute(PipelineError):
    """The decoded route has no geometry to sample."""

    stage = "sample"
