"Errors raised by the echo roles"


class EchoError(Exception):
    "Base echo error"
    pass


class BindError(EchoError):
    "The endpoint could not be created"
    pass


class ResolutionError(EchoError):
    "The address could not be resolved"
    pass


class TransportError(EchoError):
    "A send or receive failed at the socket layer"
    pass


class CancellationError(EchoError):
    """
    The operation was aborted by the cancellation token.

    Not a failure: callers catch it to shut down gracefully.
    """
    pass
