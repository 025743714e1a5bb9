""" Exceptions raised by plotpipe. Transport-level exceptions live in
    :mod:`plotpipe.transport.base` so that the protocol layer remains
    transport-agnostic.
"""


class PlotpipeError(Exception):
    """Base class for all plotpipe errors."""


class EncodingError(PlotpipeError, ValueError):
    """A named buffer cannot be put on the wire."""


class UnsupportedTypeError(EncodingError, TypeError):
    """The element type of a container is not in the type table."""


class InvalidNameError(EncodingError):
    """A buffer name would corrupt the pipe-delimited header."""


class ContainerError(EncodingError):
    """The container has no contiguous storage with a supported rank."""


class ProtocolError(PlotpipeError, ValueError):
    """A received message does not follow the wire format."""


class ConfigError(PlotpipeError, ValueError):
    """A configuration value is missing or malformed."""


class ConsumerError(PlotpipeError):
    """The consumer process could not be launched or exited early."""


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
