""" Python implementation of plotpipe. A producer pushes named numeric
    buffers and accompanying command text over a ZeroMQ PUB socket; an
    external consumer process receives each batch and renders it, or
    otherwise acts on it, without the producer blocking on that work.
"""

# Utility components.

from . import errors
from . import json
from . import text

# Submodules used by multiple other components.

from . import config
from . import protocol
from . import transport

dedent = text.dedent

# Primary public-facing interfaces.

from .session import Session
from .consumer import Consumer
from .receive import Batch, Receiver

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
