""" Wire constants.

Keep these in one place to avoid stringly-typed message handling.
"""

SEPARATOR = '|'

# First field of every buffer header.
DATA = 'data'

# Sentinel messages: end of a batch, and consumer shutdown.
FINALIZE = b'finalize'
EXIT = b'exit'

ENCODING = 'ascii'
