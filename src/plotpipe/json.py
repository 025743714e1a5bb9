''' Wrapper module to select the most performant available library to handle
    the equivalent of :func:`json.loads`, used to read configuration files.
    :data:`DecodeError` is the exception the selected library raises for
    malformed input.
'''

# The business about conditionally importing the libraries is intended to
# avoid importing less efficient libraries if they are not available.

msgspec = None
orjson = None
json = None

try:
    import msgspec
except ImportError:
    pass

if msgspec is None:
    try:
        import orjson
    except ImportError:
        pass

if msgspec is None and orjson is None:
    import json


if msgspec is not None:
    decoder = msgspec.json.Decoder()
    loads = decoder.decode
    DecodeError = msgspec.DecodeError
elif orjson is not None:
    loads = orjson.loads
    DecodeError = orjson.JSONDecodeError
else:
    loads = json.loads
    DecodeError = json.JSONDecodeError

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
