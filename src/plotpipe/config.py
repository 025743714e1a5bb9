""" Configuration handling for plotpipe. The endpoint address and the
    command used to launch the consumer are deliberately not hard-coded:
    they are resolved here from, in increasing order of precedence, the
    built-in defaults, the ``plotpipe.json`` file in the configuration
    directory, environment variables, and explicit keyword arguments.
"""

import logging
import os
import shlex

from . import json
from .errors import ConfigError

logger = logging.getLogger(__name__)

filename = 'plotpipe.json'

defaults = dict(
    address='tcp://127.0.0.1:5555',
    consumer=None,
    connect_delay=0.1,
    startup_delay=1.5,
)

environment = dict(
    address='PLOTPIPE_ADDRESS',
    consumer='PLOTPIPE_CONSUMER',
)


class Settings:
    """ A resolved set of configuration values. The *consumer* is either
        None, meaning no consumer process is launched, or a list of
        command-line arguments; the endpoint address will be appended to
        that list when the consumer is launched.

        :ivar address: ZeroMQ endpoint the producer binds to.
        :ivar consumer: Consumer launch command, or None.
        :ivar connect_delay: Seconds to wait after binding.
        :ivar startup_delay: Seconds to wait after launching the consumer.
    """

    def __init__(self, address=None, consumer=None, connect_delay=None, startup_delay=None):

        if address is None:
            address = defaults['address']
        if connect_delay is None:
            connect_delay = defaults['connect_delay']
        if startup_delay is None:
            startup_delay = defaults['startup_delay']

        self.address = _check_address(address)
        self.consumer = _check_consumer(consumer)
        self.connect_delay = _check_delay('connect_delay', connect_delay)
        self.startup_delay = _check_delay('startup_delay', startup_delay)


    def __repr__(self):
        fields = (self.address, self.consumer, self.connect_delay, self.startup_delay)
        return 'Settings(address=%r, consumer=%r, connect_delay=%r, startup_delay=%r)' % fields


# end of class Settings



def _check_address(address):

    if isinstance(address, str):
        pass
    else:
        raise ConfigError('address must be a string, not ' + type(address).__name__)

    address = address.strip()

    if '://' in address:
        pass
    else:
        raise ConfigError('address must include a transport prefix, such as tcp://: ' + repr(address))

    return address


def _check_consumer(consumer):

    if consumer is None or consumer == '':
        return None

    # A string is interpreted the way a shell would, which is how the
    # PLOTPIPE_CONSUMER environment variable arrives.

    if isinstance(consumer, str):
        consumer = shlex.split(consumer)

    try:
        consumer = list(consumer)
    except TypeError:
        raise ConfigError('consumer must be a command string or a list of arguments')

    for argument in consumer:
        if isinstance(argument, str):
            continue
        raise ConfigError('consumer arguments must be strings: ' + repr(argument))

    if len(consumer) == 0:
        return None

    return consumer


def _check_delay(name, delay):

    try:
        delay = float(delay)
    except (TypeError, ValueError):
        raise ConfigError(name + ' must be a number of seconds: ' + repr(delay))

    if delay < 0:
        raise ConfigError(name + ' cannot be negative: ' + repr(delay))

    return delay



def directory(default=None):
    """ Return the directory location where we should be loading the
        configuration file. This defaults to ``$HOME/.plotpipe``, but can be
        overridden by calling this method with a valid path, or by setting
        the ``PLOTPIPE_HOME`` environment variable. Note that changes to the
        environment variable will be ignored unless it is set prior to the
        first invocation of this method.
    """

    if default is not None:
        default = str(default)
        default = os.path.expandvars(default)

        if os.path.isabs(default):
            pass
        else:
            raise ValueError('the default directory must be an absolute path')

        os.environ['PLOTPIPE_HOME'] = default
        directory.found = default


    found = directory.found

    if found is not None:
        return found

    try:
        found = os.environ['PLOTPIPE_HOME']
    except KeyError:
        pass
    else:
        directory.found = found
        return found

    try:
        home = os.environ['HOME']
    except KeyError:
        raise RuntimeError('PLOTPIPE_HOME and HOME environment variables not set, cannot determine plotpipe configuration directory')

    found = os.path.join(home, '.plotpipe')

    directory.found = found
    return found

directory.found = None



def read(path=None):
    """ Read the JSON configuration file and return its contents as a
        dictionary. A missing file is not an error; an empty dictionary is
        returned instead. If *path* is not specified the file is located
        via :func:`directory`.
    """

    if path is None:
        path = os.path.join(directory(), filename)

    try:
        raw_json = open(path, 'rb').read()
    except FileNotFoundError:
        return dict()

    try:
        contents = json.loads(raw_json)
    except json.DecodeError as error:
        raise ConfigError('cannot parse ' + path + ': ' + str(error)) from error

    if isinstance(contents, dict):
        pass
    else:
        raise ConfigError(path + ' must contain a JSON object')

    unknown = set(contents) - set(defaults)
    if unknown:
        unknown = ', '.join(sorted(unknown))
        logger.warning("ignoring unknown keys in %s: %s", path, unknown)

    logger.debug("loaded configuration from %s", path)
    return contents



def load(path=None, **overrides):
    """ Resolve and return a :class:`Settings` instance. Values are taken
        from the configuration file first, then the environment, and
        finally from any *overrides* that are not None.
    """

    resolved = dict()

    for key,value in read(path).items():
        if key in defaults:
            resolved[key] = value

    for key,variable in environment.items():
        try:
            value = os.environ[variable]
        except KeyError:
            continue
        resolved[key] = value

    for key,value in overrides.items():
        if key in defaults:
            pass
        else:
            raise TypeError('unknown configuration option: ' + repr(key))

        if value is not None:
            resolved[key] = value

    return Settings(**resolved)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
