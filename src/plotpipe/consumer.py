""" Lifecycle of the consumer process: the external program that subscribes
    to a :class:`plotpipe.Session` and renders what it receives. What that
    program is, and where it lives, comes from configuration; see
    :mod:`plotpipe.config`.
"""

import logging
import subprocess
import time

from .errors import ConsumerError

logger = logging.getLogger(__name__)


class Consumer:
    """ Launch and supervise one consumer process. The *command* is a list
        of arguments; the endpoint *address* is appended as the final
        argument so the consumer knows where to connect. After launching,
        :func:`start` waits *startup_delay* seconds to give the consumer
        time to connect before the first batch is sent; messages published
        before a subscriber connects are not delivered to it.
    """

    def __init__(self, command, address, startup_delay=1.5):

        self.command = list(command)
        self.address = address
        self.startup_delay = float(startup_delay)
        self.process = None


    @property
    def arguments(self):
        return self.command + [self.address]


    @property
    def running(self):
        return self.process is not None and self.process.poll() is None


    def start(self):

        if self.running:
            return

        arguments = self.arguments

        try:
            self.process = subprocess.Popen(arguments)
        except OSError as error:
            raise ConsumerError('cannot launch consumer ' + repr(arguments) + ': ' + str(error)) from error

        logger.info("launched consumer (pid %d): %s", self.process.pid, ' '.join(arguments))

        time.sleep(self.startup_delay)

        returncode = self.process.poll()
        if returncode is not None:
            raise ConsumerError('consumer exited during startup with status ' + str(returncode))


    def wait(self, timeout=None):
        """ Block until the consumer exits, and return its exit status.
            Returns None if *timeout* seconds elapse first, or if no
            consumer was launched.
        """

        if self.process is None:
            return None

        try:
            return self.process.wait(timeout)
        except subprocess.TimeoutExpired:
            return None


    def stop(self, timeout=5):
        """ Terminate the consumer, escalating to a kill if it has not
            exited after *timeout* seconds.
        """

        if self.running:
            pass
        else:
            return

        self.process.terminate()

        try:
            self.process.wait(timeout)
        except subprocess.TimeoutExpired:
            logger.warning("consumer (pid %d) ignored SIGTERM, killing it", self.process.pid)
            self.process.kill()
            self.process.wait()

        logger.info("consumer (pid %d) stopped", self.process.pid)


# end of class Consumer


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
