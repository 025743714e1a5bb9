import pytest

import plotpipe
from plotpipe.transport import Transport, TransportError


class Recorder(Transport):
    """ In-memory transport that records every message sent through it.
        Borrowed payloads are copied into bytes at send time, which is when
        a real transport would have finished with them.
    """

    def __init__(self):
        self.messages = list()
        self.borrowed = list()
        self.opened = False
        self.closed = False
        self.fail_after = None

    def open(self):
        self.opened = True

    def close(self):
        self.closed = True

    @property
    def is_open(self):
        return self.opened and not self.closed

    def send(self, frame, copy=True):
        if self.fail_after is not None and len(self.messages) >= self.fail_after:
            raise TransportError('simulated failure')

        self.messages.append(bytes(frame))
        self.borrowed.append(not copy)

    def recv(self, timeout=None):
        if self.messages:
            return self.messages.pop(0)
        return None


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def session(recorder):
    session = plotpipe.Session(recorder)
    yield session
    session.close()


@pytest.fixture
def home(tmp_path, monkeypatch):
    """ Point the configuration directory at an empty temporary directory,
        and clear any environment overrides.
    """

    monkeypatch.setenv('PLOTPIPE_HOME', str(tmp_path))
    monkeypatch.delenv('PLOTPIPE_ADDRESS', raising=False)
    monkeypatch.delenv('PLOTPIPE_CONSUMER', raising=False)
    monkeypatch.setattr(plotpipe.config.directory, 'found', None)

    return tmp_path

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
