import sys
import time

import pytest

import plotpipe


def test_arguments():

    consumer = plotpipe.Consumer(['python3', 'render.py'], 'tcp://127.0.0.1:5555')
    assert consumer.arguments == ['python3', 'render.py', 'tcp://127.0.0.1:5555']
    assert consumer.running == False
    assert consumer.wait(0) is None

    # Stopping a consumer that never started is a no-op.
    consumer.stop()


def test_start_stop():

    command = [sys.executable, '-c', 'import sys, time; time.sleep(60)']
    consumer = plotpipe.Consumer(command, 'tcp://127.0.0.1:5555', startup_delay=0.1)

    consumer.start()
    assert consumer.running == True

    consumer.stop(timeout=5)
    assert consumer.running == False


def test_exits_on_its_own():

    command = [sys.executable, '-c', 'import sys; sys.exit(0)']
    consumer = plotpipe.Consumer(command, 'tcp://127.0.0.1:5555', startup_delay=0)

    consumer.start()
    assert consumer.wait(10) == 0


def test_early_exit():

    command = [sys.executable, '-c', 'import sys; sys.exit(3)']
    consumer = plotpipe.Consumer(command, 'tcp://127.0.0.1:5555', startup_delay=1)

    with pytest.raises(plotpipe.errors.ConsumerError):
        consumer.start()


def test_missing_program():

    consumer = plotpipe.Consumer(['/nonexistent/plotpipe-renderer'], 'tcp://127.0.0.1:5555', startup_delay=0)

    with pytest.raises(plotpipe.errors.ConsumerError):
        consumer.start()


def test_session_launches_consumer(home):

    output = home / 'argv'
    script = 'import sys, time; open(sys.argv[1], "w").write(sys.argv[2]); time.sleep(60)'
    command = [sys.executable, '-c', script, str(output)]

    session = plotpipe.Session.open(address='tcp://127.0.0.1:*', consumer=command,
                                    connect_delay=0, startup_delay=0.2)

    try:
        assert session.consumer.running == True

        for attempt in range(100):
            if output.exists() and output.read_text():
                break
            time.sleep(0.1)

        # The consumer learns the actual endpoint, not the wildcard.
        assert output.read_text() == session.transport.endpoint
    finally:
        session.close()
        session.consumer.stop()

    assert session.consumer.running == False


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
