""" Publish a few batches to a consumer. With no consumer configured this
    launches the plotpipe dump listener, which prints each batch it receives;
    point PLOTPIPE_CONSUMER at a real renderer to draw them instead.
"""

import os
import sys
import time

import numpy

import plotpipe


def main():

    if 'PLOTPIPE_CONSUMER' in os.environ:
        consumer = None
    else:
        consumer = [sys.executable, '-m', 'plotpipe']

    with plotpipe.Session.open(address='tcp://127.0.0.1:*', consumer=consumer) as session:

        x = numpy.linspace(0, 2 * numpy.pi, 200)

        for step in range(5):
            y = numpy.sin(x + step * 0.5)
            image = numpy.outer(y, y).astype(numpy.float32)

            session << 'plt.clf()'
            session.push_raw('''
                plt.subplot(1, 2, 1)
                plt.plot(x, y)
                plt.subplot(1, 2, 2)
                plt.imshow(image)
                plt.pause(0.01)
                ''')
            session.send(('x', x), ('y', y), ('image', image))

            time.sleep(0.5)

    if session.consumer is not None:
        session.consumer.wait(5)


if __name__ == '__main__':
    main()
