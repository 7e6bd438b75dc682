import threading

import pytest
import txstate


# Sentinel for a ScriptedStream that never replies.
NEVER = object()


class ScriptedStream(txstate.Stream):
    """ An in-process stream that replies to every request on its own. The
        *reply* is either the raw bytes to send back, or a callable taking
        the message type and request content and returning the reply. The
        *delay* is the number of seconds before the reply is delivered; None
        delivers it before send() returns, NEVER drops it. If *fault* is set
        the request fails with that exception instead of replying.
    """

    def __init__(self, reply=b'', delay=None, fault=None):
        txstate.Stream.__init__(self)
        self.reply = reply
        self.delay = delay
        self.fault = fault
        self.sent = list()
        self.timers = list()


    def _transmit(self, message_type, correlation_id, content):

        self.sent.append((message_type, correlation_id, content))

        if self.delay is NEVER:
            return

        if callable(self.reply):
            reply = self.reply(message_type, content)
        else:
            reply = self.reply

        if self.delay is None:
            self.deliver(correlation_id, reply)
        else:
            timer = threading.Timer(self.delay, self.deliver, (correlation_id, reply))
            timer.daemon = True
            timer.start()
            self.timers.append(timer)


    def deliver(self, correlation_id, reply):

        if self.fault is None:
            self._receive(correlation_id, reply)
        else:
            self._fail(correlation_id, self.fault)


    def close(self):
        for timer in self.timers:
            timer.cancel()
        txstate.Stream.close(self)


@pytest.fixture
def make_stream():

    streams = list()

    def factory(*args, **kwargs):
        stream = ScriptedStream(*args, **kwargs)
        streams.append(stream)
        return stream

    yield factory

    for stream in streams:
        stream.close()


@pytest.fixture
def never():
    return NEVER


@pytest.fixture(autouse=True)
def clear_config():
    txstate.config._clear()
    yield
    txstate.config._clear()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
