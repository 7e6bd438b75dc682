""" The :class:`Stream` is the asynchronous request/response channel a
    :class:`txstate.state.State` talks through. A stream accepts a message
    type and the encoded request, and hands back a
    :class:`concurrent.futures.Future` that resolves with the raw reply once
    a reply carrying the same correlation id comes back.

    Moving bytes is left to subclasses; this module only keeps track of
    which outstanding request a reply belongs to.
"""

import concurrent.futures
import functools
import itertools
import logging
import threading

from .exceptions import StreamClosedError
from .protocol import fields


logger = logging.getLogger(__name__)


class Stream:
    """ Base class for all streams. A subclass implements :func:`_transmit`
        to put a request on the wire, and calls :func:`_receive` (or
        :func:`_fail`) from whatever thread handles its inbound traffic once
        a reply arrives.

        The pending table is protected by a lock; any number of threads may
        call :func:`send` while the receiving side resolves earlier requests.
        Several :class:`txstate.state.State` instances may share a single
        stream.
    """

    GET_REQUEST = fields.GET_REQUEST
    SET_REQUEST = fields.SET_REQUEST
    DEL_REQUEST = fields.DEL_REQUEST
    RECEIPT_DATA_REQUEST = fields.RECEIPT_DATA_REQUEST
    EVENT_REQUEST = fields.EVENT_REQUEST

    # Correlation ids are eight hex digits, and wrap around after this.
    id_limit = 0x100000000

    def __init__(self):

        self.closed = False
        self._pending = dict()
        self._pending_lock = threading.Lock()
        self._ticker = itertools.count()


    def __len__(self):
        with self._pending_lock:
            return len(self._pending)


    def send(self, message_type, content):
        """ Send the encoded request *content* as a message of the specified
            *message_type*. The return value is a
            :class:`concurrent.futures.Future` that will resolve with the raw
            reply bytes; the caller decides how long to wait for it.

            This method does not raise for transport problems: anything
            raised by :func:`_transmit` is stored on the returned future,
            as is a :class:`txstate.exceptions.StreamClosedError` if the
            stream is already closed.
        """

        if message_type not in fields.REQUESTS:
            raise ValueError('invalid request type: ' + repr(message_type))

        future = concurrent.futures.Future()

        with self._pending_lock:
            if self.closed:
                correlation_id = None
            else:
                correlation_id = self._next_id()
                self._pending[correlation_id] = future

        if correlation_id is None:
            future.set_exception(StreamClosedError('stream is closed'))
            return future

        future.add_done_callback(functools.partial(self._forget, correlation_id))

        logger.debug("%s sent with correlation id %s", message_type, correlation_id)

        try:
            self._transmit(message_type, correlation_id, content)
        except Exception as e:
            self._pop(correlation_id)
            try:
                future.set_exception(e)
            except concurrent.futures.InvalidStateError:
                pass

        return future


    def _transmit(self, message_type, correlation_id, content):
        """ Put a single request on the wire. The *correlation_id* must be
            returned with the reply so that :func:`_receive` can match it
            up with the outstanding future.
        """

        raise NotImplementedError('_transmit() must be implemented by a subclass')


    def _next_id(self):
        """ Return a correlation id not currently in use by an outstanding
            request on this stream. Must be called with the pending lock
            held.
        """

        while True:
            correlation_id = '%08x' % (next(self._ticker) % self.id_limit)

            if correlation_id not in self._pending:
                return correlation_id


    def _pop(self, correlation_id):

        with self._pending_lock:
            return self._pending.pop(correlation_id, None)


    def _forget(self, correlation_id, future):
        """ Callback for a future that completed one way or another. A
            cancelled future is no longer anyone's concern; drop it from
            the pending table so that a late reply is discarded.
        """

        if future.cancelled():
            self._pop(correlation_id)


    def _receive(self, correlation_id, content):
        """ Resolve the outstanding request identified by *correlation_id*
            with the raw reply *content*. A reply nobody is waiting for any
            more is dropped.
        """

        future = self._pop(correlation_id)

        if future is None:
            logger.debug("dropping reply for unknown correlation id %s", correlation_id)
            return

        try:
            future.set_result(content)
        except concurrent.futures.InvalidStateError:
            # The future was cancelled before the reply showed up.
            logger.debug("dropping reply for cancelled correlation id %s", correlation_id)


    def _fail(self, correlation_id, error):
        """ Fail the outstanding request identified by *correlation_id*
            with the exception *error*, for a transport that knows a reply
            will never arrive.
        """

        future = self._pop(correlation_id)

        if future is None:
            return

        try:
            future.set_exception(error)
        except concurrent.futures.InvalidStateError:
            pass


    def close(self):
        """ Stop accepting requests and cancel everything still outstanding.
            Anyone waiting on a cancelled future sees the wait interrupted.
        """

        with self._pending_lock:
            self.closed = True
            pending = list(self._pending.values())
            self._pending.clear()

        for future in pending:
            future.cancel()


# end of class Stream


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
