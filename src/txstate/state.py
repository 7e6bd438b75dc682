""" Client-side access to a transactional key/value context held by a remote
    context manager. A :class:`State` is bound to one stream and one context
    id; every operation sends exactly one request on that stream and waits
    for the correlated reply.
"""

import concurrent.futures
import logging

from . import config
from . import json
from .exceptions import InternalError
from .protocol import fields
from .protocol.message import (
    DeleteRequest,
    DeleteResponse,
    Entry,
    Event,
    EventRequest,
    EventResponse,
    GetRequest,
    GetResponse,
    ReceiptDataRequest,
    ReceiptDataResponse,
    SetRequest,
    SetResponse,
)


logger = logging.getLogger(__name__)


class State:
    """ The :class:`State` reads and writes addressed values within a single
        transaction context on the remote side. The *stream* is any
        :class:`txstate.stream.Stream`; the *context_id* is an opaque token
        issued by the remote side and is used as-is. The *timeout* is the
        number of seconds to wait for a reply; if it is not specified the
        value from :func:`txstate.config.timeout` is used. Either way it must
        be a finite, positive number of seconds.

        If a reply does not arrive within the timeout, the same outstanding
        request is waited on a second time for the same duration. The request
        is never sent twice. Any failure, including the second wait expiring,
        raises :class:`txstate.exceptions.InternalError`.

        No locking happens here: several threads may use the same instance
        at once, each call is correlated independently by the stream.
    """

    def __init__(self, stream, context_id, timeout=None):

        if timeout is None:
            timeout = config.timeout()

        self._stream = stream
        self._context_id = context_id
        self.timeout = timeout


    def __repr__(self):
        return 'state.State: context ' + repr(self._context_id)


    @property
    def stream(self):
        return self._stream


    @property
    def context_id(self):
        return self._context_id


    @property
    def timeout(self):
        return self._timeout


    @timeout.setter
    def timeout(self, timeout):
        self._timeout = config.check(timeout)


    def get(self, addresses, timeout=None):
        """ Retrieve the values stored at the requested *addresses*. The
            return value is a dictionary mapping address to bytes; addresses
            with no stored value are not present in the dictionary.
        """

        request = GetRequest(context_id=self._context_id, addresses=_addresses(addresses))
        response = self._request(request, GetResponse, timeout)

        results = dict()
        if response is not None:
            for entry in response.entries:
                results[entry.address] = entry.data

        return results


    def set(self, entries, timeout=None):
        """ Store new values. The *entries* are either a dictionary, or a
            sequence of (address, bytes) pairs; the pairs are sent in the
            order given, duplicates included. The return value is the set
            of addresses the remote side reports as written, which is not
            necessarily every address requested.
        """

        try:
            items = entries.items()
        except AttributeError:
            items = entries

        wire_entries = list()

        try:
            for address, data in items:
                entry = Entry(address=_address(address), data=_binary(data))
                wire_entries.append(entry)
        except (TypeError, ValueError) as e:
            raise InternalError('malformed entry: ' + _describe(e), cause=e) from e

        request = SetRequest(context_id=self._context_id, entries=wire_entries)
        response = self._request(request, SetResponse, timeout)

        if response is None:
            return set()

        return set(response.addresses)


    def delete(self, addresses, timeout=None):
        """ Remove any values stored at the requested *addresses*. The return
            value is the set of addresses the remote side reports as deleted.
        """

        request = DeleteRequest(context_id=self._context_id, addresses=_addresses(addresses))
        response = self._request(request, DeleteResponse, timeout)

        if response is None:
            return set()

        return set(response.addresses)


    def add_receipt_data(self, data, timeout=None):
        """ Attach opaque *data* to the receipt of the transaction that owns
            this context.
        """

        try:
            data = _binary(data)
        except TypeError as e:
            raise InternalError('malformed receipt data: ' + _describe(e), cause=e) from e

        request = ReceiptDataRequest(context_id=self._context_id, data=data)
        response = self._request(request, ReceiptDataResponse, timeout)

        if response is not None and response.status != fields.OK:
            raise InternalError('failed to add receipt data: status ' + repr(response.status))


    def add_event(self, event_type, attributes=None, data=b'', timeout=None):
        """ Emit an event of the given *event_type* when the transaction that
            owns this context is committed. The *attributes* are either a
            dictionary, or a sequence of (key, value) string pairs.
        """

        if attributes is None:
            attributes = dict()

        try:
            attributes = attributes.items()
        except AttributeError:
            pass

        try:
            event_type = _text(event_type, 'event type')
            attributes = [(_text(key, 'attribute key'), _text(value, 'attribute value')) for key, value in attributes]
            data = _binary(data)
        except (TypeError, ValueError) as e:
            raise InternalError('malformed event: ' + _describe(e), cause=e) from e

        event = Event(event_type=event_type, attributes=attributes, data=data)
        request = EventRequest(context_id=self._context_id, event=event)
        response = self._request(request, EventResponse, timeout)

        if response is not None and response.status != fields.OK:
            raise InternalError('failed to add event: status ' + repr(response.status))


    def _request(self, request, response_type, timeout):
        """ Send the *request* once, wait for the reply, and decode it as an
            instance of *response_type*. Returns None if the reply was empty.
        """

        message_type = request.message_type

        if timeout is None:
            timeout = self._timeout
        else:
            try:
                timeout = config.check(timeout)
            except ValueError as e:
                raise InternalError("%s not sent: %s" % (message_type, _describe(e)), cause=e) from e

        try:
            content = request.encode()
        except (json.EncodeError, TypeError) as e:
            raise InternalError("cannot encode %s: %s" % (message_type, _describe(e)), cause=e) from e

        try:
            future = self._stream.send(message_type, content)
        except Exception as e:
            raise InternalError("cannot send %s: %s" % (message_type, _describe(e)), cause=e) from e

        reply = self._wait(future, message_type, timeout)

        try:
            response = response_type.decode(reply)
        except (json.DecodeError, TypeError) as e:
            # The remote side didn't respond with the expected message.
            error = "%s reply is not a %s: %s" % (message_type, response_type.__name__, _describe(e))
            raise InternalError(error, cause=e) from e

        return response


    def _wait(self, future, message_type, timeout):
        """ Wait on *future* for up to *timeout* seconds. If nothing arrives,
            wait on the same *future* one more time before giving up.
        """

        try:
            return _result(future, message_type, timeout)
        except _Expired:
            pass

        logger.warning("%s for context %s: no reply in %.2f sec, waiting again",
                       message_type, self._context_id, timeout)

        try:
            return _result(future, message_type, timeout)
        except _Expired as e:
            # Nobody will look at this future again. The request itself
            # stays sent; only the local handle is released.
            future.cancel()
            error = "%s for context %s: no reply in %.2f sec after waiting twice" % (message_type, self._context_id, timeout)
            raise InternalError(error, cause=e.__cause__) from e.__cause__


# end of class State



class _Expired(Exception):
    """ Internal signal that a single wait ran out of time.
    """



def _result(future, message_type, timeout):
    """ Wait once on *future*. A timeout is signalled via :class:`_Expired`,
        every other failure is translated to
        :class:`txstate.exceptions.InternalError`.
    """

    try:
        return future.result(timeout)
    except concurrent.futures.CancelledError as e:
        error = "interrupted waiting for %s reply: %s" % (message_type, _describe(e))
        raise InternalError(error, cause=e) from e
    except InterruptedError as e:
        error = "interrupted waiting for %s reply: %s" % (message_type, _describe(e))
        raise InternalError(error, cause=e) from e
    except concurrent.futures.TimeoutError as e:
        # A TimeoutError stored on a completed future came from the stream,
        # it is not the expiration of this wait.
        if future.done() and not future.cancelled() and future.exception() is e:
            error = "%s failed: %s" % (message_type, _describe(e))
            raise InternalError(error, cause=e) from e
        raise _Expired() from e
    except Exception as e:
        error = "%s failed: %s" % (message_type, _describe(e))
        raise InternalError(error, cause=e) from e



def _addresses(addresses):
    """ Return the *addresses* as a list of str, raising
        :class:`txstate.exceptions.InternalError` before anything is sent if
        that is not what they are.
    """

    try:
        return [_address(address) for address in addresses]
    except TypeError as e:
        raise InternalError('malformed addresses: ' + _describe(e), cause=e) from e



def _address(address):
    return _text(address, 'address')



def _text(value, what):

    if isinstance(value, str):
        return value

    raise TypeError("%s must be a str, not %s" % (what, type(value).__name__))



def _binary(data):
    """ Payloads are opaque bytes. A str is refused rather than encoded,
        the remote side would read it as base64.
    """

    if isinstance(data, bytes):
        return data

    if isinstance(data, (bytearray, memoryview)):
        return bytes(data)

    raise TypeError('data must be bytes, not ' + type(data).__name__)



def _describe(exception):

    text = str(exception)
    name = type(exception).__name__

    if text:
        return name + ': ' + text
    else:
        return name


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
