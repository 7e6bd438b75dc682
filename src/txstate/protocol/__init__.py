from . import fields
from . import message

from .message import (
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


"""
txstate Protocol Layer
======================

This package defines the typed messages a :class:`txstate.state.State`
exchanges with the remote context manager, and the message type constants a
stream uses to frame them.

The protocol layer MUST NOT depend on any stream implementation. Dependencies
only flow downward:

    State -> Protocol (message shapes) -> Stream (correlation) -> transport

The transport itself (sockets, framing, connection management) is not part
of this package; see :class:`txstate.stream.Stream` for the contract a
transport implements.
"""


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
