""" Python client for a transactional key/value context held by a remote
    context manager. A :class:`State` bound to a :class:`Stream` and a context
    id reads, writes, and deletes addressed values, and attaches receipt data
    and events to the transaction that owns the context.
"""

# Utility components.

from . import json
from . import config
from . import exceptions

# Submodules used by multiple other components.

from . import protocol
from . import stream

# Primary public-facing interfaces.

from .exceptions import InternalError
from .state import State
from .stream import Stream

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
