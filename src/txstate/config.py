""" Runtime configuration for txstate. There is very little to configure;
    the only tunable is the per-wait timeout used by
    :class:`txstate.state.State`.
"""

import math
import os


default_timeout = 2.0


def timeout(default=None):
    """ Return the default number of seconds a :class:`txstate.state.State`
        waits for a reply before waiting a second time. This defaults to two
        seconds, but can be overridden by calling this method with a new
        *default*, or by setting the ``TXSTATE_TIMEOUT`` environment
        variable. Note that changes to the environment variable will be
        ignored unless it is set prior to the first invocation of this
        method.
    """

    if default is not None:
        timeout.found = check(default)


    found = timeout.found

    if found is not None:
        return found

    try:
        found = os.environ['TXSTATE_TIMEOUT']
    except KeyError:
        found = default_timeout

    found = check(found)

    timeout.found = found
    return found

timeout.found = None


def check(value):
    """ Return *value* as a float number of seconds, raising
        :class:`ValueError` if it is not a finite, positive number. Every
        wait is bounded; an infinite or undefined timeout is not a timeout.
    """

    try:
        value = float(value)
    except (TypeError, ValueError):
        raise ValueError('timeout must be a number of seconds, not ' + repr(value))

    if not math.isfinite(value) or value <= 0:
        raise ValueError('timeout must be finite and positive, not ' + repr(value))

    return value


def _clear():
    """ Forget any cached value established by :func:`timeout`.
    """

    timeout.found = None


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
