''' Wrapper module around :mod:`msgspec` providing the equivalent of
    :func:`json.loads` and :func:`json.dumps`, plus typed decoding into the
    message structures defined in :mod:`txstate.protocol.message`.
'''

import threading

import msgspec


# The msgspec 'encode' operation returns bytes. Everything that goes on to
# a stream is bytes, so there is no reason to convert to str here.

encoder = msgspec.json.Encoder()
decoder = msgspec.json.Decoder()
dumps = encoder.encode
loads = decoder.decode

DecodeError = msgspec.DecodeError
EncodeError = msgspec.EncodeError

_decoders = dict()
_decoders_lock = threading.Lock()


def decode(content, type):
    """ Decode the JSON *content* as an instance of *type*. A typed decoder
        is created the first time a given *type* is requested, and re-used
        after that. Malformed content, or content that does not match the
        requested *type*, raises :class:`DecodeError`.
    """

    try:
        typed = _decoders[type]
    except KeyError:
        with _decoders_lock:
            typed = _decoders.get(type)
            if typed is None:
                typed = msgspec.json.Decoder(type)
                _decoders[type] = typed

    return typed.decode(content)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
