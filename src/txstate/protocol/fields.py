"""Message type constants.

Keep these in one place to avoid stringly-typed message handling. A stream
uses the message type to frame a request; the reply is correlated by id and
carries no type of its own as far as :mod:`txstate.state` is concerned.
"""

GET_REQUEST = "GET_REQUEST"
GET_RESPONSE = "GET_RESPONSE"

SET_REQUEST = "SET_REQUEST"
SET_RESPONSE = "SET_RESPONSE"

DEL_REQUEST = "DEL_REQUEST"
DEL_RESPONSE = "DEL_RESPONSE"

RECEIPT_DATA_REQUEST = "RECEIPT_DATA_REQUEST"
RECEIPT_DATA_RESPONSE = "RECEIPT_DATA_RESPONSE"

EVENT_REQUEST = "EVENT_REQUEST"
EVENT_RESPONSE = "EVENT_RESPONSE"

# Response status values for receipt data and event replies.
OK = "OK"
ERROR = "ERROR"

REQUESTS = frozenset((
    GET_REQUEST,
    SET_REQUEST,
    DEL_REQUEST,
    RECEIPT_DATA_REQUEST,
    EVENT_REQUEST,
))

# Which response is expected for each request type.
RESPONSES = {
    GET_REQUEST: GET_RESPONSE,
    SET_REQUEST: SET_RESPONSE,
    DEL_REQUEST: DEL_RESPONSE,
    RECEIPT_DATA_REQUEST: RECEIPT_DATA_RESPONSE,
    EVENT_REQUEST: EVENT_RESPONSE,
}
