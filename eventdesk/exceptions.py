class UnauthorizedError(Exception):
    pass

class MissingFieldsError(Exception):
    def __init__(self, fields):
        super().__init__("Missing required fields")
        self.fields = fields


class CheckInError(Exception):
    """Base class for failures while resolving or checking in a scanned code.

    ``reason`` is the machine-readable kind returned to the client so the
    scanner UI can tell "wrong event" apart from "invalid code".
    """

    reason = "check_in_failed"
    status_code = 400

    def __init__(self, message, debug=None):
        super().__init__(message)
        self.message = message
        self.debug = debug or {}


class NotFoundError(CheckInError):
    reason = "not_found"
    status_code = 404


class EventMismatchError(CheckInError):
    reason = "event_mismatch"


class InterpretationError(CheckInError):
    reason = "no_matching_registration"


class TransitionError(CheckInError):
    reason = "invalid_code"


class InvalidRequestError(CheckInError):
    reason = "invalid_request"
