# utils/errors.py
"""Failure kinds surfaced to callers.

Every kind aborts the whole operation; the session scope rolls back whatever
the operation had started, so no partial state is ever committed.
"""


class VerseOracleError(Exception):
    status_code = 400
    default_message = "Request rejected"

    def __init__(self, message=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def kind(self):
        return type(self).__name__

    def to_json(self):
        return {"error": self.kind, "message": self.message}


class EmptyReference(VerseOracleError):
    status_code = 400
    default_message = "A verse reference is required"


class InsufficientPayment(VerseOracleError):
    status_code = 402
    default_message = "Payment is below the current verse price"


class EmptyResponse(VerseOracleError):
    status_code = 422
    default_message = "Oracle result is empty"


class MalformedResponse(VerseOracleError):
    status_code = 422
    default_message = "Oracle result is not in book---chapter---verse---text format"


class UnknownQuery(VerseOracleError):
    status_code = 404
    default_message = "No pending query with that id"


class Unauthorized(VerseOracleError):
    status_code = 403
    default_message = "Caller is not allowed to perform this action"


class OracleUnavailable(VerseOracleError):
    status_code = 503
    default_message = "The oracle could not accept the query"
