"""Error taxonomy for the matching engine.

Every error carries a stable ``kind`` so callers (the HTTP layer, the task
queue) can map it without inspecting messages. Only ``StoreUnavailable`` is
worth retrying.
"""


class MatchingError(Exception):
    kind = "matching_error"
    retryable = False

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {"error": self.kind, "detail": self.message}


class NotFound(MatchingError):
    """Item or match id unknown"""
    kind = "not_found"


class Forbidden(MatchingError):
    """Caller is not a participant in the match"""
    kind = "forbidden"


class InvalidInput(MatchingError):
    """Missing or malformed ids"""
    kind = "invalid_input"


class StoreUnavailable(MatchingError):
    """Transient persistence failure (timeout, lost connection)"""
    kind = "store_unavailable"
    retryable = True
