ERR_REQUEST = "REQUEST_FAILED"
ERR_DECODE = "DECODE_FAILED"
ERR_BUSY = "ERR_BUSY"
ERR_EMPTY_PROMPT = "ERR_EMPTY_PROMPT"
ERR_RUNTIME_STOPPED = "ERR_RUNTIME_STOPPED"


class ClassificationError(Exception):
    code = "UNKNOWN"


class RequestError(ClassificationError):
    """The remote model call failed (network, auth, provider error, timeout)."""

    code = ERR_REQUEST


class DecodeError(ClassificationError):
    """The model answered, but the reply does not match the result schema."""

    code = ERR_DECODE

    def __init__(self, raw_text: str, reason: str = ""):
        super().__init__(reason or "reply does not match the result schema")
        self.raw_text = raw_text
