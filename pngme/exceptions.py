class PNGError(Exception):
    pass


class InvalidFormat(PNGError):
    pass


class InvalidChunkTypeCode(InvalidFormat):
    pass


class SignatureMismatch(InvalidFormat):
    pass


class MalformedInput(PNGError):
    pass


class UnexpectedEOF(MalformedInput):
    pass


class BadCRC(PNGError):
    pass


class ChunkEncodingError(PNGError):
    pass


class ChunkNotFound(PNGError, LookupError):
    pass
