import itertools
import logging
import struct
import zlib

import attr

from pngme import exceptions as exc


logger = logging.getLogger(__name__)

PNG_CHUNK_TYPE_PROPERTY_BITMASK = 0b00100000
PNG_CHUNK_TYPE_CODE_ALLOWED_BYTES = frozenset(
    itertools.chain(range(65, 91), range(97, 123)))

# Length and type code before the data, CRC32 after it
_CHUNK_HEAD = struct.Struct('>I4s')
_CHUNK_CRC = struct.Struct('>I')
CHUNK_OVERHEAD = _CHUNK_HEAD.size + _CHUNK_CRC.size


_valid_bytes = attr.validators.instance_of(bytes)


def _to_chunk_type_code(value):
    if isinstance(value, (str, int)):
        raise exc.InvalidChunkTypeCode(
            "Chunk type code must be bytes, got {!r}".format(value))
    try:
        return bytes(value)
    except (TypeError, ValueError) as e:
        raise exc.InvalidChunkTypeCode(
            "Cannot use {!r} as a chunk type code".format(value)) from e


def _valid_chunk_type_code(instance, attribute, value):
    if len(value) != 4:
        raise exc.InvalidChunkTypeCode(
            "{name} must be exactly 4 bytes long, got {value!r}".format(
                name=attribute.name, value=value))
    if not PNG_CHUNK_TYPE_CODE_ALLOWED_BYTES.issuperset(value):
        raise exc.InvalidChunkTypeCode(
            "{name} contains invalid bytes: {value!r}".format(
                name=attribute.name, value=value))


@attr.attributes(frozen=True)
class ChunkType:
    """
    A PNG chunk type code: four ASCII letters.

    The case of each letter is a property bit. Lowercase sets the bit,
    so an uppercase first letter means the chunk is critical, and a
    lowercase last letter means it is safe to copy.

    :ivar code: The 4 byte type code
    :type code: bytes
    """
    code = attr.attr(
        converter=_to_chunk_type_code,
        validator=_valid_chunk_type_code,
    )  # type: bytes

    @classmethod
    def from_text(cls, text):
        """
        Build a chunk type from a 4 character string like ``'RuSt'``.

        Raise :exc:`exceptions.InvalidChunkTypeCode` if the text is not
        exactly 4 ASCII letters.
        """
        if len(text) != 4:
            raise exc.InvalidChunkTypeCode(
                "Chunk type must be exactly 4 characters, got {!r}".format(
                    text))
        try:
            code = text.encode('ascii')
        except UnicodeEncodeError as e:
            raise exc.InvalidChunkTypeCode(
                "Chunk type must be ASCII letters, got {!r}".format(
                    text)) from e
        return cls(code)

    @property
    def critical(self):
        # pylint: disable=unsubscriptable-object
        return not self.code[0] & PNG_CHUNK_TYPE_PROPERTY_BITMASK

    @property
    def public(self):
        # pylint: disable=unsubscriptable-object
        return not self.code[1] & PNG_CHUNK_TYPE_PROPERTY_BITMASK

    @property
    def reserved_bit_valid(self):
        # pylint: disable=unsubscriptable-object
        return not self.code[2] & PNG_CHUNK_TYPE_PROPERTY_BITMASK

    @property
    def safe_to_copy(self):
        # pylint: disable=unsubscriptable-object
        return bool(self.code[3] & PNG_CHUNK_TYPE_PROPERTY_BITMASK)

    @property
    def valid(self):
        """
        Whether the reserved bit is clear. Any 4 letter code can be
        constructed, but only these conform to PNG 1.2.
        """
        return self.reserved_bit_valid

    def __bytes__(self):
        return self.code

    def __str__(self):
        return self.code.decode('utf-8')


def chunk_crc32(chunk_type, data):
    """
    The CRC32 for a chunk, calculated over the type code and the data.
    """
    crc = zlib.crc32(chunk_type.code)
    return zlib.crc32(data, crc)


@attr.attributes(frozen=True, repr=False)
class Chunk:
    """
    A single PNG chunk.

    The length and CRC32 are always derived from the type and data, so
    a chunk can't disagree with itself.

    :ivar chunk_type: The chunk's type code
    :type chunk_type: :class:`ChunkType`
    :ivar data: The chunk data
    :type data: bytes
    :ivar crc: CRC32 of the type code and data
    :type crc: int
    """
    chunk_type = attr.attr(
        validator=attr.validators.instance_of(ChunkType)
    )  # type: ChunkType
    data = attr.attr(default=b'', validator=_valid_bytes)  # type: bytes
    crc = attr.attr(init=False, eq=False)  # type: int

    def __attrs_post_init__(self):
        object.__setattr__(self, 'crc', chunk_crc32(self.chunk_type, self.data))

    @property
    def length(self):
        return len(self.data)

    @classmethod
    def decode(cls, buffer):
        """
        Decode the chunk at the start of ``buffer``.

        Anything after the chunk's CRC is ignored; use :attr:`length`
        to find where the next chunk starts.

        :param buffer: Any bytes-like object
        :raises exceptions.UnexpectedEOF:
            If the buffer ends before the chunk does
        :raises exceptions.InvalidChunkTypeCode:
            If the type code contains anything but ASCII letters
        :raises exceptions.BadCRC:
            If the stored CRC32 does not match the calculated one
        """
        buffer = memoryview(buffer)
        if len(buffer) < CHUNK_OVERHEAD:
            raise exc.UnexpectedEOF(
                "Chunk needs at least {minimum} bytes, got {actual}".format(
                    minimum=CHUNK_OVERHEAD, actual=len(buffer)))
        length, code = _CHUNK_HEAD.unpack_from(buffer)
        chunk_type = ChunkType(code)
        data_end = _CHUNK_HEAD.size + length
        if data_end + _CHUNK_CRC.size > len(buffer):
            fmt = (
                "Chunk {code} claims {length} data bytes, but only "
                "{available} remain"
            )
            raise exc.UnexpectedEOF(fmt.format(
                code=chunk_type,
                length=length,
                available=len(buffer) - CHUNK_OVERHEAD,
            ))
        chunk = cls(chunk_type, bytes(buffer[_CHUNK_HEAD.size:data_end]))
        [declared_crc] = _CHUNK_CRC.unpack_from(buffer, data_end)
        if declared_crc != chunk.crc:
            fmt = (
                "invalid crc for chunk {code}: declared {declared:#010x}, "
                "calculated {calculated:#010x}"
            )
            raise exc.BadCRC(fmt.format(
                code=chunk_type,
                declared=declared_crc,
                calculated=chunk.crc,
            ))
        logger.debug('Decoded %r', chunk)
        return chunk

    def data_as_string(self):
        """
        Return the chunk data decoded as UTF-8 text, or raise
        :exc:`exceptions.ChunkEncodingError` if it isn't text.
        """
        try:
            return self.data.decode('utf-8')
        except UnicodeDecodeError as e:
            raise exc.ChunkEncodingError(
                "Chunk {code} data is not valid UTF-8: {error}".format(
                    code=self.chunk_type, error=e)) from e

    def as_bytes(self):
        return b''.join([
            _CHUNK_HEAD.pack(self.length, self.chunk_type.code),
            self.data,
            _CHUNK_CRC.pack(self.crc),
        ])

    __bytes__ = as_bytes

    def __repr__(self):
        fmt = '{name}(chunk_type={chunk_type!r}, length={length}, crc={crc})'
        return fmt.format(
            name=self.__class__.__name__,
            chunk_type=self.chunk_type,
            length=self.length,
            crc=self.crc,
        )

    def __str__(self):
        return '\n'.join([
            'Chunk {',
            '   Length: {}'.format(self.length),
            '   Type: {}'.format(self.chunk_type),
            '   Data: {} bytes'.format(len(self.data)),
            '   Crc: {}'.format(self.crc),
            '}',
        ])
