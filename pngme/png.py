import logging

import attr

from pngme import exceptions as exc
from pngme.models import CHUNK_OVERHEAD, Chunk, ChunkType


logger = logging.getLogger(__name__)


PNG_SIGNATURE = bytes([
    # High bit set to detect non-8-bit-clean transmission
    0x89,
    # ASCII letters PNG
    0x50, 0x4E, 0x47,
    # DOS line ending (CRLF)
    0x0D, 0x0A,
    # end-of-file character
    0x1A,
    # Unix line ending (LF)
    0x0A
])


@attr.attributes
class PNG:
    """
    A PNG image as the signature followed by an ordered list of chunks.

    Nothing checks that the chunks make a well-formed image (IHDR
    first, IEND last and so on); any sequence of valid chunks is
    accepted, kept in order, and written back out unchanged.
    """
    _chunks = attr.attr(
        factory=list,
        converter=list,
        validator=attr.validators.deep_iterable(
            attr.validators.instance_of(Chunk)),
    )  # type: list

    @classmethod
    def decode(cls, buffer):
        """
        Decode a complete PNG file held in ``buffer``.

        Every byte after the signature must belong to a chunk. The
        first chunk that fails to decode aborts the whole decode.

        :raises exceptions.SignatureMismatch:
            If the buffer does not start with :data:`PNG_SIGNATURE`
        """
        buffer = memoryview(buffer)
        header = bytes(buffer[:len(PNG_SIGNATURE)])
        if header != PNG_SIGNATURE:
            raise exc.SignatureMismatch(
                "invalid header: expected {expected!r}, got {actual!r}".format(
                    expected=PNG_SIGNATURE,
                    actual=header
                )
            )
        chunks = []
        position = len(PNG_SIGNATURE)
        while position < len(buffer):
            logger.debug('Decoding chunk at byte %d', position)
            chunk = Chunk.decode(buffer[position:])
            chunks.append(chunk)
            position += CHUNK_OVERHEAD + chunk.length
        logger.debug('Decoded %d chunks from %d bytes', len(chunks), position)
        return cls(chunks)

    @property
    def chunks(self):
        """
        The chunks in file order, as a tuple. Take a fresh copy after
        appending or removing.
        """
        return tuple(self._chunks)

    def append_chunk(self, chunk):
        if not isinstance(chunk, Chunk):
            raise TypeError("Expected a Chunk, got {!r}".format(chunk))
        logger.debug('Appending %r', chunk)
        self._chunks.append(chunk)

    def chunk_by_type(self, chunk_type):
        """
        Return the first chunk with the type ``chunk_type`` (4
        characters, like ``'tEXt'``).

        :raises exceptions.ChunkNotFound: If there is no such chunk
        """
        return self._chunks[self._index_of(chunk_type)]

    def remove_chunk(self, chunk_type):
        """
        Remove and return the first chunk with the type ``chunk_type``
        (4 characters, like ``'tEXt'``). The other chunks keep their
        order.

        :raises exceptions.ChunkNotFound: If there is no such chunk
        """
        chunk = self._chunks.pop(self._index_of(chunk_type))
        logger.debug('Removed %r', chunk)
        return chunk

    def _index_of(self, chunk_type):
        wanted = ChunkType.from_text(chunk_type)
        for index, chunk in enumerate(self._chunks):
            if chunk.chunk_type == wanted:
                return index
        raise exc.ChunkNotFound(
            "no such chunk: {code}".format(code=wanted))

    def as_bytes(self):
        return b''.join(
            [PNG_SIGNATURE] + [chunk.as_bytes() for chunk in self._chunks])

    __bytes__ = as_bytes
