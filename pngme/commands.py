"""
The actions behind the command line: reading a PNG file, changing its
chunks, and writing it back.
"""
import logging
import os
import stat
import tempfile

from pngme.models import Chunk, ChunkType
from pngme.png import PNG


logger = logging.getLogger(__name__)


def read_png(path):
    with open(path, 'rb') as pngfile:
        contents = pngfile.read()
    logger.info('Read %d bytes from %s', len(contents), path)
    return PNG.decode(contents)


def write_png(path, png):
    """
    Replace the file at ``path`` with the encoded ``png``.

    The bytes go to a temporary file in the same directory first, which
    is then renamed over ``path``, so readers never see a partial image.
    An existing file keeps its permission bits; a new one gets the
    usual umask-based mode.
    """
    contents = png.as_bytes()
    directory = os.path.dirname(os.path.abspath(path))
    mode = _target_mode(path)
    fd, temp_path = tempfile.mkstemp(
        dir=directory, prefix='.pngme-', suffix='.tmp')
    try:
        os.chmod(temp_path, mode)
        with os.fdopen(fd, 'wb') as tempfile_:
            tempfile_.write(contents)
            tempfile_.flush()
            os.fsync(tempfile_.fileno())
        os.replace(temp_path, path)
    except BaseException:
        os.unlink(temp_path)
        raise
    logger.info('Wrote %d bytes to %s', len(contents), path)


def _target_mode(path):
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        # Same mode open() gives a new file
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def encode(path, chunk_type, message, output=None):
    """
    Append a chunk of type ``chunk_type`` holding ``message`` to the
    PNG at ``path``, and save it to ``output`` (default: ``path``).

    Undecodable command line bytes in ``message`` (lone surrogates)
    are written back as the original raw bytes.

    :return: The new chunk
    """
    png = read_png(path)
    data = message.encode('utf-8', 'surrogateescape')
    chunk = Chunk(ChunkType.from_text(chunk_type), data)
    png.append_chunk(chunk)
    write_png(output if output is not None else path, png)
    return chunk


def decode(path, chunk_type):
    """
    Return the message in the first chunk of type ``chunk_type``.

    :raises exceptions.ChunkNotFound: If there is no such chunk
    :raises exceptions.ChunkEncodingError: If the chunk data isn't text
    """
    png = read_png(path)
    return png.chunk_by_type(chunk_type).data_as_string()


def remove(path, chunk_type):
    """
    Remove the first chunk of type ``chunk_type`` from the PNG at
    ``path``, saving the file in place.

    :return: The removed chunk
    """
    png = read_png(path)
    chunk = png.remove_chunk(chunk_type)
    write_png(path, png)
    return chunk


def print_chunks(path, show_all=False):
    """
    Return the private chunks (the ones a message would normally be
    stashed in) of the PNG at ``path``, or all of them with
    ``show_all``.
    """
    png = read_png(path)
    if show_all:
        return list(png.chunks)
    return [chunk for chunk in png.chunks if not chunk.chunk_type.public]
