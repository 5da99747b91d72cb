import argparse
import logging
import sys

from pngme import commands
from pngme.exceptions import PNGError
from pngme.version import __version__

logger = logging.getLogger(__name__)


def _encode(args):
    commands.encode(args.path, args.chunk_type, args.message, args.output)


def _decode(args):
    message = commands.decode(args.path, args.chunk_type)
    print('Message: {}'.format(message))


def _remove(args):
    chunk = commands.remove(args.path, args.chunk_type)
    print('Removed:')
    print(chunk)


def _print(args):
    chunks = commands.print_chunks(args.path, show_all=args.all)
    print('Chunks: {}'.format(len(chunks)))
    for chunk in chunks:
        print(chunk)


def make_parser():
    parser = argparse.ArgumentParser(
        prog='pngme',
        description='Put a secret message into a PNG file',
    )
    parser.add_argument(
        '--version', action='version', version='%(prog)s ' + __version__)
    parser.add_argument(
        '-v', '--verbose', action='store_true', help='Log debug output')
    subparsers = parser.add_subparsers(dest='command', metavar='COMMAND')
    subparsers.required = True

    encode = subparsers.add_parser(
        'encode', help='Encode secret message in PNG file')
    encode.add_argument('path', help='The PNG file to encode')
    encode.add_argument('chunk_type', help='The 4 byte chunk type code')
    encode.add_argument('message', help='The secret message to encode')
    encode.add_argument(
        '-o', '--output', help='Write the result here instead of PATH')
    encode.set_defaults(func=_encode)

    decode = subparsers.add_parser(
        'decode', help='Decode secret message in PNG file')
    decode.add_argument('path', help='The PNG file to decode')
    decode.add_argument('chunk_type', help='The 4 byte chunk type code')
    decode.set_defaults(func=_decode)

    remove = subparsers.add_parser(
        'remove', help='Remove secret message in PNG file')
    remove.add_argument('path', help='The PNG file to change')
    remove.add_argument('chunk_type', help='The 4 byte chunk type code')
    remove.set_defaults(func=_remove)

    print_ = subparsers.add_parser(
        'print', help='Print the private chunks in PNG file')
    print_.add_argument('path', help='The PNG file to inspect')
    print_.add_argument(
        '--all', action='store_true', help='Print public chunks too')
    print_.set_defaults(func=_print)

    return parser


def main(argv=None):
    args = make_parser().parse_args(argv)
    level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(stream=sys.stderr, level=level)
    try:
        args.func(args)
    except (PNGError, OSError) as e:
        logger.error('%s failed: %s', args.command, e)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
