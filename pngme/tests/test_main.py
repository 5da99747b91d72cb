# pylint: disable=redefined-outer-name
import pytest

from pngme.tests.test_png import ONE_PIXEL_CHUNKS, png_bytes


@pytest.fixture
def png_path(tmp_path):
    path = tmp_path / 'pixel.png'
    path.write_bytes(png_bytes(ONE_PIXEL_CHUNKS))
    return str(path)


def run(*argv):
    from pngme.main import main

    return main(list(argv))


def test_encode_decode(png_path, capsys):
    assert run('encode', png_path, 'RuSt', 'hello there') == 0
    assert run('decode', png_path, 'RuSt') == 0
    out, _ = capsys.readouterr()
    assert out == 'Message: hello there\n'


def test_encode_output(png_path, tmp_path, capsys):
    output = str(tmp_path / 'copy.png')
    assert run('encode', png_path, 'RuSt', 'copied', '-o', output) == 0
    assert run('decode', output, 'RuSt') == 0
    assert run('decode', png_path, 'RuSt') == 1
    out, _ = capsys.readouterr()
    assert out == 'Message: copied\n'


def test_remove(png_path, capsys):
    run('encode', png_path, 'RuSt', 'gone soon')
    assert run('remove', png_path, 'RuSt') == 0
    out, _ = capsys.readouterr()
    assert out.startswith('Removed:\nChunk {\n')
    assert '   Type: RuSt\n' in out
    assert run('decode', png_path, 'RuSt') == 1


def test_print(png_path, capsys):
    run('encode', png_path, 'RuSt', 'shown')
    run('encode', png_path, 'tEXt', 'hidden from print')
    assert run('print', png_path) == 0
    out, _ = capsys.readouterr()
    assert out.startswith('Chunks: 1\n')
    assert '   Type: RuSt\n' in out
    assert 'tEXt' not in out


def test_print_all(png_path, capsys):
    assert run('print', png_path, '--all') == 0
    out, _ = capsys.readouterr()
    assert out.startswith('Chunks: 3\n')
    for code in ['IHDR', 'IDAT', 'IEND']:
        assert '   Type: {}\n'.format(code) in out


def test_decode_missing_chunk(png_path, caplog):
    assert run('decode', png_path, 'RuSt') == 1
    assert 'decode failed: no such chunk: RuSt' in caplog.text


def test_invalid_chunk_type(png_path, caplog):
    assert run('encode', png_path, 'R1St', 'nope') == 1
    assert 'encode failed' in caplog.text


def test_missing_file(tmp_path, caplog):
    assert run('print', str(tmp_path / 'nowhere.png')) == 1
    assert 'print failed' in caplog.text


def test_not_a_png(tmp_path, caplog):
    path = tmp_path / 'fake.png'
    path.write_bytes(b'GIF89a' + bytes(20))
    assert run('decode', str(path), 'RuSt') == 1
    assert 'invalid header' in caplog.text


def test_command_required(capsys):
    with pytest.raises(SystemExit) as excinfo:
        run()
    assert excinfo.value.code == 2


def test_version(capsys):
    from pngme.version import __version__

    with pytest.raises(SystemExit) as excinfo:
        run('--version')
    assert excinfo.value.code == 0
    out, _ = capsys.readouterr()
    assert out == 'pngme {}\n'.format(__version__)


def test_encode_undecodable_message(png_path, caplog):
    assert run('encode', png_path, 'RuSt', 'bad\udcff') == 0
    assert run('decode', png_path, 'RuSt') == 1
    assert 'not valid UTF-8' in caplog.text
