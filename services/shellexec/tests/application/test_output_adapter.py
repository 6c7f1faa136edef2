from pathlib import Path

import pytest

from shellexec.application.output_adapter import convert, resolve_virtual_path
from shellexec.domain.errors import ConversionFailed, MissingFilename, UnsupportedOutputKind
from shellexec.domain.output_kind import OutputKind
from shellexec.domain.streams import ByteStream, VirtualFileStream


def test_text_is_decoded_and_trimmed():
    assert convert(b"  hi \n") == "hi"
    assert convert(b"ok", OutputKind.TEXT) == "ok"


def test_text_honours_encoding():
    assert convert("héllo".encode("latin-1"), "text", encoding="latin-1") == "héllo"


def test_undecodable_bytes_are_replaced():
    assert convert(b"caf\xe9\n", "text") == "caf\ufffd"


def test_unknown_encoding_keeps_cause():
    with pytest.raises(ConversionFailed) as exc:
        convert(b"ok", "text", encoding="no-such-codec")
    assert isinstance(exc.value.cause, LookupError)


def test_binary_is_untrimmed_bytes():
    value = convert(b" ok\n", OutputKind.BINARY)
    assert value == b" ok\n"
    assert isinstance(value, bytes)


def test_stream_yields_single_chunk():
    value = convert(b"ok", OutputKind.STREAM)
    assert isinstance(value, ByteStream)
    assert list(value) == [bytes.fromhex("6f6b")]
    assert value.ended


def test_virtual_file_relative_name_is_made_absolute(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    value = convert(b"ok", OutputKind.VIRTUAL_FILE, "out.txt")
    assert isinstance(value, VirtualFileStream)
    (file,) = list(value)
    assert file.path.is_absolute()
    assert file.path == Path.cwd() / "out.txt"
    assert file.contents == b"ok"
    assert value.ended


def test_virtual_file_keeps_absolute_name(tmp_path):
    target = tmp_path / "nested" / "stats.json"
    (file,) = list(convert(b"{}", OutputKind.VIRTUAL_FILE, str(target)))
    assert file.path == target


def test_virtual_file_joins_explicit_cwd(tmp_path):
    (file,) = list(convert(b"x", OutputKind.VIRTUAL_FILE, "a/b.txt", cwd=tmp_path))
    assert file.path == tmp_path / "a" / "b.txt"
    assert file.cwd == tmp_path


def test_virtual_file_without_name_fails():
    with pytest.raises(MissingFilename):
        convert(b"x", OutputKind.VIRTUAL_FILE)


def test_unsupported_kind():
    with pytest.raises(UnsupportedOutputKind):
        convert(b"x", "xml")


def test_resolve_virtual_path(tmp_path):
    assert resolve_virtual_path("/abs/file.txt") == Path("/abs/file.txt")
    assert resolve_virtual_path("rel.txt", tmp_path) == tmp_path / "rel.txt"
