"""Tests for gzip + base64 framing."""

import base64
import gzip

import pytest

from gd_codec.codec.framing import compress, decompress
from gd_codec.errors import Base64DecodeError, FramingError, FramingIoError, LevelError


class TestRoundTrip:
    """decompress(compress(s)) == s"""

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "kS38,1_40_2_125;1,1,2,15,3,15;",
            "ünïcödé ☃ text",
            "".join(chr(i) for i in range(256)),
            "x" * 100_000,
        ],
    )
    def test_round_trip(self, text: str) -> None:
        assert decompress(compress(text)) == text

    def test_output_is_url_safe(self) -> None:
        encoded = compress("".join(chr(i) for i in range(256)) * 20)
        assert "+" not in encoded
        assert "/" not in encoded

    def test_deterministic(self) -> None:
        assert compress("same input") == compress("same input")

    def test_missing_padding_accepted(self) -> None:
        encoded = compress("padding test!").rstrip("=")
        assert decompress(encoded) == "padding test!"

    def test_reads_external_gzip(self) -> None:
        """Anything gzip + urlsafe base64 decodes, regardless of level."""
        raw = gzip.compress(b"1,1,2,3", compresslevel=6)
        assert decompress(base64.urlsafe_b64encode(raw).decode("ascii")) == "1,1,2,3"


class TestErrors:
    """Malformed envelopes."""

    def test_invalid_base64(self) -> None:
        with pytest.raises(Base64DecodeError):
            decompress("not base64!!")

    def test_non_ascii_base64(self) -> None:
        with pytest.raises(Base64DecodeError):
            decompress("ÄÖÜß")

    def test_not_gzip(self) -> None:
        encoded = base64.urlsafe_b64encode(b"plain bytes, no gzip").decode("ascii")
        with pytest.raises(FramingIoError):
            decompress(encoded)

    def test_truncated_gzip(self) -> None:
        raw = gzip.compress(b"a" * 1000)
        encoded = base64.urlsafe_b64encode(raw[: len(raw) // 2]).decode("ascii")
        with pytest.raises(FramingIoError):
            decompress(encoded)

    @pytest.mark.parametrize("alphabet_char", ["+", "/"])
    def test_standard_alphabet_rejected(self, alphabet_char: str) -> None:
        # b"\xfb\xff\xbf" is "+/+/" in the standard alphabet
        encoded = base64.b64encode(b"\xfb\xff\xbf").decode("ascii").replace("/", alphabet_char)
        with pytest.raises(Base64DecodeError):
            decompress(encoded)

    def test_padding_only_at_end(self) -> None:
        with pytest.raises(Base64DecodeError):
            decompress("ab=c")

    def test_not_utf8(self) -> None:
        encoded = base64.urlsafe_b64encode(gzip.compress(b"\xff\xfe\xfd")).decode("ascii")
        with pytest.raises(FramingIoError):
            decompress(encoded)

    def test_errors_share_base(self) -> None:
        assert issubclass(Base64DecodeError, FramingError)
        assert issubclass(FramingIoError, LevelError)
