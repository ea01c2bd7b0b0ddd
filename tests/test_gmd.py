"""Tests for the GMD value tree and its XML codec."""

import io

import pytest

from gd_codec.codec.gmd import (
    GmdBool,
    GmdDict,
    GmdInt,
    GmdReal,
    GmdStr,
    format_f32,
    gmd_from_bytes,
    gmd_from_python,
    gmd_to_bytes,
    to_f32,
    write_gmd,
)
from gd_codec.errors import (
    GmdError,
    GmdIoError,
    GmdXmlError,
    InvalidIntegerError,
    InvalidRealError,
    UnexpectedCDataError,
    UnexpectedEmptyError,
    UnexpectedEndError,
    UnexpectedEofError,
    UnexpectedPIError,
    UnexpectedStartError,
    UnexpectedTextError,
)

SAMPLE = (
    b'<?xml version="1.0"?><plist version="1.0" gjver="2.0"><dict>'
    b"<k>awawa</k><i>68</i><k>auaua</k><t /><k>avava</k><f /><k>ayaya</k><s>:]</s>"
    b"</dict></plist>"
)


def sample_tree() -> GmdDict:
    return GmdDict(
        {
            "awawa": GmdInt(68),
            "auaua": GmdBool(True),
            "avava": GmdBool(False),
            "ayaya": GmdStr(":]"),
        }
    )


class TestRead:
    """Parsing documents into value trees."""

    def test_sample_document(self) -> None:
        assert gmd_from_bytes(SAMPLE) == sample_tree()

    def test_bare_value_without_plist(self) -> None:
        assert gmd_from_bytes(b"<i>-12</i>") == GmdInt(-12)
        assert gmd_from_bytes(b"<t/>") == GmdBool(True)

    def test_long_tag_names(self) -> None:
        data = (
            b"<plist><dictionary><key>a</key><integer>1</integer>"
            b"<key>b</key><real>1.5</real><key>c</key><string>x</string>"
            b"<key>d</key><true/><key>e</key><false/><key>f</key><d></d></dictionary></plist>"
        )
        assert gmd_from_bytes(data) == GmdDict(
            {
                "a": GmdInt(1),
                "b": GmdReal(1.5),
                "c": GmdStr("x"),
                "d": GmdBool(True),
                "e": GmdBool(False),
                "f": GmdDict(),
            }
        )

    def test_nested_dicts(self) -> None:
        data = b"<plist><d><k>outer</k><d><k>inner</k><s>v</s></d></d></plist>"
        assert gmd_from_bytes(data) == GmdDict({"outer": GmdDict({"inner": GmdStr("v")})})

    def test_empty_dict(self) -> None:
        assert gmd_from_bytes(b"<plist><dict></dict></plist>") == GmdDict()
        assert gmd_from_bytes(b"<plist><dict/></plist>") == GmdDict()

    def test_duplicate_key_last_wins(self) -> None:
        data = b"<d><k>a</k><i>1</i><k>a</k><i>2</i></d>"
        assert gmd_from_bytes(data) == GmdDict({"a": GmdInt(2)})

    def test_comments_and_doctype_skipped(self) -> None:
        data = (
            b'<?xml version="1.0"?><!DOCTYPE plist><!-- header -->'
            b"<plist><!-- before --><d><k>a</k><!-- between --><i>1</i></d></plist>"
        )
        assert gmd_from_bytes(data) == GmdDict({"a": GmdInt(1)})

    def test_entities_decoded(self) -> None:
        data = b"<s>a &amp; b &lt;c&gt;</s>"
        assert gmd_from_bytes(data) == GmdStr("a & b <c>")

    def test_whitespace_between_elements(self) -> None:
        data = b"<plist>\n  <dict>\n    <k>a</k>\n    <i>1</i>\n  </dict>\n</plist>\n"
        assert gmd_from_bytes(data) == GmdDict({"a": GmdInt(1)})

    def test_whitespace_strict(self) -> None:
        data = b"<plist>\n  <dict></dict></plist>"
        with pytest.raises(UnexpectedTextError):
            gmd_from_bytes(data, skip_whitespace=False)

    def test_string_keeps_whitespace(self) -> None:
        assert gmd_from_bytes(b"<s>  padded  </s>") == GmdStr("  padded  ")

    def test_empty_string_forms(self) -> None:
        assert gmd_from_bytes(b"<s></s>") == GmdStr("")
        assert gmd_from_bytes(b"<s/>") == GmdStr("")

    def test_real_is_32_bit(self) -> None:
        value = gmd_from_bytes(b"<r>0.1</r>")
        assert value == GmdReal(to_f32(0.1))
        assert value.value != 0.1


class TestReadErrors:
    """Structural and value errors abort the parse."""

    def test_unknown_tag(self) -> None:
        with pytest.raises(UnexpectedStartError) as exc_info:
            gmd_from_bytes(b"<plist><array></array></plist>")
        assert exc_info.value.name == "array"

    def test_unknown_empty_tag(self) -> None:
        with pytest.raises(UnexpectedEmptyError) as exc_info:
            gmd_from_bytes(b"<plist><d><k>a</k><nope/></d></plist>")
        assert exc_info.value.name == "nope"

    def test_text_where_key_expected(self) -> None:
        with pytest.raises(UnexpectedTextError) as exc_info:
            gmd_from_bytes(b"<d>this text does not belong here at all<k>a</k><i>1</i></d>")
        assert exc_info.value.excerpt == "this text does no..."
        assert len(exc_info.value.excerpt) == 20

    def test_short_text_not_truncated(self) -> None:
        with pytest.raises(UnexpectedTextError) as exc_info:
            gmd_from_bytes(b"<d>oops</d>")
        assert exc_info.value.excerpt == "oops"

    def test_value_missing_after_key(self) -> None:
        with pytest.raises(UnexpectedEndError) as exc_info:
            gmd_from_bytes(b"<d><k>a</k></d>")
        assert exc_info.value.name == "d"

    def test_non_key_in_key_position(self) -> None:
        with pytest.raises(UnexpectedStartError):
            gmd_from_bytes(b"<d><i>1</i></d>")

    def test_empty_plist(self) -> None:
        with pytest.raises(UnexpectedEndError):
            gmd_from_bytes(b"<plist></plist>")

    def test_cdata_rejected(self) -> None:
        with pytest.raises(UnexpectedCDataError):
            gmd_from_bytes(b"<d><k>a</k><s><![CDATA[x]]></s></d>")

    def test_processing_instruction_rejected(self) -> None:
        with pytest.raises(UnexpectedPIError):
            gmd_from_bytes(b"<plist><?php echo 1 ?><d></d></plist>")

    def test_truncated_document(self) -> None:
        with pytest.raises(UnexpectedEofError):
            gmd_from_bytes(b'<?xml version="1.0"?><plist><dict><k>a</k>')

    def test_empty_document(self) -> None:
        with pytest.raises(UnexpectedEofError):
            gmd_from_bytes(b"")

    def test_malformed_xml(self) -> None:
        with pytest.raises(GmdXmlError):
            gmd_from_bytes(b"<plist><d></plist>")

    def test_nested_element_inside_string(self) -> None:
        with pytest.raises(UnexpectedStartError):
            gmd_from_bytes(b"<s>a<b>c</b></s>")

    @pytest.mark.parametrize("raw", ["abc", "1.5", "", " 1", "2147483648", "1_000"])
    def test_invalid_integer(self, raw: str) -> None:
        with pytest.raises(InvalidIntegerError) as exc_info:
            gmd_from_bytes(f"<i>{raw}</i>".encode())
        assert exc_info.value.raw == raw

    def test_zero_padded_integer(self) -> None:
        """Leading zeros do not count toward the digit limit."""
        assert gmd_from_bytes(b"<i>" + b"0" * 5000 + b"7</i>") == GmdInt(7)
        assert gmd_from_bytes(b"<i>-" + b"0" * 5000 + b"7</i>") == GmdInt(-7)

    def test_huge_integer(self) -> None:
        raw = "9" * 5000
        with pytest.raises(InvalidIntegerError) as exc_info:
            gmd_from_bytes(f"<i>{raw}</i>".encode())
        assert exc_info.value.raw == raw

    @pytest.mark.parametrize("raw", [b"<t>garbage</t>", b"<f>0</f>", b"<true>yes</true>"])
    def test_text_inside_boolean(self, raw: bytes) -> None:
        with pytest.raises(UnexpectedTextError):
            gmd_from_bytes(raw)

    def test_whitespace_inside_boolean(self) -> None:
        assert gmd_from_bytes(b"<f> </f>") == GmdBool(False)

    @pytest.mark.parametrize("raw", ["abc", "", "1.0.0", "1_0"])
    def test_invalid_real(self, raw: str) -> None:
        with pytest.raises(InvalidRealError) as exc_info:
            gmd_from_bytes(f"<r>{raw}</r>".encode())
        assert exc_info.value.raw == raw

    def test_all_errors_are_gmd_errors(self) -> None:
        assert issubclass(InvalidIntegerError, GmdError)
        assert issubclass(UnexpectedEofError, GmdError)


class TestWrite:
    """Serializing value trees."""

    def test_document_shape(self) -> None:
        data = gmd_to_bytes(GmdDict({"a": GmdBool(True)}))
        assert data.startswith(b'<?xml version="1.0"?><plist version="1.0" gjver="2.0">')
        assert data.endswith(b"</plist>")
        assert b"<k>a</k><t />" in data

    def test_scalars(self) -> None:
        data = gmd_to_bytes(GmdDict({"s": GmdStr("x&y"), "i": GmdInt(-5), "r": GmdReal(2.5)}))
        assert b"<s>x&amp;y</s>" in data
        assert b"<i>-5</i>" in data
        assert b"<r>2.5</r>" in data

    def test_write_to_stream(self) -> None:
        buffer = io.BytesIO()
        write_gmd(GmdInt(1), buffer)
        assert buffer.getvalue() == gmd_to_bytes(GmdInt(1))

    def test_stream_failure(self) -> None:
        class BrokenStream(io.RawIOBase):
            def writable(self) -> bool:
                return True

            def write(self, data) -> int:
                raise OSError("disk full")

        with pytest.raises(GmdIoError):
            write_gmd(GmdInt(1), BrokenStream())


class TestRoundTrip:
    """parse(write(tree)) == tree, ignoring dict order."""

    def test_sample_tree(self) -> None:
        tree = sample_tree()
        assert gmd_from_bytes(gmd_to_bytes(tree)) == tree

    def test_sample_document(self) -> None:
        assert gmd_from_bytes(gmd_to_bytes(gmd_from_bytes(SAMPLE))) == sample_tree()

    def test_every_kind(self) -> None:
        tree = GmdDict(
            {
                "empty": GmdDict(),
                "blank": GmdStr(""),
                "": GmdStr("empty key"),
                "text": GmdStr("line\nbreak <tag> & \"quotes\" ☃"),
                "min": GmdInt(-(2**31)),
                "max": GmdInt(2**31 - 1),
                "reals": GmdDict(
                    {
                        "tenth": GmdReal(0.1),
                        "neg": GmdReal(-1234.5678),
                        "tiny": GmdReal(1e-30),
                        "huge": GmdReal(3e38),
                        "zero": GmdReal(0.0),
                    }
                ),
                "nested": GmdDict({"deeper": GmdDict({"t": GmdBool(True), "f": GmdBool(False)})}),
            }
        )
        assert gmd_from_bytes(gmd_to_bytes(tree)) == tree

    def test_order_ignored(self) -> None:
        first = GmdDict({"a": GmdInt(1), "b": GmdInt(2)})
        second = GmdDict({"b": GmdInt(2), "a": GmdInt(1)})
        assert first == second
        assert gmd_from_bytes(gmd_to_bytes(second)) == first


class TestPythonConversion:
    """Plain-data helpers."""

    def test_from_python(self) -> None:
        tree = gmd_from_python({"awawa": 68, "auaua": True, "avava": False, "ayaya": ":]"})
        assert tree == sample_tree()

    def test_to_python(self) -> None:
        assert sample_tree().to_python() == {
            "awawa": 68,
            "auaua": True,
            "avava": False,
            "ayaya": ":]",
        }

    def test_unsupported_type(self) -> None:
        with pytest.raises(TypeError):
            gmd_from_python({"a": [1, 2]})

    def test_int_range(self) -> None:
        with pytest.raises(ValueError):
            GmdInt(2**31)

    def test_format_f32_shortest(self) -> None:
        assert format_f32(to_f32(0.1)) == "0.1"
        assert format_f32(68.0) == "68"

    def test_dict_is_unhashable(self) -> None:
        with pytest.raises(TypeError):
            hash(GmdDict({"a": GmdInt(1)}))
        assert hash(GmdInt(1)) == hash(GmdInt(1))
