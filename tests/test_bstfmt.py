import io

import pytest

import bst
import bstfmt


def _escape(data, syntax="plain", width=0, verbose=False, interactive=False):
    out = io.StringIO()
    config = bst.Config(verbose=verbose, interactive=interactive)
    invalid = bstfmt.escape(data, bstfmt.get_syntax(syntax), width, config, out=out)
    return out.getvalue(), invalid


def _strip_framing(text):
    text = text.replace("buffer += ", "").replace('"', "").replace("\n", "")
    return text.replace("\\x", "")


@pytest.mark.parametrize(
    "c, expected",
    [
        (ord("0"), (bstfmt.HEX_DIGIT, 0)),
        (ord("9"), (bstfmt.HEX_DIGIT, 9)),
        (ord("A"), (bstfmt.HEX_DIGIT, 10)),
        (ord("f"), (bstfmt.HEX_DIGIT, 15)),
        (0x0A, (bstfmt.NEWLINE, None)),
        (0x00, (bstfmt.NUL, None)),
        (0xFF, (bstfmt.EOF, None)),
        (ord("g"), (bstfmt.OTHER, None)),
        (ord("G"), (bstfmt.OTHER, None)),
        (ord(" "), (bstfmt.OTHER, None)),
    ],
)
def test_classify(c, expected):
    assert bstfmt.classify(c) == expected


def test_plain_no_width():
    assert _escape(b"414243") == ("\\x41\\x42\\x43\n", 0)


def test_c_no_width():
    assert _escape(b"414243", "c") == ('"\\x41\\x42\\x43"\n', 0)


def test_c_width_one():
    assert _escape(b"414243", "c", 1) == ('"\\x41"\n"\\x42"\n"\\x43"\n', 0)


def test_plain_width_two():
    assert _escape(b"4142434445", "plain", 2) == ("\\x41\\x42\n\\x43\\x44\n\\x45\n", 0)


def test_python_width_two():
    text, _ = _escape(b"41424344", "python", 2)
    assert text == 'buffer += "\\x41\\x42"\nbuffer += "\\x43\\x44"\n'


def test_python_no_width():
    text, _ = _escape(b"4142", "python")
    assert text == 'buffer += "\\x41\\x42"\n'


def test_verbose_preambles():
    text, _ = _escape(b"41", "c", verbose=True)
    assert text == 'unsigned char buffer[] =\n"\\x41"\n'
    text, _ = _escape(b"41", "python", verbose=True)
    assert text == 'buffer = ""\nbuffer += "\\x41"\n'
    text, _ = _escape(b"41", "plain", verbose=True)
    assert text == "\\x41\n"


def test_odd_length_plain():
    assert _escape(b"4") == ("\\x4\n", 0)


def test_odd_length_is_closed():
    text, _ = _escape(b"414", "c", 1)
    assert text == '"\\x41"\n"\\x4"\n'


def test_empty_input():
    assert _escape(b"") == ("\n", 0)
    assert _escape(b"", "c") == ('""\n', 0)
    assert _escape(b"", "python") == ('buffer += ""\n', 0)


def test_upper_case_digits_kept():
    assert _escape(b"aBcD") == ("\\xaB\\xcD\n", 0)


def test_invalid_characters_counted_and_dropped():
    text, invalid = _escape(b"41 zz42")
    assert text == "\\x41\\x42\n"
    assert invalid == 3


def test_invalid_characters_do_not_break_pairs():
    # The pairing only advances on hex digits.
    text, invalid = _escape(b"4-1", "c", 1)
    assert text == '"\\x41"\n'
    assert invalid == 1


def test_ignored_characters_not_counted():
    text, invalid = _escape(b"41\n\x0042\xff43\n")
    assert text == "\\x41\\x42\\x43\n"
    assert invalid == 0


def test_verbose_warning():
    text, invalid = _escape(b"41xy", verbose=True)
    assert invalid == 2
    assert text == (
        "\\x41\n[-] Warning: 2 non-hexadecimal character(s) detected in input.\n"
    )


def test_no_warning_without_verbose():
    text, invalid = _escape(b"41xy")
    assert invalid == 2
    assert "Warning" not in text


def test_interactive_leading_newline():
    text, _ = _escape(b"41", "c", interactive=True)
    assert text == '\n"\\x41"\n'


def test_wrap_never_splits_pairs():
    text, _ = _escape(b"41\n42\n4344", "plain", 1)
    assert text == "\\x41\n\\x42\n\\x43\n\\x44\n"


def test_wrap_positions():
    data = bstfmt.gen_badchar_sequence()
    text, _ = _escape(data, "c", 16)
    lines = text.splitlines()
    assert len(lines) == 16
    for line in lines[:-1]:
        assert line.startswith('"') and line.endswith('"')
        assert line.count("\\x") == 16
    assert lines[-1].count("\\x") == 15


def test_no_width_is_single_line():
    text, _ = _escape(bstfmt.gen_badchar_sequence(), "python")
    assert text.count("\n") == 1


@pytest.mark.parametrize("syntax", ["plain", "c", "python"])
@pytest.mark.parametrize("width", [0, 1, 3])
def test_framing_round_trip(syntax, width):
    data = b"00deadBEEF7f10"
    text, _ = _escape(data, syntax, width)
    assert _strip_framing(text) == data.decode("ascii")


def test_get_syntax_unknown_is_plain():
    assert bstfmt.get_syntax("java") is bstfmt.PLAIN
    assert bstfmt.get_syntax("C") is bstfmt.PLAIN
    assert bstfmt.get_syntax("c") is bstfmt.C_LITERAL


def test_badchar_sequence():
    seq = bstfmt.gen_badchar_sequence()
    assert len(seq) == bstfmt.BADCHAR_HEX_SEQLEN
    assert seq.startswith(b"010203")
    assert seq.endswith(b"fdfeff")
    pairs = [seq[k : k + 2] for k in range(0, len(seq), 2)]
    assert [int(p, 16) for p in pairs] == list(range(1, 256))


def test_badchar_escaped():
    text, invalid = _escape(bstfmt.gen_badchar_sequence())
    assert invalid == 0
    assert text.startswith("\\x01\\x02")
    assert text.endswith("\\xfe\\xff\n")
    assert text.count("\\x") == 255
