import pytest

from cardsmith.content.nodes import MathInline, Text, iter_math_units, parse_fragment, serialize
from cardsmith.content.tokenizer import (
    MathTokenizer,
    normalize_math_units,
    split_inline_math,
    strip_math_delimiters,
    tokenize,
    tokenize_fragment,
)


def _units(fragment):
    return list(iter_math_units(fragment))


def test_tokenize_energy_sentence() -> None:
    fragment = tokenize_fragment(parse_fragment("Energy: $E=mc^2$ is huge"))

    before, unit, after = fragment.children
    assert before == Text("Energy: ")
    assert isinstance(unit, MathInline)
    assert unit.latex == "E=mc^2"
    assert unit.display is False
    assert unit.fallback == "$E=mc^2$"
    assert after == Text(" is huge")


def test_tokenize_serializes_math_unit() -> None:
    assert tokenize("<p>Energy: $E=mc^2$ is huge</p>") == (
        '<p>Energy: <span data-type="inlineMath" data-latex="E=mc^2" '
        'data-evaluate="no" data-display="no">$E=mc^2$</span> is huge</p>'
    )


def test_tokenize_keeps_sibling_nodes() -> None:
    result = tokenize("<p><em>see $x$</em> and $y$, <strong>done</strong></p>")
    fragment = parse_fragment(result)

    assert [unit.latex for unit in _units(fragment)] == ["x", "y"]
    assert "<strong>done</strong>" in result
    assert result.startswith("<p><em>see <span")


@pytest.mark.parametrize(
    "markup",
    [
        "Energy: $E=mc^2$ is huge",
        "<p>$a$ and $b$ and $c$</p>",
        "<p>Cost $5 only</p>",
        "<p>$$x$$</p>",
        "<p>Amp &amp; $a &lt; b$</p>",
        '<p><span data-type="inlineMath" data-latex="$$z$$">$$z$$</span></p>',
        '<aside class="flashcard-box"><p>Box $k$<br>line</p></aside>',
        "<ul><li>$i$</li><li>plain</li></ul>",
        "<script>var s = '$a$';</script>",
        "<style>.price::after { content: '$x$'; }</style><p>$y$</p>",
        "",
    ],
)
def test_tokenize_is_idempotent(markup: str) -> None:
    once = tokenize(markup)

    assert tokenize(once) == once


def test_unmatched_delimiter_is_left_as_text() -> None:
    assert tokenize("<p>Cost $5 only</p>") == "<p>Cost $5 only</p>"


def test_double_delimiter_is_not_special_cased() -> None:
    pieces = split_inline_math("$$x$$")

    assert [type(piece) for piece in pieces] == [Text, MathInline, Text]
    assert pieces[1].latex == "x"


def test_existing_units_are_not_rescanned() -> None:
    markup = '<p><span data-type="inlineMath">$y$</span></p>'

    fragment = tokenize_fragment(parse_fragment(markup))

    (unit,) = _units(fragment)
    assert unit.latex == "y"


def test_normalize_strips_redundant_delimiters() -> None:
    fragment = parse_fragment(
        '<span data-type="inlineMath" data-latex="$a$"></span>'
        '<span data-type="inlineMath" data-latex="$$b$$"></span>'
        '<span data-type="inline-math" data-latex="c"></span>'
    )

    normalize_math_units(fragment)

    assert [unit.latex for unit in _units(fragment)] == ["a", "b", "c"]


def test_strip_math_delimiters_only_strips_wrapping() -> None:
    assert strip_math_delimiters("$x$") == "x"
    assert strip_math_delimiters("$$x$$") == "x"
    assert strip_math_delimiters("x$") == "x$"
    assert strip_math_delimiters("$") == "$"


def test_tokenizer_object_matches_function() -> None:
    tokenizer = MathTokenizer()
    markup = "<p>$q$</p>"

    assert tokenizer(markup) == tokenize(markup)
    assert tokenizer.tokenize(None) == ""


def test_tokenize_preserves_escaped_expression() -> None:
    result = tokenize("<p>$a &lt; b$</p>")

    assert 'data-latex="a &lt; b"' in result
    assert serialize(parse_fragment(result)) == result


def test_script_and_style_text_is_not_scanned() -> None:
    markup = "<script>var s = '$a$';</script><style>p::after { content: '$b$'; }</style>"

    assert tokenize(markup) == markup
