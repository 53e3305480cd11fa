"""
Tests for the Sanitizer and Chunker stages.

Both stages are pure string transformations, so these run without any
network access or API key.
"""

import pytest

from html_translator.sanitizer import Sanitizer, sanitize
from html_translator.chunker import Chunker, chunk_html, split_points


SAMPLES = [
    "",
    "plain text, no markup at all",
    "<p>A</p><p>B</p>",
    "intro text <p>A</p>\n\n<div class=\"x\">B</div>",
    '<article id="post-1" class="post" data-id="42">\n  <h1 style="color:red">Title</h1>\n'
    '  <p aria-label="lead" role="note">Lead   paragraph</p>\n  <ul><li>one</li><li>two</li></ul>\n'
    '  <pre>code   here</pre>\n</article>',
    '<P CLASS="big">Upper</P><TABLE><TR><TD>cell</TD></TR></TABLE>',
    '<p id="a"title="b">glued</p><p data-a="1"class="x">glued twice</p>',
    '<p title="a > b" class="c">quoted bracket</p><figure><figcaption>cap</figcaption></figure>',
]


# --- Sanitizer ---

def test_sanitize_strips_targeted_attributes():
    html = ('<p class="x" style="color:red" id="a" data-foo="1" '
            'aria-label="l" role="note" title="keep">Hi  there\n</p>')
    assert sanitize(html) == '<p title="keep">Hi there </p>'


def test_sanitize_keeps_untargeted_attributes_and_tag_names():
    html = '<DIV CLASS="wrapper"><a href="/x?id=1" aria-hidden=true>link</a><img src="a.png" data-src="b.png"></DIV>'
    assert sanitize(html) == '<DIV><a href="/x?id=1">link</a><img src="a.png"></DIV>'


def test_sanitize_single_quoted_and_spaced_values():
    html = "<section class = 'hero' style='x'>text</section>"
    assert sanitize(html) == "<section>text</section>"


def test_sanitize_does_not_touch_text_content():
    """Attribute-like prose outside a start tag is content, not markup."""
    html = '<code>element class="x" id="y"</code>'
    assert sanitize(html) == html


def test_sanitize_does_not_match_attribute_name_prefixes():
    html = '<td idx="3" classic="yes" roles="r">v</td>'
    assert sanitize(html) == html


def test_sanitize_leaves_quoted_values_of_other_attributes_alone():
    html = '<abbr title="uses class=big and id=x">t</abbr>'
    assert sanitize(html) == html
    assert sanitize('<p title="a > b" class="c">q</p>') == '<p title="a > b">q</p>'


def test_sanitize_glued_attributes_keep_a_separator():
    assert sanitize('<p id="a"title="b">x</p>') == '<p title="b">x</p>'
    assert sanitize('<p data-a="1"class="x">y</p>') == '<p>y</p>'


def test_sanitize_collapses_whitespace():
    assert sanitize("<p>a \n\t b</p>\n\n<p>c</p>") == "<p>a b</p> <p>c</p>"


@pytest.mark.parametrize("html", SAMPLES)
def test_sanitize_is_idempotent(html):
    once = sanitize(html)
    assert sanitize(once) == once


def test_sanitize_newline_before_attribute_is_idempotent():
    """A newline separator must be treated like a space on the first pass."""
    once = sanitize('<p\nclass="x">a</p>')
    assert once == "<p>a</p>"
    assert sanitize(once) == once


def test_sanitizer_instance_matches_module_function():
    html = SAMPLES[4]
    assert Sanitizer().sanitize(html) == sanitize(html)


# --- Chunker ---

def test_two_paragraphs_fit_in_one_chunk():
    assert chunk_html("<p>A</p><p>B</p>", 1000) == ["<p>A</p><p>B</p>"]


def test_two_paragraphs_with_tiny_budget_split_in_two():
    chunks = chunk_html("<p>A</p><p>B</p>", 1)
    assert chunks == ["<p>A</p>", "<p>B</p>"]
    assert "".join(chunks) == "<p>A</p><p>B</p>"


@pytest.mark.parametrize("html", [
    "",
    "no blocks here",
    "<p>only one block</p>",
    "<span>inline</span><p>one block</p><em>tail</em>",
])
def test_fewer_than_two_boundaries_returns_input_unchanged(html):
    assert chunk_html(html, 1) == [html]


def test_greedy_packing_fills_up_to_budget():
    html = "<p>aa</p>" * 3
    assert chunk_html(html, 18) == ["<p>aa</p><p>aa</p>", "<p>aa</p>"]


def test_oversized_block_is_not_split():
    big = "<p>" + "x" * 50 + "</p>"
    html = "<p>short</p>" + big + "<p>s</p>"
    chunks = chunk_html(html, 20)
    assert chunks == ["<p>short</p>", big, "<p>s</p>"]


def test_prologue_is_prepended_to_first_chunk():
    chunks = chunk_html("intro <p>A</p><p>B</p>", 1)
    assert chunks == ["intro <p>A</p>", "<p>B</p>"]


def test_whitespace_prologue_is_not_dropped():
    html = " <p>A</p><p>B</p>"
    assert "".join(chunk_html(html, 1)) == html


def test_boundaries_only_at_block_start_tags():
    html = "<p>A</p><picture>img</picture><param><p>B</p>"
    assert split_points(html) == [0, html.index("<p>B")]
    assert chunk_html(html, 1) == ["<p>A</p><picture>img</picture><param>", "<p>B</p>"]


def test_boundaries_are_case_insensitive_and_cover_block_tags():
    html = ("<P>a</P><div>b</div><blockquote>c</blockquote><h3>d</h3><li>e</li>"
            "<tr>f</tr><section>g</section><article>h</article><figure>i</figure>"
            "<figcaption>j</figcaption><pre>k</pre><ul>l</ul><ol>m</ol><table>n</table>")
    assert len(split_points(html)) == 14
    assert len(chunk_html(html, 1)) == 14


@pytest.mark.parametrize("html", SAMPLES)
@pytest.mark.parametrize("max_length", [1, 10, 40, 3000])
def test_chunks_concatenate_to_input(html, max_length):
    chunks = chunk_html(html, max_length)
    assert "".join(chunks) == html
    assert len(chunks) >= 1
    if html:
        assert all(chunks)


def test_chunks_never_end_inside_a_tag():
    html = sanitize(SAMPLES[4])
    for chunk in chunk_html(html, 10):
        assert chunk.count("<") == chunk.count(">")


def test_chunker_split_returns_indexed_models():
    chunks = Chunker(max_length=1).split("<p>A</p><p>B</p><p>C</p>")
    assert [c.index for c in chunks] == [0, 1, 2]
    assert [c.content for c in chunks] == ["<p>A</p>", "<p>B</p>", "<p>C</p>"]
    assert chunks[0].length == 8


def test_chunker_rejects_non_positive_budget():
    with pytest.raises(ValueError):
        Chunker(max_length=0)


@pytest.mark.parametrize("max_length", [0, -1])
def test_chunk_html_with_non_positive_budget_does_not_fail(max_length):
    """Every block lands in its own chunk; nothing is raised or lost."""
    html = "intro<p>A</p><p>B</p>"
    assert chunk_html(html, max_length) == ["intro<p>A</p>", "<p>B</p>"]
    assert chunk_html("<p>only</p>", max_length) == ["<p>only</p>"]
