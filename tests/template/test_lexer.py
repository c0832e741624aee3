"""
Tests for the template lexer.

Covers comment removal, splitting by tags and dropping empty slices.
"""

from tplc.config import Delimiters
from tplc.template.fragments import FragmentKind
from tplc.template.lexer import TemplateLexer, tokenize


def kinds(fragments):
    return [f.kind for f in fragments]


class TestTemplateLexer:

    def test_empty_template(self):
        assert tokenize("") == []

    def test_plain_text(self):
        fragments = tokenize("Hello, world!")
        assert len(fragments) == 1
        assert fragments[0].kind is FragmentKind.TEXT
        assert fragments[0].raw == "Hello, world!"

    def test_text_and_tags_in_order(self):
        fragments = tokenize("Hi {% if cond %}yes{% else %}no{% endif %}!")
        assert [f.raw for f in fragments] == [
            "Hi ", "{% if cond %}", "yes", "{% else %}", "no", "{% endif %}", "!",
        ]
        assert kinds(fragments) == [
            FragmentKind.TEXT, FragmentKind.OPEN_BLOCK, FragmentKind.TEXT,
            FragmentKind.OPEN_BLOCK, FragmentKind.TEXT, FragmentKind.CLOSE_BLOCK,
            FragmentKind.TEXT,
        ]

    def test_adjacent_tags_produce_no_empty_text(self):
        fragments = tokenize("{{ a }}{{ b }}")
        assert kinds(fragments) == [FragmentKind.VARIABLE, FragmentKind.VARIABLE]

    def test_tags_are_non_greedy(self):
        fragments = tokenize("{{ a }} and {{ b }}")
        assert [f.clean for f in fragments] == ["a", " and ", "b"]


class TestComments:

    def test_comment_removed(self):
        assert tokenize("{# c #}{{ x }}") == tokenize("{{ x }}")

    def test_comment_inside_text(self):
        fragments = tokenize("a{# note #}b")
        assert [f.raw for f in fragments] == ["ab"]

    def test_multiline_comment(self):
        fragments = tokenize("a{# line 1\nline 2 #}b")
        assert [f.raw for f in fragments] == ["ab"]

    def test_comments_do_not_nest(self):
        # First end marker closes the comment, the rest is text
        fragments = tokenize("{# outer {# inner #} tail #}")
        assert [f.raw for f in fragments] == [" tail #}"]

    def test_comment_hides_tags(self):
        fragments = tokenize("{# {% if x %} #}text")
        assert [f.raw for f in fragments] == ["text"]

    def test_strip_comments_is_idempotent(self):
        lexer = TemplateLexer()
        once = lexer.strip_comments("x{# a #}y{# b #}z")
        assert once == "xyz"
        assert lexer.strip_comments(once) == once


class TestMalformedDelimiters:

    def test_unterminated_variable_is_text(self):
        fragments = tokenize("Hello {{ name")
        assert kinds(fragments) == [FragmentKind.TEXT]
        assert fragments[0].raw == "Hello {{ name"

    def test_unterminated_comment_is_text(self):
        fragments = tokenize("a {# b")
        assert [f.raw for f in fragments] == ["a {# b"]

    def test_tags_do_not_span_lines(self):
        fragments = tokenize("{% if\nx %}")
        assert kinds(fragments) == [FragmentKind.TEXT]


class TestCustomDelimiters:

    def test_regex_special_characters_are_escaped(self):
        delims = Delimiters(
            comment_start="(*", comment_end="*)",
            var_start="[[", var_end="]]",
            block_start="<?", block_end="?>",
        )
        lexer = TemplateLexer(delims)
        fragments = lexer.tokenize("(* gone *)[[ x ]]<? if y ?>z<? endif ?>")
        assert [(f.kind, f.clean) for f in fragments] == [
            (FragmentKind.VARIABLE, "x"),
            (FragmentKind.OPEN_BLOCK, "if y"),
            (FragmentKind.TEXT, "z"),
            (FragmentKind.CLOSE_BLOCK, "endif"),
        ]

    def test_default_tags_are_text_with_custom_delimiters(self):
        delims = Delimiters(var_start="<<", var_end=">>")
        fragments = TemplateLexer(delims).tokenize("{{ x }}<< y >>")
        assert kinds(fragments) == [FragmentKind.TEXT, FragmentKind.VARIABLE]


class TestUnmatchedTagLookalikes:

    def test_broken_tag_between_tags_stays_text(self):
        fragments = tokenize("{{ a }}{% if\n x %}{{ b }}")
        assert [(f.kind, f.raw) for f in fragments] == [
            (FragmentKind.VARIABLE, "{{ a }}"),
            (FragmentKind.TEXT, "{% if\n x %}"),
            (FragmentKind.VARIABLE, "{{ b }}"),
        ]

    def test_broken_variable_stays_text(self):
        fragments = tokenize("{{ a\n}}")
        assert [(f.kind, f.clean) for f in fragments] == [(FragmentKind.TEXT, "{{ a\n}}")]
