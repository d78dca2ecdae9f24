from sexpfmt.layout import join_leading_breaks, layout, newline_context_for, resolve_skip_count
from sexpfmt.parser import tokenize
from sexpfmt.skip_table import SkipTable
from sexpfmt.types import FormatMode, LayoutResult, Token, TokenKind

ONE = FormatMode.ONE_LINE
MULTI = FormatMode.MULTI_LINE


def lay(src, mode=ONE, **kwargs):
    return layout(tokenize(src), mode, **kwargs)


def joined(src, table=None, arity=None, **kwargs):
    table = SkipTable() if table is None else table
    return join_leading_breaks(lay(src, MULTI, skip_table=table, **kwargs), table, arity)


# --- One-line layout ---

def test_one_line_collapses_whitespace():
    assert lay("(foo\n   bar\t\tbaz   )").text == "(foo bar baz)"


def test_one_line_leaves_nested_lists_alone():
    assert lay("(  foo (bar   baz) )").text == "(foo (bar   baz))"


def test_one_line_no_separator_after_open_or_before_close():
    assert lay("( a )").text == "(a)"


def test_single_atom():
    result = lay("foo", MULTI)
    assert result.text == "foo"
    assert result.breaks == []


def test_quote_stays_attached():
    assert lay("(setq x '  (1 2))").text == "(setq x '(1 2))"


def test_comment_keeps_its_line_break():
    assert lay("(foo ; note\n bar)").text == "(foo ; note\nbar)"


def test_comment_before_close_paren():
    assert lay("(foo ; note\n)").text == "(foo ; note\n)"


def test_dotted_pair():
    assert lay("(a  .   b)").text == "(a . b)"


def test_signed_number_pair_glued():
    tokens = [
        Token(TokenKind.OPEN_PAREN, "(", 0, 1),
        Token(TokenKind.NUMBER, "1", 1, 2),
        Token(TokenKind.SYMBOL, "-", 2, 3),
        Token(TokenKind.SYMBOL, "x", 4, 5),
        Token(TokenKind.CLOSE_PAREN, ")", 5, 6),
    ]
    assert layout(tokens, ONE).text == "(1- x)"


def test_separated_one_and_minus_stay_apart():
    assert lay("(foo 1 - x)").text == "(foo 1 - x)"
    assert lay("(foo 1 + x)").text == "(foo 1 + x)"


# --- Multi-line layout ---

def test_multi_line_breaks_between_arguments():
    result = lay("(foo (a) b)", MULTI)
    assert result.text == "(foo\n(a)\nb)"
    assert result.breaks == [4, 8]
    assert result.mode is MULTI


def test_multi_line_without_nested_list_downgrades():
    multi = lay("(+ 1 2)", MULTI)
    assert multi.text == lay("(+ 1 2)", ONE).text == "(+ 1 2)"
    assert multi.mode is ONE


def test_keyword_pairs_stay_together():
    result = lay("(foo :key (a) :other b)", MULTI)
    assert result.text == "(foo\n:key (a)\n:other b)"
    # only the break after the head is a plain separator
    assert result.breaks == [4]


def test_keyword_pairs_ignored_in_one_line_mode():
    assert lay("(foo :key\n(a))").text == "(foo :key (a))"


def test_keyword_value_with_quote():
    assert lay("(foo :key 'bar (a))", MULTI).text == "(foo\n:key 'bar\n(a))"


def test_dotted_pair_in_multi_line():
    result = lay("(a (b) . c)", MULTI)
    assert result.text == "(a\n(b)\n. c)"


def test_layout_reports_head_and_second_token():
    result = lay("(if (a) (b))", MULTI)
    assert result.head_symbol == "if"
    assert result.second_token_kind is TokenKind.COMPOUND_LIST


def test_layout_preserves_tokens():
    src = "(defun f (x) \"doc (x)\" ; c\n  (let ((y 1)) ,@body 'q . z))"
    for mode in (ONE, MULTI):
        out = lay(src, mode).text
        assert [t.text for t in tokenize(out)] == [t.text for t in tokenize(src)]


# --- Newline context ---

def test_newline_context_from_skip_table():
    assert newline_context_for(tokenize("(if a b)"), SkipTable()) is True
    assert newline_context_for(tokenize("(frobnicate a b)"), SkipTable()) is False


def test_newline_context_from_compound_head():
    assert newline_context_for(tokenize("((lambda (x) x) 1)"), SkipTable([])) is True


def test_newline_context_derived_when_not_given():
    assert lay("(if a b)").newline_context is True
    assert lay("(if a b)", newline_context=False).newline_context is False


# --- Joining leading breaks ---

def test_skip_count_one():
    assert joined("(if (test) (then) (else))") == "(if (test)\n(then)\n(else))"


def test_skip_count_two():
    table = SkipTable([("if", 2)])
    assert joined("(if (test) (then) (else))", table) == "(if (test) (then)\n(else))"


def test_skip_count_zero_keeps_head_alone():
    table = SkipTable([("if", 0)])
    assert joined("(if (test) (then) (else))", table) == "(if\n(test)\n(then)\n(else))"


def test_skip_count_larger_than_breaks():
    table = SkipTable([("if", 9)])
    assert joined("(if (test) (then))", table) == "(if (test) (then))"


def test_arity_fallback():
    arity = {"prog2": 2}.get
    assert joined("(prog2 (a) (b) (c))", SkipTable([]), arity) == "(prog2 (a) (b)\n(c))"


def test_default_merges_one_break():
    assert joined("(frob (a) (b))", SkipTable([])) == "(frob (a)\n(b))"


def test_default_keeps_break_before_list_in_newline_context():
    src = "(frob (a) c)"
    assert joined(src, SkipTable([]), newline_context=True) == "(frob\n(a)\nc)"
    assert joined(src, SkipTable([]), newline_context=False) == "(frob (a)\nc)"


def test_default_keeps_break_before_open_paren():
    result = LayoutResult(
        text="(frob\n(\nx))",
        head_symbol="frob",
        second_token_kind=TokenKind.OPEN_PAREN,
        mode=MULTI,
        breaks=[5],
    )
    assert join_leading_breaks(result, SkipTable([])) == result.text


def test_join_ignores_one_line_results():
    result = lay("(if (a) (b))")
    assert join_leading_breaks(result, SkipTable()) == "(if (a) (b))"


def test_join_never_touches_comment_breaks():
    table = SkipTable([("foo", 3)])
    assert joined("(foo ; c\n (a) (b))", table) == "(foo ; c\n(a) (b))"


def test_resolve_skip_count_prefers_table():
    table = SkipTable([("when", 3)])
    assert resolve_skip_count("when", table, {"when": 1}.get) == 3
    assert resolve_skip_count("unless", table, {"unless": 1}.get) == 1
    assert resolve_skip_count("unless", table) is None
