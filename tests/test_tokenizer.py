from syard.tokenizer import lex, tokenize, PRECEDENCE
from syard.types import TokenKind


def test_operands_are_maximal_runs():
    assert lex("x1+3.25*abc") == ["x1", "+", "3.25", "*", "abc"]

def test_whitespace_and_unknown_characters_are_skipped():
    assert lex("  A  %  B ,\t$ C ") == ["A", "B", "C"]
    assert lex("A_1") == ["A", "1"]

def test_kinds_and_precedence():
    toks = tokenize("( A ^ B ) * C / D + E - F")
    kinds = [t.kind for t in toks]
    assert kinds[0] is TokenKind.LEFT_PAREN
    assert kinds[4] is TokenKind.RIGHT_PAREN
    by_value = {t.value: t.precedence for t in toks}
    assert by_value == {"(": 0, "A": 0, "^": 3, "B": 0, ")": 0, "*": 2, "C": 0,
                        "/": 2, "D": 0, "+": 1, "E": 0, "-": 1, "F": 0}
    assert PRECEDENCE["^"] > PRECEDENCE["*"] > PRECEDENCE["+"]

def test_ids_follow_position_and_value():
    toks = tokenize("A + A")
    assert [t.id for t in toks] == ["t-0-A", "t-1-+", "t-2-A"]
    assert len({t.id for t in toks}) == 3

def test_retokenizing_gives_identical_ids():
    assert tokenize("A * ( B + C )") == tokenize("A * ( B + C )")

def test_empty_and_unmatched_input_yield_no_tokens():
    assert tokenize("") == ()
    assert tokenize("   ?? !! ") == ()

def test_prefix_mode_reverses_and_swaps_parens_before_ids():
    toks = tokenize("( A + B ) * C", mode="PREFIX")
    assert [t.value for t in toks] == ["C", "*", "(", "B", "+", "A", ")"]
    assert toks[2].kind is TokenKind.LEFT_PAREN
    assert toks[6].kind is TokenKind.RIGHT_PAREN
    assert [t.id for t in toks][:3] == ["t-0-C", "t-1-*", "t-2-("]

def test_only_caret_is_right_associative():
    toks = {t.value: t for t in tokenize("A ^ B * C / D + E - F")}
    assert toks["^"].right_associative
    assert not any(toks[o].right_associative for o in "*/+-")
