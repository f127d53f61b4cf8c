from lrcore.lr0 import set_nullable
from grammars import ALL_GRAMMARS, OPTIONAL_A, EXPRESSION, NULLABLE_CHAIN, \
    NULLABLE_MIX, get_grammar


def nullable_names(g, nullable):
    return {g.name[s] for s in range(g.nsyms) if nullable[s]}


def test_nullable_optional_a():
    g = get_grammar(OPTIONAL_A)
    nullable = set_nullable(g)
    # S' derives S which is nullable
    assert nullable_names(g, nullable) == {'S', "S'"}


def test_nothing_nullable():
    g = get_grammar(EXPRESSION)
    assert not any(set_nullable(g))


def test_nullable_needs_several_passes():
    g = get_grammar(NULLABLE_CHAIN)
    assert nullable_names(g, set_nullable(g)) == {"S'", 'S', 'A', 'B'}


def test_nullable_mix():
    g = get_grammar(NULLABLE_MIX)
    assert nullable_names(g, set_nullable(g)) == {'A', 'B'}


def test_terminals_are_never_nullable():
    for grammar_str in ALL_GRAMMARS:
        g = get_grammar(grammar_str)
        nullable = set_nullable(g)
        assert not any(nullable[:g.start_symbol])


def test_nullable_fixed_point():
    """
    A nonterminal is nullable iff one of its rules has a right-hand side
    made of nullable symbols only.
    """
    for grammar_str in ALL_GRAMMARS:
        g = get_grammar(grammar_str)
        nullable = set_nullable(g)
        for symbol in range(g.start_symbol, g.nsyms):
            expected = any(all(nullable[s] for s in g.rule_rhs(rule))
                           for rule in range(g.nrules)
                           if g.rlhs[rule] == symbol)
            assert nullable[symbol] == expected, g.name[symbol]
