from lrcore.lr0 import set_derives, iter_derives
from grammars import ALL_GRAMMARS, OPTIONAL_A, EXPRESSION, get_grammar


def test_derives_optional_a():
    g = get_grammar(OPTIONAL_A)
    derives, derives_rules = set_derives(g)

    S = g.get_symbol('S')
    start = g.start_symbol
    assert derives_rules[derives[start]:derives[start] + 2] == [0, -1]
    assert derives_rules[derives[S]:derives[S] + 3] == [1, 2, -1]
    assert derives_rules == [0, -1, 1, 2, -1]


def test_derives_expression():
    g = get_grammar(EXPRESSION)
    derives, derives_rules = set_derives(g)

    assert list(iter_derives(derives, derives_rules, g.start_symbol)) == [0]
    assert list(iter_derives(derives, derives_rules,
                             g.get_symbol('E'))) == [1, 2]
    assert list(iter_derives(derives, derives_rules,
                             g.get_symbol('T'))) == [3, 4]
    assert list(iter_derives(derives, derives_rules,
                             g.get_symbol('F'))) == [5, 6]

    # one terminating sentinel per nonterminal
    assert derives_rules.count(-1) == g.nvars


def test_every_rule_derived_once_by_its_lhs():
    for grammar_str in ALL_GRAMMARS:
        g = get_grammar(grammar_str)
        derives, derives_rules = set_derives(g)

        assert len(derives) == g.nsyms
        assert sorted(r for r in derives_rules if r >= 0) == \
            list(range(g.nrules))
        for rule in range(g.nrules):
            lhs = g.rlhs[rule]
            assert list(iter_derives(derives, derives_rules,
                                     lhs)).count(rule) == 1
