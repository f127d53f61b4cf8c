"""
LR(0) item set closure over the packed grammar representation.

Sets of nonterminals and of rules are kept as Python integers used as bit
masks. Nonterminal rows are indexed by `symbol - grammar.start_symbol`.
"""
import logging

logger = logging.getLogger(__name__)


def iter_bits(mask):
    "Yields indexes of the set bits of `mask` in ascending order."
    while mask:
        low = mask & -mask
        yield low.bit_length() - 1
        mask ^= low


def set_eff(grammar, derives, derives_rules):
    """
    Calculates for each nonterminal the set of nonterminals that can start
    its derivations, including itself (the reflexive transitive closure of
    the "starts with" relation).

    Returns:
    list of int bit masks over nonterminals.
    """
    start_symbol = grammar.start_symbol
    eff = []
    for lhs in range(start_symbol, grammar.nsyms):
        row = 0
        sp = derives[lhs]
        while derives_rules[sp] >= 0:
            symbol = grammar.ritem[grammar.rrhs[derives_rules[sp]]]
            if symbol >= start_symbol:
                row |= 1 << (symbol - start_symbol)
            sp += 1
        eff.append(row)

    # Warshall
    for k in range(grammar.nvars):
        bit = 1 << k
        for i in range(grammar.nvars):
            if eff[i] & bit:
                eff[i] |= eff[k]
    for i in range(grammar.nvars):
        eff[i] |= 1 << i

    return eff


def set_first_derives(grammar, derives, derives_rules):
    """
    For each nonterminal calculates the set of rules whose start items
    belong to the closure of an item with the dot before that nonterminal.

    Returns:
    list of int bit masks over rule numbers.
    """
    start_symbol = grammar.start_symbol
    rules_of = []
    for lhs in range(start_symbol, grammar.nsyms):
        mask = 0
        sp = derives[lhs]
        while derives_rules[sp] >= 0:
            mask |= 1 << derives_rules[sp]
            sp += 1
        rules_of.append(mask)

    first_derives = []
    for row in set_eff(grammar, derives, derives_rules):
        mask = 0
        for var in iter_bits(row):
            mask |= rules_of[var]
        first_derives.append(mask)

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("FIRST_DERIVES:")
        for var, mask in enumerate(first_derives):
            logger.debug("    %s derives", grammar.name[start_symbol + var])
            for rule in iter_bits(mask):
                logger.debug("        %s", grammar.rule_to_str(rule))

    return first_derives


def closure(grammar, nucleus, first_derives, item_set=None):
    """
    Expands the kernel items of a state into its full item set.

    Args:
    grammar(Grammar):
    nucleus(list of int): Kernel items in ascending order.
    first_derives(list of int): As returned by `set_first_derives`.
    item_set(list of int): Output list. Items are appended in ascending
        order. A new list is created if not given.

    Returns:
    The item set.
    """
    if item_set is None:
        item_set = []

    ritem = grammar.ritem
    start_symbol = grammar.start_symbol

    rule_set = 0
    for item in nucleus:
        symbol = ritem[item]
        if symbol >= start_symbol:
            rule_set |= first_derives[symbol - start_symbol]

    # Merge start items of the collected rules with the nucleus. Both are
    # ascending since rules are laid out in `ritem` in rule order.
    csp = 0
    nucleus_len = len(nucleus)
    for rule in iter_bits(rule_set):
        itemno = grammar.rrhs[rule]
        while csp < nucleus_len and nucleus[csp] < itemno:
            item_set.append(nucleus[csp])
            csp += 1
        item_set.append(itemno)
        while csp < nucleus_len and nucleus[csp] == itemno:
            csp += 1
    item_set.extend(nucleus[csp:])

    return item_set
