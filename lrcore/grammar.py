import re
from os import path
from typing import List, Optional, Sequence, Tuple

from lrcore import termui
from lrcore.common import Location
from lrcore.exceptions import GrammarError
from lrcore.termui import a_print, h_print, prints, s_emph, s_header

# End of input. Always symbol 0, never shifted by the automaton builder.
STOP = 'STOP'
# Marks an empty alternative in the grammar source.
EMPTY = 'EMPTY'
# The augmented start symbol.
AUGSYMBOL = "S'"

RESERVED_SYMBOL_NAMES = [STOP, EMPTY, AUGSYMBOL]


def rule_of(value):
    "Decodes an end-of-rule entry of `ritem` into its rule number."
    return ~value


def end_of_rule(rule):
    "Encodes the `ritem` entry that terminates the given rule."
    return ~rule


class Grammar:
    """
    A context-free grammar packed into flat integer arrays.

    Symbol 0 is STOP, the remaining terminals follow in order of first
    appearance, then the augmented start symbol S' (`start_symbol`) and the
    nonterminals in order of definition. Rule 0 is the augmenting rule
    `S': root`, user productions follow in source order.

    Attributes:
    name(list of str): Symbol names keyed by symbol id.
    nsyms, ntokens, nvars, nrules, nitems(int): Counts.
    start_symbol(int): Id of S'. Ids below it are terminals.
    ritem(list of int): Right-hand sides of all rules laid out one after
        another. Nonnegative entries are symbol ids, each rule ends with the
        negative entry `end_of_rule(rule)`.
    rlhs(list of int): Left-hand symbol of each rule.
    rrhs(list of int): Offset in `ritem` where each rule starts.
    """

    def __init__(self, productions: Sequence[Tuple[str, Sequence[str]]],
                 root: Optional[str] = None,
                 file_name: Optional[str] = None):
        """
        Args:
        productions: A list of (lhs name, list of rhs names). A name that is
            never used on the left side is a terminal. A sole EMPTY or an
            empty list denotes the empty right-hand side.
        root: The nonterminal the language is derived from. Defaults to the
            left side of the first production.
        file_name: Used for error reporting only.
        """
        self.file_name = file_name
        location = Location(file_name)
        if not productions:
            raise GrammarError(location, 'grammar has no productions')

        self.productions = []
        for lhs, rhs in productions:
            if lhs in RESERVED_SYMBOL_NAMES:
                raise GrammarError(
                    location, f'reserved name "{lhs}" used as a rule name')
            rhs = list(rhs)
            if EMPTY in rhs:
                if len(rhs) > 1:
                    raise GrammarError(
                        location,
                        f'"{EMPTY}" must be the only symbol of an '
                        f'alternative of "{lhs}"')
                rhs = []
            if AUGSYMBOL in rhs:
                raise GrammarError(
                    location, f'reserved name "{AUGSYMBOL}" used in "{lhs}"')
            self.productions.append((lhs, rhs))

        nonterminals = list(dict.fromkeys(lhs for lhs, _ in self.productions))
        if root is None:
            root = nonterminals[0]
        elif root not in nonterminals:
            raise GrammarError(location, f'unknown root symbol "{root}"',
                               hint='the root must be defined by a rule')
        self.root = root

        terminals = [STOP]
        defined = set(nonterminals)
        for _, rhs in self.productions:
            for symbol in rhs:
                if symbol not in defined and symbol not in terminals:
                    terminals.append(symbol)

        self.name = terminals + [AUGSYMBOL] + nonterminals
        self._symbol_ids = {name: idx for idx, name in enumerate(self.name)}
        self.ntokens = len(terminals)
        self.start_symbol = self.ntokens
        self.nvars = len(nonterminals) + 1
        self.nsyms = self.ntokens + self.nvars

        self._pack()

    def _pack(self):
        rules = [(self.start_symbol, [self._symbol_ids[self.root]])]
        rules.extend((self._symbol_ids[lhs],
                      [self._symbol_ids[s] for s in rhs])
                     for lhs, rhs in self.productions)

        self.nrules = len(rules)
        self.ritem = []
        self.rlhs = []
        self.rrhs = []
        for rule, (lhs, rhs) in enumerate(rules):
            self.rlhs.append(lhs)
            self.rrhs.append(len(self.ritem))
            self.ritem.extend(rhs)
            self.ritem.append(end_of_rule(rule))
        self.nitems = len(self.ritem)

    def is_terminal(self, symbol):
        return symbol < self.start_symbol

    def is_nonterminal(self, symbol):
        return symbol >= self.start_symbol

    def get_symbol(self, name):
        "Returns symbol id for the given name or None if not found."
        return self._symbol_ids.get(name)

    def rule_rhs(self, rule):
        "Returns a list of right-hand side symbol ids of the given rule."
        rhs = []
        idx = self.rrhs[rule]
        while self.ritem[idx] >= 0:
            rhs.append(self.ritem[idx])
            idx += 1
        return rhs

    def rule_to_str(self, rule):
        rhs = " ".join(self.name[s] for s in self.rule_rhs(rule))
        return f"{self.name[self.rlhs[rule]]}: {rhs or EMPTY}"

    def item_to_str(self, item):
        """
        Renders an item as its rule with a dot at the item position, e.g.
        `E: E . '+' T`.
        """
        # back up to the start of the rule
        start = item
        while start > 0 and self.ritem[start - 1] >= 0:
            start -= 1

        parts = []
        idx = start
        while self.ritem[idx] >= 0:
            if idx == item:
                parts.append(".")
            parts.append(self.name[self.ritem[idx]])
            idx += 1
        if idx == item:
            parts.append(".")
        lhs = self.name[self.rlhs[rule_of(self.ritem[idx])]]
        return f"{lhs}: {' '.join(parts)}"

    def __str__(self):
        return "\n".join(self.rule_to_str(r) for r in range(self.nrules))

    @staticmethod
    def from_struct(productions, root=None):
        return Grammar(productions, root=root)

    @staticmethod
    def from_string(grammar_str, root=None, file_name=None, debug=False,
                    debug_colors=False):
        productions = parse_grammar(grammar_str, file_name)
        g = Grammar(productions, root=root, file_name=file_name)
        termui.colors = debug_colors
        if debug:
            g.print_debug()
        return g

    @staticmethod
    def from_file(file_name, **kwargs):
        file_name = path.realpath(file_name)
        with open(file_name, encoding='utf-8') as f:
            content = f.read()
        return Grammar.from_string(content, file_name=file_name, **kwargs)

    def print_debug(self):
        a_print("*** GRAMMAR ***", new_line=True)
        h_print("Terminals:")
        prints(" ".join(self.name[:self.start_symbol]))
        h_print("NonTerminals:")
        prints(" ".join(self.name[self.start_symbol:]))

        h_print("Rules:")
        for rule in range(self.nrules):
            lhs, _, rhs = self.rule_to_str(rule).partition(": ")
            prints((s_header("%d:") + " %s " + s_emph("=") + " %s")
                   % (rule, lhs, rhs))


_TOKENS = re.compile(r"""
    (?P<ws>\s+|//[^\n]*|/\*.*?\*/)
  | (?P<id>[A-Za-z_][A-Za-z0-9_]*)
  | (?P<str>'[^'\n]*'|"[^"\n]*")
  | (?P<op>[:|;])
""", re.VERBOSE | re.DOTALL)


def _tokenize(text, file_name):
    pos = 0
    while pos < len(text):
        match = _TOKENS.match(text, pos)
        if match is None:
            raise GrammarError(
                Location.from_position(text, pos, file_name),
                f'unexpected character "{text[pos]}"')
        if match.lastgroup != 'ws':
            yield match.lastgroup, match.group(), pos
        pos = match.end()
    yield 'eof', '', pos


def parse_grammar(text: str,
                  file_name: Optional[str] = None) -> List[Tuple[str,
                                                                 List[str]]]:
    """
    Reads the textual grammar format:

        // line comment, /* block comment */
        E: E '+' T | T;
        T: id | EMPTY;

    Returns a list of (lhs, rhs) productions in source order.
    """
    productions = []
    tokens = _tokenize(text, file_name)

    def error(pos, message, hint=None):
        return GrammarError(Location.from_position(text, pos, file_name),
                            message, hint=hint)

    kind, value, pos = next(tokens)
    while kind != 'eof':
        if kind != 'id':
            raise error(pos, f'expected rule name but found "{value}"')
        lhs = value
        if lhs in RESERVED_SYMBOL_NAMES:
            raise error(pos, f'reserved name "{lhs}" used as a rule name')
        kind, value, pos = next(tokens)
        if value != ':':
            raise error(pos, f'expected ":" after "{lhs}"')

        rhs = []
        while True:
            kind, value, pos = next(tokens)
            if kind in ('id', 'str'):
                rhs.append(value)
            elif value in ('|', ';'):
                if not rhs:
                    raise error(pos, f'empty alternative in "{lhs}"',
                                hint=f'use {EMPTY} for an empty alternative')
                if EMPTY in rhs and len(rhs) > 1:
                    raise error(pos, f'"{EMPTY}" must be the only symbol of '
                                     f'an alternative of "{lhs}"')
                productions.append((lhs, [] if rhs == [EMPTY] else rhs))
                rhs = []
                if value == ';':
                    break
            elif kind == 'eof':
                raise error(pos, f'expected ";" at the end of "{lhs}"')
            else:
                raise error(pos, f'unexpected "{value}" in "{lhs}"')
        kind, value, pos = next(tokens)

    if not productions:
        raise GrammarError(Location(file_name), 'grammar has no productions')
    return productions
