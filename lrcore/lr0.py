"""
Construction of the LR(0) automaton: the states, their shift transitions and
the reductions valid in each state.

States are identified by their kernel items. An item is an index into
`grammar.ritem`; the dot sits before `ritem[item]`. Kernel items are always
kept in ascending order so two states are the same iff their item lists are
equal element by element.
"""
import logging
from dataclasses import dataclass, field
from typing import List

from lrcore.closure import closure, set_first_derives
from lrcore.exceptions import StateLimitError
from lrcore.grammar import rule_of
from lrcore.termui import a_print, h_print, prints, s_emph, s_header

logger = logging.getLogger(__name__)

# States are addressed by 15-bit signed indexes.
MAX_STATES = 0x7fff


@dataclass
class Core:
    """
    A state of the LR(0) automaton.

    Attributes:
    accessing_symbol(int): The symbol shifted to reach this state. 0 for the
        initial state.
    items(list of int): Kernel items in ascending order.
    """
    accessing_symbol: int
    items: List[int]


@dataclass
class Shifts:
    """
    Shift transitions of a state. Destinations are ordered by ascending
    shift symbol.
    """
    state: int
    shifts: List[int]


@dataclass
class Reductions:
    state: int
    rules: List[int]


@dataclass
class LR0Output:
    states: List[Core] = field(default_factory=list)
    shifts: List[Shifts] = field(default_factory=list)
    reductions: List[Reductions] = field(default_factory=list)
    nullable: List[bool] = field(default_factory=list)
    derives: List[int] = field(default_factory=list)
    derives_rules: List[int] = field(default_factory=list)

    @property
    def nstates(self):
        return len(self.states)

    def shifts_of(self, state):
        "Returns destination states of the given state's shifts."
        for entry in self.shifts:
            if entry.state == state:
                return entry.shifts
        return []

    def reductions_of(self, state):
        "Returns rules reducible in the given state."
        for entry in self.reductions:
            if entry.state == state:
                return entry.rules
        return []

    def transitions(self, state):
        """
        Returns a list of (symbol, destination state) for the given state.
        """
        return [(self.states[dest].accessing_symbol, dest)
                for dest in self.shifts_of(state)]

    def print_debug(self, grammar):
        a_print("*** STATES ***", new_line=True)
        for state, core in enumerate(self.states):
            prints("\n" + s_header("State %d:%s"
                                   % (state,
                                      grammar.name[core.accessing_symbol])))
            for item in core.items:
                prints("\t{}".format(grammar.item_to_str(item)))

            transitions = self.transitions(state)
            if transitions:
                h_print("SHIFTS:", level=1, new_line=True)
                prints("\t" + ", ".join([("%s" + s_emph("->") + "%d")
                                         % (grammar.name[symbol], dest)
                                         for symbol, dest in transitions]))
            rules = self.reductions_of(state)
            if rules:
                h_print("REDUCTIONS:", level=1, new_line=True)
                prints("\t" + ", ".join(grammar.rule_to_str(r)
                                        for r in rules))

        nullable = [grammar.name[s]
                    for s in range(grammar.start_symbol, grammar.nsyms)
                    if self.nullable[s]]
        if nullable:
            a_print("*** NULLABLE ***", new_line=True)
            prints(" ".join(nullable))


def iter_derives(derives, derives_rules, lhs):
    "Yields the rules whose left side is the nonterminal `lhs`."
    sp = derives[lhs]
    while derives_rules[sp] >= 0:
        yield derives_rules[sp]
        sp += 1


def set_derives(grammar):
    """
    Calculates the derivation table.

    Returns:
    tuple (derives, derives_rules). `derives[lhs]` is the offset in
    `derives_rules` of the rule list of nonterminal `lhs`. Each list is
    terminated by -1. Entries of `derives` for terminals are unused.
    """
    derives = [0] * grammar.nsyms
    derives_rules = []

    for lhs in range(grammar.start_symbol, grammar.nsyms):
        derives[lhs] = len(derives_rules)
        for rule in range(grammar.nrules):
            if grammar.rlhs[rule] == lhs:
                derives_rules.append(rule)
        derives_rules.append(-1)

    if logger.isEnabledFor(logging.DEBUG):
        _log_derives(grammar, derives, derives_rules)

    return derives, derives_rules


def _log_derives(grammar, derives, derives_rules):
    logger.debug("DERIVES:")
    for lhs in range(grammar.start_symbol, grammar.nsyms):
        logger.debug("    %s derives rules:", grammar.name[lhs])
        for rule in iter_derives(derives, derives_rules, lhs):
            logger.debug("        %s", grammar.rule_to_str(rule))


def set_nullable(grammar):
    """
    Calculates which symbols derive the empty string.

    Returns:
    list of bool keyed by symbol id.
    """
    nullable = [False] * grammar.nsyms
    ritem = grammar.ritem

    done = False
    while not done:
        done = True
        i = 0
        while i < grammar.nitems:
            empty = True
            while ritem[i] >= 0:
                if not nullable[ritem[i]]:
                    empty = False
                i += 1
            if empty:
                lhs = grammar.rlhs[rule_of(ritem[i])]
                if not nullable[lhs]:
                    nullable[lhs] = True
                    done = False
            i += 1

    if logger.isEnabledFor(logging.DEBUG):
        for symbol in range(grammar.start_symbol, grammar.nsyms):
            logger.debug("%s is %snullable", grammar.name[symbol],
                         "" if nullable[symbol] else "not ")

    return nullable


class KernelItemArena:
    """
    Staging area for the kernel items of the successors of the state being
    processed.

    One flat buffer is split into a fixed region per symbol, sized by the
    number of items in the grammar with the dot before that symbol. No
    successor kernel can hold more items than that, so a region never
    overflows.

    Attributes:
    kernel_base(list of int): Start of each symbol's region. Has `nsyms + 1`
        entries, the last one being the buffer size.
    kernel_end(list of int): Write cursor of each symbol's region, -1 while
        the region is empty.
    kernel_items(list of int): The shared buffer.
    """
    __slots__ = ['kernel_base', 'kernel_end', 'kernel_items']

    def __init__(self, grammar):
        symbol_count = [0] * grammar.nsyms
        for symbol in grammar.ritem:
            if symbol >= 0:
                symbol_count[symbol] += 1

        self.kernel_base = []
        count = 0
        for symbol in range(grammar.nsyms):
            self.kernel_base.append(count)
            count += symbol_count[symbol]
        self.kernel_base.append(count)

        self.kernel_end = [-1] * grammar.nsyms
        self.kernel_items = [0] * count

    def reset(self):
        kernel_end = self.kernel_end
        for i in range(len(kernel_end)):
            kernel_end[i] = -1

    def push(self, symbol, item):
        """
        Appends item to the symbol's region. Returns True if this is the
        first item pushed for the symbol since the last reset.
        """
        ksp = self.kernel_end[symbol]
        first = ksp == -1
        if first:
            ksp = self.kernel_base[symbol]
        assert ksp < self.kernel_base[symbol + 1]
        self.kernel_items[ksp] = item
        self.kernel_end[symbol] = ksp + 1
        return first

    def items(self, symbol):
        "Returns a copy of the items staged for the symbol."
        end = self.kernel_end[symbol]
        if end == -1:
            return []
        return self.kernel_items[self.kernel_base[symbol]:end]


class StateTable:
    """
    The growing list of automaton states, deduplicated by kernel items.

    Attributes:
    grammar(Grammar):
    states(list of Core): States in order of creation.
    state_set(list of list of int): Keyed by item. Holds indexes of the
        states whose kernel starts with that item.
    max_states(int): The number of states that may be created.
    """

    def __init__(self, grammar, states, max_states=MAX_STATES):
        self.grammar = grammar
        self.states = states
        self.state_set = [[] for _ in range(grammar.nitems)]
        self.max_states = max_states

    def __len__(self):
        return len(self.states)

    def __getitem__(self, state):
        return self.states[state]

    def get_state(self, symbol, arena):
        """
        Returns the index of the state whose kernel equals the items staged
        in the arena for the given symbol, creating the state if needed.
        """
        isp = arena.kernel_base[symbol]
        iend = arena.kernel_end[symbol]
        n = iend - isp
        kernel_items = arena.kernel_items

        key = kernel_items[isp]

        for state in self.state_set[key]:
            sp_items = self.states[state].items
            if len(sp_items) == n:
                for j in range(n):
                    if kernel_items[isp + j] != sp_items[j]:
                        break
                else:
                    return state

        if len(self.states) >= self.max_states:
            raise StateLimitError(self.max_states,
                                  self.grammar.name[symbol])

        new_state = len(self.states)
        self.states.append(Core(symbol, kernel_items[isp:iend]))
        self.state_set[key].append(new_state)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("    created state s%d:", new_state)
            _log_core(self.grammar, new_state, self.states[new_state])

        return new_state


def _log_core(grammar, state, core):
    logger.debug("    s%d : accessing_symbol=%s", state,
                 grammar.name[core.accessing_symbol])
    for item in core.items:
        logger.debug("        item %4d : %s", item, grammar.item_to_str(item))


def initialize_states(grammar, derives, derives_rules):
    """
    Creates the initial state from the rules of the start symbol.

    Returns:
    A list of states holding the initial state only.
    """
    items = [grammar.rrhs[rule]
             for rule in iter_derives(derives, derives_rules,
                                      grammar.start_symbol)]
    states = [Core(0, items)]

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("initial state:")
        _log_core(grammar, 0, states[0])

    return states


def sort_shift_symbols(shift_symbol):
    "Sorts the list in place. Insertion sort, the lists are short."
    for i in range(1, len(shift_symbol)):
        symbol = shift_symbol[i]
        j = i
        while j > 0 and shift_symbol[j - 1] > symbol:
            shift_symbol[j] = shift_symbol[j - 1]
            j -= 1
        shift_symbol[j] = symbol


def save_reductions(grammar, this_state, item_set, red_set, reductions):
    """
    Records the rules completed by items of the item set. An item whose
    `ritem` entry is negative is at the end of its rule.
    """
    assert not red_set
    for item in item_set:
        value = grammar.ritem[item]
        if value < 0:
            rule = rule_of(value)
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("        reduction: r%d  %s", rule,
                             grammar.rule_to_str(rule))
            red_set.append(rule)

    if red_set:
        reductions.append(Reductions(this_state, list(red_set)))
    else:
        logger.debug("    no reductions")


def new_item_sets(grammar, arena, item_set, shift_symbol):
    """
    Stages the kernel items of all successors of the item set in the arena
    and fills `shift_symbol` with the shifted symbols in order of first
    appearance.
    """
    assert not shift_symbol
    arena.reset()
    ritem = grammar.ritem
    for item in item_set:
        symbol = ritem[item]
        # STOP (symbol 0) is never shifted
        if symbol > 0:
            if arena.push(symbol, item + 1):
                shift_symbol.append(symbol)


def append_states(states, arena, shift_set, shift_symbol):
    """
    Resolves the successor state of each shift symbol, creating new states
    as needed.
    """
    assert not shift_set
    for symbol in shift_symbol:
        shift_set.append(states.get_state(symbol, arena))


def compute_lr0(grammar, max_states=MAX_STATES):
    """
    Builds the LR(0) automaton for the given grammar.

    Args:
    grammar(Grammar):
    max_states(int): Upper bound on the number of states. StateLimitError
        is raised if the automaton needs more.

    Returns:
    LR0Output
    """
    derives, derives_rules = set_derives(grammar)
    nullable = set_nullable(grammar)

    arena = KernelItemArena(grammar)
    states = StateTable(grammar,
                        initialize_states(grammar, derives, derives_rules),
                        max_states=max_states)

    first_derives = set_first_derives(grammar, derives, derives_rules)

    # Scratch lists reused for every state.
    item_set = []
    red_set = []
    shift_symbol = []
    shift_set = []

    shifts = []
    reductions = []

    # The state list doubles as the work list. States appended while
    # processing `this_state` are processed later in the same loop.
    this_state = 0
    while this_state < len(states):
        core = states[this_state]
        logger.debug("computing closure for state s%d:", this_state)
        if logger.isEnabledFor(logging.DEBUG):
            _log_core(grammar, this_state, core)

        closure(grammar, core.items, first_derives, item_set)

        save_reductions(grammar, this_state, item_set, red_set, reductions)

        new_item_sets(grammar, arena, item_set, shift_symbol)
        sort_shift_symbols(shift_symbol)

        append_states(states, arena, shift_set, shift_symbol)
        logger.debug("    shifts: %s", shift_set)

        if shift_symbol:
            shifts.append(Shifts(this_state, list(shift_set)))

        item_set.clear()
        red_set.clear()
        shift_symbol.clear()
        shift_set.clear()

        this_state += 1

    logger.debug("LR(0) automaton has %d states", len(states))

    return LR0Output(states=states.states,
                     shifts=shifts,
                     reductions=reductions,
                     nullable=nullable,
                     derives=derives,
                     derives_rules=derives_rules)
