import io

from lrcore.common import dot_escape


HEADER = '''
    digraph grammar {
    rankdir=LR
    fontname = "Bitstream Vera Sans"
    fontsize = 8
    node[
        shape=record,
        style=filled,
        fillcolor=aliceblue
    ]
    nodesep = 0.3
    edge[dir=black,arrowtail=empty]


'''


def automaton_to_dot(grammar, output):
    """
    Renders the LR(0) automaton in GraphViz dot format.

    Each state node shows its kernel items and reductions. Shifts are
    rendered as links labeled by the shifted symbol.
    """
    f = io.StringIO()
    f.write(HEADER)

    for state, core in enumerate(output.states):
        kernel_items = ""
        for item in core.items:
            kernel_items += "{}\\l".format(dot_escape(
                grammar.item_to_str(item)))

        reductions = ""
        rules = output.reductions_of(state)
        if rules:
            reductions = "|Reductions:\\l{}".format(
                ", ".join(str(r) for r in rules))

        f.write('{}[label="{}|{}{}"]\n'
                .format(
                    state,
                    dot_escape("{}:{}".format(
                        state, grammar.name[core.accessing_symbol])),
                    kernel_items, reductions))

        for symbol, dest in output.transitions(state):
            f.write('{} -> {} [label="{}:{}"]\n'.format(
                state, dest,
                "SHIFT" if grammar.is_terminal(symbol) else "GOTO",
                dot_escape(grammar.name[symbol])))

        f.write("\n")

    f.write("\n}\n")
    return f.getvalue()


def automaton_export(grammar, output, file_name):
    with io.open(file_name, 'w', encoding="utf-8") as f:
        f.write(automaton_to_dot(grammar, output))
