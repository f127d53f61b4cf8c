#!/usr/bin/env python
import logging
import sys
import click
from lrcore import Grammar, GrammarError, StateLimitError, compute_lr0
from lrcore.export import automaton_export
from lrcore.termui import prints, a_print, h_print
import lrcore.termui as t


@click.group()
@click.option('--debug', default=False, is_flag=True,
              help="Debug/trace output.")
@click.option('--no-colors', default=False, is_flag=True,
              help="Disable output coloring.")
@click.pass_context
def lr0(ctx, debug, no_colors):
    """
    Command line interface for building LR(0) automata.
    """
    ctx.obj = {'debug': debug, 'colors': not no_colors}
    if debug:
        logging.basicConfig(level=logging.DEBUG,
                            format="%(name)s: %(message)s")


@lr0.command()
@click.argument('grammar_file', type=click.Path())
@click.pass_context
def compile(ctx, grammar_file):
    debug = ctx.obj['debug']
    colors = ctx.obj['colors']
    h_print('Compiling...')
    grammar, output = compile_get_grammar_automaton(grammar_file, debug,
                                                    colors)

    h_print("States:", str(output.nstates))
    h_print("Shift entries:", str(len(output.shifts)))
    h_print("Reduction entries:", str(len(output.reductions)))
    nullable = [grammar.name[s]
                for s in range(grammar.start_symbol + 1, grammar.nsyms)
                if output.nullable[s]]
    h_print("Nullable:", " ".join(nullable) if nullable else "-")


@lr0.command()
@click.argument('grammar_file', type=click.Path())
@click.pass_context
def viz(ctx, grammar_file):
    debug = ctx.obj['debug']
    colors = ctx.obj['colors']
    grammar, output = compile_get_grammar_automaton(grammar_file, debug,
                                                    colors)
    prints("Generating '%s.dot' file for the grammar LR(0) automaton."
           % grammar_file)
    prints("Use dot viewer (e.g. xdot) "
           "or convert to pdf by running 'dot -Tpdf -O %s.dot'" % grammar_file)
    automaton_export(grammar, output, "%s.dot" % grammar_file)


def compile_get_grammar_automaton(grammar_file, debug, colors):
    t.colors = colors
    try:
        g = Grammar.from_file(grammar_file, debug=debug, debug_colors=colors)
        output = compute_lr0(g)
        if debug:
            output.print_debug(g)
    except GrammarError as e:
        a_print("Error in the grammar file.")
        prints(str(e))
        sys.exit(1)
    except StateLimitError as e:
        a_print("Can't build the automaton.")
        prints(str(e))
        sys.exit(1)
    except OSError as e:
        a_print("Can't read the grammar file.")
        prints(str(e))
        sys.exit(1)

    return g, output


if __name__ == '__main__':
    lr0()
