import pytest  # noqa
import os
import tempfile
from lrcore import compute_lr0
from lrcore.common import dot_escape
from lrcore.export import automaton_export, automaton_to_dot
from grammars import EXPRESSION, OPTIONAL_A, get_grammar


def test_dot_export():
    g = get_grammar(EXPRESSION)
    output = compute_lr0(g)

    tmp_dir = tempfile.mkdtemp()
    file_name = os.path.join(tmp_dir, 'testexport.dot')

    automaton_export(g, output, file_name)

    with open(file_name) as f:
        content = f.read()
    assert 'digraph grammar' in content
    assert 'label' in content

    os.remove(file_name)
    os.rmdir(tmp_dir)


def test_dot_content():
    g = get_grammar(OPTIONAL_A)
    output = compute_lr0(g)
    dot = automaton_to_dot(g, output)

    assert '0 -> 1 [label="SHIFT:a"]' in dot
    assert '0 -> 2 [label="GOTO:S"]' in dot
    assert 'Reductions:\\l2' in dot
    assert "S: a .\\l" in dot


def test_dot_escape():
    assert dot_escape("F: '(' E . ')'") == "F: '(' E . ')'"
    assert dot_escape('a|b') == r'a\|b'
    assert dot_escape('"{<x>}"') == r'\"\{\<x\>\}\"'
