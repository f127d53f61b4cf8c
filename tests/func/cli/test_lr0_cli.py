import pytest  # noqa
import os
import shutil
from click.testing import CliRunner
from lrcore.cli import lr0

CURRENT_DIR = os.path.abspath(os.path.dirname(__file__))
GRAMMAR_FILE = os.path.join(CURRENT_DIR, 'grammar.lr')


def test_lr0_compile():
    """
    Test lr0 command for automaton construction.
    """
    result = CliRunner().invoke(lr0, ['--no-colors', 'compile', GRAMMAR_FILE])
    assert result.exit_code == 0
    assert 'States: 12' in result.output
    assert 'Shift entries: 8' in result.output
    assert 'Reduction entries: 7' in result.output
    assert 'Nullable: -' in result.output


def test_lr0_compile_nullable(tmp_path):
    grammar_file = tmp_path / 'nullable.lr'
    grammar_file.write_text("S: A b; A: a | EMPTY;")
    result = CliRunner().invoke(lr0, ['--no-colors', 'compile',
                                      str(grammar_file)])
    assert result.exit_code == 0
    assert 'Nullable: A' in result.output


def test_lr0_viz(tmp_path):
    """
    Test lr0 command for automaton visualization.
    """
    grammar_file = tmp_path / 'grammar.lr'
    shutil.copy(GRAMMAR_FILE, grammar_file)
    dot_file = tmp_path / 'grammar.lr.dot'

    result = CliRunner().invoke(lr0, ['--no-colors', 'viz',
                                      str(grammar_file)])
    assert result.exit_code == 0
    assert dot_file.exists()
    assert 'digraph grammar' in dot_file.read_text()


def test_lr0_grammar_error(tmp_path):
    grammar_file = tmp_path / 'bad.lr'
    grammar_file.write_text("S: a |;")
    result = CliRunner().invoke(lr0, ['--no-colors', 'compile',
                                      str(grammar_file)])
    assert result.exit_code == 1
    assert 'Error in the grammar file.' in result.output
    assert 'empty alternative' in result.output


def test_lr0_missing_file(tmp_path):
    result = CliRunner().invoke(lr0, ['--no-colors', 'compile',
                                      str(tmp_path / 'missing.lr')])
    assert result.exit_code == 1
    assert "Can't read the grammar file." in result.output
