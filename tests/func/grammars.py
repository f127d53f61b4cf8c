from lrcore import Grammar

# S' -> S, S -> a, S -> EMPTY
OPTIONAL_A = """
S: a | EMPTY;
"""

# Classic expression grammar from the Dragon Book.
EXPRESSION = """
E: E '+' T | T;
T: T '*' F | F;
F: '(' E ')' | id;
"""

# Nullability is discovered one rule per pass, bottom-up.
NULLABLE_CHAIN = """
S: A;
A: B;
B: EMPTY;
"""

NULLABLE_MIX = """
S: A B c;
A: a | EMPTY;
B: A A;
C: c;
"""

# Balanced parentheses with right recursion and an empty alternative.
PARENS = """
P: '(' P ')' P | EMPTY;
"""

# Several rules starting with the same nonterminal.
LISTS = """
Program: Stmts STOP;
Stmts: Stmts ';' Stmt | Stmt;
Stmt: id '=' Expr | id '(' Args ')' | EMPTY;
Args: Args ',' Expr | Expr | EMPTY;
Expr: id | num | '(' Expr ')';
"""

ALL_GRAMMARS = [OPTIONAL_A, EXPRESSION, NULLABLE_CHAIN, NULLABLE_MIX,
                PARENS, LISTS]


def get_grammar(grammar_str):
    return Grammar.from_string(grammar_str)
