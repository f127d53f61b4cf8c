# -*- coding: utf-8 -*-
# flake8: NOQA
from lrcore.grammar import Grammar, STOP, EMPTY, AUGSYMBOL
from lrcore.lr0 import compute_lr0, Core, Shifts, Reductions, LR0Output, \
    MAX_STATES
from lrcore.exceptions import LRCoreError, GrammarError, StateLimitError

from .version import __version__
