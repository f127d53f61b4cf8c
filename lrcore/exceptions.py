from typing import Optional

from lrcore.common import Location
from lrcore.termui import s_attention as err
from lrcore.termui import s_header as _


class LRCoreError(Exception):
    def __init__(self, location: Optional[Location],
                 message: str,
                 error_type: str = "error",
                 hint: Optional[str] = None):

        self.location = location
        self.message = message
        self.hint = hint
        self.error_type = err(error_type)

        hint = _(f"  hint: {hint}") if hint else None
        self.full_message = "\n".join(
            filter(None, [f"{self.error_type}: {message}", hint]))
        super().__init__(self.full_message)

    def __str__(self):
        if self.location is not None:
            return f"{self.location}: {self.full_message}"
        return self.full_message


class GrammarError(LRCoreError):
    def __init__(self, location, message, hint=None):
        super().__init__(location, message, error_type="grammar error",
                         hint=hint)


class StateLimitError(LRCoreError):
    """
    Raised when the automaton would need more states than the packed
    state index can address.
    """
    def __init__(self, max_states, symbol_name=None):
        self.max_states = max_states
        message = f"too many states: the limit is {max_states}"
        if symbol_name is not None:
            message += f" (reached while shifting '{symbol_name}')"
        super().__init__(None, message, error_type="fatal error",
                         hint="the grammar is too large for an LR(0) "
                              "automaton with 15-bit state indices")
