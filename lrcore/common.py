class Location:
    """
    Represents a point in a grammar source.

    Attributes:
    file_name(str): The name (path) of the grammar file, if any.
    line, column (int): One-based line and column.
    """

    __slots__ = ['file_name', 'line', 'column']

    def __init__(self, file_name=None, line=None, column=None):
        self.file_name = file_name
        self.line = line
        self.column = column

    @classmethod
    def from_position(cls, text, position, file_name=None):
        line, column = pos_to_line_col(text, position)
        return cls(file_name, line, column)

    def __str__(self):
        file_name = f"{self.file_name}:" if self.file_name else ""
        if self.line is not None:
            return f"{file_name}{self.line}:{self.column}"
        return file_name.rstrip(':') or "<grammar>"

    def __repr__(self):
        return f"Location({str(self)})"


def pos_to_line_col(text, pos):
    "Returns one-based line and column for the given position in text."
    line = text.count('\n', 0, pos) + 1
    column = pos - (text.rfind('\n', 0, pos) + 1) + 1
    return line, column


def dot_escape(s):
    "Escapes a label fragment for a GraphViz record node."
    return str(s).replace('\\', '\\\\')\
                 .replace('\n', r'\n')\
                 .replace('"', r'\"')\
                 .replace('|', r'\|')\
                 .replace('{', r'\{')\
                 .replace('}', r'\}')\
                 .replace('>', r'\>')\
                 .replace('<', r'\<')\
                 .replace('?', r'\?')
