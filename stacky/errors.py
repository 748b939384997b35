class StackyError(Exception):
    """Exception type used to propagate Stacky faults."""
    kind = 'Fault'

    def __init__(self, message: str):
        super().__init__(f"{self.kind}: {message}")
        self.message = message


class LexFault(StackyError):
    """Raised when the source text cannot be split into tokens."""
    kind = 'LexFault'


class ParseFault(StackyError):
    """Raised when the token sequence is structurally invalid."""
    kind = 'ParseFault'


class RuntimeFault(StackyError):
    """Raised when a program fails while running."""
    kind = 'RuntimeFault'
