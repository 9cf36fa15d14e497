
class VhispError(Exception):
    """ Base class for all host-level Vhisp errors"""
    pass

class VhispInvalidSymbol(VhispError):
    """ Raised when something that is not a symbol is used as an environment key"""
    pass

class VhispSyntaxError(VhispError):
    """ Raised when the reader cannot parse its input"""

    def __init__(self, message: str, source: str = "<stdin>", line: int = 1, column: int = 1):
        super().__init__(message)
        self.message = message
        self.source = source
        self.line = line
        self.column = column

    def diagnostic(self) -> str:
        return f"{self.source}:{self.line}:{self.column}: error: {self.message}"

    def __str__(self):
        return self.diagnostic()

class VhispTypeError(VhispError):
    """ Raised when a value is constructed from a payload of the wrong type"""

# Language-level failures are not exceptions: they are Error values
# (vhisp.types.value.Error) returned from builtins and the evaluator.
