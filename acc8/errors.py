class Acc8Error(Exception):
    pass


class InvalidWordError(Acc8Error, ValueError):
    """Raised when text is not an 8-character string of 0/1 bits."""
    def __init__(self, text, width=None):
        self.text = text
        self.width = width
        expected = f"{width}-bit" if width else "bit"
        super().__init__(f"Not a {expected} word: {text!r}")


class ProgramLoadError(Acc8Error):
    """Raised when a program source cannot be read at all."""
    def __init__(self, message, path=None):
        super().__init__(message)
        self.path = path
