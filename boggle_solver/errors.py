class BoggleError(Exception):
    """Base class for solver errors."""


class InvalidInput(BoggleError, ValueError):
    """Board or test-file input that cannot be solved as given."""


class NotConfigured(BoggleError, RuntimeError):
    """A board was solved before any legal words were set."""


class NotFound(BoggleError, KeyError):
    """Raised by Trie.advance for a letter with no child. Internal only."""
