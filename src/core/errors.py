class PuzzleError(Exception):
    """Base class for puzzle errors. ``str(err)`` is safe to show to the player."""


class InvalidCatalog(PuzzleError):
    def __init__(self, message: str = "The boss catalog is empty."):
        super().__init__(message)


class NotFound(PuzzleError):
    def __init__(self, query: str = ""):
        self.query = query
        super().__init__("Invalid boss name.")


class DuplicateGuess(PuzzleError):
    def __init__(self, name: str = ""):
        self.name = name
        super().__init__("Already guessed!")


class LedgerFull(PuzzleError):
    def __init__(self, max_attempts: int = 6):
        self.max_attempts = max_attempts
        super().__init__(f"No attempts left ({max_attempts}/{max_attempts} used).")


class PuzzleAlreadyResolved(PuzzleError):
    def __init__(self):
        super().__init__("Today's puzzle is already over. Come back tomorrow!")


class PuzzleNotResolved(PuzzleError):
    def __init__(self):
        super().__init__("Today's puzzle is still in progress.")
