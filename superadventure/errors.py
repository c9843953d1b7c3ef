class SuperAdventureError(Exception):
    pass


class StorageError(SuperAdventureError):
    """A key-value store could not be read or written."""


class IllegalTransition(SuperAdventureError):
    def __init__(self, current, target):
        super().__init__(f"cannot go from {current.name} to {target.name}")
        self.current = current
        self.target = target


class InvalidPlayerName(SuperAdventureError):
    """Raised for a score name of the wrong length; the message is shown to the player."""
