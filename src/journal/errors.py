"""Journal error taxonomy."""


class JournalError(Exception):
    """Base class for journal engine errors."""


class InvalidQueryError(JournalError):
    """Search/listing input rejected (missing query, bad page or limit)."""


class EntryValidationError(JournalError, ValueError):
    """Entry field failed range or shape validation."""


class EntryNotFoundError(JournalError):
    """Entry does not exist or belongs to another owner."""

    def __init__(self, entry_id: str):
        super().__init__(f"Journal entry not found: {entry_id}")
        self.entry_id = entry_id
