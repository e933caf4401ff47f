class LazyNoteError(Exception):
    pass


class ValidationError(LazyNoteError):
    """Bad user input that the user can correct and retry"""


class PreconditionError(LazyNoteError):
    """Operation invoked while the state machine is in the wrong state"""


class DomainError(LazyNoteError):
    """Malformed data coming from a data provider"""


class EmptyQuizError(DomainError):
    pass


class InvalidQuestionError(DomainError):
    pass


class NotFoundError(LazyNoteError):
    pass


class AuthenticationError(LazyNoteError):
    pass
