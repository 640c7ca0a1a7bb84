class SpendwiseError(Exception):
    """Base for errors surfaced to the caller as a 400 response."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(SpendwiseError):
    pass


class InvalidArgument(SpendwiseError):
    pass
