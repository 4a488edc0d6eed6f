class IntegrationError(Exception):
    """Raised when a call to the forms API fails for any reason."""


class FormNotFoundError(Exception):
    """Raised when a form id is not in the coordinator's current state."""


class QuestionNotFoundError(FormNotFoundError):
    """Raised when a question id is not in the form being edited."""
