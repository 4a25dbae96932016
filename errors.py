class MatchingError(Exception):
    """Base class for errors raised by the matching core."""


class NotAuthenticatedError(MatchingError):
    """No signed-in user was found on the client."""

    def __init__(self, message="No logged-in user found."):
        super().__init__(message)
        self.message = message


class ProfileMissingError(MatchingError):
    """The user has no mentee/mentor row and no fallback could be built."""

    def __init__(self, user_id, message=None):
        self.user_id = user_id
        self.message = message or f"No profile found for user {user_id}."
        super().__init__(self.message)


class FetchFailedError(MatchingError):
    """A call to the backend failed. `message` is safe to show to the user."""

    def __init__(self, operation, message=None):
        self.operation = operation
        self.message = message or f"Failed to {operation}. Please try again."
        super().__init__(self.message)


class ReviewNotAllowedError(MatchingError):
    """The current user may not write or edit this review."""

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class InvalidTestimonialError(MatchingError):
    def __init__(self, message):
        super().__init__(message)
        self.message = message
