"""
Error taxonomy for topman_blog.

Services raise these; ``ApiView`` turns them into
``{"success": false, "error": ...}`` responses with the matching status.
"""

DUPLICATE_TITLE_MESSAGE = (
    "You already have a post with this title. Please use a different title."
)


class BlogError(Exception):
    """Base class for errors that are reported to the API caller."""

    status = 500
    default_message = "Server Error"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def as_dict(self):
        return {"success": False, "error": self.message}


class ValidationError(BlogError):
    """
    Malformed or missing input.

    ``errors`` lists every violated field as ``{"field", "message"}`` dicts.
    """

    status = 400
    default_message = "Validation error"

    def __init__(self, message=None, errors=None):
        super().__init__(message)
        self.errors = list(errors or [])

    @classmethod
    def from_form(cls, form):
        """Build from a bound Django form that failed ``is_valid()``."""
        errors = [
            {"field": field, "message": str(message)}
            for field, messages in form.errors.items()
            for message in messages
        ]
        return cls(errors=errors)

    def as_dict(self):
        data = super().as_dict()
        if self.errors:
            data["errors"] = self.errors
        return data


class NotAuthenticated(BlogError):
    status = 401
    default_message = "Not authorized to access this route"


class Forbidden(BlogError):
    status = 403
    default_message = "Not authorized to perform this action"


class NotFound(BlogError):
    status = 404
    default_message = "Resource not found"


class Conflict(BlogError):
    """Write rejected by a uniqueness or integrity rule."""

    status = 400
    default_message = DUPLICATE_TITLE_MESSAGE
