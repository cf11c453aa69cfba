"""Exception hierarchy for fatal API grammar violations."""


class ApiParseError(Exception):
    """Base class for every fatal error raised while building the model."""

    def __init__(self, message: str, context: str | None = None) -> None:
        self.message = message
        self.context = context
        if context:
            super().__init__(f"{message}: {context}")
        else:
            super().__init__(message)


class GrammarError(ApiParseError):
    """Raised when a heading or declaration line does not match the grammar."""


class UnknownReferenceError(ApiParseError):
    """Raised when a declaration names a class or method that does not exist."""


class MissingSinceError(ApiParseError):
    """Raised when a heading carries no `since:` bullet."""


class AmbiguousOverrideError(ApiParseError):
    """Raised when a language override cannot be tied to a single declaration."""


class TemplateError(ApiParseError):
    """Raised when a template reference cannot be expanded."""


class DuplicateParamError(TemplateError):
    """Raised when the params source defines the same key twice."""


class DuplicateClassError(ApiParseError):
    """Raised for a repeated class name when duplicates are configured as errors."""


class ApiSourceError(ApiParseError):
    """Raised when the input directory holds no grammar files."""
