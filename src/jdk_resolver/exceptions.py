"""Resolver-specific exceptions.

Every error carries a human-readable message, optional diagnostic context and a
suggested remediation. Nothing here is retried automatically; callers decide.
"""


class ResolverError(Exception):
    """Base exception for version resolution and installation."""

    default_suggestion: str | None = None

    def __init__(self, message: str, context: dict | None = None, suggestion: str | None = None):
        """Initialize with message, optional context and remediation hint.

        Args:
            message: Human-readable error message
            context: Optional dict with additional context (paths, URLs, versions)
            suggestion: Optional remediation shown to the user; falls back to the
                class default when omitted
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.suggestion = suggestion or self.default_suggestion


class ParseError(ResolverError):
    """Version string could not be parsed."""

    default_suggestion = "Use a version such as 17, 17.0, 17.0.5, 8u352 or 1.8.0_352."


class NetworkError(ResolverError):
    """Catalog or download request failed."""

    default_suggestion = "Check your network connection and try again."


class NoMatchError(ResolverError):
    """No release matched the requested version."""

    default_suggestion = "List the available versions and pick one of them."


class AmbiguousReleaseError(NoMatchError):
    """More than one installed release matched the requested version."""

    default_suggestion = "Use a more specific version or the full directory name."

    def __init__(self, message: str, candidates: list[str], context: dict | None = None):
        super().__init__(message, context=context)
        self.candidates = candidates


class ExtractionError(ResolverError):
    """Archive could not be extracted."""

    default_suggestion = "Delete the partially extracted directory and download the archive again."


class UnsupportedFormatError(ExtractionError):
    """Archive format is neither .zip nor .tar.gz."""

    default_suggestion = "Pick a release distributed as .zip or .tar.gz."


class LayoutError(ResolverError):
    """Extracted files do not form a usable installation."""

    default_suggestion = "Check that the archive contains a complete JDK with bin/ and lib/ directories."


class ConfigError(ResolverError):
    """Provider selection or configuration is invalid."""

    default_suggestion = "Check the provider name and the private catalog settings."
