from __future__ import annotations


ERRORS: dict[str, str] = {
    "invalid-get-manifest-entries-input": "build_manifest() expects a mapping of options, not a list or scalar.",
    "invalid-root-directory": "root_directory must be a non-empty string or path.",
    "invalid-glob-patterns": "glob_patterns must be a list of glob strings.",
    "invalid-glob-ignores": "glob_ignores must be a list of glob strings.",
    "invalid-maximum-file-size": "maximum_file_size must be a positive integer number of bytes.",
    "invalid-server-rendered-urls": (
        "server_rendered_urls must be a mapping of URL to a list of dependency glob patterns."
    ),
    "server-rendered-url-matches-glob": (
        "A URL in server_rendered_urls is also matched by glob_patterns; server rendered URLs must be distinct."
    ),
    "invalid-manifest-entry": "Every manifest entry needs a non-empty url and revision.",
    "duplicate-manifest-url": "The manifest contains the same url more than once.",
}


class ManifestError(RuntimeError):
    """Raised when a manifest cannot be built. ``code`` is a key of ``ERRORS``."""

    def __init__(self, code: str, detail: str | None = None) -> None:
        if code not in ERRORS:
            raise KeyError(f"Unknown manifest error code: {code}")
        self.code = code
        self.detail = detail
        message = ERRORS[code]
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class InvalidInputError(ManifestError):
    # The options object itself is unusable; no field was inspected.
    def __init__(self, detail: str | None = None) -> None:
        super().__init__("invalid-get-manifest-entries-input", detail)
