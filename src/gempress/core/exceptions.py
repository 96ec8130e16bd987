"""Exceptions for the gempress build pipeline.

Every error a user can fix by editing a file (config, template, post metadata) derives from
:class:`GempressError` and carries a readable message naming the offending file. The CLI prints
these without a traceback.
"""

from __future__ import annotations

from pathlib import Path


class GempressError(Exception):
    """Base exception for all user-facing gempress errors."""


# --- Configuration ---


class ConfigError(GempressError):
    """Base exception for configuration errors."""


class NonexistentConfigFileError(ConfigError):
    """Raised when the config file does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"There is no config file at `{path}`.")


class InvalidConfigFileError(ConfigError):
    """Raised when the config file cannot be parsed or fails validation."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"There is a problem with the config file at `{path}`.\n\n{reason}")


class InvalidCapsuleUrlError(ConfigError):
    """Raised when the configured capsule URL is not an absolute URL."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"The capsule URL you provided is not a valid URL: {url}")


class InvalidPostPathError(ConfigError):
    """Raised when the post path template cannot be parsed or rendered."""

    def __init__(self, template: str, reason: str) -> None:
        self.template = template
        self.reason = reason
        super().__init__(
            f"The post path template in your config file is invalid.\n\nTemplate: `{template}`\n\n{reason}"
        )


class UnsafePublicDirError(ConfigError):
    """Raised when wiping the public directory would delete capsule sources."""

    def __init__(self, public_dir: Path, source: Path) -> None:
        self.public_dir = public_dir
        self.source = source
        super().__init__(
            f"The public directory `{public_dir}` is cleared on every build, which would delete "
            f"`{source}`. Point `public_dir` at a directory of its own."
        )


class TemplateError(ConfigError):
    """Base exception for render template failures."""


class TemplateNotFoundError(TemplateError):
    """Raised when a user-supplied template file does not exist."""

    def __init__(self, kind: str, path: Path) -> None:
        self.kind = kind
        self.path = path
        super().__init__(f"The {kind} template file does not exist: {path}")


class InvalidIndexTemplateError(TemplateError):
    """Raised when the index page template fails to parse or render."""

    def __init__(self, template_path: Path, reason: str) -> None:
        self.template_path = template_path
        self.reason = reason
        super().__init__(
            f"There was an issue generating the index page from `{template_path}`.\n\n{reason}"
        )


class InvalidPostTemplateError(TemplateError):
    """Raised when the post page template fails to parse or render."""

    def __init__(self, template_path: Path, output_path: Path, reason: str) -> None:
        self.template_path = template_path
        self.output_path = output_path
        self.reason = reason
        super().__init__(
            f"There was an issue generating the post page `{output_path}` "
            f"from `{template_path}`.\n\n{reason}"
        )


class InvalidFeedTemplateError(TemplateError):
    """Raised when the built-in Atom feed template fails.

    The feed template ships with gempress, so this always indicates a bug.
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"There was an issue generating the Atom feed. This is a bug.\n\n{reason}")


# --- Content ---


class ContentError(GempressError):
    """Base exception for errors in post files."""


class InvalidMetadataFileError(ContentError):
    """Raised when a post metadata file is malformed."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"There is a problem with the post metadata file at `{path}`.\n\n{reason}")


class InvalidBodyEncodingError(ContentError):
    """Raised when a post body is not valid UTF-8."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"The post body at `{path}` is not valid UTF-8.\n\n{reason}")


class LocationError(ContentError):
    """Raised when a post's URL and output path cannot be computed."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Could not compute the location of the post at `{path}`.\n\n{reason}")


class DuplicateOutputPathError(ContentError):
    """Raised when a post resolves to an output file already claimed by another post or page."""

    def __init__(self, output_path: Path, first: Path | str, second: Path) -> None:
        self.output_path = output_path
        self.first = first
        self.second = second
        super().__init__(
            f"Two outputs would be written to the same file `{output_path}`:\n{first}\n{second}"
        )


class PostAlreadyExistsError(ContentError):
    """Raised when creating a post whose files already exist."""

    def __init__(self, slug: str) -> None:
        self.slug = slug
        super().__init__(f"There is already a post with this slug: {slug}")


class InvalidSlugError(ContentError):
    """Raised when a new post slug cannot be used as a file name."""

    def __init__(self, slug: str) -> None:
        self.slug = slug
        super().__init__(f"This slug cannot be used as a file name: {slug!r}")


# --- Filesystem ---


class BuildFilesystemError(GempressError):
    """Base exception for filesystem failures during a build."""


class DirectoryReadError(BuildFilesystemError):
    """Raised when a content directory cannot be listed."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed reading directory `{path}`: {reason}")


class PostReadError(BuildFilesystemError):
    """Raised when a post file cannot be read from disk."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed reading post file `{path}`: {reason}")


class OutputWriteError(BuildFilesystemError):
    """Raised when a generated file cannot be written."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed writing `{path}`: {reason}")


class StaticMergeError(BuildFilesystemError):
    """Raised when copying the static tree into the public directory fails."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed copying static content `{path}`: {reason}")


class StaticConflictError(StaticMergeError):
    """Raised when a static file would overwrite an existing output file."""

    def __init__(self, path: Path, dest: Path) -> None:
        self.dest = dest
        super().__init__(path, f"the destination already exists: {dest}")


class UnsupportedSymlinkError(StaticMergeError):
    """Raised when the static tree contains a symlink on a platform without symlinks."""

    def __init__(self, path: Path) -> None:
        super().__init__(
            path, "symlinks in the static directory are only supported on Unix-like platforms"
        )


class UnsupportedFileTypeError(StaticMergeError):
    """Raised for static entries that are not regular files, directories or symlinks."""

    def __init__(self, path: Path) -> None:
        super().__init__(path, "not a regular file, directory, or symbolic link")
