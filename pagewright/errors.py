class SiteBuildError(Exception):
    """Base class for every error raised while building the site."""


class PageError(SiteBuildError):
    """
    A failure confined to one page.

    The build keeps going after one of these and reports them all at the end.
    """

    def __init__(self, message: str, page=None):
        self.page = page
        if page is not None:
            message = f"{page}: {message}"
        super().__init__(message)


class MalformedDescriptor(PageError):
    """A config document or page descriptor could not be read or is invalid."""


class MissingContentSource(PageError):
    """The file named by a page's `content` does not exist."""

    def __init__(self, source, page=None):
        self.source = source
        super().__init__(f"content file not found: {source}", page)


class MissingPlaceholder(PageError):
    """A {{placeholder}} names a key that the lookup table does not define."""

    def __init__(self, name: str, page=None):
        self.name = name
        super().__init__(f"undefined placeholder {{{{{name}}}}}", page)


class MissingRequiredFile(PageError):
    """A `requires` entry was absent when copying side files."""

    def __init__(self, source, page=None):
        self.source = source
        super().__init__(f"required file not found: {source}", page)


class OutputWriteFailure(SiteBuildError):
    """Writing to the output tree failed."""


class PipelineOrderError(SiteBuildError):
    """Stages were composed so that a field is read before it is written."""
