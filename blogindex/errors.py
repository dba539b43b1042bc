"""Per-file content errors.

Every error here describes a problem with one source file. Loaders and the
index builder turn them into diagnostics instead of aborting the batch.
"""

from blogindex.schemas.post import Diagnostic


class ContentError(Exception):
    kind = "ContentError"

    def __init__(self, path: str, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path
        self.message = message

    def to_diagnostic(self) -> Diagnostic:
        return Diagnostic(path=self.path, kind=self.kind, message=self.message)


class MalformedFrontmatter(ContentError):
    kind = "MalformedFrontmatter"


class MissingRequiredField(ContentError):
    kind = "MissingRequiredField"

    def __init__(self, path: str, name: str):
        super().__init__(path, f"missing required field '{name}'")
        self.name = name


class InvalidDate(ContentError):
    kind = "InvalidDate"

    def __init__(self, path: str, value):
        super().__init__(path, f"invalid date {value!r}")
        self.value = value


class DuplicateURL(ContentError):
    kind = "DuplicateURL"

    def __init__(self, path: str, url: str, others: list[str]):
        super().__init__(
            path, f"permalink {url} is also claimed by {', '.join(others)}"
        )
        self.url = url
        self.others = others


class ContentRootNotFound(Exception):
    def __init__(self, root):
        super().__init__(f"Content directory not found: {root}")
        self.root = root
