"""Content build errors: malformed headers, missing fields, duplicate slugs"""


class ContentError(Exception):
    """Base class for errors that abort a content build."""


class MetadataParseError(ContentError):
    """Front matter could not be decoded into a GuideMeta record."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: invalid front matter: {reason}")


class MissingFieldError(ContentError):
    """Front matter lacks one or more required fields."""

    def __init__(self, path: str, fields: list[str]):
        self.path = path
        self.fields = list(fields)
        super().__init__(f"{path}: missing required field(s): {', '.join(self.fields)}")


class DuplicateSlugError(ContentError):
    """Two source files resolve to the same slug."""

    def __init__(self, slug: str, first_path: str, second_path: str):
        self.slug = slug
        self.paths = (first_path, second_path)
        super().__init__(f"Duplicate slug '{slug}': {first_path} and {second_path}")
