class InvalidArgument(ValueError):
    """Bad month/year or other caller input."""


class TemplateNotFound(FileNotFoundError):
    """The template presentation is missing; nothing can be prepared."""


class ShortcutMetadataError(RuntimeError):
    """Reading, creating or editing a .lnk file failed."""
