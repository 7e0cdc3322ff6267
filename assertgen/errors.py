class AssertionGeneratorError(Exception):
    """Base class of every error raised by the generator."""


class InvalidArgumentError(AssertionGeneratorError, ValueError):
    """A caller handed over something we cannot describe or render."""


class TemplateLoadError(AssertionGeneratorError, RuntimeError):
    """Template text could not be located or read."""


class ClassNotFoundError(AssertionGeneratorError, LookupError):
    """A requested type or package is not in the catalog."""
