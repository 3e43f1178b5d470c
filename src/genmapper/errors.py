__all__ = [
    "BindingError",
    "ConfigError",
    "DependencyError",
    "GenMapperError",
]


class GenMapperError(Exception):
    pass


class ConfigError(GenMapperError, ValueError):
    """Plugin configuration is invalid, the plugin can't take part in the run."""


class DependencyError(GenMapperError, LookupError):
    """A plugin requires another plugin that is not active in the run."""


class BindingError(GenMapperError, LookupError):
    """A table has no concrete type recorded for one of the generic type parameters."""
