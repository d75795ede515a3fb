"""
Exception hierarchy for the schema generator.

Resolvers signal "no opinion" by returning None, never by raising. The
exceptions below are reserved for malformed input and misconfiguration,
which abort a generation run without producing a partial document.
"""


class SchemaGenerationError(Exception):
    """Base class for all errors raised by the schema generator."""

    pass


class TypeResolutionError(SchemaGenerationError):
    """Raised when a raw type reference cannot be resolved to a type descriptor.

    Typical causes are an unbound type variable without bound or default,
    a generic parameterization with the wrong number of arguments, or a
    forward reference that cannot be evaluated.
    """

    def __init__(self, type_reference: object, reason: str):
        self.type_reference = type_reference
        self.reason = reason
        super().__init__(f"Cannot resolve type {type_reference!r}: {reason}")


class DefinitionNamingError(SchemaGenerationError):
    """Raised when a naming strategy fails to produce unique definition names."""

    pass


class ConfigurationError(SchemaGenerationError):
    """Raised for invalid generator configuration."""

    pass


class SchemaOutputError(SchemaGenerationError):
    """Raised when a generated document cannot be written."""

    pass
