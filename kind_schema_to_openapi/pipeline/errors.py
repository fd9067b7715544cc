"""
Errors raised by the kind schema pipeline.
"""

from __future__ import annotations


class KindSchemaError(Exception):
    """Base class for errors raised while loading or compiling a kind schema.

    Any of these is fatal to loading the kind version: compilation is
    deterministic, so retrying produces the same error.
    """

    pass


class MalformedDialectError(KindSchemaError):
    """Raised when a dialect marker is present but its required shape is violated.

    This can happen when:
    - 'openAPIV3Schema' is not an object, or lacks an object 'properties'
    - 'components' or 'components.schemas' of an OpenAPI document is not an object
    """

    pass


class SchemaParseError(KindSchemaError):
    """Raised when the underlying parser rejects the schema document.

    The message is the underlying error's message, unmodified; the original
    exception is available as ``__cause__``.
    """

    pass
