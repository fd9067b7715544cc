"""
Utility functions for kind schema compilation.
"""

# Prefix of local references to named schemas
COMPONENTS_SCHEMAS_PREFIX = "#/components/schemas/"

# Prefix marking a top-level definition as private
PRIVATE_PREFIX = "#"

# Largest value of the signed 64-bit integers used for length and count bounds
MAX_INT64 = 2**63 - 1


def is_private(name: str) -> bool:
    """Check if a top-level definition name is private (starts with "#")."""
    return name.startswith(PRIVATE_PREFIX)


def qualify(qualifier: str, name: str) -> str:
    """Build a qualified definition name.

    Examples:
        qualify("g/v1", "spec") -> "g/v1.spec"
        qualify("g/v1", "#foo") -> "g/v1.#foo"
    """
    return f"{qualifier}.{name}"


def ref_target_name(ref_path: str) -> str:
    """Extract the schema name a local reference points to.

    Examples:
        "#/components/schemas/Foo" -> "Foo"
        "#/components/schemas/#foo" -> "#foo"
        "#/definitions/Bar" -> "Bar"
    """
    if ref_path.startswith(COMPONENTS_SCHEMAS_PREFIX):
        name = ref_path[len(COMPONENTS_SCHEMAS_PREFIX) :]
    else:
        name = ref_path.rsplit("/", 1)[-1]
    # JSON pointer escapes
    return name.replace("~1", "/").replace("~0", "~")


def clamp_int64(value: int | None) -> int | None:
    """Clamp a non-negative bound to the largest signed 64-bit value."""
    if value is None:
        return None
    return min(int(value), MAX_INT64)
