"""
Configuration for the kind schema compiler pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass

OBJECT_META_REF = "k8s.io/apimachinery/pkg/apis/meta/v1.ObjectMeta"
LIST_META_REF = "k8s.io/apimachinery/pkg/apis/meta/v1.ListMeta"
PRESERVE_UNKNOWN_FIELDS_EXTENSION = "x-kubernetes-preserve-unknown-fields"


@dataclass
class CompilerConfig:
    """Configuration options for compilation."""

    # Definition referenced by the Kind's metadata property
    object_meta_ref: str = OBJECT_META_REF

    # Definition referenced by the KindList's metadata property
    list_meta_ref: str = LIST_META_REF

    # Vendor extension meaning "accept any additional field"
    preserve_unknown_fields_extension: str = PRESERVE_UNKNOWN_FIELDS_EXTENSION

    # Number of threads used to compile top-level definitions (1 = inline)
    max_workers: int = 1

    # Whether to validate the synthesized document against the OpenAPI 3.0 schema
    validate_document: bool = True

    @staticmethod
    def from_dict(d: dict) -> CompilerConfig:
        """Create a config from a dictionary."""
        config = CompilerConfig()
        for k, v in d.items():
            if hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "object_meta_ref": self.object_meta_ref,
            "list_meta_ref": self.list_meta_ref,
            "preserve_unknown_fields_extension": self.preserve_unknown_fields_extension,
            "max_workers": self.max_workers,
            "validate_document": self.validate_document,
        }
