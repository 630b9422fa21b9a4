"""
Protocols and abstract base classes for type safety.

This package provides protocols that define the interfaces of the
external collaborators, enabling better type checking and substitution.
"""

from .collaborator_protocol import ArtifactStoreProtocol, ObjectStorageProtocol

__all__ = ["ArtifactStoreProtocol", "ObjectStorageProtocol"]
