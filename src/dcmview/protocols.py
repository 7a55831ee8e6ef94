"""Protocols for the collaborators of the tree engine."""

from typing import Protocol, runtime_checkable

from dcmview.models.record import TagKey


@runtime_checkable
class TagDictionary(Protocol):
    """Protocol for static tag dictionaries."""

    def lookup(self, tag: TagKey) -> str | None:
        """Return the name of a tag, or None if the tag is unknown."""
        ...
