"""Location value object - a node in the provider/region/zone tree."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Iterator, Optional

from provisioning_core.domain.compute.value_objects import LocationScope
from provisioning_core.domain.core.exceptions import ValidationError


@dataclass(frozen=True)
class Location:
    """
    Immutable location; a location contains all of its descendants.

    Attributes:
        id: Provider-unique location identifier
        description: Human-readable description
        scope: Depth of the location in the tree
        parent: Enclosing location, None for the root
        iso_codes: ISO-3166 codes of the jurisdictions the location serves
    """
    id: str
    scope: LocationScope
    description: str = ""
    parent: Optional["Location"] = None
    iso_codes: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        if not self.id:
            raise ValidationError("Location ID is required")
        if not isinstance(self.iso_codes, frozenset):
            object.__setattr__(self, "iso_codes", frozenset(self.iso_codes))
        if self.parent is not None and not self.parent.scope.is_wider_than(self.scope):
            raise ValidationError(
                f"Parent {self.parent.id} ({self.parent.scope.value}) must be wider "
                f"than {self.id} ({self.scope.value})"
            )

    def ancestors(self) -> Iterator["Location"]:
        """Yield enclosing locations, nearest first."""
        current = self.parent
        while current is not None:
            yield current
            current = current.parent

    def is_same_or_descendant_of(self, other: "Location") -> bool:
        """True when ``other`` is this location or one of its ancestors."""
        return other == self or any(other == ancestor for ancestor in self.ancestors())

    def __str__(self) -> str:
        return f"[id={self.id}, scope={self.scope.value}, description={self.description}]"
