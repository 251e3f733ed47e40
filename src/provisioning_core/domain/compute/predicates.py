"""Image predicates and location compatibility helpers."""
import re
from typing import Callable, Iterable, Optional

from provisioning_core.domain.compute.image import Image
from provisioning_core.domain.compute.location import Location


class ImagePredicate:
    """A named predicate over images; ``str()`` renders it for error messages."""

    def __init__(self, test: Callable[[Image], bool], description: str):
        self._test = test
        self._description = description

    def __call__(self, image: Image) -> bool:
        return bool(self._test(image))

    def __str__(self) -> str:
        return self._description

    def __repr__(self) -> str:
        return f"ImagePredicate({self._description})"


class ImagePredicates:
    """Factory for the predicates hardware profiles use to declare image support."""

    @staticmethod
    def any_image() -> ImagePredicate:
        return ImagePredicate(lambda image: True, "anyImage")

    @staticmethod
    def id_equals(image_id: str) -> ImagePredicate:
        return ImagePredicate(lambda image: image.id == image_id, f"idEquals({image_id})")

    @staticmethod
    def id_in(image_ids: Iterable[str]) -> ImagePredicate:
        ids = tuple(image_ids)
        return ImagePredicate(lambda image: image.id in ids, f"idIn({list(ids)})")

    @staticmethod
    def arch_in(archs: Iterable[str]) -> ImagePredicate:
        """Match images whose OS architecture is one of ``archs``."""
        values = tuple(archs)
        return ImagePredicate(
            lambda image: image.operating_system.arch in values,
            f"archIn({list(values)})",
        )


def location_compatible(resource_location: Optional[Location],
                        chosen: Optional[Location]) -> bool:
    """
    Check that a resource may be used at the chosen location.

    Resources without a location are eligible everywhere. Otherwise the
    resource's location must be the chosen location or one of its ancestors.
    """
    if resource_location is None or chosen is None:
        return True
    return chosen.is_same_or_descendant_of(resource_location)


def matches(value: Optional[str], constraint: str) -> bool:
    """
    Match an attribute against an exact value or a full-match regex.

    An invalid pattern only matches by equality; a missing attribute never
    matches.
    """
    if value is None:
        return False
    if value == constraint:
        return True
    try:
        return re.fullmatch(constraint, value) is not None
    except re.error:
        return False
