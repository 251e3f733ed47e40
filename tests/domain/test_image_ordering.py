from fakes import make_image

from provisioning_core.domain.core import Ordering, multi_max
from provisioning_core.domain.template import DEFAULT_IMAGE_CHOOSER, DEFAULT_IMAGE_ORDERING


def test_64bit_preferred_over_32bit():
    a = make_image("A", arch="x86", is_64bit=False)
    b = make_image("B", arch="x86_64", is_64bit=True)

    assert DEFAULT_IMAGE_CHOOSER([a, b]) is b
    assert DEFAULT_IMAGE_CHOOSER([b, a]) is b


def test_unset_arch_outranks_64bit():
    a = make_image("A", arch="x86", is_64bit=False)
    c = make_image("C")
    b = make_image("B", arch="x86_64", is_64bit=True)

    assert DEFAULT_IMAGE_CHOOSER([a, c, b]) is c


def test_name_breaks_ties_with_null_name_last():
    named = make_image("1", arch="x86_64", is_64bit=True, name="ubuntu-20.04")
    newer = make_image("2", arch="x86_64", is_64bit=True, name="ubuntu-22.04")
    unnamed = make_image("3", arch="x86_64", is_64bit=True)

    assert multi_max(DEFAULT_IMAGE_ORDERING, [named, newer, unnamed]) == [unnamed]
    assert DEFAULT_IMAGE_CHOOSER([named, newer]) is newer


def test_version_breaks_name_ties():
    old = make_image("old", arch="arm64", is_64bit=True, name="amzn", version="2023-01-01")
    new = make_image("new", arch="arm64", is_64bit=True, name="amzn", version="2024-06-01")

    assert DEFAULT_IMAGE_CHOOSER([new, old]) is new


def test_full_ties_resolved_by_input_order():
    first = make_image("first", arch="x86_64", is_64bit=True, name="same")
    second = make_image("second", arch="x86_64", is_64bit=True, name="same")

    assert multi_max(DEFAULT_IMAGE_ORDERING, [first, second]) == [first, second]
    assert DEFAULT_IMAGE_CHOOSER([second, first]) is second


def test_explicit_arch_first_ordering_is_expressible():
    def has_arch(image):
        return image.operating_system.arch is not None

    arch_first = Ordering.natural().on_result_of(has_arch).compound(DEFAULT_IMAGE_ORDERING)
    c = make_image("C")
    b = make_image("B", arch="x86_64", is_64bit=True)

    assert multi_max(arch_first, [c, b]) == [b]
