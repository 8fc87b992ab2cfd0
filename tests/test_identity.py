import pytest

from dispatchr import get_store_name


class Named:
    store_name = "custom"


class Widget:
    pass


class Gadget:
    name = "gadget"


def factory():
    return None


class DomainObject:
    def __init__(self, name):
        self.name = name


@pytest.mark.parametrize(
    "ref, expected",
    [
        ("Checkout", "Checkout"),
        (Named, "custom"),
        (Widget, "Widget"),
        (Gadget, "gadget"),
        (factory, "factory"),
        (DomainObject("billing"), "billing"),
    ],
)
def test_get_store_name(ref, expected):
    assert get_store_name(ref) == expected


@pytest.mark.parametrize("ref", [None, object(), DomainObject(""), {"store_name": "x"}])
def test_get_store_name_unresolvable(ref):
    assert get_store_name(ref) is None


def test_store_name_wins_over_class_name():
    class Inner:
        store_name = "Outer"

    assert get_store_name(Inner) == "Outer"


def test_store_name_wins_over_name():
    class Both:
        store_name = "primary"
        name = "secondary"

    assert get_store_name(Both) == "primary"
