"""
Unit tests for the registry module in the tmconvert package.
"""

import pytest

from tmconvert.convert.converters import (
    InfiniteToSipserConverter,
    MachineConverter,
    SipserToInfiniteConverter,
)
from tmconvert.utils import RegistryMixin


@pytest.mark.smoke
def test_registry_initialization():
    class TestRegistryClass(RegistryMixin):
        pass

    assert TestRegistryClass.registry is None
    assert not TestRegistryClass.is_registered("anything")
    assert TestRegistryClass.get_registered_object("anything") is None


@pytest.mark.smoke
def test_register_with_name():
    class TestRegistryClass(RegistryMixin):
        pass

    @TestRegistryClass.register("custom_name")
    class TestClass:
        pass

    assert TestRegistryClass.registry == {"custom_name": TestClass}
    assert TestRegistryClass.get_registered_object("custom_name") is TestClass


@pytest.mark.smoke
def test_register_without_name():
    class TestRegistryClass(RegistryMixin):
        pass

    @TestRegistryClass.register()
    class TestClass:
        pass

    assert TestRegistryClass.registered_objects() == (TestClass,)
    assert TestRegistryClass.is_registered("TestClass")


@pytest.mark.sanity
def test_register_aliases():
    class TestRegistryClass(RegistryMixin):
        pass

    @TestRegistryClass.register(["first", "second"])
    class TestClass:
        pass

    assert TestRegistryClass.get_registered_object("first") is TestClass
    assert TestRegistryClass.get_registered_object("second") is TestClass


@pytest.mark.sanity
def test_lookup_is_case_insensitive():
    class TestRegistryClass(RegistryMixin):
        pass

    TestRegistryClass.register_decorator(int, name="Number")

    assert TestRegistryClass.is_registered("number")
    assert TestRegistryClass.get_registered_object("NUMBER") is int


@pytest.mark.sanity
def test_register_duplicate_name():
    class TestRegistryClass(RegistryMixin):
        pass

    TestRegistryClass.register_decorator(int, name="value")

    with pytest.raises(ValueError, match="already registered"):
        TestRegistryClass.register_decorator(float, name="value")


@pytest.mark.sanity
def test_register_invalid_name_type():
    class TestRegistryClass(RegistryMixin):
        pass

    with pytest.raises(ValueError, match="must be a string"):
        TestRegistryClass.register(123)(int)  # type: ignore[arg-type]

    with pytest.raises(ValueError, match="must be a string"):
        TestRegistryClass.register_decorator(int, name=["valid", 5])  # type: ignore[list-item]


@pytest.mark.sanity
def test_registered_objects_before_registration():
    class TestRegistryClass(RegistryMixin):
        pass

    with pytest.raises(ValueError, match="must be called after"):
        TestRegistryClass.registered_objects()


@pytest.mark.smoke
def test_machine_converters_registered():
    assert MachineConverter.get_registered_object("infinite") is (
        InfiniteToSipserConverter
    )
    assert MachineConverter.get_registered_object("sipser") is (
        SipserToInfiniteConverter
    )
    assert set(MachineConverter.registered_objects()) == {
        InfiniteToSipserConverter,
        SipserToInfiniteConverter,
    }


@pytest.mark.sanity
def test_register_duplicate_name_ignores_case():
    class TestRegistryClass(RegistryMixin):
        pass

    TestRegistryClass.register_decorator(int, name="Value")

    with pytest.raises(ValueError, match="already registered"):
        TestRegistryClass.register_decorator(float, name="value")


@pytest.mark.sanity
def test_registered_objects_lists_aliases_once():
    class TestRegistryClass(RegistryMixin):
        pass

    TestRegistryClass.register_decorator(int, name=["integer", "whole"])
    TestRegistryClass.register_decorator(float, name="real")

    assert TestRegistryClass.registered_objects() == (int, float)
