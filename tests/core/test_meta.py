"""Tests for class meta information helpers."""

import pytest

pytestmark = pytest.mark.unit

from classcontract.contracts import ContractedMethod, attach
from classcontract.core import list_methods, wrap_method_around


class Shape:
    def area(self):
        return 0

    def name(self):
        return "shape"


class Square(Shape):
    side = 2

    def area(self):
        return self.side ** 2

    @property
    def name(self):
        return "square"

    @staticmethod
    def sides():
        return 4


class TestListMethods:
    """list_methods() follows attribute lookup."""

    def test_first_definition_wins(self):
        methods = {info.name: info for info in list_methods(Square)}
        assert methods["area"].owner is Square

    def test_non_functions_hide_base_methods(self):
        names = [info.name for info in list_methods(Square)]
        assert "name" not in names
        assert "sides" not in names
        assert "side" not in names

    def test_inherited_methods(self):
        class Cube(Square):
            pass

        methods = {info.name: info for info in list_methods(Cube)}
        assert methods["area"].owner is Square
        assert methods["area"].func is Square.__dict__["area"]

    def test_object_contributes_nothing(self):
        class Empty:
            pass

        assert list_methods(Empty) == []

    def test_contracted_methods_are_methods(self):
        class Circle(Shape):
            pass

        attach(Circle, "area", pre=lambda self: None)
        methods = {info.name: info for info in list_methods(Circle)}
        assert isinstance(methods["area"].func, ContractedMethod)
        assert methods["area"].owner is Circle


class TestWrapMethodAround:
    """wrap_method_around() installs wrappers on the class itself."""

    def test_wraps_inherited_method_on_subclass(self):
        class Triangle(Shape):
            pass

        def factory(info):
            def wrapper(self):
                return ("wrapped", info.func(self))
            return wrapper

        assert wrap_method_around(Triangle, ["area"], factory) == ["area"]
        assert Triangle().area() == ("wrapped", 0)
        assert Shape().area() == 0

    def test_unknown_name(self):
        class Triangle(Shape):
            pass

        with pytest.raises(LookupError, match="no method 'perimeter'"):
            wrap_method_around(Triangle, ["perimeter"], lambda info: info.func)
