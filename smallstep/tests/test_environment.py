"""Tests for the immutable Environment mapping."""

import pytest
from smallstep import Add, Boolean, Environment, Number, UnboundVariable, Variable


class TestConstruction:
    """Tests for building environments."""

    def test_empty(self):
        """Empty environment has no bindings."""
        env = Environment()
        assert len(env) == 0
        assert str(env) == "{}"

    def test_from_dict_and_kwargs(self):
        """Dict and keyword bindings are merged."""
        env = Environment({"x": Number(1)}, y=Boolean(True))
        assert env["x"] == Number(1)
        assert env["y"] == Boolean(True)
        assert list(env) == ["x", "y"]

    def test_equals_plain_dict(self):
        """Environments compare equal to mappings with the same bindings."""
        assert Environment(x=Number(3)) == {"x": Number(3)}
        assert Environment(x=Number(3)) != {"x": Number(4)}

    def test_rejects_non_terminal_values(self):
        """Only Number and Boolean values may be bound."""
        with pytest.raises(TypeError):
            Environment({"x": Add(Number(1), Number(2))})
        with pytest.raises(TypeError):
            Environment({"x": Variable("y")})
        with pytest.raises(TypeError):
            Environment({"x": 3})

    def test_rejects_non_string_names(self):
        """Variable names must be strings."""
        with pytest.raises(TypeError):
            Environment({1: Number(1)})

    def test_coerce(self):
        """coerce accepts environments, dicts and None."""
        env = Environment(x=Number(1))
        assert Environment.coerce(env) is env
        assert Environment.coerce({"x": Number(1)}) == env
        assert Environment.coerce(None) == {}


class TestBind:
    """bind() returns a new environment and leaves the original alone."""

    def test_bind_inserts(self):
        """bind adds a new name to a copy."""
        env = Environment()
        updated = env.bind("x", Number(1))
        assert updated == {"x": Number(1)}
        assert env == {}

    def test_bind_overwrites(self):
        """bind replaces an existing binding in a copy."""
        env = Environment(x=Number(1), y=Number(2))
        updated = env.bind("x", Number(5))
        assert updated == {"x": Number(5), "y": Number(2)}
        assert env["x"] == Number(1)

    def test_bind_rejects_non_terminal(self):
        """bind refuses non-terminal values."""
        with pytest.raises(TypeError):
            Environment().bind("x", Variable("x"))


class TestLookup:
    """Tests for lookup()."""

    def test_lookup_bound(self):
        """lookup returns the bound value."""
        assert Environment(x=Number(7)).lookup("x") == Number(7)

    def test_lookup_unbound(self):
        """lookup of a missing name raises UnboundVariable."""
        with pytest.raises(UnboundVariable) as exc_info:
            Environment(x=Number(7)).lookup("z")
        assert exc_info.value.name == "z"
        assert "z" in str(exc_info.value)


class TestRendering:
    """Tests for str(), to_dict() and hashing."""

    def test_str_in_insertion_order(self):
        """Bindings render in insertion order."""
        env = Environment({"y": Number(4), "x": Boolean(False)})
        assert str(env) == "{y: 4, x: false}"

    def test_to_dict(self):
        """to_dict renders values as strings."""
        env = Environment(x=Number(3), ok=Boolean(True))
        assert env.to_dict() == {"x": "3", "ok": "true"}

    def test_hash_matches_equality(self):
        """Equal environments hash alike."""
        a = Environment(x=Number(1), y=Number(2))
        b = Environment(y=Number(2), x=Number(1))
        assert a == b
        assert hash(a) == hash(b)
