"""Tests for key paths."""

from rulebook.contract.path import KeyPath


class TestKeyPath:
    def test_from_dot_string(self):
        path = KeyPath.coerce("address.street")
        assert path.segments == ("address", "street")
        assert str(path) == "address.street"

    def test_from_tuple(self):
        assert KeyPath.coerce(("address", "street")) == KeyPath(("address", "street"))

    def test_none_is_root(self):
        root = KeyPath.coerce(None)
        assert root == KeyPath.root()
        assert not root

    def test_includes_ancestor(self):
        path = KeyPath.coerce("address.street")
        assert path.includes(KeyPath.coerce("address"))
        assert path.includes(path)
        assert not path.includes(KeyPath.coerce("address.street.number"))
        assert not path.includes(KeyPath.coerce("email"))

    def test_parent_and_child(self):
        path = KeyPath.coerce("address").child("city")
        assert path.to_dot() == "address.city"
        assert path.parent == KeyPath.coerce("address")
        assert KeyPath.coerce("address").parent is None
        assert path.last == "city"

    def test_value_in(self):
        data = {"address": {"city": "Kraków"}}
        assert KeyPath.coerce("address.city").value_in(data) == "Kraków"
        assert KeyPath.coerce("address.zip").value_in(data, "n/a") == "n/a"
