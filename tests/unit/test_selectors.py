"""Unit tests for selector parsing and self resolution."""

from spytial.decorators import SELF, Selector


class TestSelectorParse:
    """Test splitting selectors on the self token."""

    def test_no_self(self):
        selector = Selector.parse("Person.name")
        assert selector.parts == ("Person.name",)
        assert not selector.has_self_ref

    def test_self_prefix(self):
        assert Selector.parse("self.children").parts == (SELF, ".children")

    def test_multiple_refs(self):
        selector = Selector.parse("self->self.next")
        assert selector.parts == (SELF, "->", SELF, ".next")

    def test_whole_word_only(self):
        """Test identifiers containing the token are left alone."""
        selector = Selector.parse("myself + selfish + self_ref")
        assert not selector.has_self_ref

    def test_custom_token(self):
        selector = Selector.parse("this.left", self_token="this")
        assert selector.parts == (SELF, ".left")


class TestSelectorResolve:
    """Test rendering selectors with a placeholder."""

    def test_resolve(self):
        assert Selector.parse("self.left + self.right").resolve("obj_3") == "obj_3.left + obj_3.right"

    def test_str_round_trips_text(self):
        text = "{x : self | x.value > 1}"
        assert str(Selector.parse(text)) == text
