"""
Unit tests for models.py

Tests tag kinds, access markers and tag dictionaries.
"""

import unittest
from dataclasses import FrozenInstanceError

from tagging.models import Tag, TagAccess, TagKind


class TestTagKind(unittest.TestCase):
    """Test the closed set of tag kinds."""

    def test_kind_letters_are_unique(self):
        """Every kind must map to a distinct single-letter code."""
        letters = [kind.letter for kind in TagKind]
        self.assertEqual(len(letters), len(set(letters)))

    def test_kind_letter_is_first_letter_of_name(self):
        """Test letter derivation from the lowercase display name."""
        for kind in TagKind:
            self.assertEqual(kind.letter, kind.value[0])
            self.assertEqual(kind.value, kind.value.lower())

    def test_declaration_order(self):
        """Test the enum keeps declaration-site order."""
        self.assertEqual(
            [kind.value for kind in TagKind],
            ["module", "import", "type", "data", "newtype", "constructor", "function"],
        )

    def test_known_letters(self):
        self.assertEqual(TagKind.NEWTYPE.letter, "n")
        self.assertEqual(TagKind.CONSTRUCTOR.letter, "c")
        self.assertEqual(TagKind.FUNCTION.letter, "f")


class TestTagAccess(unittest.TestCase):
    def test_values_are_lowercase_words(self):
        self.assertEqual(
            {access.value for access in TagAccess},
            {"public", "private", "protected"},
        )


class TestTag(unittest.TestCase):
    """Test the Tag value type."""

    def _tag(self, **overrides):
        values = dict(
            name="Leaf",
            file="src/Tree.hs",
            pattern="data Tree a = Leaf | Node a",
            kind=TagKind.CONSTRUCTOR,
            line=10,
            parent=(TagKind.DATA, "Tree"),
        )
        values.update(overrides)
        return Tag(**values)

    def test_tags_are_immutable(self):
        """Test that tags cannot be mutated after construction."""
        tag = self._tag()
        with self.assertRaises(FrozenInstanceError):
            tag.name = "Node"

    def test_equal_values_are_equal(self):
        self.assertEqual(self._tag(), self._tag())
        self.assertNotEqual(self._tag(), self._tag(line=11))

    def test_optional_fields_default_to_none(self):
        tag = Tag("f", "A.hs", "f :: Int", TagKind.FUNCTION, 1)
        self.assertIsNone(tag.parent)
        self.assertIsNone(tag.signature)
        self.assertIsNone(tag.access)

    def test_to_dict(self):
        """Test JSON-ready conversion."""
        result = self._tag().to_dict()
        self.assertEqual(result["name"], "Leaf")
        self.assertEqual(result["kind"], "constructor")
        self.assertEqual(result["parent"], {"kind": "data", "name": "Tree"})
        self.assertIsNone(result["signature"])
        self.assertIsNone(result["access"])

    def test_to_dict_access(self):
        tag = Tag(
            "Data.Map", "A.hs", "import qualified Data.Map as M",
            TagKind.IMPORT, 3, signature="M", access=TagAccess.PROTECTED,
        )
        result = tag.to_dict()
        self.assertEqual(result["access"], "protected")
        self.assertEqual(result["signature"], "M")
        self.assertIsNone(result["parent"])


if __name__ == "__main__":
    unittest.main()
