"""
Unit tests for serializer.py

Tests the fixed ctags line format.
"""

import unittest

from tagging.models import Tag, TagAccess, TagKind
from tagging.serializer import tag_to_string, tags_to_strings


class TestTagToString(unittest.TestCase):
    """Test single-tag serialization."""

    def test_minimal_tag(self):
        """Tag without parent, signature or access."""
        tag = Tag("Foo.Bar", "src/Foo/Bar.hs", "module Foo.Bar where", TagKind.MODULE, 1)
        self.assertEqual(
            tag_to_string(tag),
            'Foo.Bar\tsrc/Foo/Bar.hs\t/^module Foo.Bar where$/;"\tm\tline:1',
        )

    def test_minimal_tag_has_no_trailing_segments(self):
        """Two segments follow the pattern terminator and none are empty."""
        tag = Tag("T", "A.hs", "type T = Int", TagKind.TYPE, 4)
        line = tag_to_string(tag)
        segments = line.split("\t")
        self.assertEqual(len(segments), 5)
        self.assertTrue(segments[2].endswith(';"'))
        self.assertEqual(segments[3:], ["t", "line:4"])
        self.assertFalse(line.endswith("\t"))
        self.assertNotIn("\n", line)

    def test_constructor_parent(self):
        tag = Tag(
            "Leaf", "Tree.hs", "data Tree a = Leaf | Node a (Tree a) (Tree a)",
            TagKind.CONSTRUCTOR, 10, parent=(TagKind.DATA, "Tree"),
        )
        self.assertEqual(
            tag_to_string(tag),
            "Leaf\tTree.hs\t/^data Tree a = Leaf | Node a (Tree a) (Tree a)$/;\"\t"
            "c\tline:10\tdata:Tree",
        )

    def test_newtype_parent(self):
        tag = Tag(
            "Age", "A.hs", "newtype Age = Age Int", TagKind.CONSTRUCTOR, 2,
            parent=(TagKind.NEWTYPE, "Age"),
        )
        self.assertTrue(tag_to_string(tag).endswith("\tnewtype:Age"))

    def test_function_signature(self):
        tag = Tag("f", "A.hs", "f :: Int -> Int", TagKind.FUNCTION, 5, signature="Int -> Int")
        self.assertEqual(
            tag_to_string(tag),
            'f\tA.hs\t/^f :: Int -> Int$/;"\tf\tline:5\tsignature:(Int -> Int)',
        )

    def test_import_signature_and_access(self):
        """Signature precedes access."""
        tag = Tag(
            "Data.Map", "A.hs", "import qualified Data.Map as M",
            TagKind.IMPORT, 3, signature="M", access=TagAccess.PROTECTED,
        )
        self.assertEqual(
            tag_to_string(tag),
            'Data.Map\tA.hs\t/^import qualified Data.Map as M$/;"\ti\tline:3'
            "\tsignature:(M)\taccess:protected",
        )

    def test_access_words(self):
        for access, word in (
            (TagAccess.PUBLIC, "public"),
            (TagAccess.PRIVATE, "private"),
            (TagAccess.PROTECTED, "protected"),
        ):
            tag = Tag("Data.List", "A.hs", "import Data.List", TagKind.IMPORT, 2, access=access)
            self.assertTrue(tag_to_string(tag).endswith(f"\taccess:{word}"))

    def test_pattern_is_not_escaped(self):
        """Slashes and backslashes are written verbatim."""
        line = "x // y = x \\\\ y"
        tag = Tag("//", "A.hs", line, TagKind.FUNCTION, 7)
        self.assertIn(f"\t/^{line}$/;\"\t", tag_to_string(tag))

    def test_serialization_is_stable(self):
        tag = Tag(
            "Node", "Tree.hs", "  | Node a", TagKind.CONSTRUCTOR, 11,
            parent=(TagKind.DATA, "Tree"),
        )
        self.assertEqual(tag_to_string(tag), tag_to_string(tag))
        self.assertEqual(
            tag_to_string(tag),
            tag_to_string(Tag("Node", "Tree.hs", "  | Node a", TagKind.CONSTRUCTOR, 11,
                              parent=(TagKind.DATA, "Tree"))),
        )


class TestTagsToStrings(unittest.TestCase):
    def test_preserves_order(self):
        tags = [
            Tag("b", "A.hs", "b :: Int", TagKind.FUNCTION, 2),
            Tag("a", "A.hs", "a :: Int", TagKind.FUNCTION, 1),
        ]
        lines = tags_to_strings(tags)
        self.assertEqual([line.split("\t")[0] for line in lines], ["b", "a"])

    def test_empty(self):
        self.assertEqual(tags_to_strings([]), [])


if __name__ == "__main__":
    unittest.main()
