"""Tests for archive tree construction."""

from __future__ import annotations

import pytest

from arcpick.core.builder import ArchiveTree, build_tree
from arcpick.core.errors import InvalidPath, PathKindConflict
from arcpick.models.entry import ArchiveEntryRecord
from arcpick.models.tree import NodeKind


def _walk_to(root, segments):
    node = root
    for segment in segments:
        node = node.child(segment)
        assert node is not None, f"missing {segment!r}"
    return node


class TestBuildTree:
    def test_empty_records_give_empty_root(self):
        root = build_tree([])
        assert root.is_dir
        assert root.path == ""
        assert root.children == ()

    def test_every_record_reachable_with_kind_and_size(self, project_records):
        root = build_tree(project_records)
        for record in project_records:
            node = _walk_to(root, record.path)
            assert node.path == record.name
            if record.is_directory:
                assert node.kind is NodeKind.DIRECTORY
                assert node.size is None
            else:
                assert node.kind is NodeKind.FILE
                assert node.size == record.size

    def test_children_paths_extend_parent_path(self, project_tree):
        for node in project_tree.walk():
            for child in node.children:
                assert child.path == f"{node.path}/{child.name}"
        for child in project_tree.root.children:
            assert child.path == child.name

    def test_directories_first_then_lexicographic(self, project_tree):
        root_names = [c.name for c in project_tree.root.children]
        assert root_names == ["public", "src", "README.md", "package.json"]

        src = project_tree.get("src")
        assert [c.name for c in src.children] == ["components", "utils", "index.ts"]
        components = project_tree.get("src/components")
        assert [c.name for c in components.children] == ["Button.tsx", "Card.tsx"]

    def test_missing_directories_are_inferred(self, project_tree):
        assert project_tree.get("src/components").inferred
        assert project_tree.get("public").inferred
        assert not project_tree.get("src").inferred

    def test_directory_record_listed_after_children_is_explicit(self, make_records):
        tree = ArchiveTree.from_records(make_records(("a/b/c.txt", 1), ("a/b/", None)))
        assert not tree.get("a/b").inferred
        assert tree.get("a").inferred

    def test_empty_explicit_directory_kept(self, make_records):
        tree = ArchiveTree.from_records(make_records(("empty/", None), ("f.txt", 3)))
        empty = tree.get("empty")
        assert empty.is_dir
        assert empty.children == ()

    def test_duplicate_directory_record_merged(self, make_records):
        tree = ArchiveTree.from_records(make_records(("a/", None), ("a/", None), ("a/x", 1)))
        assert [c.name for c in tree.get("a").children] == ["x"]

    def test_input_order_does_not_matter(self, project_records):
        forward = build_tree(project_records)
        backward = build_tree(list(reversed(project_records)))
        assert forward == backward


class TestBuildErrors:
    def test_same_path_file_and_directory_conflicts(self):
        with pytest.raises(PathKindConflict) as exc:
            build_tree([
                ArchiveEntryRecord(path=("a",), is_directory=True),
                ArchiveEntryRecord(path=("a",), is_directory=False, size=1),
            ])
        assert exc.value.path == "a"

    def test_file_used_as_directory_conflicts(self, make_records):
        with pytest.raises(PathKindConflict) as exc:
            build_tree(make_records(("docs", 10), ("docs/intro.md", 5)))
        assert exc.value.path == "docs"

    def test_file_over_inferred_directory_conflicts(self, make_records):
        with pytest.raises(PathKindConflict) as exc:
            build_tree(make_records(("lib/a/b.py", 10), ("lib/a", 5)))
        assert exc.value.path == "lib/a"

    def test_empty_path_rejected(self):
        with pytest.raises(InvalidPath):
            build_tree([ArchiveEntryRecord(path=(), size=0)])

    @pytest.mark.parametrize(
        "segments",
        [("a", "", "b"), ("a", "..", "b"), (".",), ("a", "b/c"), ("nul\x00",)],
    )
    def test_malformed_segments_rejected(self, segments):
        with pytest.raises(InvalidPath):
            build_tree([ArchiveEntryRecord(path=segments, size=1)])

    def test_leading_slash_rejected(self):
        with pytest.raises(InvalidPath):
            build_tree([ArchiveEntryRecord.from_name("/etc/passwd", size=1)])

    def test_duplicate_file_rejected(self, make_records):
        with pytest.raises(InvalidPath, match="duplicate"):
            build_tree(make_records(("a.txt", 1), ("a.txt", 2)))


class TestArchiveEntryRecord:
    def test_trailing_slash_marks_directory(self):
        record = ArchiveEntryRecord.from_name("src/utils/")
        assert record.is_directory
        assert record.path == ("src", "utils")
        assert record.size is None

    def test_file_without_size_defaults_to_zero(self):
        assert ArchiveEntryRecord(path=["x"]).size == 0

    def test_negative_size_rejected(self):
        with pytest.raises(ValueError):
            ArchiveEntryRecord(path=("x",), size=-1)

    def test_string_path_split_on_slashes(self):
        assert ArchiveEntryRecord(path="README", size=10).path == ("README",)
        assert ArchiveEntryRecord(path="src/index.ts").path == ("src", "index.ts")

    def test_string_path_builds_single_file(self):
        root = build_tree([ArchiveEntryRecord(path="README", size=10)])
        assert [c.path for c in root.iter_descendants()] == ["README"]
        assert root.child("README").size == 10


class TestArchiveTree:
    def test_lookup_ignores_surrounding_slashes(self, project_tree):
        assert project_tree.get("/src/utils/").path == "src/utils"
        assert "src/index.ts" in project_tree

    def test_root_not_indexed(self, project_tree):
        assert project_tree.get("") is None
        assert "" not in project_tree

    def test_walk_is_depth_first_in_display_order(self, project_tree):
        assert [n.path for n in project_tree.walk()] == [
            "public",
            "public/logo.svg",
            "src",
            "src/components",
            "src/components/Button.tsx",
            "src/components/Card.tsx",
            "src/utils",
            "src/utils/helpers.ts",
            "src/index.ts",
            "README.md",
            "package.json",
        ]
        assert len(project_tree) == 11

    def test_files_only(self, project_tree):
        assert sum(n.size for n in project_tree.files()) == 2560 + 3072 + 4096 + 512 + 2048 + 1536 + 1024
