import pytest

from diffpatch.differ.base import DiffAlgorithm, Differ, generate_patch
from diffpatch.patch.models import Chunk, Operation


class TestDiffer:
    def test_identical_texts_produce_no_chunks(self):
        patch = Differ("a\nb\n", "a\nb\n").generate()

        assert patch.chunks == []
        assert patch.old_file == "original"
        assert patch.new_file == "modified"

    def test_file_names_are_carried(self):
        patch = generate_patch("a\n", "b\n", old_file="x.txt", new_file="y.txt")

        assert (patch.old_file, patch.new_file) == ("x.txt", "y.txt")

    def test_single_line_change(self):
        patch = generate_patch("a\nb\nc\n", "a\nB\nc\n")

        assert patch.chunks == [
            Chunk(
                0,
                3,
                0,
                3,
                [
                    Operation.context("a"),
                    Operation.remove("b"),
                    Operation.add("B"),
                    Operation.context("c"),
                ],
            )
        ]

    def test_creation_from_empty_text(self):
        patch = generate_patch("", "x\ny\n")

        assert patch.chunks == [Chunk(0, 0, 0, 2, [Operation.add("x"), Operation.add("y")])]

    def test_deletion_to_empty_text(self):
        patch = generate_patch("x\ny\n", "")

        assert patch.chunks == [Chunk(0, 2, 0, 0, [Operation.remove("x"), Operation.remove("y")])]

    def test_context_lines_limit_chunk_size(self):
        old = "\n".join(str(i) for i in range(20))
        new = old.replace("10", "ten")

        narrow = generate_patch(old, new, context_lines=1).chunks[0]
        wide = generate_patch(old, new, context_lines=5).chunks[0]

        assert (narrow.old_start, narrow.old_lines) == (9, 3)
        assert (wide.old_start, wide.old_lines) == (5, 11)

    def test_negative_context_rejected(self):
        with pytest.raises(ValueError, match="non-negative"):
            Differ("a", "b", context_lines=-1)

    def test_unknown_algorithm_rejected(self):
        with pytest.raises(ValueError):
            Differ("a", "b", algorithm="quantum")

    @pytest.mark.parametrize("algorithm", list(DiffAlgorithm))
    def test_chunks_are_consistent_for_every_algorithm(self, algorithm):
        old = "\n".join(f"row {i}" for i in range(40))
        new_rows = [f"row {i}" for i in range(40)]
        new_rows[3] = "changed"
        del new_rows[20:23]
        new_rows.insert(35, "inserted")
        new = "\n".join(new_rows)

        patch = generate_patch(old, new, algorithm=algorithm)

        assert patch.chunks
        assert all(chunk.is_consistent() for chunk in patch.chunks)
