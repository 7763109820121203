import random

import pytest

from diffpatch.differ.base import DiffAlgorithm, generate_patch
from diffpatch.patch.format import format_patch
from diffpatch.patch.parser import parse_patch
from diffpatch.patcher.base import PatcherAlgorithm, apply_patch
from diffpatch.text import split_lines

TEXT_PAIRS = [
    ("a\nb\nc\n", "a\nB\nc\n"),
    ("one\ntwo\nthree\n", "zero\none\ntwo\nthree\nfour\n"),
    ("x\n\ny\n\nz\n", "x\ny\n\n\nz\n"),
    ("same\nsame\nsame\nsame\n", "same\nsame\nother\n"),
    (
        "".join(f"line {i}\n" for i in range(60)),
        "".join(f"line {i}\n" for i in range(60) if i not in (5, 30, 31)) + "tail\n",
    ),
]


def _random_text(rng: random.Random, length: int) -> str:
    lines = [rng.choice(["a", "b", "c", "", "def f():", "    pass"]) for _ in range(length)]
    return "".join(f"{line}\n" for line in lines)


def _random_pairs(count: int) -> list[tuple[str, str]]:
    rng = random.Random(1234)
    pairs = []
    for _ in range(count):
        old = _random_text(rng, rng.randint(1, 25))
        new = _random_text(rng, rng.randint(1, 25))
        pairs.append((old, new))
    return pairs


@pytest.mark.parametrize("algorithm", list(DiffAlgorithm))
@pytest.mark.parametrize("old,new", TEXT_PAIRS + _random_pairs(20))
def test_patch_applies_both_ways(algorithm, old, new):
    """A generated patch turns old into new, and its reverse turns new into old."""
    patch = generate_patch(old, new, algorithm=algorithm)

    assert apply_patch(patch, old) == new
    assert apply_patch(patch, new, reverse=True) == old


@pytest.mark.parametrize("patcher", list(PatcherAlgorithm))
@pytest.mark.parametrize("old,new", TEXT_PAIRS)
def test_every_patcher_applies_exact_content(patcher, old, new):
    """On unmodified content all appliers agree."""
    patch = parse_patch(format_patch(generate_patch(old, new)))

    assert apply_patch(patch, old, algorithm=patcher) == new
    assert apply_patch(patch, new, reverse=True, algorithm=patcher) == old


@pytest.mark.parametrize("context_lines", [0, 1, 3, 8])
def test_context_size_does_not_change_result(context_lines):
    old, new = TEXT_PAIRS[-1]
    patch = parse_patch(format_patch(generate_patch(old, new, context_lines=context_lines)))

    assert apply_patch(patch, old) == new


@pytest.mark.parametrize("patcher", list(PatcherAlgorithm))
@pytest.mark.parametrize("algorithm", list(DiffAlgorithm))
def test_trailing_blank_line_survives_both_ways(algorithm, patcher):
    """A blank last line is kept when added forward or restored in reverse."""
    added = generate_patch("a", "a\n\n", algorithm=algorithm)
    removed = generate_patch("a\n\n", "a", algorithm=algorithm)

    assert apply_patch(added, "a", algorithm=patcher) == "a\n\n"
    assert split_lines(apply_patch(removed, "a", reverse=True, algorithm=patcher)) == ["a", ""]
    assert split_lines(apply_patch(added, "a\n\n", reverse=True, algorithm=patcher)) == ["a"]


@pytest.mark.parametrize("algorithm", list(DiffAlgorithm))
def test_blank_line_endings_round_trip(algorithm):
    old, new = "x\ny", "x\ny\n\n\n"
    patch = generate_patch(old, new, algorithm=algorithm)

    assert split_lines(apply_patch(patch, old)) == split_lines(new)
    assert split_lines(apply_patch(patch, new, reverse=True)) == split_lines(old)


def test_creation_and_deletion_from_empty():
    """Patches against empty text add or drop every line."""
    created = generate_patch("", "x\ny\n")
    deleted = generate_patch("x\ny\n", "")

    assert split_lines(apply_patch(created, "")) == ["x", "y"]
    assert apply_patch(deleted, "x\ny\n") == ""
