import pytest

from charles.evolution.offspring import ParentsSimilarity, SliceAndStitch
from charles.utils.rng import DeterministicRng

DIGITS = list(range(10))


def test_slice_and_stitch_swaps_tails():
    operator = SliceAndStitch([0, 1], rng=4)
    child_a, child_b = operator((0,) * 8, (1,) * 8)

    assert len(child_a) == len(child_b) == 8
    assert all(a + b == 1 for a, b in zip(child_a, child_b))
    # a zero prefix followed by ones
    assert list(child_a) == sorted(child_a)


def test_slice_and_stitch_keeps_values_in_alphabet():
    operator = SliceAndStitch(DIGITS, rng=DeterministicRng(8))
    for _ in range(50):
        child_a, child_b = operator((9, 3, 7, 1), (0, 8, 2, 6))
        assert set(child_a) | set(child_b) <= set(DIGITS)


def test_slice_and_stitch_is_deterministic_per_seed():
    parents = ((3, 1, 4, 1, 5), (9, 2, 6, 5, 3))
    first = SliceAndStitch(DIGITS, rng=21)
    second = SliceAndStitch(DIGITS, rng=21)
    assert [first(*parents) for _ in range(10)] == [second(*parents) for _ in range(10)]


def test_parents_similarity_keeps_shared_bits_when_certain():
    operator = ParentsSimilarity([0, 1, 2, 3], rng=5, agreement_odds=1.0)
    genes = (2, 0, 3, 1)
    assert operator(genes, genes) == (genes, genes)


def test_parents_similarity_flips_shared_bits_when_never_agreeing():
    # agreement_odds=0 flips a shared bit unless the draw is exactly 0
    operator = ParentsSimilarity([0, 1], rng=5, agreement_odds=0.0)
    child_a, child_b = operator((0, 0, 0, 0), (0, 0, 0, 0))
    assert child_a == child_b == (1, 1, 1, 1)


def test_parents_similarity_takes_disagreeing_bits_from_either_parent():
    operator = ParentsSimilarity([0, 1], rng=17)
    for _ in range(20):
        child_a, child_b = operator((1, 0, 1, 0), (0, 1, 0, 1))
        assert len(child_a) == len(child_b) == 4


def test_parents_similarity_rejects_invalid_odds():
    with pytest.raises(ValueError):
        ParentsSimilarity([0, 1], agreement_odds=1.5)
