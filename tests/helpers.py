from charles.evolution.candidate import Candidate


class ScriptedRng:
    """Stands in for DeterministicRng, replaying fixed draws."""

    def __init__(self, *draws: float):
        self._draws = list(draws)

    def next_positive_float(self) -> float:
        return self._draws.pop(0)

    def next_float(self) -> float:
        return self._draws.pop(0)


def count_ones(genes) -> float:
    return float(sum(genes))


def cut_after_two(a, b):
    a, b = tuple(a), tuple(b)
    return a[:2] + b[2:], b[:2] + a[2:]


def make_candidates(*pairs) -> list[Candidate]:
    """Build candidates from (genes, probability) pairs."""
    candidates = []
    for genes, probability in pairs:
        candidate = Candidate(genes)
        candidate.probability = probability
        candidates.append(candidate)
    return candidates
