from finance_tracker.memo import IdentityMemo


def test_memo_hits_on_identical_arguments() -> None:
    calls = []

    def total(values, scale=1):
        calls.append(1)
        return [v * scale for v in values]

    memo = IdentityMemo(total)
    values = [1, 2, 3]
    first = memo(values, scale=2)
    assert memo(values, scale=2) is first
    assert len(calls) == 1

    # an equal but distinct list is a new dependency
    memo([1, 2, 3], scale=2)
    assert len(calls) == 2
    assert memo.recomputations == 2


def test_memo_clear_forces_recompute() -> None:
    memo = IdentityMemo(lambda values: sum(values))
    values = [1, 2]
    memo(values)
    memo.clear()
    memo(values)
    assert memo.recomputations == 2
