from harness.core.results import PassRate, ResultState, aggregate, worst

P = ResultState.PASSED
W = ResultState.PASSED_WITH_WARNING
S = ResultState.SKIPPED
F = ResultState.FAILED
E = ResultState.EXCEPTION
U = ResultState.UNKNOWN


def test_aggregate_of_nothing_is_unknown():
    assert aggregate([]) is U


def test_aggregate_all_unknown_is_unknown():
    assert aggregate([U, U]) is U


def test_unknown_children_are_ignored():
    assert aggregate([U, P]) is P
    assert aggregate([U, F]) is F


def test_all_passed():
    assert aggregate([P, P, P]) is P


def test_warning_is_worse_than_passed():
    assert aggregate([P, W]) is W


def test_skipped_only_wins_when_everything_was_skipped():
    assert aggregate([S, S]) is S
    assert aggregate([S, P]) is P
    assert aggregate([S, U]) is S


def test_worst_state_wins():
    assert aggregate([P, F, W]) is F
    assert aggregate([F, E, P]) is E
    assert aggregate([S, F]) is F


def test_worst_never_upgrades():
    assert worst(F, P) is F
    assert worst(U, P) is P
    assert worst(P, S) is S


def test_pass_rate_counts_and_percentage():
    rate = PassRate()
    for state in (P, P, P, F):
        rate.add(state)
    assert (rate.passed, rate.failed, rate.total) == (3, 1, 4)
    assert f"{rate.percentage:.2f}" == "75.00"
    assert rate.describe().startswith("Pass rate: 75.00% (0 unknown, 3 passed, 0 passed with warning")


def test_warning_has_its_own_counter():
    rate = PassRate()
    rate.add(W)
    assert rate.passed == 0
    assert rate.passed_with_warning == 1
    assert W.is_passing()


def test_empty_pass_rate_percentage():
    assert PassRate().percentage == 0.0
