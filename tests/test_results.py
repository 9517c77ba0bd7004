from jigsat.results import SatResult, Status


def test_sat_carries_assignment():
    result = SatResult.sat([1, 0, 1])
    assert result.is_sat()
    assert result.status is Status.SAT
    assert result.assignment == (1, 0, 1)


def test_non_sat_results():
    for result, status in [
        (SatResult.unsat(), Status.UNSAT),
        (SatResult.unknown(), Status.UNKNOWN),
        (SatResult.error(), Status.ERR),
    ]:
        assert result.status is status
        assert not result.is_sat()
        assert result.assignment == ()


def test_results_compare_by_value():
    assert SatResult.unsat() == SatResult(Status.UNSAT)
    assert SatResult.sat([0]) == SatResult.sat((0,))
    assert SatResult.sat([0]) != SatResult.sat([1])