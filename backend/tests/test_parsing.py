from decimal import Decimal
import pytest
from nevents.engine.parsing import parse_probability, parse_probabilities, ProbabilityParseError
from nevents.engine.guardrails import out_of_range_positions, violates_unit_interval

def test_parse_literals():
    assert parse_probabilities(["0.1", " 0.25 ", "1e-6", "1", 0, 0.1]) == [
        Decimal("0.1"), Decimal("0.25"), Decimal("0.000001"), Decimal(1), Decimal(0), Decimal("0.1"),
    ]

def test_parse_keeps_decimals():
    d = Decimal("0.123456789012345678901234567890123")
    assert parse_probability(d) is d

@pytest.mark.parametrize("bad", ["abc", "", "NaN", "Infinity", "-inf", "0.1.2", None, True, [0.1]])
def test_parse_rejects(bad):
    with pytest.raises(ProbabilityParseError):
        parse_probability(bad)

def test_parse_error_names_literal_and_position():
    with pytest.raises(ProbabilityParseError) as exc:
        parse_probabilities(["0.1", "0.2", "zero", "oops"])
    assert exc.value.literal == "zero"
    assert exc.value.position == 2
    assert "'zero'" in str(exc.value)
    assert "position 2" in str(exc.value)
    assert isinstance(exc.value, ValueError)

def test_out_of_range():
    probs = [Decimal("0.5"), Decimal("-0.1"), Decimal("1"), Decimal("1.0001"), Decimal(0)]
    assert out_of_range_positions(probs) == [1, 3]
    assert violates_unit_interval(probs)
    assert not violates_unit_interval(probs[:1] + probs[2:3])
    assert out_of_range_positions([]) == []
