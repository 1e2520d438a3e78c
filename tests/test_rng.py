import pytest

from marblerender.rng import Lcg


def test_rng_output_in_range():
    rng = Lcg(42)
    for _ in range(1000):
        v = rng.next_float()
        assert 0.0 <= v < 1.0


def test_rng_deterministic():
    a = Lcg(99_999)
    b = Lcg(99_999)
    for _ in range(200):
        assert a.next_float() == b.next_float()


def test_different_seeds_give_different_sequences():
    a = [Lcg(1).next_float() for _ in range(1)]
    seq_a = Lcg(1)
    seq_b = Lcg(2)
    first = [seq_a.next_float() for _ in range(10)]
    second = [seq_b.next_float() for _ in range(10)]
    assert first != second
    assert a[0] == first[0]


def test_output_has_23_bit_resolution():
    rng = Lcg(7)
    for _ in range(100):
        v = rng.next_float() * (1 << 23)
        assert v == int(v)


def test_state_stays_within_64_bits():
    rng = Lcg((1 << 64) - 1)
    for _ in range(500):
        rng.next_float()
        assert 0 <= rng.state < (1 << 64)


def test_next_range_within_bounds():
    rng = Lcg(123)
    for _ in range(500):
        v = rng.next_range(-3.0, 5.0)
        assert -3.0 <= v < 5.0


def test_next_range_matches_scaled_float():
    a = Lcg(555)
    b = Lcg(555)
    for _ in range(50):
        assert a.next_range(10.0, 20.0) == pytest.approx(10.0 + b.next_float() * 10.0)


def test_negative_seed_rejected():
    with pytest.raises(ValueError):
        Lcg(-1)


def test_oversized_seed_rejected():
    with pytest.raises(ValueError):
        Lcg(1 << 64)


def test_non_integer_seed_rejected():
    with pytest.raises(TypeError):
        Lcg(1.5)