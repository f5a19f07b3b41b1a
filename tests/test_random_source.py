import logging

from nature_generator.random_source import RandomSource, generate_seed, seed_to_int


def _draws(source: RandomSource, count: int = 200) -> list[float]:
    return [source.next() for _ in range(count)]


def test_equal_seeds_give_identical_sequences():
    assert _draws(RandomSource("nature")) == _draws(RandomSource("nature"))


def test_different_seeds_diverge():
    assert _draws(RandomSource("nature")) != _draws(RandomSource("nurture"))


def test_values_are_in_unit_interval():
    values = _draws(RandomSource("range-check"), 5000)
    assert all(0.0 <= v < 1.0 for v in values)
    # A healthy uniform stream covers both halves.
    assert min(values) < 0.1 and max(values) > 0.9


def test_sequence_is_order_dependent_and_counted():
    source = RandomSource("count")
    first = source.next()
    second = source()
    assert first != second
    assert source.draw_count == 2


def test_explicit_seed_is_not_flagged():
    source = RandomSource("nature")
    assert source.seed == "nature"
    assert source.seed_was_generated is False


def test_empty_seed_uses_injected_generator(caplog):
    with caplog.at_level(logging.WARNING):
        source = RandomSource("", seed_generator=lambda: "fixed")
    assert source.seed == "fixed"
    assert source.seed_was_generated is True
    assert _draws(source, 50) == _draws(RandomSource("fixed"), 50)
    assert "randomized seed used" in caplog.text


def test_empty_seed_without_generator_is_randomized():
    a = RandomSource("")
    b = RandomSource("")
    assert a.seed_was_generated and b.seed_was_generated
    assert a.seed != b.seed
    assert _draws(a, 10) != _draws(b, 10)


def test_generate_seed_is_base36():
    seed = generate_seed()
    assert len(seed) == 11
    assert all(c in "0123456789abcdefghijklmnopqrstuvwxyz" for c in seed)
    assert len(generate_seed(4)) == 4


def test_seed_to_int_is_stable():
    assert seed_to_int("nature") == seed_to_int("nature")
    assert seed_to_int("nature") != seed_to_int("Nature")
    assert seed_to_int("") >= 0
