import random

import pytest

from config.settings import DrillConfigError
from drill.question_generator import OP_ADD, OP_SUB, generate


def _parse(prompt: str):
    a, op, b, eq, q = prompt.split(" ")
    assert (eq, q) == ("=", "?")
    return int(a), op, int(b)


@pytest.mark.parametrize("count", [0, 1, 5, 10, 37])
def test_generate_returns_exact_count(count):
    assert len(generate(count, random.Random(count))) == count


def test_generate_negative_count_is_config_error():
    with pytest.raises(DrillConfigError):
        generate(-1, random.Random(0))


def test_prompts_and_answers_are_consistent():
    qs = generate(500, random.Random(42))
    seen_ops = set()
    for q in qs:
        a, op, b = _parse(q.prompt)
        seen_ops.add(op)
        assert 10 <= a <= 99
        if op == OP_ADD:
            assert 0 <= b <= 99 - a
            assert a + b == int(q.answer)
            assert a + b <= 99
        else:
            assert op == OP_SUB
            assert 0 <= b <= a
            assert a - b == int(q.answer)
            assert a - b >= 0
        assert q.answer == str(int(q.answer))
    assert seen_ops == {OP_ADD, OP_SUB}


def test_subtraction_uses_minus_sign_not_hyphen():
    qs = generate(200, random.Random(7))
    assert all("-" not in q.prompt for q in qs)
    assert any("−" in q.prompt for q in qs)


def test_same_seed_gives_same_batch():
    first = generate(10, random.Random(123))
    second = generate(10, random.Random(123))
    assert first == second


def test_ids_are_unique():
    qs = generate(100, random.Random(1))
    assert len({q.id for q in qs}) == 100


def test_generate_without_rng_still_works():
    assert len(generate(3)) == 3
