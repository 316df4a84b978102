import pytest

from crabdrill.lessons.sequences import maybe_icecream, vec_loop, vec_map

EVENS = [2, 4, 6, 8, 10]


def test_vec_loop():
    assert vec_loop(list(EVENS)) == [4, 8, 12, 16, 20]


def test_vec_loop_mutates_in_place():
    values = list(EVENS)
    result = vec_loop(values)
    assert result is values
    assert values == [4, 8, 12, 16, 20]


def test_vec_map():
    assert vec_map(EVENS) == [4, 8, 12, 16, 20]


def test_vec_map_leaves_input_untouched():
    values = list(EVENS)
    vec_map(values)
    assert values == [2, 4, 6, 8, 10]


def test_vec_loop_empty():
    assert vec_loop([]) == []


@pytest.mark.parametrize(
    ("hour", "expected"),
    [(9, 5), (10, 5), (23, 0), (22, 0), (25, None), (12, 5)],
)
def test_check_icecream(hour, expected):
    assert maybe_icecream(hour) == expected


def test_icecream_negative_hour():
    with pytest.raises(ValueError):
        maybe_icecream(-1)