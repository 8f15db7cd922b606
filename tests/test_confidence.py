"""Confidence heuristic for names outside the curated catalog."""

import pytest

from app.services.confidence import name_length, normalize_product_name, score_product_name

pytestmark = pytest.mark.unit


def test_case_and_whitespace_do_not_change_the_score():
    assert score_product_name("React") == score_product_name("react") == score_product_name("  REACT  ")


def test_well_formed_name_gets_bonus():
    assert score_product_name("someunknownlibrary") == pytest.approx(0.7)
    assert score_product_name("my-lib_v2.core") == pytest.approx(0.7)


def test_long_digit_run_is_penalized():
    assert score_product_name("product12345") == pytest.approx(0.6)
    assert score_product_name("1234") == pytest.approx(0.4)


def test_single_character_is_penalized():
    assert score_product_name("a") == pytest.approx(0.4)
    assert score_product_name("   x ") == pytest.approx(0.4)


def test_names_that_are_not_package_like_stay_at_base():
    assert score_product_name("ab") == pytest.approx(0.5)
    assert score_product_name("my product") == pytest.approx(0.5)
    assert score_product_name("123") == pytest.approx(0.5)
    assert score_product_name("@#$%") == pytest.approx(0.5)


@pytest.mark.parametrize(
    "name",
    ["x", "xy", "React", "Vue.js", "C++", "9000", "node_modules_12345", "Some Product With Spaces", "ñandú"],
)
def test_score_stays_in_generic_band(name):
    score = score_product_name(name)
    assert 0.1 <= score <= 0.8


def test_score_is_deterministic():
    assert {score_product_name("Widget-2000") for _ in range(20)} == {score_product_name("Widget-2000")}


def test_normalize_product_name():
    assert normalize_product_name("  Next.JS \n") == "next.js"


def test_length_is_counted_in_utf16_units():
    assert name_length("\U0001F600") == 2
    assert name_length("ñandú") == 5
    # A lone emoji is two units long, so it escapes the short-name penalty.
    assert score_product_name("\U0001F600") == pytest.approx(0.5)
    assert score_product_name("é") == pytest.approx(0.4)
