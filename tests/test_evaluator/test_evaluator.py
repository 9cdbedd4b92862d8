"""Tests for the media query evaluator."""

import logging

import pytest

from mediaq.evaluator import evaluate, evaluate_condition, match_query, matches, resolve_feature
from mediaq.model import (
    Environment,
    MediaFeature,
    MediaQueryList,
    MediaType,
    Orientation,
    Ratio,
)
from mediaq.parser import parse


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _eval(source: str, **env: object) -> bool:
    return evaluate(parse(source), Environment(**env))  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Lists and media types
# ---------------------------------------------------------------------------


class TestQueryList:
    def test_empty_list_never_matches(self) -> None:
        assert evaluate(MediaQueryList(()), Environment(width=800)) is False
        assert _eval("", width=800) is False

    def test_any_member_matches(self) -> None:
        assert _eval("print, (min-width: 600px)", width=800) is True

    def test_comma_list_matches_print_regardless_of_width(self) -> None:
        queries = parse("screen and (min-width: 600px), print")
        for width in (0, 320, 599, 600, 1920):
            assert evaluate(queries, Environment(width=width, media_type=MediaType.PRINT)) is True

    def test_comma_list_on_screen_depends_on_width(self) -> None:
        queries = parse("screen and (min-width: 600px), print")
        assert evaluate(queries, Environment(width=599)) is False
        assert evaluate(queries, Environment(width=600)) is True


class TestMediaTypes:
    def test_all_matches_any_environment(self) -> None:
        assert _eval("all") is True
        assert _eval("all", media_type=MediaType.PRINT) is True

    def test_screen(self) -> None:
        assert _eval("screen") is True
        assert _eval("screen", media_type=MediaType.PRINT) is False

    def test_type_mismatch_skips_condition(self) -> None:
        # No width supplied: the condition would be unknown, but the type fails first.
        assert _eval("not print and (min-width: 600px)") is True

    def test_deprecated_type_never_matches(self) -> None:
        assert _eval("tv") is False
        assert _eval("not tv") is True

    def test_only_has_no_effect(self) -> None:
        for width in (599, 600):
            assert _eval("only screen and (min-width: 600px)", width=width) == _eval(
                "screen and (min-width: 600px)", width=width
            )


# ---------------------------------------------------------------------------
# Negation
# ---------------------------------------------------------------------------


class TestNot:
    def test_matches_non_screen_environment(self) -> None:
        queries = parse("not screen and (color)")
        for color in (None, 0, 8):
            assert evaluate(queries, Environment(media_type=MediaType.PRINT, color=color)) is True

    def test_fails_for_screen_with_color(self) -> None:
        assert _eval("not screen and (color)", color=8) is False

    def test_fails_for_screen_with_unknown_color(self) -> None:
        assert _eval("not screen and (color)") is False

    def test_fails_for_monochrome_screen(self) -> None:
        assert _eval("not screen and (color)", color=0) is False

    def test_not_inverts_whole_query(self) -> None:
        assert _eval("not (min-width: 600px)", width=599) is True
        assert _eval("not (min-width: 600px)", width=600) is False


# ---------------------------------------------------------------------------
# Width and height
# ---------------------------------------------------------------------------


class TestWidth:
    def test_min_width_boundary(self) -> None:
        assert _eval("(min-width: 400px)", width=399) is False
        assert _eval("(min-width: 400px)", width=400) is True

    def test_min_width_is_monotonic(self) -> None:
        queries = parse("(min-width: 768px)")
        results = [evaluate(queries, Environment(width=w)) for w in range(700, 840, 4)]
        assert results == [w >= 768 for w in range(700, 840, 4)]

    def test_max_width(self) -> None:
        assert _eval("(max-width: 600px)", width=600) is True
        assert _eval("(max-width: 600px)", width=600.5) is False

    def test_exact_width(self) -> None:
        assert _eval("(width: 320px)", width=320) is True
        assert _eval("(width: 320px)", width=321) is False

    def test_em_uses_environment_font_size(self) -> None:
        assert _eval("(min-width: 40em)", width=640) is True
        assert _eval("(min-width: 40em)", width=640, font_size=20) is False

    def test_absolute_units(self) -> None:
        assert _eval("(min-width: 1in)", width=96) is True
        assert _eval("(min-width: 2.54cm)", width=95) is False

    def test_range(self) -> None:
        source = "(min-width: 600px) and (max-width: 900px)"
        assert _eval(source, width=599) is False
        assert _eval(source, width=750) is True
        assert _eval(source, width=901) is False

    def test_height(self) -> None:
        assert _eval("(min-height: 500px)", height=600) is True
        assert _eval("(max-height: 500px)", height=600) is False

    def test_device_dimensions(self) -> None:
        env = {"width": 400, "device_width": 1280, "device_height": 800}
        assert _eval("(min-device-width: 1024px)", **env) is True
        assert _eval("(max-device-height: 700px)", **env) is False


# ---------------------------------------------------------------------------
# Orientation, aspect ratio, resolution, color
# ---------------------------------------------------------------------------


class TestOrientation:
    def test_derived_landscape(self) -> None:
        assert _eval("(orientation: landscape)", width=800, height=600) is True

    def test_derived_portrait(self) -> None:
        assert _eval("(orientation: portrait)", width=800, height=600) is False
        assert _eval("(orientation: portrait)", width=600, height=800) is True

    def test_explicit_orientation(self) -> None:
        assert _eval("(orientation: portrait)", orientation=Orientation.PORTRAIT) is True

    def test_unknown_orientation(self) -> None:
        assert _eval("(orientation: landscape)", width=800) is False


class TestAspectRatio:
    def test_derived_exact(self) -> None:
        assert _eval("(aspect-ratio: 16/9)", width=1920, height=1080) is True

    def test_unreduced_ratio_compares_numerically(self) -> None:
        assert _eval("(aspect-ratio: 32/18)", width=1920, height=1080) is True

    def test_min_and_max(self) -> None:
        env = {"width": 1920, "height": 1080}
        assert _eval("(min-aspect-ratio: 4/3)", **env) is True
        assert _eval("(max-aspect-ratio: 4/3)", **env) is False

    def test_explicit_ratio(self) -> None:
        assert _eval("(aspect-ratio: 4/3)", width=1920, height=1080, aspect_ratio=Ratio(4, 3)) is True

    def test_device_aspect_ratio(self) -> None:
        assert _eval("(device-aspect-ratio: 16/10)", device_width=1280, device_height=800) is True


class TestResolution:
    def test_dppx(self) -> None:
        assert _eval("(min-resolution: 2dppx)", resolution=2) is True
        assert _eval("(min-resolution: 2dppx)", resolution=1.5) is False

    def test_dpi_normalised(self) -> None:
        assert _eval("(min-resolution: 192dpi)", resolution=2) is True
        assert _eval("(max-resolution: 143dpi)", resolution=1.5) is False

    def test_exact(self) -> None:
        assert _eval("(resolution: 144dpi)", resolution=1.5) is True


class TestColor:
    def test_existence(self) -> None:
        assert _eval("(color)", color=8) is True
        assert _eval("(color)", color=0) is True
        assert _eval("(color)") is False

    def test_min_color(self) -> None:
        assert _eval("(min-color: 8)", color=8) is True
        assert _eval("(min-color: 8)", color=4) is False

    def test_width_existence(self) -> None:
        assert _eval("(width)", width=800) is True
        assert _eval("(width)", width=0, height=10) is True
        assert _eval("(width)") is False


# ---------------------------------------------------------------------------
# Unknown values, purity, helpers
# ---------------------------------------------------------------------------


class TestUnknownValues:
    def test_missing_width_does_not_match(self) -> None:
        assert _eval("(min-width: 600px)") is False
        assert _eval("(max-width: 600px)") is False

    def test_false_side_of_and_decides(self) -> None:
        # Width is unknown but the color test is definitely false.
        assert _eval("not screen and (min-width: 1px) and (min-color: 8)", color=0) is True

    def test_unknown_and_true_stays_unknown(self) -> None:
        assert _eval("not screen and (min-width: 1px) and (color)", color=8) is False


class TestPurity:
    def test_idempotent(self) -> None:
        queries = parse("screen and (min-width: 600px) and (orientation: landscape), print")
        env = Environment(width=800, height=600)
        assert evaluate(queries, env) == evaluate(queries, env)

    def test_same_list_against_different_environments(self) -> None:
        queries = parse("(min-width: 600px)")
        assert evaluate(queries, Environment(width=800)) is True
        assert evaluate(queries, Environment(width=400)) is False
        assert evaluate(queries, Environment(width=800)) is True


class TestHelpers:
    def test_match_query(self) -> None:
        query = parse("screen and (color)").queries[0]
        assert match_query(query, Environment(color=8)) is True

    def test_evaluate_condition(self) -> None:
        condition = parse("(min-width: 1px) and (color)").queries[0].condition
        assert condition is not None
        assert evaluate_condition(condition, Environment(width=10, color=8)) is True
        assert evaluate_condition(condition, Environment(width=10)) is False

    def test_resolve_feature(self) -> None:
        env = Environment(width=1920, height=1080, color=8)
        assert resolve_feature(MediaFeature.WIDTH, env) == 1920
        assert resolve_feature(MediaFeature.ASPECT_RATIO, env) == Ratio(16, 9)
        assert resolve_feature(MediaFeature.ORIENTATION, env) is Orientation.LANDSCAPE
        assert resolve_feature(MediaFeature.RESOLUTION, env) is None


class TestMatches:
    def test_parses_and_evaluates(self) -> None:
        assert matches("(min-width: 400px)", Environment(width=400)) is True

    def test_parse_error_does_not_apply(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="mediaq.evaluator"):
            assert matches("screen and and (color)", Environment(width=400)) is False
        assert "Invalid media query" in caplog.text
