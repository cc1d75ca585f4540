"""
Depth colour ramp tests: endpoints, clamping, breakpoint landing, monotonicity.
"""

import math

import pytest

from floodscene.color_scale import DEPTH_COLOR_SCALE, DepthColorScale, color_for, rgb_css
from floodscene.constants import DEPTH_BREAKPOINTS, DEPTH_COLORS

FIRST = DEPTH_COLORS[0]
LAST = DEPTH_COLORS[-1]


class TestEndpoints:

    def test_zero_is_first_color(self):
        assert color_for(0) == FIRST

    def test_max_is_last_color(self):
        assert color_for(120) == LAST

    def test_negative_clamps_to_first(self):
        assert color_for(-50) == color_for(0)

    def test_above_domain_clamps_to_last(self):
        assert color_for(500) == color_for(120)

    def test_infinities_saturate(self):
        assert color_for(math.inf) == LAST
        assert color_for(-math.inf) == FIRST

    def test_nan_takes_shallow_color(self):
        assert color_for(float("nan")) == FIRST


class TestBreakpoints:

    def test_second_breakpoint_lands_exactly(self):
        assert color_for(15) == DEPTH_COLORS[1]

    @pytest.mark.parametrize("index", range(len(DEPTH_COLORS)))
    def test_every_breakpoint_lands_on_its_color(self, index):
        assert color_for(DEPTH_BREAKPOINTS[index]) == DEPTH_COLORS[index]

    def test_midpoint_interpolates_each_channel(self):
        # halfway between (255, 247, 243) and (253, 224, 221)
        assert color_for(7.5) == (254, 236, 232)

    def test_last_interval_holds_last_color(self):
        assert color_for(110) == LAST


class TestMonotonicity:

    @pytest.mark.parametrize("index", range(len(DEPTH_BREAKPOINTS) - 1))
    def test_channels_follow_table_direction(self, index):
        lo, hi = DEPTH_BREAKPOINTS[index], DEPTH_BREAKPOINTS[index + 1]
        start = DEPTH_COLORS[index]
        end = DEPTH_COLORS[min(index + 1, len(DEPTH_COLORS) - 1)]
        samples = [color_for(lo + (hi - lo) * k / 10) for k in range(11)]

        for channel in range(3):
            values = [s[channel] for s in samples]
            if end[channel] >= start[channel]:
                assert values == sorted(values)
            else:
                assert values == sorted(values, reverse=True)


class TestScaleConstruction:

    def test_rejects_unsorted_breakpoints(self):
        with pytest.raises(ValueError):
            DepthColorScale([0, 10, 5], [(0, 0, 0), (1, 1, 1)])

    def test_rejects_wrong_color_count(self):
        with pytest.raises(ValueError):
            DepthColorScale([0, 10, 20], [(0, 0, 0)])

    def test_equal_counts_interpolate_to_last_stop(self):
        scale = DepthColorScale([0, 10], [(0, 0, 0), (100, 200, 50)])
        assert scale.color_for(5) == (50, 100, 25)
        assert scale.color_for(10) == (100, 200, 50)

    def test_vectorised_matches_scalar(self):
        depths = [-5, 0, 7.5, 33, 104, 119, 400]
        assert DEPTH_COLOR_SCALE.colors_for(depths) == [color_for(d) for d in depths]

    def test_vectorised_empty(self):
        assert DEPTH_COLOR_SCALE.colors_for([]) == []

    def test_domain(self):
        assert DEPTH_COLOR_SCALE.domain == (0.0, 120.0)


class TestLegend:

    def test_one_swatch_per_color(self):
        legend = DEPTH_COLOR_SCALE.legend()
        assert [rgb for _, rgb in legend] == list(DEPTH_COLORS)

    def test_labels_run_low_to_high(self):
        legend = DEPTH_COLOR_SCALE.legend()
        assert legend[0][0].startswith("Low")
        assert legend[-1][0].startswith("High")
        assert legend[-1][0] == "High (105-120)"

    def test_last_swatch_on_closing_stop_names_one_depth(self):
        scale = DepthColorScale([0, 10], [(0, 0, 0), (1, 1, 1)])
        assert scale.legend() == [("Low (0-10)", (0, 0, 0)), ("High (10)", (1, 1, 1))]

    def test_rgb_css(self):
        assert rgb_css((1, 2, 3)) == "rgb(1,2,3)"
