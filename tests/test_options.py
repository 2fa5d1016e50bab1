"""Tests for overlay option resolution and module defaults."""

import pytest

from popover import (
    OverlayOptions,
    Placement,
    configure_popover,
    get_popover_config,
    reset_popover_config,
    resolve_options,
)


class TestResolveOptions:
    """Test resolve_options merging."""

    def test_defaults(self):
        """No input yields the documented defaults."""
        options = resolve_options()

        assert options.placement == "bottom"
        assert options.distance_offset == 0
        assert options.skidding_offset == 0
        assert options.on_open() is None
        assert options.on_close() is None

    def test_mapping_overrides_present_fields_only(self):
        """Fields supplied in a mapping win; the rest keep defaults."""
        options = resolve_options({"placement": "top-start", "distance_offset": 8})

        assert options.placement == "top-start"
        assert options.distance_offset == 8
        assert options.skidding_offset == 0

    def test_unknown_mapping_keys_ignored(self):
        """Keys that are not option fields are dropped silently."""
        options = resolve_options({"emit": print, "skidding_offset": 3})

        assert options.skidding_offset == 3
        assert not hasattr(options, "emit")

    def test_none_values_keep_default(self):
        """A None value counts as not supplied."""
        options = resolve_options({"on_open": None, "placement": None})

        assert options.placement == "bottom"
        assert options.on_open() is None

    def test_keyword_overrides_win(self):
        """Keyword overrides are applied after the mapping."""
        options = resolve_options({"placement": "left"}, placement="right")

        assert options.placement == "right"

    def test_none_keyword_keeps_earlier_value(self):
        """A None keyword override counts as not supplied."""
        options = resolve_options({"placement": "left"}, placement=None, on_close=None)

        assert options.placement == "left"
        assert options.on_close() is None
        assert options.engine_options()["placement"] == "left"

    def test_none_keyword_keeps_default(self):
        """placement=None alone leaves the default placement."""
        assert resolve_options(placement=None).placement == "bottom"

    def test_unknown_keyword_raises(self):
        """Misspelled keyword options are reported."""
        with pytest.raises(TypeError, match="distanceOffset"):
            resolve_options(distanceOffset=4)

    def test_options_instance_passes_through(self):
        """A resolved OverlayOptions is used as-is."""
        original = OverlayOptions(placement="left-end", skidding_offset=2)

        assert resolve_options(original) is original

    def test_placement_not_validated(self):
        """Unknown placements are left for the geometry engine to judge."""
        options = resolve_options({"placement": "diagonal"})

        assert options.placement == "diagonal"

    def test_options_are_frozen(self):
        """Resolved options cannot be mutated."""
        options = resolve_options()

        with pytest.raises(AttributeError):
            options.placement = "top"


class TestEngineOptions:
    """Test the record handed to the geometry engine."""

    def test_offset_is_skidding_then_distance(self):
        """The offset modifier carries (skidding, distance)."""
        options = resolve_options(distance_offset=10, skidding_offset=-4)

        engine_options = options.engine_options()

        assert engine_options["placement"] == "bottom"
        names = [m["name"] for m in engine_options["modifiers"]]
        assert names == ["preventOverflow", "offset"]
        assert engine_options["modifiers"][1]["options"]["offset"] == (-4, 10)

    def test_placement_enum_rendered_as_string(self):
        """Placement members reach the engine as plain strings."""
        options = resolve_options(placement=Placement.TOP_END)

        assert options.engine_options()["placement"] == "top-end"


class TestModuleDefaults:
    """Test configure_popover and friends."""

    def test_configure_changes_defaults(self):
        """Configured defaults feed resolve_options."""
        configure_popover(placement=Placement.BOTTOM_START, distance_offset=4)

        options = resolve_options()

        assert options.placement == "bottom-start"
        assert options.distance_offset == 4
        assert options.skidding_offset == 0

    def test_caller_values_beat_configured_defaults(self):
        """Explicit options still override configured defaults."""
        configure_popover(placement="top")

        assert resolve_options({"placement": "left"}).placement == "left"

    def test_none_arguments_leave_config_alone(self):
        """Only non-None arguments are applied."""
        configure_popover(skidding_offset=5)
        configure_popover(placement="right")

        config = get_popover_config()
        assert config.skidding_offset == 5
        assert config.placement == "right"

    def test_reset(self):
        """reset_popover_config restores the built-in defaults."""
        configure_popover(placement="top", distance_offset=3)

        reset_popover_config()

        assert resolve_options() == OverlayOptions()
