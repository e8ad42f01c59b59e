"""Tests for manufacturer tier ladders."""

import pytest

from gerber_drc.manufacturers import (
    ManufacturerProfile,
    ManufacturingTier,
    get_profile,
    get_profile_ids,
    list_profiles,
    load_profile,
    nextpcb_2layer,
    nextpcb_4layer,
    profile_from_dict,
    resolve_profile,
)


def ladder():
    return ManufacturerProfile(
        "Test Fab",
        [
            ManufacturingTier("Standard", 0, 0.127, 0.127, 0.3),
            ManufacturingTier("Advanced", 1, 0.1016, 0.1016, 0.2),
            ManufacturingTier("HDI", 2, None, None, 0.15),
        ],
    )


class TestManufacturingTier:
    """Tests for ManufacturingTier."""

    def test_supports(self):
        tier = ManufacturingTier("Standard", 0, 0.127, 0.127, 0.3)
        assert tier.supports(min_trace_mm=0.127)
        assert not tier.supports(min_trace_mm=0.12)
        assert tier.supports(min_trace_mm=0.2, min_hole_mm=0.3)
        assert not tier.supports(min_trace_mm=0.2, min_hole_mm=0.25)

    def test_missing_limits_accept_anything(self):
        tier = ManufacturingTier("HDI", 2, min_hole_size_mm=0.15)
        assert tier.supports(min_trace_mm=0.01, min_clearance_mm=0.01)
        assert tier.supports()

    def test_blank_name(self):
        with pytest.raises(ValueError, match="blank"):
            ManufacturingTier(" ", 0)

    def test_negative_order(self):
        with pytest.raises(ValueError, match=">= 0"):
            ManufacturingTier("Standard", -1)

    def test_to_dict(self):
        data = ManufacturingTier("HDI", 2, min_hole_size_mm=0.15).to_dict()
        assert data["name"] == "HDI"
        assert data["min_trace_width_mm"] is None


class TestManufacturerProfile:
    """Tests for classification along a ladder."""

    def test_classify_picks_cheapest_supporting_tier(self):
        profile = ladder()
        assert profile.classify(min_trace_mm=0.2).name == "Standard"
        assert profile.classify(min_trace_mm=0.11).name == "Advanced"
        assert profile.classify(min_trace_mm=0.09).name == "HDI"

    def test_classify_all_parameters(self):
        tier = ladder().classify(min_trace_mm=0.2, min_clearance_mm=0.2, min_hole_mm=0.25)
        assert tier.name == "Advanced"

    def test_nothing_supported_falls_back_to_last(self):
        assert ladder().classify(min_hole_mm=0.1).name == "HDI"

    def test_single_parameter_helpers(self):
        profile = ladder()
        assert profile.classify_trace(0.127).name == "Standard"
        assert profile.classify_clearance(0.105).name == "Advanced"
        assert profile.classify_hole(0.15).name == "HDI"

    def test_next_cheaper_tier(self):
        profile = ladder()
        hdi = profile.get_tier("HDI")
        assert profile.next_cheaper_tier(hdi).name == "Advanced"
        assert profile.next_cheaper_tier(profile.tiers[0]) is None
        assert profile.next_cheaper_tier(None) is None

    def test_get_tier_case_insensitive(self):
        assert ladder().get_tier("advanced").order == 1
        assert ladder().get_tier("missing") is None

    def test_validation(self):
        with pytest.raises(ValueError, match="blank"):
            ManufacturerProfile("", [ManufacturingTier("A", 0)])
        with pytest.raises(ValueError, match="at least one tier"):
            ManufacturerProfile("Fab", [])


class TestBuiltinProfiles:
    """Tests for the bundled NextPCB ladders."""

    def test_two_layer(self):
        profile = nextpcb_2layer()
        assert profile.id == "nextpcb-2layer"
        assert profile.name == "NextPCB 2-Layer"
        assert [t.name for t in profile.tiers] == ["Standard", "Advanced", "HDI"]
        assert profile.tiers[0].min_trace_width_mm == pytest.approx(0.127)
        assert profile.tiers[2].min_trace_width_mm is None

    def test_four_layer(self):
        profile = nextpcb_4layer()
        assert [t.name for t in profile.tiers] == ["Standard", "Advanced", "Fine", "HDI"]
        assert profile.tiers[0].min_trace_width_mm == pytest.approx(0.2032)

    def test_cached(self):
        assert nextpcb_2layer() is get_profile("nextpcb-2layer")

    @pytest.mark.parametrize("alias", ["nextpcb", "NEXTPCB2", "nextpcb_2layer"])
    def test_aliases(self, alias):
        assert get_profile(alias).id == "nextpcb-2layer"

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown profile"):
            get_profile("jlcpcb")

    def test_listing(self):
        assert [p.id for p in list_profiles()] == ["nextpcb-2layer", "nextpcb-4layer"]
        assert get_profile_ids() == ["nextpcb-2layer", "nextpcb-4layer"]

    def test_resolve_profile(self, tmp_path):
        assert resolve_profile("nextpcb4") is nextpcb_4layer()
        path = tmp_path / "fab.yml"
        path.write_text("name: Fab\ntiers:\n  - name: Only\n")
        assert resolve_profile(path).name == "Fab"
        assert resolve_profile(str(path)).id == "fab"


class TestLoader:
    """Tests for YAML ladder loading."""

    def test_load_profile(self, tmp_path):
        path = tmp_path / "myfab.yaml"
        path.write_text(
            "name: My Fab\n"
            "tiers:\n"
            "  - name: Cheap\n"
            "    min_trace_width_mm: 0.2\n"
            "  - name: Pricey\n"
            "    min_trace_width_mm: 0.1\n"
        )
        profile = load_profile(path)
        assert profile.id == "myfab"
        assert [t.order for t in profile.tiers] == [0, 1]
        assert profile.tiers[1].min_space_mm is None

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_profile(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("tiers: [unclosed\n")
        with pytest.raises(ValueError, match="Invalid YAML"):
            load_profile(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ValueError, match="mapping"):
            load_profile(path)

    def test_tiers_must_be_a_list(self):
        with pytest.raises(ValueError, match="must be a list"):
            profile_from_dict({"name": "Fab", "tiers": {"name": "x"}})

    def test_tier_must_be_a_dict(self):
        with pytest.raises(ValueError, match="Tier must be a dict"):
            profile_from_dict({"name": "Fab", "tiers": ["Standard"]})
