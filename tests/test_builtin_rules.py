"""Tests for the bundled rule sets."""

import pytest

from gerber_drc.drc import ConditionResult, evaluate
from gerber_drc.exceptions import RuleSetNotFoundError
from gerber_drc.rules import (
    ConstraintType,
    all_rule_sets,
    get_rule_set,
    list_rule_sets,
    load_rule_set,
    nextpcb,
    pcbway,
    resolve_rule_set,
)


class TestPcbway:
    """Tests for the PCBWay custom rules."""

    def test_version_and_count(self):
        rule_set = pcbway()
        assert rule_set.version == 1
        assert len(rule_set) == 22

    def test_first_rule(self):
        """Outer trace rule: width and spacing, outer layers, tracks only."""
        rule = pcbway().rules[0]
        assert [(c.type, c.min_mm) for c in rule.constraints] == [
            (ConstraintType.TRACK_WIDTH, pytest.approx(0.127)),
            (ConstraintType.CLEARANCE, pytest.approx(0.127)),
        ]
        assert rule.layer.matches("F.Cu")
        assert rule.layer.matches("B.Cu")
        assert not rule.layer.matches("In1.Cu")
        assert rule.condition == "A.Type == 'track'"

    def test_commented_rules_are_not_loaded(self):
        assert pcbway().get("Pad to Silkscreen") is None

    def test_supported_rules(self):
        """Rules needing nets, plating or via data are unsupported."""
        supported = [r.name for r in pcbway() if evaluate(r.condition) == ConditionResult.APPLICABLE]
        assert supported == [
            "Minimum Trace Width and Spacing (outer layer)",
            "Minimum Trace Width and Spacing (inner layer)",
            "drill hole size (mechanical)",
            "Minimum Annular Ring",
            "Trace to Outline",
            "Minimum Text",
        ]

    def test_cached(self):
        assert pcbway() is pcbway()


class TestNextpcb:
    """Tests for the NextPCB project-file rules."""

    def test_count(self):
        assert len(nextpcb()) == 9

    def test_clearance_from_net_class(self):
        rule = nextpcb().get("Min Clearance")
        assert rule.constraints[0].min_mm == pytest.approx(0.2)

    def test_zero_silk_clearance_omitted(self):
        assert nextpcb().get("Min Silk Clearance") is None

    def test_no_conditions(self):
        assert all(r.condition is None for r in nextpcb())


class TestRegistry:
    """Tests for built-in lookup and rule file loading."""

    def test_all_rule_sets(self):
        sets = all_rule_sets()
        assert set(sets) == {"pcbway", "nextpcb"}
        assert sets["pcbway"] is pcbway()

    def test_list_rule_sets(self):
        assert list_rule_sets() == ["pcbway", "nextpcb"]

    def test_get_rule_set_case_insensitive(self):
        assert get_rule_set(" PCBWay ") is pcbway()

    def test_get_unknown(self):
        with pytest.raises(RuleSetNotFoundError) as exc_info:
            get_rule_set("jlcpcb")
        assert "pcbway" in exc_info.value.context["available"]

    def test_load_rule_set_by_suffix(self, dru_file, tmp_path):
        assert len(load_rule_set(dru_file)) == 4

        pro = tmp_path / "board.kicad_pro"
        pro.write_text('{"board": {"design_settings": {"rules": {"min_track_width": 0.2}}}}')
        assert len(load_rule_set(pro)) == 1

    def test_load_rule_set_unknown_suffix(self, tmp_path):
        path = tmp_path / "rules.txt"
        path.write_text("")
        with pytest.raises(RuleSetNotFoundError, match="Unrecognised rule file type"):
            load_rule_set(path)

    def test_resolve_name_or_path(self, dru_file):
        assert resolve_rule_set("nextpcb") is nextpcb()
        assert len(resolve_rule_set(str(dru_file))) == 4
