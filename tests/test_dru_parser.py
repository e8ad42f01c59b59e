"""Tests for the .kicad_dru rule builder."""

import pytest

from gerber_drc.exceptions import ParseError
from gerber_drc.rules import ConstraintType, LayerSelector, Severity, load_dru, parse_dru


class TestParseDru:
    """Tests for parse_dru."""

    def test_sample_rules(self, sample_dru):
        rule_set = parse_dru(sample_dru)
        assert rule_set.version == 1
        assert [r.name for r in rule_set] == [
            "Minimum Trace Width (outer layer)",
            "Hole Size",
            "Net Clearance",
            "No Buried Vias",
        ]

    def test_constraints_in_mm(self, sample_dru):
        """Values in mm and mil are both stored in mm."""
        rule = parse_dru(sample_dru).rules[0]
        track, clearance = rule.constraints
        assert track.type is ConstraintType.TRACK_WIDTH
        assert track.min_mm == pytest.approx(0.127)
        assert clearance.type is ConstraintType.CLEARANCE
        assert clearance.min_mm == pytest.approx(0.127)

    def test_min_and_max(self, sample_dru):
        constraint = parse_dru(sample_dru).get("Hole Size").constraints[0]
        assert constraint.min_mm == pytest.approx(0.15)
        assert constraint.max_mm == pytest.approx(6.3)

    def test_layer_condition_severity(self, sample_dru):
        rule_set = parse_dru(sample_dru)
        first = rule_set.rules[0]
        assert first.layer == LayerSelector("outer")
        assert first.condition == "A.Type == 'track'"
        assert first.severity is Severity.ERROR
        assert rule_set.get("Net Clearance").severity is Severity.WARNING

    def test_disallow(self, sample_dru):
        constraint = parse_dru(sample_dru).get("No Buried Vias").constraints[0]
        assert constraint.type is ConstraintType.DISALLOW
        assert constraint.disallow == "buried_via"
        assert constraint.min_mm is None

    def test_missing_version_defaults_to_one(self):
        assert parse_dru('(rule "a" (constraint clearance (min 0.2mm)))').version == 1

    def test_explicit_version(self):
        assert parse_dru("(version 2)").version == 2

    def test_unknown_top_level_forms_are_ignored(self):
        rule_set = parse_dru('(version 1)\n(author "me")\n(rule "a")')
        assert len(rule_set) == 1

    def test_unknown_constraint_sub_forms_are_ignored(self):
        rule_set = parse_dru('(rule "a" (constraint clearance (min 0.2mm) (opt 0.3mm)))')
        constraint = rule_set.rules[0].constraints[0]
        assert constraint.min_mm == pytest.approx(0.2)
        assert constraint.max_mm is None

    def test_unnamed_rule(self):
        assert parse_dru("(rule (constraint clearance (min 1mm)))").rules[0].name == ""

    def test_empty_text(self):
        rule_set = parse_dru("")
        assert rule_set.version == 1
        assert len(rule_set) == 0


class TestParseDruErrors:
    """Malformed rule files fail fast."""

    def test_unknown_constraint_type(self):
        with pytest.raises(ParseError, match="Unknown constraint type") as exc_info:
            parse_dru('(version 1)\n(rule "a"\n  (constraint track_widht (min 1mm)))')
        assert exc_info.value.line == 3

    def test_bad_value(self):
        with pytest.raises(ParseError, match="Invalid numeric value"):
            parse_dru('(rule "a" (constraint clearance (min fivemil)))')

    def test_bad_version(self):
        with pytest.raises(ParseError, match="Invalid version"):
            parse_dru("(version one)")

    def test_constraint_without_type(self):
        with pytest.raises(ParseError, match="without a type"):
            parse_dru('(rule "a" (constraint (min 1mm)))')

    def test_malformed_sexp(self):
        with pytest.raises(ParseError):
            parse_dru('(rule "a" (constraint clearance')


class TestLoadDru:
    """Tests for load_dru."""

    def test_load(self, dru_file):
        assert len(load_dru(dru_file)) == 4

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_dru(tmp_path / "missing.kicad_dru")

    def test_error_carries_path(self, tmp_path):
        path = tmp_path / "bad.kicad_dru"
        path.write_text("(rule \"a\"\n  (constraint bogus))")

        with pytest.raises(ParseError) as exc_info:
            load_dru(path)
        assert exc_info.value.context["file"] == str(path)
        assert exc_info.value.line == 2
