"""Tests for the gerber-drc command line."""

import json

import pytest

from gerber_drc import __version__
from gerber_drc.cli import main
from gerber_drc.cli.rules_cmd import IGNORED, RUNS, SKIPPED, describe_constraints, rule_status
from gerber_drc.cli.utils import format_error
from gerber_drc.exceptions import RuleSetNotFoundError
from gerber_drc.rules import Constraint, ConstraintType, Rule, Severity
from gerber_drc.units import UnitFormatter, UnitSystem


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Run every command from an empty directory with no user config."""
    monkeypatch.setattr("gerber_drc.config.USER_CONFIG_PATH", tmp_path / "user" / "config.toml")
    monkeypatch.delenv("GERBER_DRC_UNITS", raising=False)
    monkeypatch.chdir(tmp_path)


class TestMain:
    """Top-level argument handling."""

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage: gerber-drc" in capsys.readouterr().out

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out


class TestRulesCommand:
    """Tests for ``gerber-drc rules``."""

    def test_json(self, capsys):
        assert main(["rules", "pcbway", "--format", "json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["version"] == 1
        assert len(data["rules"]) == 22
        statuses = [r["status"] for r in data["rules"]]
        assert statuses.count(RUNS) == 6
        assert statuses.count(SKIPPED) == 16

    def test_table_summary(self, capsys):
        assert main(["rules", "nextpcb"]) == 0
        out = capsys.readouterr().out
        assert "9 rules: 9 run, 0 skipped, 0 ignored" in out

    def test_default_from_config(self, capsys, tmp_path):
        (tmp_path / ".gerber-drc.toml").write_text('[drc]\nrules = "nextpcb"\n')
        assert main(["rules", "--format", "json"]) == 0
        assert len(json.loads(capsys.readouterr().out)["rules"]) == 9

    def test_format_from_config(self, capsys, tmp_path):
        (tmp_path / ".gerber-drc.toml").write_text('[defaults]\nformat = "json"\n')
        assert main(["rules", "nextpcb"]) == 0
        assert len(json.loads(capsys.readouterr().out)["rules"]) == 9

    def test_format_flag_beats_config(self, capsys, tmp_path):
        (tmp_path / ".gerber-drc.toml").write_text('[defaults]\nformat = "json"\n')
        assert main(["rules", "nextpcb", "--format", "table"]) == 0
        assert "9 rules: 9 run, 0 skipped, 0 ignored" in capsys.readouterr().out

    def test_invalid_format_in_config(self, capsys, tmp_path):
        (tmp_path / ".gerber-drc.toml").write_text('[defaults]\nformat = "xml"\n')
        assert main(["rules", "nextpcb"]) == 1
        assert "Invalid defaults.format" in capsys.readouterr().err

    def test_verbose_from_config(self, capsys, tmp_path):
        (tmp_path / ".gerber-drc.toml").write_text("[defaults]\nverbose = true\n")
        assert main(["rules", str(tmp_path / "missing.kicad_dru")]) == 1
        assert "Traceback" in capsys.readouterr().err

    def test_rule_file(self, capsys, dru_file):
        assert main(["rules", str(dru_file), "--format", "json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert [r["status"] for r in data["rules"]] == [RUNS, RUNS, SKIPPED, RUNS]

    def test_unknown_rule_set(self, capsys):
        assert main(["rules", "jlcpcb.txt"]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_missing_rule_file(self, capsys, tmp_path):
        assert main(["rules", str(tmp_path / "missing.kicad_dru")]) == 1
        assert "FileNotFoundError" in capsys.readouterr().err

    def test_parse_error(self, capsys, tmp_path):
        path = tmp_path / "bad.kicad_dru"
        path.write_text('(rule "a" (constraint bogus))')
        assert main(["rules", str(path)]) == 1
        assert "Unknown constraint type" in capsys.readouterr().err


class TestRuleStatus:
    def test_statuses(self):
        assert rule_status(Rule("a")) == RUNS
        assert rule_status(Rule("b", condition="A.isPlated()")) == SKIPPED
        assert rule_status(Rule("c", severity=Severity.IGNORE, condition="A.isPlated()")) == IGNORED

    def test_describe_constraints(self):
        rule = Rule("r")
        rule.add_constraint(Constraint(ConstraintType.TRACK_WIDTH, min_mm=0.127))
        rule.add_constraint(Constraint(ConstraintType.TEXT_HEIGHT, min_mm=1.0))
        text = describe_constraints(rule, UnitFormatter(UnitSystem.MILS))
        assert text.splitlines() == [
            "track_width min 5.0 mils",
            "text_height min 39.4 mils (not checked)",
        ]


class TestProfilesCommand:
    """Tests for ``gerber-drc profiles``."""

    def test_list(self, capsys):
        assert main(["profiles"]) == 0
        out = capsys.readouterr().out
        assert "nextpcb-2layer" in out
        assert "nextpcb-4layer" in out

    def test_list_shows_default_profile(self, capsys):
        assert main(["profiles"]) == 0
        assert "Default profile: nextpcb-2layer (NextPCB 2-Layer)" in capsys.readouterr().out

    def test_default_profile_from_config(self, capsys, tmp_path):
        (tmp_path / ".gerber-drc.toml").write_text('[advisor]\nprofile = "nextpcb4"\n')
        assert main(["profiles"]) == 0
        assert "Default profile: nextpcb-4layer (NextPCB 4-Layer)" in capsys.readouterr().out

    def test_unknown_profile_in_config(self, capsys, tmp_path):
        (tmp_path / ".gerber-drc.toml").write_text('[advisor]\nprofile = "jlcpcb"\n')
        assert main(["profiles"]) == 1
        assert "Unknown profile" in capsys.readouterr().err

    def test_show_tiers(self, capsys):
        assert main(["profiles", "nextpcb-4layer"]) == 0
        out = capsys.readouterr().out
        assert "Fine" in out
        assert "0.2032" in out

    def test_unknown_profile(self, capsys):
        assert main(["profiles", "jlcpcb"]) == 1
        assert "Unknown profile" in capsys.readouterr().err

    def test_yaml_path(self, capsys, tmp_path):
        path = tmp_path / "fab.yaml"
        path.write_text("name: Fab\ntiers:\n  - name: Only\n    min_hole_size_mm: 0.25\n")
        assert main(["profiles", str(path)]) == 0
        assert "Only" in capsys.readouterr().out


class TestConfigCommand:
    """Tests for ``gerber-drc config``."""

    def test_template(self, capsys):
        assert main(["config", "--template"]) == 0
        out = capsys.readouterr().out
        assert out.startswith("# gerber-drc configuration file")
        assert "[advisor]" in out

    def test_paths(self, capsys):
        assert main(["config", "--paths"]) == 0
        out = capsys.readouterr().out
        assert "Config file paths:" in out
        assert "Status: not found" in out

    def test_show_with_sources(self, capsys, tmp_path):
        (tmp_path / ".gerber-drc.toml").write_text("[defaults]\nverbose = true\n")
        assert main(["config"]) == 0
        out = capsys.readouterr().out
        assert "verbose = true  # from: .gerber-drc.toml" in out
        assert 'rules = "pcbway"  # from: default' in out


class TestFormatError:
    def test_library_error(self):
        assert format_error(RuleSetNotFoundError("nope")) == "Error: nope"

    def test_other_error(self):
        assert format_error(ValueError("bad")) == "Error: ValueError: bad"
