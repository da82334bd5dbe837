"""Tests for the command-line interface."""

from typer.testing import CliRunner

from keyfinder.cli import app
from keyfinder.inference import ScoringParams

runner = CliRunner()


class TestAnalyzeCommand:
    """Tests for `keyfinder analyze`."""

    def test_analyze_midi(self, c_heavy_midi):
        result = runner.invoke(app, ["analyze", str(c_heavy_midi)])
        assert result.exit_code == 0, result.output
        assert "Best guess: C Major" in result.output
        assert "most-used note" in result.output

    def test_analyze_json(self, c_heavy_midi):
        result = runner.invoke(app, ["analyze", str(c_heavy_midi), "--json"])
        assert result.exit_code == 0, result.output
        assert '"name": "C Major"' in result.output
        assert '"contained": true' in result.output

    def test_analyze_with_params(self, c_heavy_midi, tmp_path):
        params = tmp_path / "params.json"
        ScoringParams(tonic=4.0).save(params)
        result = runner.invoke(app, ["analyze", str(c_heavy_midi), "--params", str(params)])
        assert result.exit_code == 0, result.output

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["analyze", str(tmp_path / "missing.mid")])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_bad_params_file(self, c_heavy_midi, tmp_path):
        params = tmp_path / "params.json"
        params.write_text('{"bogus": 1}')
        result = runner.invoke(app, ["analyze", str(c_heavy_midi), "--params", str(params)])
        assert result.exit_code == 1

    def test_non_numeric_params_value(self, tmp_path):
        params = tmp_path / "params.json"
        params.write_text('{"tonic": null}')
        result = runner.invoke(app, ["notes", "C", "E", "G", "--params", str(params)])
        assert result.exit_code == 1
        assert "tonic must be a number" in result.output


class TestNotesCommand:
    """Tests for `keyfinder notes`."""

    def test_manual_triad(self):
        result = runner.invoke(app, ["notes", "C", "E", "G"])
        assert result.exit_code == 0, result.output
        assert "Best guess: C Major" in result.output
        assert "Possible keys" in result.output

    def test_chromatic_falls_back(self):
        result = runner.invoke(app, ["notes", "C", "C#", "D", "D#"])
        assert result.exit_code == 0, result.output
        assert "Closest Major/Minor keys: (12)" in result.output

    def test_baseline(self, c_heavy_midi):
        result = runner.invoke(app, ["notes", "C", "E", "G", "A", "--baseline", str(c_heavy_midi)])
        assert result.exit_code == 0, result.output
        assert "Best guess: C Major" in result.output
        assert "Why the best guess?" in result.output

    def test_unknown_note(self):
        result = runner.invoke(app, ["notes", "C", "H"])
        assert result.exit_code == 1
        assert "Unknown note name" in result.output


class TestScaleCommand:
    """Tests for `keyfinder scale`."""

    def test_show_scale(self):
        result = runner.invoke(app, ["scale", "A", "Minor"])
        assert result.exit_code == 0, result.output
        assert "A B C D E F G" in result.output
        assert "Relative: C Major" in result.output

    def test_export_preview(self, tmp_path):
        out = tmp_path / "preview.mid"
        result = runner.invoke(app, ["scale", "D", "Major", "-o", str(out)])
        assert result.exit_code == 0, result.output
        assert out.exists()

    def test_bad_mode(self):
        result = runner.invoke(app, ["scale", "C", "Dorian"])
        assert result.exit_code == 1


class TestInteractiveCommand:
    """Tests for `keyfinder interactive`."""

    def test_edit_and_undo(self):
        commands = "add C E G\nadd Bb\nundo\nredo\nundo\nquit\n"
        result = runner.invoke(app, ["interactive"], input=commands)
        assert result.exit_code == 0, result.output
        assert "Final selection: C E G" in result.output

    def test_apply_scale(self):
        result = runner.invoke(app, ["interactive"], input="apply A Minor\nquit\n")
        assert result.exit_code == 0, result.output
        assert "Selected key: A Minor" in result.output

    def test_end_of_input(self):
        result = runner.invoke(app, ["interactive"], input="toggle D\n")
        assert result.exit_code == 0, result.output
        assert "Final selection: D" in result.output

    def test_baseline_reset(self, c_heavy_midi):
        commands = "clear\nreset\nquit\n"
        result = runner.invoke(app, ["interactive", str(c_heavy_midi)], input=commands)
        assert result.exit_code == 0, result.output
        assert "Final selection: C E G" in result.output


class TestTuneCommand:
    """Tests for `keyfinder tune`."""

    def test_empty_folder(self, tmp_path):
        result = runner.invoke(app, ["tune", str(tmp_path)])
        assert result.exit_code == 1
        assert "No labelled" in result.output
