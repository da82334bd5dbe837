"""Tests for the offline multiplier grid search."""

import pytest

from keyfinder.inference import Mode, ScoringParams
from keyfinder.tuning import DEFAULT_GRID, LabelledSample, ParameterTuner, parse_label


def c_major_sample(name="C_Major.mid"):
    return LabelledSample(name, {0: 10.0, 4: 1.0, 7: 1.0}, 0, Mode.MAJOR)


class TestParseLabel:
    """Tests for reading keys from file names."""

    def test_labels(self):
        assert parse_label("C_Major.mid") == (0, Mode.MAJOR)
        assert parse_label("Eb_Minor_2.mid") == (3, Mode.MINOR)
        assert parse_label("f#_minor.midi") == (6, Mode.MINOR)

    def test_unlabelled(self):
        assert parse_label("song.mid") is None
        assert parse_label("C_Dorian.mid") is None
        assert parse_label("H_Major.mid") is None


class TestParameterTuner:
    """Tests for the grid search."""

    def test_default_grid_size(self):
        assert ParameterTuner().combinations == 9 * 5 * 4 * 7 * 8 * 5
        assert set(DEFAULT_GRID) == set(ScoringParams().to_dict())

    def test_unknown_grid_field(self):
        with pytest.raises(ValueError):
            ParameterTuner(grid={"leading_tone": (1.0,)})

    def test_iter_params(self):
        tuner = ParameterTuner(grid={"tonic": (3.0, 4.0), "outside": (2.0,)})
        params = list(tuner.iter_params())
        assert [p.tonic for p in params] == [3.0, 4.0]
        assert all(p.outside == 2.0 for p in params)
        assert all(p.dominant == ScoringParams().dominant for p in params)

    def test_accuracy(self):
        samples = [
            c_major_sample(),
            LabelledSample("G_Major.mid", {0: 10.0, 4: 1.0, 7: 1.0}, 7, Mode.MAJOR),
        ]
        assert ParameterTuner.accuracy(samples, ScoringParams()) == 1

    def test_search_keeps_first_best(self):
        tuner = ParameterTuner(grid={"tonic": (4.5, 5.0)})
        seen = []
        result = tuner.search([c_major_sample()], progress=lambda done, total: seen.append((done, total)))

        assert result.correct == 1
        assert result.total == 1
        assert result.tested == 2
        assert result.accuracy == 1.0
        assert result.params.tonic == 4.5
        assert seen == [(1, 2), (2, 2)]

    def test_load_samples(self, tmp_path, midi_writer):
        midi_writer(tmp_path / "C_Major.mid", [(60, 0.0, 2.0), (64, 2.0, 2.5), (67, 2.5, 3.0)])
        midi_writer(tmp_path / "A_Minor_1.mid", [(57, 0.0, 2.0), (60, 2.0, 2.5), (64, 2.5, 3.0)])
        midi_writer(tmp_path / "untitled.mid", [(60, 0.0, 1.0)])
        (tmp_path / "readme.txt").write_text("labels come from file names")

        samples = ParameterTuner().load_samples(tmp_path)

        assert [s.name for s in samples] == ["A_Minor_1.mid", "C_Major.mid"]
        assert samples[0].root == 9
        assert samples[0].mode is Mode.MINOR
        assert ParameterTuner.accuracy(samples, ScoringParams()) == 2

    def test_missing_folder(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ParameterTuner().load_samples(tmp_path / "nowhere")
