"""
Tests for dataset loading, report formatting, the console front end and plots
"""

import matplotlib
matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import pytest

from nn_feature_select import (
    GreedySearch,
    MalformedDatasetError,
    format_accuracy,
    format_subset,
    load_dataset,
)
from nn_feature_select.cli import main
from nn_feature_select.plot import plot_feature_space_2d, plot_search_trace


SCENARIO_TXT = """\
  1.0000000e+00   1.0000000e+00   1.0000000e+01
  1.0000000e+00   1.1000000e+00   1.0000000e+01

  2.0000000e+00   5.0000000e+00   1.0000000e+01
  2.0000000e+00   5.1000000e+00   1.0000000e+01
"""


@pytest.fixture
def scenario_file(tmp_path):
    path = tmp_path / "scenario.txt"
    path.write_text(SCENARIO_TXT)
    return path


# ---------------------------------------------------------------------------
# Tests: io
# ---------------------------------------------------------------------------

class TestLoadDataset:
    def test_shape_and_values(self, scenario_file):
        data = load_dataset(scenario_file)
        assert data.shape == (4, 3)
        assert data[1, 1] == pytest.approx(1.1)
        assert list(data[:, 0]) == [1.0, 1.0, 2.0, 2.0]

    def test_str_path(self, scenario_file):
        assert load_dataset(str(scenario_file)).shape == (4, 3)

    def test_ragged_file_raises(self, tmp_path):
        path = tmp_path / "ragged.txt"
        path.write_text("1 0.5 0.2\n2 0.1\n")
        with pytest.raises(MalformedDatasetError):
            load_dataset(path)

    def test_non_numeric_raises(self, tmp_path):
        path = tmp_path / "words.txt"
        path.write_text("1 0.5\n2 abc\n")
        with pytest.raises(MalformedDatasetError):
            load_dataset(path)

    def test_single_row_raises(self, tmp_path):
        path = tmp_path / "one.txt"
        path.write_text("1 0.5 0.2\n")
        with pytest.raises(MalformedDatasetError, match="at least 2"):
            load_dataset(path)

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_dataset(tmp_path / "nope.txt")


class TestFormatting:
    def test_subset_keeps_order(self):
        assert format_subset((1, 4, 2)) == "{1, 4, 2}"

    def test_empty_subset(self):
        assert format_subset(()) == "{}"

    def test_accuracy_one_decimal(self):
        assert format_accuracy(0.953) == "95.3%"
        assert format_accuracy(1.0) == "100.0%"
        assert format_accuracy(2 / 3) == "66.7%"


# ---------------------------------------------------------------------------
# Tests: cli
# ---------------------------------------------------------------------------

class TestCli:
    def test_forward_report(self, scenario_file, capsys):
        assert main([str(scenario_file), "--algorithm", "1"]) == 0
        out = capsys.readouterr().out
        assert "This dataset has 2 features (not including the class attribute), with 4 instances." in out
        assert "I get an accuracy of 100.0%" in out
        assert "Beginning search." in out
        assert "   Using feature(s) {2} accuracy is 50.0%" in out
        assert "Feature set {1} was best, accuracy is 100.0%" in out
        assert "Feature set {2} was best, accuracy is 100.0%" in out
        assert "Feature set {1, 2} was best" not in out
        assert "Finished search. The best feature subset is {1}, which has an accuracy of 100.0%" in out
        assert "Runtime:" in out

    def test_backward_report(self, scenario_file, capsys):
        assert main([str(scenario_file), "-a", "backward"]) == 0
        out = capsys.readouterr().out
        assert "Beginning backward elimination." in out
        assert "Removing feature 2 for best accuracy of 100.0%" in out
        assert "Removing feature 1 for best accuracy of 50.0%" in out
        assert "The best feature subset is {1, 2}, which has an accuracy of 100.0%" in out

    def test_prompts(self, scenario_file, capsys, monkeypatch):
        answers = iter([str(scenario_file), "2"])
        monkeypatch.setattr("builtins.input", lambda *args: next(answers))
        assert main([]) == 0
        out = capsys.readouterr().out
        assert "2) Backward Elimination" in out
        assert "Beginning backward elimination." in out

    def test_invalid_prompt_choice(self, scenario_file, capsys, monkeypatch):
        monkeypatch.setattr("builtins.input", lambda *args: "7")
        assert main([str(scenario_file)]) == 2
        assert "Not a valid choice." in capsys.readouterr().err

    def test_invalid_flag_choice(self, scenario_file):
        with pytest.raises(SystemExit) as exc:
            main([str(scenario_file), "--algorithm", "3"])
        assert exc.value.code == 2

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope.txt"), "-a", "1"]) == 1
        assert "Error loading" in capsys.readouterr().err

    def test_malformed_file(self, tmp_path, capsys):
        path = tmp_path / "one.txt"
        path.write_text("1 0.5 0.2\n")
        assert main([str(path), "-a", "1"]) == 1
        assert "at least 2" in capsys.readouterr().err


# ---------------------------------------------------------------------------
# Tests: plot
# ---------------------------------------------------------------------------

class TestPlot:
    def test_search_trace(self, scenario_file, tmp_path):
        result = GreedySearch(load_dataset(scenario_file), "backward").run()
        out = tmp_path / "trace.png"
        fig = plot_search_trace(result, save_path=str(out))
        assert isinstance(fig, plt.Figure)
        assert out.exists()
        plt.close(fig)

    def test_search_trace_on_axes(self, scenario_file):
        result = GreedySearch(load_dataset(scenario_file), "forward").run()
        fig, ax = plt.subplots()
        assert plot_search_trace(result, ax=ax) is fig
        assert len(ax.patches) == len(result.history)
        plt.close(fig)

    def test_feature_space_2d(self):
        rng = np.random.default_rng(0)
        data = np.column_stack([
            np.repeat([1.0, 2.0], 20),
            np.concatenate([rng.normal(0, 1, 20), rng.normal(3, 1, 20)]),
            rng.normal(0, 1, 40),
        ])
        fig = plot_feature_space_2d(data, (1, 2), feature_names=["a", "b"])
        assert isinstance(fig, plt.Figure)
        assert fig.axes[0].get_xlabel() == "a"
        plt.close(fig)
