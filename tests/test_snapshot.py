"""Tests for snapshot persistence and atomic writes."""

import json
import pickle

import pytest

from idiomcooc.io.snapshot import load_cooccurrence, save_cooccurrence, save_summary
from idiomcooc.stats.mining import accumulate_observations
from idiomcooc.utils.fileio import atomic_write_json


class TestSnapshot:

    def test_save_and_load(self, tmp_path, scenario_cooc):
        scenario_cooc.prune(1)
        path = tmp_path / "cooc.pkl"

        save_cooccurrence(scenario_cooc, path)
        restored = load_cooccurrence(path)

        assert dict(restored.joint_cells()) == {("A", "X"): 2}
        assert restored.total_joint_observations == 4
        assert dict(restored.row_counts) == {"A": 2, "B": 1}
        assert restored.log_lift("A", "X") == pytest.approx(scenario_cooc.log_lift("A", "X"))

    def test_overwrite_leaves_no_temp_files(self, tmp_path, scenario_cooc):
        path = tmp_path / "cooc.pkl"
        save_cooccurrence(scenario_cooc, path)
        scenario_cooc.ingest({"C"}, {"Z"})
        save_cooccurrence(scenario_cooc, path)

        assert [p.name for p in tmp_path.iterdir()] == ["cooc.pkl"]
        assert load_cooccurrence(path).joint_count("C", "Z") == 1

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_cooccurrence(tmp_path / "absent.pkl")

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.pkl"
        path.write_bytes(b"")
        with pytest.raises(ValueError, match="Corrupt"):
            load_cooccurrence(path)

    def test_not_a_state_mapping(self, tmp_path):
        path = tmp_path / "list.pkl"
        path.write_bytes(pickle.dumps([1, 2, 3]))
        with pytest.raises(ValueError, match="state mapping"):
            load_cooccurrence(path)


class TestSaveSummary:

    def test_summary_written_as_json(self, tmp_path, synthetic_observations):
        _, summary = accumulate_observations(synthetic_observations)
        path = tmp_path / "summary.json"

        save_summary(summary, path)

        assert json.loads(path.read_text()) == summary.to_dict()
        assert [p.name for p in tmp_path.iterdir()] == ["summary.json"]


class TestAtomicWriteJson:

    def test_writes_json(self, tmp_path):
        path = tmp_path / "summary.json"
        atomic_write_json(path, {"n_joint_cells": 3})

        assert json.loads(path.read_text()) == {"n_joint_cells": 3}
        assert [p.name for p in tmp_path.iterdir()] == ["summary.json"]

    def test_failure_cleans_up(self, tmp_path):
        path = tmp_path / "bad.json"
        with pytest.raises(TypeError):
            atomic_write_json(path, {"value": object()})

        assert list(tmp_path.iterdir()) == []
