"""
StudentDir Directory Tests
==========================
Tests for the coordinator: lock-step consistency between the NIM index
and the IPK tree across insert/delete histories, duplicate handling,
tags, and the worked example scenarios.
"""

import math
import random

import pytest

from directory import StudentDirectory, load_sample
from config import SAMPLE_STUDENTS


@pytest.fixture
def d():
    return StudentDirectory()


def _names(students):
    return [s.name for s in students]


# ═══════════════════════════════════════════════════════════════════
# Scenarios
# ═══════════════════════════════════════════════════════════════════

class TestScenarios:

    def test_shared_ipk_scenario(self, d):
        assert d.insert_record("1001", "A", 3.75)
        assert d.insert_record("1002", "B", 3.50)
        assert d.insert_record("1003", "C", 3.75)

        assert _names(d.find_by_ranking(3.75)) == ["A", "C"]
        assert _names(d.list_ordered_by_ranking()) == ["B", "A", "C"]

        assert d.delete_by_id("1001")
        assert _names(d.find_by_ranking(3.75)) == ["C"]

    def test_reuse_nim_after_delete(self, d):
        assert d.insert_record("1001", "A", 3.0)
        assert d.delete_by_id("1001")
        assert d.insert_record("1001", "A2", 2.5)
        assert d.find_by_id("1001").name == "A2"
        assert d.find_by_ranking(3.0) == []
        assert d.count() == 1

    def test_sample_data(self, d):
        assert load_sample(d) == len(SAMPLE_STUDENTS)
        assert d.count() == 10
        assert str(d.find_by_id("20231004")) == "NIM:20231004 | Name:Dina | IPK:3.90"
        assert _names(d.find_by_ranking(3.75)) == ["Alice", "Charlie"]
        assert d.delete_by_id("20231003")
        ordered = d.list_ordered_by_ranking()
        assert _names(ordered) == ["Ika", "Gina", "Eko", "Joko", "Bob", "Fani",
                                   "Alice", "Dina", "Hadi"]
        # second load only re-tries existing NIMs
        assert load_sample(d) == 1


# ═══════════════════════════════════════════════════════════════════
# Insert / duplicate handling
# ═══════════════════════════════════════════════════════════════════

class TestInsert:

    def test_count_tracks_successful_inserts(self, d):
        for i in range(25):
            assert d.insert_record(str(i), f"N{i}", (i % 7) / 2)
        assert d.count() == 25
        assert len(d) == 25

    def test_duplicate_rejected_without_side_effects(self, d):
        d.insert_record("1001", "A", 3.75)
        before = [(s.nim, s.name, s.ipk) for s in d.list_ordered_by_ranking()]

        assert d.insert_record("1001", "Imposter", 1.0) is False

        assert d.count() == 1
        assert d.find_by_id("1001").name == "A"
        assert d.find_by_ranking(1.0) == []
        assert [(s.nim, s.name, s.ipk) for s in d.list_ordered_by_ranking()] == before

    def test_nan_rejected(self, d):
        with pytest.raises(ValueError, match="NaN"):
            d.insert_record("1001", "A", math.nan)
        assert d.count() == 0
        assert d.list_ordered_by_ranking() == []

    def test_int_ipk_stored_as_float(self, d):
        d.insert_record("1001", "A", 3)
        assert isinstance(d.find_by_id("1001").ipk, float)
        assert _names(d.find_by_ranking(3.0)) == ["A"]

    def test_tags_deduplicated(self, d):
        d.insert_record("1001", "A", 3.0, ["chess", "robotics", "chess"])
        assert d.find_by_id("1001").tags == ["chess", "robotics"]


# ═══════════════════════════════════════════════════════════════════
# Lookup / delete
# ═══════════════════════════════════════════════════════════════════

class TestLookupAndDelete:

    def test_find_missing(self, d):
        assert d.find_by_id("nope") is None
        assert d.find_by_ranking(4.0) == []

    def test_delete_missing(self, d):
        d.insert_record("1001", "A", 3.0)
        assert d.delete_by_id("nope") is False
        assert d.count() == 1

    def test_delete_removes_everywhere(self, d):
        d.insert_record("1001", "A", 3.0)
        d.insert_record("1002", "B", 2.0)
        assert d.delete_by_id("1001")
        assert d.find_by_id("1001") is None
        assert d.count() == 1
        assert "1001" not in [s.nim for s in d.list_ordered_by_ranking()]
        assert d.find_by_ranking(3.0) == []
        assert d.delete_by_id("1001") is False

    def test_returned_lists_are_copies(self, d):
        d.insert_record("1001", "A", 3.0)
        d.find_by_ranking(3.0).clear()
        d.list_ordered_by_ranking().clear()
        assert len(d.find_by_ranking(3.0)) == 1
        assert len(d.list_ordered_by_ranking()) == 1

    def test_add_tag(self, d):
        d.insert_record("1001", "A", 3.0)
        assert d.add_tag("1001", "dean-list")
        assert d.add_tag("1001", "dean-list") is False
        assert d.add_tag("nope", "x") is False
        assert d.find_by_id("1001").tags == ["dean-list"]

    def test_ipk_is_read_only(self, d):
        d.insert_record("1001", "A", 3.0)
        student = d.find_by_id("1001")
        with pytest.raises(AttributeError):
            student.ipk = 4.0


# ═══════════════════════════════════════════════════════════════════
# Randomised history: lock-step invariant
# ═══════════════════════════════════════════════════════════════════

class TestConsistency:

    def test_random_history_matches_model(self, d):
        rng = random.Random(451)
        model = {}  # nim -> (ipk, insertion seq)
        seq = 0
        for _ in range(2000):
            nim = str(rng.randrange(150))
            if rng.random() < 0.6:
                ipk = rng.choice([2.5, 2.75, 3.0, 3.25, 3.5, 3.75, 4.0]) + rng.choice([0, 0.01])
                ok = d.insert_record(nim, f"N{nim}", ipk)
                assert ok == (nim not in model)
                if ok:
                    model[nim] = (ipk, seq)
                    seq += 1
            else:
                assert d.delete_by_id(nim) == (nim in model)
                model.pop(nim, None)

        assert d.count() == len(model)
        assert d.validate() == []

        expected = sorted(model, key=lambda n: model[n])
        assert [s.nim for s in d.list_ordered_by_ranking()] == expected

        for ipk in {v[0] for v in model.values()}:
            want = sorted((n for n in model if model[n][0] == ipk), key=lambda n: model[n][1])
            assert [s.nim for s in d.find_by_ranking(ipk)] == want

    def test_stats_shape(self, d):
        for i, ipk in enumerate([3.0, 3.0, 2.0, 4.0]):
            d.insert_record(str(i), "x", ipk)
        assert d.stats() == {"students": 4, "distinct_ipk": 3, "tree_height": 2}
