"""
Tests for pulsehub/seed/generator.py
"""

from pulsehub.engine.store import EntityStore
from pulsehub.models import ClassroomWalkthrough, Decision, Meeting, ProjectTask, RubricComponent
from pulsehub.seed.generator import (
    SAMPLE_DECISION_COUNTS,
    SampleDataGenerator,
    sample_meetings,
    sample_pending_decisions,
)

from .conftest import NOW


def fingerprint(store):
    return [(t.title, t.due_date, t.status) for t in store.all(ProjectTask)]


class TestSampleDataGenerator:
    def test_same_seed_same_data(self):
        first = SampleDataGenerator(seed=7).generate_store(NOW)
        second = SampleDataGenerator(seed=7).generate_store(NOW)
        assert fingerprint(first) == fingerprint(second)

    def test_different_seed_different_data(self):
        first = SampleDataGenerator(seed=1).generate_store(NOW)
        second = SampleDataGenerator(seed=2).generate_store(NOW)
        assert fingerprint(first) != fingerprint(second)

    def test_counts_follow_config(self, config):
        config['samples'].update(task_count=5, meeting_count=3, decision_count=2, observation_count=1)
        generator = SampleDataGenerator(config=config)
        store = generator.generate_store(NOW)

        assert store.count(ProjectTask, lambda t: t.parent_id is None) == 5
        counts = generator.counts(store)
        assert counts['meetings'] == 3
        assert counts['decisions'] == 2
        assert counts['observations'] == 1
        assert counts['categories'] == 4

    def test_links_are_consistent(self):
        store = SampleDataGenerator(seed=3).generate_store(NOW)
        meeting_ids = {m.id for m in store.all(Meeting)}
        for task in store.all(ProjectTask):
            assert task.meeting_id is None or task.meeting_id in meeting_ids
            for subtask in task.subtasks:
                assert subtask.parent_id == task.id
        for decision in store.all(Decision):
            assert decision.meeting_id is None or decision.meeting_id in meeting_ids
        for observation in store.all(ClassroomWalkthrough):
            assert observation.components
        assert store.count(RubricComponent) == sum(
            len(o.components) for o in store.all(ClassroomWalkthrough)
        )

    def test_generated_store_survives_save(self, tmp_path):
        store = SampleDataGenerator().generate_store(NOW)
        loaded = EntityStore.load(store.save(tmp_path / "store.json"))
        assert fingerprint(loaded) == fingerprint(store)


def test_fixed_samples():
    assert [m.title for m in sample_meetings(NOW)] == ["Admin Team Meeting", "Staff Meeting"]
    assert all(m.date < NOW for m in sample_meetings(NOW))
    pending = sample_pending_decisions(NOW)
    assert [d.title for d in pending] == ["Implement New Policy"]
    assert not any(d.is_reviewed for d in pending)
    assert sum(SAMPLE_DECISION_COUNTS) == 20
