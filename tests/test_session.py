"""Tests for selection history and the interactive session."""

import pytest

from keyfinder.inference import Mode, scale_instance
from keyfinder.session import SelectionHistory, SelectionSession


A = {0, 4, 7}
B = {0, 3, 7}
C = {2, 5, 9}


class TestSelectionHistory:
    """Tests for the undo/redo log."""

    def test_initial_state(self):
        """Starts with one empty entry at cursor 0."""
        history = SelectionHistory()
        assert len(history) == 1
        assert history.cursor == 0
        assert history.current() == frozenset()
        assert not history.can_undo
        assert not history.can_redo

    def test_undo_redo(self):
        history = SelectionHistory()
        history.push(A)
        history.push(B)

        assert history.undo() == A
        assert history.current() == A
        assert history.redo() == B
        assert history.current() == B

    def test_push_after_undo_drops_redo_branch(self):
        history = SelectionHistory()
        history.push(A)
        history.push(B)
        history.undo()
        history.push(C)

        assert history.current() == C
        assert not history.can_redo
        assert history.entries == [frozenset(), frozenset(A), frozenset(C)]
        assert B not in history.entries

    def test_push_same_set_is_noop(self):
        """Order and duplicates do not make a selection new."""
        history = SelectionHistory()
        assert history.push([7, 0, 4])
        assert not history.push([0, 4, 7, 4])
        assert len(history) == 2

    def test_push_same_as_current_after_undo_keeps_redo(self):
        history = SelectionHistory()
        history.push(A)
        history.push(B)
        history.undo()
        assert not history.push(A)
        assert history.can_redo

    def test_undo_at_start_is_noop(self):
        history = SelectionHistory()
        assert history.undo() == frozenset()
        assert history.cursor == 0

    def test_redo_at_end_is_noop(self):
        history = SelectionHistory()
        history.push(A)
        assert history.redo() == A
        assert history.cursor == 1

    def test_suppressed_push_records_nothing(self):
        history = SelectionHistory()
        with history.suppressed():
            assert history.is_suppressed
            assert not history.push(A)
        assert not history.is_suppressed
        assert len(history) == 1

    def test_suppression_released_on_error(self):
        history = SelectionHistory()
        with pytest.raises(RuntimeError):
            with history.suppressed():
                raise RuntimeError("boom")
        assert history.push(A)

    def test_reset(self):
        history = SelectionHistory()
        history.push(A)
        history.push(B)
        history.reset()
        assert len(history) == 1
        assert history.current() == frozenset()


class TestSelectionSession:
    """Tests for the session feeding the ranker."""

    def test_empty_session(self):
        session = SelectionSession()
        assert session.selected == frozenset()
        assert session.analyze().best is None
        assert session.toolbar_state == (False, False)

    def test_toggle_records_history(self):
        session = SelectionSession()
        session.toggle(0)
        session.toggle(4)
        session.toggle(0)
        assert session.selected == {4}
        assert len(session.history) == 4

    def test_undo_replays_without_recording(self):
        session = SelectionSession()
        session.toggle(0)
        session.toggle(4)

        assert session.undo() == {0}
        assert session.selected == {0}
        assert len(session.history) == 3
        assert session.toolbar_state == (True, True)

        assert session.redo() == {0, 4}
        assert len(session.history) == 3

    def test_edit_after_undo_discards_future(self):
        session = SelectionSession()
        session.select(A)
        session.select(B)
        session.undo()
        session.select(C)
        assert session.redo() == C
        assert not session.history.can_redo

    def test_manual_selection_is_uniform(self):
        session = SelectionSession()
        session.select([0, 4, 7])
        assert session.weights() == {0: 1.0, 4: 1.0, 7: 1.0}
        ranking = session.analyze()
        assert not ranking.has_emphasis
        assert ranking.best.name == "C Major"

    def test_baseline_weighs_added_notes_low(self):
        session = SelectionSession()
        session.load_baseline({0: 4.0, 7: 2.0})
        assert session.selected == {0, 7}

        session.toggle(4)
        assert session.weights() == {0: 4.0, 4: 0.5, 7: 2.0}
        ranking = session.analyze()
        assert ranking.has_emphasis
        assert ranking.best.name == "C Major"
        assert ranking.reasons[0].kind == "tonic_most_used"

    def test_reset_to_baseline(self):
        session = SelectionSession()
        session.load_baseline({0: 1.0, 4: 1.0})
        session.clear()
        assert session.selected == frozenset()
        assert session.reset_to_baseline() == {0, 4}

    def test_reset_to_baseline_without_baseline(self):
        session = SelectionSession()
        session.select(A)
        before = len(session.history)
        assert session.reset_to_baseline() == A
        assert len(session.history) == before

    def test_reset_all(self):
        session = SelectionSession()
        session.load_baseline({0: 1.0})
        session.toggle(4)
        session.reset_all()
        assert not session.has_baseline
        assert session.selected == frozenset()
        assert len(session.history) == 1
        assert session.toolbar_state == (False, False)

    def test_apply_scale(self):
        session = SelectionSession()
        session.apply_scale(9, "Minor")
        assert session.selected == scale_instance(9, Mode.MINOR)
        assert session.applied_scale == (9, Mode.MINOR)

        session.toggle(1)
        assert session.applied_scale is None

    def test_apply_unknown_mode(self):
        session = SelectionSession()
        with pytest.raises(ValueError):
            session.apply_scale(0, "Lydian")
        assert session.selected == frozenset()

    def test_pitch_classes_are_reduced(self):
        session = SelectionSession()
        session.add(64)
        session.add(76)
        assert session.selected == {4}
        session.remove(16)
        assert session.selected == frozenset()
