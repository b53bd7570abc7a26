"""Test undo/redo history."""

import unittest
from pixelinput.model import TextModel
from pixelinput.undo import HistoryStack


class TestHistoryStack(unittest.TestCase):

    def test_push_sets_index_to_last(self):
        stack = HistoryStack(3)
        stack.push("a")
        stack.push("ab")
        self.assertEqual(stack.index, 1)
        self.assertEqual(stack.entries, ("a", "ab"))

    def test_oldest_entries_evicted(self):
        stack = HistoryStack(2)
        for snapshot in ("a", "ab", "abc"):
            stack.push(snapshot)
        self.assertEqual(stack.entries, ("ab", "abc"))
        self.assertEqual(stack.index, 1)

    def test_push_after_undo_drops_redo_entries(self):
        stack = HistoryStack(5)
        stack.push("a")
        stack.push("ab")
        stack.undo()
        stack.push("ac")
        self.assertEqual(stack.entries, ("a", "ac"))
        self.assertFalse(stack.can_redo())

    def test_undo_past_start_returns_empty(self):
        stack = HistoryStack(5)
        stack.push("a")
        self.assertEqual(stack.undo(), "")
        self.assertEqual(stack.index, -1)
        self.assertEqual(stack.undo(), "")
        self.assertEqual(stack.index, -1)

    def test_redo_stops_at_newest(self):
        stack = HistoryStack(5)
        stack.push("a")
        stack.push("ab")
        self.assertEqual(stack.redo(), "ab")
        self.assertEqual(stack.index, 1)

    def test_redo_on_empty_history(self):
        stack = HistoryStack(5)
        self.assertIsNone(stack.redo())
        self.assertEqual(stack.index, -1)

    def test_zero_limit_keeps_nothing(self):
        stack = HistoryStack(0)
        stack.push("a")
        self.assertEqual(len(stack), 0)
        self.assertFalse(stack.can_undo())

    def test_clear(self):
        stack = HistoryStack(5)
        stack.push("a")
        stack.clear()
        self.assertEqual(len(stack), 0)
        self.assertEqual(stack.index, -1)


class TestModelHistory(unittest.TestCase):
    """Scenario: allowed a, b, c and line break, limit 5, history 3."""

    def setUp(self):
        self.model = TextModel(max_length=5, allowed_characters="abc\n", history_limit=3)

    def test_undo_redo_sequence(self):
        model = self.model
        model.insert_text("abc", 0, 0)
        model.insert_text("xyz", 3, 3)
        self.assertEqual(model.text, "abc")
        self.assertEqual(model.cursor_pos, 3)

        model.delete_backward()
        self.assertEqual(model.text, "ab")
        self.assertEqual(model.cursor_pos, 2)

        model.undo()
        self.assertEqual(model.text, "abc")
        self.assertEqual(model.cursor_pos, 3)

        model.undo()
        self.assertEqual(model.text, "")
        self.assertEqual(model.cursor_pos, 0)

        model.redo()
        self.assertEqual(model.text, "abc")
        model.redo()
        self.assertEqual(model.text, "ab")
        # Nothing newer to redo
        model.redo()
        self.assertEqual(model.text, "ab")

    def test_replay_does_not_record(self):
        self.model.insert_text("a", 0, 0)
        self.model.insert_text("b", 1, 1)
        self.model.undo()
        self.model.redo()
        self.assertEqual(self.model.history.entries, ("a", "ab"))

    def test_history_bounded(self):
        for i in range(5):
            self.model.insert_text("a", i, i)
        self.assertEqual(len(self.model.history), 3)
        self.assertEqual(self.model.history.entries, ("aaa", "aaaa", "aaaaa"))

    def test_set_text_not_undoable(self):
        self.model.set_text("ab")
        self.model.insert_text("c", 2, 2)
        self.model.undo()
        # The only snapshot was undone; undo lands on the empty state
        self.assertEqual(self.model.text, "")

    def test_redo_with_empty_history_keeps_text(self):
        self.model.set_text("abc")
        self.model.redo()
        self.assertEqual(self.model.text, "abc")

    def test_clear_history(self):
        self.model.insert_text("a", 0, 0)
        self.model.clear_history()
        self.assertEqual(len(self.model.history), 0)


if __name__ == '__main__':
    unittest.main()
