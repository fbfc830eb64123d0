"""Tests for the shell focus machine, the search line and the debug ring."""

from __future__ import annotations

import unittest

from lazycwlogs.data import AppData
from lazycwlogs.preset import Preset, default_presets, new_preset_repository
from lazycwlogs.profile import new_profile_repository
from lazycwlogs.query import Query
from lazycwlogs.runtime.actions import RequestLogGroups
from lazycwlogs.state import (
    DEBUG_HISTORY,
    DebugData,
    SearchData,
    ShellSelection,
    ShellState,
    next_index,
    previous_index,
)


def make_data(profiles=("dev", "prd")) -> AppData:
    return AppData(
        presets=new_preset_repository(default_presets()),
        profiles=new_profile_repository(profiles),
    )


class IndexStepTests(unittest.TestCase):
    def test_next_and_previous_wrap(self) -> None:
        self.assertEqual(next_index(None, 3), 0)
        self.assertEqual(next_index(2, 3), 0)
        self.assertEqual(previous_index(None, 3), 2)
        self.assertEqual(previous_index(0, 3), 2)

    def test_empty_collapses_to_none(self) -> None:
        self.assertIsNone(next_index(0, 0))
        self.assertIsNone(previous_index(None, 0))

    def test_stale_index_is_brought_back_in_range(self) -> None:
        self.assertEqual(next_index(7, 3), 0)
        self.assertEqual(previous_index(7, 3), 2)


class ShellStateTests(unittest.TestCase):
    def test_region_cycle_from_no_selection(self) -> None:
        data = make_data()

        shell = ShellState()
        shell.select_next(data)
        self.assertIs(shell.selection, ShellSelection.PRESETS)

        shell = ShellState()
        shell.select_previous(data)
        self.assertIs(shell.selection, ShellSelection.GROUPS)

    def test_three_forward_steps_return_to_start(self) -> None:
        data = make_data()
        for start in ShellSelection:
            with self.subTest(start=start):
                shell = ShellState(selection=start)
                for _ in range(3):
                    shell.select_next(data)
                self.assertIs(shell.selection, start)
                for _ in range(3):
                    shell.select_previous(data)
                self.assertIs(shell.selection, start)

    def test_forward_order_is_presets_profiles_groups(self) -> None:
        data = make_data()
        shell = ShellState()
        seen = []
        for _ in range(4):
            shell.select_next(data)
            seen.append(shell.selection)

        self.assertEqual(
            seen,
            [ShellSelection.PRESETS, ShellSelection.PROFILES, ShellSelection.GROUPS, ShellSelection.PRESETS],
        )

    def test_set_focus_requires_a_selection(self) -> None:
        shell = ShellState()
        shell.set_focus()
        self.assertFalse(shell.has_focus())

        shell.selection = ShellSelection.PROFILES
        shell.set_focus()
        self.assertTrue(shell.has_focus())

        shell.clear_focus()
        self.assertFalse(shell.has_focus())

    def test_focused_navigation_moves_item_index_modulo_count(self) -> None:
        data = make_data()
        shell = ShellState(selection=ShellSelection.PROFILES, focus=True)

        shell.select_next(data)
        self.assertEqual(shell.selected_index(ShellSelection.PROFILES), 0)
        shell.select_next(data)
        shell.select_next(data)
        self.assertEqual(shell.selected_index(ShellSelection.PROFILES), 0)
        shell.select_previous(data)
        self.assertEqual(shell.selected_index(ShellSelection.PROFILES), 1)
        self.assertIs(shell.selection, ShellSelection.PROFILES)

    def test_focused_navigation_on_empty_region_selects_nothing(self) -> None:
        data = make_data()
        shell = ShellState(selection=ShellSelection.GROUPS, focus=True)

        shell.select_next(data)
        shell.select_previous(data)

        self.assertIsNone(shell.selected_index(ShellSelection.GROUPS))

    def test_clamp_selections_after_filtering(self) -> None:
        data = make_data(("dev", "prd", "stg"))
        shell = ShellState()
        shell.item_index[ShellSelection.PROFILES] = 2

        data.profiles.set_query(Query("d"))
        shell.clamp_selections(data)
        self.assertEqual(shell.selected_index(ShellSelection.PROFILES), 1)

        data.profiles.set_query(Query("zzz"))
        shell.clamp_selections(data)
        self.assertIsNone(shell.selected_index(ShellSelection.PROFILES))

    def test_execute_item_requests_groups_for_selected_profile(self) -> None:
        data = make_data()
        shell = ShellState(selection=ShellSelection.PROFILES, focus=True)
        shell.item_index[ShellSelection.PROFILES] = 1
        shell.item_index[ShellSelection.PRESETS] = 3

        action = shell.execute_item(data)

        self.assertEqual(action, RequestLogGroups(profile="prd", preset=Preset("lambda")))
        self.assertIs(shell.selection, ShellSelection.GROUPS)

    def test_execute_item_without_profile_or_focus_does_nothing(self) -> None:
        data = make_data()

        unfocused = ShellState(selection=ShellSelection.PRESETS)
        unfocused.item_index[ShellSelection.PROFILES] = 0
        self.assertIsNone(unfocused.execute_item(data))

        no_profile = ShellState(selection=ShellSelection.PRESETS, focus=True)
        self.assertIsNone(no_profile.execute_item(data))
        self.assertIs(no_profile.selection, ShellSelection.PRESETS)

    def test_execute_item_on_groups_is_a_no_op(self) -> None:
        data = make_data()
        shell = ShellState(selection=ShellSelection.GROUPS, focus=True)
        shell.item_index[ShellSelection.PROFILES] = 0

        self.assertIsNone(shell.execute_item(data))


class SearchDataTests(unittest.TestCase):
    def test_edit_at_cursor(self) -> None:
        search = SearchData()
        for char in "lamda":
            search.append_char(char)
        search.move_position(-2)
        search.append_char("b")

        self.assertEqual(search.query(), "lambda")
        self.assertEqual(search.input_pos, 4)

        search.delete_char()
        self.assertEqual(search.query(), "lamda")

    def test_cursor_is_clamped(self) -> None:
        search = SearchData()
        search.move_position(5)
        self.assertEqual(search.input_pos, 0)

        search.append_char("a")
        search.move_position(10)
        self.assertEqual(search.input_pos, 1)
        search.move_position(-10)
        self.assertEqual(search.input_pos, 0)

        search.delete_char()
        self.assertEqual(search.query(), "a")


class DebugDataTests(unittest.TestCase):
    def test_history_is_bounded(self) -> None:
        debug = DebugData()
        for n in range(DEBUG_HISTORY + 5):
            debug.append_key(str(n))

        self.assertEqual(len(debug.keys), DEBUG_HISTORY)
        self.assertEqual(debug.keys[0], "5")


if __name__ == "__main__":
    unittest.main()
