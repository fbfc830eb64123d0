"""Tests for frame layout and widget rendering."""

from __future__ import annotations

import unittest

from lazycwlogs.render import (
    FrameSnapshot,
    Rect,
    ScreenBuffer,
    WidgetKind,
    format_table_row,
    layout_frame,
    render_frame,
    render_widget,
)
from lazycwlogs.state import AppFocus, ShellSelection
from lazycwlogs.ui_theme import DEFAULT_THEME, PLAIN_THEME, resolve_theme


def make_snapshot(**overrides) -> FrameSnapshot:
    values = dict(
        focus=AppFocus.SHELL,
        selection=ShellSelection.GROUPS,
        shell_focused=True,
        query="",
        cursor_pos=0,
        presets_label="Presets",
        presets=("project-prd", "lambda"),
        presets_selected=None,
        profiles_label='Profiles ("d")',
        profiles=("dev",),
        profiles_selected=0,
        groups_label="Groups [name] page 1+",
        groups=(("/aws/lambda/api", "2024-01-01 00:00:00", "256KiB"),),
        groups_selected=0,
        status="1 log groups",
        hints=(("q", "quit"), ("/", "search")),
    )
    values.update(overrides)
    return FrameSnapshot(**values)


class RenderFrameTests(unittest.TestCase):
    def test_frame_fills_the_screen(self) -> None:
        lines = render_frame(make_snapshot(), 100, 30, PLAIN_THEME)

        self.assertEqual(len(lines), 30)
        self.assertTrue(all(len(line) == 100 for line in lines))

    def test_panels_show_labels_and_rows(self) -> None:
        text = "\n".join(render_frame(make_snapshot(), 100, 30, PLAIN_THEME))

        for expected in (
            "Search",
            "Presets",
            'Profiles ("d")',
            "Groups [name] page 1+",
            "Created at (Local)",
            "Stored Size",
            "/aws/lambda/api",
            "256KiB",
            "1 log groups",
            "q quit  / search",
        ):
            with self.subTest(expected=expected):
                self.assertIn(expected, text)

    def test_debug_panel_only_when_enabled(self) -> None:
        without = "\n".join(render_frame(make_snapshot(), 100, 30, PLAIN_THEME))
        with_debug = "\n".join(
            render_frame(make_snapshot(debug_keys=("j", "<Enter>"), debug_logs=("boom",)), 100, 30, PLAIN_THEME)
        )

        self.assertNotIn("Debug", without)
        self.assertIn("keys: j <Enter>", with_debug)
        self.assertIn("boom", with_debug)

    def test_tiny_screen_does_not_fail(self) -> None:
        lines = render_frame(make_snapshot(), 10, 4, PLAIN_THEME)

        self.assertEqual(len(lines), 4)

    def test_colored_frame_uses_theme_sequences(self) -> None:
        lines = render_frame(make_snapshot(), 100, 30, DEFAULT_THEME)

        self.assertTrue(any(DEFAULT_THEME.active_border in line for line in lines))
        self.assertTrue(lines[0].endswith(DEFAULT_THEME.reset))


class LayoutTests(unittest.TestCase):
    def test_regions_tile_the_screen(self) -> None:
        areas = layout_frame(100, 30, debug=False)

        self.assertEqual(areas[WidgetKind.SEARCH], Rect(0, 0, 100, 3))
        self.assertEqual(areas[WidgetKind.PRESETS].width + areas[WidgetKind.GROUPS].width, 100)
        self.assertEqual(areas[WidgetKind.STATUS], Rect(0, 29, 100, 1))
        self.assertNotIn(WidgetKind.DEBUG, areas)

    def test_debug_region_when_room(self) -> None:
        self.assertIn(WidgetKind.DEBUG, layout_frame(100, 30, debug=True))
        self.assertNotIn(WidgetKind.DEBUG, layout_frame(100, 12, debug=True))


class WidgetTests(unittest.TestCase):
    def test_selected_list_row_is_highlighted(self) -> None:
        buffer = ScreenBuffer(20, 5)
        snapshot = make_snapshot(selection=ShellSelection.PRESETS, presets_selected=1)

        render_widget(WidgetKind.PRESETS, Rect(0, 0, 20, 5), buffer, snapshot, DEFAULT_THEME)

        row = buffer.cells[2]
        self.assertEqual("".join(ch for ch, _ in row[1:7]), "lambda")
        self.assertEqual(row[1][1], DEFAULT_THEME.item_highlight)
        self.assertEqual(buffer.cells[0][0][1], DEFAULT_THEME.active_border)

    def test_unfocused_selection_uses_selecting_border(self) -> None:
        buffer = ScreenBuffer(20, 5)
        snapshot = make_snapshot(selection=ShellSelection.PROFILES, shell_focused=False)

        render_widget(WidgetKind.PROFILES, Rect(0, 0, 20, 5), buffer, snapshot, DEFAULT_THEME)
        render_widget(WidgetKind.PRESETS, Rect(0, 0, 0, 0), buffer, snapshot, DEFAULT_THEME)

        self.assertEqual(buffer.cells[0][0][1], DEFAULT_THEME.selecting_border)

    def test_long_lists_scroll_to_selection(self) -> None:
        buffer = ScreenBuffer(20, 5)
        names = tuple(f"profile-{n}" for n in range(10))
        snapshot = make_snapshot(selection=ShellSelection.PROFILES, profiles=names, profiles_selected=8)

        render_widget(WidgetKind.PROFILES, Rect(0, 0, 20, 5), buffer, snapshot, PLAIN_THEME)
        rendered = buffer.lines(PLAIN_THEME.reset)

        self.assertIn("profile-8", rendered[3])
        self.assertNotIn("profile-0", "\n".join(rendered))

    def test_table_row_truncates_long_names(self) -> None:
        row = format_table_row(("/aws/" + "x" * 80, "2024-01-01 00:00:00", "1KiB"), 60)

        self.assertEqual(len(row), 60)
        self.assertIn("…", row)
        self.assertTrue(row.endswith("1KiB"))

    def test_wide_characters_take_two_cells(self) -> None:
        buffer = ScreenBuffer(6, 1)

        used = buffer.put(0, 0, "日本語")

        self.assertEqual(used, 6)
        self.assertEqual(buffer.lines("")[0], "日本語")


class ThemeTests(unittest.TestCase):
    def test_resolve_theme(self) -> None:
        self.assertEqual(resolve_theme("OCEAN").name, "ocean")
        self.assertIs(resolve_theme("missing"), DEFAULT_THEME)
        self.assertIs(resolve_theme("ocean", no_color=True), PLAIN_THEME)


if __name__ == "__main__":
    unittest.main()
