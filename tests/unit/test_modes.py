"""Unit tests for tuiser.ui.modes and tuiser.ui.keys."""

from __future__ import annotations

import curses

import pytest

from tuiser.ui.keys import KeyAction, classify, ctrl
from tuiser.ui.modes import BAD_MODE_MSG, GRID_COLUMNS, DisplayMode, to_signed


class TestDisplayMode:
    def test_cycle_order_wraps(self):
        mode = DisplayMode.CHAR
        seen = []
        for _ in range(6):
            seen.append(mode)
            mode = mode.next()
        assert seen == [
            DisplayMode.CHAR,
            DisplayMode.GRAPH,
            DisplayMode.HEX,
            DisplayMode.UINT,
            DisplayMode.INT,
            DisplayMode.CHAR,
        ]

    @pytest.mark.parametrize("name", ["char", "graph", "hex", "uint", "int"])
    def test_parse_known_names(self, name):
        assert DisplayMode.parse(name).value == name

    def test_parse_rejects_unknown(self):
        with pytest.raises(ValueError, match=BAD_MODE_MSG):
            DisplayMode.parse("binary")

    def test_only_numeric_modes_are_grids(self):
        assert not DisplayMode.CHAR.is_grid
        assert not DisplayMode.GRAPH.is_grid
        assert DisplayMode.CHAR.grid is None
        assert all(m.is_grid for m in (DisplayMode.HEX, DisplayMode.UINT, DisplayMode.INT))

    @pytest.mark.parametrize(
        "mode, cell, width",
        [(DisplayMode.HEX, 3, 51), (DisplayMode.UINT, 4, 67), (DisplayMode.INT, 5, 83)],
    )
    def test_grid_geometry(self, mode, cell, width):
        assert mode.grid.cell_width == cell
        assert mode.grid.surface_width == width
        assert GRID_COLUMNS == 16

    @pytest.mark.parametrize(
        "mode, byte, text",
        [
            (DisplayMode.HEX, 0x0A, " A"),
            (DisplayMode.HEX, 0xFF, "FF"),
            (DisplayMode.UINT, 7, "  7"),
            (DisplayMode.UINT, 255, "255"),
            (DisplayMode.INT, 0x7F, " 127"),
            (DisplayMode.INT, 0x80, "-128"),
            (DisplayMode.INT, 0xFF, "  -1"),
        ],
    )
    def test_grid_values(self, mode, byte, text):
        rendered = mode.grid.render(byte)
        assert rendered == text
        assert len(rendered) == mode.grid.value_width

    def test_to_signed(self):
        assert to_signed(0x00) == 0
        assert to_signed(0x7F) == 127
        assert to_signed(0x80) == -128
        assert to_signed(0xFF) == -1


class TestKeys:
    def test_global_chords(self):
        assert classify(ctrl("c")) is KeyAction.EXIT
        assert classify(ctrl("x")) is KeyAction.TOGGLE_MONITOR
        assert classify(ctrl("z")) is KeyAction.CYCLE_MODE

    def test_navigation_is_asymmetric(self):
        assert classify(curses.KEY_UP) is KeyAction.FOCUS_DEVICE
        assert classify(curses.KEY_RIGHT) is KeyAction.FOCUS_DEVICE
        assert classify(curses.KEY_DOWN) is KeyAction.FOCUS_SEND
        assert classify(curses.KEY_LEFT) is KeyAction.FOCUS_BAUD

    def test_wasd_chords_match_arrows(self):
        assert classify(ctrl("w")) is classify(curses.KEY_UP)
        assert classify(ctrl("a")) is classify(curses.KEY_RIGHT)
        assert classify(ctrl("s")) is classify(curses.KEY_DOWN)
        assert classify(ctrl("d")) is classify(curses.KEY_LEFT)

    @pytest.mark.parametrize("key", [curses.KEY_BACKSPACE, curses.KEY_DC, curses.KEY_DL, 0x7F, 0x08])
    def test_delete_keys(self, key):
        assert classify(key) is KeyAction.DELETE

    @pytest.mark.parametrize("key", [ord("\n"), curses.KEY_ENTER])
    def test_submit_keys(self, key):
        assert classify(key) is KeyAction.SUBMIT

    @pytest.mark.parametrize("key", [0x20, ord("a"), ord("~"), ord("0")])
    def test_printable_inserts(self, key):
        assert classify(key) is KeyAction.INSERT

    @pytest.mark.parametrize("key", [curses.ERR, 0x02, 0x80, 0xE9, curses.KEY_F1])
    def test_other_keys_ignored(self, key):
        assert classify(key) is KeyAction.NONE
