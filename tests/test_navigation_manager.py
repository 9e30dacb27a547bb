#!/usr/bin/env python3
"""Tests for NavigationManager screen transitions."""

import pytest

from helpers import FakeStore, make_core
from core.screens import (
    ALL_SCREENS,
    MANUAL_ENTRY,
    MENU_ITEMS,
    NO_NETWORKS,
    ApiWeatherScreen,
    ConnectingScreen,
    ConnectionResultScreen,
    GeolocationScreen,
    InfoScreen,
    KeyboardEditorScreen,
    LoadingScreen,
    LocalWeatherScreen,
    ManualCredentialSetupScreen,
    MenuScreen,
    NetworkScanScreen,
    check_dispatch,
)
from managers.connection_manager import CONNECTING, IDLE
from managers.data_manager import PASSWORD_KEY, SSID_KEY
from managers.input_manager import BACK, DOWN, LONG_PRESS_MS, SELECT, UP
from managers.keyboard_editor import FIELD_NAME, FIELD_SECRET

SCAN_INDEX = 3


def _open_scan(sim):
    sim.tap(DOWN, times=SCAN_INDEX)
    sim.tap(SELECT)


def test_boot_goes_to_menu():
    core, _ = make_core()
    assert isinstance(core.screen, MenuScreen)
    assert core.screen.selected == 0
    assert len(MENU_ITEMS) == 5


def test_new_navigation_starts_on_loading():
    from managers.navigation_manager import NavigationManager
    from utilities.context import DeviceContext
    nav = NavigationManager(DeviceContext())
    assert isinstance(nav.screen, LoadingScreen)


def test_menu_wraps_both_ways():
    core, sim = make_core()
    sim.tap(UP)
    assert core.screen.selected == len(MENU_ITEMS) - 1
    sim.tap(DOWN)
    assert core.screen.selected == 0


def test_menu_down_twice():
    core, sim = make_core()
    sim.tap(DOWN, times=2)
    assert core.screen.selected == 2


def test_menu_back_is_noop():
    core, sim = make_core()
    sim.tap(DOWN)
    sim.tap(BACK)
    assert isinstance(core.screen, MenuScreen)
    assert core.screen.selected == 1


@pytest.mark.parametrize("index,screen_cls", [
    (0, LocalWeatherScreen),
    (1, ApiWeatherScreen),
    (2, GeolocationScreen),
    (4, InfoScreen),
])
@pytest.mark.parametrize("exit_button", [SELECT, BACK])
def test_leaf_screens_return_to_menu(index, screen_cls, exit_button):
    core, sim = make_core()
    sim.tap(DOWN, times=index)
    sim.tap(SELECT)
    assert isinstance(core.screen, screen_cls)

    sim.tap(UP)
    sim.tap(DOWN)
    assert isinstance(core.screen, screen_cls), "Up/Down must not leave a leaf screen"

    sim.tap(exit_button)
    assert isinstance(core.screen, MenuScreen)
    assert core.screen.selected == index


def test_long_press_on_menu_is_single_short():
    """Outside the editors a long press is just a short press on release."""
    core, sim = make_core()
    sim.hold([DOWN], LONG_PRESS_MS * 2)
    assert core.screen.selected == 1


def test_scan_lists_networks():
    core, sim = make_core(networks=["Alpha", "Beta"])
    _open_scan(sim)
    assert isinstance(core.screen, NetworkScanScreen)
    assert core.screen.results == ["Alpha", "Beta"]
    assert core.ctx.radio.scan_calls == 1


def test_scan_results_capped():
    names = [f"net{i}" for i in range(40)]
    core, sim = make_core(networks=names)
    _open_scan(sim)
    assert len(core.screen.results) == 31


def test_scan_selection_clamps():
    core, sim = make_core(networks=["A", "B", "C"])
    _open_scan(sim)
    sim.tap(UP)
    assert core.screen.selected == 0
    sim.tap(DOWN, times=5)
    assert core.screen.selected == 3, "Clamps on the trailing manual entry row"
    assert core.ctx.radio.scan_calls == 1, "Scan runs once on entry only"


def test_scan_back_returns_to_menu():
    core, sim = make_core(networks=["A"])
    _open_scan(sim)
    sim.tap(BACK)
    assert isinstance(core.screen, MenuScreen)
    assert core.screen.selected == SCAN_INDEX


def test_scan_select_opens_keyboard_with_name():
    core, sim = make_core(networks=["Alpha", "Beta"])
    _open_scan(sim)
    sim.tap(DOWN)
    sim.tap(SELECT)
    assert isinstance(core.screen, KeyboardEditorScreen)
    buf = core.ctx.editor.buffer
    assert buf.name == "Beta"
    assert buf.secret == ""
    assert buf.active == FIELD_SECRET


def test_empty_scan_shows_sentinel_and_opens_manual_setup():
    store = FakeStore({SSID_KEY: "Saved", PASSWORD_KEY: "pw"})
    core, sim = make_core(networks=[], store=store)
    _open_scan(sim)
    assert core.screen.results == [NO_NETWORKS]

    sim.tap(SELECT)
    assert isinstance(core.screen, ManualCredentialSetupScreen)
    assert core.screen.field == FIELD_NAME
    assert core.ctx.editor.buffer.name == "Saved"
    assert core.ctx.editor.buffer.secret == "pw"


def test_manual_setup_up_hold_toggles_field():
    core, sim = make_core(networks=[])
    _open_scan(sim)
    sim.tap(SELECT)
    row_before = core.ctx.editor.row

    sim.hold([UP], LONG_PRESS_MS + 200)
    assert core.screen.field == FIELD_SECRET
    assert core.ctx.editor.buffer.active == FIELD_SECRET
    assert core.ctx.editor.row == row_before, "A claimed press must not also move the cursor"


def test_editor_short_presses_move_cursor():
    core, sim = make_core(networks=["A"])
    _open_scan(sim)
    sim.tap(SELECT)
    editor = core.ctx.editor

    sim.tap(DOWN, times=2)
    sim.tap(SELECT, times=3)
    assert (editor.row, editor.col) == (2, 3)
    sim.tap(BACK)
    sim.tap(UP)
    assert (editor.row, editor.col) == (1, 2)
    assert isinstance(core.screen, KeyboardEditorScreen)


def test_editor_down_hold_abandons_edit():
    core, sim = make_core(networks=["A"])
    _open_scan(sim)
    sim.tap(SELECT)
    sim.hold([SELECT], LONG_PRESS_MS + 100)

    sim.hold([DOWN], LONG_PRESS_MS + 100)
    assert isinstance(core.screen, MenuScreen)
    assert core.ctx.store.writes == []
    assert core.ctx.connection.state == IDLE


def _confirm(sim):
    sim.hold([SELECT, BACK], LONG_PRESS_MS + 200)


def test_confirm_moves_to_connecting_and_release_does_not_cancel():
    core, sim = make_core(networks=["A"])
    _open_scan(sim)
    sim.tap(SELECT)
    _confirm(sim)
    assert isinstance(core.screen, ConnectingScreen)
    assert core.ctx.connection.state == CONNECTING


def test_connecting_back_cancels():
    core, sim = make_core(networks=["A"])
    _open_scan(sim)
    sim.tap(SELECT)
    _confirm(sim)

    sim.tap(BACK)
    assert isinstance(core.screen, ConnectionResultScreen)
    assert core.screen.success is False
    assert core.screen.message == "Cancelled by user"


def test_connecting_select_does_not_restart():
    core, sim = make_core(networks=["A"])
    _open_scan(sim)
    sim.tap(SELECT)
    _confirm(sim)
    sim.tap(SELECT)
    sim.tap(UP)
    assert isinstance(core.screen, ConnectingScreen)
    assert len(core.ctx.radio.begin_calls) == 1


def test_connecting_times_out():
    core, sim = make_core(networks=["A"])
    _open_scan(sim)
    sim.tap(SELECT)
    _confirm(sim)
    sim.run(20500)
    assert isinstance(core.screen, ConnectionResultScreen)
    assert core.screen.message == "Timeout"
    assert core.ctx.radio.abort_calls == 1


def test_result_select_returns_to_menu_and_resets():
    core, sim = make_core(networks=["A"])
    _open_scan(sim)
    sim.tap(SELECT)
    _confirm(sim)
    core.ctx.radio.linked = True
    sim.run(20)
    assert isinstance(core.screen, ConnectionResultScreen)
    assert core.screen.success is True

    sim.tap(SELECT)
    assert isinstance(core.screen, MenuScreen)
    assert core.ctx.connection.state == IDLE


def test_connection_only_polled_on_connecting_screen():
    core, sim = make_core(networks=["A"])
    calls = []
    original = core.ctx.connection.poll

    def spy(now=None):
        calls.append(now)
        return original(now)

    core.ctx.connection.poll = spy
    sim.run(500)
    _open_scan(sim)
    assert calls == []


def test_every_screen_is_handled():
    core, _ = make_core()
    check_dispatch(core.navigation._handlers, "handlers")
    check_dispatch(core.ctx.renderer._draw, "renderer")
    with pytest.raises(ValueError):
        check_dispatch({MenuScreen: None}, "partial")
    assert len(ALL_SCREENS) == 11


def test_manual_entry_row_opens_manual_setup():
    store = FakeStore({SSID_KEY: "Hidden"})
    core, sim = make_core(networks=["A", "B"], store=store)
    _open_scan(sim)
    assert core.screen.rows == ["A", "B", MANUAL_ENTRY]

    sim.tap(DOWN, times=2)
    sim.tap(SELECT)
    assert isinstance(core.screen, ManualCredentialSetupScreen)
    assert core.screen.field == FIELD_NAME
    assert core.ctx.editor.buffer.name == "Hidden"


def test_press_held_from_scan_does_not_act_in_editor():
    core, sim = make_core(networks=["A"])
    _open_scan(sim)
    sim.source.press(DOWN)
    sim.run(LONG_PRESS_MS + 100)
    sim.tap(SELECT)
    assert isinstance(core.screen, KeyboardEditorScreen)

    sim.run(LONG_PRESS_MS * 2)
    assert isinstance(core.screen, KeyboardEditorScreen)
    sim.source.release(DOWN)
    sim.run(100)
    assert isinstance(core.screen, KeyboardEditorScreen)
    assert core.ctx.editor.row == 0, "The release of a claimed press is not a short press"


def test_confirm_after_insert_is_still_available():
    core, sim = make_core(networks=["A"])
    _open_scan(sim)
    sim.tap(SELECT)
    sim.hold([SELECT], LONG_PRESS_MS + 100, release=False)
    assert core.ctx.editor.buffer.secret == "1"

    sim.source.press(BACK)
    sim.run(LONG_PRESS_MS + 200)
    assert isinstance(core.screen, ConnectingScreen)
    assert core.ctx.radio.begin_calls == [("A", "1")]

    sim.source.release(SELECT)
    sim.source.release(BACK)
    sim.run(100)
    assert isinstance(core.screen, ConnectingScreen)
