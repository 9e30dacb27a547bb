#!/usr/bin/env python3
"""Tests for the pin map profiles."""

import pytest

from utilities.pins import Pins


def test_pico_w_profile():
    Pins.initialize("PICO_W")
    assert len(Pins.BUTTONS) == 4
    assert Pins.BUTTONS[0] is Pins.BTN_UP
    assert Pins.BUTTONS[3] is Pins.BTN_BACK
    assert Pins.I2C_ADDRESSES["OLED"] == 0x3C


def test_unknown_profile():
    with pytest.raises(ValueError, match="Unknown pin profile"):
        Pins.initialize("NOPE")
