"""Peripheral devices: display, keypad, timers and random source."""
