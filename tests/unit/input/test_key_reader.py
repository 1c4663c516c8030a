"""Raw-key decoding and key-to-event mapping tests.

Covers ESC timing, UTF-8 characters, swallowed terminal reports, and the
closed set of events the input monitor publishes.
"""

from __future__ import annotations

import os
import time
import unittest

from cratescout.events import BackspaceKey, CharKey, EnterKey, EscapeKey
from cratescout.input import reader as reader_mod
from cratescout.input.key_registry import KeyComboBinding, KeyComboRegistry
from cratescout.input.monitor import event_for_key


class ReadKeyTests(unittest.TestCase):
    def setUp(self) -> None:
        reader_mod._PENDING_BYTES.clear()

    def tearDown(self) -> None:
        reader_mod._PENDING_BYTES.clear()

    def _read_all(self, payload: bytes, count: int) -> list[str]:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, payload)
            return [reader_mod.read_key(read_fd, timeout_ms=20) for _ in range(count)]
        finally:
            os.close(read_fd)
            os.close(write_fd)

    def test_single_escape_returns_without_second_keypress(self) -> None:
        started = time.monotonic()
        keys = self._read_all(b"\x1b", 1)
        elapsed = time.monotonic() - started

        self.assertEqual(keys, ["ESC"])
        self.assertLess(elapsed, 0.2)

    def test_escape_does_not_swallow_following_printable_key(self) -> None:
        self.assertEqual(self._read_all(b"\x1bq", 2), ["ESC", "q"])

    def test_control_bytes_map_to_named_tokens(self) -> None:
        self.assertEqual(
            self._read_all(b"\r\n\x7f\x08\t\x03", 6),
            ["ENTER_CR", "ENTER_LF", "BACKSPACE", "BACKSPACE", "TAB", "CTRL_C"],
        )

    def test_multibyte_utf8_character_is_one_key(self) -> None:
        self.assertEqual(self._read_all("é✓".encode("utf-8"), 2), ["é", "✓"])

    def test_arrow_and_mouse_sequences_are_not_text(self) -> None:
        keys = self._read_all(b"\x1b[A\x1bOB\x1b[<0;10;5Mx\x1b[2~", 5)
        self.assertEqual(keys, ["UP", "DOWN", "MOUSE", "x", "CSI"])

    def test_closed_input_returns_eof_token(self) -> None:
        read_fd, write_fd = os.pipe()
        os.close(write_fd)
        try:
            self.assertEqual(reader_mod.read_key(read_fd, timeout_ms=20), "EOF")
        finally:
            os.close(read_fd)

    def test_lone_escape_is_not_a_control_token(self) -> None:
        self.assertEqual(self._read_all(b"\x1b\x01", 2), ["ESC", "CTRL"])

    def test_timeout_returns_empty_token(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            self.assertEqual(reader_mod.read_key(read_fd, timeout_ms=5), "")
            self.assertFalse(reader_mod.wait_for_input(read_fd, 0.01))
            os.write(write_fd, b"a")
            self.assertTrue(reader_mod.wait_for_input(read_fd, 0.5))
        finally:
            os.close(read_fd)
            os.close(write_fd)


class EventForKeyTests(unittest.TestCase):
    def test_maps_the_closed_event_set(self) -> None:
        self.assertEqual(event_for_key("ESC"), EscapeKey())
        self.assertEqual(event_for_key("ENTER_CR"), EnterKey())
        self.assertEqual(event_for_key("ENTER_LF"), EnterKey())
        self.assertEqual(event_for_key("BACKSPACE"), BackspaceKey())
        self.assertEqual(event_for_key("x"), CharKey("x"))
        self.assertEqual(event_for_key(" "), CharKey(" "))
        self.assertEqual(event_for_key("ü"), CharKey("ü"))

    def test_other_keys_are_ignored(self) -> None:
        for key in ("", "EOF", "UP", "TAB", "CTRL", "CTRL_C", "MOUSE", "CSI", "\ufffd"):
            with self.subTest(key=key):
                self.assertIsNone(event_for_key(key))

    def test_stray_utf8_byte_is_not_typed(self) -> None:
        reader_mod._PENDING_BYTES.clear()
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, b"\x80")
            key = reader_mod.read_key(read_fd, timeout_ms=20)
        finally:
            os.close(read_fd)
            os.close(write_fd)

        self.assertEqual(key, "\ufffd")
        self.assertIsNone(event_for_key(key))


class KeyComboRegistryTests(unittest.TestCase):
    def test_dispatch_normalizes_keys_and_returns_handler_result(self) -> None:
        registry: KeyComboRegistry[int, int] = KeyComboRegistry(normalize=str.lower)
        registry.register_bindings(
            KeyComboBinding(("j",), lambda value: value + 1),
            KeyComboBinding(("k", "K"), lambda value: value - 1),
        )

        self.assertEqual(registry.dispatch("J", 5), 6)
        self.assertEqual(registry.dispatch("k", 5), 4)
        self.assertIsNone(registry.dispatch("x", 5))

    def test_later_binding_overrides_earlier_one(self) -> None:
        registry: KeyComboRegistry[str, str] = KeyComboRegistry()
        registry.register_binding(KeyComboBinding(("a",), lambda subject: "first"))
        registry.register_binding(KeyComboBinding(("a",), lambda subject: "second"))

        self.assertEqual(registry.dispatch("a", ""), "second")
        self.assertIsNone(registry.dispatch("A", ""))


if __name__ == "__main__":
    unittest.main()
