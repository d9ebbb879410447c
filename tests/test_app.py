"""Tests for the desktop widget's countdown tick."""

import unittest
from unittest.mock import MagicMock

try:
    import ramazon_app
except ImportError:  # tkinter is not installed
    ramazon_app = None


@unittest.skipIf(ramazon_app is None, "tkinter is not available")
class TestTick(unittest.TestCase):
    def _widget(self):
        widget = MagicMock()
        widget.ctx.roll_over.return_value = False
        widget.ctx.tracker.record.date = "2026-03-01"
        widget._shown_date = "2026-03-01"
        return widget

    def test_failing_tick_is_rescheduled(self):
        widget = self._widget()
        widget.ctx.clock.window.side_effect = ValueError("invalid literal for int()")

        with self.assertLogs("ramazon_app", level="ERROR"):
            ramazon_app.RamazonApp._tick(widget)

        widget.root.after.assert_called_once_with(ramazon_app.REFRESH_MS, widget._tick)
        self.assertIs(widget._tick_id, widget.root.after.return_value)

    def test_new_day_cancels_reminders_and_redraws_progress(self):
        widget = self._widget()
        widget.ctx.roll_over.return_value = True
        widget.ctx.tracker.record.date = "2026-03-02"
        widget.ctx.clock.window.return_value = None
        widget._reminder_timers = []

        ramazon_app.RamazonApp._tick(widget)

        widget._refresh_progress.assert_called_once_with()
        widget.lbl_countdown.config.assert_called_once_with(text="00:00:00")
        widget.root.after.assert_called_once_with(ramazon_app.REFRESH_MS, widget._tick)


if __name__ == "__main__":
    unittest.main()
