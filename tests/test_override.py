"""Tests for manual appearance override."""

from unittest.mock import Mock

from appearance_switch.core.enums import AppearanceEvent, AppearanceMode
from appearance_switch.services.appearance import AppearanceError, AppearanceMonitor
from appearance_switch.services.schedule import ManualOverride


class TestManualOverride:
    def test_toggle_flips_state(self, appearance, scheduler):
        override = ManualOverride(appearance, scheduler)

        override.toggle()
        scheduler.run_pending()
        assert appearance.is_dark is True

        override.toggle()
        scheduler.run_pending()
        assert appearance.is_dark is False
        assert appearance.requests == [True, False]

    def test_work_is_marshalled_to_scheduler(self, appearance, scheduler):
        override = ManualOverride(appearance, scheduler)

        override.set_dark(True)

        assert appearance.requests == []
        scheduler.run_pending()
        assert appearance.requests == [True]

    def test_set_dark_skips_when_already_equal(self, appearance, scheduler):
        appearance.is_dark = True
        override = ManualOverride(appearance, scheduler)

        override.set_dark(True)
        scheduler.run_pending()

        assert appearance.requests == []

    def test_set_mode(self, appearance, scheduler):
        override = ManualOverride(appearance, scheduler)

        override.set_mode(AppearanceMode.DARK)
        scheduler.run_pending()

        assert appearance.requests == [True]

    def test_toggle_with_unreadable_state_does_nothing(self, appearance, scheduler):
        appearance.read_error = AppearanceError("unavailable")
        override = ManualOverride(appearance, scheduler)

        override.toggle()
        scheduler.run_pending()

        assert appearance.requests == []

    def test_set_dark_with_unreadable_state_still_requests(self, appearance, scheduler):
        appearance.read_error = AppearanceError("unavailable")
        override = ManualOverride(appearance, scheduler)

        override.set_dark(False)
        scheduler.run_pending()

        assert appearance.requests == [False]

    def test_completion_publishes_event(self, appearance, scheduler, event_bus):
        listener = Mock()
        event_bus.subscribe(AppearanceEvent.APPEARANCE_CHANGED, listener)
        override = ManualOverride(appearance, scheduler, event_bus=event_bus)

        override.toggle()
        scheduler.advance(50)

        listener.assert_called_once_with()

    def test_completion_without_event_bus(self, appearance, scheduler):
        override = ManualOverride(appearance, scheduler)

        override.toggle()
        scheduler.run_pending()

        assert appearance.is_dark is True

    def test_toggle_with_monitor_notifies_once(self, appearance, scheduler, event_bus):
        listener = Mock()
        event_bus.subscribe(AppearanceEvent.APPEARANCE_CHANGED, listener)
        monitor = AppearanceMonitor(appearance, scheduler, event_bus, interval_ms=1000)
        override = ManualOverride(appearance, scheduler, event_bus=event_bus, monitor=monitor)
        monitor.start()
        scheduler.run_pending()

        override.toggle()
        scheduler.advance(5_000)

        assert appearance.requests == [True]
        assert listener.call_count == 1
