"""Tests for the controller event log."""

import logging

from atc_tower.events import EventLog, Severity


class TestEventLog:
    """Bounded history, logging and subscribers"""

    def test_records_timestamp_and_severity(self, clock):
        log = EventLog(clock)
        event = log.warning("Runway 06 in use", callsign="AAL123")

        assert event.timestamp == clock()
        assert event.severity is Severity.WARNING
        assert event.callsign == "AAL123"
        assert event.to_dict()['severity'] == "warning"

    def test_keeps_most_recent_newest_first(self, clock):
        log = EventLog(clock, max_size=20)
        for i in range(25):
            log.info(f"event {i}")

        recent = log.recent()
        assert len(log) == 20
        assert recent[0].message == "event 24"
        assert recent[-1].message == "event 5"
        assert log.total_emitted == 25

    def test_filter_by_severity(self, clock):
        log = EventLog(clock)
        log.info("a")
        log.error("b")
        log.success("c")
        assert [e.message for e in log.recent(Severity.ERROR)] == ["b"]

    def test_forwards_to_logging(self, clock, caplog):
        log = EventLog(clock)
        with caplog.at_level(logging.INFO, logger="atc_tower.events"):
            log.success("AAL123 cleared to land on runway 06")
            log.error("No aircraft selected")

        levels = [(r.levelno, r.getMessage()) for r in caplog.records]
        assert (logging.INFO, "[success] AAL123 cleared to land on runway 06") in levels
        assert (logging.ERROR, "[error] No aircraft selected") in levels

    def test_subscribers(self, clock):
        log = EventLog(clock)
        received = []
        log.subscribe(received.append)

        log.info("first")
        log.unsubscribe(received.append)
        log.info("second")

        assert [e.message for e in received] == ["first"]

    def test_clear(self, clock):
        log = EventLog(clock)
        log.info("x")
        log.clear()
        assert log.recent() == []
