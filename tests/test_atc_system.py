"""Tests for controller command parsing and dispatch."""

import pytest

from atc_tower.aircraft import AircraftStatus, WeightClass
from atc_tower.airport import AirportLayout, Point
from atc_tower.atc_system import (
    ClearLanding, ClearTakeoff, ClearTaxi, CommandError, Hold, InstructionType,
    WaitAirspace, available_commands, parse_command,
)
from atc_tower.events import Severity


class TestParseCommand:
    """Typed command construction from UI input"""

    def test_parses_every_instruction(self):
        layout = AirportLayout()
        assert parse_command("runway", "06", layout) == ClearLanding("06")
        assert parse_command("runway-takeoff", "24", layout) == ClearTakeoff("24")
        assert parse_command("taxi", "C1", layout) == ClearTaxi("C1")
        assert parse_command("hold", None, layout) == Hold()
        assert parse_command("wait-airspace", "ignored", layout) == WaitAirspace()

    def test_unknown_command(self):
        with pytest.raises(CommandError, match="Unknown command"):
            parse_command("climb", "10", AirportLayout())

    def test_unknown_runway(self):
        with pytest.raises(CommandError, match="Unknown runway"):
            parse_command("runway", "99", AirportLayout())

    def test_waiting_point_is_not_a_runway(self):
        with pytest.raises(CommandError):
            parse_command("runway-takeoff", "C1", AirportLayout())

    def test_unknown_waiting_point(self):
        with pytest.raises(CommandError, match="Unknown waiting point"):
            parse_command("taxi", "06", AirportLayout())

    def test_instruction_type_on_variants(self):
        assert ClearLanding("06").instruction_type is InstructionType.CLEARED_TO_LAND
        assert ClearTaxi("C1").instruction_type is InstructionType.TAXI


class TestAvailableCommands:
    """Command groups offered per flight phase"""

    def test_airborne(self, make_aircraft):
        commands = available_commands(make_aircraft(is_in_air=True))
        assert InstructionType.CLEARED_TO_LAND in commands
        assert InstructionType.TAXI not in commands
        assert InstructionType.HOLD in commands

    def test_on_ground(self, make_aircraft):
        commands = available_commands(make_aircraft(is_in_air=False, status=AircraftStatus.ON_GROUND))
        assert InstructionType.CLEARED_FOR_TAKEOFF in commands
        assert InstructionType.TAXI in commands
        assert InstructionType.CLEARED_TO_LAND not in commands
        assert InstructionType.WAIT_AIRSPACE in commands


class TestDispatcher:
    """Applying commands through the engine"""

    def _select(self, engine, aircraft):
        engine.add_aircraft(aircraft)
        engine.select_aircraft(aircraft.callsign)
        return aircraft

    def test_clear_to_land(self, engine, clock, make_aircraft):
        aircraft = self._select(engine, make_aircraft(x=500, y=500, status=AircraftStatus.APPROACHING))

        result = engine.apply_command("runway", "06")

        assert result.accepted
        assert result.instruction_type is InstructionType.CLEARED_TO_LAND
        assert aircraft.status is AircraftStatus.APPROACHING
        assert aircraft.destination == Point(934, 629)
        assert aircraft.assigned_runway == '06'
        assert aircraft.is_in_air
        assert engine.scheduler.expiry('06') == clock() + 60.0
        assert engine.events.recent()[0].severity is Severity.SUCCESS

    def test_clear_for_takeoff(self, engine, clock, make_aircraft):
        aircraft = self._select(engine, make_aircraft(
            weight_class=WeightClass.HEAVY, status=AircraftStatus.READY_FOR_TAKEOFF,
            is_in_air=False, assigned_waiting_point='C1'
        ))

        assert engine.apply_command("runway-takeoff", "06")

        assert aircraft.status is AircraftStatus.TAKING_OFF
        assert aircraft.destination == Point(1034, 629)
        assert aircraft.assigned_runway == '06'
        assert aircraft.assigned_waiting_point is None
        assert engine.scheduler.expiry('06') == clock() + 180.0

    def test_taxi(self, engine, make_aircraft):
        aircraft = self._select(engine, make_aircraft(is_in_air=False, status=AircraftStatus.ON_GROUND))

        assert engine.apply_command("taxi", "A2")

        assert aircraft.status is AircraftStatus.TAXIING
        assert aircraft.destination == Point(1082, 1111)
        assert aircraft.assigned_waiting_point == 'A2'
        assert aircraft.taxi_deadline is None

    @pytest.mark.parametrize("command", ["hold", "wait-airspace"])
    def test_hold_stops_aircraft(self, engine, make_aircraft, command):
        aircraft = self._select(engine, make_aircraft(status=AircraftStatus.APPROACHING))
        engine.apply_command("runway", "07")

        result = engine.apply_command(command)

        assert result.accepted
        assert aircraft.status is AircraftStatus.WAITING
        assert aircraft.destination is None
        assert aircraft.assigned_runway is None
        assert engine.events.recent()[0].severity is Severity.WARNING
        # the reservation is not released
        assert not engine.scheduler.is_free('07')

    def test_busy_runway_rejected(self, engine, clock, make_aircraft):
        first = self._select(engine, make_aircraft("AAL123", status=AircraftStatus.APPROACHING))
        engine.apply_command("runway", "06")

        clock.advance(30)
        second = self._select(engine, make_aircraft(
            "DAL456", status=AircraftStatus.READY_FOR_TAKEOFF, is_in_air=False
        ))
        result = engine.apply_command("runway-takeoff", "06")

        assert not result.accepted
        assert "clear in 30s" in result.reason
        assert second.assigned_runway is None
        assert second.status is AircraftStatus.READY_FOR_TAKEOFF
        assert second.destination is None
        assert first.assigned_runway == '06'

        event = engine.events.recent()[0]
        assert event.severity is Severity.WARNING
        assert event.message == "DAL456 - Runway 06 in use, clear in 30s"

    def test_busy_message_rounds_up(self, engine, clock, make_aircraft):
        self._select(engine, make_aircraft("AAL123"))
        engine.apply_command("runway", "25")
        clock.advance(10.5)
        self._select(engine, make_aircraft("DAL456"))
        result = engine.apply_command("runway", "25")
        assert "clear in 50s" in result.reason

    def test_no_selection(self, engine):
        result = engine.apply_command("hold")
        assert not result.accepted
        assert result.reason == "No aircraft selected"
        assert engine.events.recent()[0].severity is Severity.ERROR

    def test_stale_selection(self, engine, make_aircraft):
        aircraft = self._select(engine, make_aircraft())
        engine.aircraft.remove(aircraft)

        result = engine.apply_command("runway", "06")

        assert not result.accepted
        assert engine.selected_callsign is None
        assert engine.scheduler.is_free('06')

    def test_unknown_target_is_no_op(self, engine, make_aircraft):
        aircraft = self._select(engine, make_aircraft(status=AircraftStatus.APPROACHING))

        result = engine.apply_command("runway", "99")

        assert not result.accepted
        assert aircraft.destination is None
        assert aircraft.assigned_runway is None
        assert engine.events.recent()[0].severity is Severity.ERROR

    def test_unknown_command_is_no_op(self, engine, make_aircraft):
        aircraft = self._select(engine, make_aircraft(status=AircraftStatus.APPROACHING))
        result = engine.apply_command("barrel-roll", "06")
        assert not result.accepted
        assert aircraft.status is AircraftStatus.APPROACHING

    def test_typed_command_by_callsign(self, engine, make_aircraft):
        engine.add_aircraft(make_aircraft("AAL123"))
        result = engine.issue(ClearLanding("24"), callsign="AAL123")
        assert result.accepted
        assert engine.get_aircraft("AAL123").assigned_runway == '24'


class TestInstructionHistory:
    """History and statistics"""

    def test_statistics(self, engine, make_aircraft):
        engine.add_aircraft(make_aircraft("AAL123"))
        engine.add_aircraft(make_aircraft("DAL456"))

        engine.select_aircraft("AAL123")
        engine.apply_command("runway", "06")
        engine.select_aircraft("DAL456")
        engine.apply_command("runway", "06")
        engine.apply_command("hold")

        stats = engine.dispatcher.get_statistics()
        assert stats['total_instructions'] == 3
        assert stats['accepted'] == 2
        assert stats['rejected'] == 1
        assert stats['by_type'] == {'runway': 2, 'hold': 1}

        history = engine.dispatcher.get_instructions_for_aircraft("DAL456")
        assert [inst.accepted for inst in history] == [False, True]
        assert history[0].to_dict()['parameters'] == {'runway': '06'}
