"""Tests for the airport layout registry."""

from atc_tower.airport import AirportLayout, Point, DIVERSION_POINT


class TestAirportLayout:
    """Runway and waiting point lookups"""

    def test_runway_positions(self):
        layout = AirportLayout()
        assert layout.runway_position('06') == Point(1034, 629)
        assert layout.runway_position('24') == Point(1891, 629)
        assert layout.runway_position('07') == Point(1946, 1144)
        assert layout.runway_position('25') == Point(1035, 1144)

    def test_approach_points_sit_short_of_threshold(self):
        layout = AirportLayout()
        assert layout.approach_point('06') == Point(934, 629)
        assert layout.approach_point('24') == Point(1991, 629)
        assert layout.approach_point('07') == Point(1846, 1144)
        assert layout.approach_point('25') == Point(935, 1144)

    def test_opposite_runways(self):
        layout = AirportLayout()
        assert layout.opposite_runway('06') == '24'
        assert layout.opposite_runway('24') == '06'
        assert layout.opposite_runway('07') == '25'
        assert layout.opposite_runway('25') == '07'

    def test_waiting_points(self):
        layout = AirportLayout()
        assert sorted(layout.waiting_point_codes) == ['A1', 'A2', 'A7', 'A8', 'C1', 'C2', 'C7', 'C8']
        assert layout.waiting_point_position('C1') == Point(1031, 670)
        assert layout.waiting_point_position('A8') == Point(1950, 1111)
        assert layout.get_waiting_point('C7').code == 'C7'
        assert layout.get_runway('25').opposite == '07'

    def test_unknown_codes_return_none(self):
        layout = AirportLayout()
        assert layout.runway_position('99') is None
        assert layout.approach_point('99') is None
        assert layout.opposite_runway('99') is None
        assert layout.waiting_point_position('Z9') is None
        assert layout.runway_position(None) is None
        assert layout.get_runway('99') is None
        assert layout.get_waiting_point('Z9') is None
        assert layout.get_waiting_point(None) is None
        assert not layout.is_runway('C1')
        assert not layout.is_waiting_point('06')

    def test_get_state_tables(self):
        state = AirportLayout().get_state()
        assert state['runways']['06']['x'] == 1034
        assert state['runways']['06']['opposite'] == '24'
        assert state['waiting_points']['C2'] == {'x': 1082, 'y': 670}

    def test_diversion_point_off_map(self):
        assert DIVERSION_POINT.x < 0 and DIVERSION_POINT.y < 0


class TestPoint:
    """Point arithmetic"""

    def test_distance(self):
        assert Point(0, 0).distance_to(Point(3, 4)) == 5.0

    def test_offset(self):
        assert Point(10, 10).offset(-100, -100) == Point(-90, -90)
