"""
Unit tests for the seat map selector
"""

import pytest
from itertools import cycle, islice

from productive_space.schemas.seat import Label, SeatRenderState, Table
from productive_space.services.seat_map import SeatMapSelector


class Recorder:
    """Collects every selection reported by the selector"""

    def __init__(self):
        self.calls = []

    def __call__(self, ids):
        self.calls.append(sorted(ids))


@pytest.mark.unit
class TestToggle:
    """Selection changes through toggle"""

    def test_select_and_deselect(self, seat_layout):
        recorder = Recorder()
        selector = SeatMapSelector(seat_layout, on_selection_change=recorder)

        assert selector.toggle("A1") is True
        assert selector.selected_ids == ["A1"]
        assert selector.toggle("A1") is True
        assert selector.selected_ids == []
        assert recorder.calls == [["A1"], []]

    def test_booked_seat_is_never_selected(self, seat_layout):
        recorder = Recorder()
        selector = SeatMapSelector(seat_layout, booked_seats=["A2"], on_selection_change=recorder)

        assert selector.toggle("A2") is False
        assert selector.selected_ids == []
        assert recorder.calls == []

    def test_unknown_seat_is_ignored(self, seat_layout):
        recorder = Recorder()
        selector = SeatMapSelector(seat_layout, on_selection_change=recorder)

        assert selector.toggle("Z9") is False
        assert selector.selected_ids == []
        assert recorder.calls == []

    def test_capacity_rejects_extra_seat_silently(self, seat_layout):
        recorder = Recorder()
        selector = SeatMapSelector(seat_layout, max_seats=2, on_selection_change=recorder)

        selector.toggle("A1")
        selector.toggle("A2")
        assert selector.is_at_capacity is True

        assert selector.toggle("A3") is False
        assert sorted(selector.selected_ids) == ["A1", "A2"]
        assert len(recorder.calls) == 2

    def test_deselect_allowed_at_capacity(self, seat_layout):
        selector = SeatMapSelector(seat_layout, max_seats=2)
        selector.toggle("A1")
        selector.toggle("A2")

        assert selector.toggle("A1") is True
        assert selector.is_at_capacity is False
        assert selector.toggle("A3") is True
        assert sorted(selector.selected_ids) == ["A2", "A3"]

    def test_unbounded_by_default(self, seat_layout):
        selector = SeatMapSelector(seat_layout)
        for seat in seat_layout:
            selector.toggle(seat.id)

        assert selector.selected_count == len(seat_layout)
        assert selector.is_at_capacity is False

    def test_zero_max_allows_nothing(self, seat_layout):
        selector = SeatMapSelector(seat_layout, max_seats=0)
        assert selector.toggle("A1") is False
        assert selector.is_at_capacity is True

    def test_callback_receives_full_selection(self, seat_layout):
        recorder = Recorder()
        selector = SeatMapSelector(seat_layout, on_selection_change=recorder)

        selector.toggle("B1")
        selector.toggle("A3")
        selector.toggle("B2")

        assert recorder.calls[-1] == ["A3", "B1", "B2"]

    def test_callback_snapshot_is_not_live(self, seat_layout):
        snapshots = []
        selector = SeatMapSelector(seat_layout, on_selection_change=snapshots.append)

        selector.toggle("A1")
        selector.toggle("A2")

        assert snapshots[0] == ["A1"]

    @pytest.mark.parametrize("max_seats", [1, 2, 3])
    def test_selection_never_exceeds_max(self, seat_layout, max_seats):
        selector = SeatMapSelector(seat_layout, booked_seats=["B3"], max_seats=max_seats)
        ids = [seat.id for seat in seat_layout] + ["A1", "B1"]

        for seat_id in islice(cycle(ids), 40):
            selector.toggle(seat_id)
            assert selector.selected_count <= max_seats
            assert "B3" not in selector.selected_ids


@pytest.mark.unit
class TestRenderState:
    """Per-seat render state and SVG output"""

    def test_state_priority(self, seat_layout):
        selector = SeatMapSelector(seat_layout, booked_seats=["A1"], max_seats=1)
        selector.toggle("A2")

        assert selector.seat_state("A1") == SeatRenderState.BOOKED
        assert selector.seat_state("A2") == SeatRenderState.SELECTED
        assert selector.seat_state("A3") == SeatRenderState.DISABLED

    def test_available_when_below_capacity(self, seat_layout):
        selector = SeatMapSelector(seat_layout, max_seats=3)
        selector.toggle("A2")

        assert selector.seat_state("A3") == SeatRenderState.AVAILABLE

    def test_views_mark_blocked_seats_non_interactive(self, seat_layout):
        selector = SeatMapSelector(seat_layout, booked_seats=["A1"], max_seats=1)
        selector.toggle("A2")
        views = {view.id: view for view in selector.seat_views()}

        assert views["A1"].interactive is False
        assert views["A1"].fill == "#FF0000"
        assert views["A2"].interactive is True
        assert views["A2"].opacity == 1.0
        assert views["A3"].interactive is False
        assert views["A3"].opacity == 0.5
        assert len({view.fill for view in views.values()}) == 3

    def test_status_text(self, seat_layout):
        selector = SeatMapSelector(seat_layout, max_seats=4)
        selector.toggle("A1")
        assert selector.status_text() == "Selected: 1 of 4 seats"
        assert SeatMapSelector(seat_layout).status_text() == "Selected: 0 of unlimited seats"

    def test_render_svg(self, seat_layout):
        selector = SeatMapSelector(
            seat_layout,
            tables=[Table(id="t1", shape="rect", x=80, y=100, width=100, height=30)],
            labels=[Label(id="l1", text="Quiet <zone>", x=200, y=20)],
            booked_seats=["B1"],
        )
        selector.toggle("A1")
        svg = selector.render_svg()

        assert svg.startswith("<svg")
        assert svg.count("data-seat-id=") == len(seat_layout)
        assert 'data-seat-id="A1" data-state="selected"' in svg
        assert 'data-seat-id="B1" data-state="booked"' in svg
        assert 'x="40.0" y="40.0" width="20.0"' in svg
        assert "Quiet &lt;zone&gt;" in svg
