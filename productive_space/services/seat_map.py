"""
Seat map selector
Tracks which seats of a floor plan a user has picked and renders the plan
"""

from typing import Callable, Dict, Iterable, List, Optional
import logging
from jinja2 import Environment

from productive_space.schemas.seat import (
    Seat,
    Table,
    Overlay,
    Label,
    SeatRenderState,
    SeatView,
)

logger = logging.getLogger(__name__)

SelectionCallback = Callable[[List[str]], None]

STATE_FILLS = {
    SeatRenderState.BOOKED: "#FF0000",
    SeatRenderState.SELECTED: "#f97316",
    SeatRenderState.DISABLED: "#e5e7eb",
    SeatRenderState.AVAILABLE: "#10b981",
}

_svg_env = Environment(autoescape=True, trim_blocks=True, lstrip_blocks=True)

SEAT_MAP_TEMPLATE = _svg_env.from_string("""\
<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 400 600">
{% for img in overlays %}
  <image href="{{ img.src }}" x="{{ img.x }}" y="{{ img.y }}" width="{{ img.width }}" height="{{ img.height }}"/>
{% endfor %}
{% for tbl in tables %}
{% if tbl.shape == "circle" %}
  <circle cx="{{ tbl.x }}" cy="{{ tbl.y }}" r="{{ tbl.radius or 0 }}" fill="{{ tbl.fill }}"/>
{% else %}
  <rect x="{{ tbl.x - (tbl.width or 0) / 2 }}" y="{{ tbl.y - (tbl.height or 0) / 2 }}" width="{{ tbl.width or 0 }}" height="{{ tbl.height or 0 }}" rx="4" fill="{{ tbl.fill }}"/>
{% endif %}
{% endfor %}
{% for seat, view in seats %}
{% if seat.shape == "circle" %}
  <circle data-seat-id="{{ seat.id }}" data-state="{{ view.state.value }}" cx="{{ seat.x }}" cy="{{ seat.y }}" r="{{ seat.size }}" fill="{{ view.fill }}" stroke="#0003" stroke-width="1" opacity="{{ view.opacity }}"/>
{% else %}
  <rect data-seat-id="{{ seat.id }}" data-state="{{ view.state.value }}" x="{{ seat.x - seat.size }}" y="{{ seat.y - seat.size }}" width="{{ seat.size * 2 }}" height="{{ seat.size * 2 }}" rx="4" fill="{{ view.fill }}" stroke="#0003" stroke-width="1" opacity="{{ view.opacity }}"/>
{% endif %}
{% endfor %}
{% for lbl in labels %}
  <text x="{{ lbl.x }}" y="{{ lbl.y }}" font-size="{{ lbl.font_size }}" fill="{{ lbl.fill }}" text-anchor="middle" alignment-baseline="middle">{{ lbl.text }}</text>
{% endfor %}
</svg>
""")


class SeatMapSelector:
    """
    Interactive selection over a fixed seat layout.

    The selection set belongs to this instance only. Every state-changing
    toggle replaces the set and then reports the new selection to
    ``on_selection_change``; toggles that change nothing stay silent.
    """

    def __init__(
        self,
        layout: Iterable[Seat],
        tables: Iterable[Table] = (),
        overlays: Iterable[Overlay] = (),
        labels: Iterable[Label] = (),
        booked_seats: Iterable[str] = (),
        max_seats: Optional[int] = None,
        on_selection_change: Optional[SelectionCallback] = None,
    ):
        self.layout: List[Seat] = list(layout)
        self.tables: List[Table] = list(tables)
        self.overlays: List[Overlay] = list(overlays)
        self.labels: List[Label] = list(labels)
        self.booked_seats = frozenset(booked_seats)
        self.max_seats = max_seats
        self.on_selection_change = on_selection_change

        self._seats_by_id: Dict[str, Seat] = {seat.id: seat for seat in self.layout}
        self._selected: frozenset = frozenset()

    @property
    def selected_ids(self) -> List[str]:
        return list(self._selected)

    @property
    def selected_count(self) -> int:
        return len(self._selected)

    @property
    def is_at_capacity(self) -> bool:
        if self.max_seats is None:
            return False
        return len(self._selected) >= self.max_seats

    def is_selected(self, seat_id: str) -> bool:
        return seat_id in self._selected

    def toggle(self, seat_id: str) -> bool:
        """Select or deselect a seat. Returns True when the selection changed."""
        if seat_id not in self._seats_by_id:
            logger.warning(f"Ignoring toggle for unknown seat {seat_id}")
            return False
        if seat_id in self.booked_seats:
            return False

        if seat_id in self._selected:
            updated = self._selected - {seat_id}
        elif self.is_at_capacity:
            return False
        else:
            updated = self._selected | {seat_id}

        self._selected = updated
        if self.on_selection_change is not None:
            self.on_selection_change(list(updated))
        return True

    def seat_state(self, seat_id: str) -> SeatRenderState:
        if seat_id in self.booked_seats:
            return SeatRenderState.BOOKED
        if seat_id in self._selected:
            return SeatRenderState.SELECTED
        if self.is_at_capacity:
            return SeatRenderState.DISABLED
        return SeatRenderState.AVAILABLE

    def seat_view(self, seat_id: str) -> SeatView:
        state = self.seat_state(seat_id)
        blocked = state in (SeatRenderState.BOOKED, SeatRenderState.DISABLED)
        return SeatView(
            id=seat_id,
            state=state,
            fill=STATE_FILLS[state],
            opacity=0.5 if blocked else 1.0,
            interactive=not blocked,
        )

    def seat_views(self) -> List[SeatView]:
        return [self.seat_view(seat.id) for seat in self.layout]

    def status_text(self) -> str:
        limit = "unlimited" if self.max_seats is None else self.max_seats
        return f"Selected: {len(self._selected)} of {limit} seats"

    def render_svg(self) -> str:
        """Render the floor plan as an SVG document"""
        return SEAT_MAP_TEMPLATE.render(
            overlays=self.overlays,
            tables=self.tables,
            seats=[(seat, self.seat_view(seat.id)) for seat in self.layout],
            labels=self.labels,
        )
