"""
Seat map endpoints
"""

from fastapi import APIRouter
from fastapi.responses import Response

from productive_space.schemas.seat import SeatMapRequest, SeatMapResponse
from productive_space.services.seat_map import SeatMapSelector

router = APIRouter()


def build_selector(seat_map: SeatMapRequest) -> SeatMapSelector:
    """Rebuild a selector and replay the client's selection onto it"""
    selector = SeatMapSelector(
        layout=seat_map.layout,
        tables=seat_map.tables,
        overlays=seat_map.overlays,
        labels=seat_map.labels,
        booked_seats=seat_map.booked_seats,
        max_seats=seat_map.max_seats,
    )
    for seat_id in dict.fromkeys(seat_map.selected):
        selector.toggle(seat_id)
    return selector


@router.post("/view", response_model=SeatMapResponse)
async def view_seat_map(seat_map: SeatMapRequest) -> SeatMapResponse:
    """
    Per-seat render state for a layout and selection
    """
    selector = build_selector(seat_map)
    return SeatMapResponse(
        seats=selector.seat_views(),
        selected=selector.selected_ids,
        at_capacity=selector.is_at_capacity,
        status=selector.status_text()
    )


@router.post("/svg")
async def render_seat_map(seat_map: SeatMapRequest) -> Response:
    """
    Seat map drawn as SVG
    """
    selector = build_selector(seat_map)
    return Response(content=selector.render_svg(), media_type="image/svg+xml")
