"""
Seat map schemas: floor-plan geometry and per-seat render state
"""

from typing import Optional, List, Literal
from pydantic import BaseModel, ConfigDict, Field
import enum


Shape = Literal["rect", "circle"]


class SeatRenderState(str, enum.Enum):
    BOOKED = "booked"
    SELECTED = "selected"
    DISABLED = "disabled"
    AVAILABLE = "available"


class Seat(BaseModel):
    """A selectable seat. `size` is the radius of a circle or half-width of a rect."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    x: float
    y: float
    shape: Shape = "rect"
    size: float = Field(..., gt=0)


class Table(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    shape: Shape = "rect"
    x: float
    y: float
    width: Optional[float] = Field(None, gt=0)
    height: Optional[float] = Field(None, gt=0)
    radius: Optional[float] = Field(None, gt=0)
    fill: str = "#D4C9AA"


class Overlay(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    src: str
    x: float
    y: float
    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)


class Label(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    text: str
    x: float
    y: float
    font_size: int = Field(14, alias="fontSize", gt=0)
    fill: str = "#000"


class SeatView(BaseModel):
    """How one seat should be drawn"""
    id: str
    state: SeatRenderState
    fill: str
    opacity: float
    interactive: bool


class SeatMapRequest(BaseModel):
    """Seat map description plus the selection to replay onto it"""
    model_config = ConfigDict(populate_by_name=True)

    layout: List[Seat]
    tables: List[Table] = []
    overlays: List[Overlay] = []
    labels: List[Label] = []
    booked_seats: List[str] = Field([], alias="bookedSeats")
    max_seats: Optional[int] = Field(None, alias="maxSeats", ge=0)
    selected: List[str] = []


class SeatMapResponse(BaseModel):
    seats: List[SeatView]
    selected: List[str]
    at_capacity: bool
    status: str
