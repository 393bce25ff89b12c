"""
Data Models for the Drone Route Planner
Uses Pydantic for validation and serialization
"""

from pydantic import BaseModel, Field
from typing import List, Optional, Tuple
from enum import Enum
import uuid

import config


def generate_id() -> str:
    """Short unique identifier for new waypoints"""
    return uuid.uuid4().hex[:8]


class PatternType(str, Enum):
    """Closed set of geometric patterns"""
    CIRCLE = "circle"
    SPIRAL_UP = "spiral-up"
    SPIRAL_DOWN = "spiral-down"
    FIGURE8 = "figure8"
    OVAL = "oval"


class BatteryChemistry(str, Enum):
    """Battery cell chemistry"""
    LIPO = "LiPo"
    LIHV = "LiHV"
    LI_ION = "Li-ion"


class BatteryStatus(str, Enum):
    """Route-level battery risk classification"""
    OK = "ok"
    WARNING = "warning"
    CRITICAL = "critical"
    CRASH = "crash"


class Waypoint(BaseModel):
    """A point the route passes through (lat, lng in degrees, altitude in meters)"""
    id: str = Field(default_factory=generate_id)
    lat: float
    lng: float
    altitude: float = config.DEFAULT_WAYPOINT_ALTITUDE


class SegmentRange(BaseModel):
    """Inclusive index range of dense curve points belonging to one segment"""
    start: int = Field(..., ge=0)
    end: int = Field(..., ge=0)


class CurveData(BaseModel):
    """Dense smoothed curve plus per-segment ranges into it"""
    points: List[Tuple[float, float]] = []  # (lat, lng)
    segment_ranges: List[SegmentRange] = []


class SegmentAnalysis(BaseModel):
    """Energy analysis of one waypoint-to-waypoint segment"""
    distance_3d: float  # meters
    vertical_distance: float  # meters, signed (positive = climb)
    time: float  # seconds
    consumed_capacity: float  # mAh
    average_current: float  # Amps


class RouteAnalysis(BaseModel):
    """Aggregated energy analysis of a whole route"""
    total_distance: float = 0.0  # meters (3D)
    total_time: float = 0.0  # seconds
    total_consumption: float = 0.0  # mAh
    usage_percent: float = 0.0  # of battery capacity
    segments: List[SegmentAnalysis] = []
    battery_status: BatteryStatus = BatteryStatus.OK


class BatteryProfile(BaseModel):
    """Static battery pack description"""
    id: str
    name: str
    chemistry: BatteryChemistry
    capacity_mah: float = Field(..., gt=0)
    nominal_voltage: float = Field(..., gt=0)
    cell_count: int = Field(..., ge=1)
    max_discharge_a: float = Field(..., gt=0)
    weight_g: Optional[float] = None


class PatternInfo(BaseModel):
    """Catalog entry describing a pattern type"""
    type: PatternType
    label: str
    description: str


class GradientStop(BaseModel):
    """Color stop keyed by arc-length fraction along the route"""
    position: float = Field(..., ge=0, le=1)
    color: str  # "#rrggbb"


class RouteSummary(BaseModel):
    """Quick statistics for route side panels"""
    waypoint_count: int
    total_distance: float  # meters, horizontal only
    min_altitude: float
    max_altitude: float
    center_lat: float
    center_lng: float


class SimulationFrame(BaseModel):
    """Virtual drone state at one point of a route playback"""
    drone_id: str
    progress: float  # 0..1 along the dense curve
    lat: float
    lng: float
    altitude: float
    heading: float  # degrees (0 = North, 90 = East)
    segment_index: int
    consumed_capacity: float  # mAh
    battery_remaining_percent: float
    status: str  # "idle", "flying", "finished", "emergency"
    timestamp: float


# ============================================================================
# API REQUEST / RESPONSE MODELS
# ============================================================================

class CurveRequest(BaseModel):
    """Waypoints to smooth into a dense curve"""
    waypoints: List[Waypoint]


class AnalysisRequest(BaseModel):
    """Route plus battery and speed assumptions"""
    waypoints: List[Waypoint]
    battery_id: Optional[str] = None
    battery: Optional[BatteryProfile] = None
    cruise_speed: float = Field(default=config.DEFAULT_CRUISE_SPEED, gt=0)
    climb_speed: float = Field(default=config.DEFAULT_CLIMB_SPEED, gt=0)


class PatternRequest(BaseModel):
    """Bulk waypoint generation request"""
    type: PatternType
    center_lat: float = Field(..., ge=-90, le=90)
    center_lng: float = Field(..., ge=-180, le=180)
    radius: float = config.DEFAULT_PATTERN_RADIUS
    point_count: int = Field(default=config.DEFAULT_PATTERN_POINTS, ge=1)
    start_altitude: float = config.DEFAULT_PATTERN_START_ALTITUDE
    end_altitude: float = config.DEFAULT_PATTERN_END_ALTITUDE


class PatternRegenerateRequest(BaseModel):
    """Re-run a placed pattern with new radius/altitude, keeping waypoint ids"""
    type: PatternType
    center_lat: float = Field(..., ge=-90, le=90)
    center_lng: float = Field(..., ge=-180, le=180)
    waypoint_ids: List[str]
    radius: float = config.DEFAULT_PATTERN_RADIUS
    start_altitude: float = config.DEFAULT_PATTERN_START_ALTITUDE
    end_altitude: float = config.DEFAULT_PATTERN_END_ALTITUDE
    route: List[Waypoint] = []


class RoutePlan(BaseModel):
    """Everything a renderer needs for one waypoint snapshot"""
    waypoints: List[Waypoint]
    curve: CurveData
    analysis: RouteAnalysis
    gradient: List[GradientStop]
    summary: RouteSummary
    battery: BatteryProfile
