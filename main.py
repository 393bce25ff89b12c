"""
Drone Route Planner - FastAPI Backend
Stateless service exposing curve smoothing, pattern synthesis, energy analysis
and severity gradients to the route editor and renderers
"""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from typing import List
import logging
import time

from models import (
    Waypoint, CurveData, RouteAnalysis, BatteryProfile, BatteryStatus, PatternInfo,
    GradientStop, RoutePlan, CurveRequest, AnalysisRequest,
    PatternRequest, PatternRegenerateRequest
)
import config
import curves
import patterns
import energy
import severity

logger = logging.getLogger(__name__)

# ============================================================================
# FASTAPI SETUP
# ============================================================================

app = FastAPI(
    title="Drone Route Planner API",
    description="Route smoothing, flight patterns and battery risk analysis",
    version="1.0.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ============================================================================
# BATTERY CATALOG
# ============================================================================

battery_profiles: List[BatteryProfile] = [
    BatteryProfile(**profile) for profile in config.BATTERY_PROFILES
]


def resolve_battery(request: AnalysisRequest) -> BatteryProfile:
    """
    Pick the battery for an analysis request

    An inline profile wins over a catalog id.
    """
    if request.battery is not None:
        return request.battery

    if request.battery_id is None:
        raise HTTPException(400, "Either battery or battery_id is required")

    for profile in battery_profiles:
        if profile.id == request.battery_id:
            return profile

    raise HTTPException(404, f"Battery profile not found: {request.battery_id}")

# ============================================================================
# API ENDPOINTS
# ============================================================================

@app.get("/api/health")
async def health_check():
    """Service health check"""
    return {
        "status": "operational",
        "timestamp": time.time(),
        "battery_profiles": len(battery_profiles)
    }

@app.get("/api/batteries", response_model=List[BatteryProfile])
async def get_batteries():
    """Built-in battery profiles"""
    return battery_profiles

@app.get("/api/patterns", response_model=List[PatternInfo])
async def get_patterns():
    """Pattern catalog for the pattern toolbar"""
    return list(patterns.PATTERN_CATALOG.values())

@app.post("/api/curve", response_model=CurveData)
async def create_curve(request: CurveRequest):
    """Smooth waypoints into a dense curve with per-segment ranges"""
    return curves.generate_curve(request.waypoints)

@app.post("/api/patterns/generate", response_model=List[Waypoint])
async def generate_pattern(request: PatternRequest):
    """Bulk-generate waypoints for a geometric pattern"""
    waypoints = patterns.generate_pattern(
        request.type,
        request.center_lat,
        request.center_lng,
        radius=request.radius,
        point_count=request.point_count,
        start_altitude=request.start_altitude,
        end_altitude=request.end_altitude
    )
    logger.info("Generated %s pattern: %d waypoints at (%.5f, %.5f)",
                request.type.value, len(waypoints), request.center_lat, request.center_lng)
    return waypoints

@app.post("/api/patterns/regenerate", response_model=List[Waypoint])
async def regenerate_pattern(request: PatternRegenerateRequest):
    """
    Regenerate a placed pattern with a new radius or altitude range

    Returns the route with the pattern's waypoints replaced in place, ids kept.
    """
    if not request.waypoint_ids:
        raise HTTPException(400, "waypoint_ids must not be empty")

    regenerated = patterns.regenerate_pattern(
        request.type,
        request.center_lat,
        request.center_lng,
        request.waypoint_ids,
        radius=request.radius,
        start_altitude=request.start_altitude,
        end_altitude=request.end_altitude
    )

    if not request.route:
        return regenerated
    return patterns.apply_regeneration(request.route, regenerated)

@app.post("/api/route/analyze", response_model=RouteAnalysis)
async def analyze_route(request: AnalysisRequest):
    """Per-segment energy analysis and battery status"""
    battery = resolve_battery(request)
    return energy.analyze_route(
        request.waypoints, battery, request.cruise_speed, request.climb_speed
    )

@app.post("/api/route/gradient", response_model=List[GradientStop])
async def route_gradient(request: AnalysisRequest):
    """Severity color stops along the smoothed route"""
    battery = resolve_battery(request)
    analysis = energy.analyze_route(
        request.waypoints, battery, request.cruise_speed, request.climb_speed
    )
    curve = curves.generate_curve(request.waypoints)
    return severity.build_gradient_stops(
        [s.average_current for s in analysis.segments], curve
    )

@app.post("/api/route/plan", response_model=RoutePlan)
async def plan_route(request: AnalysisRequest):
    """Curve, analysis, gradient and summary for one waypoint snapshot"""
    battery = resolve_battery(request)
    plan = build_route_plan(request.waypoints, battery,
                            request.cruise_speed, request.climb_speed)

    if plan.analysis.battery_status != BatteryStatus.OK:
        logger.warning("Route uses %.1f%% of %s (%s)",
                       plan.analysis.usage_percent, battery.name,
                       plan.analysis.battery_status.value)
    return plan

# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def build_route_plan(waypoints: List[Waypoint], battery: BatteryProfile,
                     cruise_speed: float = config.DEFAULT_CRUISE_SPEED,
                     climb_speed: float = config.DEFAULT_CLIMB_SPEED) -> RoutePlan:
    """
    Compute every derived view of a route in one pass
    """
    curve = curves.generate_curve(waypoints)
    analysis = energy.analyze_route(waypoints, battery, cruise_speed, climb_speed)
    gradient = severity.build_gradient_stops(
        [s.average_current for s in analysis.segments], curve
    )

    return RoutePlan(
        waypoints=list(waypoints),
        curve=curve,
        analysis=analysis,
        gradient=gradient,
        summary=energy.summarize_route(waypoints),
        battery=battery
    )

# ============================================================================
# LIFECYCLE
# ============================================================================

@app.on_event("startup")
async def startup_event():
    """Log service configuration on startup"""
    logger.info("Drone Route Planner starting...")
    logger.info("Battery profiles: %s", ", ".join(p.name for p in battery_profiles))
    logger.info("Default speeds: cruise %.1f m/s, climb %.1f m/s",
                config.DEFAULT_CRUISE_SPEED, config.DEFAULT_CLIMB_SPEED)

@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Drone Route Planner shutting down...")

# ============================================================================
# MAIN
# ============================================================================

if __name__ == "__main__":
    import uvicorn
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
    uvicorn.run(app, host=config.API_HOST, port=config.API_PORT)
