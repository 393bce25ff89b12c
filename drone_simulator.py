"""
Route Playback Simulator
Flies a virtual drone along a planned route and reports position and
remaining battery, fetching the plan from the route planner API
"""

import asyncio
import aiohttp
import logging
import math
import time
from typing import List, Optional
from models import RoutePlan, SimulationFrame, Waypoint, PatternType
import config
import curves
import energy
import geodesy
import patterns

logger = logging.getLogger(__name__)


def _heading_at(points: List[tuple], idx: int) -> float:
    """
    Direction of travel leaving dense point idx

    Segment boundaries repeat the shared sample, so equal neighbours are
    skipped. Looks ahead first, then back when nothing distinct lies ahead.

    Returns:
        Heading in degrees, 0.0 when every point coincides
    """
    origin = points[idx]
    for ahead in points[idx + 1:]:
        if geodesy.haversine_distance(*origin, *ahead) > 1e-9:
            return geodesy.calculate_heading(*origin, *ahead)
    for behind in reversed(points[:idx]):
        if geodesy.haversine_distance(*behind, *origin) > 1e-9:
            return geodesy.calculate_heading(*behind, *origin)
    return 0.0


class VirtualDrone:
    """Simulates a single drone following a smoothed route"""

    def __init__(self, drone_id: str, plan: RoutePlan):
        self.drone_id = drone_id
        self.plan = plan
        self.progress = 0.0
        self.status = "idle"
        self.consumed_capacity = 0.0
        self.low_battery_reported = False

    @property
    def battery_remaining_percent(self) -> float:
        capacity = self.plan.battery.capacity_mah
        return max(0.0, 100.0 - self.consumed_capacity / capacity * 100)

    def start(self):
        """Begin (or restart) the flight from the first curve point"""
        self.progress = 0.0
        self.consumed_capacity = 0.0
        self.low_battery_reported = False
        self.status = "flying" if len(self.plan.curve.points) >= 2 else "finished"
        logger.info("[%s] Route started: %d waypoints, %d curve points",
                    self.drone_id, len(self.plan.waypoints), len(self.plan.curve.points))

    def update(self, dt: float, speed_multiplier: float = 1.0):
        """
        Advance the drone along the route

        Args:
            dt: Time delta in seconds
            speed_multiplier: Playback speed (1.0 = real time)
        """
        if self.status not in ("flying", "emergency"):
            return

        self.progress = min(1.0, self.progress + dt * speed_multiplier * config.SIMULATION_PROGRESS_RATE)
        self.consumed_capacity = energy.consumed_at_progress(
            self.plan.analysis, self.plan.curve, self.progress
        )

        remaining = self.battery_remaining_percent
        if remaining < config.LOW_BATTERY_WARNING and not self.low_battery_reported:
            logger.warning("[%s] LOW BATTERY WARNING: %.1f%%", self.drone_id, remaining)
            self.low_battery_reported = True
        if remaining < config.LOW_BATTERY_EMERGENCY:
            self.status = "emergency"

        if self.progress >= 1.0:
            self.status = "finished"
            logger.info("[%s] Route complete: %.1f mAh used (%.1f%% remaining)",
                        self.drone_id, self.consumed_capacity, remaining)

    def position(self):
        """
        Interpolated position on the dense curve

        Returns:
            (lat, lng, altitude, heading, segment_index)
        """
        points = self.plan.curve.points
        if not points:
            return (0.0, 0.0, 0.0, 0.0, 0)
        if len(points) == 1:
            lat, lng = points[0]
            return (lat, lng, curves.interpolate_altitude(self.plan.waypoints, 0.0), 0.0, 0)

        raw_index = self.progress * (len(points) - 1)
        idx = min(int(math.floor(raw_index)), len(points) - 1)
        next_idx = min(idx + 1, len(points) - 1)
        t = raw_index - idx

        lat1, lng1 = points[idx]
        lat2, lng2 = points[next_idx]
        lat = lat1 + (lat2 - lat1) * t
        lng = lng1 + (lng2 - lng1) * t
        altitude = curves.interpolate_altitude(self.plan.waypoints, self.progress)

        heading = _heading_at(points, idx)

        segment_index = 0
        for i, r in enumerate(self.plan.curve.segment_ranges):
            if r.start <= idx <= r.end:
                segment_index = i
                break

        return (lat, lng, altitude, heading, segment_index)

    def get_frame(self) -> SimulationFrame:
        """Current simulation state"""
        lat, lng, altitude, heading, segment_index = self.position()
        return SimulationFrame(
            drone_id=self.drone_id,
            progress=self.progress,
            lat=lat,
            lng=lng,
            altitude=altitude,
            heading=heading,
            segment_index=segment_index,
            consumed_capacity=self.consumed_capacity,
            battery_remaining_percent=self.battery_remaining_percent,
            status=self.status,
            timestamp=time.time()
        )


class RoutePlayback:
    """Fetches a route plan from the API and plays it back"""

    def __init__(self, api_url: str, speed_multiplier: float = 1.0):
        self.api_url = api_url
        self.speed_multiplier = speed_multiplier
        self.running = False

    async def fetch_plan(self, session: aiohttp.ClientSession, waypoints: List[Waypoint],
                         battery_id: str,
                         cruise_speed: float = config.DEFAULT_CRUISE_SPEED,
                         climb_speed: float = config.DEFAULT_CLIMB_SPEED) -> Optional[RoutePlan]:
        """Request the full route plan, None when the service refuses"""
        request_data = {
            "waypoints": [wp.model_dump() for wp in waypoints],
            "battery_id": battery_id,
            "cruise_speed": cruise_speed,
            "climb_speed": climb_speed,
        }

        try:
            async with session.post(
                f"{self.api_url}/api/route/plan",
                json=request_data,
                timeout=aiohttp.ClientTimeout(total=5)
            ) as response:
                if response.status != 200:
                    error = await response.text()
                    logger.error("Route plan request failed (%d): %s", response.status, error)
                    return None
                return RoutePlan(**(await response.json()))
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error("Error requesting route plan: %s", e)
            return None

    async def play(self, waypoints: List[Waypoint], battery_id: str,
                   drone_id: str = "drone_001") -> Optional[SimulationFrame]:
        """
        Fly the route at TELEMETRY_UPDATE_RATE until it finishes

        Returns:
            Final frame, or None if no plan could be fetched
        """
        async with aiohttp.ClientSession() as session:
            plan = await self.fetch_plan(session, waypoints, battery_id)
        if plan is None:
            return None

        logger.info("Plan received: %.0f m, %.0f s, %.1f mAh (%s)",
                    plan.analysis.total_distance, plan.analysis.total_time,
                    plan.analysis.total_consumption, plan.analysis.battery_status.value)

        drone = VirtualDrone(drone_id, plan)
        drone.start()
        self.running = True
        update_interval = 1.0 / config.TELEMETRY_UPDATE_RATE

        while self.running and drone.status in ("flying", "emergency"):
            loop_start = time.time()
            drone.update(update_interval, self.speed_multiplier)

            frame = drone.get_frame()
            logger.info("[%s] %5.1f%% (%.6f, %.6f, %.0fm) battery %.1f%%",
                        frame.drone_id, frame.progress * 100, frame.lat, frame.lng,
                        frame.altitude, frame.battery_remaining_percent)

            elapsed = time.time() - loop_start
            await asyncio.sleep(max(0, update_interval - elapsed))

        return drone.get_frame()

    def stop(self):
        """Stop the playback"""
        self.running = False
        logger.info("Stopping route playback...")


async def main():
    """Play a demo circle over the configured API"""
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)

    api_url = f"http://localhost:{config.API_PORT}"
    waypoints = patterns.generate_pattern(PatternType.CIRCLE, 40.4168, -3.7038)

    playback = RoutePlayback(api_url, speed_multiplier=4.0)
    try:
        await playback.play(waypoints, config.BATTERY_PROFILES[0]['id'])
    except KeyboardInterrupt:
        playback.stop()


if __name__ == "__main__":
    asyncio.run(main())
