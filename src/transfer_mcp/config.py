from __future__ import annotations

from transfer_mcp.domain.entities import RouteConfig, ThresholdConfig
from transfer_mcp.domain.value_objects import Direction

STEP_MINUTES = 10

# Commute between 北新竹 (TRA) and 台北 (THSR 1000) transferring at 新竹 (1194).
ROUTES: dict[Direction, RouteConfig] = {
    Direction.TRA2THSR: RouteConfig(
        start_station="1190-北新竹",
        end_station="1000",
        transfer_station="1194",
    ),
    Direction.THSR2TRA: RouteConfig(
        start_station="1000",
        end_station="1190-北新竹",
        transfer_station="1194",
    ),
}

THRESHOLDS: dict[Direction, ThresholdConfig] = {
    Direction.TRA2THSR: ThresholdConfig(
        depart_early_minutes=15,
        arrive_early_minutes=20,
        last_arrival_minutes=9 * 60,  # must arrive by 09:00
        step_minutes=STEP_MINUTES,
    ),
    Direction.THSR2TRA: ThresholdConfig(
        depart_early_minutes=30,
        arrive_early_minutes=-1,
        last_arrival_minutes=-1,
        step_minutes=STEP_MINUTES,
    ),
}
