"""
Main entry point for polygon weather coloring.

Loads a workspace of polygons and data sources, runs one refresh cycle for a
time or time range, and logs the resulting colors.
"""

import json
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from .core import Config, DateUtils, setup_logger, constants
from .api import OpenMeteoAPI
from .models import DataSource, Polygon
from .services import AppState, RefreshOrchestrator


class PolygonWeatherApp:
    """Main application wiring configuration, API client, state and orchestrator."""

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize application.

        Args:
            config_file: Path to configuration file
        """
        self.config = Config(config_file)

        self.logger = setup_logger(log_file=self.config.log_file, log_level=self.config.log_level)
        self.logger.info("=" * 60)
        self.logger.info("Polygon Weather Coloring")
        self.logger.info("=" * 60)
        self.logger.info(f"Configuration: {self.config}")

        self.date_utils = DateUtils(self.config.timezone, logger=self.logger)
        self.api_client = OpenMeteoAPI(
            base_url=self.config.api_base_url,
            timeout=self.config.api_timeout,
            max_retries=self.config.api_max_retries,
            verify_ssl=self.config.api_verify_ssl,
            logger=self.logger
        )
        self.state = AppState(
            current_time=self.date_utils.now(),
            clock=self.date_utils.now,
            logger=self.logger
        )
        self.orchestrator = RefreshOrchestrator(
            state=self.state,
            weather_api=self.api_client,
            debounce_seconds=self.config.debounce_seconds,
            date_utils=self.date_utils,
            logger=self.logger
        )

    def load_workspace(self, path: str) -> None:
        """
        Load data sources and polygons from a JSON workspace file.

        Expected format:
        {
            "data_sources": [{"id": ..., "name": ..., "field": ..., "color_rules": [...]}],
            "polygons": [{"id": ..., "name": ..., "coordinates": [[lat, lon], ...],
                          "data_source": ...}]
        }

        Data sources in the file replace built-in ones with the same id.
        """
        workspace_path = Path(path)
        if not workspace_path.exists():
            raise FileNotFoundError(f"Workspace file not found: {path}")

        with open(workspace_path, "r", encoding="utf-8") as f:
            workspace = json.load(f)

        for source_data in workspace.get("data_sources", []):
            self.state.add_data_source(DataSource.from_dict(source_data))
        for polygon_data in workspace.get("polygons", []):
            self.state.add_polygon(Polygon.from_dict(polygon_data))

        self.logger.info(
            f"Loaded {len(self.state.polygons)} polygons and "
            f"{len(self.state.data_sources)} data sources from {path}"
        )

    def run(
        self,
        at: Optional[datetime] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None
    ) -> bool:
        """
        Run one refresh cycle.

        Args:
            at: Time cursor for a point-in-time query (defaults to now)
            start: Range start; together with end switches to range mode
            end: Range end

        Returns:
            True if the cycle completed
        """
        try:
            self.state.set_current_time(at or self.date_utils.now())
            if start is not None and end is not None:
                self.state.set_time_range(start, end)
                self.state.set_range_mode(True)
            else:
                self.state.set_range_mode(False)

            # Cancels the debounced refresh the changes above scheduled
            ok = self.orchestrator.refresh_now()
            self.log_summary()
            return ok

        finally:
            self.orchestrator.close()
            self.api_client.close()

    def log_summary(self) -> None:
        """Log the color and value of each polygon."""
        values = {value.polygon_id: value.value for value in self.state.polygon_values}
        for polygon in self.state.polygons:
            value = values.get(polygon.id)
            shown = f"{value:.1f}" if value is not None else "n/a"
            self.logger.info(f"{polygon.name}: {shown} {polygon.color}")


def _parse_time(value: Optional[str]) -> Optional[datetime]:
    if value is None:
        return None
    return datetime.strptime(value, constants.CLI_TIME_FORMAT)


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Color polygons by hourly weather values"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to configuration file"
    )
    parser.add_argument(
        "--workspace",
        type=str,
        required=True,
        help="Path to workspace JSON with polygons and data sources"
    )
    parser.add_argument(
        "--time",
        type=str,
        default=None,
        help="Query time (YYYY-MM-DDTHH:MM). Default: now"
    )
    parser.add_argument("--start", type=str, default=None, help="Range start (YYYY-MM-DDTHH:MM)")
    parser.add_argument("--end", type=str, default=None, help="Range end (YYYY-MM-DDTHH:MM)")

    args = parser.parse_args()

    try:
        at = _parse_time(args.time)
        start = _parse_time(args.start)
        end = _parse_time(args.end)
    except ValueError as e:
        print(f"Invalid time: {e}. Use YYYY-MM-DDTHH:MM")
        sys.exit(1)

    if (start is None) != (end is None):
        print("--start and --end must be given together")
        sys.exit(1)

    try:
        app = PolygonWeatherApp(config_file=args.config)
        app.load_workspace(args.workspace)
        ok = app.run(at=at, start=start, end=end)
    except Exception as e:
        print(f"Application failed: {e}")
        sys.exit(1)

    sys.exit(0 if ok else 2)


if __name__ == "__main__":
    main()
