"""Main entry point for the Sage Slime simulation.

This module provides command-line options to run the simulation:
- Windowed mode (default): pygame window with mouse and keyboard input
- Headless mode: no window, stats only, faster than realtime for testing
"""

import argparse
import logging
import sys

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s:%(name)s:%(message)s",
)

logger = logging.getLogger(__name__)


def run_windowed(seed=None) -> int:
    """Run the interactive pygame window."""
    from rendering.app import run_app

    if not run_app(seed=seed):
        logger.error("No display available; try --headless")
        return 1
    return 0


def run_headless(max_frames: int, stats_interval: int, seed=None) -> int:
    """Run the simulation in headless mode (no visualization).

    Args:
        max_frames: Maximum number of frames to simulate
        stats_interval: Log stats every N frames
        seed: Optional random seed for deterministic behavior
    """
    from slime.config.simulation_config import SimulationConfig
    from slime.simulation import SlimeSimulation

    config = SimulationConfig()
    simulation = SlimeSimulation(config, seed=seed)
    simulation.run_headless(max_frames=max_frames, stats_interval=stats_interval)
    return 0


def main():
    """Parse command-line arguments and run the appropriate mode."""
    parser = argparse.ArgumentParser(
        description="Sage Slime - interactive creature simulation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Open the window (default)
  python main.py

  # Quick headless run (1000 frames)
  python main.py --headless --max-frames 1000

  # Reproducible headless run with verbose state transitions
  python main.py --headless --max-frames 10000 --seed 42 --debug
        """,
    )

    parser.add_argument(
        "--headless", action="store_true", help="Run in headless mode (no window, stats only)"
    )

    parser.add_argument(
        "--max-frames",
        type=int,
        default=3600,
        help="Maximum frames to simulate in headless mode (default: 3600)",
    )

    parser.add_argument(
        "--stats-interval",
        type=int,
        default=300,
        help="Log stats every N frames in headless mode (default: 300)",
    )

    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for deterministic behavior (optional)"
    )

    parser.add_argument(
        "--debug", action="store_true", help="Log every behavior transition"
    )

    args = parser.parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.headless:
        logger.info("Starting headless simulation...")
        logger.info(
            "Configuration: %d frames, stats every %d frames", args.max_frames, args.stats_interval
        )
        sys.exit(run_headless(args.max_frames, args.stats_interval, seed=args.seed))
    else:
        sys.exit(run_windowed(seed=args.seed))


if __name__ == "__main__":
    main()
