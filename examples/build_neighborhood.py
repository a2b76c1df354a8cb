#!/usr/bin/env python3
"""Example script to build the path-time neighborhood of a scenario.

This script loads a scenario, builds the neighborhood and reports the
envelope of every relevant obstacle.
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from loguru import logger
import logging
from path_time_planning.simulation import load_scenario
from path_time_planning.visualization import save_path_time_graph


def main():
    """Main function."""
    parser = argparse.ArgumentParser(
        description='Build the path-time neighborhood of a scenario'
    )
    parser.add_argument(
        '--scenario',
        type=str,
        default='scenarios/scenario_01.yaml',
        help='Path to scenario file'
    )
    parser.add_argument(
        '--horizon',
        type=float,
        default=None,
        help='Sampling horizon in seconds (overrides scenario)'
    )
    parser.add_argument(
        '--plot',
        type=str,
        default=None,
        help='Save the path-time graph to this image file'
    )
    parser.add_argument(
        '--log-level',
        type=str,
        default='INFO',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level'
    )

    args = parser.parse_args()

    # Configure logging
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
        level=args.log_level
    )
    logging.getLogger('matplotlib').setLevel(logging.WARNING)

    logger.info(f"Loading scenario from {args.scenario}")
    scenario = load_scenario(args.scenario)

    if args.horizon is not None:
        scenario.config.planned_trajectory_time = args.horizon
        logger.info(f"Overriding sampling horizon to: {args.horizon}s")

    neighborhood = scenario.build_neighborhood()

    for obstacle in scenario.obstacles:
        found, envelope = neighborhood.get_path_time_obstacle(obstacle.id)
        if not found:
            logger.info(f"  {obstacle.id}: no occupancy constraint")
            continue
        data = envelope.to_dict()
        logger.info(
            f"  {obstacle.id}: s=[{data['path_lower']:.1f}, {data['path_upper']:.1f}]m, "
            f"t=[{data['time_lower']:.1f}, {data['time_upper']:.1f}]s, "
            f"v_entry={data['entry_velocity']:.2f}m/s, v_exit={data['exit_velocity']:.2f}m/s"
        )

    if args.plot is not None:
        save_path_time_graph(neighborhood, args.plot)


if __name__ == '__main__':
    main()
