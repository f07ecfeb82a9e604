"""
Play the survivor arena in an Arcade window, or watch a random agent

    python -m game.survivor
    python -m game.survivor --hazard-policy wrap --hunter-policy cross
    python -m game.survivor --random-agent --no-render
"""

import argparse
import logging

from .config import GAME_CONFIG, GameConfig, HazardPolicy, HunterPolicy
from .frame_driver import FrameDriver
from .session import JsonHighScoreStore, SessionController
from .survivor_env import run_random_episode

logger = logging.getLogger(__name__)


def build_config(args) -> GameConfig:
    params = dict(GAME_CONFIG)
    params.update({
        "width": args.width,
        "height": args.height,
        "hazard_policy": args.hazard_policy,
        "hunter_policy": args.hunter_policy,
    })
    return GameConfig.from_dict(params)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Survivor arena")
    parser.add_argument(
        "--width",
        type=int,
        default=GAME_CONFIG["width"],
        help=f"Arena width in px (default: {GAME_CONFIG['width']})",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=GAME_CONFIG["height"],
        help=f"Arena height in px (default: {GAME_CONFIG['height']})",
    )
    parser.add_argument(
        "--hazard-policy",
        type=str,
        default=GAME_CONFIG["hazard_policy"],
        choices=[p.value for p in HazardPolicy],
        help="How spikes behave at the arena edge (default: bounce)",
    )
    parser.add_argument(
        "--hunter-policy",
        type=str,
        default=GAME_CONFIG["hunter_policy"],
        choices=[p.value for p in HunterPolicy],
        help="How the hunter moves (default: seek)",
    )
    parser.add_argument(
        "--highscore-file",
        type=str,
        default="highscore.json",
        help="Where the high score is kept (default: highscore.json)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed",
    )
    parser.add_argument(
        "--random-agent",
        action="store_true",
        help="Run one episode with a random agent instead of playing",
    )
    parser.add_argument(
        "--no-render",
        action="store_true",
        help="Disable rendering (random agent only)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Logging level (default: WARNING)",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(),
                        format="%(asctime)s %(name)s %(levelname)s: %(message)s")
    config = build_config(args)
    logger.info("resolved config: %s", config.to_dict())

    if args.random_agent:
        run_random_episode(render=not args.no_render, seed=args.seed, config=config)
        return

    from .window import run_window

    controller = SessionController(config, store=JsonHighScoreStore(args.highscore_file),
                                   seed=args.seed)
    print(f"High score: {controller.high_score:.0f}. Click to start, drag to move.")
    run_window(FrameDriver(controller))


if __name__ == "__main__":
    main()
