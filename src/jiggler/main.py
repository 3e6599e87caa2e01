#!/usr/bin/env python3
"""Mouse Jiggler - Entry Point.

Keeps the session from going idle by moving the cursor until the configured
time is up or the quit key is pressed.
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from jiggler.core.config_manager import (
    ConfigManager,
    JigglerConfig,
    MotionStyle,
    build_jiggler_config,
    parse_motion_style,
)
from jiggler.core.errors import ConfigurationError, MotionError
from jiggler.core.jiggler_controller import JigglerController
from jiggler.core.speed_profiles import canonical_speed_label
from jiggler.input.drivers import create_mouse_driver
from jiggler.ui.status_display import StatusDisplay
from jiggler.utils import create_rng


def setup_logging(verbose: bool = False, log_file: str | None = None) -> None:
    """Configure logging.

    Args:
        verbose: Enable debug logging
        log_file: Optional file to log to
    """
    level = logging.DEBUG if verbose else logging.INFO
    format_str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=handlers,
    )


def non_negative_int(value: str) -> int:
    """argparse type for unsigned integers."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid unsigned integer: {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {value!r}")
    return number


def positive_int(value: str) -> int:
    """argparse type for integers greater than zero."""
    number = non_negative_int(value)
    if number == 0:
        raise argparse.ArgumentTypeError("must be greater than zero")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser.

    -h selects human-like motion, so help lives on --help only.
    """
    parser = argparse.ArgumentParser(
        prog="mouse-jiggler",
        description="Move the mouse cursor to keep the session from going idle.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
        epilog="""
STYLES:
  straight        random jumps across the screen (default)
  human-like      smooth Bezier curves between random points (-h)
  fixed-interval  one random jump every -f seconds, no quit key

CONTROLS:
  Q - quit (configurable with --quit-key)
        """,
    )

    parser.add_argument(
        "-t", "--time",
        type=non_negative_int,
        default=None,
        metavar="MINUTES",
        help="Jiggle time in minutes (default: 10)",
    )

    parser.add_argument(
        "-s", "--speed",
        type=str,
        default=None,
        help="Jiggle speed - slow (s), medium (m), high (h) (default: medium)",
    )

    parser.add_argument(
        "-h", "--human-like",
        action="store_true",
        help="Jiggle human-like (using bezier curve)",
    )

    parser.add_argument(
        "-f", "--frequency",
        type=positive_int,
        default=None,
        metavar="SECONDS",
        help="Jiggle every SECONDS seconds; selects the fixed-interval style (default: 10)",
    )

    parser.add_argument(
        "--style",
        choices=[style.value for style in MotionStyle],
        default=None,
        help="Motion style (default: from config, straight)",
    )

    parser.add_argument(
        "-q", "--quit-key",
        type=str,
        default=None,
        help="Key that stops the run early (default: q)",
    )

    parser.add_argument(
        "-c", "--config",
        type=str,
        default=None,
        help="Path to config file (default: bundled default_config.yaml)",
    )

    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed the random generator for reproducible paths",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose/debug logging",
    )

    parser.add_argument(
        "-l", "--log-file",
        type=str,
        default=None,
        help="Log to file in addition to stdout",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate configuration without moving the mouse",
    )

    parser.add_argument(
        "--status-ui",
        action="store_true",
        help="Show a live Rich status panel",
    )

    parser.add_argument(
        "--help",
        action="help",
        help="Show this help message and exit",
    )

    return parser


def resolve_style(args: argparse.Namespace) -> Optional[MotionStyle]:
    """Work out the motion style from --style, -h and -f.

    Returns:
        Chosen style, or None to fall back to the config file

    Raises:
        ConfigurationError: If the flags contradict each other
    """
    style = parse_motion_style(args.style) if args.style else None

    if args.human_like:
        if style not in (None, MotionStyle.HUMAN_LIKE):
            raise ConfigurationError(f"-h/--human-like conflicts with --style {style.value}")
        style = MotionStyle.HUMAN_LIKE

    if args.frequency is not None:
        if style is None:
            style = MotionStyle.FIXED_INTERVAL
        elif style != MotionStyle.FIXED_INTERVAL:
            raise ConfigurationError(
                f"-f/--frequency only applies to the fixed-interval style, not {style.value}"
            )

    return style


def create_quit_listener(quit_key: str):
    """Create the pynput quit key listener.

    Imported lazily: pynput needs a display at import time.

    Raises:
        ConfigurationError: If the key name is not supported
    """
    from jiggler.safety.quit_listener import QuitListener

    try:
        return QuitListener(quit_key=quit_key)
    except ValueError as e:
        raise ConfigurationError(str(e)) from e


def _configuration_error(parser: argparse.ArgumentParser, error: Exception) -> int:
    """Report a configuration error with usage text."""
    parser.print_usage(sys.stderr)
    print(f"{parser.prog}: error: {error}", file=sys.stderr)
    return 2


def _log_config(logger: logging.Logger, config: JigglerConfig) -> None:
    logger.info("Duration: %d minute(s)", config.duration_minutes)
    logger.info("Style: %s", config.style.value)
    logger.info("Speed: %s %s", config.speed_label, config.speed_profile)
    if config.style == MotionStyle.FIXED_INTERVAL:
        logger.info("Frequency: every %d second(s)", config.frequency_seconds)
    if config.screen_width:
        logger.info("Screen: %dx%d", config.screen_width, config.screen_height)
    else:
        logger.info("Screen: unknown")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point.

    Returns:
        Exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose, args.log_file)

    logger = logging.getLogger(__name__)

    try:
        style = resolve_style(args)
        config_manager = ConfigManager(args.config)
        if args.speed is not None:
            canonical_speed_label(args.speed, config_manager.speed_profiles)
    except ConfigurationError as e:
        return _configuration_error(parser, e)

    rng = create_rng(args.seed)

    try:
        driver = create_mouse_driver(rng=rng)
        screen_size = driver.screen_size
    except Exception as e:
        if not args.dry_run:
            logger.error("Could not initialize mouse control: %s", e)
            return 1
        # Dry run can still check everything that does not need a display
        logger.warning("Display not available, skipping screen and quit key checks: %s", e)
        driver = screen_size = None

    try:
        config = build_jiggler_config(
            config_manager,
            screen_size=screen_size,
            duration_minutes=args.time,
            speed=args.speed,
            style=style,
            frequency_seconds=args.frequency,
            quit_key=args.quit_key,
        )
        quit_listener = None
        if driver is not None and config.style != MotionStyle.FIXED_INTERVAL:
            quit_listener = create_quit_listener(config.quit_key)
    except ConfigurationError as e:
        return _configuration_error(parser, e)
    except Exception as e:
        logger.error("Could not initialize quit key listener: %s", e)
        return 1

    # Dry run - just validate config
    if args.dry_run:
        logger.info("Dry run mode - configuration valid")
        _log_config(logger, config)
        return 0

    logger.info("=" * 50)
    logger.info("Mouse Jiggler")
    if quit_listener is not None:
        logger.info("Press %s at any time to quit", config.quit_key.upper())
    else:
        logger.info("Press Ctrl+C to quit")
    logger.info("=" * 50)
    _log_config(logger, config)

    controller = JigglerController(config, driver, rng=rng, quit_listener=quit_listener)

    status_display = None
    try:
        if args.status_ui:
            status_display = StatusDisplay(
                controller.get_status,
                quit_key=config.quit_key if quit_listener is not None else None,
            )
            status_display.start()

        controller.run()
        return 0

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 0

    except MotionError as e:
        logger.error("Fatal motion error: %s", e)
        return 1

    except Exception as e:
        logger.exception("Unexpected error: %s", e)
        return 1

    finally:
        if status_display:
            status_display.stop()


if __name__ == "__main__":
    sys.exit(main())
