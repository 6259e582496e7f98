import argparse
import logging
from dataclasses import replace

from config.settings import DrillConfigError, WindowConfig, load_drill_config
from drill.app import DrillApp


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Timed two-digit addition/subtraction drill")
    parser.add_argument("--questions", type=int, default=None, help="Questions per session (default 10)")
    parser.add_argument("--seconds", type=int, default=None, help="Seconds per question, 1..120 (default 10)")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible question batches")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    return parser


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        drill = load_drill_config()
        if args.questions is not None:
            drill = replace(drill, question_count=args.questions)
        if args.seconds is not None:
            drill = drill.with_seconds(args.seconds)
        if args.seed is not None:
            drill = replace(drill, seed=args.seed)
        drill.validate()
    except DrillConfigError as exc:
        parser.error(str(exc))

    DrillApp(WindowConfig(), drill).run()


if __name__ == "__main__":
    main()
