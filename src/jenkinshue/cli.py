"""Command line entry point.

Examples::

    jenkinshue --config jenkinshue.json job 3 nightly
    jenkinshue --interval 60 view 1
    jenkinshue off 3
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence

from jenkinshue.client import JenkinsHue
from jenkinshue.config import JenkinsHueConfig
from jenkinshue.exceptions import JenkinsHueError

_logger = logging.getLogger("jenkinshue")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="jenkinshue", description="Show Jenkins build states on Hue lights")
    parser.add_argument("--config", help="JSON configuration file (default: read JENKINS_*/HUE_* env vars)")
    parser.add_argument("--verbose", "-v", action="store_true")
    parser.add_argument(
        "--interval",
        type=float,
        default=None,
        help="Repeat job/view updates every N seconds",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    job = sub.add_parser("job", help="Show the state of one job")
    job.add_argument("light", help="Hue light id")
    job.add_argument("job", help="Jenkins job name (use 'folder/job' for jobs in folders)")

    view = sub.add_parser("view", help="Show the aggregate state of the configured view")
    view.add_argument("light", help="Hue light id")

    for name, help_text in (
        ("off", "Switch the light to the OFF state"),
        ("blink", "Blink the light once"),
        ("status", "Print whether the light is on"),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("light", help="Hue light id")

    return parser


def load_config(path: str | None) -> JenkinsHueConfig:
    if path:
        return JenkinsHueConfig.from_file(path)
    return JenkinsHueConfig.from_env()


async def _update_once(client: JenkinsHue, args: argparse.Namespace) -> None:
    if args.command == "job":
        push = await client.update_for_job(args.light, args.job)
    else:
        push = await client.update_for_view(args.light)
    if push is not None:
        await push
    _logger.info("Light %s shows %s", args.light, client.get_current_light_state(args.light))


async def run(args: argparse.Namespace) -> int:
    config = load_config(args.config)

    async with JenkinsHue(config) as client:
        if args.command in ("job", "view"):
            if args.interval is None:
                await _update_once(client, args)
                return 0
            while True:
                try:
                    await _update_once(client, args)
                except JenkinsHueError as exc:
                    # Polling goes on; the next tick is the retry.
                    _logger.error("Update failed: %s", exc)
                await asyncio.sleep(args.interval)

        if args.command == "off":
            push = await client.switch_off(args.light)
            if push is not None:
                await push
        elif args.command == "blink":
            await client.blink_light(args.light)
        elif args.command == "status":
            is_on = await client.is_light_on(args.light)
            print(f"light {args.light}: {'on' if is_on else 'off'}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        return asyncio.run(run(args))
    except JenkinsHueError as exc:
        _logger.error("%s", exc)
        return 1
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
