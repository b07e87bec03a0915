"""
run_client.py
-------------
Drives an AIServerInterface from the synthetic EMG source at a fixed rate
and prints the smoothed gesture, the way the host control loop would poll it.

Run (with the mock server up):
    emg-pointer --rate 200 --duration 10
"""

import argparse
import asyncio
import time

from ..acquisition.sources import SyntheticEMGSource
from ..ai_server.config_manager import load_config
from ..ai_server.interface import AIServerInterface
from ..utils.logging_cfg import configure_logging, get_logger

log = get_logger(__name__)

STATUS_INTERVAL = 0.5  # seconds between printed status lines


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Stream synthetic EMG to the AI server and print the smoothed gesture"
    )
    parser.add_argument("--config", help="Path to an ai_server_config.json")
    parser.add_argument("--url", help="Base URL of the AI server (overrides config)")
    parser.add_argument("--rate", type=float, default=200.0, help="Samples per second")
    parser.add_argument("--duration", type=float, default=10.0, help="Seconds to run")
    parser.add_argument("--batch-size", type=int, help="Samples per window (overrides config)")
    parser.add_argument("--reset-after", type=float,
                        help="Clear the server session after this many seconds")
    parser.add_argument("--seed", type=int, help="Seed for the synthetic source")
    parser.add_argument("--log-file", help="Also write DEBUG logs to this file")
    return parser


def _report_reset(task: asyncio.Task):
    if task.cancelled():
        return
    print(f"Session reset {'succeeded' if task.result() else 'failed'}")


def schedule_reset(iface: AIServerInterface) -> asyncio.Task:
    """Clear the session in the background; the tick loop keeps producing."""
    task = asyncio.get_running_loop().create_task(iface.clear_session())
    task.add_done_callback(_report_reset)
    return task


async def run(args) -> int:
    config = load_config(args.config, base_url=args.url, batch_size=args.batch_size,
                         log_file=args.log_file)
    source = SyntheticEMGSource(seed=args.seed)
    period = 1.0 / args.rate

    async with AIServerInterface(config, source=source) as iface:
        loop = asyncio.get_running_loop()
        start = loop.time()
        next_tick = start
        next_status = start
        reset_pending = args.reset_after is not None
        reset_task = None

        while loop.time() - start < args.duration:
            iface.tick()

            now = loop.time()
            if reset_pending and now - start >= args.reset_after:
                reset_pending = False
                reset_task = schedule_reset(iface)

            if now >= next_status:
                state = iface.state
                print(f"[{time.strftime('%H:%M:%S')}] gesture={state.label:<10} "
                      f"conf={state.confidence:<10} buffering={state.is_buffering}")
                next_status = now + STATUS_INTERVAL

            next_tick += period
            await asyncio.sleep(max(0.0, next_tick - loop.time()))

        if reset_task is not None:
            await reset_task

        log.info("Done: %d windows sent, %d dropped",
                 iface.client.windows_sent, iface.client.windows_dropped)
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    if args.rate <= 0:
        raise SystemExit("--rate must be positive")
    configure_logging()

    try:
        return asyncio.run(run(args))
    except KeyboardInterrupt:
        log.info("KeyboardInterrupt received; exiting.")
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
