import logging
import signal
import sys
import threading
import time
from pathlib import Path

import click
from netspeed import session as ns
from netspeed.util import conversion, log, network, system

context_settings = dict(help_option_names=["-h", "--help"])
condition = threading.Condition()
needs_restart = False
needs_exit = False

logger = logging.getLogger("netspeed")


def restart_handler(_signum: int, _frame: object | None):
    global needs_restart
    logger.info("[restart_handler] - received SIGHUP - resetting the rate state")
    with condition:
        needs_restart = True
        condition.notify()


def exit_handler(signum: int, _frame: object | None):
    global needs_exit
    logger.info(f"[exit_handler] - received {signal.Signals(signum).name} - exiting")
    with condition:
        needs_exit = True
        condition.notify()


def configure_logging(debug: bool = False) -> bool:
    cache_dir = system.get_cache_directory()
    if cache_dir is None:
        return False

    log.configure(
        debug=debug, name="netspeed", logfile=cache_dir / "network-speed.log"
    )
    return True


def run_test(monitor: ns.MonitorSession, interval: int):
    first = monitor.sample()
    logger.debug(f"[run_test] - baseline {first.text}")
    time.sleep(interval)
    update = monitor.sample()
    click.echo(update.text)
    click.echo(update.output_class)
    click.echo(update.tooltip)


def wait_for_signals(monitor: ns.MonitorSession):
    global needs_restart, needs_exit

    while True:
        with condition:
            while not (needs_restart or needs_exit):
                _ = condition.wait()

            restart = needs_restart
            stop = needs_exit
            needs_restart = False
            needs_exit = False

        if stop:
            monitor.stop()
            return

        if restart:
            monitor.restart()


@click.command(
    name="run",
    help="Show aggregate network throughput from /proc/net/dev",
    context_settings=context_settings,
)
@click.option(
    "--interval",
    type=click.IntRange(min=1),
    default=1,
    show_default=True,
    help="The update interval (in seconds)",
)
@click.option(
    "-s",
    "--source",
    type=click.Path(dir_okay=False, path_type=Path),
    default=network.PROC_NET_DEV,
    show_default=True,
    help="The counter source to read",
)
@click.option(
    "-p",
    "--precision",
    type=click.Choice(conversion.valid_precisions()),
    default="fixed",
    show_default=True,
    help="Always two decimal places (fixed) or fewer for larger values (adaptive)",
)
@click.option(
    "-o",
    "--output",
    type=click.Choice(["json", "plain"]),
    default="json",
    show_default=True,
    help="Waybar JSON or plain text output",
)
@click.option(
    "--icon", default=False, is_flag=True, help="Prefix the JSON text with an icon"
)
@click.option(
    "-t", "--test", default=False, is_flag=True, help="Print the output and exit"
)
@click.option("-d", "--debug", default=False, is_flag=True, help="Enable debug logging")
def main(
    interval: int,
    source: Path,
    precision: str,
    output: str,
    icon: bool,
    test: bool,
    debug: bool,
):
    if not configure_logging(debug=debug):
        sys.exit(1)

    sink: ns.DisplaySink = (
        ns.JsonSink(icon=icon) if output == "json" else ns.PlainSink()
    )
    monitor = ns.MonitorSession(
        scheduler=ns.ThreadScheduler(),
        sink=sink,
        interval=interval,
        source=source,
        precision=precision,
    )

    if test:
        run_test(monitor=monitor, interval=interval)
        return

    logger.info("[main] - entering")

    _ = signal.signal(signal.SIGHUP, restart_handler)
    _ = signal.signal(signal.SIGINT, exit_handler)
    _ = signal.signal(signal.SIGTERM, exit_handler)

    monitor.start()
    wait_for_signals(monitor)


if __name__ == "__main__":
    main()
