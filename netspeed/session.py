import json
import logging
import threading
from collections import OrderedDict
from pathlib import Path
from typing import Callable, Protocol

from netspeed import glyphs
from netspeed.data.net_speed import AggregateTotals, NetSpeed, RateState
from netspeed.util import conversion, network, rate, wtime

logger = logging.getLogger(__name__)

Callback = Callable[[], bool]


class Scheduler(Protocol):
    def schedule(self, interval: float, callback: Callback) -> object: ...

    def cancel(self, handle: object) -> None: ...


class DisplaySink(Protocol):
    def set_text(self, update: NetSpeed) -> None: ...


def network_icon(update: NetSpeed) -> str:
    if update.output_class == "error":
        return glyphs.md_network_off
    return glyphs.md_network


class _Timer:
    def __init__(self, interval: float, callback: Callback):
        self.interval = interval
        self.callback = callback
        self.stopped = threading.Event()
        self.thread = threading.Thread(target=self.run, daemon=True)

    def run(self):
        # wait() returns True once cancelled, so the loop exits between ticks
        while not self.stopped.wait(self.interval):
            try:
                if not self.callback():
                    break
            except Exception:
                logger.exception("[run] - tick failed, waiting for the next one")


class ThreadScheduler:
    """
    Call a function every interval seconds on a background thread. Calls run
    one after another, so a slow tick delays the next one instead of
    overlapping it.
    """

    def schedule(self, interval: float, callback: Callback) -> _Timer:
        timer = _Timer(interval=interval, callback=callback)
        timer.thread.start()
        return timer

    def cancel(self, handle: object) -> None:
        if not isinstance(handle, _Timer):
            return
        handle.stopped.set()
        if handle.thread is not threading.current_thread():
            handle.thread.join()


class JsonSink:
    """
    Print one line of waybar custom module JSON per update.
    """

    def __init__(self, icon: bool = False):
        self.icon = icon

    def set_text(self, update: NetSpeed) -> None:
        text = update.text
        if self.icon:
            text = f"{network_icon(update)}{glyphs.icon_spacer}{text}"
        print(
            json.dumps(
                {
                    "text": text,
                    "class": update.output_class,
                    "tooltip": update.tooltip,
                }
            ),
            flush=True,
        )


class PlainSink:
    def set_text(self, update: NetSpeed) -> None:
        print(update.text, flush=True)


def generate_tooltip(update: NetSpeed, precision: str = "fixed") -> str:
    tooltip: list[str] = []
    tooltip_od: OrderedDict[str, str] = OrderedDict()

    if update.speed is not None:
        tooltip_od["Download"] = conversion.format_speed(
            update.speed.down, precision=precision
        )
        tooltip_od["Upload"] = conversion.format_speed(
            update.speed.up, precision=precision
        )

    tooltip_od["Interfaces"] = (
        ", ".join(update.interfaces) if update.interfaces else "none"
    )

    max_key_length = 0
    for key in tooltip_od.keys():
        max_key_length = len(key) if len(key) > max_key_length else max_key_length

    for key, value in tooltip_od.items():
        tooltip.append(f"{key:{max_key_length}} : {value}")

    if update.updated:
        tooltip.append("")
        tooltip.append(f"Last updated {update.updated}")

    return "\n".join(tooltip)


class MonitorSession:
    """
    Sample the counters once per interval and push the rendered throughput to
    the display sink.

    The previous totals live in this session only; every start() begins with
    an unset RateState so the first tick never reports a spurious burst.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        sink: DisplaySink,
        interval: float = 1,
        source: Path = network.PROC_NET_DEV,
        precision: str = "fixed",
        reader: Callable[[Path], AggregateTotals] = network.read_totals,
    ):
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        if precision not in conversion.valid_precisions():
            raise ValueError(f'invalid precision "{precision}"')

        self.scheduler = scheduler
        self.sink = sink
        self.interval = interval
        self.source = source
        self.precision = precision
        self.reader = reader
        self.state: RateState | None = None
        self._handle: object | None = None

    @property
    def running(self) -> bool:
        return self._handle is not None

    def start(self):
        if self.running:
            logger.debug("[start] - already running")
            return

        logger.info(f"[start] - sampling {self.source} every {self.interval}s")
        self.state = RateState()
        self.sink.set_text(NetSpeed(text="-", output_class="loading"))
        self._handle = self.scheduler.schedule(self.interval, self.tick)

    def stop(self):
        if not self.running:
            return

        logger.info("[stop] - stopping")
        self.scheduler.cancel(self._handle)
        self._handle = None
        self.state = None

    def restart(self):
        self.stop()
        self.start()

    def sample(self) -> NetSpeed:
        """
        Take one sample, update the rate state and render the result without
        touching the sink.
        """
        totals = self.reader(self.source)
        speed, self.state = rate.compute_rate(
            self.state or RateState(), totals, self.interval
        )

        update = NetSpeed(
            text=conversion.to_speed_string(speed, precision=self.precision),
            output_class="success" if totals.interfaces else "error",
            speed=speed,
            interfaces=totals.interfaces,
            updated=wtime.get_human_timestamp(),
        )
        update.tooltip = generate_tooltip(update, precision=self.precision)
        return update

    def tick(self) -> bool:
        update = self.sample()
        logger.info(update.text)
        self.sink.set_text(update)
        return True

