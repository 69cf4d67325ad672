import logging
import re
from pathlib import Path

from dacite import Config, from_dict
from netspeed.data.net_speed import AggregateTotals, InterfaceSample

logger = logging.getLogger(__name__)

PROC_NET_DEV = Path("/proc/net/dev")

# Column order of /proc/net/dev after the interface name
COUNTER_FIELDS = [
    "r_bytes",
    "r_packets",
    "r_errs",
    "r_drop",
    "r_fifo",
    "r_frame",
    "r_compressed",
    "r_multicast",
    "t_bytes",
    "t_packets",
    "t_errs",
    "t_drop",
    "t_fifo",
    "t_colls",
    "t_carrier",
    "t_compressed",
]

# Index of the transmitted bytes counter in a split line
T_BYTES_INDEX = 9

VIRTUAL_INTERFACE = re.compile(r"^(ifb|lxdbr|virbr|br|vnet|tun|tap)\d+")


def is_excluded(interface: str) -> bool:
    """
    Loopback, bridge, tunnel and other virtual interfaces double-count the
    traffic of the physical ones.
    """
    return interface == "lo" or VIRTUAL_INTERFACE.match(interface) is not None


def _parse_line(line: str) -> InterfaceSample | None:
    fields = re.split(r"[\s:]+", line.strip())
    if len(fields) <= 2 or len(fields) <= T_BYTES_INDEX:
        return None

    interface, counters = fields[0], fields[1:]
    data: dict[str, object] = {"interface": interface}
    for name, value in zip(COUNTER_FIELDS, counters):
        if value.isdigit() and value.isascii():
            data[name] = value

    if "r_bytes" not in data or "t_bytes" not in data:
        return None

    return from_dict(
        data_class=InterfaceSample,
        data=data,
        config=Config(cast=[int]),
    )


def parse_counters(content: str) -> AggregateTotals:
    """
    Sum received and transmitted bytes over every physical interface in the
    contents of /proc/net/dev. Headers and malformed lines are skipped.
    """
    totals = AggregateTotals()
    for line in content.splitlines():
        sample = _parse_line(line)
        if sample is None or sample.interface is None:
            continue
        if is_excluded(sample.interface):
            continue

        totals.r_bytes += sample.r_bytes
        totals.t_bytes += sample.t_bytes
        totals.interfaces.append(sample.interface)

    return totals


def read_totals(source: Path = PROC_NET_DEV) -> AggregateTotals:
    """
    Read the aggregate byte counters from source. A source that can't be read
    yields zero totals so the caller keeps running.
    """
    try:
        with open(source, "r", encoding="utf-8") as fh:
            content = fh.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"[read_totals] - failed to read {source}: {e}")
        return AggregateTotals()

    totals = parse_counters(content)
    logger.debug(
        f"[read_totals] - rx={totals.r_bytes} tx={totals.t_bytes} interfaces={','.join(totals.interfaces)}"
    )
    return totals
