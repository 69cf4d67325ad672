from dataclasses import dataclass, field


@dataclass
class InterfaceSample:
    interface: str | None = None
    r_bytes: int = 0
    r_packets: int = 0
    r_errs: int = 0
    r_drop: int = 0
    r_fifo: int = 0
    r_frame: int = 0
    r_compressed: int = 0
    r_multicast: int = 0
    t_bytes: int = 0
    t_packets: int = 0
    t_errs: int = 0
    t_drop: int = 0
    t_fifo: int = 0
    t_colls: int = 0
    t_carrier: int = 0
    t_compressed: int = 0


@dataclass
class AggregateTotals:
    r_bytes: int = 0
    t_bytes: int = 0
    interfaces: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class RateState:
    # 0 means "unset": the next sample becomes the baseline
    r_bytes: int = 0
    t_bytes: int = 0


@dataclass
class SpeedPair:
    down: float = 0.0
    up: float = 0.0


@dataclass
class NetSpeed:
    text: str = "-"
    output_class: str = "loading"
    tooltip: str = ""
    speed: SpeedPair | None = None
    interfaces: list[str] = field(default_factory=list)
    updated: str | None = None
