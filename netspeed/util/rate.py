from netspeed.data.net_speed import AggregateTotals, RateState, SpeedPair


def compute_rate(
    state: RateState, current: AggregateTotals, elapsed: float
) -> tuple[SpeedPair, RateState]:
    """
    Turn the change since the previous sample into bytes per second.

    A side whose previous total is still zero is seeded with the current total,
    so the first sample after a (re)start reports 0 for that side. Counter
    resets are not clamped and show up as negative rates.
    """
    if elapsed <= 0:
        raise ValueError(f"elapsed must be positive, got {elapsed}")

    last_r_bytes = state.r_bytes if state.r_bytes != 0 else current.r_bytes
    last_t_bytes = state.t_bytes if state.t_bytes != 0 else current.t_bytes

    speed = SpeedPair(
        down=(current.r_bytes - last_r_bytes) / elapsed,
        up=(current.t_bytes - last_t_bytes) / elapsed,
    )

    return speed, RateState(r_bytes=current.r_bytes, t_bytes=current.t_bytes)
