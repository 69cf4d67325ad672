import logging

import pytest
from conftest import PROC_NET_DEV_HEADER, net_dev_line

from netspeed.util import network


@pytest.mark.parametrize(
    "interface",
    ["lo", "ifb0", "lxdbr0", "virbr1", "br0", "br12", "vnet3", "tun0", "tap10"],
)
def test_virtual_interfaces_are_excluded(interface):
    assert network.is_excluded(interface)


@pytest.mark.parametrize(
    "interface", ["eth0", "enp3s0", "wlan0", "wlp2s0", "lo0", "br", "tun", "bond0"]
)
def test_physical_interfaces_are_kept(interface):
    assert not network.is_excluded(interface)


def test_parse_counters_sums_physical_interfaces():
    content = (
        PROC_NET_DEV_HEADER
        + net_dev_line("lo", 5000, 5000)
        + net_dev_line("eth0", 1000, 200)
        + net_dev_line("wlan0", 3000, 400)
        + net_dev_line("virbr0", 7000, 7000)
        + net_dev_line("docker0", 11, 22)
    )

    totals = network.parse_counters(content)

    assert totals.r_bytes == 1000 + 3000 + 11
    assert totals.t_bytes == 200 + 400 + 22
    assert totals.interfaces == ["eth0", "wlan0", "docker0"]


def test_parse_counters_reads_fixed_columns():
    # field 1 is received bytes and field 9 is transmitted bytes
    line = "  eth0: 111 2 3 4 5 6 7 8 999 10 11 12 13 14 15 16\n"

    totals = network.parse_counters(line)

    assert totals.r_bytes == 111
    assert totals.t_bytes == 999


def test_parse_counters_handles_name_glued_to_counter():
    totals = network.parse_counters("eth0:4294967296 1 0 0 0 0 0 0 12 1 0 0 0 0 0 0\n")

    assert totals.r_bytes == 4294967296
    assert totals.t_bytes == 12


def test_parse_counters_skips_malformed_lines():
    content = (
        PROC_NET_DEV_HEADER
        + net_dev_line("eth0", 1000, 200)
        + net_dev_line("eth1", "abc", 300)
        + net_dev_line("eth2", 300, "-5")
        + net_dev_line("eth3", "1.5", 10)
        + "eth4: 1\n"
        + "eth5: 1 2 3 4 5\n"
        + "\n"
        + "garbage\n"
    )

    totals = network.parse_counters(content)

    assert totals.r_bytes == 1000
    assert totals.t_bytes == 200
    assert totals.interfaces == ["eth0"]


def test_parse_counters_empty_content():
    totals = network.parse_counters("")

    assert totals.r_bytes == 0
    assert totals.t_bytes == 0
    assert totals.interfaces == []


def test_read_totals_from_file(write_net_dev):
    source = write_net_dev(net_dev_line("eth0", 1000000, 5000))

    totals = network.read_totals(source)

    assert totals.r_bytes == 1000000
    assert totals.t_bytes == 5000


def test_read_totals_missing_source_is_zero(tmp_path, caplog):
    with caplog.at_level(logging.ERROR, logger="netspeed"):
        totals = network.read_totals(tmp_path / "missing")

    assert totals.r_bytes == 0
    assert totals.t_bytes == 0
    assert totals.interfaces == []
    assert "failed to read" in caplog.text


def test_read_totals_directory_is_zero(tmp_path):
    totals = network.read_totals(tmp_path)

    assert totals.r_bytes == 0
    assert totals.t_bytes == 0


def test_read_totals_invalid_utf8_is_zero(tmp_path, caplog):
    source = tmp_path / "dev"
    source.write_bytes(b"  eth0: 1\xff 2 0 0 0 0 0 0 3 4 0 0 0 0 0 0\n")

    with caplog.at_level(logging.ERROR, logger="netspeed"):
        totals = network.read_totals(source)

    assert totals.r_bytes == 0
    assert totals.t_bytes == 0
    assert totals.interfaces == []
    assert "failed to read" in caplog.text
