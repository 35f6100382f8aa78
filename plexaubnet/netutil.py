"""CIDR helpers used by the IPAM logic: overlap detection and range boundaries."""

from __future__ import annotations

import ipaddress
from typing import Union

IPNetwork = Union[ipaddress.IPv4Network, ipaddress.IPv6Network]
IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]

__all__ = ["cidr_overlaps", "calculate_last_ip"]


def _parse_cidr(cidr: str) -> IPNetwork:
    """Parse an ``address/prefix`` string, allowing host bits to be set.

    Raises ValueError for anything that is not in CIDR notation.
    """
    if not isinstance(cidr, str):
        raise ValueError(f"invalid CIDR address: {cidr!r}")
    address, sep, prefix = cidr.partition("/")
    if not sep or not address or not prefix.isascii() or not prefix.isdigit():
        raise ValueError(f"invalid CIDR address: {cidr}")
    try:
        return ipaddress.ip_network(f"{address}/{int(prefix)}", strict=False)
    except ValueError as exc:
        raise ValueError(f"invalid CIDR address: {cidr}") from exc


def _is_ipv4_mapped(network: IPNetwork) -> bool:
    return (
        isinstance(network, ipaddress.IPv6Network)
        and network.network_address.ipv4_mapped is not None
    )


def cidr_overlaps(cidr1: str, cidr2: str) -> bool:
    """Return True if the two CIDR ranges share at least one address.

    Invalid CIDRs never overlap, nor do networks of different address
    families. An IPv4-mapped IPv6 network is treated as a family of its
    own and does not overlap a plain IPv4 or IPv6 network.
    """
    try:
        net1 = _parse_cidr(cidr1)
        net2 = _parse_cidr(cidr2)
    except ValueError:
        return False

    if net1.version != net2.version:
        return False
    if _is_ipv4_mapped(net1) != _is_ipv4_mapped(net2):
        return False

    return net1.overlaps(net2)


def calculate_last_ip(network: IPNetwork | str) -> IPAddress:
    """Return the last address of ``network`` (all host bits set).

    ``network`` may be a network object or a CIDR string. For an
    IPv4-mapped IPv6 network the result is the plain IPv4 address.
    """
    if isinstance(network, str):
        network = _parse_cidr(network)

    last = network.broadcast_address
    if _is_ipv4_mapped(network):
        mapped = last.ipv4_mapped
        if mapped is not None:
            return mapped
    return last