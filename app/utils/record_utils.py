# app/utils/record_utils.py
import ipaddress
from typing import Optional, Union

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]

# Shared address space (RFC 6598) is not flagged by ipaddress.is_private
SHARED_ADDRESS_SPACE = ipaddress.ip_network("100.64.0.0/10")
LIMITED_BROADCAST = ipaddress.ip_address("255.255.255.255")

ADDRESS_RECORD_VERSIONS = {"A": 4, "AAAA": 6}


def parse_ip(value: str) -> Optional[IPAddress]:
    try:
        return ipaddress.ip_address(value)
    except ValueError:
        return None


def is_private_ip(value: str) -> bool:
    """True when value is an IP address that is not globally routable."""
    ip = parse_ip(value)
    if ip is None:
        return False
    if ip.version == 6 and ip.ipv4_mapped is not None:
        ip = ip.ipv4_mapped
    # Group and broadcast addresses never name a single host
    if ip.is_multicast or ip == LIMITED_BROADCAST:
        return False
    if ip.version == 4 and ip in SHARED_ADDRESS_SPACE:
        return True
    return ip.is_private or ip.is_loopback or ip.is_link_local


def matches_record_family(record_type: str, value: str) -> bool:
    ip = parse_ip(value)
    return ip is not None and ip.version == ADDRESS_RECORD_VERSIONS[record_type]
