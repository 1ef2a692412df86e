"""
Virtual Nodes

A physical server usually owns several positions on the ring so that keys
spread evenly across servers. The ring itself knows nothing about this: a
VNode is just a node whose identity combines the server address with a
per-server id, so each one lands somewhere different.
"""

import ipaddress
from typing import List, Tuple, Union


class VNode:
    """One ring position for the server at ip:port."""

    __slots__ = ('ip', 'port', 'id')

    def __init__(self, ip: Union[str, ipaddress.IPv4Address, ipaddress.IPv6Address],
                 port: int, id: int):
        self.ip = ipaddress.ip_address(ip)
        if not 0 <= port <= 65535:
            raise ValueError(f"Port out of range: {port}")
        self.port = port
        self.id = id

    @property
    def addr(self) -> Tuple[str, int]:
        """(host, port) of the backing server."""
        return str(self.ip), self.port

    def __str__(self) -> str:
        # Same form as a socket address: IPv6 hosts are bracketed
        if self.ip.version == 6:
            return f"[{self.ip}]:{self.port}|{self.id}"
        return f"{self.ip}:{self.port}|{self.id}"

    def __repr__(self) -> str:
        return f"VNode({str(self.ip)!r}, {self.port}, {self.id})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, VNode):
            return NotImplemented
        return (self.ip, self.port, self.id) == (other.ip, other.port, other.id)

    def __hash__(self) -> int:
        return hash((self.ip, self.port, self.id))


def vnodes_for(ip: str, port: int, count: int) -> List[VNode]:
    """
    Virtual nodes with ids 1..count for the server at ip:port.

    Add all of them to a ring to give the server `count` positions.
    """
    return [VNode(ip, port, i) for i in range(1, count + 1)]
