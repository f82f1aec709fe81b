"""
Connectivity analysis over a parsed PADS netlist.

Builds a bipartite networkx graph with one node per part and one node per
net, and an edge wherever a net touches a part.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, List, Optional, TextIO

import networkx as nx

if TYPE_CHECKING:
    from padsio.models.pads import Netlist

__all__ = ["CircuitGraph", "ConnectivityStats"]

logger = logging.getLogger(__name__)

_NET = "net"
_PART = "part"


@dataclass(slots=True, frozen=True)
class ConnectivityStats:
    """
    Summary statistics of a circuit graph.

    :param net_count: Number of nets.
    :param part_count: Number of part nodes, including undeclared refdes seen on pins.
    :param average_fanout: Mean number of distinct parts per net.
    :param max_fanout_net: Net touching the most parts, or None for an empty graph.
    :param max_fanout: Number of parts on ``max_fanout_net``.
    """

    net_count: int
    part_count: int
    average_fanout: float
    max_fanout_net: Optional[str]
    max_fanout: int


class CircuitGraph:
    """
    Part/net connectivity of a netlist.

    Graph nodes are namespaced 'part:<refdes>' and 'net:<name>'. Pins are
    matched to declared parts under the netlist's case policy.

    :param case_sensitive: Whether pin refdes must match part refdes exactly.
    """

    def __init__(self, case_sensitive: bool = True):
        self.case_sensitive = case_sensitive
        self.nets: Dict[str, List[str]] = {}
        self.part_metadata: Dict[str, Dict[str, str]] = {}
        self._refdes_by_key: Dict[str, str] = {}

    @classmethod
    def from_netlist(cls, netlist: "Netlist") -> "CircuitGraph":
        graph = cls(case_sensitive=netlist.case_sensitive)
        for part in netlist.parts:
            graph.add_part(part.refdes, part.footprint, part.value or "")
        for net in netlist.nets:
            for pin in net.pins:
                graph.add_connection(net.name, str(pin))
        return graph

    def add_part(self, refdes: str, footprint: str, value: str = "") -> None:
        self.part_metadata[refdes] = {"footprint": footprint, "value": value}
        self._refdes_by_key.setdefault(self._key(refdes), refdes)

    def add_connection(self, net_name: str, pin_name: str) -> None:
        self.nets.setdefault(net_name, []).append(pin_name)

    def analyze_connectivity(self) -> ConnectivityStats:
        graph = self.build_graph()
        degrees = self._get_net_degrees(graph)
        part_count = sum(1 for _, attr in graph.nodes(data=True) if attr.get("type") == _PART)
        if degrees:
            max_net = max(degrees, key=degrees.get)
            stats = ConnectivityStats(
                net_count=len(degrees),
                part_count=part_count,
                average_fanout=sum(degrees.values()) / len(degrees),
                max_fanout_net=graph.nodes[max_net]["xlabel"],
                max_fanout=degrees[max_net],
            )
        else:
            stats = ConnectivityStats(
                net_count=0, part_count=part_count, average_fanout=0.0, max_fanout_net=None, max_fanout=0
            )
        logger.info(
            "Nets: %d, parts: %d, average fanout: %.2f, highest fanout net: %s (%d)",
            stats.net_count,
            stats.part_count,
            stats.average_fanout,
            stats.max_fanout_net,
            stats.max_fanout,
        )
        return stats

    def unconnected_parts(self) -> List[str]:
        """Declared parts that no net touches, in declaration order."""
        graph = self.build_graph()
        return [refdes for refdes in self.part_metadata if graph.degree(self._part_node(refdes)) == 0]

    def connected_components(self) -> List[set]:
        """Groups of part and net nodes that are electrically reachable from each other."""
        return [set(component) for component in nx.connected_components(self.build_graph())]

    def _get_net_degrees(self, graph: nx.Graph) -> Dict[str, int]:
        nodes = [n for n, attr in graph.nodes(data=True) if attr.get("type") == _NET]
        return dict(graph.degree(nodes))

    def build_graph(self) -> nx.Graph:
        graph = nx.Graph()
        for refdes in self.part_metadata:
            self._ensure_part_node(graph, refdes)
        for net_name, pins in self.nets.items():
            graph.add_node(self._net_node(net_name), **self._get_net_attributes(net_name))
            for pin in pins:
                refdes = self._resolve_refdes(self._extract_ref_des(pin))
                self._ensure_part_node(graph, refdes)
                graph.add_edge(self._net_node(net_name), self._part_node(refdes), color="#BDC3C7", penwidth="0.6")
        return graph

    def _key(self, refdes: str) -> str:
        return refdes if self.case_sensitive else refdes.casefold()

    def _resolve_refdes(self, refdes: str) -> str:
        """Maps a pin refdes to the declared part spelling, if any."""
        return self._refdes_by_key.get(self._key(refdes), refdes)

    @staticmethod
    def _net_node(net_name: str) -> str:
        return f"{_NET}:{net_name}"

    @staticmethod
    def _part_node(refdes: str) -> str:
        return f"{_PART}:{refdes}"

    def _get_net_attributes(self, net_name: str) -> Dict[str, str]:
        return {
            "type": _NET,
            "shape": "point",
            "width": "0.1",
            "color": "#5DADE2",
            "label": "",
            "xlabel": net_name,
            "fontsize": "10",
        }

    def _extract_ref_des(self, pin: str) -> str:
        return pin.split(".")[0]

    def _ensure_part_node(self, graph: nx.Graph, refdes: str) -> None:
        node = self._part_node(refdes)
        if node not in graph:
            graph.add_node(node, **self._get_part_attributes(refdes))

    def _get_part_attributes(self, refdes: str) -> Dict[str, str]:
        metadata = self.part_metadata.get(refdes, {})
        footprint = metadata.get("footprint", "?")
        return {
            "type": _PART,
            "shape": "Mrecord",
            "style": "filled",
            "fillcolor": "#34495E",
            "fontcolor": "white",
            "fontsize": "10",
            "label": f"{refdes}\n({footprint})",
        }

    def write_dot(self, stream: TextIO) -> None:
        """Writes the graph in Graphviz DOT syntax."""
        graph = self.build_graph()
        stream.write("graph Circuit {\n")
        stream.write('  overlap="false";\n')
        stream.write('  splines="true";\n')
        for node, attrs in graph.nodes(data=True):
            stream.write(f'  "{_escape_dot(node)}" [{self._format_dot_attrs(attrs)}];\n')
        for u, v, attrs in graph.edges(data=True):
            stream.write(f'  "{_escape_dot(u)}" -- "{_escape_dot(v)}" [{self._format_dot_attrs(attrs)}];\n')
        stream.write("}\n")

    def _format_dot_attrs(self, attrs: Dict[str, Any]) -> str:
        return ", ".join([f'{k}="{_escape_dot(str(v))}"' for k, v in attrs.items()])


def _escape_dot(text: str) -> str:
    """Escapes text for a double-quoted DOT ID."""
    return text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
