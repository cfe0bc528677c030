"""
Node Gene Module.

This module implements the NodeGene class and NodeType enumeration
for the neurostrand genome.

Classes:
    NodeType: Enumeration for node types (INPUT, HIDDEN, OUTPUT)
    NodeGene: Gene encoding a single network node
"""

from enum import Enum


class NodeType(Enum):
    """
    Nodes come in three types: input, hidden, output.
    """
    INPUT  = "input"
    HIDDEN = "hidden"
    OUTPUT = "output"

    @property
    def code(self) -> str:
        return self.value[0].upper()


class NodeGene:
    """
    A gene describing a node (neuron) in a Neural Network.

    A node gene only carries the identity of the neuron and its role in the
    network. The ID is assigned by the genome owning the gene and stays the
    same through structural mutations, crossover and cloning; the type never
    changes after the gene is created.

    Node genes compare by value: two genes are equal if they have the same ID
    and the same type, regardless of which genome owns them.

    Public Attributes:
        id:   Identifier of the node, unique within its genome

    Public Properties:
        type: Type of node (INPUT, HIDDEN, or OUTPUT), read-only

    Public Methods:
        copy():    Return a new gene with the same values
        to_dict(): Convert the gene to a dictionary
    """

    def __init__(self, node_id: int, node_type: NodeType):
        """
        Parameters:
            node_id:   Identifier for this node (unique within the genome)
            node_type: Type of node (INPUT, HIDDEN, or OUTPUT)
        """
        self.id   : int      = node_id
        self._type: NodeType = NodeType(node_type)

    @property
    def type(self) -> NodeType:
        return self._type

    def copy(self) -> 'NodeGene':
        return NodeGene(self.id, self._type)

    def to_dict(self) -> dict:
        return {"id": self.id, "type": self._type.value}

    @classmethod
    def from_dict(cls, node_dict: dict) -> 'NodeGene':
        return cls(node_dict["id"], NodeType(node_dict["type"]))

    def __eq__(self, other):
        if not isinstance(other, NodeGene):
            return NotImplemented
        return self.id == other.id and self._type == other._type

    def __hash__(self):
        return hash((self.id, self._type))

    def __repr__(self):
        return f"NodeGene(node_id={self.id:03d}, node_type=NodeType.{self._type.name})"

    def __str__(self):
        return f"[{self._type.code}{self.id}]"
