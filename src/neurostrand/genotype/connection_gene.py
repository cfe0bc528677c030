"""
Connection Gene Module

This module implements the ConnectionGene class for the neurostrand genome.

Classes:
    ConnectionGene: Gene encoding a weighted connection between nodes
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from neurostrand.random_source import RandomSource


class ConnectionGene:
    """
    A gene describing a weighted connection between two nodes in a Neural Network.

    Each connection gene represents a directed edge in the neural network graph,
    connecting a source node to a destination node with an associated weight.
    Connection genes are identified across genomes by their innovation number,
    which serves as a historical marker enabling gene alignment during crossover
    and distance calculation: two genes with the same innovation number describe
    the same structural mutation, whatever their current weight or status.

    Connections can be enabled or disabled. A disabled connection is kept in the
    genome so that it can be expressed again later (crossover may re-enable it).

    Public Attributes:
        node_in:    ID of the source node
        node_out:   ID of the destination node
        weight:     Weight of the connection
        enabled:    Whether this connection is active in the network
        innovation: Historical marker identifying this connection across genomes

    Public Methods:
        mutate(...): Stochastically mutate the connection weight
        copy():      Return a new gene with the same values
        to_dict():   Convert the gene to a dictionary
    """

    def __init__(self,
                 node_in   : int,
                 node_out  : int,
                 weight    : float,
                 innovation: int,
                 enabled   : bool = True):
        """
        Initialize a connection gene.

        Parameters:
            node_in:    ID of the source node
            node_out:   ID of the destination node
            weight:     Weight of the connection
            innovation: Historical marker for this connection
            enabled:    Whether this connection is active in the network
        """
        self.node_in   : int   = node_in
        self.node_out  : int   = node_out
        self.weight    : float = weight
        self.enabled   : bool  = enabled
        self.innovation: int   = innovation

    @property
    def endpoints(self) -> tuple[int, int]:
        return self.node_in, self.node_out

    def mutate(self,
               perturb_prob     : float,
               perturb_amplitude: float,
               replace_prob     : float,
               random           : 'RandomSource') -> None:
        """
        Stochastically mutate the (gene describing the) connection.

        Mutating a connection gene means changing its 'weight'. Two independent
        checks are made, in this order:
         + with probability 'perturb_prob' the weight is shifted by a random amount
           of magnitude at most 'perturb_amplitude', with a random sign
         + with probability 'replace_prob' the weight is replaced by a new value
           drawn uniformly from [0, 1)
        Both can happen in the same call, in which case the replacement wins.

        Parameters:
            perturb_prob:      probability of perturbing the weight
            perturb_amplitude: maximum absolute change of a perturbation
            replace_prob:      probability of replacing the weight
            random:            source of randomness
        """
        if random.bool(perturb_prob):
            delta = perturb_amplitude * random.real(0, 1)
            if not random.bool(0.5):
                delta = -delta
            self.weight += delta

        if random.bool(replace_prob):
            self.weight = random.real(0, 1)

    def copy(self) -> 'ConnectionGene':
        return ConnectionGene(self.node_in, self.node_out, self.weight, self.innovation, self.enabled)

    def to_dict(self) -> dict:
        return {"from"      : self.node_in,
                "to"        : self.node_out,
                "weight"    : self.weight,
                "enabled"   : self.enabled,
                "innovation": self.innovation}

    @classmethod
    def from_dict(cls, conn_dict: dict) -> 'ConnectionGene':
        return cls(conn_dict["from"],
                   conn_dict["to"],
                   float(conn_dict["weight"]),
                   conn_dict["innovation"],
                   conn_dict.get("enabled", True))

    def __eq__(self, other):
        if not isinstance(other, ConnectionGene):
            return NotImplemented
        return (self.node_in    == other.node_in  and
                self.node_out   == other.node_out and
                self.weight     == other.weight   and
                self.enabled    == other.enabled  and
                self.innovation == other.innovation)

    # Genes are mutable, so they are not hashable
    __hash__ = None

    def __repr__(self):
        return (f"ConnectionGene(node_in={self.node_in:03d}, node_out={self.node_out:03d}, "
                f"weight={self.weight:+.6f}, enabled={self.enabled}, innovation={self.innovation:03d})")

    def __str__(self):
        s  = f"[{self.innovation:03d},{'E' if self.enabled else 'D'},"
        s += f"{self.node_in:02d}=>{self.node_out:02d},{self.weight:+.02f}]"
        return s
