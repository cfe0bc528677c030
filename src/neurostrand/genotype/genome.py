"""
Genome Module

This module implements the Genome class (a.k.a. "Strand"), the genetic
representation of a neural network, together with the GeneAlignment of two
genomes' connection genes.

Classes:
    GeneAlignment: Matching / disjoint / excess classification of two genomes' connection genes
    Genome:        Complete genome representing a neural network structure
"""

from dataclasses import dataclass
from operator    import attrgetter
from typing      import TYPE_CHECKING

import numpy as np
from loguru import logger

from neurostrand.genotype.connection_gene    import ConnectionGene
from neurostrand.genotype.innovation_tracker import InnovationTracker
from neurostrand.genotype.node_gene          import NodeType, NodeGene
from neurostrand.serialization               import register

if TYPE_CHECKING:
    from neurostrand.config        import Config
    from neurostrand.random_source import RandomSource

# Below this many connection genes, excess and disjoint counts are not normalized
SMALL_GENOME_SIZE = 20


@dataclass(frozen=True)
class GeneAlignment:
    """
    The connection genes of two genomes ('self' and 'other'), aligned by innovation number.

    Matching genes have an innovation number present in both genomes. A non-matching
    gene is disjoint if its innovation number is below the other genome's largest
    innovation number, and excess if it is beyond every innovation number of the
    other genome. Every gene of both genomes falls in exactly one of the six lists.

    The lists keep each genome's own gene order.
    """
    matching_self : list[ConnectionGene]
    matching_other: list[ConnectionGene]
    disjoint_self : list[ConnectionGene]
    disjoint_other: list[ConnectionGene]
    excess_self   : list[ConnectionGene]
    excess_other  : list[ConnectionGene]

    @property
    def matching_pairs(self) -> list[tuple[ConnectionGene, ConnectionGene]]:
        """
        Matching genes paired by innovation number, in ascending innovation order.
        """
        return list(zip(sorted(self.matching_self,  key=attrgetter("innovation")),
                        sorted(self.matching_other, key=attrgetter("innovation"))))

    @property
    def num_disjoint(self) -> int:
        return len(self.disjoint_self) + len(self.disjoint_other)

    @property
    def num_excess(self) -> int:
        return len(self.excess_self) + len(self.excess_other)


@register("strand")
class Genome:
    """
    A genome representing a neural network as a collection of node and connection genes.

    A genome encodes the structure and parameters of a neural network at the genotype
    level. It consists of:
    - Node genes: the network's neurons (input, output, hidden), identified by an ID
      assigned by the genome's own counter
    - Connection genes: weighted connections between nodes, each carrying an innovation
      number used to align genes across independently evolved genomes

    Both collections keep their creation order. Genes are owned by exactly one genome:
    cloning and crossover always copy genes, never share them.

    Structural invariants, maintained by every operator:
    - node IDs are unique
    - no two connection genes (enabled or not) join the same ordered pair of nodes
    - no connection starts at an OUTPUT node or ends at an INPUT node
    Cycles through hidden nodes are allowed.

    Node numbering convention for a newly constructed genome:
        - Input nodes:  [1, num_inputs]
        - Output nodes: [num_inputs + 1, num_inputs + num_outputs]
        - Hidden nodes: assigned from the genome's counter as they are created

    Randomness and innovation numbers are never global: stochastic operators take a
    RandomSource and operators creating connection genes take an InnovationTracker.

    Attributes:
        node_genes: List of NodeGene objects, in creation order
        conn_genes: List of ConnectionGene objects, in creation order

    Public Properties:
        next_node_id: ID the next new node gene will receive
        input_nodes:  List of all input node genes
        output_nodes: List of all output node genes
        hidden_nodes: List of all hidden node genes

    Public Methods:
        mutate_weights(...):             Perturb and/or replace connection weights
        add_random_node_gene(...):       Split a random connection with a new hidden node
        add_random_connection_gene(...): Connect two random, not yet connected nodes
        mutate(config, random, tracker): Apply all mutation operators as configured
        align(other):                    Classify connection genes as matching/disjoint/excess
        crossover(...):                  Create offspring by crossing this genome with another
        compatibility_distance(...):     Normalized structural and weight dissimilarity
        distance(other, config):         Compatibility distance using configured coefficients
        clone():                         Deep, independent copy
        to_dict():                       Convert genome to dictionary representation

    Class Methods:
        from_config(config, random, tracker): Create a genome as described by the configuration
        from_dict(genome_dict):               Create a genome from a dictionary description

    Static Methods:
        show_aligned(genome1, genome2): Two genomes' connection genes aligned by innovation number
    """

    def __init__(self,
                 input_count : int                        = 0,
                 output_count: int                        = 0,
                 enabled     : bool                       = True,
                 random      : 'RandomSource | None'      = None,
                 tracker     : 'InnovationTracker | None' = None):
        """
        Initialize a fully connected Genome.

        The genome describes a network with the given number of input and output
        nodes, no hidden nodes, and one connection from every input node to every
        output node. Connection weights are drawn uniformly from [0, 1].

        Called without arguments, creates an empty genome (no genes) to be filled in
        by an operator such as 'clone()' or 'crossover()'.

        Parameters:
            input_count:  number of input node genes
            output_count: number of output node genes
            enabled:      whether the connection genes start enabled
            random:       source of randomness for the initial weights
            tracker:      assigns innovation numbers to the connection genes

        Raises:
            ValueError: if connection genes are needed but 'random' or 'tracker' is missing
        """
        self.node_genes: list[NodeGene]       = []
        self.conn_genes: list[ConnectionGene] = []
        self._next_node_id: int               = 1

        if input_count < 0 or output_count < 0:
            raise ValueError("Input and output counts cannot be negative")

        input_nodes  = [self._new_node(NodeType.INPUT)  for _ in range(input_count)]
        output_nodes = [self._new_node(NodeType.OUTPUT) for _ in range(output_count)]

        if input_nodes and output_nodes and (random is None or tracker is None):
            raise ValueError("A randomness source and an innovation tracker are needed to create connections")

        # One connection gene for every input/output combination
        for input_node in input_nodes:
            for output_node in output_nodes:
                weight     = random.real(0, 1, True)
                innovation = tracker.get_innovation_number(input_node.id, output_node.id)
                self.conn_genes.append(ConnectionGene(input_node.id, output_node.id, weight, innovation, enabled))

    @classmethod
    def from_config(cls,
                    config : 'Config',
                    random : 'RandomSource',
                    tracker: InnovationTracker) -> 'Genome':
        """
        Create a fully connected genome with the number of inputs and outputs
        and the initial connection status given by the configuration.
        """
        return cls(config.num_inputs, config.num_outputs, config.initial_enabled, random, tracker)

    def _new_node(self, node_type: NodeType) -> NodeGene:
        """
        Create a node gene with the next available ID and add it to the genome.
        """
        node = NodeGene(self._next_node_id, node_type)
        self._next_node_id += 1
        self.node_genes.append(node)
        return node

    @property
    def next_node_id(self) -> int:
        return self._next_node_id

    @property
    def input_nodes(self) -> list[NodeGene]:
        return [node for node in self.node_genes if node.type == NodeType.INPUT]

    @property
    def output_nodes(self) -> list[NodeGene]:
        return [node for node in self.node_genes if node.type == NodeType.OUTPUT]

    @property
    def hidden_nodes(self) -> list[NodeGene]:
        return [node for node in self.node_genes if node.type == NodeType.HIDDEN]

    @property
    def input_node_count(self) -> int:
        return len(self.input_nodes)

    @property
    def output_node_count(self) -> int:
        return len(self.output_nodes)

    @property
    def hidden_node_count(self) -> int:
        return len(self.hidden_nodes)

    # ------------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------------

    def mutate_weights(self,
                       perturb_prob     : float,
                       perturb_amplitude: float,
                       replace_prob     : float,
                       random           : 'RandomSource') -> None:
        """
        Randomly perturb the connection weights, possibly replacing them altogether.

        Every connection gene (disabled ones included) is considered independently.
        The perturbation and the replacement chances are not codependent: both are
        checked for each gene, and if both fire the replacement wins.

        Parameters:
            perturb_prob:      chance that each weight is perturbed
            perturb_amplitude: maximum change of a perturbed weight
            replace_prob:      chance that each weight is replaced by a new value in [0, 1)
            random:            source of randomness
        """
        for conn in self.conn_genes:
            conn.mutate(perturb_prob, perturb_amplitude, replace_prob, random)

    def add_random_node_gene(self,
                             random : 'RandomSource',
                             tracker: InnovationTracker) -> NodeGene | None:
        """
        Split a randomly chosen connection with a new hidden node.

        Any connection gene may be chosen, enabled or not. The chosen connection is
        disabled and replaced by two enabled connections: the one leading into the
        new node has weight 1, the one leading out of it has the weight of the
        original connection, so that the split does not change what the network
        computes (for a linear activation).

        Parameters:
            random:  source of randomness
            tracker: assigns innovation numbers to the two new connection genes

        Returns:
            the new node gene, or None if the genome has no connection to split
        """
        if not self.conn_genes:
            logger.debug("No connection gene to split, no node gene added")
            return None

        split_conn = random.pick(self.conn_genes)
        return self._split_connection(split_conn, tracker)

    def _split_connection(self, split_conn: ConnectionGene, tracker: InnovationTracker) -> NodeGene:
        new_node = self._new_node(NodeType.HIDDEN)

        # The connection being split must be disabled
        split_conn.enabled = False

        # First new connection: source -> new node (weight = 1.0)
        innov1 = tracker.get_innovation_number(split_conn.node_in, new_node.id)
        self.conn_genes.append(ConnectionGene(split_conn.node_in, new_node.id, 1.0, innov1))

        # Second new connection: new node -> destination (weight = old weight)
        innov2 = tracker.get_innovation_number(new_node.id, split_conn.node_out)
        self.conn_genes.append(ConnectionGene(new_node.id, split_conn.node_out, split_conn.weight, innov2))

        logger.debug("Split connection {} with hidden node {}", split_conn, new_node.id)
        return new_node

    def _are_connected(self, source: NodeGene, dest: NodeGene) -> bool:
        return any(conn.node_in == source.id and conn.node_out == dest.id for conn in self.conn_genes)

    def _can_connect(self, source: NodeGene, dest: NodeGene) -> bool:
        """
        Whether a new connection 'source' -> 'dest' would keep the genome valid.
        A connection cannot start at an OUTPUT node, end at an INPUT node,
        or duplicate an existing connection (enabled or not).
        """
        return (source.type != NodeType.OUTPUT and
                dest.type   != NodeType.INPUT  and
                not self._are_connected(source, dest))

    def add_random_connection_gene(self,
                                   max_attempts: int,
                                   random      : 'RandomSource',
                                   tracker     : InnovationTracker) -> ConnectionGene | None:
        """
        Attempt to connect two randomly chosen nodes with a new connection gene.

        Both ends are picked independently among all node genes. If the pair cannot
        be connected (see '_can_connect') another pair is picked, up to 'max_attempts'
        times. Failing to find a pair is a normal outcome, e.g. for a densely
        connected genome, and leaves the genome unchanged.

        Parameters:
            max_attempts: number of node pairs to try
            random:       source of randomness
            tracker:      assigns the innovation number of the new connection gene

        Returns:
            the new (enabled) connection gene, or None if no gene could be added
        """
        if not self.node_genes:
            return None

        for _ in range(max_attempts):
            source = random.pick(self.node_genes)
            dest   = random.pick(self.node_genes)
            if not self._can_connect(source, dest):
                continue

            innovation = tracker.get_innovation_number(source.id, dest.id)
            new_conn   = ConnectionGene(source.id, dest.id, random.real(0, 1), innovation)
            self.conn_genes.append(new_conn)
            logger.debug("Added connection {}", new_conn)
            return new_conn

        logger.debug("No connection gene added after {} attempts", max_attempts)
        return None

    def mutate(self,
               config : 'Config',
               random : 'RandomSource',
               tracker: InnovationTracker) -> None:
        """
        Apply to the current genome all mutation operations, as configured.

        Connection weights are mutated first; then a node is added with probability
        'node_add_probability' and a connection with probability
        'connection_add_probability'.
        """
        self.mutate_weights(config.weight_perturb_prob,
                            config.weight_perturb_amplitude,
                            config.weight_replace_prob,
                            random)

        if random.bool(config.node_add_probability):
            self.add_random_node_gene(random, tracker)

        if random.bool(config.connection_add_probability):
            self.add_random_connection_gene(config.connection_add_attempts, random, tracker)

    # ------------------------------------------------------------------------
    # Alignment, crossover, distance
    # ------------------------------------------------------------------------

    def align(self, other: 'Genome') -> GeneAlignment:
        """
        Align the connection genes of this genome and 'other' by innovation number.

        Parameters:
            other: the genome to compare this one against

        Returns:
            the matching, disjoint and excess genes of both genomes
        """
        innovs_self  = {conn.innovation for conn in self.conn_genes}
        innovs_other = {conn.innovation for conn in other.conn_genes}
        matching_innovs = innovs_self & innovs_other

        disjoint_self, excess_self   = self._split_non_matching(self.conn_genes,  matching_innovs, innovs_other)
        disjoint_other, excess_other = self._split_non_matching(other.conn_genes, matching_innovs, innovs_self)

        return GeneAlignment(
            matching_self  = [conn for conn in self.conn_genes  if conn.innovation in matching_innovs],
            matching_other = [conn for conn in other.conn_genes if conn.innovation in matching_innovs],
            disjoint_self  = disjoint_self,
            disjoint_other = disjoint_other,
            excess_self    = excess_self,
            excess_other   = excess_other)

    @staticmethod
    def _split_non_matching(conn_genes     : list[ConnectionGene],
                            matching_innovs: set[int],
                            innovs_other   : set[int]) -> tuple[list[ConnectionGene], list[ConnectionGene]]:
        """
        Separate the non-matching genes into disjoint and excess genes,
        relative to the innovation numbers of the other genome.
        """
        max_other = max(innovs_other, default=None)

        disjoint, excess = [], []
        for conn in conn_genes:
            if conn.innovation in matching_innovs:
                continue
            if max_other is not None and conn.innovation < max_other:
                disjoint.append(conn)
            else:
                excess.append(conn)
        return disjoint, excess

    def crossover(self,
                  other          : 'Genome',
                  disabled_chance: float,
                  equal_fitness  : bool,
                  random         : 'RandomSource') -> 'Genome':
        """
        Cross this genome over with another to create an offspring.

        Rules:
        - Matching genes: inherited randomly from either parent. A gene that is disabled
          in either parent has 'disabled_chance' of being disabled in the offspring,
          otherwise it is enabled.
        - Disjoint & excess genes: inherited from 'self', assumed to be the fitter
          parent; if 'equal_fitness' is set, they are inherited from both parents.
        - Node genes: every node referenced by an inherited connection, keeping its ID.

        Parameters:
            other:           the other parent genome
            disabled_chance: chance that a gene disabled in either parent is disabled in the offspring
            equal_fitness:   whether both parents are equally fit
            random:          source of randomness

        Returns:
            New offspring genome
        """
        offspring = Genome()
        alignment = self.align(other)

        # Matching connections: inherit connection gene randomly from either parent
        for conn_self, conn_other in alignment.matching_pairs:
            conn_gene = (conn_self if random.bool(0.5) else conn_other).copy()
            conn_gene.enabled = True
            if (not conn_self.enabled or not conn_other.enabled) and random.bool(disabled_chance):
                conn_gene.enabled = False
            offspring.conn_genes.append(conn_gene)

        # Disjoint & excess connections
        extra_genes = alignment.excess_self + alignment.disjoint_self
        if equal_fitness:
            extra_genes += alignment.excess_other + alignment.disjoint_other

        # With independently assigned innovation numbers, both parents may
        # connect the same pair of nodes; keep only the first such gene.
        connected = {conn.endpoints for conn in offspring.conn_genes}
        for conn in extra_genes:
            if conn.endpoints in connected:
                continue
            connected.add(conn.endpoints)
            offspring.conn_genes.append(conn.copy())

        # Inherit the node genes referenced by the inherited connections
        referenced_ids = {node_id for endpoints in connected for node_id in endpoints}
        inherited_ids  = set()
        for node in self.node_genes + other.node_genes:
            if node.id in referenced_ids and node.id not in inherited_ids:
                inherited_ids.add(node.id)
                offspring.node_genes.append(node.copy())

        # Node IDs are kept as they are in the parents and may be sparse, so the
        # counter starts past the largest inherited ID rather than at count + 1
        offspring._next_node_id = max(len(offspring.node_genes), max(inherited_ids, default=0)) + 1

        logger.debug("Crossover produced {} node genes and {} connection genes",
                     len(offspring.node_genes), len(offspring.conn_genes))
        return offspring

    def compatibility_distance(self,
                               other         : 'Genome',
                               excess_coeff  : float,
                               disjoint_coeff: float,
                               weight_coeff  : float) -> float:
        """
        Calculate the compatibility distance between this genome and another.

           distance = (c1 * E / N) + (c2 * D / N) + c3 * W

        Where:
        - E = number of excess connection genes (of both genomes)
        - D = number of disjoint connection genes (of both genomes)
        - N = number of connection genes in larger genome, or 1 if it has fewer than 20
        - W = average weight difference of matching connection genes (0 if none match)
        - c1, c2, c3 = importance of the various terms

        Parameters:
            other:          the genome relative to which we are calculating the distance
            excess_coeff:   importance of the number of excess genes
            disjoint_coeff: importance of the number of disjoint genes
            weight_coeff:   importance of weight differences between matching genes

        Returns:
            the compatibility distance between this genome and 'other'
        """
        N = max(len(self.conn_genes), len(other.conn_genes))
        if N < SMALL_GENOME_SIZE:
            N = 1

        alignment = self.align(other)

        avg_weight_diff = 0.0
        pairs = alignment.matching_pairs
        if pairs:
            avg_weight_diff = float(np.mean([abs(a.weight - b.weight) for a, b in pairs]))

        return (excess_coeff   * alignment.num_excess   / N +
                disjoint_coeff * alignment.num_disjoint / N +
                weight_coeff   * avg_weight_diff)

    def distance(self, other: 'Genome', config: 'Config') -> float:
        """
        Compatibility distance using the coefficients from the configuration.
        """
        return self.compatibility_distance(other,
                                           config.distance_excess_coeff,
                                           config.distance_disjoint_coeff,
                                           config.distance_weight_coeff)

    # ------------------------------------------------------------------------
    # Copying and conversion
    # ------------------------------------------------------------------------

    def clone(self) -> 'Genome':
        """
        Make a complete, deep copy of this genome.
        """
        genome = Genome()
        genome.node_genes    = [node.copy() for node in self.node_genes]
        genome.conn_genes    = [conn.copy() for conn in self.conn_genes]
        genome._next_node_id = self._next_node_id
        return genome

    def to_dict(self) -> dict:
        """
        Convert the genome to a dictionary representation.

        This is the inverse operation of from_dict(). Genes are listed in creation order.

        Returns:
            Dictionary with the following structure:
            {
                "next_node_id": 4,
                "nodes": [
                    {"id": 1, "type": "input"},
                    {"id": 2, "type": "output"},
                    {"id": 3, "type": "hidden"}
                ],
                "connections": [
                    {"from": 1, "to": 2, "weight": 0.5, "enabled": false, "innovation": 1},
                    {"from": 1, "to": 3, "weight": 1.0, "enabled": true,  "innovation": 2},
                    {"from": 3, "to": 2, "weight": 0.5, "enabled": true,  "innovation": 3}
                ]
            }
        """
        return {"next_node_id": self._next_node_id,
                "nodes"       : [node.to_dict() for node in self.node_genes],
                "connections" : [conn.to_dict() for conn in self.conn_genes]}

    @classmethod
    def from_dict(cls, genome_dict: dict) -> 'Genome':
        """
        Create a Genome from a dictionary description (see 'to_dict()').

        If "next_node_id" is missing, it is set past the largest node ID.

        Parameters:
            genome_dict: Dictionary describing the genome structure

        Returns:
            A new Genome object with the specified structure

        Raises:
            ValueError: If the structure is invalid (duplicate IDs, bad connections, etc.)
            KeyError:   If required fields are missing from the dictionary
        """
        genome = cls()

        for node_data in genome_dict["nodes"]:
            node = NodeGene.from_dict(node_data)
            if any(existing.id == node.id for existing in genome.node_genes):
                raise ValueError(f"Duplicate node ID {node.id}")
            genome.node_genes.append(node)

        nodes     = {node.id: node for node in genome.node_genes}
        connected = set()
        for conn_data in genome_dict.get("connections", []):
            conn = ConnectionGene.from_dict(conn_data)

            # Validate that nodes exist
            if conn.node_in not in nodes:
                raise ValueError(f"Connection references non-existent source node: {conn.node_in}")
            if conn.node_out not in nodes:
                raise ValueError(f"Connection references non-existent destination node: {conn.node_out}")

            # Validate direction and uniqueness
            if nodes[conn.node_in].type == NodeType.OUTPUT:
                raise ValueError(f"Connection cannot start at output node {conn.node_in}")
            if nodes[conn.node_out].type == NodeType.INPUT:
                raise ValueError(f"Connection cannot end at input node {conn.node_out}")
            if conn.endpoints in connected:
                raise ValueError(f"Duplicate connection from {conn.node_in} to {conn.node_out}")

            connected.add(conn.endpoints)
            genome.conn_genes.append(conn)

        min_next_id = max(nodes, default=0) + 1
        next_node_id = genome_dict.get("next_node_id", min_next_id)
        if next_node_id < min_next_id:
            raise ValueError(f"next_node_id {next_node_id} collides with existing node IDs")
        genome._next_node_id = next_node_id

        return genome

    def __eq__(self, other):
        if not isinstance(other, Genome):
            return NotImplemented
        return (self.node_genes    == other.node_genes and
                self.conn_genes    == other.conn_genes and
                self._next_node_id == other._next_node_id)

    # Genomes are mutable, so they are not hashable
    __hash__ = None

    def __str__(self):
        node_genes_str  = ''.join(str(node) for node in self.input_nodes)
        node_genes_str += ''.join(str(node) for node in self.hidden_nodes)
        node_genes_str += ''.join(str(node) for node in self.output_nodes)
        conn_genes_str  = ''.join(str(conn) for conn in self.conn_genes)
        return f"Nodes: {node_genes_str}\nConns: {conn_genes_str}"

    @staticmethod
    def show_aligned(genome1: 'Genome', genome2: 'Genome') -> str:
        """
        Return the connection genes of two genomes, one genome per line,
        aligned by innovation number.
        """
        conns1 = {conn.innovation: conn for conn in genome1.conn_genes}
        conns2 = {conn.innovation: conn for conn in genome2.conn_genes}

        conn_str1 = ""
        conn_str2 = ""
        for innov in sorted(conns1.keys() | conns2.keys()):
            str1 = str(conns1[innov]) if innov in conns1 else ""
            str2 = str(conns2[innov]) if innov in conns2 else ""
            width = max(len(str1), len(str2))
            conn_str1 += str1.ljust(width)
            conn_str2 += str2.ljust(width)

        return f"{conn_str1}\n{conn_str2}"
