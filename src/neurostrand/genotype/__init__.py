"""
Genotype Package

This package implements the genetic encoding of a neural network (a "Strand")
and the evolutionary operators acting on it.

The genotype consists of two types of genes:
- Node genes:       Encode individual neurons (input, hidden or output)
- Connection genes: Encode weighted connections between neurons with innovation numbers

Modules:
    node_gene:          NodeType enumeration and NodeGene class
    connection_gene:    ConnectionGene class
    genome:             Genome and GeneAlignment classes
    innovation_tracker: InnovationTracker class

Exported Classes:
    NodeType:          Enumeration for node types (INPUT, HIDDEN, OUTPUT)
    NodeGene:          Gene encoding a single network node
    ConnectionGene:    Gene encoding a weighted connection between nodes
    Genome:            Complete genome representing a neural network
    GeneAlignment:     Matching, disjoint and excess genes of two genomes
    InnovationTracker: Assigns innovation numbers to new connection genes
"""

from neurostrand.genotype.connection_gene    import ConnectionGene
from neurostrand.genotype.genome             import GeneAlignment, Genome
from neurostrand.genotype.innovation_tracker import InnovationTracker
from neurostrand.genotype.node_gene          import NodeType, NodeGene

__all__ = ['ConnectionGene',
           'GeneAlignment',
           'Genome',
           'InnovationTracker',
           'NodeGene',
           'NodeType']
