"""
neurostrand - NEAT genomes for neuroevolution.

This package provides the genetic encoding used by NEAT (NeuroEvolution of
Augmenting Topologies): genomes made of node and connection genes, and the
operators that mutate, recombine and compare them. Population management,
selection and speciation are left to the caller.

Main components:
- genotype:      Genetic encoding (genomes, genes, innovation tracking)
- random_source: Explicit source of randomness for the stochastic operators
- serialization: Tagged (de)serialization registry
- config:        INI-file configuration of the operators' parameters

Example:
    >>> from neurostrand import Genome, InnovationTracker, RandomSource
    >>> random, tracker = RandomSource(seed=42), InnovationTracker()
    >>> parent1 = Genome(2, 1, True, random, tracker)
    >>> parent2 = parent1.clone()
    >>> parent2.add_random_node_gene(random, tracker)
    >>> child = parent1.crossover(parent2, 0.75, True, random)
"""

from loguru import logger

__version__ = "0.1.0"

# Library code stays silent unless the application asks for logs (see 'setup_logger')
logger.disable("neurostrand")

from neurostrand.config          import Config
from neurostrand.genotype        import (ConnectionGene, GeneAlignment, Genome,
                                         InnovationTracker, NodeGene, NodeType)
from neurostrand.random_source   import RandomSource
from neurostrand.serialization   import deserialize, dumps, loads, serialize
from neurostrand.utils.logger_setup import setup_logger

__all__ = [
    "Config",
    "ConnectionGene",
    "GeneAlignment",
    "Genome",
    "InnovationTracker",
    "NodeGene",
    "NodeType",
    "RandomSource",
    "deserialize",
    "dumps",
    "loads",
    "serialize",
    "setup_logger",
]
