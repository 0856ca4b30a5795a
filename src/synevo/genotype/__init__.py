"""
Genotype Package

This package implements the genetic representation of a network: the part of
a network that is inherited, recombined and mutated from one generation to the
next.

A genome consists of two ordered lists of genes:
- Neuron genes:     bias, squashing function and layer of each neuron
- Connection genes: endpoints, weight and gater of each connection

Modules:
    neuron_gene:     LayerType enumeration and NeuronGene class
    connection_gene: ConnectionGene class
    genome:          Genome class
    id_allocator:    IdAllocator class
    mutation:        mutate_gene function

Exported Classes:
    LayerType:      Enumeration for neuron layers (INPUT, HIDDEN, OUTPUT)
    NeuronGene:     Gene encoding a single neuron
    ConnectionGene: Gene encoding a weighted connection between neurons
    Genome:         Ordered genes representing a complete network
    IdAllocator:    Per-network source of neuron and connection IDs
"""

from synevo.genotype.connection_gene import ConnectionGene
from synevo.genotype.genome          import Genome
from synevo.genotype.id_allocator    import IdAllocator
from synevo.genotype.mutation        import mutate_gene
from synevo.genotype.neuron_gene     import LayerType, NeuronGene

__all__ = ['ConnectionGene',
           'Genome',
           'IdAllocator',
           'LayerType',
           'NeuronGene',
           'mutate_gene']
