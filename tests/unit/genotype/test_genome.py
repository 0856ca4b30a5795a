"""
Unit tests for the Genome class.

Tests cover construction, dictionary conversion, validation, crossover and mutation.
"""

import pytest
import random
from unittest.mock import Mock

from synevo.activations import SquashKind
from synevo.errors      import InvalidReferenceError, ShapeMismatchError
from synevo.genotype    import ConnectionGene, Genome, LayerType, NeuronGene


# ============================================================================
# Test Fixtures
# ============================================================================

def make_genome(biases, weights):
    """A genome with one input, len(biases)-2 hidden and one output neuron, chained."""
    layers = [LayerType.INPUT] + [LayerType.HIDDEN] * (len(biases) - 2) + [LayerType.OUTPUT]
    neurons = [NeuronGene(b, SquashKind.LOGISTIC, layer) for b, layer in zip(biases, layers)]
    conns   = [ConnectionGene(i, i + 1, w) for i, w in enumerate(weights)]
    return Genome(neurons, conns)


@pytest.fixture
def genome_a():
    return make_genome([1.0, 2.0, 3.0, 4.0], [0.1, 0.2, 0.3])


@pytest.fixture
def genome_b():
    return make_genome([10.0, 20.0, 30.0, 40.0], [0.5, 0.6, 0.7])


@pytest.fixture
def mock_rng():
    return Mock(spec=random.Random)


# ============================================================================
# Test: Basics
# ============================================================================

class TestGenomeBasics:
    """Test genome properties."""

    def test_empty_genome(self):
        genome = Genome()
        assert genome.shape == (0, 0)
        assert genome.biases == []
        assert genome.weights == []

    def test_properties(self, genome_a):
        assert genome_a.shape   == (4, 3)
        assert genome_a.biases  == [1.0, 2.0, 3.0, 4.0]
        assert genome_a.weights == [0.1, 0.2, 0.3]

    def test_positions(self, genome_a):
        assert genome_a.positions(LayerType.INPUT)  == [0]
        assert genome_a.positions(LayerType.HIDDEN) == [1, 2]
        assert genome_a.positions(LayerType.OUTPUT) == [3]

    def test_copy_is_independent(self, genome_a):
        clone = genome_a.copy()
        assert clone == genome_a
        clone.neuron_genes[0].bias = 99.0
        clone.conn_genes[0].weight = 99.0
        assert genome_a.biases[0]  == 1.0
        assert genome_a.weights[0] == 0.1

    def test_equality(self, genome_a, genome_b):
        assert genome_a == genome_a.copy()
        assert genome_a != genome_b


# ============================================================================
# Test: Dictionary conversion
# ============================================================================

class TestGenomeDict:
    """Test to_dict() / from_dict()."""

    def test_round_trip(self, genome_a):
        genome_a.conn_genes[1].gater_index = 0
        assert Genome.from_dict(genome_a.to_dict()) == genome_a

    def test_to_dict_format(self):
        genome = Genome([NeuronGene(0.0, SquashKind.IDENTITY, LayerType.INPUT),
                         NeuronGene(0.5, SquashKind.LOGISTIC, LayerType.OUTPUT)],
                        [ConnectionGene(0, 1, -1.0)])
        assert genome.to_dict() == {
            "neurons": [
                {"bias": 0.0, "squash": "IDENTITY", "layer": "INPUT"},
                {"bias": 0.5, "squash": "LOGISTIC", "layer": "OUTPUT"},
            ],
            "connections": [
                {"from": 0, "to": 1, "weight": -1.0, "gater": None},
            ]
        }

    def test_from_dict_rejects_bad_reference(self):
        data = {"neurons": [{"bias": 0.0, "squash": "IDENTITY", "layer": "INPUT"}],
                "connections": [{"from": 0, "to": 5, "weight": 1.0}]}
        with pytest.raises(InvalidReferenceError, match="destination neuron: 5"):
            Genome.from_dict(data)

    def test_from_dict_rejects_bad_gater(self):
        data = {"neurons": [{"bias": 0.0}, {"bias": 0.0}],
                "connections": [{"from": 0, "to": 1, "weight": 1.0, "gater": 7}]}
        with pytest.raises(InvalidReferenceError, match="gater neuron: 7"):
            Genome.from_dict(data)

    def test_from_dict_rejects_non_list(self):
        with pytest.raises(ShapeMismatchError):
            Genome.from_dict({"neurons": {"bias": 0.0}})


# ============================================================================
# Test: Crossover
# ============================================================================

class TestGenomeCrossover:
    """Test single point crossover of bias genes."""

    def test_swaps_biases_past_cut_point(self, genome_a, genome_b, mock_rng):
        mock_rng.randint.side_effect = [2, 1]
        offspring = genome_a.crossover(genome_b, mock_rng)

        assert offspring is genome_a
        assert genome_a.biases == [1.0, 2.0, 30.0, 40.0]
        assert genome_b.biases == [10.0, 20.0, 3.0, 4.0]

    def test_returns_other_genome(self, genome_a, genome_b, mock_rng):
        mock_rng.randint.side_effect = [3, 0]
        offspring = genome_a.crossover(genome_b, mock_rng)

        assert offspring is genome_b
        assert genome_b.biases == [10.0, 20.0, 30.0, 4.0]

    def test_cut_point_zero_swaps_all_biases(self, genome_a, genome_b, mock_rng):
        mock_rng.randint.side_effect = [0, 1]
        genome_a.crossover(genome_b, mock_rng)
        assert genome_a.biases == [10.0, 20.0, 30.0, 40.0]
        assert genome_b.biases == [1.0, 2.0, 3.0, 4.0]

    def test_cut_point_range(self, genome_a, genome_b, mock_rng):
        mock_rng.randint.side_effect = [1, 1]
        genome_a.crossover(genome_b, mock_rng)
        assert mock_rng.randint.call_args_list[0].args == (0, 3)
        assert mock_rng.randint.call_args_list[1].args == (0, 1)

    def test_weights_never_exchanged(self, genome_a, genome_b, mock_rng):
        mock_rng.randint.side_effect = [0, 1]
        genome_a.crossover(genome_b, mock_rng)
        assert genome_a.weights == [0.1, 0.2, 0.3]
        assert genome_b.weights == [0.5, 0.6, 0.7]

    def test_weight_purity(self):
        """The weights of the offspring are exactly those of one parent."""
        rng = random.Random(11)
        weights_a = [0.1, 0.2, 0.3]
        weights_b = [0.5, 0.6, 0.7]
        for _ in range(50):
            a = make_genome([1.0, 2.0, 3.0, 4.0], weights_a)
            b = make_genome([5.0, 6.0, 7.0, 8.0], weights_b)
            offspring = a.crossover(b, rng)
            assert offspring.weights in (weights_a, weights_b)

    def test_biases_are_conserved(self):
        """Each position holds one of the two parents' biases, and the pair is preserved."""
        rng = random.Random(7)
        for _ in range(20):
            a = make_genome([1.0, 2.0, 3.0, 4.0], [0.1, 0.2, 0.3])
            b = make_genome([5.0, 6.0, 7.0, 8.0], [0.5, 0.6, 0.7])
            a.crossover(b, rng)
            for bias_a, bias_b, original in zip(a.biases, b.biases, [(1.0, 5.0), (2.0, 6.0), (3.0, 7.0), (4.0, 8.0)]):
                assert sorted((bias_a, bias_b)) == sorted(original)

    def test_shape_mismatch(self, genome_a, mock_rng):
        other = make_genome([1.0, 2.0, 3.0], [0.1, 0.2])
        with pytest.raises(ShapeMismatchError):
            genome_a.crossover(other, mock_rng)

    def test_empty_genomes(self, mock_rng):
        with pytest.raises(ShapeMismatchError):
            Genome().crossover(Genome(), mock_rng)


# ============================================================================
# Test: Mutation
# ============================================================================

class TestGenomeMutation:
    """Test mutation of all bias and weight genes."""

    def test_rate_zero_changes_nothing(self, genome_a):
        original = genome_a.copy()
        genome_a.mutate(0.0, random.Random(1))
        assert genome_a == original

    def test_mutates_biases_then_weights(self, mock_rng):
        genome = make_genome([1.0, 2.0], [0.5])
        # bias 1: mutated x2, bias 2: skipped, weight: mutated x0.5
        mock_rng.random.side_effect = [0.0, 5/6, 0.5,
                                       0.9,
                                       0.0, 1/3, 0.5]
        genome.mutate(0.5, mock_rng)
        assert genome.biases  == pytest.approx([2.0, 2.0])
        assert genome.weights == pytest.approx([0.25])

    def test_rate_one_touches_every_gene(self, genome_a):
        original = genome_a.copy()
        genome_a.mutate(1.0, random.Random(2))
        assert all(x != y for x, y in zip(genome_a.biases, original.biases))
        assert all(x != y for x, y in zip(genome_a.weights, original.weights))

    def test_mutation_keeps_structure(self, genome_a):
        genome_a.conn_genes[0].gater_index = 2
        genome_a.mutate(1.0, random.Random(3))
        assert [(g.from_index, g.to_index, g.gater_index) for g in genome_a.conn_genes] == [(0, 1, 2), (1, 2, None), (2, 3, None)]
        assert [g.layer for g in genome_a.neuron_genes] == [LayerType.INPUT, LayerType.HIDDEN, LayerType.HIDDEN, LayerType.OUTPUT]
