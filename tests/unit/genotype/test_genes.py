"""
Unit tests for NeuronGene, ConnectionGene and the gene mutation operator.
"""

import pytest
import random
from unittest.mock import Mock

from synevo.activations           import SquashKind
from synevo.genotype              import ConnectionGene, LayerType, NeuronGene, mutate_gene


@pytest.fixture
def mock_rng():
    return Mock(spec=random.Random)


# ============================================================================
# Test: mutate_gene
# ============================================================================

class TestMutateGene:
    """Test the multiplicative mutation of a single gene."""

    def test_mutation_applies_factor(self, mock_rng):
        """factor = 1 + ((U1 - 0.5) * 3 + (U2 - 0.5))"""
        mock_rng.random.side_effect = [0.1, 0.75, 0.25]
        assert mutate_gene(2.0, 0.5, mock_rng) == pytest.approx(3.0)

    def test_mutation_with_mean_factor(self, mock_rng):
        mock_rng.random.side_effect = [0.0, 0.5, 0.5]
        assert mutate_gene(-0.4, 1.0, mock_rng) == pytest.approx(-0.4)

    def test_mutation_can_flip_sign(self, mock_rng):
        # factor = 1 + (-1.5 - 0.5) = -1
        mock_rng.random.side_effect = [0.0, 0.0, 0.0]
        assert mutate_gene(0.3, 1.0, mock_rng) == pytest.approx(-0.3)

    def test_no_mutation_consumes_one_draw(self, mock_rng):
        mock_rng.random.side_effect = [0.9]
        assert mutate_gene(1.5, 0.2, mock_rng) == 1.5
        assert mock_rng.random.call_count == 1

    def test_rate_zero_never_mutates(self):
        rng = random.Random(0)
        assert all(mutate_gene(0.7, 0.0, rng) == 0.7 for _ in range(100))

    def test_rate_one_always_mutates(self):
        rng = random.Random(0)
        assert all(mutate_gene(0.7, 1.0, rng) != 0.7 for _ in range(100))

    def test_zero_gene_stays_zero(self):
        """Mutation is multiplicative: there is no additive drift."""
        rng = random.Random(3)
        assert all(mutate_gene(0.0, 1.0, rng) == 0.0 for _ in range(20))

    def test_factor_bounds(self):
        """The factor lies in [-1, 3]."""
        rng = random.Random(5)
        for _ in range(500):
            value = mutate_gene(1.0, 1.0, rng)
            assert -1.0 <= value <= 3.0


# ============================================================================
# Test: NeuronGene
# ============================================================================

class TestNeuronGene:
    """Test NeuronGene construction, mutation and conversion."""

    def test_initialization(self):
        gene = NeuronGene(0.25, SquashKind.TANH, LayerType.OUTPUT)
        assert gene.bias   == 0.25
        assert gene.squash is SquashKind.TANH
        assert gene.layer  is LayerType.OUTPUT

    def test_defaults(self):
        gene = NeuronGene(0.0)
        assert gene.squash is SquashKind.LOGISTIC
        assert gene.layer  is LayerType.HIDDEN

    def test_squash_by_name(self):
        assert NeuronGene(0.0, "relu").squash is SquashKind.RELU

    def test_mutate_changes_bias_only(self, mock_rng):
        mock_rng.random.side_effect = [0.0, 1.0, 0.5]   # factor 2.5
        gene = NeuronGene(0.2, SquashKind.IDENTITY, LayerType.INPUT)
        gene.mutate(1.0, mock_rng)
        assert gene.bias   == pytest.approx(0.5)
        assert gene.squash is SquashKind.IDENTITY
        assert gene.layer  is LayerType.INPUT

    def test_dict_round_trip(self):
        gene = NeuronGene(-0.05, SquashKind.HLIM, LayerType.HIDDEN)
        data = gene.to_dict()
        assert data == {"bias": -0.05, "squash": "HLIM", "layer": "HIDDEN"}
        assert NeuronGene.from_dict(data) == gene

    def test_equality(self):
        assert NeuronGene(0.1) == NeuronGene(0.1)
        assert NeuronGene(0.1) != NeuronGene(0.2)
        assert NeuronGene(0.1) != NeuronGene(0.1, layer=LayerType.OUTPUT)

    def test_str(self):
        assert str(NeuronGene(0.5, SquashKind.LOGISTIC, LayerType.OUTPUT)) == "[O,LOG,b=+0.50]"


# ============================================================================
# Test: ConnectionGene
# ============================================================================

class TestConnectionGene:
    """Test ConnectionGene construction, mutation and conversion."""

    def test_initialization(self):
        gene = ConnectionGene(0, 3, 0.5)
        assert gene.from_index  == 0
        assert gene.to_index    == 3
        assert gene.weight      == 0.5
        assert gene.gater_index is None

    def test_gated_initialization(self):
        assert ConnectionGene(0, 3, 0.5, gater_index=2).gater_index == 2

    def test_mutate_changes_weight_only(self, mock_rng):
        mock_rng.random.side_effect = [0.0, 0.5, 1.0]   # factor 1.5
        gene = ConnectionGene(1, 2, -0.4, 0)
        gene.mutate(0.2, mock_rng)
        assert gene.weight == pytest.approx(-0.6)
        assert (gene.from_index, gene.to_index, gene.gater_index) == (1, 2, 0)

    def test_dict_round_trip(self):
        gene = ConnectionGene(2, 5, 0.125, 4)
        data = gene.to_dict()
        assert data == {"from": 2, "to": 5, "weight": 0.125, "gater": 4}
        assert ConnectionGene.from_dict(data) == gene

    def test_from_dict_without_gater(self):
        gene = ConnectionGene.from_dict({"from": 0, "to": 1, "weight": 1.0})
        assert gene.gater_index is None

    def test_str(self):
        assert str(ConnectionGene(1, 4, -0.5)) == "[01=>04,-0.50]"
        assert str(ConnectionGene(1, 4, 0.5, 3)) == "[01=>04,+0.50,g03]"
