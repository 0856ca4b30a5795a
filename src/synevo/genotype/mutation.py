import random

def mutate_gene(value: float, rate: float, rng: random.Random) -> float:
    """
    Stochastically rescale a single gene.

    With probability 'rate' the gene is multiplied by
        1 + ((U1 - 0.5) * 3 + (U2 - 0.5))
    where U1, U2 are independent uniform(0, 1) draws; otherwise it is returned
    unchanged. The multiplier has mean 1, so mutation never adds drift.

    Parameters:
        value: the gene (a bias or a connection weight)
        rate:  the probability of mutating the gene
        rng:   source of randomness

    Returns:
        the (possibly) mutated gene
    """
    if rng.random() < rate:
        factor = 1 + ((rng.random() - 0.5) * 3 + (rng.random() - 0.5))
        value *= factor
    return value
