from charles.genes.codec import GeneCodec, bits_per_gene, flip_bit

__all__ = [
    "GeneCodec",
    "bits_per_gene",
    "flip_bit",
]
