from __future__ import annotations

from typing import Generic, Sequence, TypeVar

from loguru import logger

from charles.exceptions import GeneEncodingError, PopulationError

T = TypeVar("T")


def bits_per_gene(alphabet: Sequence) -> int:
    """Smallest bit width able to index every position of *alphabet*."""
    if not alphabet:
        raise PopulationError("Alphabet must contain at least one value")
    return (len(alphabet) - 1).bit_length()


def flip_bit(bit: str) -> str:
    return "1" if bit == "0" else "0"


class GeneCodec(Generic[T]):
    """Maps gene sequences to fixed-width binary strings and back.

    Every gene is encoded as its position in the alphabet, zero-padded to
    ``bits_per_gene`` bits. Decoding reduces each chunk modulo the alphabet
    size, so bit patterns produced by mutation always land on a legal value.
    Only equality is required of the gene values.
    """

    def __init__(self, alphabet: Sequence[T]):
        self.alphabet: tuple[T, ...] = tuple(alphabet)
        self.bits_per_gene = bits_per_gene(self.alphabet)

        if self.bits_per_gene == 0:
            logger.warning(
                "[GeneCodec] Alphabet has a single value; mutation cannot change genes"
            )
        if any(v in self.alphabet[:i] for i, v in enumerate(self.alphabet)):
            logger.warning(
                "[GeneCodec] Alphabet contains repeated values; the first position wins"
            )

    def __len__(self) -> int:
        return len(self.alphabet)

    def index_of(self, gene: T) -> int:
        try:
            return self.alphabet.index(gene)
        except ValueError:
            raise GeneEncodingError(
                f"Gene {gene!r} is not part of the alphabet {list(self.alphabet)}"
            ) from None

    def encode(self, genes: Sequence[T]) -> str:
        """Concatenate the padded binary index of every gene, in order."""
        if self.bits_per_gene == 0:
            for gene in genes:
                self.index_of(gene)
            return ""
        return "".join(
            format(self.index_of(gene), f"0{self.bits_per_gene}b") for gene in genes
        )

    def decode(self, bits: str, length: int | None = None) -> tuple[T, ...]:
        """Split *bits* into gene-sized chunks and map them back to values.

        Args:
            bits: Binary string, a multiple of ``bits_per_gene`` long
            length: Number of genes; only needed for single-value alphabets,
                where the encoding carries no bits at all

        Returns:
            Tuple of alphabet values
        """
        width = self.bits_per_gene
        if width == 0:
            return (self.alphabet[0],) * (length or 0)
        if len(bits) % width:
            raise GeneEncodingError(
                f"Bit string of length {len(bits)} is not a multiple of {width}"
            )
        size = len(self.alphabet)
        return tuple(
            self.alphabet[int(bits[i : i + width], 2) % size]
            for i in range(0, len(bits), width)
        )
