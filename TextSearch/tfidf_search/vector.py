import math
from typing import Dict, Mapping, NamedTuple, Sequence


class DocumentVector:
    """
    TF-IDF weighted vector of a single document (or of a query).

    The vector is dense, index-aligned with the corpus vocabulary, and its
    Euclidean norm is computed once on construction. Two vectors are equal
    when their paths are equal.
    """

    __slots__ = ("file_path", "tfidf", "norm")

    def __init__(self, file_path: str, tfidf: Sequence[float]):
        self.file_path = file_path
        self.tfidf = tuple(tfidf)
        self.norm = math.sqrt(sum(weight * weight for weight in self.tfidf))

    def __eq__(self, other):
        if not isinstance(other, DocumentVector):
            return NotImplemented
        return self.file_path == other.file_path

    def __hash__(self):
        return hash(self.file_path)

    def __repr__(self):
        return f"DocumentVector({self.file_path!r}, norm={self.norm:.4f})"


class Result(NamedTuple):
    """A ranked document: similarity to the query and the document path."""
    similarity: float
    file_path: str

    def __str__(self):
        return f"({self.similarity:.4f}) {self.file_path}"


def build_vector(file_path: str, term_counts: Mapping[str, int], idf: Sequence[float],
                 term_index: Dict[str, int]) -> DocumentVector:
    """
    Convert a term-count map into a TF-IDF vector.

    Args:
        file_path: Identifier of the vector (document path, or "query")
        term_counts: Dictionary mapping terms to their raw counts
        idf: IDF weights, index-aligned with the vocabulary
        term_index: Dictionary mapping each vocabulary term to its position

    Returns:
        DocumentVector with tfidf[i] = count(term_i) * idf[i]
    """
    tfidf = [0.0] * len(idf)
    for term, count in term_counts.items():
        i = term_index.get(term)
        if i is None:
            # Not part of the vocabulary
            continue
        tfidf[i] = count * idf[i]
    return DocumentVector(file_path, tfidf)


def dot_product(a: Sequence[float], b: Sequence[float]) -> float:
    """Dot product of two vectors."""
    return sum(ai * bi for ai, bi in zip(a, b))


def compute_cosine_similarity(first: DocumentVector, second: DocumentVector) -> float:
    """
    Compute cosine similarity between two document vectors.

    Returns:
        Cosine similarity score, 0.0 if either vector has zero norm
    """
    denominator = first.norm * second.norm
    if denominator == 0:
        return 0.0
    similarity = dot_product(first.tfidf, second.tfidf) / denominator
    # Rounding can push a perfect match just past 1.0
    return max(-1.0, min(1.0, similarity))
