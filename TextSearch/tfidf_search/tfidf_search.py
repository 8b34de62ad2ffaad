"""
TF-IDF search module for information retrieval using the TF-IDF weighting scheme.
Supports ranking documents by relevance to queries based on cosine similarity.
"""
import math
import time
from collections import Counter
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from loguru import logger

from ..documents import list_documents, read_document
from ..errors import EmptyQueryError, ResultIndexError
from ..preprocessing.preprocess import PreprocessingPipeline, create_pipeline
from ..preprocessing.tokenizer import count_terms
from .vector import DocumentVector, Result, build_vector, compute_cosine_similarity

MAX_RESULTS = 10
QUERY_NAME = "query"


class CorpusIndex:
    """
    Read-only index over a fixed corpus.

    Holds the vocabulary, a term -> position map, the IDF weights and one
    TF-IDF vector per document. Built once and passed explicitly to every
    query.
    """

    def __init__(self, vocabulary: Sequence[str], idf: Sequence[float],
                 document_vectors: Sequence[DocumentVector]):
        if len(vocabulary) != len(idf):
            raise ValueError("Vocabulary and IDF vector must have the same length")
        self.vocabulary = tuple(vocabulary)
        self.term_index = {term: i for i, term in enumerate(self.vocabulary)}
        self.idf = tuple(idf)
        self.document_vectors = tuple(document_vectors)

    def __contains__(self, term):
        return term in self.term_index

    def __len__(self):
        return len(self.document_vectors)

    def filter_terms(self, terms: Iterable[str]) -> List[str]:
        """Keep only the terms that are part of the vocabulary."""
        return [term for term in terms if term in self.term_index]

    def build_vector(self, file_path: str, term_counts: Mapping[str, int]) -> DocumentVector:
        """Build a vector against this index's vocabulary and IDF weights."""
        return build_vector(file_path, term_counts, self.idf, self.term_index)


def build_vocabulary(documents: Iterable[Tuple[str, str]], pipeline: PreprocessingPipeline
                     ) -> Tuple[List[str], Dict[str, Counter]]:
    """
    Build vocabulary from documents.

    Args:
        documents: Iterable of (path, raw text) pairs
        pipeline: Preprocessing pipeline used to extract terms

    Returns:
        Tuple of the ordered vocabulary and a dictionary mapping each
        document path to its term-count map
    """
    vocabulary = {}  # insertion-ordered set
    document_counts = {}

    for path, text in documents:
        term_counts = count_terms(pipeline.process_text(text))
        document_counts[path] = term_counts
        for term in term_counts:
            vocabulary.setdefault(term, None)

    return list(vocabulary), document_counts


def compute_idf(vocabulary: Sequence[str], document_counts: Mapping[str, Mapping[str, int]]) -> List[float]:
    """
    Calculate the inverse document frequency for every vocabulary term.
    IDF(t) = ln(N / DF(t))

    Args:
        vocabulary: Ordered vocabulary
        document_counts: Dictionary mapping document paths to term-count maps

    Returns:
        IDF weights, index-aligned with the vocabulary
    """
    document_frequency = Counter()
    for term_counts in document_counts.values():
        # Each document counts once per term, however often the term repeats
        document_frequency.update(term for term, count in term_counts.items() if count > 0)

    num_documents = len(document_counts)
    idf = []
    for term in vocabulary:
        df = document_frequency[term]
        if df == 0:
            # Cannot happen for a vocabulary built from the same documents
            raise ValueError(f"Term '{term}' does not occur in any document")
        idf.append(math.log(num_documents / df))
    return idf


def build_index(documents: Iterable[Tuple[str, str]], pipeline: PreprocessingPipeline) -> CorpusIndex:
    """
    Index an in-memory corpus.

    Args:
        documents: Iterable of (path, raw text) pairs
        pipeline: Preprocessing pipeline used to extract terms

    Returns:
        Ready-to-query CorpusIndex
    """
    vocabulary, document_counts = build_vocabulary(documents, pipeline)
    idf = compute_idf(vocabulary, document_counts)
    term_index = {term: i for i, term in enumerate(vocabulary)}

    document_vectors = [
        build_vector(path, term_counts, idf, term_index)
        for path, term_counts in document_counts.items()
    ]
    return CorpusIndex(vocabulary, idf, document_vectors)


def load_corpus(directory: str, pipeline: Optional[PreprocessingPipeline] = None,
                encoding: str = "utf-8") -> CorpusIndex:
    """
    Read every document in a directory and index it.

    Args:
        directory: Path to the document directory (non-recursive)
        pipeline: Preprocessing pipeline (defaults to one built from the default config)
        encoding: Text encoding of the documents

    Returns:
        Ready-to-query CorpusIndex

    Raises:
        CorpusError: The directory does not exist or cannot be listed
        DocumentReadError: A document cannot be read; the whole load is aborted
    """
    pipeline = pipeline or create_pipeline()
    start_time = time.time()

    paths = list_documents(directory)
    logger.info("Indexing {} document(s) from {}", len(paths), directory)

    def read_all():
        for path in paths:
            logger.debug("Reading {}", path)
            yield path, read_document(path, encoding)

    index = build_index(read_all(), pipeline)

    logger.info(
        "Indexed {} documents ({} terms) in {:.2f} seconds",
        len(index), len(index.vocabulary), time.time() - start_time
    )
    return index


def prepare_query(text: str, pipeline: PreprocessingPipeline, index: CorpusIndex) -> List[str]:
    """
    Turn raw query text into the list of terms known to the index.

    Raises:
        EmptyQueryError: No query term is part of the vocabulary
    """
    terms = index.filter_terms(pipeline.process_text(text))
    if not terms:
        raise EmptyQueryError(f"No term of '{text}' is part of the vocabulary")
    return terms


def rank(query_vector: DocumentVector, document_vectors: Iterable[DocumentVector],
         limit: int = MAX_RESULTS) -> List[Result]:
    """
    Rank documents by similarity to the query vector.

    Args:
        query_vector: TF-IDF vector of the query
        document_vectors: Vectors of the indexed documents
        limit: Number of top results to return

    Returns:
        Results with positive similarity, best first, at most ``limit`` long
    """
    results = []
    for document_vector in document_vectors:
        similarity = compute_cosine_similarity(query_vector, document_vector)
        if similarity > 0:
            results.append(Result(similarity, document_vector.file_path))

    # Stable sort keeps the indexing order among equal scores
    results.sort(key=lambda result: result.similarity, reverse=True)
    return results[:max(limit, 0)]


def search(query_terms: Sequence[str], index: CorpusIndex, limit: int = MAX_RESULTS) -> List[Result]:
    """
    Search for documents matching already preprocessed query terms.

    Args:
        query_terms: Terms of the query, restricted to the vocabulary
        index: Corpus index to search
        limit: Number of top results to return

    Returns:
        Ranked list of results
    """
    if not query_terms:
        return []

    logger.debug("Searching for {}", list(query_terms))
    query_vector = index.build_vector(QUERY_NAME, count_terms(query_terms))
    return rank(query_vector, index.document_vectors, limit)


def get_result(results: Optional[Sequence[Result]], position: int) -> Result:
    """
    Fetch a result of an earlier query by its display position (0-based).

    Raises:
        ResultIndexError: No query was run yet or the position is out of range
    """
    if results is None:
        raise ResultIndexError("No query has been run yet")
    if position < 0 or position >= len(results):
        raise ResultIndexError(f"There is no result at position {position}")
    return results[position]
