"""
Bag-of-words vectorization for the traditional classifier.

Documents are lowercased and split into maximal runs of word characters.
Counting is done by scikit-learn's CountVectorizer; weights use the plain
(count / total terms) * ln(N / df) formula, with no smoothing.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np
from sklearn.feature_extraction.text import CountVectorizer


logger = logging.getLogger(__name__)

TermVector = Dict[str, float]

TOKEN_PATTERN = r"(?u)\w+"


def _count_vectorizer() -> CountVectorizer:
    return CountVectorizer(lowercase=True, token_pattern=TOKEN_PATTERN)


_analyzer = _count_vectorizer().build_analyzer()


def tokenize(text: str) -> List[str]:
    """Lowercase a document and return its word tokens in order."""
    return _analyzer(text)


def count_matrix(corpus: Sequence[str]) -> Tuple[Optional[Any], List[str]]:
    """
    Count term occurrences for every document of a corpus.

    Returns:
        (sparse documents x terms count matrix, vocabulary), or (None, []) when the
        corpus holds no word token at all
    """
    vectorizer = _count_vectorizer()
    try:
        counts = vectorizer.fit_transform(list(corpus))
    except ValueError:
        # Raised for an empty vocabulary
        return None, []
    return counts, vectorizer.get_feature_names_out().tolist()


def term_frequencies(text: str) -> Dict[str, int]:
    """Count occurrences of each term in a document."""
    counts, vocabulary = count_matrix([text])
    if counts is None:
        return {}
    row = counts.toarray()[0]
    column = {term: idx for idx, term in enumerate(vocabulary)}
    # First-seen order
    return {term: int(row[column[term]]) for term in tokenize(text)}


def document_frequencies(corpus: Sequence[str]) -> Dict[str, int]:
    """Count, for each term, how many documents contain it at least once."""
    counts, vocabulary = count_matrix(corpus)
    if counts is None:
        return {}
    doc_freq = np.asarray((counts > 0).sum(axis=0)).ravel()
    return {term: int(doc_freq[idx]) for idx, term in enumerate(vocabulary)}


def vectorize(corpus: Sequence[str]) -> List[TermVector]:
    """
    Build TF-IDF vectors for every document of a corpus.

    The weight of a term is (count / total terms in the document) * ln(N / df),
    where N is the corpus size and df the term's document frequency. A term
    found in every document weighs 0; an empty document yields an empty vector.

    Args:
        corpus: Documents to vectorize

    Returns:
        One TF-IDF vector per document, aligned with the corpus by index
    """
    counts, vocabulary = count_matrix(corpus)
    if counts is None:
        return [{} for _ in corpus]

    dense = counts.toarray().astype(float)
    doc_freq = (dense > 0).sum(axis=0)
    idf = np.log(len(corpus) / doc_freq)
    row_totals = dense.sum(axis=1)

    tfidf_vectors: List[TermVector] = []
    for row, total_terms in zip(dense, row_totals):
        if total_terms == 0:
            tfidf_vectors.append({})
            continue
        weights = (row / total_terms) * idf
        tfidf_vectors.append({vocabulary[idx]: float(weights[idx]) for idx in np.flatnonzero(row)})

    logger.debug(f"Vectorized {len(corpus)} documents over {len(vocabulary)} terms")
    return tfidf_vectors
