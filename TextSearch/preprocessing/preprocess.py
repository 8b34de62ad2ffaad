from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Set
import json
import os

from loguru import logger

from .tokenizer import RegexSplitTokenizer

DATA_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "data")


class TokenPreprocessor(ABC):
    @abstractmethod
    def preprocess(self, token: str) -> str:
        raise NotImplementedError()

    def preprocess_all(self, tokens: List[str]) -> List[str]:
        return [self.preprocess(token) for token in tokens]


class LowercasePreprocessor(TokenPreprocessor):
    def preprocess(self, token: str) -> str:
        return token.lower()


def load_stop_words(language: str = "both", stop_words_dir: str = DATA_DIR,
                    stop_words_file: Optional[str] = None) -> Set[str]:
    """
    Load stop words from JSON word lists.

    Args:
        language: Can be 'hr', 'en' or 'both' to determine which packaged lists to use
        stop_words_dir: Directory containing the stopwords-<language>.json files
        stop_words_file: Explicit JSON list to use instead of the packaged ones

    Returns:
        Set of lowercased stop words
    """
    if stop_words_file:
        paths = [stop_words_file]
    elif language in ("hr", "en"):
        paths = [os.path.join(stop_words_dir, f"stopwords-{language}.json")]
    else:  # both
        paths = [os.path.join(stop_words_dir, "stopwords-hr.json"),
                 os.path.join(stop_words_dir, "stopwords-en.json")]

    stop_words = set()
    for path in paths:
        if not os.path.exists(path):
            logger.warning("Stop words file {} not found, skipping", path)
            continue
        try:
            with open(path, 'r', encoding='utf-8') as f:
                words = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Could not load stop words from {}: {}, skipping", path, e)
            continue
        if not isinstance(words, list):
            logger.warning("Stop words file {} is not a JSON list, skipping", path)
            continue
        stop_words.update(str(word).strip().lower() for word in words)

    logger.debug("Loaded {} stop words", len(stop_words))
    return stop_words


class StopWordsPreprocessor(TokenPreprocessor):
    """Preprocessor for removing stop words."""

    def __init__(self, stop_words: Iterable[str]):
        """
        Args:
            stop_words: Words to remove, matched case-insensitively
        """
        self.stop_words = frozenset(word.lower() for word in stop_words)

    def preprocess(self, token: str) -> str:
        """Replace a stop word with an empty string, which drops it from the output."""
        if token.lower() in self.stop_words:
            return ""
        return token


class PreprocessingPipeline:
    """Tokenizer followed by a chain of token preprocessors."""

    def __init__(self, preprocessors, tokenizer=None, name="Default Pipeline"):
        """
        Initialize a preprocessing pipeline.

        Args:
            preprocessors: List of preprocessor objects, applied in order
            tokenizer: Tokenizer to split raw text (defaults to RegexSplitTokenizer)
            name: Name of the pipeline
        """
        self.preprocessors = preprocessors
        self.tokenizer = tokenizer or RegexSplitTokenizer()
        self.name = name

    def preprocess(self, tokens: List[str]) -> List[str]:
        """
        Apply all preprocessors to the tokens.

        Returns:
            List of non-empty processed tokens
        """
        for preprocessor in self.preprocessors:
            tokens = [token for token in preprocessor.preprocess_all(tokens) if token]
        return tokens

    def process_text(self, text: str) -> List[str]:
        """Tokenize raw text and run the result through the pipeline."""
        return self.preprocess(self.tokenizer.tokenize(text))


def create_pipeline(config=None, stop_words: Optional[Iterable[str]] = None) -> PreprocessingPipeline:
    """
    Create a preprocessing pipeline based on configuration.

    Args:
        config: Configuration dictionary (see TextSearch.config)
        stop_words: Explicit stop words, overriding the configured word lists

    Returns:
        PreprocessingPipeline object
    """
    preproc_config = (config or {}).get("preprocessing", {})
    stop_config = preproc_config.get("stop_words", {})

    # Terms are always lowercase
    preprocessors = [LowercasePreprocessor()]
    pipeline_name = ["Lowercase"]

    if stop_words is None and stop_config.get("use", True):
        stop_words = load_stop_words(
            language=stop_config.get("language", "both"),
            stop_words_file=stop_config.get("file")
        )

    if stop_words:
        preprocessors.append(StopWordsPreprocessor(stop_words))
        pipeline_name.append(f"StopWords({len(preprocessors[-1].stop_words)})")

    return PreprocessingPipeline(preprocessors, name="+".join(pipeline_name))
