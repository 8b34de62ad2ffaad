import sys
from typing import List, Optional, Sequence, TextIO

from rich.console import Console

from ..preprocessing.preprocess import PreprocessingPipeline
from ..tfidf_search.tfidf_search import MAX_RESULTS, CorpusIndex
from ..tfidf_search.vector import Result


class SearchEnvironment:
    """
    State of one interactive session.

    Owns the input stream, the output console, the arguments of the command
    being executed and the results of the last query. Use it as a context
    manager; an input stream other than stdin is closed on exit.
    """

    def __init__(self, index: CorpusIndex, pipeline: PreprocessingPipeline,
                 input_stream: Optional[TextIO] = None, console: Optional[Console] = None,
                 max_results: int = MAX_RESULTS, encoding: str = "utf-8"):
        self.index = index
        self.pipeline = pipeline
        self.max_results = max_results
        self.encoding = encoding
        self.input_stream = input_stream or sys.stdin
        self.console = console or Console()
        self.arguments: List[str] = []
        self.results: Optional[Sequence[Result]] = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
        return False

    def close(self):
        if self.input_stream is not sys.stdin and not self.input_stream.closed:
            self.input_stream.close()
        self.console.file.flush()

    def read_line(self, prompt: str = "") -> Optional[str]:
        """Prompt and read one line; returns None at end of input."""
        if prompt:
            self.write(prompt)
        line = self.input_stream.readline()
        if not line:
            return None
        return line.strip()

    def write(self, output: str, style: Optional[str] = None):
        self.console.print(output, style=style, end="", markup=False, emoji=False,
                           highlight=False, soft_wrap=True)

    def write_line(self, output: str = "", style: Optional[str] = None):
        self.console.print(output, style=style, markup=False, emoji=False,
                           highlight=False, soft_wrap=True)

    def set_results(self, results: Sequence[Result]):
        """Replace the results of the previous query."""
        self.results = tuple(results)

    def print_results(self):
        if self.results is None:
            self.write_line("Results are not defined yet. No query has been entered.", style="yellow")
            return
        if not self.results:
            self.write_line("No matching documents found.", style="yellow")
            return
        for i, result in enumerate(self.results):
            self.write_line(f"[{i:2d}] {result}")
