from abc import ABC, abstractmethod
from enum import Enum

from loguru import logger

from ..documents import read_document
from ..errors import DocumentReadError, EmptyQueryError, ResultIndexError
from ..tfidf_search.tfidf_search import get_result, prepare_query, search
from .environment import SearchEnvironment

SEPARATOR = "-" * 64


class CommandStatus(Enum):
    CONTINUE = "continue"
    EXIT = "exit"


class Command(ABC):
    NAME = None

    @abstractmethod
    def execute(self, environment: SearchEnvironment) -> CommandStatus:
        raise NotImplementedError()


class QueryCommand(Command):
    """Rank the documents against the query given as arguments."""

    NAME = "query"

    def execute(self, environment: SearchEnvironment) -> CommandStatus:
        text = " ".join(environment.arguments)
        try:
            terms = prepare_query(text, environment.pipeline, environment.index)
        except EmptyQueryError:
            environment.write_line("Query is empty, please enter another query", style="yellow")
            return CommandStatus.CONTINUE

        environment.write_line(f"Query is: [{', '.join(terms)}]")
        environment.set_results(search(terms, environment.index, environment.max_results))
        environment.write_line(f"Top {environment.max_results} results:", style="bold cyan")
        environment.print_results()
        return CommandStatus.CONTINUE


class ResultsCommand(Command):
    """Show the results of the last query again."""

    NAME = "results"

    def execute(self, environment: SearchEnvironment) -> CommandStatus:
        environment.print_results()
        return CommandStatus.CONTINUE


class TypeCommand(Command):
    """
    Print the full text of one result of the last query.

    A result whose file can no longer be read ends the session.
    """

    NAME = "type"

    def execute(self, environment: SearchEnvironment) -> CommandStatus:
        args = environment.arguments
        if len(args) != 1:
            environment.write_line(f"Expected 1 argument, got {len(args)}", style="red")
            return CommandStatus.CONTINUE

        try:
            position = int(args[0])
        except ValueError:
            environment.write_line(f"Cannot interpret '{args[0]}' as a result index.", style="red")
            return CommandStatus.CONTINUE

        try:
            result = get_result(environment.results, position)
        except ResultIndexError:
            environment.write_line(f"There is no result at position {position}", style="red")
            return CommandStatus.CONTINUE

        try:
            content = read_document(result.file_path, environment.encoding)
        except DocumentReadError as e:
            logger.error("{}", e)
            environment.write_line(f"File '{result.file_path}' was deleted or cannot be read.", style="bold red")
            environment.write_line("Closing program...", style="bold red")
            return CommandStatus.EXIT

        environment.write_line(f"Document: {result.file_path}", style="bold")
        environment.write_line(SEPARATOR)
        environment.write_line(content)
        environment.write_line(SEPARATOR)
        return CommandStatus.CONTINUE


class ExitCommand(Command):
    NAME = "exit"

    def execute(self, environment: SearchEnvironment) -> CommandStatus:
        return CommandStatus.EXIT


COMMANDS = {
    command.NAME: command
    for command in (QueryCommand(), ResultsCommand(), TypeCommand(), ExitCommand())
}
