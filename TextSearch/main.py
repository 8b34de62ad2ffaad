import argparse
import sys
from typing import List, Optional

from loguru import logger
from rich.console import Console
from rich.markup import escape

from TextSearch.config import load_config
from TextSearch.errors import SearchError
from TextSearch.log_setup import setup_logging
from TextSearch.preprocessing.preprocess import create_pipeline
from TextSearch.shell.commands import COMMANDS, CommandStatus
from TextSearch.shell.environment import SearchEnvironment
from TextSearch.tfidf_search.tfidf_search import load_corpus


def parse_input(line: str) -> List[str]:
    return line.split()


def run_console(environment: SearchEnvironment) -> None:
    """Read and execute commands until one asks to exit or input ends."""
    while True:
        line = environment.read_line("Enter command > ")
        if line is None:
            environment.write_line()
            break
        if not line:
            environment.write_line("No command entered.", style="yellow")
            continue

        name, *arguments = parse_input(line)
        command = COMMANDS.get(name)
        if command is None:
            environment.write_line("Unknown command.", style="red")
            continue

        environment.arguments = arguments
        if command.execute(environment) == CommandStatus.EXIT:
            break


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the interactive search console"""
    parser = argparse.ArgumentParser(
        description='TextSearch - TF-IDF search over a directory of text documents'
    )
    parser.add_argument('directory', help='Directory with the documents to index')
    parser.add_argument('--config', help='Path to a JSON configuration file')
    parser.add_argument('--top', type=int, help='Number of top results to display')
    parser.add_argument('--debug', action='store_true', help='Show debug logging')
    args = parser.parse_args(argv)

    setup_logging("DEBUG" if args.debug else "WARNING")
    config = load_config(args.config)
    if not args.debug:
        setup_logging(config["logging"]["level"])

    console = Console()
    max_results = args.top if args.top is not None else config["search"]["max_results"]
    encoding = config["documents"]["encoding"]
    pipeline = create_pipeline(config)

    try:
        with console.status(f"Indexing documents in {escape(args.directory)}..."):
            index = load_corpus(args.directory, pipeline, encoding=encoding)
    except SearchError as e:
        logger.debug("Loading corpus failed: {!r}", e)
        console.print(f"[bold red]Error loading documents:[/bold red] {escape(str(e))}", highlight=False)
        return 1

    console.print(f"Vocabulary size is [bold]{len(index.vocabulary)}[/bold] words")

    with SearchEnvironment(index, pipeline, console=console,
                           max_results=max_results, encoding=encoding) as environment:
        run_console(environment)
    return 0


if __name__ == "__main__":
    sys.exit(main())
