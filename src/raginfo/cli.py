"""CLI entry point for raginfo."""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional

from raginfo.ai import QueryOrchestrator
from raginfo.chunkers import STRATEGIES, get_chunker
from raginfo.config import Config
from raginfo.constants import AVAILABLE_MODELS
from raginfo.errors import RaginfoError
from raginfo.ingestion import IngestResult, ingest_paths
from raginfo.models import Settings
from raginfo.session import Session
from raginfo.storage import StateStore, open_port

logger = logging.getLogger(__name__)


def open_session(config: Config, with_ai: bool = False) -> Session:
    """Load the persisted state into a new session.

    Args:
        config: Where state is stored
        with_ai: Attach a Gemini-backed orchestrator for questions
    """
    orchestrator = None
    if with_ai:
        # Import here to avoid loading the Gemini client unless needed
        from raginfo.ai.gemini import GeminiGenerator

        orchestrator = QueryOrchestrator(GeminiGenerator())
    return Session(StateStore(open_port(config)), orchestrator)


def mask(api_key: str) -> str:
    """Hide all but the last four characters of an API key."""
    if not api_key:
        return "(not set)"
    return "*" * max(len(api_key) - 4, 4) + api_key[-4:]


def ingest(paths: list[str], config: Config) -> None:
    """Ingest files, folders or zip archives into the knowledge base.

    Args:
        paths: Input paths
        config: Chunking parameters and storage location
    """
    chunker = get_chunker(config.strategy, config.target_size, config.overlap)
    session = open_session(config)

    logger.info(
        f"Ingesting with {config.strategy} chunks "
        f"(size {config.target_size}, overlap {config.overlap})"
    )

    def progress(done: int, result: IngestResult) -> None:
        logger.debug(f"[{done}] {result.name} {'ok' if result.ok else 'failed'}")

    results = ingest_paths(session, paths, chunker, on_progress=progress)
    added = [r for r in results if r.ok]
    failed = [r for r in results if not r.ok]
    chunk_count = sum(len(r.document.chunks) for r in added)

    logger.info("")
    logger.info(f"Added {len(added)} documents, {chunk_count} chunks; {len(failed)} failed")
    if failed:
        sys.exit(1)


def files(config: Config) -> None:
    """List stored documents."""
    docs = open_session(config).state.files
    if not docs:
        print("No documents.")
        return
    for doc in docs:
        print(f"{doc.id:<60} {len(doc.chunks):>5} chunks  {doc.name}")


def show(doc_id: str, config: Config) -> None:
    """Print every chunk of a document."""
    doc = open_session(config).find_document(doc_id)
    if doc is None:
        logger.error(f"Document not found: {doc_id}")
        sys.exit(1)

    print(f"{doc.name} ({len(doc.chunks)} chunks)")
    for i, chunk in enumerate(doc.chunks, 1):
        print(f"--- chunk {i}")
        print(chunk)


def remove(doc_id: str, config: Config) -> None:
    """Delete a document."""
    try:
        open_session(config).delete_document(doc_id)
    except KeyError:
        logger.error(f"Document not found: {doc_id}")
        sys.exit(1)
    logger.info(f"Deleted {doc_id}")


def settings(api_key: Optional[str], model: Optional[str], config: Config) -> None:
    """Show settings, or replace the given fields and save."""
    session = open_session(config)
    current = session.state.settings

    if api_key is not None or model is not None:
        current = Settings(
            api_key=current.api_key if api_key is None else api_key,
            model=current.model if model is None else model,
        )
        session.update_settings(current)
        logger.info("Settings saved.")

    print(f"API key: {mask(current.api_key)}")
    print(f"Model:   {current.model}")


def ask(question: str, config: Config) -> None:
    """Answer a question from the stored documents."""
    chat = open_session(config, with_ai=True).ask(question)
    print(chat.ai_response)


def chats(config: Config) -> None:
    """Print the chat history."""
    history = open_session(config).state.chats
    if not history:
        print("No chats.")
        return
    for chat in history:
        print(f"[{chat.id}]")
        print(f"Q: {chat.user_query}")
        print(f"A: {chat.ai_response}")
        print("")


def remove_chat(chat_id: str, config: Config) -> None:
    """Delete one chat from the history."""
    try:
        open_session(config).delete_chat(chat_id)
    except KeyError:
        logger.error(f"Chat not found: {chat_id}")
        sys.exit(1)
    logger.info(f"Deleted chat {chat_id}")


def export(output: str, config: Config) -> None:
    """Write the state in its wire format to a file."""
    Path(output).write_text(open_session(config).export_json(), encoding="utf-8")
    logger.info(f"Exported state -> {output}")


def import_(source: str, config: Config) -> None:
    """Replace the state with one read from a file."""
    state = open_session(config).import_json(Path(source).read_text(encoding="utf-8"))
    logger.info(f"Imported {len(state.files)} documents and {len(state.chats)} chats")


def reset(config: Config) -> None:
    """Delete all documents, chats and settings."""
    open_session(config).reset()
    logger.info("State cleared.")


def serve(transport: str, config: Config) -> None:
    """Start the MCP server over the stored knowledge base.

    Args:
        transport: Transport protocol (stdio or sse)
        config: Storage location
    """
    # Import here to avoid loading MCP unless needed
    from raginfo.server import create_mcp_server

    from typing import Literal, cast

    mcp = create_mcp_server(open_session(config, with_ai=True))
    mcp.run(transport=cast(Literal["stdio", "sse", "streamable-http"], transport))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="raginfo",
        description="raginfo - ask questions about your documents",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # ingest command
    ingest_parser = subparsers.add_parser(
        "ingest",
        help="Add files, folders or zip archives to the knowledge base",
    )
    ingest_parser.add_argument("paths", nargs="+", help="Input paths")
    ingest_parser.add_argument(
        "--strategy",
        choices=sorted(STRATEGIES),
        help="Chunking strategy (default: fixed, or RAGINFO_CHUNK_STRATEGY)",
    )
    ingest_parser.add_argument(
        "--chunk-size",
        type=int,
        help="Target chunk size in characters (default: 1500)",
    )
    ingest_parser.add_argument(
        "--overlap",
        type=int,
        help="Characters shared by consecutive chunks (default: 200)",
    )

    subparsers.add_parser("files", help="List documents")

    show_parser = subparsers.add_parser("show", help="Print a document's chunks")
    show_parser.add_argument("id", help="Document id")

    rm_parser = subparsers.add_parser("rm", help="Delete a document")
    rm_parser.add_argument("id", help="Document id")

    # settings command
    settings_parser = subparsers.add_parser("settings", help="Show or update settings")
    settings_parser.add_argument("--api-key", help="Google AI API key")
    settings_parser.add_argument(
        "--model",
        choices=[value for value, _ in AVAILABLE_MODELS],
        help="Model used to answer questions",
    )

    ask_parser = subparsers.add_parser("ask", help="Ask a question about the documents")
    ask_parser.add_argument("question", help="The question")

    subparsers.add_parser("chats", help="Show chat history")

    rm_chat_parser = subparsers.add_parser("rm-chat", help="Delete a chat")
    rm_chat_parser.add_argument("id", help="Chat id")

    export_parser = subparsers.add_parser("export", help="Export state to a JSON file")
    export_parser.add_argument("file", help="Output path")

    import_parser = subparsers.add_parser("import", help="Replace state from a JSON file")
    import_parser.add_argument("file", help="Input path")

    subparsers.add_parser("reset", help="Delete all documents, chats and settings")

    # serve command
    serve_parser = subparsers.add_parser(
        "serve",
        help="Start MCP server for the knowledge base",
    )
    serve_parser.add_argument(
        "--transport",
        choices=["stdio", "sse"],
        default="stdio",
        help="Transport protocol (default: stdio)",
    )

    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    try:
        config = Config.from_env()
        if args.command == "ingest":
            config = replace(
                config,
                strategy=args.strategy or config.strategy,
                target_size=config.target_size if args.chunk_size is None else args.chunk_size,
                overlap=config.overlap if args.overlap is None else args.overlap,
            )
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(2)

    try:
        if args.command == "ingest":
            ingest(args.paths, config)
        elif args.command == "files":
            files(config)
        elif args.command == "show":
            show(args.id, config)
        elif args.command == "rm":
            remove(args.id, config)
        elif args.command == "settings":
            settings(args.api_key, args.model, config)
        elif args.command == "ask":
            ask(args.question, config)
        elif args.command == "chats":
            chats(config)
        elif args.command == "rm-chat":
            remove_chat(args.id, config)
        elif args.command == "export":
            export(args.file, config)
        elif args.command == "import":
            import_(args.file, config)
        elif args.command == "reset":
            reset(config)
        elif args.command == "serve":
            serve(args.transport, config)
    except RaginfoError as e:
        logger.error(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
