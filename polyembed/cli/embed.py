# =============================================================================
# polyembed/cli/embed.py - CLI for the embedding providers
# =============================================================================
#
# Subcommands:
#
#   providers - list provider names registered in the default registry
#   info      - resolve a provider from the environment and print its model info
#   embed     - resolve a provider from the environment and embed TEXT arguments
#
# Output on stdout is JSON; logs go to stderr.  Exit code 0 on success,
# 1 when the provider raises a PolyEmbedError.
#
# Usage examples:
#   OLLAMA_BASE_URL=http://localhost:11434 python -m polyembed.cli info
#   python -m polyembed.cli embed "first text" "second text" --summary
# =============================================================================

"""Command-line interface for polyembed."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys

from polyembed.config.settings import Settings
from polyembed.interfaces.embedding_provider import IEmbeddingProvider
from polyembed.providers.embedding.factory import EmbeddingProviderFactory
from polyembed.utils.errors import PolyEmbedError
from polyembed.utils.logging import configure_logging, get_logger
from polyembed.utils.vectors import vector_norm


def _describe(provider: IEmbeddingProvider) -> dict:
    info = provider.get_model_info()
    return {"provider": provider.get_provider_name(), **info.model_dump()}


async def _run_embed(
    factory: EmbeddingProviderFactory,
    texts: list[str],
    summary: bool,
) -> dict:
    provider = factory.create_from_environment()
    try:
        if len(texts) == 1:
            vectors = [await provider.generate_embedding(texts[0])]
        else:
            vectors = await provider.generate_embeddings(texts)
    finally:
        await provider.aclose()

    result = _describe(provider)
    if summary:
        result["embeddings"] = [
            {"text": text, "length": len(vector), "norm": round(vector_norm(vector), 6)}
            for text, vector in zip(texts, vectors)
        ]
    else:
        result["embeddings"] = vectors
    return result


def _run(args: argparse.Namespace, factory: EmbeddingProviderFactory | None = None) -> int:
    factory = factory or EmbeddingProviderFactory()

    try:
        if args.command == "providers":
            output: object = factory.list_available()
        elif args.command == "info":
            provider = factory.create_from_environment()
            output = _describe(provider)
            asyncio.run(provider.aclose())
        else:
            output = asyncio.run(_run_embed(factory, args.texts, args.summary))
    except PolyEmbedError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(json.dumps(output, indent=2 if args.pretty else None))
    return 0


def _build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the polyembed CLI."""
    parser = argparse.ArgumentParser(
        prog="polyembed",
        description="Inspect and exercise the configured embedding provider.",
    )
    parser.add_argument(
        "--pretty",
        action="store_true",
        help="Indent JSON output.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Override LOG_LEVEL (DEBUG, INFO, WARNING, ERROR).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("providers", help="List registered provider names.")
    subparsers.add_parser("info", help="Show the provider resolved from the environment.")

    embed_parser = subparsers.add_parser("embed", help="Embed one or more texts.")
    embed_parser.add_argument("texts", nargs="+", help="Texts to embed.")
    embed_parser.add_argument(
        "--summary",
        action="store_true",
        help="Print vector length and norm instead of the full vectors.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point. Exits with code 0 on success or 1 on a provider error."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    settings = Settings()
    configure_logging(
        log_level=args.log_level or settings.log_level,
        json_output=(settings.app_env == "production"),
    )
    get_logger(__name__).debug("cli_command", command=args.command)

    sys.exit(_run(args))


if __name__ == "__main__":
    main()
