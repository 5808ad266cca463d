"""
CLI command entry points for token_lineage.

These functions are registered as console scripts in pyproject.toml.
Each accepts an optional argv list and returns a process exit code.
"""

import argparse
import json
from pathlib import Path

from token_lineage.cli.args import add_execute_argument, add_matching_arguments
from token_lineage.cli.logging import print_run_header, setup_logging

DEFAULT_OUTPUT = Path("data/matches.json")


def run_detect(argv: list[str] | None = None) -> int:
    """Entry point for lineage-detect: fuse all methods for one pair."""
    from token_lineage.detection.detector import detect

    parser = argparse.ArgumentParser(description="Check whether a token derives from a runner")
    parser.add_argument("runner_name")
    parser.add_argument("runner_symbol")
    parser.add_argument("token_name")
    parser.add_argument("token_symbol")
    parser.add_argument("--json", action="store_true", help="Print the full result as JSON")
    args = parser.parse_args(argv)

    result = detect(args.runner_name, args.runner_symbol, args.token_name, args.token_symbol)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
        return 0

    if not result.is_derivative:
        print(f"{args.token_symbol} is not a derivative of {args.runner_symbol}")
        return 0

    print(
        f"{args.token_symbol} -> {args.runner_symbol}: {result.confidence}% "
        f"via {result.best_method} ({result.explanation})"
    )
    print(f"  Agreeing methods: {result.agreement_count}")
    for r in result.contributing_methods:
        print(f"    {r.method:<12} {r.confidence:>3}  {r.explanation}")
    return 0


def _build_secondary_pass(logger):
    """Secondary-opinion pass from settings, or None if OpenAI is not configured."""
    from token_lineage.cache import get_cache
    from token_lineage.config import get_cache_dir, get_settings
    from token_lineage.detection.secondary import (
        DescriptionSimilarityScorer,
        LLMDerivativeJudge,
        SecondaryOpinionPass,
    )
    from token_lineage.embeddings.openai_client import get_openai_client

    settings = get_settings()
    try:
        client = get_openai_client()
    except ValueError as e:
        logger.warning(f"Skipping secondary opinions: {e}")
        return None

    return SecondaryOpinionPass(
        semantic=DescriptionSimilarityScorer(
            client=client,
            cache=get_cache(get_cache_dir()),
            model=settings.embedding_model,
            threshold=settings.semantic_threshold,
        ),
        judge=LLMDerivativeJudge(
            client=client,
            model=settings.llm_model,
            min_confidence=settings.llm_min_confidence,
        ),
    )


def run_match(argv: list[str] | None = None) -> int:
    """Entry point for lineage-match: link candidates to runners from two JSON files."""
    from token_lineage.detection.batch import BatchMatcher, InvalidTokenError
    from token_lineage.ingest.loaders import load_tokens, write_matches

    parser = argparse.ArgumentParser(description="Link candidate tokens to their parent runners")
    parser.add_argument("--runners", type=Path, required=True, help="JSON file of runner tokens")
    parser.add_argument("--candidates", type=Path, required=True, help="JSON file of candidate tokens")
    add_matching_arguments(parser)
    parser.add_argument(
        "--secondary",
        action="store_true",
        help="Ask the semantic and LLM tiers about unmatched candidates",
    )
    parser.add_argument(
        "--tie-break",
        choices=["first", "market_cap"],
        default="first",
        help="Which runner wins equal confidences (default: first)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=DEFAULT_OUTPUT,
        help=f"Where --execute writes matches (default: {DEFAULT_OUTPUT})",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug output")
    add_execute_argument(parser)
    args = parser.parse_args(argv)

    logger = setup_logging("lineage_match", execute=args.execute, verbose=args.verbose)

    try:
        runners = load_tokens(args.runners, role="runner")
        candidates = load_tokens(args.candidates, role="candidate")
    except (OSError, InvalidTokenError) as e:
        logger.error(f"Could not load tokens: {e}")
        return 1

    print_run_header("Token Lineage Matching", args.execute, logger)

    matcher = BatchMatcher(
        tie_break=args.tie_break,
        max_workers=args.workers,
        show_progress=args.workers > 1,
    )
    matches = matcher.match(runners, candidates, args.min_confidence)

    if args.secondary:
        secondary = _build_secondary_pass(logger)
        if secondary is not None:
            matches = secondary.resolve_unmatched(runners, candidates, matches, args.min_confidence)

    logger.info(f"{len(matches)} matches from {len(candidates)} candidates:")
    for m in matches:
        logger.info(
            f"  {m.candidate.symbol:<14} -> {m.runner.symbol:<10} {m.confidence:>3}% "
            f"{m.method} [{m.source}] {m.explanation}"
        )

    if not args.execute:
        logger.info("Dry run: pass --execute to write matches")
        return 0

    written = write_matches(args.output, matches)
    logger.info(f"Wrote {written} matches to {args.output}")
    return 0


def run_cache(argv: list[str] | None = None) -> int:
    """Entry point for lineage-cache."""
    from token_lineage.cache import get_cache
    from token_lineage.config import get_cache_dir

    parser = argparse.ArgumentParser(description="Manage the on-disk cache")
    parser.add_argument("command", choices=["stats", "list", "clear"])
    parser.add_argument("--namespace", "-n", help="Filter by namespace")
    parser.add_argument("--limit", type=int, default=20, help="Limit for list")
    parser.add_argument("--yes", "-y", action="store_true", help="Skip confirmation")
    args = parser.parse_args(argv)

    cache = get_cache(get_cache_dir())

    if args.command == "stats":
        stats = cache.stats()
        print(f"Cache: {stats['cache_dir']}")
        print(f"  Total entries: {stats['total']}")
        print(f"  Size: {stats['size_mb']} MB")
        print("  By namespace:")
        for ns, count in sorted(stats["by_namespace"].items()):
            print(f"    {ns}: {count}")

    elif args.command == "list":
        keys = cache.keys(namespace=args.namespace, limit=args.limit)
        ns_label = args.namespace or "all"
        print(f"Keys ({ns_label}, limit {args.limit}):")
        for key in keys:
            print(f"  {key}")

    elif args.command == "clear":
        if not args.namespace:
            print(f"Specify --namespace to clear, or remove {cache.cache_dir}")
            return 1
        if not args.yes:
            confirm = input(f"Clear all {args.namespace} entries? [y/N] ")
            if confirm.lower() != "y":
                print("Aborted")
                return 1
        count = cache.clear_namespace(args.namespace)
        print(f"Cleared {count} entries from {args.namespace}")

    return 0
