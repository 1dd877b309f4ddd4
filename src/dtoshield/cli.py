# src/dtoshield/cli.py
import sys
import argparse
import logging
from pathlib import Path
from typing import List

from dtoshield import prompts
from dtoshield.config import CONTENT_MARKER, DEFAULT_MODEL, DEFAULT_RECIPE, MODEL_PRICING
from dtoshield.core.costs import estimate_cost
from dtoshield.core.pipeline import TransformationPipeline, make_output_check
from dtoshield.core.scanner import scan_directory
from dtoshield.errors import MissingCredentialError
from dtoshield.llm.client import GeminiClient, GenerationConfig
from dtoshield.models import FileRecord, ScanFilter
from dtoshield.recipes import RECIPES, get_recipe
from dtoshield.utils.tokenizer import largest_files


def create_arg_parser():
    parser = argparse.ArgumentParser(
        prog="dtoshield",
        description="Find DTO files declaring @ApiProperty() and rewrite them with security-focused validation.",
    )
    parser.add_argument("root_dir", type=str, nargs="?", default=None, help="Directory to scan")
    parser.add_argument("-p", "--pattern", type=str, default=None,
                        help="Case-insensitive filename substring (default: 'request.ts' or 'dto.ts')")
    parser.add_argument("-m", "--model", choices=sorted(MODEL_PRICING), default=None, help="Generation model")
    parser.add_argument("-r", "--recipe", choices=sorted(RECIPES), default=None, help="Prompt recipe")
    parser.add_argument("-x", "--exclude", action="append", default=[],
                        help="Extra directory pattern to skip (gitwildmatch, repeatable)")
    parser.add_argument("--marker", type=str, default=CONTENT_MARKER,
                        help="Regex a file's content must match")
    parser.add_argument("--no-safety-check", action="store_true",
                        help="Write generated content even if it fails the sanity check")
    parser.add_argument("-y", "--yes", action="store_true", help="Use defaults and skip all prompts")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def print_report(files: List[FileRecord], model: str) -> None:
    total_chars = sum(f.size for f in files)
    costs = estimate_cost(total_chars, model)

    print(f"\nFound {len(files)} files with @ApiProperty() decorator")
    print("\n--- Token Estimation ---")
    print(f"   Total characters:     {total_chars:,}")
    print(f"   Input tokens:         {costs.input_tokens:,}")
    print(f"   Output tokens (80%):  {costs.output_tokens:,}")
    print(f"   Total tokens:         {costs.total_tokens:,}")

    print(f"\n--- {model} Pricing ---")
    print(f"   Input cost:  ${costs.input_cost:.4f}")
    print(f"   Output cost: ${costs.output_cost:.4f}")
    print(f"   TOTAL COST:  ${costs.total_cost:.4f}")

    print("\n--- Top 10 Largest Files (Tokens) ---")
    print(f"{'Rank':<5} | {'Tokens':<10} | {'File Path'}")
    print("-" * 60)
    for i, (tokens, f) in enumerate(largest_files(files)):
        print(f"{i+1:<5} | {tokens:<10} | {f.rel_path}")
    print("-" * 60)

    print("\n--- Sample Files ---")
    for i, f in enumerate(files[:5]):
        preview = f.content[:20].replace("\n", "\\n")
        print(f"   {i+1}. {f.rel_path}")
        print(f"      First 20 chars: \"{preview}\"")


def main():
    try:
        # 1. Setup
        parser = create_arg_parser()
        args = parser.parse_args()

        if args.root_dir is None:
            parser.print_usage(sys.stderr)
            sys.exit(1)

        root_dir = Path(args.root_dir).resolve()
        if not root_dir.is_dir():
            print(f"Error: Invalid directory '{root_dir}'", file=sys.stderr)
            sys.exit(1)

        logging.basicConfig(
            level=logging.DEBUG if args.verbose else logging.WARNING,
            format="%(levelname)s %(name)s: %(message)s",
        )

        # 2. Options (prompt for whatever the command line left open)
        interactive = not args.yes
        pattern = args.pattern
        if pattern is None and interactive:
            pattern = prompts.ask_custom_pattern()
        model = args.model or (prompts.select_model() if interactive else DEFAULT_MODEL)
        recipe = get_recipe(args.recipe or (prompts.select_recipe() if interactive else DEFAULT_RECIPE))

        print("--- dtoshield ---")
        print(f"Scanning: {root_dir}")
        print(f"Model:    {model}")
        print(f"Recipe:   {recipe.name}")
        if pattern:
            print(f"Filter:   files containing '{pattern}' in filename")
        else:
            print("Filter:   files containing 'request.ts' or 'dto.ts' in filename")

        # 3. Scanning
        scan_filter = ScanFilter(name_pattern=pattern, content_marker=args.marker)
        files = scan_directory(root_dir, scan_filter, exclude=args.exclude)

        if not files:
            print("\nNo files with @ApiProperty() decorator found.")
            return

        # 4. Review & Stats
        print_report(files, model)
        print("=" * 60)
        print(f"Files loaded in memory: {len(files)}")

        if interactive and not prompts.ask_to_continue():
            print("\nOperation cancelled by user.")
            return

        # 5. Transformation
        print("\nOriginal files will be modified in place.")
        print(f"Processing files with {model}...\n")

        client = GeminiClient(GenerationConfig())
        output_check = None if args.no_safety_check else make_output_check(args.marker)
        pipeline = TransformationPipeline(client, recipe, output_check=output_check)
        outcomes = pipeline.run(files, model)

        succeeded = sum(1 for o in outcomes if o.success)
        failed = len(outcomes) - succeeded
        print(f"\nProcessing complete! {succeeded} files enhanced successfully.")
        if failed:
            print(f"{failed} files failed to process.")

    except MissingCredentialError as e:
        print(f"\nError: {e}", file=sys.stderr)
        print(f'   Set it with: export {e.env_var}="your-api-key"', file=sys.stderr)
        sys.exit(1)

    except KeyboardInterrupt:
        print("\nCancelled.")
        sys.exit(1)

    except Exception as e:
        print(f"An unexpected error occurred: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
