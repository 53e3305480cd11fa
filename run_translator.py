#!/usr/bin/env python3
"""
Command-line script to translate or summarize HTML files.

Each file's resolved path is used as its document id, so a file listed
twice in one run is served from the in-memory cache.

Usage:
    python run_translator.py article.html
    python run_translator.py article.html --summary
    python run_translator.py *.html --target-language German -o out.json
    python run_translator.py article.html --split-only --chunk-size 1500
"""

import argparse
import json
import logging
import sys
from pathlib import Path

# Load .env file automatically (HTML_TRANSLATOR_API_KEY and friends)
from dotenv import load_dotenv
load_dotenv()

from pydantic import ValidationError

from html_translator.config import load_settings
from html_translator.chunker import Chunker
from html_translator.sanitizer import Sanitizer
from html_translator.translator import Translator
from html_translator.exceptions import TranslationError
from html_translator.logger import setup_logger


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Translate or summarize HTML files with a chat-completion API"
    )
    parser.add_argument("files", nargs="+", help="HTML files to process")
    parser.add_argument(
        "--summary", "-s",
        action="store_true",
        help="Summarize instead of translating"
    )
    parser.add_argument("--target-language", "-l", help="Output language (default: Chinese)")
    parser.add_argument("--chunk-size", "-c", type=int, help="Max characters per chunk")
    parser.add_argument("--model", "-m", help="Model identifier")
    parser.add_argument(
        "--split-only",
        action="store_true",
        help="Print the sanitized chunks without calling the API"
    )
    parser.add_argument("--output", "-o", help="Output file (default: print to stdout)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")

    args = parser.parse_args(argv)

    log_level = logging.DEBUG if args.verbose else logging.INFO
    setup_logger(level=log_level)

    try:
        settings = load_settings(
            target_language=args.target_language,
            max_chunk_length=args.chunk_size,
            model=args.model
        )
    except ValidationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        sys.exit(2)

    translator = Translator(settings=settings)

    if not args.split_only and not translator.has_api_key:
        print("Set HTML_TRANSLATOR_API_KEY (environment or .env) first.", file=sys.stderr)
        sys.exit(1)

    results = []

    for file_path in args.files:
        file_path = Path(file_path)
        # Full path: two article.html files in different folders are different documents
        document_id = str(file_path.resolve())
        print(f"Processing: {file_path.name}", file=sys.stderr)

        try:
            html = file_path.read_text(encoding="utf-8", errors="replace")

            if args.split_only:
                sanitized = Sanitizer().sanitize(html)
                chunks = Chunker(settings.max_chunk_length).split(sanitized)
                results.append({
                    "file": str(file_path),
                    "status": "success",
                    "chunks": [chunk.model_dump() for chunk in chunks]
                })
                print(f"  ✓ {len(chunks)} chunk(s)", file=sys.stderr)
                continue

            if args.summary:
                output = translator.summarize(document_id, html)
            else:
                output = translator.translate(document_id, html)

            results.append({
                "file": str(file_path),
                "status": "success",
                "result": output
            })
            print(f"  ✓ {len(output)} chars", file=sys.stderr)

        except TranslationError as e:
            results.append({
                "file": str(file_path),
                "status": "error",
                "error": e.to_response()
            })
            print(f"  ✗ Error: {e.user_message}", file=sys.stderr)

        except OSError as e:
            results.append({
                "file": str(file_path),
                "status": "error",
                "error": str(e)
            })
            print(f"  ✗ Error: {e}", file=sys.stderr)

    output_json = json.dumps(results, indent=2, ensure_ascii=False)

    if args.output:
        Path(args.output).write_text(output_json, encoding="utf-8")
        print(f"\nResults saved to: {args.output}", file=sys.stderr)
    else:
        print(output_json)


if __name__ == "__main__":
    main()
