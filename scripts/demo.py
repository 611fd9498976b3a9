#!/usr/bin/env python3
"""
Demo script for sheet completions.

Calls the formula handlers the way a spreadsheet host would, with a
single cell, a range, and a repeated call served from the cache.
Requires OPENAI_API_KEY (or a key stored with CHATGPTKEY).
"""

import logging
import time

from sheet_completions import InMemoryCacheStore, SheetFunctions, Settings
from sheet_completions.repositories import DotenvCredentialStore, HttpxTransport
from sheet_completions.services import CompletionService


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def build_functions() -> SheetFunctions:
    """Wire the handlers with an in-memory cache so the demo needs no Redis."""
    config = Settings()
    service = CompletionService.create(
        transport=HttpxTransport.create(config),
        cache_store=InMemoryCacheStore(),
        settings=config,
    )
    return SheetFunctions(service=service, credentials=DotenvCredentialStore.create(config))


def demo_single_cell(functions: SheetFunctions) -> None:
    print_section("Single cell")
    prompt = "What is the capital of France?"
    print(f"  =CHATGPT(\"{prompt}\")")
    print(f"  → {functions.chatgpt(prompt)}")


def demo_range(functions: SheetFunctions) -> None:
    print_section("Range (2x2)")
    grid = [
        ["Translate to Spanish: cat", "Translate to Spanish: dog"],
        ["Translate to Spanish: bird", ""],
    ]
    for row in functions.chatgpt(grid):
        print(f"  {row}")


def demo_cache(functions: SheetFunctions) -> None:
    print_section("Cache")
    prompt = "Name one primary color."
    for attempt in (1, 2):
        start_time = time.time()
        answer = functions.chatgpt(prompt)
        elapsed_ms = (time.time() - start_time) * 1000
        print(f"  Call {attempt}: {answer!r} in {elapsed_ms:.1f}ms")


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    functions = build_functions()
    demo_single_cell(functions)
    demo_range(functions)
    demo_cache(functions)


if __name__ == "__main__":
    main()
