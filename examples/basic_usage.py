#!/usr/bin/env python3
"""
Basic HyperRead Usage Example

This example demonstrates the core workflow:
1. Extract a PDF into a Document
2. Browse the skim-map and figure index
3. Inspect per-chunk pacing
4. Play the document on an asyncio loop
5. Summarize it with a local analysis service
"""

import asyncio

import hyperread
from hyperread import ReaderConfig, ReaderSession, ReadingMode
from hyperread.config import HeadingThresholds


def main():
    # ─────────────────────────────────────────────────────────────────────────
    # 1. Basic Extraction
    # ─────────────────────────────────────────────────────────────────────────

    doc = hyperread.load_pdf("path/to/paper.pdf")

    print(f"Loaded: {doc.title}")
    print(f"  Pages: {doc.total_pages}")
    print(f"  Chunks: {len(doc.chunks):,}")

    # ─────────────────────────────────────────────────────────────────────────
    # 2. Custom Configuration
    # ─────────────────────────────────────────────────────────────────────────

    config = ReaderConfig(
        wpm=450,
        line_tolerance=3.0,  # Looser grouping for skewed scans with a text layer
        heading=HeadingThresholds(median_ratio=1.5),  # Stricter size cue
    )
    doc = hyperread.load_pdf("path/to/paper.pdf", config)

    # ─────────────────────────────────────────────────────────────────────────
    # 3. Skim-map and Figure Index
    # ─────────────────────────────────────────────────────────────────────────

    for item in doc.skim_map:
        print(f"  p.{item.page:>3} [{item.type.value}] {item.text[:60]}")

    # First page each figure/table label appeared on
    for label, page in doc.figure_index.items():
        print(f"  Figure/Table {label} -> page {page}")

    # ─────────────────────────────────────────────────────────────────────────
    # 4. Pacing
    # ─────────────────────────────────────────────────────────────────────────

    for chunk in doc.chunks[:10]:
        delay = hyperread.calculate_delay(chunk, 300, ReadingMode.TECHNICAL)
        difficulty = hyperread.score_difficulty(chunk.text, ReadingMode.TECHNICAL)
        print(f"  {chunk.text:<20} {delay:6.0f} ms  (difficulty {difficulty:.2f})")


async def playback_example():
    """Play a document to the end on the running event loop."""
    session = ReaderSession(ReaderConfig(wpm=600))
    session.load_pdf("path/to/paper.pdf")  # Switches to technical mode

    finished = asyncio.Event()

    def render(state):
        view = session.timeline.view()
        print(f"\r{view.progress:5.1f}%  p.{view.page}  {view.text:<25}", end="")
        if state.status is hyperread.PlaybackStatus.FINISHED:
            finished.set()

    session.timeline.subscribe(render)
    session.timeline.play()
    await finished.wait()
    print()


def analysis_example():
    """Summarize the active document with an Ollama-compatible service."""
    # Reads HYPERREAD_ANALYSIS_URL / HYPERREAD_ANALYSIS_MODEL
    session = ReaderSession()
    session.load_pdf("path/to/paper.pdf")

    analysis = session.summarize()
    if analysis.is_placeholder:
        print(analysis.summary)
        return

    print(analysis.summary)
    for point in analysis.key_points:
        print(f"  - {point}")
    print(f"Estimated reading time: {analysis.estimated_reading_time}")

    print(session.ask("What sample size was used?"))


if __name__ == "__main__":
    # Note: These examples use placeholder paths.
    # Replace with actual PDF paths to run.
    print("HyperRead Usage Examples")
    print("=" * 50)
    print("\nSee the code for detailed examples of:")
    print("  - Extraction and configuration")
    print("  - Skim-map and figure index")
    print("  - Adaptive pacing")
    print("  - Asyncio playback")
    print("  - Summarization and questions")
