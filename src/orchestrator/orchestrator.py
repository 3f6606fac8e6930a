"""Kandoku pipeline orchestrator (Generate → Validate → Mask → Display/Export)."""

from __future__ import annotations

import argparse
import random
import sys
import time
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from artifacts import artifact_store
from contracts.errors import (
    ConstructionInvariantViolation,
    InvalidDifficultyParameter,
    KandokuError,
    PostGenerationValidityFailure,
)
from contracts.schema_validator import get_schema_descriptor, validate_artifact
from contracts.validator import assert_valid_board
from dlx import extract_grid
from kandoku_generator import solve_cover, to_string
from masking import Difficulty, default_difficulty, mask_board, mask_count_for, parse_difficulty
from symbols import available_alphabets, default_alphabet_name, format_board, get_alphabet, label_board, placeholder

from . import log


def derive_seed(root_seed: str, stage: str) -> str:
    """Derive a deterministic child seed from the root seed and stage name."""

    return uuid.uuid5(uuid.NAMESPACE_URL, f"{root_seed}|{stage}").hex


def _stage_rng(root_seed: Optional[str], stage: str) -> random.Random:
    if root_seed is None:
        return random.Random()
    return random.Random(derive_seed(root_seed, stage))


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


def build_bundle(
    *,
    difficulty: Difficulty,
    mask_count: int,
    alphabet: List[str],
    seed: Optional[str],
    puzzle: List[List[int]],
    solution: List[List[int]],
    stats: Dict[str, int],
) -> Dict[str, Any]:
    descriptor = get_schema_descriptor("PuzzleBundle")
    return {
        "type": "PuzzleBundle",
        "version": descriptor.version,
        "difficulty": {"level": int(difficulty), "name": difficulty.name},
        "mask_count": mask_count,
        "alphabet": list(alphabet),
        "placeholder": placeholder(),
        "seed": seed,
        "puzzle": to_string(puzzle),
        "solution": to_string(solution),
        "stats": dict(stats),
    }


def run_pipeline(
    difficulty: Union[Difficulty, int, str, None] = None,
    *,
    seed: Optional[str] = None,
    alphabet: Optional[str] = None,
    export: bool = False,
    output_dir: Optional[Union[str, Path]] = None,
    pdf_path: Optional[Union[str, Path]] = None,
) -> Dict[str, Any]:
    """Generate one puzzle and return the boards plus bookkeeping.

    The difficulty, its mask count and the alphabet are resolved before the
    search starts so an unsupported request is rejected without doing any work.
    """

    level = parse_difficulty(difficulty) if difficulty is not None else default_difficulty()
    mask_count = mask_count_for(level)
    alphabet_name = alphabet or default_alphabet_name()
    symbols = get_alphabet(alphabet_name)
    run_id = f"run-{uuid.uuid4().hex[:12]}" if seed is None else f"run-{derive_seed(seed, 'run')[:12]}"

    started = time.perf_counter()
    try:
        ids, stats = solve_cover(_stage_rng(seed, "stage.generate.complete"))
        solution = extract_grid(ids)
    except ConstructionInvariantViolation as exc:
        log.append_event({"event": "generate.failed", "run_id": run_id, "error": str(exc)})
        raise
    log.append_event(
        {
            "event": "generate.complete",
            "run_id": run_id,
            "time_ms": _elapsed_ms(started),
            **stats.as_dict(),
        }
    )

    try:
        report = assert_valid_board(solution)
    except PostGenerationValidityFailure as exc:
        log.append_event(
            {
                "event": "validate.failed",
                "run_id": run_id,
                "issues": [issue.code for issue in exc.report.errors],
            }
        )
        raise
    log.append_event({"event": "validate.complete", "run_id": run_id, "time_ms": report.timings_ms["scan"]})

    puzzle = mask_board(solution, mask_count=mask_count, rng=_stage_rng(seed, "stage.mask"))
    log.append_event(
        {
            "event": "mask.complete",
            "run_id": run_id,
            "difficulty": level.name,
            "mask_count": mask_count,
        }
    )

    result: Dict[str, Any] = {
        "run_id": run_id,
        "seed": seed,
        "difficulty": level,
        "mask_count": mask_count,
        "alphabet": alphabet_name,
        "solution": solution,
        "puzzle": puzzle,
        "labelled_solution": label_board(solution, symbols),
        "labelled_puzzle": label_board(puzzle, symbols),
        "stats": stats.as_dict(),
    }

    if export:
        bundle = build_bundle(
            difficulty=level,
            mask_count=mask_count,
            alphabet=symbols,
            seed=seed,
            puzzle=puzzle,
            solution=solution,
            stats=result["stats"],
        )
        validate_artifact(bundle)
        path = artifact_store.save_artifact(bundle, output_dir)
        result["artifact_id"] = bundle["artifact_id"]
        result["artifact_path"] = path
        log.append_event({"event": "export.complete", "run_id": run_id, "artifact_id": bundle["artifact_id"]})

    if pdf_path is not None:
        # matplotlib is only needed for PDF output.
        import make_kandoku_pdf

        title = f"Kandoku: {level.name}"
        result["pdf_path"] = make_kandoku_pdf.render_pdf(
            result["labelled_puzzle"],
            result["labelled_solution"],
            pdf_path,
            title=title,
        )
        log.append_event({"event": "pdf.complete", "run_id": run_id, "path": str(result["pdf_path"])})

    return result


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a 9x9 Kandoku puzzle with dancing links.",
    )
    parser.add_argument(
        "difficulty",
        nargs="?",
        default=None,
        help=(
            "Difficulty level 1-10 or tier name "
            f"({', '.join(d.name for d in Difficulty)}). Defaults to config."
        ),
    )
    parser.add_argument(
        "--seed",
        default=None,
        help="Root seed for a reproducible board. If not set, fresh entropy is used.",
    )
    parser.add_argument(
        "--alphabet",
        default=None,
        choices=available_alphabets(),
        help="Symbol alphabet used for display (default from config).",
    )
    parser.add_argument(
        "--export",
        action="store_true",
        help="Write a PuzzleBundle JSON artifact.",
    )
    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory for exported bundles (default from config).",
    )
    parser.add_argument(
        "--pdf",
        dest="pdf_path",
        default=None,
        help="Also render the puzzle and its solution to this PDF path.",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        result = run_pipeline(
            args.difficulty,
            seed=args.seed,
            alphabet=args.alphabet,
            export=args.export,
            output_dir=args.output_dir,
            pdf_path=args.pdf_path,
        )
    except InvalidDifficultyParameter as exc:
        parser.error(str(exc))
    except KandokuError as exc:
        print(f"generation failed: {exc}", file=sys.stderr)
        return 1

    print(f"\n=== Puzzle (difficulty: {result['difficulty'].name}) ===")
    print(format_board(result["labelled_puzzle"]))
    print("\n=== Solution ===")
    print(format_board(result["labelled_solution"]))
    if "artifact_path" in result:
        print(f"\nBundle saved to: {result['artifact_path']}")
    if "pdf_path" in result:
        print(f"PDF saved to: {result['pdf_path']}")
    return 0


__all__ = ["build_bundle", "build_parser", "derive_seed", "main", "run_pipeline"]


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
