#!/usr/bin/env python3
"""
make_kandoku_pdf.py
Render a Kandoku puzzle and its solution side by side on a landscape A4 PDF page.
Page geometry and fonts come from the [pdf] section of config.toml.

Usage:
  python make_kandoku_pdf.py --difficulty 3 --out puzzle.pdf

Or reproducibly, with the digit alphabet:
  python make_kandoku_pdf.py --seed 12345 --alphabet digits
"""

from __future__ import annotations

import argparse
import datetime
import sys
from pathlib import Path
from typing import Optional, Sequence

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
from matplotlib import font_manager
from matplotlib.backends.backend_pdf import PdfPages

from contracts.errors import InvalidDifficultyParameter, KandokuError
from project_config import get_section
from symbols import available_alphabets

INCH_PER_CM = 0.3937007874

PAGE_WIDTH_CM = float(get_section("pdf.page.width_cm", 29.7))
PAGE_HEIGHT_CM = float(get_section("pdf.page.height_cm", 21.0))
DEFAULT_MARGIN_CM = float(get_section("pdf.page.margin_cm", 2.0))
DEFAULT_GAP_CM = float(get_section("pdf.page.gap_cm", 2.0))
FOOTER_OFFSET_CM = float(get_section("pdf.page.footer_offset_cm", 1.0))
FONT_SCALE = float(get_section("pdf.rendering.font_scale_factor", 0.65))
_FONT_SETTING = get_section("pdf.rendering.font_family", ["DejaVu Sans"])
FONT_FAMILIES = [_FONT_SETTING] if isinstance(_FONT_SETTING, str) else [str(f) for f in _FONT_SETTING]
OUTPUT_PREFIX = str(get_section("pdf.output.filename_prefix", "kandoku_9x9"))


def resolve_output_path(out: Optional[str]) -> Path:
    if out:
        return Path(out)
    timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
    return Path(f"{OUTPUT_PREFIX}_{timestamp}.pdf")


def resolve_font_family(families: Optional[Sequence[str]] = None) -> list[str]:
    """Installed families from ``families``, always ending with the last entry.

    matplotlib falls back glyph by glyph along this list, so CJK fonts go
    first and a font bundled with matplotlib goes last.
    """

    families = list(FONT_FAMILIES if families is None else families)
    installed = {entry.name for entry in font_manager.fontManager.ttflist}
    return [name for name in families[:-1] if name in installed] + families[-1:]


def draw_grid(ax, board: Sequence[Sequence[str]], left_in, bottom_in, size_in, page_w_in, page_h_in, blank: str, family=None):
    ax.set_position([left_in/page_w_in, bottom_in/page_h_in, size_in/page_w_in, size_in/page_h_in])
    ax.tick_params(axis='both', which='both', bottom=False, top=False, left=False, right=False, labelbottom=False, labelleft=False)
    for i in range(10):
        lw = 1.5 if i % 3 else 3.0
        ax.axvline(i/9, color='k', linewidth=lw)
        ax.axhline(i/9, color='k', linewidth=lw)
    ax.set_xlim(0,1); ax.set_ylim(0,1); ax.axis('off')
    fs = int(FONT_SCALE * size_in * 72 / 9)  # font size scaled to grid
    for r in range(9):
        for c in range(9):
            v = board[r][c]
            if v and v != blank:
                x = (c + 0.5)/9
                y = 1 - (r + 0.5)/9
                ax.text(x, y, str(v), ha='center', va='center', fontsize=fs, family=family or FONT_FAMILIES)


def render_pdf(
    puzzle: Sequence[Sequence[str]],
    solution: Sequence[Sequence[str]],
    out_path: str | Path,
    *,
    title: str = "",
    margin_cm: float = DEFAULT_MARGIN_CM,
    gap_cm: float = DEFAULT_GAP_CM,
) -> Path:
    """Write one page with the puzzle on the left and the solution on the right."""

    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    blank = str(get_section("PUZZLE.placeholder", "?"))
    family = resolve_font_family()

    page_w_in = PAGE_WIDTH_CM * INCH_PER_CM
    page_h_in = PAGE_HEIGHT_CM * INCH_PER_CM
    margin_in = margin_cm * INCH_PER_CM
    gap_in = gap_cm * INCH_PER_CM

    grid_size = min((page_w_in - 2*margin_in - gap_in) / 2.0, page_h_in - 2*margin_in)
    bottom = (page_h_in - grid_size) / 2.0
    lefts = [margin_in, margin_in + grid_size + gap_in]
    footer_y_pos_norm = (FOOTER_OFFSET_CM * INCH_PER_CM) / page_h_in

    with PdfPages(out_path) as pdf:
        fig = plt.figure(figsize=(page_w_in, page_h_in))
        try:
            axes = [fig.add_axes([0,0,1,1], frameon=False) for _ in range(2)]
            draw_grid(axes[0], puzzle, lefts[0], bottom, grid_size, page_w_in, page_h_in, blank, family)
            draw_grid(axes[1], solution, lefts[1], bottom, grid_size, page_w_in, page_h_in, blank, family)
            if title:
                fig.text(0.5, 1 - footer_y_pos_norm, title, ha='center', va='top', fontsize=14, family=family)
            fig.text(0.5, footer_y_pos_norm, "Puzzle (left)    Solution (right)", ha='center', va='bottom', fontsize=8)
            pdf.savefig(fig)
        finally:
            plt.close(fig)
    return out_path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate a Kandoku puzzle and render it to PDF.")
    parser.add_argument("--out", default=None, help="Output PDF path. If not set, a timestamped name is generated automatically.")
    parser.add_argument("--seed", default=None, help="Root seed for reproducibility. If not set, fresh entropy is used.")
    parser.add_argument("--difficulty", default=None, help="Difficulty level 1-10 or tier name (default from config).")
    parser.add_argument("--alphabet", default=None, choices=available_alphabets(), help="Symbol alphabet (default from config).")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    from orchestrator.orchestrator import run_pipeline

    parser = build_parser()
    args = parser.parse_args(argv)
    out_path = resolve_output_path(args.out)
    try:
        result = run_pipeline(args.difficulty, seed=args.seed, alphabet=args.alphabet, pdf_path=out_path)
    except InvalidDifficultyParameter as exc:
        parser.error(str(exc))
    except KandokuError as exc:
        print(f"generation failed: {exc}", file=sys.stderr)
        return 1
    print(f"PDF saved to: {Path(result['pdf_path']).resolve()}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
