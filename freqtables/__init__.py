"""Frequency tables for Scala scales.

Terminal Output:
- Aligned Step/Pitch/Cents/Hz table of one octave, base frequency included

File Export:
- Plain-text table (<base>_system.txt)
- Excel workbook (<base>_system.xlsx) with a Base_Hz anchor cell and ratio
  formulas, written with openpyxl when it is available
"""

import logging
from typing import List

import utils
from scl import Scale

logger = logging.getLogger(__name__)


def step_rows(scale: Scale, base_hz: float) -> List[List[str]]:
    """Rows [step, pitch, cents, Hz] for the base and every scale degree."""
    freqs = scale.freqs(base_hz)
    rows = [["0", "1/1", f"{0.0:.6f}", f"{freqs[0]:.6f}"]]
    for i, (p, hz) in enumerate(zip(scale.pitches, freqs[1:]), start=1):
        rows.append([str(i), p.render(), f"{p.cents():.6f}", f"{hz:.6f}"])
    return rows


def format_step_hz_table(scale: Scale, base_hz: float) -> List[str]:
    """Aligned table lines for the scale evaluated at base_hz."""
    return utils.format_aligned_table(utils.get_standard_system_headers(), step_rows(scale, base_hz))


def print_step_hz_table(scale: Scale, base_hz: float) -> None:
    """Prints the Step/Pitch/Cents/Hz table."""
    for ln in format_step_hz_table(scale, base_hz):
        print(ln)


def export_system_tables(output_base: str, scale: Scale, base_hz: float) -> List[str]:
    """Exports text and Excel tables for the scale. Returns the written paths."""
    written: List[str] = []
    txt_path = f"{output_base}_system.txt"
    try:
        with open(txt_path, "w", encoding="utf-8") as f:
            if scale.description:
                f.write(f"# {scale.description}\n")
            for ln in format_step_hz_table(scale, base_hz):
                f.write(ln + "\n")
        utils.log_export_success(txt_path)
        written.append(txt_path)
    except OSError as e:
        utils.log_export_error(txt_path, e)

    xlsx_path = f"{output_base}_system.xlsx"
    try:
        _export_excel_system(xlsx_path, scale, base_hz)
        written.append(xlsx_path)
    except ImportError:
        _handle_openpyxl_error(xlsx_path)
    except (AttributeError, OSError, KeyError) as e:
        utils.log_export_error(xlsx_path, e)
    return written


# --- Private helper functions ---

def _export_excel_system(xlsx_path: str, scale: Scale, base_hz: float) -> None:
    """Export scale to Excel format."""
    openpyxl, _ = utils.lazy_import_openpyxl()
    if not openpyxl:
        raise ImportError("openpyxl not available")

    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "System"

    utils.setup_excel_worksheet_formatting(ws, utils.get_standard_system_headers() + ["Ratio"])

    # Base Hz anchor for formulas
    ws.cell(row=1, column=7, value="Base_Hz")
    ws.cell(row=2, column=7, value=float(base_hz))
    if scale.description:
        ws.cell(row=1, column=8, value=scale.description)

    freqs = scale.freqs(base_hz)
    pitch_texts = ["1/1"] + [p.render() for p in scale.pitches]
    cents = [0.0] + [p.cents() for p in scale.pitches]
    for step_idx, (text, c, hz) in enumerate(zip(pitch_texts, cents, freqs)):
        row_idx = step_idx + 2
        ws.cell(row=row_idx, column=1, value=step_idx)
        ws.cell(row=row_idx, column=2, value=text)
        ws.cell(row=row_idx, column=3, value=float(c))
        ws.cell(row=row_idx, column=4, value=float(hz))
        ws.cell(row=row_idx, column=5, value=f"=IFERROR(D{row_idx}/$G$2,\"\")")

    wb.save(xlsx_path)
    utils.log_export_success(xlsx_path)


def _handle_openpyxl_error(output_path: str) -> None:
    logger.warning("openpyxl not installed, skipping %s", output_path)
    print(f"openpyxl not installed: {output_path} not written")
