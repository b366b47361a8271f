from __future__ import annotations
"""Shared helpers for CLI runners.

Environment metadata for exports, JSON export, duration formatting and the
progress printer used while a batch runs.
"""

import json
import os
import pathlib
import platform
import subprocess
from typing import Any, Callable, Dict, Optional

import typer

from sortbench import BenchmarkBatch, BenchmarkResult
from sortbench.config import results_dir

_ENVIRONMENT_CACHE: Dict[str, Any] | None = None


def _detect_cpu_model() -> str | None:
    system = platform.system()
    try:
        if system == "Darwin":
            out = subprocess.check_output(
                ["sysctl", "-n", "machdep.cpu.brand_string"],
                stderr=subprocess.DEVNULL,
                text=True,
            ).strip()
            if out:
                return out
        elif system == "Linux":
            cpuinfo = pathlib.Path("/proc/cpuinfo")
            if cpuinfo.exists():
                for line in cpuinfo.read_text(encoding="utf-8", errors="ignore").splitlines():
                    if line.lower().startswith("model name"):
                        return line.split(":", 1)[1].strip()
        elif system == "Windows":
            val = os.environ.get("PROCESSOR_IDENTIFIER")
            if val:
                return val
    except (OSError, subprocess.SubprocessError):
        pass
    uname = platform.uname()
    for val in (uname.processor, uname.machine, platform.processor()):
        if val:
            return val
    return None


def collect_environment_meta() -> Dict[str, Any]:
    global _ENVIRONMENT_CACHE
    if _ENVIRONMENT_CACHE is None:
        info: Dict[str, Any] = {}
        cpu_model = _detect_cpu_model()
        if cpu_model:
            info["cpu_model"] = cpu_model
        info["os"] = platform.platform(aliased=True)
        info["python"] = platform.python_version()
        info["implementation"] = platform.python_implementation()
        info["cpu_count"] = os.cpu_count()
        _ENVIRONMENT_CACHE = info
    return dict(_ENVIRONMENT_CACHE)


def format_duration(ms: float) -> str:
    if ms < 1:
        return f"{ms * 1000:.2f} μs"
    if ms < 1000:
        return f"{ms:.2f} ms"
    return f"{ms / 1000:.3f} s"


def build_export_payload(batch: BenchmarkBatch) -> Dict[str, Any]:
    payload = batch.to_dict()
    payload["environment"] = collect_environment_meta()
    return payload


def _repo_root() -> pathlib.Path:
    """Best-effort detection of the repository root (directory containing .git).
    Falls back to the current working directory if not found.
    """
    here = pathlib.Path(__file__).resolve()
    for p in (here, *here.parents):
        if (p / ".git").exists():
            return p
    return pathlib.Path.cwd()


def resolve_export_path(export_path: str) -> pathlib.Path:
    # Normalize Windows-style separators on POSIX if users pass e.g. "results\file.json"
    if "\\" in export_path and ":" not in export_path:
        export_path = export_path.replace("\\", "/")
    path = pathlib.Path(export_path)
    if not path.is_absolute():
        if len(path.parts) == 1:
            path = pathlib.Path(results_dir()) / path
        path = _repo_root() / path
    return path


def export_json(batch: BenchmarkBatch, export_path: str | None) -> Optional[pathlib.Path]:
    if not export_path:
        return None
    path = resolve_export_path(export_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(build_export_payload(batch), f, indent=2)
    return path


def progress_printer(*, err: bool = True) -> Callable[[int, int, BenchmarkResult], None]:
    def _print(done: int, total: int, result: BenchmarkResult) -> None:
        if result.succeeded:
            detail = f"{format_duration(result.duration_ms)} sorted={result.is_sorted}"
        else:
            detail = f"FAILED ({result.error})"
        typer.echo(f"[{done}/{total}] {result.algorithm_name}: {detail}", err=err)
    return _print


def render_table(batch: BenchmarkBatch) -> str:
    lines = [f"{'Rank':<5} {'Algorithm':<16} {'Size':>7} {'Duration':>12}  Sorted"]
    for r in batch:
        rank = str(r.rank) if r.rank is not None else "-"
        duration = format_duration(r.duration_ms) if r.succeeded else "failed"
        lines.append(f"{rank:<5} {r.algorithm_name:<16} {r.array_size:>7} {duration:>12}  {r.is_sorted}")
    if batch.cancelled:
        lines.append(f"(cancelled: {batch.notes})")
    return "\n".join(lines)


def format_insight(batch: BenchmarkBatch) -> str | None:
    fastest = batch.fastest
    if fastest is None:
        return None
    line = f"Fastest: {fastest.algorithm_name} ({format_duration(fastest.duration_ms)})"
    speedup = batch.speedup
    slowest = batch.slowest
    if speedup is not None and slowest is not None:
        line += f" ({speedup:.1f}x faster than {slowest.algorithm_name})"
    return line
