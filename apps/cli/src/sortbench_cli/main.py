from __future__ import annotations
import json
import random
from typing import Optional

import typer

from sortbench import (
    AlgorithmExecutionFailure,
    InvalidArgument,
    generate,
    is_sorted,
    list_algorithms,
    registry,
    run_benchmark,
)
from sortbench.config import ALLOWED_ARRAY_SIZES, DEFAULT_ARRAY_SIZE, SELECT_ALL, configure_logging
from .runners.common import export_json, format_insight, progress_printer, render_table

app = typer.Typer(add_completion=False, help="Sorting algorithm benchmark CLI")


@app.callback()
def _main(
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Logging level (defaults to $SORTBENCH_LOG_LEVEL or WARNING).",
    ),
) -> None:
    configure_logging(log_level)


@app.command()
def list_algos():
    """List registered sorting algorithms with their complexity labels."""
    for meta in list_algorithms():
        c = meta["complexity"]
        typer.echo(
            f"- {meta['id']}: {meta['display_name']} "
            f"(best {c['best']}, avg {c['average']}, worst {c['worst']}, space {c['space']})"
        )


@app.command()
def demo(name: str, size: int = 12, seed: int = 0):
    """Sort a short seeded dataset with one algorithm and show the output."""
    try:
        descriptor = registry.get(name)
        data = generate(size, random.Random(seed))
    except InvalidArgument as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=2)
    output = descriptor.sort_fn(list(data))
    typer.echo(f"input:  {list(data)}")
    typer.echo(f"output: {output}")
    typer.echo(f"[{descriptor.id}] verify={is_sorted(output)}")


@app.command()
def run(
    size: int = typer.Option(DEFAULT_ARRAY_SIZE, "--size", "-n", help=f"Array size, one of {ALLOWED_ARRAY_SIZES}."),
    algo: str = typer.Option(SELECT_ALL, "--algo", "-a", help="Algorithm id, or 'all'."),
    seed: Optional[int] = typer.Option(None, help="Seed the dataset generator for reproducible input."),
    export: Optional[str] = typer.Option(None, help="Write the batch as JSON to this path."),
    print_json: bool = typer.Option(False, "--json/--no-json", help="Print JSON instead of a table."),
    strict: bool = typer.Option(False, help="Exit with status 1 if any algorithm failed."),
):
    """Benchmark one algorithm or all of them against one random dataset."""
    rng = random.Random(seed) if seed is not None else None
    try:
        batch = run_benchmark(size, algo, rng=rng, progress=progress_printer())
    except InvalidArgument as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=2)

    path = export_json(batch, export)
    if print_json:
        typer.echo(json.dumps(batch.to_dict(), indent=2))
    else:
        typer.echo(render_table(batch))
        insight = format_insight(batch)
        if insight is not None:
            typer.echo(insight)
    if path is not None:
        typer.echo(f"Exported {path}", err=True)

    if strict:
        try:
            batch.raise_for_failures()
        except AlgorithmExecutionFailure as e:
            typer.echo(str(e), err=True)
            raise typer.Exit(code=1)


def app_main():
    app()


if __name__ == "__main__":
    app_main()
