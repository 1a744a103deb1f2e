#!/usr/bin/env python3
"""
sqlgen model inspector

Runs the generator on a JSON CodeGenRequest and prints the resulting
enums, data classes and queries.

Usage:
    python scripts/describe_models.py request.json
"""

import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from pydantic import ValidationError
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from sqlgen.config.settings import get_generator_settings
from sqlgen.core.catalog.models import CodeGenRequest
from sqlgen.core.generator.generator import CodeGenerator, GenerationResult
from sqlgen.core.jdbc.expressions import binding_calls
from sqlgen.core.query_compiler.compiler import CodegenError


console = Console()


# -----------------------------
# Display Functions
# -----------------------------


def show_header(result: GenerationResult) -> None:
    header = Text()
    header.append("sqlgen", style="bold bright_cyan")
    header.append(f" - engine {result.settings.engine}", style="dim")
    console.print()
    console.print(Panel(header, box=box.DOUBLE, border_style="bright_blue", padding=(0, 2)))
    for line in result.header:
        console.print(f"[dim]// {line}[/dim]")
    console.print()


def show_enums(result: GenerationResult) -> None:
    for enum in result.enums:
        table = Table(title=f"enum {enum.name}", box=box.ROUNDED, title_style="bold magenta")
        table.add_column("Constant", style="cyan")
        table.add_column("Value", style="green")
        for constant in enum.constants:
            table.add_row(constant.name, repr(constant.value))
        console.print(table)


def show_structs(result: GenerationResult) -> None:
    for struct in result.structs:
        title = f"data class {struct.name}"
        if struct.table is not None:
            title += f"  [dim]({struct.table.qualified_name})[/dim]"
        table = Table(title=title, box=box.ROUNDED, title_style="bold cyan")
        table.add_column("Field", style="cyan")
        table.add_column("Type", style="green")
        table.add_column("Raw type", style="dim")
        for field in struct.fields:
            table.add_row(field.name, field.type.type_string(), field.type.data_type)
        console.print(table)


def show_queries(result: GenerationResult) -> None:
    for query in result.queries:
        ret = "Unit" if query.ret.is_empty else query.ret.type_string()
        if query.ret.emit_struct:
            ret += " [yellow](new)[/yellow]"
        console.print(
            f"[bold]{query.method_name}[/bold]({query.arg.args()}): {ret}  "
            f"[dim]{query.cmd.value}[/dim]"
        )
        console.print(Syntax(query.sql, "sql", theme="monokai", word_wrap=True))
        for call in binding_calls(query.arg):
            console.print(f"  [dim]{call}[/dim]")
        console.print()


# -----------------------------
# Main
# -----------------------------


def main() -> int:
    settings = get_generator_settings()
    logging.basicConfig(level=settings.log_level)

    if len(sys.argv) != 2:
        console.print("[red]usage: describe_models.py REQUEST_JSON[/red]")
        return 2

    try:
        request = CodeGenRequest.model_validate_json(Path(sys.argv[1]).read_text())
    except ValidationError as e:
        console.print(f"[red]Invalid request:[/red] {e}")
        return 1

    try:
        result = CodeGenerator(settings).generate(request)
    except CodegenError as e:
        console.print(f"[red]Generation failed:[/red] {e}")
        return 1

    show_header(result)
    show_enums(result)
    show_structs(result)
    show_queries(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
