"""Typer CLI: ``stackguider ask``, ``chat``, ``interpret``, ``customize``, ``serve``, ``validate``."""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from stackguider.config import load_config
from stackguider.schemas.config import AdvisorConfig

# Load .env file from project root (if it exists)
load_dotenv()

app = typer.Typer(
    name="stackguider",
    help="StackGuideR: describe a project, get a recommended tech stack and an implementation prompt.",
    no_args_is_help=True,
)
console = Console()
logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        datefmt="%H:%M:%S",
    )
    # httpx logs every HTTP request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def _load_config_or_exit(config: Path | None) -> AdvisorConfig:
    try:
        return load_config(config)
    except Exception as exc:
        console.print(f"[red]Config validation failed:[/] {exc}")
        raise typer.Exit(code=1)


def _build_advisor(cfg: AdvisorConfig, *, dry_run: bool) -> "StackAdvisor":  # noqa: F821
    from stackguider.advisor.agent import StackAdvisor

    if dry_run:
        from stackguider.shared.llm_client import DryRunClient
        client = DryRunClient()
    else:
        from openai import OpenAIError

        from stackguider.shared.llm_client import LLMClient
        try:
            client = LLMClient(model=cfg.model, max_tokens=cfg.max_tokens)
        except OpenAIError as exc:
            console.print(f"[red]Could not create the OpenAI client:[/] {exc}")
            console.print("Set OPENAI_API_KEY (or add it to .env), or pass [bold]--dry-run[/].")
            raise typer.Exit(code=1)

    return StackAdvisor.from_config(client, cfg)


def _print_result(session: "StackSession") -> None:  # noqa: F821
    """Print the current result: message, recommendations table, prompt, costs."""
    from stackguider.advisor.cost import estimate_costs

    result = session.result
    if result is None:
        return

    console.print(Panel(result.message, title="Advisor", style="cyan"))

    if result.recommendations:
        selected = set(session.selected)
        table = Table(title="Recommended Stack")
        table.add_column("#", justify="right")
        table.add_column("Technology", style="bold")
        table.add_column("Category")
        table.add_column("Description")
        table.add_column("URL", style="dim")
        for i, rec in enumerate(result.recommendations, 1):
            mark = "[green]✓[/] " if rec.name in selected else ""
            table.add_row(str(i), f"{mark}{rec.name}", rec.category, rec.description, rec.url)
        console.print(table)

    _print_prompt(session)

    estimate = estimate_costs(result.recommendations)
    if estimate:
        console.print(
            f"[bold]Estimated cost:[/] ${estimate.monthly_total}/month "
            f"(${estimate.annual_total}/year, {estimate.paid_services} paid service(s))"
        )

    if result.boilerplate:
        console.print(
            f"[bold]Boilerplate:[/] {result.boilerplate.project_name}, "
            f"{len(result.boilerplate.files)} file(s), {len(result.boilerplate.setup)} setup step(s)"
        )


def _print_prompt(session: "StackSession") -> None:  # noqa: F821
    prompt = session.active_prompt
    if not prompt:
        return
    if session.customized_prompt:
        title = f"Customized prompt ({len(session.selected)} selected)"
    else:
        title = "Implementation prompt"
    console.print(Panel(prompt, title=title, style="green"))


def _write_exports(session: "StackSession", out_dir: Path, title: str) -> list[Path]:  # noqa: F821
    """Write Markdown, JSON and HTML exports (plus boilerplate, if any) to ``out_dir``."""
    from stackguider.output.json_export import render_stack_json
    from stackguider.output.markdown import (
        boilerplate_filename,
        export_filename,
        render_boilerplate_markdown,
        render_stack_markdown,
    )
    from stackguider.output.share_page import render_share_page

    result = session.result
    if result is None:
        return []

    prompt = session.active_prompt
    out_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []

    md_path = out_dir / export_filename(title, "md")
    md_path.write_text(render_stack_markdown(result.recommendations, prompt, title=title), encoding="utf-8")
    written.append(md_path)

    json_path = out_dir / export_filename(title, "json")
    json_path.write_text(render_stack_json(result.recommendations, prompt, title=title), encoding="utf-8")
    written.append(json_path)

    html_path = out_dir / export_filename(title, "html")
    html_path.write_text(
        render_share_page(result, title=title, selected=session.selected, prompt=prompt),
        encoding="utf-8",
    )
    written.append(html_path)

    if result.boilerplate:
        bp_path = out_dir / boilerplate_filename(result.boilerplate.project_name)
        if bp_path.resolve().parent != out_dir.resolve():
            logger.warning("Not writing boilerplate outside %s: %s", out_dir, bp_path)
        else:
            bp_path.write_text(render_boilerplate_markdown(result.boilerplate), encoding="utf-8")
            written.append(bp_path)

    return written


@app.command()
def validate(
    config: Path = typer.Option(..., "--config", "-c", help="Path to stackguider.yml"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Validate a configuration file."""
    _setup_logging(verbose)

    cfg = _load_config_or_exit(config)

    console.print("[green]Config is valid![/]\n")
    console.print(f"  Model:         {cfg.model} (max_tokens={cfg.max_tokens}, json_mode={cfg.json_mode})")
    console.print(f"  Prose limit:   {cfg.prose_fallback_limit} chars")
    console.print(f"  Project title: {cfg.project_title}")
    console.print(f"  Output dir:    {cfg.output_directory}")
    console.print(f"  CORS origins:  {', '.join(cfg.cors_origins) or '(none)'}")


@app.command()
def ask(
    message: str = typer.Argument(..., help="Describe the project you want to build."),
    select: list[str] = typer.Option(None, "--select", "-s", help="Technology to keep in your stack (repeatable)."),
    config: Path = typer.Option(None, "--config", "-c", help="Path to stackguider.yml"),
    output: Path = typer.Option(None, "--output", "-o", help="Write Markdown, JSON and HTML exports to this directory."),
    title: str = typer.Option(None, "--title", help="Project title used in exports."),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Use canned completions (no API calls)."),
) -> None:
    """Ask for a stack recommendation for one project description.

    Examples:

        stackguider ask "A todo app with user accounts"

        stackguider ask "A todo app" --select Next.js --select Prisma --output ./output
    """
    from stackguider.session import StackSession
    from stackguider.shared.progress import AdvisorProgress

    _setup_logging(verbose)
    cfg = _load_config_or_exit(config)
    advisor = _build_advisor(cfg, dry_run=dry_run)

    if dry_run:
        console.print("[yellow]DRY-RUN mode: no API calls will be made.[/]\n")

    try:
        with AdvisorProgress():
            result = asyncio.run(advisor.recommend(message))
    except Exception as exc:
        console.print(f"[red]Advisor request failed:[/] {exc}")
        raise typer.Exit(code=1)

    session = StackSession()
    session.replace_result(result)
    for name in select or []:
        try:
            session.toggle(name)
        except ValueError as exc:
            console.print(f"[yellow]Skipping selection:[/] {exc}")

    _print_result(session)

    if output:
        for path in _write_exports(session, output, title or cfg.project_title):
            console.print(f"[green]Written:[/] {path}")


@app.command()
def chat(
    config: Path = typer.Option(None, "--config", "-c", help="Path to stackguider.yml"),
    output: Path = typer.Option(None, "--output", "-o", help="Directory for exports (defaults to output_directory)."),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Use canned completions (no API calls)."),
) -> None:
    """Interactive session: describe projects, pick technologies, copy the prompt."""
    _setup_logging(verbose)
    cfg = _load_config_or_exit(config)
    advisor = _build_advisor(cfg, dry_run=dry_run)

    if dry_run:
        console.print("[yellow]DRY-RUN mode: no API calls will be made.[/]\n")

    asyncio.run(_run_chat(advisor, output or Path(cfg.output_directory), cfg.project_title))


async def _run_chat(advisor: "StackAdvisor", out_dir: Path, title: str) -> None:  # noqa: F821
    """Question → recommendations → selection loop until the user quits."""
    from stackguider.session import StackSession
    from stackguider.shared.progress import AdvisorProgress, ask_user

    session = StackSession()

    while True:
        message = await ask_user("\n[bold]Describe your project[/] (blank to quit)")
        if not message.strip():
            return

        try:
            with AdvisorProgress():
                result = await advisor.recommend(message)
        except Exception as exc:
            console.print(f"[red]Advisor request failed:[/] {exc}")
            continue

        session.replace_result(result)
        _print_result(session)

        recs = result.recommendations
        while recs:
            choice = await ask_user(
                "[bold]Toggle[/] by number (e.g. 1,3), [bold]e[/] export, "
                "[bold]q[/] quit, blank for a new project"
            )
            choice = choice.strip().lower()
            if not choice:
                break
            if choice == "q":
                return
            if choice == "e":
                for path in _write_exports(session, out_dir, title):
                    console.print(f"[green]Written:[/] {path}")
                continue

            for token in choice.replace(",", " ").split():
                if token.isdigit() and 1 <= int(token) <= len(recs):
                    name = recs[int(token) - 1].name
                    state = "added" if session.toggle(name) else "removed"
                    console.print(f"  {name} {state}")
                else:
                    console.print(f"  [yellow]Not a recommendation number:[/] {token}")
            _print_prompt(session)


@app.command()
def interpret(
    source: str = typer.Argument(..., help="File holding a raw model completion, or '-' for stdin."),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Interpret a saved raw completion and print the result as JSON."""
    from stackguider.advisor.interpreter import interpret_completion

    _setup_logging(verbose)

    if source == "-":
        raw = sys.stdin.read()
    else:
        path = Path(source)
        if not path.exists():
            console.print(f"[red]File not found:[/] {path}")
            raise typer.Exit(code=1)
        raw = path.read_text(encoding="utf-8")

    result = interpret_completion(raw)
    typer.echo(result.model_dump_json(by_alias=True, indent=2))


@app.command()
def customize(
    tech: list[str] = typer.Option(..., "--tech", "-t", help="Technology to put in the prompt (repeatable, in order)."),
    prompt: str = typer.Option(None, "--prompt", "-p", help="Implementation prompt text."),
    prompt_file: Path = typer.Option(None, "--prompt-file", "-f", help="File holding the implementation prompt."),
) -> None:
    """Rewrite an implementation prompt around the given technologies."""
    from stackguider.advisor.customizer import customize_prompt

    if (prompt is None) == (prompt_file is None):
        console.print("[red]Pass exactly one of --prompt or --prompt-file.[/]")
        raise typer.Exit(code=1)

    if prompt_file is not None:
        if not prompt_file.exists():
            console.print(f"[red]File not found:[/] {prompt_file}")
            raise typer.Exit(code=1)
        prompt = prompt_file.read_text(encoding="utf-8").strip()

    typer.echo(customize_prompt(prompt, tech))


@app.command()
def serve(
    config: Path = typer.Option(None, "--config", "-c", help="Path to stackguider.yml"),
    host: str = typer.Option("127.0.0.1", "--host"),
    port: int = typer.Option(8000, "--port"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Use canned completions (no API calls)."),
) -> None:
    """Serve the HTTP API with uvicorn."""
    import uvicorn

    from stackguider.api import create_app

    _setup_logging(verbose)
    cfg = _load_config_or_exit(config)
    advisor = _build_advisor(cfg, dry_run=dry_run)

    if dry_run:
        console.print("[yellow]DRY-RUN mode: no API calls will be made.[/]\n")

    uvicorn.run(
        create_app(advisor, cors_origins=cfg.cors_origins),
        host=host,
        port=port,
        log_level="debug" if verbose else "info",
    )
