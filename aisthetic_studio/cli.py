# aisthetic_studio/cli.py
"""
CLI interface for aisthetic-studio.

Thin presentation layer over the flows/ feature layer. Results go to the
output directory, progress and logs go to stderr.
"""

import asyncio
import sys
from pathlib import Path

import typer

from aisthetic_studio.config.loader import get_config_path, load_config, save_config
from aisthetic_studio.content.factory import create_content_client
from aisthetic_studio.errors import (
    CredentialError,
    ErrorKind,
    InputError,
    InvalidJobStateError,
    PlanningError,
    SynthesisError,
)
from aisthetic_studio.logging_config import configure_logging
from aisthetic_studio.models.jobs import JobStatus

app = typer.Typer(
    name="aisthetic-studio",
    help="AI product photography, ad creatives, campaigns, voice-overs and video.",
    no_args_is_help=True,
)

_state: dict = {"verbosity": None, "json_logs": False}

_STATUS_STYLES = {
    JobStatus.PENDING: ("○", "dim"),
    JobStatus.RUNNING: ("⟳", "yellow"),
    JobStatus.SUCCEEDED: ("✓", "green"),
    JobStatus.FAILED: ("✗", "red"),
}


def _run(coro):
    """Run async function from sync CLI context."""
    return asyncio.run(coro)


def _error(message: str) -> None:
    typer.echo(typer.style(f"Error: {message}", fg=typer.colors.RED), err=True)


def _print_notification(notification) -> None:
    from aisthetic_studio.notifications import Level

    colors = {
        Level.SUCCESS: typer.colors.GREEN,
        Level.ERROR: typer.colors.RED,
        Level.INFO: typer.colors.CYAN,
    }
    typer.echo(typer.style(notification.message, fg=colors[notification.level]), err=True)


def _is_credential_failure(exc: BaseException) -> bool:
    """CredentialError itself, or a PlanningError caused by one."""
    return isinstance(exc, CredentialError) or isinstance(exc.__cause__, CredentialError)


class _Session:
    """Config, content client and notifier for one command invocation."""

    def __init__(self):
        from aisthetic_studio.notifications import Notifier

        self.config = load_config()
        configure_logging(_state["verbosity"] or self.config.output.verbosity, _state["json_logs"])
        self.notifier = Notifier(sink=_print_notification)
        self._client = None

    @property
    def client(self):
        if self._client is None:
            try:
                self._client = create_content_client(self.config)
            except CredentialError as e:
                _error(str(e))
                self._client = create_content_client(self.config, api_key=self.prompt_api_key())
        return self._client

    @property
    def out_dir(self) -> Path:
        return Path(self.config.output.output_dir)

    def prompt_api_key(self) -> str:
        """Ask for a new credential, persist it, and hand it to the live client."""
        api_key = typer.prompt("Gemini API key", hide_input=True).strip()
        if not api_key:
            raise CredentialError("No API key entered")
        self.config.gemini.api_key = api_key
        path = save_config(self.config)
        typer.echo(f"API key saved to {path}", err=True)
        if self._client is not None:
            self._client.use_api_key(api_key)
        return api_key

    async def call(self, action):
        """Await action(); on a rejected credential, re-prompt once and try again."""
        try:
            return await action()
        except (CredentialError, PlanningError) as e:
            if not _is_credential_failure(e):
                raise
            _error(str(e))
            self.prompt_api_key()
            return await action()


def _execute(action):
    """Run one command body, mapping studio errors to exit code 1."""
    try:
        return _run(action())
    except (InputError, PlanningError, InvalidJobStateError, SynthesisError) as e:
        _error(str(e))
        raise typer.Exit(1)
    except KeyboardInterrupt:
        typer.echo("\nCancelled.", err=True)
        raise typer.Exit(130)


def _load_image(path: Path | None):
    from aisthetic_studio.validation import load_image

    return load_image(path) if path is not None else None


# ---------------------------------------------------------------------------
# Batch display
# ---------------------------------------------------------------------------


def _batch_table(store, title: str):
    """Build a rich table of per-job state."""
    from rich.table import Table
    from rich.text import Text

    table = Table(title=title, title_justify="left", border_style="bright_black")
    table.add_column("#", justify="right", width=3)
    table.add_column("Title")
    table.add_column("Status", width=12)
    table.add_column("Detail", style="dim")

    for job in store.jobs():
        icon, style = _STATUS_STYLES[job.status]
        detail = ""
        if job.error is not None:
            detail = f"{job.error.kind.value}: {job.error.message}"
        elif job.result is not None:
            detail = f"{job.result.mime_type}, {len(job.result.data) // 1024} KB"
        if job.is_upscaling:
            detail = f"upscaling… {detail}"
        table.add_row(
            str(job.id + 1),
            job.title,
            Text(f"{icon} {job.status.value}", style=style),
            detail,
        )
    return table


async def _run_batch_live(title: str, start):
    """
    Run a flow with a live per-job table on stderr.

    start(on_planned) must return the finished Batch.
    """
    from rich.console import Console
    from rich.live import Live
    from rich.text import Text

    console = Console(stderr=True)
    unsubscribe = None

    with Live(Text(f"{title}: planning…", style="dim"), console=console, refresh_per_second=4) as live:

        def on_planned(store):
            nonlocal unsubscribe
            live.update(_batch_table(store, title))
            unsubscribe = store.subscribe(lambda job: live.update(_batch_table(store, title)))

        try:
            batch = await start(on_planned)
        finally:
            if unsubscribe is not None:
                unsubscribe()
        live.update(_batch_table(batch.store, title))
    return batch


async def _retry_credential_failures(session: _Session, batch) -> None:
    """Re-prompt and regenerate jobs that failed because the credential was rejected."""
    failed = [
        job for job in batch.store.failed() if job.error.kind == ErrorKind.CREDENTIAL
    ]
    if not failed:
        return
    _error(f"{len(failed)} job(s) failed because the API key was rejected")
    session.prompt_api_key()
    for job in failed:
        await batch.regenerate(job.id, session.notifier)


def _report(session: _Session, batch) -> None:
    from aisthetic_studio.export import write_batch

    paths = write_batch(batch.store, session.out_dir, batch.name)
    for path in paths:
        typer.echo(str(path))
    for job in batch.store.failed():
        typer.echo(
            typer.style(f"#{job.id + 1} {job.title}: {job.error.message}", fg=typer.colors.RED),
            err=True,
        )


async def _follow_up(session: _Session, batch) -> None:
    """Interactive loop: regen <id>, upscale <id>, caption <id>, videoprompt <id>, done."""
    from aisthetic_studio.validation import parse_job_id

    if batch.upscalable:
        commands = "regen <id>, upscale <id>, caption <id>, videoprompt <id>, done"
        known = ("regen", "upscale", "caption", "videoprompt")
    else:
        commands = "regen <id>, done"
        known = ("regen",)
    while True:
        raw = typer.prompt(f"Next ({commands})", default="done", err=True)
        command, _, argument = raw.strip().partition(" ")
        command = command.lower()
        if command in ("done", "q", "quit", "exit"):
            return
        if command not in known:
            _error(f"Unknown command '{command}'")
            continue
        try:
            job_id = parse_job_id(argument) - 1
            if command in ("caption", "videoprompt"):
                typer.echo(await _copy_for_job(session, batch, job_id, command))
                continue
            if command == "regen":
                job = await session.call(lambda: batch.regenerate(job_id, session.notifier))
            else:
                job = await session.call(
                    lambda: batch.upscale(job_id, session.client, session.notifier)
                )
        except (InputError, InvalidJobStateError, SynthesisError) as e:
            _error(str(e))
            continue
        await _retry_credential_failures(session, batch)
        _print_table(batch)
        job = batch.store.get(job.id)
        if job.status == JobStatus.SUCCEEDED:
            _report_one(session, batch, job)


async def _copy_for_job(session: _Session, batch, job_id: int, command: str) -> str:
    """Social caption or image-to-video prompt for a finished job's image."""
    from aisthetic_studio.flows import job_image, social_caption, video_prompt

    if job_id not in batch.store:
        raise InputError(f"No job #{job_id + 1} in this batch")
    image = job_image(batch.store.get(job_id))
    if command == "caption":
        return await session.call(
            lambda: social_caption(
                session.client, image, batch.description, batch.theme, session.config
            )
        )
    return await session.call(
        lambda: video_prompt(session.client, image, batch.description, batch.theme)
    )


def _print_table(batch) -> None:
    from rich.console import Console

    Console(stderr=True).print(_batch_table(batch.store, batch.name))


def _report_one(session: _Session, batch, job) -> None:
    from aisthetic_studio.export import slugify, write_result

    path = write_result(job.result, session.out_dir, f"{batch.name}-{job.id + 1}-{slugify(job.title)}")
    typer.echo(str(path))


async def _finish(session: _Session, batch, interactive: bool) -> None:
    await _retry_credential_failures(session, batch)
    _report(session, batch)
    if interactive and sys.stdin.isatty():
        await _follow_up(session, batch)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Warnings and errors only"),
    json_logs: bool = typer.Option(False, "--json-logs", help="Log JSON lines to stderr"),
):
    """AI product photography, ad creatives, campaigns, voice-overs and video."""
    _state["verbosity"] = "verbose" if verbose else "quiet" if quiet else None
    _state["json_logs"] = json_logs


@app.command()
def describe(image: Path = typer.Argument(..., help="Product image")):
    """Write a short product description from an image."""
    from aisthetic_studio.flows import describe_product

    async def _describe():
        session = _Session()
        product = _load_image(image)
        return await session.call(lambda: describe_product(session.client, product, session.config))

    typer.echo(_execute(_describe))


@app.command()
def headline(
    image: Path = typer.Argument(..., help="Ad image"),
    description: str = typer.Option(..., "--description", "-d", help="Product description"),
):
    """Suggest a short ad headline (hook)."""
    from aisthetic_studio.flows import ad_headline

    async def _headline():
        session = _Session()
        ad_image = _load_image(image)
        return await session.call(
            lambda: ad_headline(session.client, ad_image, description, session.config)
        )

    typer.echo(_execute(_headline))


@app.command()
def shots(
    image: Path = typer.Argument(..., help="Product image"),
    description: str = typer.Option(..., "--description", "-d", help="Product description"),
    model: Path = typer.Option(None, "--model", "-m", help="Optional model photo"),
    theme: str = typer.Option(None, "--theme", "-t", help="Photo theme"),
    interactive: bool = typer.Option(False, "--interactive", "-i", help="Offer regen/upscale afterwards"),
):
    """Plan and generate a batch of product photos."""
    from aisthetic_studio.flows import product_shots
    from aisthetic_studio.models.ideas import PlanRequest
    from aisthetic_studio.validation import sanitize_description

    async def _shots():
        session = _Session()
        request = PlanRequest(
            base_image=_load_image(image),
            description=sanitize_description(description),
            secondary_image=_load_image(model),
            theme=theme,
        )
        batch = await session.call(
            lambda: _run_batch_live(
                "Product shots",
                lambda on_planned: product_shots(
                    session.client, request, session.config, on_planned=on_planned
                ),
            )
        )
        await _finish(session, batch, interactive)

    _execute(_shots)


@app.command()
def ads(
    image: Path = typer.Argument(..., help="Base ad image"),
    headline: str = typer.Option(..., "--headline", "-H", help="Headline to place on the image"),
    description: str = typer.Option(..., "--description", "-d", help="Product description"),
    theme: str = typer.Option(None, "--theme", "-t", help="Ad theme"),
    interactive: bool = typer.Option(False, "--interactive", "-i", help="Offer regen/upscale afterwards"),
):
    """Plan and generate ad creatives with headline text."""
    from aisthetic_studio.flows import ad_creatives
    from aisthetic_studio.models.ideas import PlanRequest
    from aisthetic_studio.validation import sanitize_description

    async def _ads():
        session = _Session()
        request = PlanRequest(
            base_image=_load_image(image),
            description=sanitize_description(description),
            headline=headline,
            theme=theme,
        )
        batch = await session.call(
            lambda: _run_batch_live(
                "Ad creatives",
                lambda on_planned: ad_creatives(
                    session.client, request, session.config, on_planned=on_planned
                ),
            )
        )
        await _finish(session, batch, interactive)

    _execute(_ads)


@app.command()
def campaign(
    image: Path = typer.Argument(..., help="Product image"),
    description: str = typer.Option(..., "--description", "-d", help="Product description"),
    platform: list[str] = typer.Option(
        ..., "--platform", "-p", help="instagram_post, instagram_story or facebook_ad (repeatable)"
    ),
    theme: str = typer.Option(None, "--theme", "-t", help="Campaign theme"),
    interactive: bool = typer.Option(False, "--interactive", "-i", help="Offer regen/upscale afterwards"),
):
    """Generate captions and images for several social platforms."""
    from aisthetic_studio.flows import campaign as run_campaign
    from aisthetic_studio.models.ideas import PlanRequest
    from aisthetic_studio.validation import sanitize_description

    async def _campaign():
        session = _Session()
        request = PlanRequest(
            base_image=_load_image(image),
            description=sanitize_description(description),
            theme=theme,
            platforms=tuple(platform),
        )
        batch = await session.call(
            lambda: _run_batch_live(
                "Campaign",
                lambda on_planned: run_campaign(
                    session.client,
                    request,
                    session.config,
                    notifier=session.notifier,
                    on_planned=on_planned,
                ),
            )
        )
        await _finish(session, batch, interactive)

    _execute(_campaign)


@app.command()
def tryon(
    product: Path = typer.Argument(..., help="Product image"),
    model: Path = typer.Argument(..., help="Model photo"),
    interactive: bool = typer.Option(False, "--interactive", "-i", help="Offer regen/upscale afterwards"),
):
    """Virtual try-on: put the product on the model."""
    from aisthetic_studio.flows import virtual_try_on

    async def _tryon():
        session = _Session()
        product_image, model_image = _load_image(product), _load_image(model)
        batch = await session.call(
            lambda: _run_batch_live(
                "Virtual try-on",
                lambda on_planned: virtual_try_on(
                    session.client, product_image, model_image, on_planned=on_planned
                ),
            )
        )
        await _finish(session, batch, interactive)

    _execute(_tryon)


@app.command()
def pose(
    model: Path = typer.Argument(..., help="Model photo"),
    pose: str = typer.Option(..., "--pose", help="Pose description"),
    interactive: bool = typer.Option(False, "--interactive", "-i", help="Offer regen/upscale afterwards"),
):
    """Re-pose a model photo."""
    from aisthetic_studio.flows import fashion_pose

    async def _pose():
        session = _Session()
        model_image = _load_image(model)
        batch = await session.call(
            lambda: _run_batch_live(
                "Fashion pose",
                lambda on_planned: fashion_pose(
                    session.client, model_image, pose, on_planned=on_planned
                ),
            )
        )
        await _finish(session, batch, interactive)

    _execute(_pose)


@app.command()
def background(
    image: Path = typer.Argument(..., help="Product image"),
    background: str = typer.Option(..., "--background", "-b", help="New background description"),
    interactive: bool = typer.Option(False, "--interactive", "-i", help="Offer regen/upscale afterwards"),
):
    """Replace the background behind the subject."""
    from aisthetic_studio.flows import change_background

    async def _background():
        session = _Session()
        source = _load_image(image)
        batch = await session.call(
            lambda: _run_batch_live(
                "Background change",
                lambda on_planned: change_background(
                    session.client, source, background, on_planned=on_planned
                ),
            )
        )
        await _finish(session, batch, interactive)

    _execute(_background)


@app.command()
def themes(category: str = typer.Argument(..., help="Product category, e.g. 'skincare'")):
    """Suggest trending photo themes for a product category."""
    from aisthetic_studio.flows import suggest_themes

    async def _themes():
        session = _Session()
        return await session.call(lambda: suggest_themes(session.client, category, session.config))

    for theme in _execute(_themes):
        typer.echo(typer.style(theme.title, bold=True) + f"  {theme.description}")


@app.command()
def script(
    description: str = typer.Option(..., "--description", "-d", help="Product description"),
    usp: str = typer.Option(..., "--usp", help="Unique selling point"),
    count: int = typer.Option(1, "--count", "-n", min=1, max=5, help="Script variations"),
):
    """Write voice-over script variations (separated by blank lines)."""
    from aisthetic_studio.flows import ad_scripts

    async def _script():
        session = _Session()
        return await session.call(
            lambda: ad_scripts(session.client, description, usp, count, config=session.config)
        )

    typer.echo("\n\n".join(_execute(_script)))


@app.command()
def voice(
    script_file: Path = typer.Argument(..., help="Text file; passages separated by blank lines"),
    voice_name: str = typer.Option(None, "--voice", help="Prebuilt voice name"),
    style: str = typer.Option("normal", "--style", help="Speaking style"),
    archive: bool = typer.Option(False, "--zip", help="Also bundle all clips into a zip"),
):
    """Synthesize one WAV clip per script passage, one at a time."""
    from aisthetic_studio.export import write_result
    from aisthetic_studio.flows import export_clips, synthesize_passages

    async def _voice():
        session = _Session()
        try:
            text = script_file.read_text(encoding="utf-8")
        except OSError as e:
            raise InputError(f"Cannot read {script_file}: {e}") from e

        def on_clip(index, clip):
            path = write_result(clip.audio, session.out_dir, clip.name)
            typer.echo(str(path))

        clips = await session.call(
            lambda: synthesize_passages(
                session.client,
                text,
                voice=voice_name or session.config.speech.default_voice,
                style=style,
                sample_rate=session.config.speech.sample_rate,
                notifier=session.notifier,
                on_status=lambda label: typer.echo(label, err=True),
                on_clip=on_clip,
            )
        )
        if archive and clips:
            path = export_clips(clips, session.out_dir / "aisthetic_voice_studio_audios.zip")
            typer.echo(str(path))
        return clips

    if not _execute(_voice):
        raise typer.Exit(1)


@app.command()
def video(
    prompt: str = typer.Option(..., "--prompt", help="Video prompt"),
    image: Path = typer.Option(None, "--image", help="Optional starting image"),
    interactive: bool = typer.Option(False, "--interactive", "-i", help="Offer regen afterwards"),
):
    """Generate a short video (polls until it is ready)."""
    from aisthetic_studio.flows import generate_video

    async def _video():
        session = _Session()
        start_image = _load_image(image)

        def on_phase(job, phase, polls):
            typer.echo(f"{phase.value}" + (f" ({polls} polls)" if polls else ""), err=True)

        batch = await session.call(
            lambda: generate_video(
                session.client, prompt, start_image, session.config, on_phase=on_phase
            )
        )
        await _finish(session, batch, interactive)

    _execute(_video)


@app.command()
def brand(
    voice: str = typer.Option(None, "--voice", help="Brand tone of voice"),
    primary_color: str = typer.Option(None, "--primary-color"),
    secondary_color: str = typer.Option(None, "--secondary-color"),
    primary_font: str = typer.Option(None, "--primary-font"),
    secondary_font: str = typer.Option(None, "--secondary-font"),
):
    """Show or update the saved brand identity."""
    config = load_config()
    updates = {
        "voice": voice,
        "primary_color": primary_color,
        "secondary_color": secondary_color,
        "primary_font": primary_font,
        "secondary_font": secondary_font,
    }
    updates = {key: value for key, value in updates.items() if value is not None}
    if updates:
        config.brand = config.brand.model_copy(update=updates)
        save_config(config)
        typer.echo("Brand identity saved.")

    for key, value in config.brand.model_dump().items():
        typer.echo(f"{key + ':':<17} {value or '-'}")


@app.command("config-path")
def config_path():
    """Print the config file location."""
    typer.echo(str(get_config_path()))


if __name__ == "__main__":
    app()
