"""commitgateのコマンドラインインターフェース。"""

import logging
import sys
from pathlib import Path
from typing import Any

import click
import yaml

from commitgate.config import CheckerSettings
from commitgate.models.errors import CommitGateError
from commitgate.models.rules import RuleConfig
from commitgate.models.validation import BatchSummary, ValidationReport
from commitgate.services.config import resolve_config, rules_to_dict
from commitgate.services.linter import validate
from commitgate.services.sources import GitHistory, read_message_file

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1
# click は使い方の誤りに 2 を使う
EXIT_PARTIAL = 3
EXIT_FAILURE = 4

_SEVERITY_COLORS = {"error": "red", "warning": "yellow"}


def exit_code_for(summary: BatchSummary) -> int:
    """集計結果から終了コードを決める。"""
    if summary.all_valid:
        return EXIT_OK
    if summary.valid == 0:
        return EXIT_INVALID
    return EXIT_PARTIAL


def parse_overrides(assignments: tuple[str, ...]) -> dict[str, Any]:
    """``rule.option=value`` 形式の指定を上書き設定のマッピングに変換する。

    値はYAMLのスカラーとして解釈する（``false`` や数値をそのまま書ける）。
    マッピングやリストになる値（``^(feat|fix): `` や ``[^a-z ]`` のような
    正規表現）は文字列のまま扱う。
    """
    overrides: dict[str, Any] = {}
    for assignment in assignments:
        key, sep, raw_value = assignment.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got {assignment!r}", param_hint="--set")
        try:
            value = yaml.safe_load(raw_value)
        except yaml.YAMLError:
            value = raw_value
        if isinstance(value, (dict, list)):
            value = raw_value
        target = overrides
        *parents, leaf = key.split(".")
        for part in parents:
            child = target.get(part)
            if not isinstance(child, dict):
                child = target[part] = {}
            target = child
        target[leaf] = value
    return overrides


def render_report(report: ValidationReport, color: bool, indent: str = "") -> str:
    """レポートを表示用に整形する。並び順は ValidationReport.render と同じ。"""
    lines = []
    for diagnostic in report.errors + report.warnings:
        line = diagnostic.render()
        if color:
            line = click.style(line, fg=_SEVERITY_COLORS[diagnostic.severity])
        lines.append(indent + line)
    return "\n".join(lines)


class _State:
    def __init__(self, settings: CheckerSettings, overrides: dict[str, Any], color: bool) -> None:
        self.settings = settings
        self.overrides = overrides
        self.color = color
        self._config: RuleConfig | None = None

    @property
    def config(self) -> RuleConfig:
        if self._config is None:
            self._config = resolve_config(self.overrides, source=self.settings.config_source)
        return self._config


def _fail(error: CommitGateError) -> None:
    click.echo(f"commitgate: {error}", err=True)
    sys.exit(EXIT_FAILURE)


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Project config file, or a directory containing .commitgate.yaml.",
)
@click.option("--set", "assignments", multiple=True, metavar="KEY=VALUE", help="Override a rule option.")
@click.option("--color/--no-color", default=None, help="Colorize output (default: when writing to a terminal).")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Path | None,
    assignments: tuple[str, ...],
    color: bool | None,
    verbose: bool,
) -> None:
    """Validate commit messages against a configurable rule set."""
    settings = CheckerSettings()
    if config_path is not None:
        settings = settings.model_copy(update={"config_file": config_path})
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )
    if color is None:
        color = sys.stdout.isatty()
    ctx.obj = _State(settings, parse_overrides(assignments), color)


@cli.command()
@click.argument("message_file", default="-")
@click.option("--keep-comments", is_flag=True, help="Do not strip '#' comment lines.")
@click.pass_obj
def check(state: _State, message_file: str, keep_comments: bool) -> None:
    """Validate a single commit message from MESSAGE_FILE (or '-' for stdin).

    Suitable as a git commit-msg hook.
    """
    try:
        message = read_message_file(message_file, strip=not keep_comments)
        report = validate(message, state.config)
    except CommitGateError as e:
        _fail(e)
        return

    if report.diagnostics:
        click.echo(render_report(report, state.color))
    if report.has_errors():
        sys.exit(EXIT_INVALID)
    click.echo(click.style("Commit message is valid.", fg="green") if state.color else "Commit message is valid.")


@cli.command()
@click.argument("revision_range", default="HEAD")
@click.option("--stdin", "from_stdin", is_flag=True, help="Read commit hashes from stdin, one per line.")
@click.option(
    "--repo",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Repository directory (default: current directory).",
)
@click.option("-q", "--quiet", is_flag=True, help="Only print invalid commits and the summary.")
@click.pass_obj
def history(state: _State, revision_range: str, from_stdin: bool, repo: Path | None, quiet: bool) -> None:
    """Validate the messages of existing commits in REVISION_RANGE."""
    git = GitHistory(repo_dir=repo)
    summary = BatchSummary()
    try:
        config = state.config
        if from_stdin:
            commits = [line.strip() for line in sys.stdin if line.strip()]
        else:
            commits = git.rev_list(revision_range)
        logger.debug("Checking %d commits", len(commits))
        for commit, message in git.iter_messages(commits):
            report = validate(message, config)
            summary.record(report, message_id=commit)
            if quiet and report.is_valid:
                continue
            title = message.strip().partition("\n")[0]
            click.echo(f"{commit[:12]} {title}")
            if report.diagnostics:
                click.echo(render_report(report, state.color, indent="    "))
    except CommitGateError as e:
        _fail(e)
        return

    click.echo(
        f"{summary.total} commits checked: {summary.valid} valid "
        f"({summary.warned} with warnings), {summary.invalid} invalid"
    )
    sys.exit(exit_code_for(summary))


@cli.command("show-config")
@click.pass_obj
def show_config(state: _State) -> None:
    """Print the resolved rule configuration as YAML."""
    try:
        config = state.config
    except CommitGateError as e:
        _fail(e)
        return
    click.echo(yaml.safe_dump(rules_to_dict(config), allow_unicode=True, sort_keys=False), nl=False)


@cli.command()
@click.option("--host", default=None, help="Bind address (default: COMMITGATE_HOST).")
@click.option("--port", type=int, default=None, help="Port (default: COMMITGATE_PORT).")
@click.pass_obj
def serve(state: _State, host: str | None, port: int | None) -> None:
    """Run the MCP server over streamable HTTP."""
    import uvicorn

    from commitgate.server import create_server

    settings = state.settings
    try:
        mcp = create_server(settings, overrides=state.overrides)
    except CommitGateError as e:
        _fail(e)
        return
    app = mcp.http_app(transport="streamable-http")
    uvicorn.run(app, host=host or settings.host, port=port or settings.port)
