"""
user_form 폼 모델의 명령줄 인터페이스.

이벤트 스크립트를 재생하는 최소한의 렌더링 계층 역할을 합니다.
"""

import json
import sys
from datetime import date
from pathlib import Path
from typing import Optional

import click

from .config import Config
from .events import EventScriptError, load_event_script, replay_events
from .form import FormError, FormModel
from .models import Accepted, Platform, UserRecord
from .utils.logging import configure_logging


@click.group()
@click.version_option(version="1.0.0")
@click.pass_context
def cli(ctx):
    """
    사용자 정보 폼 모델 도구.

    이벤트 스크립트로 폼을 채우고 제출 결과를 확인합니다.
    """
    ctx.ensure_object(dict)

    # Initialize configuration
    try:
        config = Config.from_env()
        config.validate()
        ctx.obj["config"] = config
    except Exception as e:
        click.echo(f"❌ Configuration error: {e}", err=True)
        sys.exit(1)

    configure_logging(config.log_level)


@cli.command()
@click.argument("events_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--today",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    help="Date used as 'today' for the age calculation (default: current date)",
)
@click.pass_context
def fill(ctx, events_file: Path, today: Optional[object]):
    """
    이벤트 스크립트를 재생하고 폼을 제출합니다.

    스크립트에 submit 이벤트가 없으면 마지막에 한 번 제출합니다.

    예제:
        user-form fill events/jane.json
        user-form fill events/jane.json --today 2026-01-01
    """
    config = ctx.obj["config"]

    clock = None
    if today is not None:
        fixed: date = today.date()  # type: ignore[attr-defined]
        clock = lambda: fixed  # noqa: E731

    try:
        events = load_event_script(events_file)
        model = FormModel(config=config, clock=clock)
        result = replay_events(model, events)
        if result is None:
            result = model.submit()
    except EventScriptError as e:
        click.echo(f"❌ Invalid event script: {e}", err=True)
        sys.exit(1)
    except FormError as e:
        click.echo(f"❌ Event rejected by form model: {e}", err=True)
        sys.exit(1)

    if isinstance(result, Accepted):
        click.echo(result.record.model_dump_json(indent=2))
        return

    click.echo("❌ Submission rejected:", err=True)
    for path, errors in sorted(result.failures.items()):
        click.echo(f"  • {path}: {', '.join(sorted(errors))}", err=True)
    sys.exit(1)


@cli.command()
def schema():
    """
    제출 레코드의 JSON 스키마를 출력합니다.
    """
    click.echo(json.dumps(UserRecord.model_json_schema(), indent=2, ensure_ascii=False))


@cli.command()
@click.pass_context
def options(ctx):
    """
    선택 항목(학력 체크리스트, 소셜 플랫폼)을 나열합니다.
    """
    config = ctx.obj["config"]

    click.echo("🎓 Education levels")
    for level in config.education_options:
        click.echo(f"  • {level}")

    click.echo("\n🔗 Social platforms")
    for platform in Platform:
        click.echo(f"  • {platform.value}")


@cli.command()
@click.pass_context
def setup(ctx):
    """
    구성 정보를 표시합니다.
    """
    config = ctx.obj["config"]

    click.echo("🛠️  User Form Setup")
    click.echo("=" * 50)

    click.echo("\n🔧 Configuration:")
    click.echo(f"  • Log Level: {config.log_level}")
    click.echo(f"  • Education Options: {', '.join(config.education_options)}")
    if config.today:
        click.echo(f"  • Today (pinned): {config.today}")
    else:
        click.echo("  • Today: system date")

    click.echo("\n📖 Usage Examples:")
    click.echo("  # Replay an event script and submit")
    click.echo("  user-form fill events.json")
    click.echo("")
    click.echo("  # Print the submitted record schema")
    click.echo("  user-form schema")


if __name__ == "__main__":
    cli()
