"""
PitchSite CLI commands

Each command returns a process exit code; failures raise and are reported
by cli.main.
"""

import asyncio
import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.table import Table


class CheckStatus(str, Enum):
    """Status of a configuration check"""
    PASS = "pass"
    WARN = "warn"
    FAIL = "fail"


@dataclass
class CheckResult:
    """Result of a configuration check"""
    name: str
    status: CheckStatus
    message: str


STATUS_STYLES = {
    CheckStatus.PASS: "[green]✓ pass[/green]",
    CheckStatus.WARN: "[yellow]! warn[/yellow]",
    CheckStatus.FAIL: "[red]✗ fail[/red]",
}


def serve(host: Optional[str] = None, port: Optional[int] = None, reload: bool = False) -> int:
    import uvicorn
    from app.core.config import settings

    uvicorn.run(
        "app.main:app",
        host=host or settings.SERVER_HOST,
        port=port or settings.SERVER_PORT,
        reload=reload,
    )
    return 0


async def _cleanup() -> int:
    from app.core.database import get_database, close_db
    from app.core.config import settings
    from app.services.pitch_deck_service import PitchDeckService

    try:
        service = PitchDeckService(get_database()[settings.PITCH_DECK_COLLECTION])
        return await service.cleanup_expired()
    finally:
        await close_db()


def cleanup(console: Console) -> int:
    """Delete expired decks and report how many were removed"""
    deleted = asyncio.run(_cleanup())
    console.print(f"[green]✓[/green] Deleted [bold]{deleted}[/bold] expired pitch deck(s)")
    return 0


def load_form(path: str):
    from app.schemas.pitch import PitchFormData

    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return PitchFormData.model_validate(data)


def generate(console: Console, path: str, fallback: bool = False) -> int:
    """Print generated content for the form in ``path`` as JSON"""
    from app.services.content_generator import ContentGenerator
    from app.services.fallback_content import FallbackContentGenerator

    form = load_form(path)
    if fallback:
        content = FallbackContentGenerator(form).generate()
    else:
        content = asyncio.run(ContentGenerator().generate(form))

    console.print_json(content.model_dump_json(by_alias=True, exclude_none=True))
    return 0


def collect_checks(ping: bool = False) -> List[CheckResult]:
    from app.core.config import settings, validate_settings

    errors, warnings = validate_settings(settings)
    results = [CheckResult("config", CheckStatus.FAIL, e) for e in errors]
    results += [CheckResult("config", CheckStatus.WARN, w) for w in warnings]

    if not errors:
        results.append(CheckResult("config", CheckStatus.PASS,
                                   f"Required settings present ({settings.ENVIRONMENT})"))

    mode = f"Claude ({settings.CLAUDE_MODEL})" if settings.ai_enabled else "fallback templates"
    results.append(CheckResult("content", CheckStatus.PASS, f"Generating with {mode}"))

    if ping and settings.MONGODB_URI:
        results.append(asyncio.run(_ping_check()))

    return results


async def _ping_check() -> CheckResult:
    from app.core.database import ping_database, close_db

    try:
        latency = await ping_database()
    except Exception as e:
        return CheckResult("database", CheckStatus.FAIL, f"Ping failed: {e}")
    finally:
        await close_db()
    return CheckResult("database", CheckStatus.PASS, f"Ping ok ({latency:.1f}ms)")


def check(console: Console, ping: bool = False) -> int:
    """Print a table of configuration checks; exit 1 if any failed"""
    results = collect_checks(ping=ping)

    table = Table(title="PitchSite configuration")
    table.add_column("Check", style="cyan")
    table.add_column("Status")
    table.add_column("Message")
    for result in results:
        table.add_row(result.name, STATUS_STYLES[result.status], result.message)
    console.print(table)

    return 1 if any(r.status == CheckStatus.FAIL for r in results) else 0
