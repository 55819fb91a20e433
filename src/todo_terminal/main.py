from __future__ import annotations

import logging
import sys
from dataclasses import replace
from typing import Optional

from rich.console import Console
from rich.markup import escape

from .errors import StoreError
from .logging_config import configure_logging
from .prompts import Prompter, PromptToolkitPrompter
from .repositories import get_repository
from .session import EXIT_FAILURE, TodoSession
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
def main(
    settings: Optional[Settings] = None,
    prompter: Optional[Prompter] = None,
    console: Optional[Console] = None,
) -> int:
    """
    Initialize the store, run one interactive session and return the exit status.

    - 0 when the user quits from the main menu
    - 1 when the store cannot be opened or a fatal input/database error occurs
    """
    settings = settings or get_settings()
    console = console or Console()
    try:
        configure_logging(settings)
    except OSError as exc:
        console.print(f"[yellow]Logging disabled:[/] {escape(str(exc))}")
        configure_logging(replace(settings, log_enabled=False))
    logger.info("starting with %s backend", settings.persistence_backend)

    repository = get_repository(settings)
    try:
        try:
            repository.initialize()
        except StoreError as exc:
            logger.error("could not open store: %s", exc)
            console.print(f"[bold red]{exc.category}:[/] {escape(exc.message)}")
            return EXIT_FAILURE

        prompter = prompter or PromptToolkitPrompter(page_size=settings.list_page_size)
        return TodoSession(repository, prompter, console).run()
    finally:
        repository.close()


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
