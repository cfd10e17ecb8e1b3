from __future__ import annotations

import threading

import structlog
from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from modules.kitchen.board import render_board
from modules.kitchen.constants import ViewMode
from modules.kitchen.exceptions import StoreUnavailable
from modules.kitchen.services import build_projector

logger = structlog.get_logger(__name__)


class Command(BaseCommand):
    help = "Show the kitchen preparation board, refreshing until interrupted."

    def add_arguments(self, parser):
        parser.add_argument(
            "--view",
            choices=ViewMode.values,
            default=ViewMode.BY_CATEGORY,
        )
        parser.add_argument("--show-completed", action="store_true")
        parser.add_argument(
            "--interval",
            type=int,
            default=None,
            help="Seconds between refreshes (default: KITCHEN_REFRESH_SECONDS).",
        )
        parser.add_argument("--once", action="store_true", help="Render one frame and exit.")

    def handle(self, *args, **options):
        view_mode = options["view"]
        show_completed = options["show_completed"]
        interval = options["interval"] or settings.KITCHEN_REFRESH_SECONDS
        projector = build_projector()

        def render(p) -> None:
            self.stdout.write(render_board(p, view_mode, p.now(), show_completed))

        if options["once"]:
            try:
                projector.refresh()
            except StoreUnavailable as exc:
                raise CommandError(f"Order store unavailable: {exc}") from exc
            render(projector)
            return

        projector.add_listener(render)
        stop = threading.Event()
        projector.start(interval)
        logger.info("kitchen.board.started", view=view_mode, interval=interval)
        try:
            while not stop.wait(1):
                pass
        except KeyboardInterrupt:
            self.stdout.write("")
        finally:
            projector.stop()
            projector.remove_listener(render)
            logger.info("kitchen.board.stopped")
