"""Management command to fetch a forecast using the same stack as the API."""
from __future__ import annotations

import json
from typing import Any

from django.core.management.base import BaseCommand, CommandError

from backend.api.views import build_forecast_payload
from forecast.errors import ForecastError


class Command(BaseCommand):
    help = "Fetch the forecast and advisory for an administrative area"

    def add_arguments(self, parser) -> None:  # noqa: D401
        parser.add_argument("--area", type=str, required=True, help="Administrative area, e.g. 臺北市")
        parser.add_argument("--sub-area", type=str, dest="sub_area", help="Sub-area within the area, e.g. 中正區")
        parser.add_argument(
            "--county",
            action="store_true",
            help="Use the county-level forecast instead of the township datasets",
        )

    def handle(self, *args: Any, **options: Any) -> None:  # noqa: D401
        try:
            payload = build_forecast_payload(
                options["area"],
                options.get("sub_area"),
                detailed=not options.get("county"),
            )
        except ForecastError as exc:
            raise CommandError(exc.user_message) from exc

        self.stdout.write(json.dumps(payload, ensure_ascii=False))
