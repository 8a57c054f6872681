"""Management command that pings the deployed API on a fixed interval."""

import logging
import time

import requests
from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Periodically GET a URL so an idle hosted instance is not put to sleep"

    def add_arguments(self, parser):
        parser.add_argument(
            "--url",
            type=str,
            help="URL to ping (default: KEEP_ALIVE_URL setting)",
        )
        parser.add_argument(
            "--interval",
            type=int,
            help="Seconds between pings (default: KEEP_ALIVE_INTERVAL setting)",
        )
        parser.add_argument(
            "--once",
            action="store_true",
            help="Ping a single time and exit",
        )

    def handle(self, *args, **options):
        url = options.get("url") or settings.KEEP_ALIVE_URL
        interval = options.get("interval") or settings.KEEP_ALIVE_INTERVAL

        if not url:
            raise CommandError("No URL to ping: pass --url or set KEEP_ALIVE_URL")

        if options["once"]:
            self.ping(url)
            return

        self.stdout.write(f"Pinging {url} every {interval}s")
        try:
            while True:
                self.ping(url)
                time.sleep(interval)
        except KeyboardInterrupt:
            self.stdout.write("Stopped")

    def ping(self, url):
        logger.info(f"Pinging {url} at {timezone.now().isoformat()}")
        try:
            response = requests.get(url, timeout=settings.HTTP_TIMEOUT)
            logger.info(f"Ping successful: {response.status_code}")
            return response.status_code
        except requests.exceptions.RequestException as e:
            logger.error(f"Error pinging server: {e}")
            return None
