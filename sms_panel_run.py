import asyncio
import sys
from pymongo.errors import ConfigurationError
from common.config import ScraperConfig
from common.db_utils import SnapshotSink, get_db
from common.status import banner, log
from scrapers import sms_panel_scraper


def build_sink(config: ScraperConfig) -> SnapshotSink:
    """JSON files always; the Mongo mirror only when MONGO_URI is set and parses."""
    db = None
    if config.mongo_uri:
        try:
            db = get_db(config.mongo_uri, config.mongo_db)
        except ConfigurationError as e:
            log(f"Ignoring MONGO_URI, MongoDB mirror disabled: {e}", "warning")
    return SnapshotSink(config.output_dir, db=db)

async def run() -> int:
    banner("SMS Platform Scraper (Manual Login)")
    config = ScraperConfig.from_env()
    results = await sms_panel_scraper.main(config, build_sink(config))
    return 0 if results is not None else 1

def cli() -> None:
    sys.exit(asyncio.run(run()))

if __name__ == "__main__":
    cli()
