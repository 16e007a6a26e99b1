"""CLI job that looks up hospitals for a pincode and prints them."""

import argparse
import logging
from typing import Optional

from hospital_locator.core.config import ConfigError, Settings
from hospital_locator.etl.normalize import normalize_records
from hospital_locator.models import GeoPoint
from hospital_locator.vendors import data_gov
from hospital_locator.view.render import render_text
from hospital_locator.view.state import SearchController, SearchState

logger = logging.getLogger(__name__)

FETCH_FAILED_MESSAGE = "Could not load hospitals, please try again."


def run_search(
    pincode: str,
    controller: Optional[SearchController] = None,
    settings: Optional[Settings] = None,
) -> SearchState:
    """Run one search through the controller and return the resulting state.

    Upstream failures clear the results and are recorded on the state. A
    missing API key is recorded too, then re-raised for the caller to report.
    """
    controller = controller or SearchController()
    sequence = controller.submit(pincode)
    if sequence is None:
        logger.info("Ignoring blank pincode")
        return controller.state

    try:
        payload = data_gov.fetch_hospitals(pincode, settings=settings)
    except ConfigError as exc:
        controller.fail(sequence, str(exc))
        raise
    except data_gov.DataGovError as exc:
        logger.error("Search #%d for pincode=%s failed: %s", sequence, pincode, exc)
        controller.fail(sequence, FETCH_FAILED_MESSAGE)
        return controller.state

    controller.resolve(sequence, normalize_records(payload, pincode))
    return controller.state


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Find hospitals registered for a pincode")
    parser.add_argument("pincode", help="Postal code to search, e.g. 800002")
    parser.add_argument("--lat", dest="lat", help="Your latitude, enables distances and directions")
    parser.add_argument("--lng", dest="lng", help="Your longitude, enables distances and directions")
    return parser


def main(argv: Optional[list] = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    args = build_parser().parse_args(argv)

    user_location = GeoPoint.parse(args.lat, args.lng)
    if (args.lat or args.lng) and user_location is None:
        logger.warning("Ignoring unusable location lat=%r lng=%r", args.lat, args.lng)

    try:
        state = run_search(args.pincode)
    except ConfigError as exc:
        logger.error("Configuration error: %s", exc)
        return 2

    print(render_text(state, user_location))
    return 1 if state.error else 0


if __name__ == "__main__":
    raise SystemExit(main())
