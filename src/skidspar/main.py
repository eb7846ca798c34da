#!/usr/bin/env python3

from __future__ import annotations

import logging
import sys
from logging import getLogger
from signal import SIGTERM, default_int_handler, signal

from dotenv import load_dotenv

from skidspar.app import sync_facility_status
from skidspar.config import (
    MissingConfigurationError,
    configure_logging,
    env_flag,
    get_log_level,
)
from skidspar.domain.errors import IntegrationError
from skidspar.observability import configure_tracing, shutdown_tracing

log = getLogger(__name__)


def main() -> None:
    """Run a single reconciliation pass.

    Failures of the pass are logged rather than turned into a nonzero exit status;
    the next scheduled invocation is the retry. Missing configuration exits with 2
    and an unexpected error is logged and exits with 1.
    """

    debug = env_flag("CONTEXT_BROKER_CLIENT_DEBUG")
    configure_logging(level=logging.DEBUG if debug else get_log_level())
    configure_tracing()

    try:
        sync_facility_status()
    except MissingConfigurationError as exc:
        log.error("Invalid configuration: %s", exc)  # noqa: TRY400
        sys.exit(2)
    except IntegrationError:
        log.exception("Failed to synchronise facility status")
    except Exception:  # noqa: BLE001
        log.exception("Unexpected error while synchronising facility status")
        sys.exit(1)
    except KeyboardInterrupt:
        log.warning("Interrupted, remaining facilities were not reconciled")
    finally:
        log.info("Running cleanup ...")
        shutdown_tracing()
        log.info("Done")


def run() -> None:
    load_dotenv()
    # SIGTERM cancels the pass the same way Ctrl+C does
    signal(SIGTERM, default_int_handler)
    main()


if __name__ == "__main__":
    run()
